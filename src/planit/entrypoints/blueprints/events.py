"""ABOUTME: JSON endpoints for events: creating, searching, joining, leaving, editing and role management
ABOUTME: Routes translate request bodies into service inputs and hand results to respond()"""

from typing import Any

from flask import Blueprint, jsonify, request
from flask.typing import ResponseReturnValue
from flask_login import current_user, login_required

from planit.domain.result import Err
from planit.domain.validators import EventInput
from planit.domain.value_objects import Coordinates, LimitAndOffset
from planit.entrypoints.responses import error_response, get_catalogue, get_uow, id_from_body, json_body, respond
from planit.service_layer import event_service, role_service

events_bp = Blueprint("events", __name__)


def _event_input(data: dict[str, Any]) -> EventInput:
    return EventInput(
        title=data.get("title"),
        category=data.get("category"),
        date=data.get("date"),
        price=data.get("price"),
        description=data.get("description"),
        subcategory=data.get("subcategory"),
        location_type=data.get("locationType"),
        location=data.get("location"),
        latitude=data.get("latitude"),
        longitude=data.get("longitude"),
        visibility=data.get("visibility", "Public"),
        end_date=data.get("endDate"),
        password=data.get("password"),
    )


def _viewer_id() -> int | None:
    return current_user.id if current_user.is_authenticated else None


@events_bp.route("/event", methods=["POST"])
@login_required
def create_event() -> ResponseReturnValue:
    result = event_service.create_event(get_uow(), current_user.id, _event_input(json_body()), get_catalogue())
    return respond(result, status=201)


@events_bp.route("/event/<int:event_id>", methods=["GET"])
def get_event(event_id: int) -> ResponseReturnValue:
    return respond(event_service.get_event(get_uow(), _viewer_id(), event_id))


@events_bp.route("/event/<int:event_id>/users", methods=["GET"])
def get_event_users(event_id: int) -> ResponseReturnValue:
    return respond(event_service.get_users_in_event(get_uow(), _viewer_id(), event_id))


@events_bp.route("/event/<int:event_id>/join", methods=["POST"])
@login_required
def join_event(event_id: int) -> ResponseReturnValue:
    password = json_body().get("password", "")
    return respond(event_service.join_event(get_uow(), current_user.id, event_id, password))


@events_bp.route("/event/join", methods=["POST"])
@login_required
def join_event_by_code() -> ResponseReturnValue:
    return respond(event_service.join_event_by_code(get_uow(), current_user.id, json_body().get("code")))


@events_bp.route("/event/<int:event_id>/leave", methods=["POST"])
@login_required
def leave_event(event_id: int) -> ResponseReturnValue:
    return respond(event_service.leave_event(get_uow(), current_user.id, event_id))


@events_bp.route("/event/<int:event_id>", methods=["DELETE"])
@login_required
def delete_event(event_id: int) -> ResponseReturnValue:
    return respond(event_service.delete_event(get_uow(), current_user.id, event_id))


@events_bp.route("/event/<int:event_id>/edit", methods=["PUT"])
@login_required
def edit_event(event_id: int) -> ResponseReturnValue:
    result = event_service.edit_event(
        get_uow(), current_user.id, event_id, _event_input(json_body()), get_catalogue()
    )
    return respond(result)


@events_bp.route("/event/<int:event_id>/kick", methods=["POST"])
@login_required
def kick_user(event_id: int) -> ResponseReturnValue:
    user_id = id_from_body("userId")
    if isinstance(user_id, Err):
        return error_response(user_id.error)
    return respond(event_service.kick_user(get_uow(), current_user.id, event_id, user_id.value))


@events_bp.route("/events", methods=["GET"])
def search_events() -> ResponseReturnValue:
    page = LimitAndOffset.create(request.args.get("limit", type=int), request.args.get("offset", type=int))
    if isinstance(page, Err):
        return error_response(page.error)
    result = event_service.search_events(get_uow(), request.args.get("query"), page.value, get_catalogue())
    return respond(result)


@events_bp.route("/events/nearby", methods=["GET"])
def nearby_events() -> ResponseReturnValue:
    latitude = request.args.get("latitude", type=float)
    longitude = request.args.get("longitude", type=float)
    if latitude is None or longitude is None:
        return jsonify({"error": "Invalid coordinates"}), 400
    coordinates = Coordinates.create(latitude, longitude)
    if isinstance(coordinates, Err):
        return error_response(coordinates.error)
    page = LimitAndOffset.create(request.args.get("limit", type=int))
    if isinstance(page, Err):
        return error_response(page.error)
    result = event_service.find_nearby_events(
        get_uow(),
        _viewer_id(),
        coordinates.value,
        request.args.get("radius", default=10.0, type=float),
        page.value.limit,
    )
    return respond(result)


@events_bp.route("/categories", methods=["GET"])
def categories() -> ResponseReturnValue:
    return jsonify(event_service.get_categories(get_catalogue())), 200


@events_bp.route("/event/<int:event_id>/role", methods=["GET"])
@login_required
def get_role(event_id: int) -> ResponseReturnValue:
    user_id = request.args.get("userId", default=current_user.id, type=int)
    return respond(role_service.get_user_role(get_uow(), user_id, event_id))


@events_bp.route("/event/<int:event_id>/role", methods=["POST"])
@login_required
def assign_role(event_id: int) -> ResponseReturnValue:
    user_id = id_from_body("userId")
    if isinstance(user_id, Err):
        return error_response(user_id.error)
    role = json_body().get("role")
    return respond(role_service.assign_role(get_uow(), current_user.id, user_id.value, event_id, role))


@events_bp.route("/event/<int:event_id>/role", methods=["DELETE"])
@login_required
def remove_role(event_id: int) -> ResponseReturnValue:
    user_id = id_from_body("userId")
    if isinstance(user_id, Err):
        return error_response(user_id.error)
    return respond(role_service.remove_role(get_uow(), current_user.id, user_id.value, event_id))
