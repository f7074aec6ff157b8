"""ABOUTME: JSON endpoints for accounts: registration, login, profiles, feedback and the about page
ABOUTME: Login state lives in the Flask-Login session; every failure is answered as {"error": message}"""

from flask import Blueprint, current_app, jsonify
from flask.typing import ResponseReturnValue
from flask_login import current_user, login_required, login_user, logout_user

from planit.domain.errors import ErrorKind, PlanItError
from planit.domain.result import Ok
from planit.domain.validators import UserEditInput, UserLoginInput, UserRegisterInput
from planit.entrypoints.responses import error_response, get_catalogue, get_uow, json_body, respond, to_json
from planit.service_layer import user_service

users_bp = Blueprint("users", __name__)


@users_bp.route("/register", methods=["POST"])
def register() -> ResponseReturnValue:
    data = json_body()
    register_input = UserRegisterInput(
        username=data.get("username"),
        name=data.get("name"),
        email=data.get("email"),
        password=data.get("password"),
    )
    result = user_service.register_user(get_uow(), register_input)
    if isinstance(result, Ok):
        current_app.logger.info(f"New user registered: {result.value.id}")
    return respond(result, status=201)


@users_bp.route("/login", methods=["POST"])
def login() -> ResponseReturnValue:
    data = json_body()
    login_input = UserLoginInput(email_or_username=data.get("emailOrUsername"), password=data.get("password"))
    match user_service.authenticate_user(get_uow(), login_input):
        case Ok(user):
            login_user(user, remember=bool(data.get("remember", False)))
            return jsonify({"success": True, "user": to_json(user)}), 200
        case failure:
            return error_response(failure.error)


@users_bp.route("/logout", methods=["POST"])
@login_required
def logout() -> ResponseReturnValue:
    logout_user()
    return jsonify({"success": True}), 200


@users_bp.route("/user/<int:user_id>", methods=["GET"])
@login_required
def get_user(user_id: int) -> ResponseReturnValue:
    return respond(user_service.get_user(get_uow(), user_id))


@users_bp.route("/user", methods=["PUT"])
@login_required
def edit_user() -> ResponseReturnValue:
    data = json_body()
    interests = data.get("interests") or []
    if not isinstance(interests, list):
        return error_response(PlanItError.of(ErrorKind.INVALID_VALUE, "interests"))
    edit_input = UserEditInput(name=data.get("name"), description=data.get("description"), interests=interests)
    return respond(user_service.edit_user(get_uow(), current_user.id, edit_input, get_catalogue()))


@users_bp.route("/user/events", methods=["GET"])
@login_required
def user_events() -> ResponseReturnValue:
    return respond(user_service.get_user_events(get_uow(), current_user.id))


@users_bp.route("/feedback", methods=["POST"])
@login_required
def send_feedback() -> ResponseReturnValue:
    data = json_body()
    return respond(user_service.send_feedback(get_uow(), current_user.id, data.get("text")), status=201)


@users_bp.route("/feedback", methods=["GET"])
@login_required
def list_feedback() -> ResponseReturnValue:
    return respond(user_service.get_feedback(get_uow()))


@users_bp.route("/about", methods=["GET"])
def about() -> ResponseReturnValue:
    return jsonify(to_json(user_service.about())), 200
