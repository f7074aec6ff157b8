"""ABOUTME: JSON endpoints for polls inside an event
ABOUTME: Organizers open and delete polls, members read them and vote once"""

from flask import Blueprint
from flask.typing import ResponseReturnValue
from flask_login import current_user, login_required

from planit.domain.result import Err
from planit.domain.validators import PollInput
from planit.entrypoints.responses import error_response, get_uow, id_from_body, json_body, respond
from planit.service_layer import poll_service

polls_bp = Blueprint("polls", __name__)


@polls_bp.route("/event/<int:event_id>/poll", methods=["POST"])
@login_required
def create_poll(event_id: int) -> ResponseReturnValue:
    data = json_body()
    options = data.get("options")
    poll_input = PollInput(
        title=data.get("title"),
        options=list(options) if isinstance(options, list) else [],
        duration=data.get("duration"),
    )
    return respond(poll_service.create_poll(get_uow(), current_user.id, event_id, poll_input), status=201)


@polls_bp.route("/event/<int:event_id>/poll", methods=["GET"])
@login_required
def list_polls(event_id: int) -> ResponseReturnValue:
    return respond(poll_service.get_polls(get_uow(), current_user.id, event_id))


@polls_bp.route("/event/<int:event_id>/poll/<int:poll_id>", methods=["GET"])
@login_required
def get_poll(event_id: int, poll_id: int) -> ResponseReturnValue:
    return respond(poll_service.get_poll(get_uow(), current_user.id, event_id, poll_id))


@polls_bp.route("/event/<int:event_id>/poll/<int:poll_id>", methods=["DELETE"])
@login_required
def delete_poll(event_id: int, poll_id: int) -> ResponseReturnValue:
    return respond(poll_service.delete_poll(get_uow(), current_user.id, event_id, poll_id))


@polls_bp.route("/event/<int:event_id>/poll/<int:poll_id>/vote", methods=["POST"])
@login_required
def vote(event_id: int, poll_id: int) -> ResponseReturnValue:
    option_id = id_from_body("optionId")
    if isinstance(option_id, Err):
        return error_response(option_id.error)
    return respond(poll_service.vote_poll(get_uow(), current_user.id, event_id, poll_id, option_id.value))
