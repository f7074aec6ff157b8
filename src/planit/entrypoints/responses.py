"""ABOUTME: Helpers shared by the JSON blueprints: getting a unit of work and rendering results
ABOUTME: An Err becomes {"error": message} with the error's status; an Ok is serialised to JSON"""

import dataclasses
from collections.abc import Callable
from typing import Any

from flask import current_app, jsonify, request
from flask.typing import ResponseReturnValue

from planit import bootstrap
from planit.domain.categories import CategoryCatalogue
from planit.domain.errors import ErrorKind, PlanItError
from planit.domain.events import Event
from planit.domain.result import Err, Ok, Result
from planit.domain.users import Feedback, User
from planit.domain.value_objects import Id
from planit.service_layer.unit_of_work import AbstractUnitOfWork

SESSION_FACTORY_KEY = "planit.session_factory"
CATALOGUE_KEY = "planit.catalogue"


def get_uow() -> AbstractUnitOfWork:
    return bootstrap.bootstrap(session_factory=current_app.extensions[SESSION_FACTORY_KEY])


def get_catalogue() -> CategoryCatalogue:
    catalogue = current_app.extensions[CATALOGUE_KEY]
    assert isinstance(catalogue, CategoryCatalogue)
    return catalogue


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def id_from_body(name: str) -> Result[int, PlanItError]:
    """Read a positive id such as `userId` or `optionId` from the JSON body."""
    parsed = Id.create(json_body().get(name))
    if isinstance(parsed, Err):
        return Err(PlanItError.of(ErrorKind.INVALID_VALUE, name))
    return Ok(parsed.value.value)


def error_response(error: PlanItError) -> ResponseReturnValue:
    return jsonify({"error": error.message}), error.status


def event_to_dict(event: Event) -> dict[str, Any]:
    return {
        "id": event.id,
        "title": event.title,
        "description": event.description,
        "category": event.category,
        "subcategory": event.subcategory,
        "locationType": event.location_type.value if event.location_type else None,
        "location": event.location,
        "latitude": event.latitude,
        "longitude": event.longitude,
        "visibility": event.visibility.value,
        "date": event.date,
        "endDate": event.end_date or None,
        "price": event.price,
        "code": event.code,
        "participants": [{"userId": p.user_id, "role": p.role} for p in event.participants],
    }


def user_to_dict(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "name": user.name,
        "email": user.email,
        "description": user.description,
        "interests": list(user.interests),
    }


def feedback_to_dict(feedback: Feedback) -> dict[str, Any]:
    return {
        "id": feedback.id,
        "userId": feedback.user_id,
        "text": feedback.text,
        "createdAt": feedback.created_at.isoformat(),
    }


def camel_case(name: str) -> str:
    first, *rest = name.split("_")
    return first + "".join(word.title() for word in rest)


def to_json(value: Any) -> Any:
    """Turn service return values into something jsonify accepts. Dataclass fields become camelCase keys."""
    if isinstance(value, Event):
        return event_to_dict(value)
    if isinstance(value, User):
        return user_to_dict(value)
    if isinstance(value, Feedback):
        return feedback_to_dict(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {camel_case(field.name): to_json(getattr(value, field.name)) for field in dataclasses.fields(value)}
    if isinstance(value, list | tuple):
        return [to_json(item) for item in value]
    if isinstance(value, dict):
        return {key: to_json(item) for key, item in value.items()}
    return value


def respond(
    result: Result[Any, PlanItError],
    status: int = 200,
    serialize: Callable[[Any], Any] = to_json,
) -> ResponseReturnValue:
    match result:
        case Ok(value):
            if value is None:
                return jsonify({"success": True}), status
            return jsonify(serialize(value)), status
        case Err(error):
            return error_response(error)
    raise TypeError(f"Not a result: {result!r}")  # pragma: no cover
