"""ABOUTME: Short-circuit exception for service layer operations and its conversion into results
ABOUTME: Services raise PlanItException inside a unit of work; @returns_result turns it into an Err"""

from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from planit.domain.errors import ErrorKind, PlanItError
from planit.domain.result import Err, Ok, Result

P = ParamSpec("P")
T = TypeVar("T")


class PlanItException(Exception):
    """Carries a PlanItError out of a service operation, rolling back the surrounding unit of work."""

    def __init__(self, error: PlanItError) -> None:
        super().__init__(error.message)
        self.error = error

    @classmethod
    def of(cls, kind: ErrorKind, field: str = "") -> "PlanItException":
        return cls(PlanItError.of(kind, field))


def fail(kind: ErrorKind, field: str = "") -> PlanItException:
    """Build the exception for `kind`, for use as `raise fail(ErrorKind.EVENT_NOT_FOUND)`."""
    return PlanItException.of(kind, field)


def returns_result(func: Callable[P, T]) -> Callable[P, Result[T, PlanItError]]:
    """
    Decorator for service functions: the return value becomes Ok, a PlanItException becomes Err.

    Any other exception is left to propagate to the caller's top-level handler.
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, PlanItError]:
        try:
            return Ok(func(*args, **kwargs))
        except PlanItException as e:
            return Err(e.error)

    return wrapper


def unwrap_or_raise(result: Result[T, PlanItError]) -> T:
    """Unpack a validation result inside a service, raising PlanItException on failure."""
    if isinstance(result, Err):
        raise PlanItException(result.error)
    return result.value
