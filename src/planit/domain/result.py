"""ABOUTME: Two-variant result type used by validators and services
ABOUTME: Ok carries a value, Err carries an error; match on them with structural pattern matching"""

from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


class UnwrapError(Exception):
    """Raised when the value of an Err result is requested."""

    def __init__(self, error: Any) -> None:
        super().__init__(f"Called unwrap on an Err result: {error}")
        self.error = error


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> Literal[True]:
        return True

    def is_err(self) -> Literal[False]:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> Literal[False]:
        return False

    def is_err(self) -> Literal[True]:
        return True

    def unwrap(self) -> Any:
        raise UnwrapError(self.error)


Result: TypeAlias = Ok[T] | Err[E]


def collect_errors(*results: Ok[Any] | Err[E]) -> list[E]:
    """Return the errors of all failed results, in argument order."""
    return [result.error for result in results if isinstance(result, Err)]
