"""Domain models for PlanIt."""

from .errors import ErrorKind, PlanItError
from .result import Err, Ok, Result

__all__ = ["Err", "ErrorKind", "Ok", "PlanItError", "Result"]
