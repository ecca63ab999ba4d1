"""Result values returned by fallible operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


class TryCallError(Exception):
    """Raised when the success value of an ``Err`` result is requested."""

    def __init__(self, error: Any) -> None:
        super().__init__(f"called unwrap on an Err value: {error!r}")
        self.error = error


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome of a fallible operation."""

    value: T

    def unwrap(self) -> T:
        """Return the success value."""
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome of a fallible operation."""

    error: E

    def unwrap(self) -> Any:
        """Raise :class:`TryCallError`, since there is no success value."""
        raise TryCallError(self.error)


Result = Union[Ok[T], Err[E]]