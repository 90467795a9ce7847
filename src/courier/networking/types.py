"""Result container returned by client and dispatcher operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome with its value and request metadata."""

    value: T
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome with its error and request metadata."""

    error: E
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    def unwrap(self) -> Any:
        """Raise the wrapped error."""
        raise self.error


Result = Union[Ok[T], Err[E]]
