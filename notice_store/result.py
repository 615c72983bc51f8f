"""Tagged success/failure outcomes returned by every store operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying an error."""

    error: E

    @property
    def ok(self) -> bool:
        return False


Result = Ok[T] | Err[E]
