"""Result[T, E] for operations that report failure as a value instead of raising."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, cast

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Success value or error, never both.

    Construct through Result.ok() / Result.err(). Accessing the side that is
    not present raises ValueError.
    """

    _value: T | None = None
    _error: E | None = None
    _is_ok: bool = True

    @classmethod
    def ok(cls, value: T) -> Result[T, E]:
        return cls(_value=value, _error=None, _is_ok=True)

    @classmethod
    def err(cls, error: E) -> Result[T, E]:
        return cls(_value=None, _error=error, _is_ok=False)

    @property
    def is_ok(self) -> bool:
        return self._is_ok

    @property
    def is_err(self) -> bool:
        return not self._is_ok

    @property
    def value(self) -> T:
        if not self._is_ok:
            raise ValueError("Called value on Result.err")
        return cast(T, self._value)

    @property
    def error(self) -> E:
        if self._is_ok:
            raise ValueError("Called error on Result.ok")
        return cast(E, self._error)
