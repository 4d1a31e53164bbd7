"""Result type to make errors explicit."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Exception)
F = TypeVar("F", bound=Exception)


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Container for a success value or failure error."""

    _value: Optional[T] = None
    _error: Optional[E] = None

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore[return-value]

    @property
    def error(self) -> Optional[E]:
        return self._error

    @property
    def errors(self) -> List[Any]:
        """Field issues of a schema failure, the single error otherwise."""
        if self._error is None:
            return []
        issues = getattr(self._error, "issues", None)
        if issues is not None:
            return list(issues)
        return [self._error]

    @classmethod
    def success(cls, value: T) -> "Result[T, E]":
        return cls(_value=value)

    @classmethod
    def failure(cls, error: E) -> "Result[T, E]":
        if error is None:
            raise ValueError("A failed result needs an error")
        return cls(_error=error)

    def map(self, func: Callable[[T], U]) -> "Result[U, E]":
        if self.is_success:
            return Result.success(func(self._value))  # type: ignore[arg-type]
        return self  # type: ignore[return-value]

    def chain(self, func: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        if self.is_success:
            return func(self._value)  # type: ignore[arg-type]
        return self  # type: ignore[return-value]

    def map_error(self, func: Callable[[E], F]) -> "Result[T, F]":
        if self.is_failure:
            return Result.failure(func(self._error))  # type: ignore[arg-type]
        return self  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        if self.is_success:
            return self._value  # type: ignore[return-value]
        return default
