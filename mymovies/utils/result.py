"""
Result type for operations whose failure is an expected outcome.

``Ok`` and ``Err`` are the two variants; callers branch on ``is_ok``
instead of catching exceptions. The recommendation enrichment fan-out
uses this to keep per-item lookup failures visible in its types.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result carrying ``value``."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))

    def map_err(self, fn: Callable) -> "Ok[T]":
        return self

    def and_then(self, fn: Callable[[T], "Result"]) -> "Result":
        return fn(self.value)

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result carrying ``error``."""

    error: E

    @property
    def is_ok(self) -> bool:
        return False

    def map(self, fn: Callable) -> "Err[E]":
        return self

    def map_err(self, fn: Callable[[E], F]) -> "Err[F]":
        return Err(fn(self.error))

    def and_then(self, fn: Callable) -> "Err[E]":
        return self

    def unwrap(self):
        """Raise the error (wrapped in RuntimeError unless it is an exception)."""
        if isinstance(self.error, BaseException):
            raise self.error
        raise RuntimeError(f"Called unwrap() on Err: {self.error!r}")

    def unwrap_or(self, default):
        return default


Result = Union[Ok[T], Err[E]]
