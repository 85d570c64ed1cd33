"""Result type for explicit error handling.

Every step of the announce pipeline returns either ``Ok(value)`` or
``Err(error)``; callers branch on the variant instead of catching
exceptions, and the first ``Err`` short-circuits the pipeline.

Usage:
    def read_notes(path: Path) -> Result[str, str]:
        try:
            return Ok(path.read_text(encoding="utf-8"))
        except OSError as e:
            return Err(str(e))

    match read_notes(Path("NEWS.md")):
        case Ok(text):
            print(text)
        case Err(error):
            print(f"error: {error}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeGuard, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Returns the contained value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Applies ``f`` to the contained value."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raises ValueError carrying the error.

        Raises:
            ValueError: Always, since Err holds no value.
        """
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, f: Callable[[T], U]) -> Err[E]:
        return self

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Applies ``f`` to the contained error (used to add context)."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]


def is_ok[T, E](result: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Type guard narrowing a Result to Ok."""
    return isinstance(result, Ok)


def is_err[T, E](result: Result[T, E]) -> TypeGuard[Err[E]]:
    """Type guard narrowing a Result to Err."""
    return isinstance(result, Err)
