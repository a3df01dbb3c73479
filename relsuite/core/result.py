"""Result type for explicit error handling.

Every step of the release suite that can fail returns a Result instead of
raising. Failures travel up as values and are turned into exit codes only
at the CLI edge.

Usage:
    match repo.previous_tag("v1.2.3"):
        case Ok(tag):
            print(f"changelog starts after {tag}")
        case Err(error):
            print(f"no previous tag: {error.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
