"""Result type for explicit error handling.

Every fallible build operation returns either ``Ok(value)`` or ``Err(error)``
instead of raising, so the orchestrator can stop at the first failure and
report it without try/except blocks at each call site.

Usage:
    match prepare_layout(root):
        case Ok(path):
            console.info(f"release dir ready: {path}")
        case Err(error):
            print_build_error(error, console)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = "Ok[T] | Err[E]"
