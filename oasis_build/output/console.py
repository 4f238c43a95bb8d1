"""Console output abstraction.

Services print through ``ConsoleProtocol`` so they can be exercised with
``MockConsole`` in tests; the CLI wires in ``RichConsole``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()  # command lines, hints
    HEADER = auto()  # one per build step

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Styled output sink used by the build services."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def step(self, index: int, total: int, label: str) -> None:
        """Announce build step ``index`` of ``total``."""
        ...


class RichConsole:
    """Console implementation using Rich.

    Errors and warnings go to stderr so they stay visible when stdout is
    redirected to a log.
    """

    def __init__(self) -> None:
        from rich.console import Console

        self._out = Console()
        self._err = Console(stderr=True)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        # Command lines contain brackets; never interpret them as markup.
        if rich_style:
            self._out.print(message, style=rich_style, markup=False, highlight=False)
        else:
            self._out.print(message, markup=False, highlight=False)

    def success(self, message: str) -> None:
        self._out.print(f"\n[green]OK[/green] {message}")

    def error(self, message: str) -> None:
        self._err.print(f"[red bold]error:[/red bold] {message}")

    def warning(self, message: str) -> None:
        self._err.print(f"[yellow]warning:[/yellow] {message}")

    def info(self, message: str) -> None:
        self._out.print(f"[cyan]info:[/cyan] {message}")

    def step(self, index: int, total: int, label: str) -> None:
        self._out.print(f"\n[blue bold]\\[{index}/{total}] {label}[/blue bold]")


@dataclass
class OutputRecord:
    """A single line captured by MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def step(self, index: int, total: int, label: str) -> None:
        self.outputs.append(OutputRecord(f"[{index}/{total}] {label}", Style.HEADER))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_success(self) -> bool:
        return any(o.style == Style.SUCCESS for o in self.outputs)

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
