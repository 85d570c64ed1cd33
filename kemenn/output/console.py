"""Console output abstraction.

Diagnostics never go to standard output, which carries the rendered
mail. ``RichConsole`` writes styled text to standard error; ``MockConsole``
captures it for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Interface for operator-facing diagnostics."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None:
        """Print an info message; implementations may drop it when not verbose."""
        ...


class RichConsole:
    """Console implementation using Rich, bound to standard error."""

    def __init__(self, *, verbose: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self.verbose = verbose
        self._console = Console(stderr=True, highlight=False)
        self._style_map = {
            Style.DEFAULT: "",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def error(self, message: str) -> None:
        self._console.print("[red bold]error:[/red bold] ", end="")
        self._console.print(message, markup=False)

    def warning(self, message: str) -> None:
        self._console.print("[yellow]warning:[/yellow] ", end="")
        self._console.print(message, markup=False)

    def info(self, message: str) -> None:
        if not self.verbose:
            return
        self._console.print("[cyan]info:[/cyan] ", end="")
        self._console.print(message, markup=False)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    """Factory for empty outputs list (helps type inference)."""
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        """Get all output messages as a list of strings."""
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        """Get all output as a single newline-separated string."""
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]
