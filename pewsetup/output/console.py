"""Console output.

Services report progress through ConsoleProtocol and never touch a
rendering library. RichConsole writes to the job log; MockConsole
records what would have been written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles, valued by their Rich style string."""

    DEFAULT = ""
    SUCCESS = "green"
    ERROR = "red bold"
    WARNING = "yellow"
    INFO = "cyan"
    DIM = "dim"


# Style -> label printed before the message
_LABELS = {
    Style.SUCCESS: "OK",
    Style.ERROR: "error:",
    Style.WARNING: "warning:",
    Style.INFO: "info:",
}


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...


class _LabelledConsole:
    """success/error/warning/info in terms of ``_labelled``."""

    def _labelled(self, style: Style, message: str) -> None:
        raise NotImplementedError

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._labelled(Style.INFO, message)


class RichConsole(_LabelledConsole):
    def __init__(self, *, stderr: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console
        from rich.markup import escape

        # Long cache paths must stay on one line in CI logs.
        self._console = Console(stderr=stderr, soft_wrap=True)
        self._escape = escape

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=style.value or None, markup=False)

    def _labelled(self, style: Style, message: str) -> None:
        label = _LABELS[style]
        self._console.print(f"[{style.value}]{label}[/] {self._escape(message)}")


@dataclass
class OutputRecord:
    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole(_LabelledConsole):
    """Captures output for tests."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def _labelled(self, style: Style, message: str) -> None:
        self.outputs.append(OutputRecord(f"{_LABELS[style]} {message}", style))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
