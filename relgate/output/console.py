"""Console output for relgate.

Commands never print directly. Progress (``== step``, ``** done``) goes to
stdout; errors, warnings and hints go to stderr. ``MockConsole`` records the
same lines for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ERROR_MARKER",
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]

ERROR_MARKER = "❗"


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    DIM = auto()
    HEADER = auto()


_RICH_STYLES: dict[Style, str] = {
    Style.DEFAULT: "",
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.DIM: "dim",
    Style.HEADER: "blue bold",
}


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None:
        """Completion marker, ``** message``."""
        ...

    def header(self, message: str) -> None:
        """Progress marker, ``== message``."""
        ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def hint(self, message: str) -> None:
        """Remediation line printed under the preceding error."""
        ...


class _LineConsole:
    """Maps each console call to one styled line on stdout or stderr."""

    def _emit(self, message: str, style: Style, *, stderr: bool) -> None:
        raise NotImplementedError

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._emit(message, style, stderr=False)

    def success(self, message: str) -> None:
        self._emit(f"** {message}", Style.SUCCESS, stderr=False)

    def header(self, message: str) -> None:
        self._emit(f"== {message}", Style.HEADER, stderr=False)

    def error(self, message: str) -> None:
        self._emit(f"{ERROR_MARKER} {message}", Style.ERROR, stderr=True)

    def warning(self, message: str) -> None:
        self._emit(f"warning: {message}", Style.WARNING, stderr=True)

    def hint(self, message: str) -> None:
        self._emit(message, Style.DIM, stderr=True)


class RichConsole(_LineConsole):
    def __init__(self) -> None:
        from rich.console import Console

        self._out = Console(soft_wrap=True)
        self._err = Console(stderr=True, soft_wrap=True)

    def _emit(self, message: str, style: Style, *, stderr: bool) -> None:
        target = self._err if stderr else self._out
        # Tag names and paths may contain [brackets]; never treat them as markup.
        target.print(message, style=_RICH_STYLES[style] or None, markup=False, highlight=False)


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style
    stderr: bool = False


@dataclass
class MockConsole(_LineConsole):
    """Records every line instead of printing it."""

    outputs: list[OutputRecord] = field(default_factory=lambda: [])

    def _emit(self, message: str, style: Style, *, stderr: bool) -> None:
        self.outputs.append(OutputRecord(message, style, stderr))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    @property
    def stdout_text(self) -> str:
        return "\n".join(o.message for o in self.outputs if not o.stderr)

    @property
    def stderr_text(self) -> str:
        return "\n".join(o.message for o in self.outputs if o.stderr)

    def has_error(self) -> bool:
        return any(o.style is Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style is Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
