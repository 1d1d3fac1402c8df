"""Console output and error rendering."""

from .console import ERROR_MARKER, ConsoleProtocol, MockConsole, RichConsole, Style
from .errors import gate_error_exit_code, print_gate_error

__all__ = [
    "ERROR_MARKER",
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    "gate_error_exit_code",
    "print_gate_error",
]
