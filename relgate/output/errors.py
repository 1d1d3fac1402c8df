"""Error presentation utilities.

Centralized rendering of release gate errors and exit code mapping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relgate.core.errors import ErrorCode
from relgate.release.errors import ConflictError, GateError, RemoteStateError

if TYPE_CHECKING:
    from relgate.output.console import ConsoleProtocol

__all__ = ["gate_error_exit_code", "print_gate_error"]


def print_gate_error(error: GateError, console: ConsoleProtocol) -> None:
    """Print a gate error, its hint and any remedial command to stderr."""
    console.error(error.message)
    if error.hint:
        console.hint(f"hint: {error.hint}")

    match error:
        case ConflictError(command=str(command)) | RemoteStateError(command=str(command)):
            console.hint("You may need to:")
            console.hint(f"\t{command}")
        case _:
            pass


def gate_error_exit_code(error: GateError) -> int:
    """Exit code for a gate error. Every check failure exits 1."""
    del error
    return int(ErrorCode.RELEASE_FAILED)
