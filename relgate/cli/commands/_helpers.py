"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from relgate.core.result import Err, Result
from relgate.output.errors import gate_error_exit_code, print_gate_error
from relgate.release.errors import GateError

if TYPE_CHECKING:
    from relgate.cli.context import CLIContext


def exit_on_error[T](result: Result[T, GateError], ctx: CLIContext) -> None:
    """Print the gate error and exit non-zero if result is Err, otherwise return."""
    if isinstance(result, Err):
        print_gate_error(result.error, ctx.console)
        raise typer.Exit(code=gate_error_exit_code(result.error))
