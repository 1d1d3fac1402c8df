from __future__ import annotations

import sys

import typer

from relgate.cli.commands.release_cmd import build, publish
from relgate.core.errors import ErrorCode


COMMANDS: tuple[str, ...] = ("build", "publish")

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)

app.command()(build)
app.command()(publish)


def usage() -> str:
    lines = ["Usage:", *(f"   relgate {command}" for command in COMMANDS)]
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    """Entry point: dispatch ``build``/``publish``, print usage for anything else.

    Anything that is not a known command (including no argument at all)
    prints the usage summary and exits successfully without side effects.
    """
    args = sys.argv[1:] if argv is None else argv
    if not args or args[0] not in COMMANDS:
        typer.echo(usage())
        raise SystemExit(int(ErrorCode.OK))
    # Only the command word counts; trailing arguments are ignored.
    app(args=args[:1], prog_name="relgate")
