"""Ok/Err result values.

Release checks hand failures back as values so a gate can stop at the first
one and the CLI decides the exit code:

    match resolve_release(vcs=repo, repo_root=root, config=config):
        case Ok(ctx):
            ...
        case Err(error):
            print_gate_error(error, console)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
