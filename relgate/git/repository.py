"""Git repository abstraction.

This module provides the Repository class used to resolve release tags and
to produce the pristine per-tag checkout a release is built from.
All operations return Result types for proper error handling.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.describe_latest_tag("v*"):
        case Ok(tag):
            print(f"latest tag: {tag}")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relgate.core.result import Err, Ok, Result
from relgate.platform.process import ProcessError
from relgate.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def describe_latest_tag(self, pattern: str) -> Result[str, GitError]:
        """Most recent annotated tag reachable from HEAD that matches ``pattern``."""
        result = self._run(["describe", "--abbrev=0", f"--match={pattern}"])
        match result:
            case Err(e):
                return Err(self._error(f"describe --match={pattern}", e, "no matching tag"))
            case Ok(stdout):
                tag = stdout.strip()
                if not tag:
                    return Err(GitError(command="describe", message="no matching tag"))
                return Ok(tag)

    def object_sha(self, ref: str) -> Result[str, GitError]:
        """SHA of the object ``ref`` names; for an annotated tag, the tag object."""
        return self._rev_parse(ref)

    def commit_of(self, ref: str) -> Result[str, GitError]:
        """SHA of the commit ``ref`` ultimately points at."""
        return self._rev_parse(f"{ref}^{{commit}}")

    def is_ancestor(self, commit: str, ref: str) -> Result[bool, GitError]:
        """True if ``commit`` is reachable from ``ref``.

        ``git merge-base --is-ancestor`` exits 1 for "no" and >1 for errors.
        """
        result = self._run(["merge-base", "--is-ancestor", commit, ref])
        match result:
            case Ok(_):
                return Ok(True)
            case Err(e) if e.returncode == 1:
                return Ok(False)
            case Err(e):
                return Err(self._error("merge-base --is-ancestor", e, "merge-base failed"))

    def clone_at(self, tag: str, dest: Path) -> Result[None, GitError]:
        """Clone this repository into ``dest`` with ``tag`` checked out."""
        result = run_process(
            ["git", "clone", "-q", "-b", tag, str(self.path), str(dest)],
            cwd=self.path,
            timeout=_GIT_NETWORK_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return Err(self._error(f"clone -b {tag}", result.error, "clone failed"))
        return Ok(None)

    def _rev_parse(self, ref: str) -> Result[str, GitError]:
        result = self._run(["rev-parse", "--verify", "--quiet", ref])
        match result:
            case Err(e):
                return Err(self._error(f"rev-parse {ref}", e, f"unknown revision: {ref}"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push", "clone"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)

    @staticmethod
    def _error(command: str, error: ProcessError, fallback: str) -> GitError:
        return GitError(
            command=command,
            message=error.stderr.strip() or fallback,
            returncode=error.returncode,
        )
