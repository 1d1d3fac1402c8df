from __future__ import annotations

import re
from pathlib import Path

from relgate.core.config import ReleaseConfig
from relgate.core.result import Err, Ok, Result
from relgate.platform.process import ProcessError
from relgate.platform.process import run as run_process
from relgate.platform.process import run_silent
from relgate.release.errors import BuildError
from relgate.services.timeouts import ARTIFACT_VERSION_TIMEOUT_SECONDS


_VERSION_TOKEN_RE = re.compile(r"\bv?(\d+\.\d+(?:\.\d+)*(?:[-+][0-9A-Za-z][0-9A-Za-z.+-]*)?)")


def parse_version_output(output: str) -> str | None:
    """First version-shaped token in ``<artifact> --version`` output.

    ``1.2.0``, ``weave script 1.2.0`` and ``weave 1.2.0 (git abc123)`` all
    yield ``1.2.0``; pre-release and build suffixes such as ``1.2.0-rc1`` are
    kept so a mismatch stays visible.
    """
    m = _VERSION_TOKEN_RE.search(output)
    return m.group(1) if m is not None else None


class MakeBuildSystem:
    """Build, test and publish through the release checkout's Makefile."""

    def __init__(self, *, config: ReleaseConfig) -> None:
        self._config = config

    def make_variables(self, version: str) -> list[str]:
        return [
            f"SUDO={self._config.sudo}",
            f"{self._config.version_variable}={version}",
            f"DOCKERHUB_USER={self._config.dockerhub_user}",
        ]

    def build(self, release_dir: Path, version: str) -> Result[None, BuildError]:
        return self._make(release_dir, version, target=None, what="build")

    def run_tests(self, release_dir: Path, version: str) -> Result[None, BuildError]:
        return self._make(release_dir, version, target="tests", what="tests")

    def publish(self, release_dir: Path, version: str) -> Result[None, BuildError]:
        return self._make(release_dir, version, target="publish", what="image publish")

    def artifact_version(self, release_dir: Path) -> Result[str, BuildError]:
        artifact = release_dir / self._config.artifact
        result = run_process(
            [str(artifact), "--version"],
            cwd=release_dir,
            timeout=ARTIFACT_VERSION_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return Err(
                BuildError(
                    message=f"failed to query {self._config.artifact} --version",
                    hint=result.error.detail,
                )
            )

        version = parse_version_output(result.value)
        if version is None:
            return Err(BuildError(message=f"{self._config.artifact} --version printed no version"))
        return Ok(version)

    def _make(
        self,
        release_dir: Path,
        version: str,
        *,
        target: str | None,
        what: str,
    ) -> Result[None, BuildError]:
        cmd = ["make", *self.make_variables(version)]
        if target is not None:
            cmd.append(target)

        result = run_silent(cmd, cwd=release_dir)
        if isinstance(result, Err):
            return Err(_make_failed(what, result.error))
        return Ok(None)


def _make_failed(what: str, error: ProcessError) -> BuildError:
    return BuildError(
        message=f"{what} failed (make exit {error.returncode})",
        hint=error.detail,
    )
