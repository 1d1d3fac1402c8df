from __future__ import annotations

from pathlib import Path

import pytest

from relgate.core.config import ReleaseConfig
from relgate.core.result import Err, Ok
from relgate.platform.process import ProcessError
from relgate.release.errors import BuildError
from relgate.services import make as make_mod
from relgate.services.make import MakeBuildSystem, parse_version_output


def _build_system() -> MakeBuildSystem:
    return MakeBuildSystem(config=ReleaseConfig(sudo="sudo -E", dockerhub_user="hub"))


def test_parse_version_output() -> None:
    assert parse_version_output("1.2.0\n") == "1.2.0"
    assert parse_version_output("weave script 1.2.0\nextra\n") == "1.2.0"
    assert parse_version_output("\n\n  weave 1.2.0  \n") == "1.2.0"
    assert parse_version_output("weave 1.2.0 (git abc1234)\n") == "1.2.0"
    assert parse_version_output("weave v1.2.0-rc1\n") == "1.2.0-rc1"
    assert parse_version_output("weave unknown\n") is None
    assert parse_version_output("") is None


def test_make_variables() -> None:
    assert _build_system().make_variables("1.2.0") == [
        "SUDO=sudo -E",
        "WEAVE_VERSION=1.2.0",
        "DOCKERHUB_USER=hub",
    ]


@pytest.mark.parametrize(
    ("method", "target"),
    [("build", None), ("run_tests", "tests"), ("publish", "publish")],
)
def test_make_targets(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, method: str, target: str | None
) -> None:
    calls: list[tuple[list[str], Path]] = []

    def fake_run_silent(cmd: list[str], cwd: Path, env: dict[str, str] | None = None):
        del env
        calls.append((cmd, cwd))
        return Ok(None)

    monkeypatch.setattr(make_mod, "run_silent", fake_run_silent)

    result = getattr(_build_system(), method)(tmp_path, "1.2.0")

    assert result == Ok(None)
    expected = ["make", "SUDO=sudo -E", "WEAVE_VERSION=1.2.0", "DOCKERHUB_USER=hub"]
    if target is not None:
        expected.append(target)
    assert calls == [(expected, tmp_path)]


def test_make_failure_is_build_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_run_silent(cmd: list[str], cwd: Path, env: dict[str, str] | None = None):
        del cwd, env
        return Err(ProcessError(command=tuple(cmd), returncode=2, stdout="", stderr=""))

    monkeypatch.setattr(make_mod, "run_silent", fake_run_silent)

    result = _build_system().run_tests(tmp_path, "1.2.0")

    assert isinstance(result, Err)
    assert isinstance(result.error, BuildError)
    assert result.error.message == "tests failed (make exit 2)"


def test_artifact_version(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls: list[list[str]] = []

    def fake_run(cmd: list[str], cwd: Path, env=None, *, timeout: float | None = None):
        del cwd, env, timeout
        calls.append(cmd)
        return Ok("weave script 1.2.0\n")

    monkeypatch.setattr(make_mod, "run_process", fake_run)

    assert _build_system().artifact_version(tmp_path) == Ok("1.2.0")
    assert calls == [[str(tmp_path / "weave"), "--version"]]


def test_artifact_version_query_fails(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_run(cmd: list[str], cwd: Path, env=None, *, timeout: float | None = None):
        del cwd, env, timeout
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr="not found"))

    monkeypatch.setattr(make_mod, "run_process", fake_run)

    result = _build_system().artifact_version(tmp_path)

    assert isinstance(result, Err)
    assert isinstance(result.error, BuildError)
    assert result.error.hint == "not found"


def test_artifact_version_empty_output(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_run(cmd: list[str], cwd: Path, env=None, *, timeout: float | None = None):
        del cmd, cwd, env, timeout
        return Ok("")

    monkeypatch.setattr(make_mod, "run_process", fake_run)

    assert isinstance(_build_system().artifact_version(tmp_path), Err)
