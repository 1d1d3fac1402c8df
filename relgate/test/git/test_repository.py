"""Tests for git/repository.py."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from relgate.core.result import Err, Ok, Result
from relgate.git import repository as repo_mod
from relgate.git.repository import Repository
from relgate.platform.process import ProcessError, run


def _fake_run(responses: dict[str, Result[str, ProcessError]], calls: list[list[str]]):
    def fake(cmd: list[str], cwd: Path, env: dict[str, str] | None = None, *, timeout=None):
        del cwd, env, timeout
        calls.append(cmd)
        # Key on the git subcommand (after "git -C <path>").
        return responses[cmd[3]]

    return fake


def _err(returncode: int, stderr: str = "") -> Err[ProcessError]:
    return Err(ProcessError(command=("git",), returncode=returncode, stdout="", stderr=stderr))


# =============================================================================
# Unit tests (subprocess faked)
# =============================================================================


class TestRepositoryUnit:
    def test_describe_latest_tag(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        calls: list[list[str]] = []
        responses = {"describe": Ok("v1.2.0\n")}
        monkeypatch.setattr(repo_mod, "run_process", _fake_run(responses, calls))

        assert Repository(tmp_path).describe_latest_tag("v*") == Ok("v1.2.0")
        assert calls == [["git", "-C", str(tmp_path), "describe", "--abbrev=0", "--match=v*"]]

    def test_describe_without_tags(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        responses = {"describe": _err(128, "fatal: No names found, cannot describe anything.")}
        monkeypatch.setattr(repo_mod, "run_process", _fake_run(responses, []))

        result = Repository(tmp_path).describe_latest_tag("v*")

        assert isinstance(result, Err)
        assert "No names found" in result.error.message
        assert result.error.returncode == 128

    def test_commit_of_dereferences_tag(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        calls: list[list[str]] = []
        responses = {"rev-parse": Ok("abc\n")}
        monkeypatch.setattr(repo_mod, "run_process", _fake_run(responses, calls))

        assert Repository(tmp_path).commit_of("v1.2.0") == Ok("abc")
        assert calls[0][-1] == "v1.2.0^{commit}"

    def test_unknown_ref(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(repo_mod, "run_process", _fake_run({"rev-parse": _err(1)}, []))

        result = Repository(tmp_path).object_sha("latest_release")

        assert isinstance(result, Err)
        assert result.error.message == "unknown revision: latest_release"

    @pytest.mark.parametrize(
        ("response", "expected"),
        [(Ok(""), Ok(True)), (_err(1), Ok(False))],
    )
    def test_is_ancestor(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
        response: Result[str, ProcessError],
        expected: Result[bool, object],
    ) -> None:
        monkeypatch.setattr(repo_mod, "run_process", _fake_run({"merge-base": response}, []))
        assert Repository(tmp_path).is_ancestor("abc", "master") == expected

    def test_is_ancestor_error(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        responses = {"merge-base": _err(128, "fatal: Not a valid object name master")}
        monkeypatch.setattr(repo_mod, "run_process", _fake_run(responses, []))

        result = Repository(tmp_path).is_ancestor("abc", "master")

        assert isinstance(result, Err)
        assert "master" in result.error.message


# =============================================================================
# Integration tests (real git)
# =============================================================================


def _git(repo: Path, *args: str) -> str:
    result = run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", *args],
        cwd=repo,
    )
    assert isinstance(result, Ok), result
    return result.value.strip()


@pytest.fixture
def tagged_repo(tmp_path: Path) -> Path:
    if shutil.which("git") is None:
        pytest.skip("git not available")
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    (repo / "CHANGELOG.md").write_text("## Release 1.2.0\n", encoding="utf-8")
    _git(repo, "add", "CHANGELOG.md")
    _git(repo, "commit", "-q", "-m", "release 1.2.0")
    _git(repo, "tag", "-a", "v1.2.0", "-m", "v1.2.0")
    _git(repo, "tag", "-a", "latest_release", "-m", "latest")
    return repo


class TestRepositoryIntegration:
    def test_resolves_annotated_tags(self, tagged_repo: Path) -> None:
        repo = Repository(tagged_repo)
        head = _git(tagged_repo, "rev-parse", "HEAD")

        assert repo.describe_latest_tag("v*") == Ok("v1.2.0")
        tag_object = repo.object_sha("v1.2.0")
        assert isinstance(tag_object, Ok)
        assert tag_object.value != head
        assert repo.commit_of("v1.2.0") == Ok(head)
        assert repo.commit_of("latest_release") == Ok(head)

    def test_clone_at_tag(self, tagged_repo: Path, tmp_path: Path) -> None:
        dest = tmp_path / "releases" / "v1.2.0"

        assert Repository(tagged_repo).clone_at("v1.2.0", dest) == Ok(None)
        assert (dest / "CHANGELOG.md").read_text(encoding="utf-8") == "## Release 1.2.0\n"

    def test_clone_unknown_tag(self, tagged_repo: Path, tmp_path: Path) -> None:
        result = Repository(tagged_repo).clone_at("v9.9.9", tmp_path / "out")
        assert isinstance(result, Err)
