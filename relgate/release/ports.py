"""Collaborator interfaces for the release gates.

The gates only observe the outside world through these protocols. The
production adapters are ``relgate.git.Repository``,
``relgate.services.make.MakeBuildSystem`` and
``relgate.services.github.GithubReleaseHost``; tests pass in fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from relgate.core.result import Result
from relgate.git.repository import GitError
from relgate.release.errors import BuildError, RemoteStateError


class VersionControl(Protocol):
    def describe_latest_tag(self, pattern: str) -> Result[str, GitError]: ...

    def object_sha(self, ref: str) -> Result[str, GitError]: ...

    def commit_of(self, ref: str) -> Result[str, GitError]: ...

    def is_ancestor(self, commit: str, ref: str) -> Result[bool, GitError]: ...

    def clone_at(self, tag: str, dest: Path) -> Result[None, GitError]: ...


class BuildSystem(Protocol):
    def build(self, release_dir: Path, version: str) -> Result[None, BuildError]: ...

    def run_tests(self, release_dir: Path, version: str) -> Result[None, BuildError]: ...

    def artifact_version(self, release_dir: Path) -> Result[str, BuildError]:
        """Version the built artifact reports about itself.

        The first version-shaped token of `<artifact> --version` output, so
        extra words around it (program name, git revision) are ignored.
        """
        ...

    def publish(self, release_dir: Path, version: str) -> Result[None, BuildError]:
        """Push container images tagged with ``version``."""
        ...


class ReleaseHost(Protocol):
    def tag_exists_remote(self, sha: str) -> Result[bool, RemoteStateError]: ...

    def release_exists(self, tag: str) -> Result[bool, RemoteStateError]: ...

    def create_release(
        self, tag: str, *, name: str, description: str
    ) -> Result[None, RemoteStateError]: ...

    def upload_asset(self, tag: str, path: Path) -> Result[None, RemoteStateError]: ...

    def delete_release(self, tag: str) -> Result[None, RemoteStateError]: ...
