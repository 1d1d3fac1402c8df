"""Release host adapter backed by the GitHub CLI (``gh``)."""

from __future__ import annotations

import json
from pathlib import Path

from relgate.core.config import ReleaseConfig
from relgate.core.result import Err, Ok, Result
from relgate.core.structured import as_str_dict, get_str
from relgate.platform.process import ProcessError
from relgate.platform.process import run as run_process
from relgate.release.errors import RemoteStateError
from relgate.services.timeouts import GH_TIMEOUT_SECONDS, GH_UPLOAD_TIMEOUT_SECONDS


def _is_not_found(error: ProcessError) -> bool:
    text = f"{error.stderr}\n{error.stdout}".lower()
    return "http 404" in text or "not found" in text


class GithubReleaseHost:
    """Queries and mutates releases of ``config.repo_slug`` through ``gh``.

    No call is retried; a failing call surfaces as a RemoteStateError.
    """

    def __init__(self, *, config: ReleaseConfig, workspace_root: Path) -> None:
        self._config = config
        self._root = workspace_root

    @property
    def repo(self) -> str:
        return self._config.repo_slug

    def tag_exists_remote(self, sha: str) -> Result[bool, RemoteStateError]:
        endpoint = f"repos/{self.repo}/git/tags/{sha}"
        result = self._gh(["api", endpoint])
        if isinstance(result, Err):
            if _is_not_found(result.error):
                return Ok(False)
            return Err(self._failed(f"gh api failed: {endpoint}", result.error))

        try:
            obj: object = json.loads(result.value)
        except json.JSONDecodeError as e:
            return Err(
                RemoteStateError(message=f"gh api returned invalid JSON: {e}", hint=endpoint)
            )

        data = as_str_dict(obj)
        if data is None:
            return Err(RemoteStateError(message=f"unexpected tag payload: {endpoint}"))
        return Ok(get_str(data, "sha") == sha)

    def release_exists(self, tag: str) -> Result[bool, RemoteStateError]:
        result = self._gh(["release", "view", tag, "--repo", self.repo, "--json", "tagName"])
        if isinstance(result, Err):
            if _is_not_found(result.error):
                return Ok(False)
            return Err(self._failed(f"failed to query release {tag}", result.error))
        return Ok(True)

    def create_release(
        self, tag: str, *, name: str, description: str
    ) -> Result[None, RemoteStateError]:
        result = self._gh(
            [
                "release",
                "create",
                tag,
                "--repo",
                self.repo,
                "--title",
                name,
                "--notes",
                description,
                "--verify-tag",
            ]
        )
        if isinstance(result, Err):
            return Err(self._failed(f"failed to create release {tag}", result.error))
        return Ok(None)

    def upload_asset(self, tag: str, path: Path) -> Result[None, RemoteStateError]:
        result = self._gh(
            ["release", "upload", tag, str(path), "--repo", self.repo],
            timeout=GH_UPLOAD_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return Err(self._failed(f"failed to upload {path.name} to release {tag}", result.error))
        return Ok(None)

    def delete_release(self, tag: str) -> Result[None, RemoteStateError]:
        # Deletes the release entry only; the tag itself stays on the remote.
        result = self._gh(["release", "delete", tag, "--repo", self.repo, "--yes"])
        if isinstance(result, Err):
            return Err(self._failed(f"failed to delete release {tag}", result.error))
        return Ok(None)

    def _gh(
        self, args: list[str], *, timeout: float = GH_TIMEOUT_SECONDS
    ) -> Result[str, ProcessError]:
        return run_process(["gh", *args], cwd=self._root, timeout=timeout)

    @staticmethod
    def _failed(message: str, error: ProcessError) -> RemoteStateError:
        return RemoteStateError(message=message, hint=error.detail)
