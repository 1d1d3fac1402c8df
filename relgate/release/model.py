from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


VERSION_TAG_PATTERN = "v*"
LATEST_RELEASE_TAG = "latest_release"
BUILD_STAMP = ".relgate-built"


@dataclass(frozen=True, slots=True)
class TagRef:
    """An annotated tag resolved to its tag object and the commit it points at."""

    name: str
    object_sha: str
    commit_sha: str

    @property
    def short_sha(self) -> str:
        return self.commit_sha[:8]


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """Everything resolved once per invocation, before any gate runs."""

    version: str
    tag: TagRef
    latest_release: TagRef
    release_dir: Path

    @property
    def build_stamp(self) -> Path:
        """Written only once the whole build gate has passed; holds the version."""
        return self.release_dir / BUILD_STAMP
