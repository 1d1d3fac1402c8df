from __future__ import annotations

from pathlib import Path

from relgate.core.config import ReleaseConfig
from relgate.core.result import Err, Ok, Result
from relgate.release.errors import ResolutionError
from relgate.release.model import LATEST_RELEASE_TAG, VERSION_TAG_PATTERN, ReleaseContext, TagRef
from relgate.release.ports import VersionControl


def version_from_tag(tag: str) -> Result[str, ResolutionError]:
    """Strip the leading ``v``; nothing else about the tag is altered."""
    if not tag.startswith("v") or len(tag) < 2:
        return Err(
            ResolutionError(
                message=f"invalid release tag: {tag}",
                hint=f"Release tags must match {VERSION_TAG_PATTERN}, e.g. v1.2.0",
            )
        )
    return Ok(tag[1:])


def resolve_tag(vcs: VersionControl, name: str) -> Result[TagRef, ResolutionError]:
    obj = vcs.object_sha(name)
    if isinstance(obj, Err):
        return Err(
            ResolutionError(
                message=f"cannot resolve tag {name}: {obj.error.message}",
                hint=f"Check that the tag exists: git tag -l {name}",
            )
        )

    commit = vcs.commit_of(name)
    if isinstance(commit, Err):
        return Err(
            ResolutionError(
                message=f"cannot resolve commit for tag {name}: {commit.error.message}",
            )
        )

    return Ok(TagRef(name=name, object_sha=obj.value, commit_sha=commit.value))


def resolve_release(
    *,
    vcs: VersionControl,
    repo_root: Path,
    config: ReleaseConfig,
) -> Result[ReleaseContext, ResolutionError]:
    """Resolve the version, both tags and the release directory.

    Runs before either gate; nothing here mutates the repository.
    """
    latest = vcs.describe_latest_tag(VERSION_TAG_PATTERN)
    if isinstance(latest, Err):
        return Err(
            ResolutionError(
                message=f"no annotated tag matching {VERSION_TAG_PATTERN}: {latest.error.message}",
                hint="Create one with: git tag -a vX.Y.Z",
            )
        )

    version = version_from_tag(latest.value)
    if isinstance(version, Err):
        return version

    tag = resolve_tag(vcs, latest.value)
    if isinstance(tag, Err):
        return tag

    floating = resolve_tag(vcs, LATEST_RELEASE_TAG)
    if isinstance(floating, Err):
        return floating

    return Ok(
        ReleaseContext(
            version=version.value,
            tag=tag.value,
            latest_release=floating.value,
            release_dir=repo_root / config.releases_dir / latest.value,
        )
    )
