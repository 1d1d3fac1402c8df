"""Release gates: ordered, named checks with a fail-fast driver.

A gate is a list of ``GateStep``. ``run_gate`` runs them in order and
returns the first failure unchanged; it never terminates the process.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from relgate.core.config import ReleaseConfig
from relgate.core.result import Err, Ok, Result
from relgate.release.changelog import check_changelog
from relgate.release.errors import (
    BuildError,
    ConflictError,
    GateError,
    RemoteStateError,
    ValidationError,
)
from relgate.release.model import LATEST_RELEASE_TAG, ReleaseContext
from relgate.release.ports import BuildSystem, ReleaseHost, VersionControl


@dataclass(frozen=True, slots=True)
class GateStep:
    name: str
    check: Callable[[], Result[None, GateError]]


def run_gate(
    steps: Sequence[GateStep],
    *,
    on_step: Callable[[GateStep], None] | None = None,
) -> Result[None, GateError]:
    for step in steps:
        if on_step is not None:
            on_step(step)
        result = step.check()
        if isinstance(result, Err):
            return result
    return Ok(None)


# -----------------------------------------------------------------------------
# Build gate
# -----------------------------------------------------------------------------


def build_gate_steps(
    *,
    ctx: ReleaseContext,
    config: ReleaseConfig,
    vcs: VersionControl,
    build: BuildSystem,
) -> list[GateStep]:
    def clone() -> Result[None, GateError]:
        if ctx.release_dir.exists():
            return Err(
                ConflictError(
                    message=f"Release directory {ctx.release_dir} already exists",
                    command=f"rm -rf {ctx.release_dir}",
                )
            )
        ctx.release_dir.parent.mkdir(parents=True, exist_ok=True)
        cloned = vcs.clone_at(ctx.tag.name, ctx.release_dir)
        if isinstance(cloned, Err):
            return Err(
                BuildError(
                    message=f"failed to clone {ctx.tag.name} into {ctx.release_dir}",
                    hint=cloned.error.message,
                )
            )
        return Ok(None)

    def changelog() -> Result[None, GateError]:
        return check_changelog(path=ctx.release_dir / config.changelog, version=ctx.version)

    def build_and_test() -> Result[None, GateError]:
        built = build.build(ctx.release_dir, ctx.version)
        if isinstance(built, Err):
            return built
        return build.run_tests(ctx.release_dir, ctx.version)

    def artifact_version() -> Result[None, GateError]:
        reported = build.artifact_version(ctx.release_dir)
        if isinstance(reported, Err):
            return reported
        if reported.value != ctx.version:
            return Err(
                ValidationError(
                    message=(
                        f"{config.artifact} reports version {reported.value}, "
                        f"expected {ctx.version}"
                    ),
                    hint=f"Check that {config.version_variable} is honoured by the build",
                )
            )
        return Ok(None)

    return [
        GateStep(f"Clone repo at {ctx.tag.name} for version {ctx.version}", clone),
        GateStep("Check changelog", changelog),
        GateStep("Build and test", build_and_test),
        GateStep("Check artifact version", artifact_version),
    ]


# -----------------------------------------------------------------------------
# Publish gate
# -----------------------------------------------------------------------------


def publish_gate_steps(
    *,
    ctx: ReleaseContext,
    config: ReleaseConfig,
    host: ReleaseHost,
) -> list[GateStep]:
    tag = ctx.tag.name

    def floating_tag_current() -> Result[None, GateError]:
        if ctx.tag.commit_sha != ctx.latest_release.commit_sha:
            return Err(
                ConflictError(
                    message=(
                        f"The tag {LATEST_RELEASE_TAG} ({ctx.latest_release.short_sha}) does not "
                        f"point to the same commit as {tag} ({ctx.tag.short_sha})"
                    ),
                    command=f"git tag -af {LATEST_RELEASE_TAG} {tag}",
                )
            )
        return Ok(None)

    def release_tag_pushed() -> Result[None, GateError]:
        exists = host.tag_exists_remote(ctx.tag.object_sha)
        if isinstance(exists, Err):
            return exists
        if not exists.value:
            return Err(
                RemoteStateError(
                    message=(
                        f"Tag {tag} is not on {config.repo_slug}, or differs from the local tag"
                    ),
                    command=f"git push {config.push_url} {tag}",
                )
            )
        return Ok(None)

    def floating_tag_pushed() -> Result[None, GateError]:
        exists = host.tag_exists_remote(ctx.latest_release.object_sha)
        if isinstance(exists, Err):
            return exists
        if not exists.value:
            return Err(
                RemoteStateError(
                    message=(
                        f"Tag {LATEST_RELEASE_TAG} is not on {config.repo_slug}, "
                        "or differs from the local tag"
                    ),
                    command=(
                        f"git tag -af {LATEST_RELEASE_TAG} {tag} && "
                        f"git push -f {config.push_url} {LATEST_RELEASE_TAG}"
                    ),
                )
            )
        return Ok(None)

    def not_yet_released() -> Result[None, GateError]:
        exists = host.release_exists(tag)
        if isinstance(exists, Err):
            return exists
        if exists.value:
            return Err(
                ConflictError(
                    message=f"Release {tag} already exists on {config.repo_slug}",
                    hint="Published releases are immutable; tag a new version instead",
                )
            )
        return Ok(None)

    def artifact_built() -> Result[None, GateError]:
        artifact = ctx.release_dir / config.artifact
        if not artifact.is_file():
            return Err(
                ValidationError(
                    message=f"built artifact not found: {artifact}",
                    hint="Run: relgate build",
                )
            )
        try:
            stamped = ctx.build_stamp.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError):
            stamped = None
        if stamped != ctx.version:
            return Err(
                ValidationError(
                    message=f"{ctx.release_dir} did not pass the build checks for {ctx.version}",
                    hint=f"Rebuild with: rm -rf {ctx.release_dir} && relgate build",
                )
            )
        return Ok(None)

    return [
        GateStep(f"Check {LATEST_RELEASE_TAG} matches {tag}", floating_tag_current),
        GateStep(f"Check {tag} is pushed", release_tag_pushed),
        GateStep(f"Check {LATEST_RELEASE_TAG} is pushed", floating_tag_pushed),
        GateStep(f"Check {tag} is not yet released", not_yet_released),
        GateStep("Check built artifact", artifact_built),
    ]
