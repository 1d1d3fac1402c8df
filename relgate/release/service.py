from __future__ import annotations

from pathlib import Path

from relgate.core.config import ReleaseConfig
from relgate.core.result import Err, Ok, Result
from relgate.output.console import ConsoleProtocol, Style
from relgate.release.errors import BuildError, GateError
from relgate.release.gates import GateStep, build_gate_steps, publish_gate_steps, run_gate
from relgate.release.model import LATEST_RELEASE_TAG, ReleaseContext
from relgate.release.ports import BuildSystem, ReleaseHost, VersionControl
from relgate.release.resolve import resolve_release


def _announce(console: ConsoleProtocol):
    def on_step(step: GateStep) -> None:
        console.header(step.name)

    return on_step


def warn_if_off_mainline(
    *,
    ctx: ReleaseContext,
    config: ReleaseConfig,
    vcs: VersionControl,
    console: ConsoleProtocol,
) -> None:
    """Warn when the release tag is not reachable from the main branch.

    Advisory only: the build still proceeds.
    """
    reachable = vcs.is_ancestor(ctx.tag.commit_sha, config.main_branch)
    match reachable:
        case Ok(True):
            return
        case Ok(False):
            console.warning(f"tag {ctx.tag.name} is not on {config.main_branch}")
        case Err(e):
            console.warning(
                f"could not check that {ctx.tag.name} is on {config.main_branch}: {e.message}"
            )


def build_release(
    *,
    repo_root: Path,
    config: ReleaseConfig,
    vcs: VersionControl,
    build: BuildSystem,
    console: ConsoleProtocol,
) -> Result[ReleaseContext, GateError]:
    """Resolve the release and run the build gate.

    On success the release directory holds a tested build whose artifact
    reports the release version. On failure the directory is left on disk.
    """
    resolved = resolve_release(vcs=vcs, repo_root=repo_root, config=config)
    if isinstance(resolved, Err):
        return resolved
    ctx = resolved.value

    warn_if_off_mainline(ctx=ctx, config=config, vcs=vcs, console=console)

    steps = build_gate_steps(ctx=ctx, config=config, vcs=vcs, build=build)
    gate = run_gate(steps, on_step=_announce(console))
    if isinstance(gate, Err):
        return gate

    try:
        ctx.build_stamp.write_text(f"{ctx.version}\n", encoding="utf-8")
    except OSError as e:
        return Err(BuildError(message=f"cannot record build of {ctx.version}: {e}"))

    console.success(f"Release {ctx.version} built")
    console.print(str(ctx.release_dir), Style.DIM)
    return Ok(ctx)


def publish_release(
    *,
    repo_root: Path,
    config: ReleaseConfig,
    vcs: VersionControl,
    build: BuildSystem,
    host: ReleaseHost,
    console: ConsoleProtocol,
) -> Result[ReleaseContext, GateError]:
    """Run the publish gate, then publish images and both release entries.

    Nothing is mutated until every publish-gate check has passed.
    """
    resolved = resolve_release(vcs=vcs, repo_root=repo_root, config=config)
    if isinstance(resolved, Err):
        return resolved
    ctx = resolved.value

    steps = publish_gate_steps(ctx=ctx, config=config, host=host)
    gate = run_gate(steps, on_step=_announce(console))
    if isinstance(gate, Err):
        return gate

    console.header("Publishing release")
    images = build.publish(ctx.release_dir, ctx.version)
    if isinstance(images, Err):
        return images

    published = _publish_entry(
        ctx=ctx,
        config=config,
        host=host,
        tag=ctx.tag.name,
        name=f"{config.release_name} {ctx.version}",
    )
    if isinstance(published, Err):
        return published

    console.header(f"Publishing {LATEST_RELEASE_TAG}")
    existing = host.release_exists(LATEST_RELEASE_TAG)
    if isinstance(existing, Err):
        return existing
    if existing.value:
        deleted = host.delete_release(LATEST_RELEASE_TAG)
        if isinstance(deleted, Err):
            return deleted

    latest = _publish_entry(
        ctx=ctx,
        config=config,
        host=host,
        tag=LATEST_RELEASE_TAG,
        name=f"{config.release_name} latest ({ctx.version})",
    )
    if isinstance(latest, Err):
        return latest

    console.success(f"Release {ctx.version} published")
    return Ok(ctx)


def _publish_entry(
    *,
    ctx: ReleaseContext,
    config: ReleaseConfig,
    host: ReleaseHost,
    tag: str,
    name: str,
) -> Result[None, GateError]:
    created = host.create_release(tag, name=name, description=config.release_description)
    if isinstance(created, Err):
        return created
    return host.upload_asset(tag, ctx.release_dir / config.artifact)
