from __future__ import annotations

from relgate.cli.commands._helpers import exit_on_error
from relgate.cli.context import build_context
from relgate.release.service import build_release, publish_release


def build() -> None:
    """Clone the latest v* tag, check the changelog, build, test and verify the artifact."""
    ctx = build_context()
    result = build_release(
        repo_root=ctx.repo_root,
        config=ctx.config,
        vcs=ctx.vcs,
        build=ctx.build_system,
        console=ctx.console,
    )
    exit_on_error(result, ctx)


def publish() -> None:
    """Check tags and remote state, then publish images and GitHub releases."""
    ctx = build_context()
    result = publish_release(
        repo_root=ctx.repo_root,
        config=ctx.config,
        vcs=ctx.vcs,
        build=ctx.build_system,
        host=ctx.host,
        console=ctx.console,
    )
    exit_on_error(result, ctx)
