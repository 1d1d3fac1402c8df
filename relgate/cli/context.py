from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relgate.core.config import ReleaseConfig, load_config
from relgate.core.errors import ErrorCode
from relgate.core.result import Err
from relgate.git.repository import Repository
from relgate.output.console import ConsoleProtocol, RichConsole
from relgate.release.ports import BuildSystem, ReleaseHost, VersionControl
from relgate.services.github import GithubReleaseHost
from relgate.services.make import MakeBuildSystem


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_root: Path
    config: ReleaseConfig
    console: ConsoleProtocol
    vcs: VersionControl
    build_system: BuildSystem
    host: ReleaseHost


def build_context() -> CLIContext:
    console = RichConsole()
    repo_root = Path.cwd().resolve()

    config_result = load_config(repo_root, os.environ)
    if isinstance(config_result, Err):
        error = config_result.error
        console.error(error.message)
        if error.hint:
            console.hint(f"hint: {error.hint}")
        raise typer.Exit(code=int(ErrorCode.RELEASE_FAILED))
    config = config_result.value

    return CLIContext(
        repo_root=repo_root,
        config=config,
        console=console,
        vcs=Repository(repo_root),
        build_system=MakeBuildSystem(config=config),
        host=GithubReleaseHost(config=config, workspace_root=repo_root),
    )
