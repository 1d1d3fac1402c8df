"""Typed release configuration.

Configuration is resolved once, at the CLI boundary, and passed into the
release services as a frozen ReleaseConfig. Sources, lowest priority first:

1. built-in defaults
2. an optional ``release.toml`` at the repository root (``[release]`` table)
3. environment variables (SUDO, GITHUB_USER, DOCKERHUB_USER, ...)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ReleaseConfig",
    "load_config",
]

CONFIG_FILE_NAME = "release.toml"

DEFAULT_SUDO = "sudo -E"
DEFAULT_GITHUB_USER = "weaveworks"
DEFAULT_GITHUB_REPO = "weave"
DEFAULT_DOCKERHUB_USER = "weaveworks"
DEFAULT_RELEASE_NAME = "Weave"
DEFAULT_RELEASE_DESCRIPTION = "Weaving Docker containers into applications"
DEFAULT_MAIN_BRANCH = "master"

# Environment variable -> ReleaseConfig field. SUDO is handled separately
# because an explicitly empty value is meaningful there.
_ENV_FIELDS: dict[str, str] = {
    "GITHUB_USER": "github_user",
    "GITHUB_REPO": "github_repo",
    "DOCKERHUB_USER": "dockerhub_user",
    "RELEASE_NAME": "release_name",
    "RELEASE_DESCRIPTION": "release_description",
    "MAIN_BRANCH": "main_branch",
}

_FILE_FIELDS: tuple[str, ...] = (
    "sudo",
    "github_user",
    "github_repo",
    "dockerhub_user",
    "release_name",
    "release_description",
    "main_branch",
    "version_variable",
    "artifact",
    "changelog",
    "releases_dir",
)


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when release.toml cannot be loaded or parsed."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Release settings shared by the build and publish commands.

    Attributes:
        sudo: Privilege-escalation command handed to make as ``SUDO``.
        github_user: Owner of the repository on the release host.
        github_repo: Repository name on the release host.
        dockerhub_user: Registry namespace handed to make as ``DOCKERHUB_USER``.
        release_name: Prefix of the created release titles.
        release_description: Body of the created release entries.
        main_branch: Branch the release tag is expected to be reachable from.
        version_variable: Make variable that receives the version.
        artifact: Built artifact, relative to the release directory.
        changelog: Changelog file, relative to the release directory.
        releases_dir: Parent of per-tag release directories.
    """

    sudo: str = DEFAULT_SUDO
    github_user: str = DEFAULT_GITHUB_USER
    github_repo: str = DEFAULT_GITHUB_REPO
    dockerhub_user: str = DEFAULT_DOCKERHUB_USER
    release_name: str = DEFAULT_RELEASE_NAME
    release_description: str = DEFAULT_RELEASE_DESCRIPTION
    main_branch: str = DEFAULT_MAIN_BRANCH
    version_variable: str = "WEAVE_VERSION"
    artifact: str = "weave"
    changelog: str = "CHANGELOG.md"
    releases_dir: str = "releases"

    @property
    def repo_slug(self) -> str:
        return f"{self.github_user}/{self.github_repo}"

    @property
    def push_url(self) -> str:
        return f"git@github.com:{self.repo_slug}"

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create a config from the ``[release]`` table of release.toml."""
        release: StrDict = get_table(data, "release") or {}
        overrides: dict[str, str] = {}
        for name in _FILE_FIELDS:
            raw = release.get(name)
            if raw is None:
                continue
            if not isinstance(raw, str):
                raise TypeError(f"release.{name} must be a string")
            # sudo may legitimately be empty; every other field falls back to its default.
            value = raw.strip() if name == "sudo" else get_str(release, name)
            if value is not None:
                overrides[name] = value
        return replace(cls(), **overrides)

    def with_environment(self, environ: Mapping[str, str]) -> ReleaseConfig:
        """Apply environment overrides.

        Empty values fall back to the current setting, except SUDO where an
        empty value disables privilege escalation.
        """
        overrides: dict[str, str] = {}
        if "SUDO" in environ:
            overrides["sudo"] = environ["SUDO"].strip()
        for env_name, field_name in _ENV_FIELDS.items():
            value = environ.get(env_name, "").strip()
            if value:
                overrides[field_name] = value
        return replace(self, **overrides)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(repo_root: Path, environ: Mapping[str, str]) -> Result[ReleaseConfig, ConfigError]:
    """Resolve the release configuration for a repository.

    Args:
        repo_root: Repository root; ``release.toml`` is optional there.
        environ: Environment mapping (usually ``os.environ``).

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) if release.toml is invalid.
    """
    config = ReleaseConfig()

    path = repo_root / CONFIG_FILE_NAME
    if path.is_file():
        parsed = _parse_toml(path)
        if isinstance(parsed, Err):
            return parsed
        try:
            config = ReleaseConfig.from_dict(parsed.value)
        except (TypeError, ValueError) as e:
            return Err(
                ConfigError(
                    f"Invalid config structure: {e}",
                    path=path,
                    hint="Every [release] value must be a string.",
                )
            )

    return Ok(config.with_environment(environ))
