from __future__ import annotations

import re
from pathlib import Path

from relgate.core.result import Err, Ok, Result
from relgate.release.errors import ValidationError


_RELEASE_HEADER_RE = re.compile(r"^## Release\s+(\d\S*)")


def latest_changelog_version(text: str) -> str | None:
    """Version token of the topmost ``## Release <version>`` header, if any."""
    for line in text.splitlines():
        m = _RELEASE_HEADER_RE.match(line)
        if m is not None:
            return m.group(1)
    return None


def check_changelog(*, path: Path, version: str) -> Result[None, ValidationError]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            ValidationError(
                message=f"cannot read changelog {path.name}: {e}",
                hint=f"Add a '## Release {version}' entry to {path.name}",
            )
        )

    found = latest_changelog_version(text)
    if found is None:
        return Err(
            ValidationError(
                message=f"no '## Release' entry in {path.name}; release version is {version}",
                hint=f"Add a '## Release {version}' entry to {path.name}",
            )
        )

    if found != version:
        return Err(
            ValidationError(
                message=(
                    f'Latest changelog entry "{found}" does not match '
                    f"the release version {version}"
                ),
                hint=f"Update the top entry of {path.name} to '## Release {version}'",
            )
        )

    return Ok(None)
