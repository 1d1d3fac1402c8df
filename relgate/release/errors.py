"""Error taxonomy for release resolution and gating.

Each error carries a human-readable message naming the values involved and an
optional hint. Conflict and remote-state errors may also carry the exact
command the operator should run to fix things.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ResolutionError:
    """The release version or one of its tags cannot be determined."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ConflictError:
    """Proceeding would overwrite existing state."""

    message: str
    hint: str | None = None
    command: str | None = None


@dataclass(frozen=True, slots=True)
class ValidationError:
    """The declared version disagrees with an independent source of truth."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class BuildError:
    """Checkout, compilation, tests or image publishing failed."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class RemoteStateError:
    """State expected on the release host is absent, or the host call failed."""

    message: str
    hint: str | None = None
    command: str | None = None


GateError = ResolutionError | ConflictError | ValidationError | BuildError | RemoteStateError
