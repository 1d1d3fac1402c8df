"""Narrowing helpers for untyped payloads (release.toml tables, gh JSON)."""

from __future__ import annotations

from collections.abc import Mapping

StrDict = dict[str, object]


def as_str_dict(obj: object) -> StrDict | None:
    """``obj`` as a string-keyed dict, or None if it is anything else."""
    if isinstance(obj, dict) and all(isinstance(key, str) for key in obj):
        return obj  # type: ignore[return-value]
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Stripped string at ``key``; None when missing, not a string, or blank."""
    match table.get(key):
        case str(value) if value.strip():
            return value.strip()
        case _:
            return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))
