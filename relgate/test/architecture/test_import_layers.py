from __future__ import annotations

from ._utils import (
    iter_python_files,
    iter_source_files,
    matches_prefix,
    package_root,
    parse_imports,
)


def _violations(subpackage: str, forbidden: tuple[str, ...]) -> list[str]:
    root = package_root()
    offenders: list[str] = []
    for file_path in iter_python_files(root / subpackage):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if any(matches_prefix(item.module, prefix) for prefix in forbidden):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")
    return offenders


def test_release_rules_do_not_touch_adapters_or_cli() -> None:
    offenders = _violations(
        "release", ("relgate.services", "relgate.platform", "relgate.cli", "typer", "rich")
    )
    assert not offenders, "release -> adapter dependency violations:\n" + "\n".join(offenders)


def test_services_do_not_import_cli_modules() -> None:
    offenders = _violations("services", ("relgate.cli", "typer"))
    assert not offenders, "services -> cli dependency violations:\n" + "\n".join(offenders)


def test_direct_rich_imports_are_limited_to_console() -> None:
    root = package_root()
    offenders: list[str] = []

    for file_path in iter_source_files():
        rel = file_path.relative_to(root)
        if rel.as_posix() == "output/console.py":
            continue
        for item in parse_imports(file_path):
            if matches_prefix(item.module, "rich"):
                offenders.append(f"{rel}:{item.line}: direct rich import '{item.module}'")

    assert not offenders, "Direct rich usage policy violations:\n" + "\n".join(offenders)
