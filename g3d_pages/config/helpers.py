"""Utility helpers shared by the build configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import (
    BuildConfigError,
    FetchSettings,
    HomepageSettings,
    LibrarySettings,
    LoaderRule,
)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_path(value: object | None) -> Path | None:
    """Return a Path for non-empty values, otherwise None."""
    text = _optional_str(value)
    return Path(text) if text else None


def _require_mapping(value: object, section: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as empty."""
    match value:
        case None:
            return {}
        case dict():
            return value
        case _:
            msg = f"Build configuration section '{section}' must be a mapping."
            raise BuildConfigError(msg)


def _normalize_command(value: object, section: str) -> tuple[str, ...]:
    """Normalize a command given as a string or a list into an argv tuple."""
    match value:
        case str() as text:
            parts = tuple(text.split())
        case list() | tuple() as items:
            parts = tuple(str(item) for item in items if str(item).strip())
        case _:
            msg = f"'{section}' must be a command string or a list of arguments."
            raise BuildConfigError(msg)
    if not parts:
        msg = f"'{section}' must not be empty."
        raise BuildConfigError(msg)
    return parts


def _build_loaders(entries: object) -> tuple[LoaderRule, ...]:
    """Build bundler loader rules from a list of ``{test, use}`` mappings."""
    if not isinstance(entries, list):
        msg = "'library.loaders' must be a list of {test, use} mappings."
        raise BuildConfigError(msg)
    rules: list[LoaderRule] = []
    for entry in entries:
        match entry:
            case {"test": str() as test, "use": str() as use}:
                rules.append(LoaderRule(test=test, use=use))
            case _:
                msg = f"Invalid loader rule {entry!r}; expected 'test' and 'use'."
                raise BuildConfigError(msg)
    return tuple(rules)


def _build_homepage_settings(payload: typ.Mapping[str, typ.Any]) -> HomepageSettings:
    """Build HomepageSettings, falling back to defaults for absent keys."""
    base = HomepageSettings()
    command = payload.get("stylesheet_command")
    return HomepageSettings(
        source_dir=Path(payload.get("source_dir", base.source_dir)),
        output_dir=Path(payload.get("output_dir", base.output_dir)),
        index_file=Path(payload.get("index_file", base.index_file)),
        templates_dir=_optional_path(payload.get("templates_dir")),
        stylesheet=Path(payload.get("stylesheet", base.stylesheet)),
        assets_dir=Path(payload.get("assets_dir", base.assets_dir)),
        stylesheet_command=(
            _normalize_command(command, "homepage.stylesheet_command")
            if command is not None
            else base.stylesheet_command
        ),
        pygments_style=str(payload.get("pygments_style", base.pygments_style)),
    )


def _build_library_settings(payload: typ.Mapping[str, typ.Any]) -> LibrarySettings:
    """Build LibrarySettings, falling back to defaults for absent keys."""
    base = LibrarySettings()
    port = payload.get("port", base.port)
    if not isinstance(port, int) or isinstance(port, bool):
        msg = f"'library.port' must be an integer, got {port!r}."
        raise BuildConfigError(msg)
    command = payload.get("command")
    loaders = payload.get("loaders")
    return LibrarySettings(
        umd_name=str(payload.get("umd_name", base.umd_name)),
        entry=str(payload.get("entry", base.entry)),
        demo=str(payload.get("demo", base.demo)),
        port=port,
        dev_cors=bool(payload.get("dev_cors", base.dev_cors)),
        test_entry_pattern=str(
            payload.get("test_entry_pattern", base.test_entry_pattern)
        ),
        provide_pattern=str(payload.get("provide_pattern", base.provide_pattern)),
        loaders=_build_loaders(loaders) if loaders is not None else base.loaders,
        command=(
            _normalize_command(command, "library.command")
            if command is not None
            else base.command
        ),
        options_file=Path(payload.get("options_file", base.options_file)),
    )


def _build_fetch_settings(payload: typ.Mapping[str, typ.Any]) -> FetchSettings:
    """Build FetchSettings, falling back to defaults for absent keys."""
    base = FetchSettings()
    return FetchSettings(
        repo=_optional_str(payload.get("repo")),
        branch=str(payload.get("branch", base.branch)),
        doc_path=str(payload.get("doc_path", base.doc_path)),
        source_url=_optional_str(payload.get("source_url")),
        timeout=int(payload.get("timeout", base.timeout)),
    )


def _build_repo_url(repo: str, ref: str, path: str) -> str:
    """Build the raw GitHub URL for a file at the given ref and path."""
    normalized = path.lstrip("/")
    ref_segment = ref if ref.startswith("refs/") else f"refs/heads/{ref}"
    return f"https://raw.githubusercontent.com/{repo}/{ref_segment}/{normalized}"


__all__ = [
    "_build_fetch_settings",
    "_build_homepage_settings",
    "_build_library_settings",
    "_build_repo_url",
    "_normalize_command",
    "_optional_path",
    "_optional_str",
    "_require_mapping",
]
