"""Load the build configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_fetch_settings,
    _build_homepage_settings,
    _build_library_settings,
    _require_mapping,
)
from .models import BuildConfig, BuildConfigError


def load_build_config(path: Path | None = None, *, root: Path | None = None) -> BuildConfig:
    """Load the YAML file describing where sources live and which tools to run.

    Parameters
    ----------
    path : Path or None, optional
        Filesystem path to the build configuration (for example,
        ``config/build.yaml``). When ``None`` every setting takes its default.
    root : Path or None, optional
        Project root that relative paths are resolved against. Defaults to the
        current working directory.

    Returns
    -------
    BuildConfig
        Parsed configuration with homepage, library, and fetch settings.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    BuildConfigError
        If the top-level YAML structure or one of its sections has the wrong
        shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from g3d_pages.config import load_build_config
    >>> config = load_build_config(Path("config/build.yaml"))  # doctest: +SKIP
    >>> config.homepage.output_dir  # doctest: +SKIP
    PosixPath('website/homepage')
    """
    project_root = root if root is not None else Path.cwd()
    if path is None:
        return BuildConfig(root=project_root)
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise BuildConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    docs_root = raw.get("docs_root", "doc")
    return BuildConfig(
        root=project_root,
        docs_root=Path(docs_root),
        homepage=_build_homepage_settings(
            _require_mapping(raw.get("homepage"), "homepage")
        ),
        library=_build_library_settings(
            _require_mapping(raw.get("library"), "library")
        ),
        fetch=_build_fetch_settings(_require_mapping(raw.get("fetch"), "fetch")),
    )


__all__ = ["load_build_config"]
