"""Load and validate the build configuration for the G3D website tasks.

This subpackage parses the optional ``config/build.yaml`` file, applies
defaults matching the repository layout (``doc/``, ``website/homepage-src``,
``website/homepage``), and produces frozen dataclasses (:class:`BuildConfig`,
:class:`HomepageSettings`, :class:`LibrarySettings`, :class:`FetchSettings`)
that the task registry and generators consume. The primary entry point is
:func:`load_build_config`.

Examples
--------
>>> from g3d_pages.config import load_build_config
>>> config = load_build_config()
>>> config.library.umd_name
'G3D'
"""

from .loader import load_build_config
from .models import (
    BuildConfig,
    BuildConfigError,
    FetchSettings,
    HomepageSettings,
    LibrarySettings,
    LoaderRule,
)

__all__ = [
    "BuildConfig",
    "BuildConfigError",
    "FetchSettings",
    "HomepageSettings",
    "LibrarySettings",
    "LoaderRule",
    "load_build_config",
]
