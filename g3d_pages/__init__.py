"""Build tasks for the G3D library and its documentation website.

This package exposes the CLI entry points used by ``g3d-pages`` to bundle the
library, fetch the Markdown sources, and render the static homepage.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from g3d_pages import main
>>> main()  # doctest: +SKIP
>>> from g3d_pages import app
>>> isinstance(app.name[0], str)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
