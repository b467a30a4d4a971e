"""G3D homepage landing page rendering.

This module turns the ``index.jinja`` template into the static
``website/homepage/index.html`` artefact. The landing page receives
``root`` (``"./"``) like the original page template, plus the parsed
Documentation Index so the template can link to every scope.

Typical usage mirrors the ``homepage-build`` task:

>>> from pathlib import Path
>>> from g3d_pages.homepage import HomePageBuilder
>>> builder = HomePageBuilder(Path("website/homepage"))  # doctest: +SKIP
>>> builder.run()  # doctest: +SKIP
PosixPath('website/homepage/index.html')

Templates are read from ``g3d_pages/templates`` unless a custom directory is
provided. Side effects include reading template files and writing the
rendered HTML to disk.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ._constants import INDEX_PAGE_ROOT, INDEX_TEMPLATE, PACKAGE_TEMPLATES_DIR
from .docs_index import scope_output_dir

if typ.TYPE_CHECKING:
    from .docs_index import DocIndex


class HomePageBuilder:
    """Render the landing page of the documentation website."""

    def __init__(
        self,
        output_dir: Path,
        *,
        index: DocIndex | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        output_dir : Path
            Homepage output root; ``index.html`` is written directly inside it.
        index : DocIndex, optional
            Parsed Documentation Index exposed to the template as ``scopes``.
        templates_dir : Path, optional
            Directory containing ``index.jinja``. Defaults to the package
            templates.
        """
        self.output_dir = output_dir
        self.index = index
        self.templates_dir = templates_dir or PACKAGE_TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template(INDEX_TEMPLATE)

    def run(self) -> Path:
        """Render and write ``index.html``, returning the output path."""
        output_path = self.output_dir / "index.html"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        context = {"root": INDEX_PAGE_ROOT, "scopes": self._scope_links()}
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        output_path.write_text(html, encoding="utf-8")
        return output_path

    def _scope_links(self) -> list[dict[str, str]]:
        """Return one link per scope pointing at its first document."""
        if self.index is None:
            return []
        links: list[dict[str, str]] = []
        for scope in self.index.scopes:
            first = next(self.index.entries(scope), None)
            if first is None:
                continue
            links.append(
                {
                    "label": scope.replace("-", " ").title(),
                    "href": f"{INDEX_PAGE_ROOT}{first.output_path.as_posix()}",
                    "scope_dir": scope_output_dir(scope).as_posix(),
                }
            )
        return links


__all__ = ["HomePageBuilder"]
