"""Render every document listed in the Documentation Index into HTML pages.

:class:`DocTreeRenderer` walks each scope of a
:class:`~g3d_pages.docs_index.DocIndex` depth-first. For every leaf it reads
``doc/<scope>/<id>.md``, converts the Markdown with
:class:`~g3d_pages.generator.renderer.HtmlContentRenderer`, renders the
``doc.jinja`` template with ``index`` (the scope's key-to-node mapping),
``content`` and ``root`` in the context, and writes
``<output>/<scope dir>/<id>.html`` where the scope's hyphens become directory
separators. Sidebar links to sibling documents are page-relative, since every
document of a scope lands in the same directory.

A missing or empty source stops the build with :class:`DocSourceError`;
pages written before the failure stay on disk.

Example
-------
>>> from pathlib import Path
>>> from g3d_pages.docs_index import load_doc_index
>>> from g3d_pages.generator import DocTreeRenderer
>>> index = load_doc_index(Path("website/homepage-src/doc.yaml"))  # doctest: +SKIP
>>> DocTreeRenderer(index, output_dir=Path("website/homepage")).run()  # doctest: +SKIP
[PosixPath('website/homepage/guide/intro.html'), ...]
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from g3d_pages._constants import (
    DOC_PAGE_ROOT,
    DOC_TEMPLATE,
    FETCH_HINT,
    PACKAGE_TEMPLATES_DIR,
)
from g3d_pages.config import BuildConfigError
from g3d_pages.docs_index import (
    DocEntry,
    DocIndex,
    DocSection,
    doc_source_path,
    scope_output_dir,
    walk_section,
)
from g3d_pages.generator.link_rewriter import DocLinkExtension
from g3d_pages.generator.models import DocPage
from g3d_pages.generator.renderer import HtmlContentRenderer


class DocSourceError(BuildConfigError):
    """Raised when a document named in the index has no usable Markdown source."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Read source file '{path}' failed, {FETCH_HINT}.")


class DocTreeRenderer:
    """Emit one HTML page per document reachable in the Documentation Index."""

    def __init__(
        self,
        index: DocIndex,
        *,
        output_dir: Path,
        docs_root: Path = Path("doc"),
        templates_dir: Path | None = None,
        pygments_style: str = "monokai",
    ) -> None:
        """Initialize the renderer and load the document template.

        Parameters
        ----------
        index : DocIndex
            Validated Documentation Index.
        output_dir : Path
            Homepage output root; scope directories are created beneath it.
        docs_root : Path, optional
            Directory holding ``<scope>/<id>.md`` sources.
        templates_dir : Path, optional
            Directory containing ``doc.jinja``; defaults to the package templates.
        pygments_style : str, optional
            Pygments style for highlighted code blocks.
        """
        self.index = index
        self.output_dir = output_dir
        self.docs_root = docs_root
        self.pygments_style = pygments_style
        self.templates_dir = templates_dir or PACKAGE_TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template(DOC_TEMPLATE)

    def run(self) -> list[Path]:
        """Render every scope and return the written paths in traversal order."""
        written: list[Path] = []
        for scope in self.index.scopes:
            written.extend(self.render_scope(scope))
        return written

    def render_scope(self, scope: str) -> list[Path]:
        """Render the documents of a single scope.

        Raises
        ------
        KeyError
            If ``scope`` is not part of the index.
        DocSourceError
            If a document's Markdown source is missing, unreadable, or empty.
        """
        section = self.index.get_scope(scope)
        renderer = HtmlContentRenderer(
            self.pygments_style, link_extension=DocLinkExtension(scope)
        )
        return [
            self.render_page(self.plan_page(entry, section), renderer)
            for entry in walk_section(scope, section)
        ]

    def plan_page(self, entry: DocEntry, section: DocSection) -> DocPage:
        """Resolve the source and output locations for ``entry``."""
        return DocPage(
            entry=entry,
            index=section,
            source=doc_source_path(self.docs_root, entry.scope, entry.doc_id),
            output=self.output_dir / entry.output_path,
        )

    def render_page(self, page: DocPage, renderer: HtmlContentRenderer) -> Path:
        """Render ``page`` and write it to disk, creating parent directories."""
        markdown_source = self._read_source(page.source)
        context = {
            "index": page.index.children,
            "content": Markup(renderer.markdown(markdown_source)),
            "root": DOC_PAGE_ROOT,
            "scope": page.entry.scope,
            "scope_dir": scope_output_dir(page.entry.scope).as_posix(),
            "doc_id": page.entry.doc_id,
            "title": page.title,
            "pygments_css": Markup(renderer.stylesheet),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        page.output.parent.mkdir(parents=True, exist_ok=True)
        page.output.write_text(html, encoding="utf-8")
        return page.output

    @staticmethod
    def _read_source(path: Path) -> str:
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocSourceError(path) from exc
        if not content.strip():
            raise DocSourceError(path)
        return content


__all__ = ["DocSourceError", "DocTreeRenderer"]
