"""Rewrite links between Markdown sources into links between generated pages."""

from __future__ import annotations

import posixpath
import typing as typ
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from g3d_pages.docs_index import scope_output_dir

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any


class DocLinkExtension(Extension):
    """Point ``*.md`` links at the HTML pages generated from them.

    Sources live in ``doc/<scope>/<id>.md`` while pages are written to
    ``<scope dir>/<id>.html`` (``a-b`` becomes ``a/b``). Two link shapes are
    understood: a sibling document (``camera.md``) and a document in another
    scope (``../api-core/mesh.md``). Anything else is left untouched.
    """

    def __init__(self, scope: str) -> None:
        super().__init__()
        self.scope = scope

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the doc-link treeprocessor on the Markdown instance."""
        md.treeprocessors.register(DocLinkTreeprocessor(md, self.scope), "g3d_doc_links", 15)


class DocLinkTreeprocessor(Treeprocessor):
    """Rewrite anchors whose target is another Markdown document."""

    def __init__(self, md: Markdown, scope: str) -> None:
        super().__init__(md)
        self.scope = scope
        self._depth = len(scope_output_dir(scope).parts)

    def run(self, root: Element) -> Element:
        for element in root.iter("a"):
            rewritten = self.rewrite(element.get("href"))
            if rewritten:
                element.set("href", rewritten)
        return root

    def rewrite(self, target: str | None) -> str | None:
        """Return the page URL for a Markdown link target, or ``None`` to keep it."""
        if not target or target.startswith(("#", "/")):
            return None
        parsed = urlsplit(target)
        if parsed.scheme or parsed.netloc or not parsed.path.endswith(".md"):
            return None

        parts = posixpath.normpath(parsed.path).split("/")
        match parts:
            case [filename]:
                page = f"{filename[:-3]}.html"
            case ["..", scope, filename] if scope:
                target_dir = scope_output_dir(scope)
                up = "../" * self._depth
                page = f"{up}{target_dir.as_posix()}/{filename[:-3]}.html"
            case _:
                return None

        if parsed.query:
            page = f"{page}?{parsed.query}"
        if parsed.fragment:
            page = f"{page}#{parsed.fragment}"
        return page


__all__ = ["DocLinkExtension", "DocLinkTreeprocessor"]
