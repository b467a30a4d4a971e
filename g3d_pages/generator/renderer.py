"""Render Markdown documents into HTML fragments for the doc pages."""

from __future__ import annotations

import typing as typ

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

CODE_CSS_CLASS = "codehilite"


class HtmlContentRenderer:
    """Convert a document's Markdown into the HTML placed in ``doc.jinja``.

    One renderer serves a whole scope: the link extension it carries rewrites
    relative ``.md`` links for that scope, and the Pygments style is shared by
    every page so :attr:`stylesheet` matches the highlighted markup.
    """

    def __init__(
        self, pygments_style: str = "monokai", link_extension: Extension | None = None
    ) -> None:
        self.pygments_style = pygments_style
        self._link_extension = link_extension

    @property
    def stylesheet(self) -> str:
        """Return the CSS rules for highlighted code blocks."""
        formatter = HtmlFormatter(style=self.pygments_style, cssclass=CODE_CSS_CLASS)
        return formatter.get_style_defs(f".{CODE_CSS_CLASS}")

    def markdown(self, text: str) -> str:
        """Render ``text`` into HTML; blank input renders as an empty string."""
        if not text.strip():
            return ""
        extensions: list[Extension | str] = ["fenced_code", "codehilite", "tables"]
        if self._link_extension is not None:
            extensions.append(self._link_extension)
        converter = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "guess_lang": False,
                    "css_class": CODE_CSS_CLASS,
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return converter.convert(text)


__all__ = ["HtmlContentRenderer"]
