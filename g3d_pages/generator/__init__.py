"""Utilities for rendering Markdown sources into the G3D documentation pages."""

from .doc_tree import DocSourceError, DocTreeRenderer
from .link_rewriter import DocLinkExtension
from .models import DocPage
from .renderer import HtmlContentRenderer

__all__ = [
    "DocLinkExtension",
    "DocPage",
    "DocSourceError",
    "DocTreeRenderer",
    "HtmlContentRenderer",
]
