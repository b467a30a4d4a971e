"""Shared dataclasses used by the doc page generation pipeline."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path  # noqa: TC003 - used for runtime type metadata

from g3d_pages.docs_index import DocEntry, DocSection  # noqa: TC001


@dc.dataclass(frozen=True, slots=True)
class DocPage:
    """Everything needed to render a single documentation page.

    Attributes
    ----------
    entry : DocEntry
        The index leaf being rendered.
    index : DocSection
        Subtree of the scope the document belongs to, used for navigation.
    source : Path
        Markdown file the content is read from.
    output : Path
        HTML file the page is written to.
    """

    entry: DocEntry
    index: DocSection
    source: Path
    output: Path

    @property
    def title(self) -> str:
        """Return a human label derived from the document id."""
        return self.entry.doc_id.replace("-", " ").replace("_", " ").title()


__all__ = ["DocPage"]
