"""Download the Markdown sources named by the Documentation Index.

The doc pages are rendered from ``doc/<scope>/<id>.md`` files that are not
kept in this repository. :class:`DocSourceFetcher` downloads each of them
from GitHub (or from an explicit URL template) so ``homepage-build`` can
run. Requests go through a ``requests.Session`` with urllib3 retries for
transient server errors; any remaining HTTP error aborts the fetch.

Example
-------
>>> from pathlib import Path
>>> from g3d_pages.config import FetchSettings
>>> from g3d_pages.docs_index import parse_doc_index
>>> from g3d_pages.fetch import DocSourceFetcher
>>> index = parse_doc_index({"doc": {"guide": {"intro": "x"}}})
>>> fetcher = DocSourceFetcher(
...     index, FetchSettings(repo="acme/g3d-docs"), docs_root=Path("doc")
... )
>>> fetcher.source_url(next(index.entries()))
'https://raw.githubusercontent.com/acme/g3d-docs/refs/heads/main/doc/guide/intro.md'
"""

from __future__ import annotations

import typing as typ

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import BuildConfigError
from .config.helpers import _build_repo_url
from .docs_index import doc_source_path

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import FetchSettings
    from .docs_index import DocEntry, DocIndex


class DocSourceFetcher:
    """Fetch every indexed document into the local docs directory."""

    def __init__(
        self, index: DocIndex, settings: FetchSettings, *, docs_root: Path
    ) -> None:
        """Initialize the fetcher.

        Raises
        ------
        BuildConfigError
            If neither ``fetch.repo`` nor ``fetch.source_url`` is configured.
        """
        if not settings.repo and not settings.source_url:
            msg = "The fetch task requires 'fetch.repo' or 'fetch.source_url'."
            raise BuildConfigError(msg)
        self.index = index
        self.settings = settings
        self.docs_root = docs_root

    def source_url(self, entry: DocEntry) -> str:
        """Return the download URL for ``entry``."""
        path = self.settings.doc_path.format(scope=entry.scope, doc_id=entry.doc_id)
        if self.settings.source_url:
            return self.settings.source_url.format(
                scope=entry.scope, doc_id=entry.doc_id, path=path
            )
        return _build_repo_url(typ.cast("str", self.settings.repo), self.settings.branch, path)

    def run(self) -> list[Path]:
        """Download all documents and return the written paths."""
        session = _retrying_session()
        written: list[Path] = []
        try:
            for entry in self.index.entries():
                resp = session.get(self.source_url(entry), timeout=self.settings.timeout)
                resp.raise_for_status()
                target = doc_source_path(self.docs_root, entry.scope, entry.doc_id)
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(resp.text, encoding="utf-8")
                written.append(target)
        finally:
            session.close()
        return written


def _retrying_session() -> requests.Session:
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


__all__ = ["DocSourceFetcher"]
