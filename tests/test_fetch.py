"""Tests for downloading Markdown sources with ``DocSourceFetcher``.

``requests.Session`` is replaced with an in-memory stub that serves one body
per URL, so no network access is needed.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
import requests

from g3d_pages.config import BuildConfigError, FetchSettings
from g3d_pages.docs_index import DocIndex, parse_doc_index
from g3d_pages.fetch import DocSourceFetcher

BASE = "https://raw.githubusercontent.com/acme/g3d/refs/heads/main"


@pytest.fixture
def doc_index() -> DocIndex:
    return parse_doc_index({"doc": {"guide": {"basics": {"intro": "x"}}, "api-core": {"mesh": "x"}}})


@pytest.fixture
def served(monkeypatch: pytest.MonkeyPatch) -> dict[str, typ.Any]:
    state: dict[str, typ.Any] = {
        "bodies": {
            f"{BASE}/doc/guide/intro.md": "# Intro\n",
            f"{BASE}/doc/api-core/mesh.md": "# Mesh\n",
        },
        "calls": [],
        "closed": False,
    }

    class _Response:
        def __init__(self, url: str, body: str | None) -> None:
            self.url = url
            self.text = body or ""
            self.status_code = 200 if body is not None else 404

        def raise_for_status(self) -> None:
            if self.status_code >= 400:
                msg = f"{self.status_code} for {self.url}"
                raise requests.HTTPError(msg)

    class _Session:
        def mount(self, *_args: typ.Any, **_kwargs: typ.Any) -> None:
            return None

        def get(self, url: str, timeout: int = 30) -> _Response:
            state["calls"].append((url, timeout))
            return _Response(url, state["bodies"].get(url))

        def close(self) -> None:
            state["closed"] = True

    monkeypatch.setattr("g3d_pages.fetch.requests.Session", lambda: _Session())
    return state


def test_fetch_writes_every_document(
    doc_index: DocIndex, served: dict[str, typ.Any], tmp_path: Path
) -> None:
    fetcher = DocSourceFetcher(doc_index, FetchSettings(repo="acme/g3d"), docs_root=tmp_path)
    written = fetcher.run()

    assert written == [tmp_path / "guide" / "intro.md", tmp_path / "api-core" / "mesh.md"]
    assert written[0].read_text(encoding="utf-8") == "# Intro\n"
    assert [url for url, _timeout in served["calls"]] == [
        f"{BASE}/doc/guide/intro.md",
        f"{BASE}/doc/api-core/mesh.md",
    ]
    assert served["calls"][0][1] == 30
    assert served["closed"] is True


def test_source_url_template_overrides_repo(doc_index: DocIndex, tmp_path: Path) -> None:
    settings = FetchSettings(
        repo="acme/g3d",
        source_url="https://docs.example.invalid/{scope}/{doc_id}.md",
    )
    fetcher = DocSourceFetcher(doc_index, settings, docs_root=tmp_path)
    entry = next(doc_index.entries("api-core"))
    assert fetcher.source_url(entry) == "https://docs.example.invalid/api-core/mesh.md"


def test_branch_and_doc_path_are_configurable(doc_index: DocIndex, tmp_path: Path) -> None:
    settings = FetchSettings(repo="acme/g3d", branch="gh-pages", doc_path="docs/{doc_id}.md")
    fetcher = DocSourceFetcher(doc_index, settings, docs_root=tmp_path)
    entry = next(doc_index.entries("guide"))
    assert fetcher.source_url(entry) == (
        "https://raw.githubusercontent.com/acme/g3d/refs/heads/gh-pages/docs/intro.md"
    )


def test_http_errors_propagate(
    doc_index: DocIndex, served: dict[str, typ.Any], tmp_path: Path
) -> None:
    del served["bodies"][f"{BASE}/doc/api-core/mesh.md"]
    fetcher = DocSourceFetcher(doc_index, FetchSettings(repo="acme/g3d"), docs_root=tmp_path)
    with pytest.raises(requests.HTTPError, match="404"):
        fetcher.run()
    assert (tmp_path / "guide" / "intro.md").exists()
    assert not (tmp_path / "api-core" / "mesh.md").exists()
    assert served["closed"] is True


def test_fetch_requires_a_source(doc_index: DocIndex, tmp_path: Path) -> None:
    with pytest.raises(BuildConfigError, match="requires 'fetch.repo'"):
        DocSourceFetcher(doc_index, FetchSettings(), docs_root=tmp_path)
