"""Load and validate the Documentation Index that drives the doc pages.

The index lives under the top-level ``doc`` key of
``website/homepage-src/doc.yaml``. Each key beneath ``doc`` is a *scope* (a
group of Markdown files stored in ``doc/<scope>/``); below a scope, mappings
describe sections and string values mark actual documents:

.. code-block:: yaml

    doc:
      guide:
        basics:
          intro: x
          camera: x
      api-core:
        mesh: x

This module turns the raw YAML into the explicit node types :class:`DocLeaf`
and :class:`DocSection`, runs a validation pass over the whole tree, and
exposes the path helpers shared by the renderer and the fetch task.

Examples
--------
>>> from g3d_pages.docs_index import parse_doc_index, scope_output_dir
>>> index = parse_doc_index({"doc": {"guide": {"intro": "x"}}})
>>> [entry.doc_id for entry in index.entries()]
['intro']
>>> scope_output_dir("a-b-c").as_posix()
'a/b/c'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from pathlib import Path, PurePosixPath

from ruamel.yaml import YAML

from .config import BuildConfigError

INDEX_ROOT_KEY = "doc"
_FORBIDDEN_KEY_CHARS = ("/", "\\")


class DocIndexError(BuildConfigError):
    """Raised when the Documentation Index is malformed."""

    def __init__(self, problems: cabc.Sequence[str]) -> None:
        self.problems = list(problems)
        detail = "\n".join(f"  - {problem}" for problem in self.problems)
        super().__init__(f"Invalid documentation index:\n{detail}")


@dc.dataclass(frozen=True, slots=True)
class DocLeaf:
    """An index entry naming an actual Markdown document."""

    marker: str
    is_leaf: typ.ClassVar[bool] = True


@dc.dataclass(frozen=True, slots=True)
class DocSection:
    """An index entry grouping further sections or documents."""

    children: dict[str, DocNode]
    is_leaf: typ.ClassVar[bool] = False


DocNode = DocLeaf | DocSection


@dc.dataclass(frozen=True, slots=True)
class DocEntry:
    """A document reached while walking a scope.

    Attributes
    ----------
    scope : str
        Top-level key the document belongs to.
    doc_id : str
        Key of the leaf; names ``doc/<scope>/<doc_id>.md``.
    trail : tuple[str, ...]
        Section keys between the scope and the leaf, outermost first.
    """

    scope: str
    doc_id: str
    trail: tuple[str, ...] = ()

    @property
    def output_path(self) -> PurePosixPath:
        """Return the page location relative to the homepage output root."""
        return scope_output_dir(self.scope) / f"{self.doc_id}.html"


@dc.dataclass(frozen=True, slots=True)
class DocIndex:
    """The parsed Documentation Index, keyed by scope."""

    scopes: dict[str, DocSection]

    def get_scope(self, scope: str) -> DocSection:
        """Return the subtree for ``scope``."""
        try:
            return self.scopes[scope]
        except KeyError as exc:
            available = ", ".join(sorted(self.scopes))
            msg = f"Unknown scope '{scope}'. Known scopes: {available}"
            raise KeyError(msg) from exc

    def entries(self, scope: str | None = None) -> cabc.Iterator[DocEntry]:
        """Yield every document depth-first, for one scope or for all of them."""
        names = [scope] if scope is not None else list(self.scopes)
        for name in names:
            yield from walk_section(name, self.get_scope(name))


def walk_section(
    scope: str, section: DocSection, trail: tuple[str, ...] = ()
) -> cabc.Iterator[DocEntry]:
    """Yield the documents below ``section``; the leaf key is the document id."""
    for key, child in section.children.items():
        match child:
            case DocLeaf():
                yield DocEntry(scope=scope, doc_id=key, trail=trail)
            case DocSection():
                yield from walk_section(scope, child, (*trail, key))


def scope_output_dir(scope: str) -> PurePosixPath:
    """Map a scope to its output directory (``a-b-c`` becomes ``a/b/c``)."""
    return PurePosixPath(*scope.split("-"))


def doc_source_path(docs_root: Path, scope: str, doc_id: str) -> Path:
    """Return the Markdown source location for ``doc_id`` in ``scope``."""
    return docs_root / scope / f"{doc_id}.md"


def load_doc_index(path: Path) -> DocIndex:
    """Read ``path`` and return the validated Documentation Index.

    Raises
    ------
    FileNotFoundError
        If the index file does not exist.
    DocIndexError
        If the YAML does not describe a well-formed index.
    """
    if not path.exists():
        msg = f"Documentation index '{path}' not found."
        raise FileNotFoundError(msg)
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle)
    return parse_doc_index(loaded)


def parse_doc_index(raw: object) -> DocIndex:
    """Convert loaded YAML into a :class:`DocIndex`, rejecting malformed trees.

    Every problem in the tree is collected before raising so a single run
    reports all of them. The checks are:

    * the document has a ``doc`` mapping of scope names to mappings;
    * keys are non-empty strings without path separators (numeric and boolean
      scalars such as ``2019`` are converted to text), and scope names
      have no empty ``-`` segments;
    * leaves are strings and sections are non-empty mappings;
    * no two documents claim the same output page.
    """
    problems: list[str] = []
    match raw:
        case {"doc": dict() as doc}:
            pass
        case _:
            raise DocIndexError([f"expected a top-level '{INDEX_ROOT_KEY}' mapping"])

    scopes: dict[str, DocSection] = {}
    for raw_scope, payload in doc.items():
        scope = _normalize_key(raw_scope, "scope", problems)
        if scope is None:
            continue
        if any(not segment for segment in scope.split("-")):
            problems.append(f"scope '{scope}' has an empty '-' segment")
            continue
        if not isinstance(payload, dict):
            problems.append(f"scope '{scope}' must map to sections or documents")
            continue
        section = _build_section(payload, (scope,), problems)
        if section is not None:
            scopes[scope] = section

    index = DocIndex(scopes=scopes)
    problems.extend(_find_collisions(index))
    if problems:
        raise DocIndexError(problems)
    return index


def _build_section(
    payload: dict[typ.Any, typ.Any], location: tuple[str, ...], problems: list[str]
) -> DocSection | None:
    where = "/".join(location)
    if not payload:
        problems.append(f"'{where}' is an empty section")
        return None
    children: dict[str, DocNode] = {}
    for raw_key, value in payload.items():
        key = _normalize_key(raw_key, f"entry in '{where}'", problems)
        if key is None:
            continue
        match value:
            case str():
                children[key] = DocLeaf(marker=value)
            case dict():
                child = _build_section(value, (*location, key), problems)
                if child is not None:
                    children[key] = child
            case _:
                problems.append(
                    f"'{where}/{key}' must be a string or a mapping, "
                    f"got {type(value).__name__}"
                )
    return DocSection(children=children)


def _normalize_key(key: object, label: str, problems: list[str]) -> str | None:
    """Return ``key`` as a page-safe string, coercing numeric and boolean scalars."""
    match key:
        case bool():
            key = "true" if key else "false"
        case int():
            key = str(key)
        case float() if key.is_integer():
            key = str(int(key))
        case float():
            key = repr(key)
    if not isinstance(key, str) or not key.strip():
        problems.append(f"{label} key {key!r} must be a non-empty string")
        return None
    if any(char in key for char in _FORBIDDEN_KEY_CHARS) or key in (".", ".."):
        problems.append(f"{label} key '{key}' must not contain path separators")
        return None
    return key


def _find_collisions(index: DocIndex) -> list[str]:
    claimed: dict[PurePosixPath, DocEntry] = {}
    problems: list[str] = []
    for entry in index.entries():
        previous = claimed.setdefault(entry.output_path, entry)
        if previous is not entry:
            problems.append(
                f"document '{entry.doc_id}' in scope '{entry.scope}' "
                f"collides with scope '{previous.scope}' at {entry.output_path}"
            )
    return problems


__all__ = [
    "DocEntry",
    "DocIndex",
    "DocIndexError",
    "DocLeaf",
    "DocNode",
    "DocSection",
    "doc_source_path",
    "load_doc_index",
    "parse_doc_index",
    "scope_output_dir",
    "walk_section",
]
