"""Common literal values used across g3d_pages.

These constants keep template names, page roots, and the fetch hint in one
place so the generators, CLI, and tests import the same values. Intended for
internal use within the g3d_pages package.

Examples
--------
>>> from g3d_pages import _constants
>>> _constants.DOC_TEMPLATE
'doc.jinja'
>>> _constants.DOC_PAGE_ROOT
'../'
"""

from pathlib import Path

INDEX_TEMPLATE = "index.jinja"
DOC_TEMPLATE = "doc.jinja"
PACKAGE_TEMPLATES_DIR = Path(__file__).parent / "templates"

INDEX_PAGE_ROOT = "./"
DOC_PAGE_ROOT = "../"

FETCH_HINT = "please run fetch first (`g3d-pages fetch`)"
