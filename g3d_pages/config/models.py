"""Typed dataclasses describing the G3D build configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class BuildConfigError(ValueError):
    """Raised when the build configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class LoaderRule:
    """A bundler module rule mapping a file pattern to a loader."""

    test: str
    use: str


@dc.dataclass(frozen=True, slots=True)
class HomepageSettings:
    """Locations and tools used to build the documentation homepage."""

    source_dir: Path = Path("website/homepage-src")
    output_dir: Path = Path("website/homepage")
    index_file: Path = Path("website/homepage-src/doc.yaml")
    templates_dir: Path | None = None
    stylesheet: Path = Path("website/homepage-src/style/index.less")
    assets_dir: Path = Path("website/homepage-src/assets")
    stylesheet_command: tuple[str, ...] = ("lessc",)
    pygments_style: str = "monokai"


@dc.dataclass(frozen=True, slots=True)
class LibrarySettings:
    """Options handed to the bundler for the library test/dev/build tasks."""

    umd_name: str = "G3D"
    entry: str = "./src/G3D.js"
    demo: str = "./pages"
    port: int = 3000
    dev_cors: bool = True
    test_entry_pattern: str = "test/**/*.spec.js"
    provide_pattern: str = "src/**/G3D.*.js"
    loaders: tuple[LoaderRule, ...] = (LoaderRule(test=r"\.glsl$", use="raw-loader"),)
    command: tuple[str, ...] = ("npx", "webpack")
    options_file: Path = Path("build/library-options.json")


@dc.dataclass(frozen=True, slots=True)
class FetchSettings:
    """Where the ``fetch`` task downloads Markdown sources from."""

    repo: str | None = None
    branch: str = "main"
    doc_path: str = "doc/{scope}/{doc_id}.md"
    source_url: str | None = None
    timeout: int = 30


@dc.dataclass(frozen=True, slots=True)
class BuildConfig:
    """Fully resolved build configuration."""

    root: Path = Path()
    docs_root: Path = Path("doc")
    homepage: HomepageSettings = dc.field(default_factory=HomepageSettings)
    library: LibrarySettings = dc.field(default_factory=LibrarySettings)
    fetch: FetchSettings = dc.field(default_factory=FetchSettings)

    def resolve(self, path: Path) -> Path:
        """Return ``path`` anchored at the project root unless already absolute."""
        if path.is_absolute():
            return path
        return self.root / path


__all__ = [
    "BuildConfig",
    "BuildConfigError",
    "FetchSettings",
    "HomepageSettings",
    "LibrarySettings",
    "LoaderRule",
]
