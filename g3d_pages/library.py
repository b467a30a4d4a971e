"""Library bundle tasks: ``test``, ``dev`` and ``build``.

The bundler itself is an external collaborator. This module only assembles
the options it needs, serialises them to JSON, and invokes the configured
command with ``--env task=<name> --env options=<file>``.

Module classes such as ``src/core/G3D.Mesh.js`` are exposed to the bundle
through a provide-plugin mapping (``Mesh`` -> absolute file path). The
mapping is collected once by :func:`collect_provide_entries` and passed
around as an immutable tuple of :class:`ProvideEntry` values.

Examples
--------
>>> from pathlib import Path
>>> from g3d_pages.config import LibrarySettings
>>> from g3d_pages.library import LibraryTasks
>>> tasks = LibraryTasks(LibrarySettings(), root=Path.cwd())  # doctest: +SKIP
>>> tasks.build()  # doctest: +SKIP
PosixPath('.../build/library-options.json')
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ
from pathlib import Path

from .config import BuildConfigError
from .toolchain import run_tool

if typ.TYPE_CHECKING:
    from .config import LibrarySettings

LIBRARY_TASKS = ("test", "dev", "build")


@dc.dataclass(frozen=True, slots=True)
class ProvideEntry:
    """A module class exposed to the bundle under ``name``."""

    name: str
    path: Path


def collect_provide_entries(root: Path, pattern: str) -> tuple[ProvideEntry, ...]:
    """Return provide entries for every file under ``root`` matching ``pattern``.

    The entry name is the second dot-separated part of the filename, so
    ``G3D.Mesh.js`` provides ``Mesh``. Files are visited in sorted order.

    Raises
    ------
    BuildConfigError
        If two files provide the same name.
    """
    entries: dict[str, ProvideEntry] = {}
    for match in sorted(root.glob(pattern)):
        parts = match.name.split(".")
        if len(parts) < 3 or not parts[1]:
            continue
        name = parts[1]
        if name in entries:
            msg = (
                f"'{name}' is provided by both {entries[name].path} and "
                f"{match.resolve()}"
            )
            raise BuildConfigError(msg)
        entries[name] = ProvideEntry(name=name, path=match.resolve())
    return tuple(entries.values())


class LibraryTasks:
    """Run the bundler for the library test, dev, and build tasks."""

    def __init__(
        self,
        settings: LibrarySettings,
        *,
        root: Path,
        provide: tuple[ProvideEntry, ...] | None = None,
    ) -> None:
        self.settings = settings
        self.root = root
        self.provide = (
            provide
            if provide is not None
            else collect_provide_entries(root, settings.provide_pattern)
        )

    def bundler_options(self) -> dict[str, typ.Any]:
        """Return the options handed to the bundler."""
        settings = self.settings
        return {
            "umdName": settings.umd_name,
            "demo": settings.demo,
            "entry": settings.entry,
            "port": settings.port,
            "loaders": [{"test": rule.test, "use": rule.use} for rule in settings.loaders],
            "provide": {entry.name: str(entry.path) for entry in self.provide},
            "devCors": settings.dev_cors,
            "testEntryPattern": settings.test_entry_pattern,
        }

    def write_options(self) -> Path:
        """Write the bundler options JSON and return its path."""
        path = self.settings.options_file
        if not path.is_absolute():
            path = self.root / path
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(self.bundler_options(), indent=2, sort_keys=True)
        path.write_text(payload + "\n", encoding="utf-8")
        return path

    def run(self, task: str) -> Path:
        """Invoke the bundler for ``task`` and return the options file used."""
        if task not in LIBRARY_TASKS:
            known = ", ".join(LIBRARY_TASKS)
            msg = f"Unknown library task '{task}'. Known tasks: {known}"
            raise KeyError(msg)
        options_path = self.write_options()
        run_tool(
            self.settings.command,
            ["--env", f"task={task}", "--env", f"options={options_path}"],
            cwd=self.root,
        )
        return options_path

    def test(self) -> Path:
        return self.run("test")

    def dev(self) -> Path:
        return self.run("dev")

    def build(self) -> Path:
        return self.run("build")


__all__ = ["LIBRARY_TASKS", "LibraryTasks", "ProvideEntry", "collect_provide_entries"]
