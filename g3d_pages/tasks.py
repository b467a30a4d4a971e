"""Named build tasks and the registry that runs them with their dependencies.

:func:`build_registry` registers the task surface of the repository:

========================  ==================================================
``test`` / ``dev`` /      Library bundle tasks delegated to the bundler.
``build``
``fetch``                 Download the Markdown sources listed in the index.
``homepage-less``         Compile the homepage stylesheet.
``homepage-less-watch``   Recompile the stylesheet whenever it changes.
``homepage-assets``       Copy static assets into the homepage output.
``homepage-build``        ``homepage-less`` + ``homepage-assets``, then render
                          the landing page and every documentation page.
``website``               ``homepage-build``.
========================  ==================================================

Examples
--------
>>> from g3d_pages.config import load_build_config
>>> from g3d_pages.tasks import build_registry
>>> registry = build_registry(load_build_config())
>>> registry.dependencies("homepage-build")
('homepage-less', 'homepage-assets')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from .docs_index import load_doc_index
from .fetch import DocSourceFetcher
from .generator import DocTreeRenderer
from .homepage import HomePageBuilder
from .library import LIBRARY_TASKS, LibraryTasks
from .stylesheet import compile_stylesheet, copy_assets, watch_stylesheet

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import BuildConfig

TaskAction = typ.Callable[[], "Path | list[Path] | None"]
Reporter = typ.Callable[[Path], None]


class TaskError(RuntimeError):
    """Raised when the task graph cannot be executed."""


@dc.dataclass(frozen=True, slots=True)
class Task:
    """A named unit of work and the tasks that must run before it."""

    name: str
    action: TaskAction
    deps: tuple[str, ...] = ()
    help: str = ""


class TaskRegistry:
    """Register tasks by name and run them after their dependencies."""

    def __init__(self, *, report: Reporter | None = None) -> None:
        self._tasks: dict[str, Task] = {}
        self._report = report

    def register(
        self,
        name: str,
        action: TaskAction,
        deps: cabc.Sequence[str] = (),
        *,
        help: str = "",  # noqa: A002
    ) -> Task:
        """Add a task; registering the same name twice is an error."""
        if name in self._tasks:
            msg = f"Task '{name}' is already registered."
            raise TaskError(msg)
        task = Task(name=name, action=action, deps=tuple(deps), help=help)
        self._tasks[name] = task
        return task

    @property
    def names(self) -> list[str]:
        return list(self._tasks)

    def get(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError as exc:
            available = ", ".join(sorted(self._tasks))
            msg = f"Unknown task '{name}'. Known tasks: {available}"
            raise KeyError(msg) from exc

    def dependencies(self, name: str) -> tuple[str, ...]:
        return self.get(name).deps

    def run(self, name: str) -> list[Path]:
        """Run ``name`` after its dependencies, each task at most once.

        Returns
        -------
        list[Path]
            Every path the executed tasks reported as written, in order.

        Raises
        ------
        KeyError
            If ``name`` or one of its dependencies is not registered.
        TaskError
            If the dependencies form a cycle.
        """
        written: list[Path] = []
        self._run(name, done=set(), active=[], written=written)
        return written

    def _run(
        self, name: str, *, done: set[str], active: list[str], written: list[Path]
    ) -> None:
        if name in done:
            return
        if name in active:
            cycle = " -> ".join([*active[active.index(name) :], name])
            msg = f"Task dependency cycle: {cycle}"
            raise TaskError(msg)
        task = self.get(name)
        active.append(name)
        for dep in task.deps:
            self._run(dep, done=done, active=active, written=written)
        active.pop()
        result = task.action()
        match result:
            case None:
                paths: list[Path] = []
            case Path():
                paths = [result]
            case _:
                paths = list(result)
        for path in paths:
            if self._report is not None:
                self._report(path)
        written.extend(paths)
        done.add(name)


def build_registry(config: BuildConfig, *, report: Reporter | None = None) -> TaskRegistry:
    """Return a registry holding every task of the repository."""
    registry = TaskRegistry(report=report)

    library: LibraryTasks | None = None

    def _library() -> LibraryTasks:
        # Provide entries are globbed on first use, once per registry.
        nonlocal library
        if library is None:
            library = LibraryTasks(config.library, root=config.root)
        return library

    for task_name in LIBRARY_TASKS:
        registry.register(
            task_name,
            lambda task_name=task_name: _library().run(task_name),
            help=f"Run the library '{task_name}' bundler task.",
        )

    def _fetch() -> list[Path]:
        index = load_doc_index(config.resolve(config.homepage.index_file))
        fetcher = DocSourceFetcher(
            index, config.fetch, docs_root=config.resolve(config.docs_root)
        )
        return fetcher.run()

    def _watch_less() -> None:
        watch_stylesheet(config, on_compiled=report)

    registry.register("fetch", _fetch, help="Download the indexed Markdown sources.")
    registry.register(
        "homepage-less",
        lambda: compile_stylesheet(config),
        help="Compile the homepage stylesheet.",
    )
    registry.register(
        "homepage-less-watch",
        _watch_less,
        help="Recompile the homepage stylesheet on change.",
    )
    registry.register(
        "homepage-assets",
        lambda: copy_assets(config),
        help="Copy homepage assets into the output directory.",
    )
    registry.register(
        "homepage-build",
        lambda: build_homepage(config),
        ("homepage-less", "homepage-assets"),
        help="Render the landing page and every documentation page.",
    )
    registry.register(
        "website",
        lambda: None,
        ("homepage-build",),
        help="Build the whole website.",
    )
    return registry


def build_homepage(config: BuildConfig) -> list[Path]:
    """Render ``index.html`` and one page per indexed document."""
    homepage = config.homepage
    templates_dir = config.resolve(homepage.templates_dir) if homepage.templates_dir else None
    output_dir = config.resolve(homepage.output_dir)
    index = load_doc_index(config.resolve(homepage.index_file))

    landing = HomePageBuilder(output_dir, index=index, templates_dir=templates_dir).run()
    pages = DocTreeRenderer(
        index,
        output_dir=output_dir,
        docs_root=config.resolve(config.docs_root),
        templates_dir=templates_dir,
        pygments_style=homepage.pygments_style,
    ).run()
    return [landing, *pages]


__all__ = ["Task", "TaskError", "TaskRegistry", "build_homepage", "build_registry"]
