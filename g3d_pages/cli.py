"""Cyclopts CLI entrypoint for the G3D build tasks.

The ``g3d-pages`` console script exposes one subcommand per registered task.
Each run loads the optional build configuration, executes the task after its
dependencies, and prints a ``wrote <path>`` line for every artefact.

Examples
--------
Build the whole documentation website:

>>> from g3d_pages.cli import main
>>> main()  # doctest: +SKIP

Fetch the Markdown sources using a custom configuration file:

>>> from g3d_pages.cli import app
>>> app(["fetch", "--config", "config/build.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_build_config
from .tasks import build_registry

app = App(name="g3d-pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path | None,
    Parameter(help="Path to the build config (YAML)", env_var="INPUT_CONFIG"),
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:
            return str(path)
    return str(path)


def _report(path: Path) -> None:
    print(f"wrote {_format_path(path)}")


def run_task(name: str, config: Path | None = None) -> list[Path]:
    """Load the build configuration and run ``name`` with its dependencies.

    Parameters
    ----------
    name : str
        Registered task name, for example ``"homepage-build"``.
    config : Path or None, optional
        Build configuration file; defaults apply when ``None``.

    Returns
    -------
    list[Path]
        Paths written by the executed tasks, each also printed to stdout.
    """
    registry = build_registry(load_build_config(config), report=_report)
    return registry.run(name)


@app.command(name="test", help="Run the library test suite through the bundler.")
def test(*, config: ConfigOption = None) -> None:
    run_task("test", config)


@app.command(name="dev", help="Start the library development server.")
def dev(*, config: ConfigOption = None) -> None:
    run_task("dev", config)


@app.command(name="build", help="Build the library bundle.")
def build(*, config: ConfigOption = None) -> None:
    run_task("build", config)


@app.command(name="fetch", help="Download the Markdown sources listed in doc.yaml.")
def fetch(*, config: ConfigOption = None) -> None:
    run_task("fetch", config)


@app.command(name="homepage-less", help="Compile the homepage stylesheet.")
def homepage_less(*, config: ConfigOption = None) -> None:
    run_task("homepage-less", config)


@app.command(
    name="homepage-less-watch", help="Recompile the homepage stylesheet on change."
)
def homepage_less_watch(*, config: ConfigOption = None) -> None:
    run_task("homepage-less-watch", config)


@app.command(name="homepage-assets", help="Copy homepage assets into the output.")
def homepage_assets(*, config: ConfigOption = None) -> None:
    run_task("homepage-assets", config)


@app.command(
    name="homepage-build",
    help="Compile styles, copy assets, and render every documentation page.",
)
def homepage_build(*, config: ConfigOption = None) -> None:
    """Render the documentation website into ``website/homepage``.

    Parameters
    ----------
    config : Path or None, optional
        Build configuration file (overridable via ``INPUT_CONFIG``).

    Raises
    ------
    DocSourceError
        If a document listed in the index has no Markdown source; run
        ``g3d-pages fetch`` first.
    DocIndexError
        If ``doc.yaml`` is malformed.
    """
    run_task("homepage-build", config)


@app.command(name="website", help="Build the whole website.")
def website(*, config: ConfigOption = None) -> None:
    run_task("website", config)


@app.command(name="tasks", help="List the registered tasks and their dependencies.")
def tasks(*, config: ConfigOption = None) -> None:
    registry = build_registry(load_build_config(config))
    for name in registry.names:
        task = registry.get(name)
        deps = f" (after {', '.join(task.deps)})" if task.deps else ""
        print(f"{name}{deps}: {task.help}")


def main() -> None:
    """Invoke the Cyclopts application behind the ``g3d-pages`` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
