"""Stylesheet and static asset tasks for the homepage.

``homepage-less`` compiles ``website/homepage-src/style/index.less`` into
``website/homepage/index.css`` with the configured compiler (``lessc`` by
default). ``homepage-less-watch`` recompiles whenever a ``.less`` file under
the stylesheet directory changes, and ``homepage-assets`` mirrors the assets
directory into ``website/homepage/assets/``.
"""

from __future__ import annotations

import shutil
import time
import typing as typ

from .toolchain import run_tool

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config import BuildConfig


def compile_stylesheet(config: BuildConfig) -> Path:
    """Compile the homepage stylesheet and return the CSS path.

    Raises
    ------
    FileNotFoundError
        If the stylesheet entry or the compiler executable is missing.
    subprocess.CalledProcessError
        If the compiler exits with a non-zero status.
    """
    homepage = config.homepage
    source = config.resolve(homepage.stylesheet)
    if not source.exists():
        msg = f"Stylesheet '{source}' not found."
        raise FileNotFoundError(msg)
    output_dir = config.resolve(homepage.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / f"{source.stem}.css"
    run_tool(homepage.stylesheet_command, [str(source), str(target)], cwd=config.root)
    return target


def watch_stylesheet(
    config: BuildConfig,
    *,
    interval: float = 1.0,
    iterations: int | None = None,
    on_compiled: cabc.Callable[[Path], None] | None = None,
    sleep: cabc.Callable[[float], None] = time.sleep,
) -> list[Path]:
    """Compile the stylesheet, then poll its directory and recompile on change.

    Parameters
    ----------
    config : BuildConfig
        Build configuration providing the stylesheet location.
    interval : float, optional
        Seconds between polls.
    iterations : int or None, optional
        Number of polls before returning; ``None`` polls until interrupted.
    on_compiled : callable, optional
        Invoked with the CSS path after every compilation.
    sleep : callable, optional
        Sleep function used between polls.

    Returns
    -------
    list[Path]
        CSS path of every compilation performed, in order.
    """
    style_dir = config.resolve(config.homepage.stylesheet).parent
    compiled: list[Path] = []

    def _compile() -> None:
        target = compile_stylesheet(config)
        compiled.append(target)
        if on_compiled is not None:
            on_compiled(target)

    _compile()
    snapshot = _snapshot(style_dir)
    polls = 0
    while iterations is None or polls < iterations:
        sleep(interval)
        polls += 1
        current = _snapshot(style_dir)
        if current != snapshot:
            snapshot = current
            _compile()
    return compiled


def _snapshot(style_dir: Path) -> dict[Path, int]:
    """Return the modification time of every ``.less`` file below ``style_dir``."""
    return {path: path.stat().st_mtime_ns for path in sorted(style_dir.rglob("*.less"))}


def copy_assets(config: BuildConfig) -> list[Path]:
    """Copy the homepage assets into ``<output>/assets`` and return the copied files."""
    source = config.resolve(config.homepage.assets_dir)
    if not source.is_dir():
        msg = f"Assets directory '{source}' not found."
        raise FileNotFoundError(msg)
    destination = config.resolve(config.homepage.output_dir) / "assets"
    shutil.copytree(source, destination, dirs_exist_ok=True)
    return sorted(
        destination / path.relative_to(source)
        for path in source.rglob("*")
        if path.is_file()
    )


__all__ = ["compile_stylesheet", "copy_assets", "watch_stylesheet"]
