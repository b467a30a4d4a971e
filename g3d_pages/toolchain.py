"""Thin wrappers for invoking the external build tools (bundler, ``lessc``)."""

from __future__ import annotations

import shutil
import subprocess
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


def resolve_executable(name: str) -> str:
    """Return the absolute path of ``name`` on PATH.

    Raises
    ------
    FileNotFoundError
        If the executable cannot be located.
    """
    path = shutil.which(name)
    if not path:
        msg = f"Unable to locate '{name}' on PATH"
        raise FileNotFoundError(msg)
    return path


def run_tool(
    command: cabc.Sequence[str], args: cabc.Sequence[str], *, cwd: Path
) -> subprocess.CompletedProcess[str]:
    """Run ``command`` followed by ``args`` in ``cwd``, raising on failure."""
    executable, *base = command
    argv = [resolve_executable(executable), *base, *args]
    return subprocess.run(  # noqa: S603
        argv,
        check=True,
        cwd=cwd,
        text=True,
    )


__all__ = ["resolve_executable", "run_tool"]
