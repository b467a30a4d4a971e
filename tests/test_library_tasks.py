from __future__ import annotations

import json
import subprocess
from pathlib import Path
from types import SimpleNamespace

import pytest

from g3d_pages import toolchain
from g3d_pages.config import BuildConfigError, LibrarySettings
from g3d_pages.library import LibraryTasks, ProvideEntry, collect_provide_entries


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("export default {};\n", encoding="utf-8")
    return path


@pytest.fixture
def library_root(tmp_path: Path) -> Path:
    _touch(tmp_path / "src" / "G3D.js")
    _touch(tmp_path / "src" / "core" / "G3D.Mesh.js")
    _touch(tmp_path / "src" / "core" / "G3D.Scene.js")
    _touch(tmp_path / "src" / "G3D.Camera.js")
    _touch(tmp_path / "src" / "util" / "helpers.js")
    return tmp_path


@pytest.fixture
def recorded_runs(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, object]]:
    calls: list[dict[str, object]] = []

    def fake_run(argv: list[str], check: bool, cwd: Path, text: bool):
        calls.append({"argv": argv, "check": check, "cwd": cwd})
        return SimpleNamespace(returncode=0)

    monkeypatch.setattr(toolchain.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(toolchain.subprocess, "run", fake_run)
    return calls


def test_provide_entries_named_after_second_segment(library_root: Path) -> None:
    entries = collect_provide_entries(library_root, "src/**/G3D.*.js")
    assert entries == (
        ProvideEntry("Camera", (library_root / "src" / "G3D.Camera.js").resolve()),
        ProvideEntry("Mesh", (library_root / "src" / "core" / "G3D.Mesh.js").resolve()),
        ProvideEntry("Scene", (library_root / "src" / "core" / "G3D.Scene.js").resolve()),
    )


def test_provide_entries_reject_duplicate_names(library_root: Path) -> None:
    _touch(library_root / "src" / "extra" / "G3D.Mesh.js")
    with pytest.raises(BuildConfigError, match="'Mesh' is provided by both"):
        collect_provide_entries(library_root, "src/**/G3D.*.js")


def test_bundler_options_include_provide_mapping(library_root: Path) -> None:
    tasks = LibraryTasks(LibrarySettings(), root=library_root)
    options = tasks.bundler_options()
    assert options["umdName"] == "G3D"
    assert options["entry"] == "./src/G3D.js"
    assert options["demo"] == "./pages"
    assert options["port"] == 3000
    assert options["devCors"] is True
    assert options["testEntryPattern"] == "test/**/*.spec.js"
    assert options["loaders"] == [{"test": r"\.glsl$", "use": "raw-loader"}]
    assert sorted(options["provide"]) == ["Camera", "Mesh", "Scene"]


def test_explicit_provide_entries_skip_globbing(tmp_path: Path) -> None:
    provide = (ProvideEntry("Light", tmp_path / "G3D.Light.js"),)
    tasks = LibraryTasks(LibrarySettings(), root=tmp_path, provide=provide)
    assert tasks.bundler_options()["provide"] == {"Light": str(tmp_path / "G3D.Light.js")}


@pytest.mark.parametrize("task", ["test", "dev", "build"])
def test_library_task_invokes_bundler(
    library_root: Path, recorded_runs: list[dict[str, object]], task: str
) -> None:
    tasks = LibraryTasks(LibrarySettings(), root=library_root)
    options_path = getattr(tasks, task)()

    assert options_path == library_root / "build" / "library-options.json"
    written = json.loads(options_path.read_text(encoding="utf-8"))
    assert written["umdName"] == "G3D"
    assert "Mesh" in written["provide"]

    assert len(recorded_runs) == 1
    call = recorded_runs[0]
    assert call["argv"] == [
        "/usr/bin/npx",
        "webpack",
        "--env",
        f"task={task}",
        "--env",
        f"options={options_path}",
    ]
    assert call["check"] is True
    assert call["cwd"] == library_root


def test_unknown_library_task(library_root: Path) -> None:
    tasks = LibraryTasks(LibrarySettings(), root=library_root)
    with pytest.raises(KeyError, match="Unknown library task 'lint'"):
        tasks.run("lint")


def test_missing_bundler_executable(
    library_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(toolchain.shutil, "which", lambda name: None)
    tasks = LibraryTasks(LibrarySettings(), root=library_root)
    with pytest.raises(FileNotFoundError, match="Unable to locate 'npx'"):
        tasks.build()


def test_bundler_failure_propagates(
    library_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def failing_run(argv: list[str], check: bool, cwd: Path, text: bool):
        raise subprocess.CalledProcessError(returncode=2, cmd=argv)

    monkeypatch.setattr(toolchain.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(toolchain.subprocess, "run", failing_run)
    tasks = LibraryTasks(LibrarySettings(), root=library_root)
    with pytest.raises(subprocess.CalledProcessError):
        tasks.build()
