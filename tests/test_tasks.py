"""Tests for the task registry and the registered task surface."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from g3d_pages import tasks as tasks_module
from g3d_pages.config import BuildConfig
from g3d_pages.tasks import TaskError, TaskRegistry, build_registry


def test_dependencies_run_first_and_once() -> None:
    order: list[str] = []
    registry = TaskRegistry()
    registry.register("less", lambda: order.append("less"))
    registry.register("assets", lambda: order.append("assets"))
    registry.register("build", lambda: order.append("build"), ("less", "assets"))
    registry.register("site", lambda: order.append("site"), ("build", "less"))

    registry.run("site")

    assert order == ["less", "assets", "build", "site"]


def test_run_collects_and_reports_paths(tmp_path: Path) -> None:
    reported: list[Path] = []
    registry = TaskRegistry(report=reported.append)
    registry.register("one", lambda: tmp_path / "a.html")
    registry.register("many", lambda: [tmp_path / "b.html", tmp_path / "c.html"], ("one",))
    registry.register("quiet", lambda: None, ("many",))

    written = registry.run("quiet")

    expected = [tmp_path / "a.html", tmp_path / "b.html", tmp_path / "c.html"]
    assert written == expected
    assert reported == expected


def test_unknown_task_lists_known_names() -> None:
    registry = TaskRegistry()
    registry.register("build", lambda: None)
    with pytest.raises(KeyError, match="Known tasks: build"):
        registry.run("deploy")


def test_unknown_dependency_is_reported() -> None:
    registry = TaskRegistry()
    registry.register("build", lambda: None, ("missing",))
    with pytest.raises(KeyError, match="Unknown task 'missing'"):
        registry.run("build")


def test_cycles_are_rejected() -> None:
    registry = TaskRegistry()
    registry.register("a", lambda: None, ("b",))
    registry.register("b", lambda: None, ("a",))
    with pytest.raises(TaskError, match="a -> b -> a"):
        registry.run("a")


def test_duplicate_registration_is_rejected() -> None:
    registry = TaskRegistry()
    registry.register("build", lambda: None)
    with pytest.raises(TaskError, match="already registered"):
        registry.register("build", lambda: None)


def test_failing_task_stops_dependents() -> None:
    ran: list[str] = []
    registry = TaskRegistry()

    def _fail() -> None:
        raise RuntimeError("boom")

    registry.register("less", _fail)
    registry.register("build", lambda: ran.append("build"), ("less",))
    with pytest.raises(RuntimeError, match="boom"):
        registry.run("build")
    assert ran == []


def test_registered_task_surface(tmp_path: Path) -> None:
    registry = build_registry(BuildConfig(root=tmp_path))
    assert registry.names == [
        "test",
        "dev",
        "build",
        "fetch",
        "homepage-less",
        "homepage-less-watch",
        "homepage-assets",
        "homepage-build",
        "website",
    ]
    assert registry.dependencies("homepage-build") == ("homepage-less", "homepage-assets")
    assert registry.dependencies("website") == ("homepage-build",)


def test_website_runs_homepage_pipeline_in_order(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    order: list[str] = []
    monkeypatch.setattr(
        tasks_module, "compile_stylesheet", lambda config: order.append("less")
    )
    monkeypatch.setattr(tasks_module, "copy_assets", lambda config: order.append("assets"))
    monkeypatch.setattr(tasks_module, "build_homepage", lambda config: order.append("pages"))

    build_registry(BuildConfig(root=tmp_path)).run("website")

    assert order == ["less", "assets", "pages"]


def test_library_tasks_delegate(tmp_path: Path, mocker: typ.Any) -> None:
    run = mocker.patch.object(
        tasks_module.LibraryTasks, "run", return_value=tmp_path / "options.json"
    )
    written = build_registry(BuildConfig(root=tmp_path)).run("build")
    run.assert_called_once_with("build")
    assert written == [tmp_path / "options.json"]
