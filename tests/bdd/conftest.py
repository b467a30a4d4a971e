"""Shared fixtures and steps for the homepage pytest-bdd scenarios."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import when

from g3d_pages import tasks as tasks_module
from g3d_pages.config import BuildConfig
from g3d_pages.tasks import build_registry

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Lay out an empty project and stub the stylesheet compiler."""
    (tmp_path / "website" / "homepage-src" / "assets").mkdir(parents=True)
    (tmp_path / "website" / "homepage-src" / "assets" / "logo.svg").write_text(
        "<svg/>", encoding="utf-8"
    )

    def _fake_compile(config: BuildConfig) -> Path:
        target = config.resolve(config.homepage.output_dir) / "index.css"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("/* stub */\n", encoding="utf-8")
        return target

    monkeypatch.setattr(tasks_module, "compile_stylesheet", _fake_compile)
    return tmp_path


@pytest.fixture
def write_index(project_root: Path) -> typ.Callable[[str], None]:
    """Return a helper that writes ``doc.yaml`` for the scenario project."""

    def _write(text: str) -> None:
        path = project_root / "website" / "homepage-src" / "doc.yaml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    return _write


@when("I run the homepage-build task")
def when_run_homepage_build(project_root: Path, scenario_state: ScenarioState) -> None:
    """Run ``homepage-build`` and record written paths or the raised error."""
    registry = build_registry(BuildConfig(root=project_root))
    try:
        scenario_state["written"] = registry.run("homepage-build")
    except Exception as exc:  # noqa: BLE001 - asserted by later steps
        scenario_state["error"] = exc
