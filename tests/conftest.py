"""Shared pytest fixtures for the smoothjs-scaffold test suite.

Provides reusable fixtures for:
- Default and customised configuration
- A template renderer bound to the packaged templates
- A freshly scaffolded project on disk
- Hand-built project trees for validator edge cases
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from smoothjs_scaffold.config import Config
from smoothjs_scaffold.scaffolder import ProjectScaffold, TemplateRenderer
from smoothjs_scaffold.utils import console


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> Config:
    """Default configuration (smoothjs@latest, no local link)."""
    return Config()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SMOOTHJS_* variables from the developer's shell out of the tests."""
    for var in ("SMOOTHJS_FRAMEWORK_VERSION", "SMOOTHJS_LINK_LOCAL", "SMOOTHJS_SCAN_EXCLUDE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Render Rich output wide enough that messages are never wrapped."""
    monkeypatch.setattr(console, "width", 240)


# ---------------------------------------------------------------------------
# Scaffolder
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
async def scaffolded_project(tmp_path: Path, config: Config) -> Path:
    """A complete project named ``my-app`` under ``tmp_path``."""
    scaffold = ProjectScaffold("my-app", tmp_path, config=config)
    ok = await scaffold.scaffold()
    assert ok, "scaffold fixture failed"
    return tmp_path / "my-app"


# ---------------------------------------------------------------------------
# Hand-built projects
# ---------------------------------------------------------------------------

VALID_APP_JS = (
    "import { Component } from 'smoothjs';\n"
    "import { router } from './router/routes.js';\n"
    "class App extends Component {}\n"
)

VALID_PACKAGE_JSON = {
    "name": "manual-app",
    "version": "1.0.0",
    "type": "module",
    "scripts": {"dev": "vite"},
    "dependencies": {"smoothjs": "latest"},
}


@pytest.fixture
def minimal_project(tmp_path: Path) -> Path:
    """Smallest project that passes validation: required entries only.

    Each required directory holds an ``index.js`` so none is empty.
    """
    root = tmp_path / "manual-app"
    for name in ("components", "pages", "stores", "router"):
        (root / name).mkdir(parents=True)
        (root / name / "index.js").write_text("export {};\n", encoding="utf-8")
    (root / "app.js").write_text(VALID_APP_JS, encoding="utf-8")
    (root / "package.json").write_text(json.dumps(VALID_PACKAGE_JSON), encoding="utf-8")
    (root / "index.html").write_text("<html></html>\n", encoding="utf-8")
    return root
