"""Integration tests for the create -> add -> validate workflow.

These tests drive the real scaffolder, validator and CLI against a temporary
directory and check that the generated project is internally consistent:
every relative import points at an existing module that exports the
imported names.

No Node.js toolchain is required.
"""

from __future__ import annotations

import json
import re
import shutil
from pathlib import Path

import pytest

from smoothjs_scaffold.cli import main
from smoothjs_scaffold.scaffolder import IndexFile, ProjectScaffold, add_item
from smoothjs_scaffold.validator import validate_project


pytestmark = pytest.mark.integration

_RE_RELATIVE_IMPORT = re.compile(
    r"^import\s*\{(?P<names>[^}]*)\}\s*from\s*'(?P<source>\.{1,2}/[^']+)';",
    re.MULTILINE,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _relative_imports(project: Path) -> list[tuple[Path, list[str], Path]]:
    """Return (importing file, imported names, resolved target) for every JS file."""
    found = []
    for js_file in sorted(project.rglob("*.js")):
        text = js_file.read_text(encoding="utf-8")
        for m in _RE_RELATIVE_IMPORT.finditer(text):
            names = [
                n.strip().split(" as ")[0].strip()
                for n in m.group("names").split(",")
                if n.strip()
            ]
            target = (js_file.parent / m.group("source")).resolve()
            found.append((js_file, names, target))
    return found


def _assert_imports_resolve(project: Path) -> None:
    imports = _relative_imports(project)
    assert imports, "expected the generated project to use relative imports"
    for source_file, names, target in imports:
        assert target.is_file(), f"{source_file} imports missing {target}"
        exported = IndexFile.parse(target.read_text(encoding="utf-8")).exported_names()
        for name in names:
            assert name in exported, f"{source_file} imports {name} not exported by {target}"


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestGeneratedProjectConsistency:
    @pytest.mark.asyncio
    async def test_example_imports_resolve(self, scaffolded_project: Path):
        _assert_imports_resolve(scaffolded_project)

    @pytest.mark.asyncio
    async def test_index_files_export_every_example(self, scaffolded_project: Path):
        components = IndexFile.parse(
            (scaffolded_project / "components" / "index.js").read_text(encoding="utf-8")
        )
        assert components.exported_names() == ["Button", "Card"]

        pages = IndexFile.parse(
            (scaffolded_project / "pages" / "index.js").read_text(encoding="utf-8")
        )
        assert pages.exported_names() == ["HomePage", "AboutPage", "NotFound"]

        stores = IndexFile.parse(
            (scaffolded_project / "stores" / "index.js").read_text(encoding="utf-8")
        )
        assert "counterStore" in stores.exported_names()
        assert "counterActions" in stores.exported_names()

    @pytest.mark.asyncio
    async def test_added_items_keep_imports_consistent(self, scaffolded_project: Path):
        for item_type, name in [
            ("component", "UserCard"),
            ("page", "profile"),
            ("store", "user-session"),
            ("util", "format-price"),
        ]:
            await add_item(item_type, name, scaffolded_project)

        _assert_imports_resolve(scaffolded_project)
        stores = IndexFile.parse(
            (scaffolded_project / "stores" / "index.js").read_text(encoding="utf-8")
        )
        assert stores.exports_from("./userSession.js")[0].names == [
            "userSessionStore",
            "selectUserSessionData",
            "selectUserSessionLoading",
            "selectUserSessionError",
            "userSessionActions",
        ]

        result = await validate_project(scaffolded_project)
        assert result.is_valid
        assert result.score == 100

    @pytest.mark.asyncio
    async def test_two_projects_side_by_side(self, tmp_path: Path):
        first = ProjectScaffold("app-one", tmp_path)
        second = ProjectScaffold("app-two", tmp_path)
        assert await first.scaffold() is True
        assert await second.scaffold() is True

        for name in ("app-one", "app-two"):
            pkg = json.loads((tmp_path / name / "package.json").read_text(encoding="utf-8"))
            assert pkg["name"] == name
            assert (await validate_project(tmp_path / name)).score == 100


class TestCliWorkflow:
    def test_full_workflow(self, tmp_path: Path, capsys):
        assert main(["create", "shop"], cwd=tmp_path) == 0
        project = tmp_path / "shop"

        assert main(["add", "component", "ProductCard"], cwd=project) == 0
        assert main(["add", "page", "checkout"], cwd=project) == 0
        assert main(["add", "store", "cart"], cwd=project) == 0
        assert main(["add", "util", "currency"], cwd=project) == 0

        capsys.readouterr()
        assert main(["validate", "--json"], cwd=project) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["score"] == 100
        assert data["issues"] == []
        assert data["warnings"] == []

        shutil.rmtree(project / "components")
        assert main(["validate"], cwd=project) == 1

    def test_adding_twice_keeps_single_export(self, tmp_path: Path):
        assert main(["create", "twice"], cwd=tmp_path) == 0
        project = tmp_path / "twice"

        assert main(["add", "component", "Badge"], cwd=project) == 0
        assert main(["add", "component", "Badge"], cwd=project) == 0

        index = (project / "components" / "index.js").read_text(encoding="utf-8")
        assert index.count("export { Badge } from './Badge.js';") == 1
