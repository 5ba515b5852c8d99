"""Unit tests for smoothjs_scaffold.config.

Tests cover:
- Default values
- Field validation (empty package name, scan exclusion stripping)
- dependency_spec with and without a local link
- save / load round trip through JSON
- from_env environment variable handling
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from smoothjs_scaffold.config import DEFAULT_SCAN_EXCLUDE, Config


pytestmark = pytest.mark.unit


class TestConfigDefaults:
    def test_default_values(self):
        config = Config()
        assert config.framework_package == "smoothjs"
        assert config.framework_version == "latest"
        assert config.link_local is None
        assert config.scan_exclude == DEFAULT_SCAN_EXCLUDE

    def test_default_scan_exclude_is_not_shared(self):
        first = Config()
        first.scan_exclude.append("tmp")
        assert "tmp" not in Config().scan_exclude

    def test_node_modules_always_excluded_by_default(self):
        assert "node_modules" in Config().scan_exclude


class TestConfigValidation:
    def test_empty_framework_package_rejected(self):
        with pytest.raises(ValidationError):
            Config(framework_package="")

    def test_empty_framework_version_rejected(self):
        with pytest.raises(ValidationError):
            Config(framework_version="")

    def test_scan_exclude_entries_are_stripped(self):
        config = Config(scan_exclude=[" dist ", "", "  ", "out"])
        assert config.scan_exclude == ["dist", "out"]


class TestDependencySpec:
    def test_version_without_link(self, tmp_path: Path):
        config = Config(framework_version="^2.1.0")
        assert config.dependency_spec(tmp_path / "my-app") == "^2.1.0"

    def test_link_to_sibling_directory(self, tmp_path: Path):
        config = Config(link_local=tmp_path / "smoothjs")
        assert config.dependency_spec(tmp_path / "my-app") == "file:../smoothjs"

    def test_link_to_nested_directory(self, tmp_path: Path):
        config = Config(link_local=tmp_path / "vendor" / "smoothjs")
        spec = config.dependency_spec(tmp_path / "apps" / "my-app")
        assert spec == "file:../../vendor/smoothjs"

    def test_link_uses_forward_slashes(self, tmp_path: Path):
        config = Config(link_local=tmp_path / "a" / "b")
        assert "\\" not in config.dependency_spec(tmp_path / "my-app")


class TestConfigSerialisation:
    def test_save_and_load(self, tmp_path: Path):
        original = Config(
            framework_version="1.2.3",
            link_local=tmp_path / "smoothjs",
            scan_exclude=["node_modules", "out"],
        )
        path = original.save(tmp_path / "nested" / "config.json")

        assert path.exists()
        loaded = Config.load(path)
        assert loaded == original

    def test_load_rejects_invalid_json(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text('{"framework_package": ""}', encoding="utf-8")
        with pytest.raises(ValidationError):
            Config.load(path)


class TestFromEnv:
    def test_no_variables_gives_defaults(self):
        assert Config.from_env() == Config()

    def test_framework_version(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SMOOTHJS_FRAMEWORK_VERSION", "^3.0.0")
        assert Config.from_env().framework_version == "^3.0.0"

    def test_link_local(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("SMOOTHJS_LINK_LOCAL", str(tmp_path / "smoothjs"))
        assert Config.from_env().link_local == tmp_path / "smoothjs"

    def test_scan_exclude_is_comma_separated(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SMOOTHJS_SCAN_EXCLUDE", "node_modules, out ,,vendor")
        assert Config.from_env().scan_exclude == ["node_modules", "out", "vendor"]

    def test_empty_variables_are_ignored(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SMOOTHJS_FRAMEWORK_VERSION", "")
        monkeypatch.setenv("SMOOTHJS_SCAN_EXCLUDE", "")
        config = Config.from_env()
        assert config.framework_version == "latest"
        assert config.scan_exclude == DEFAULT_SCAN_EXCLUDE
