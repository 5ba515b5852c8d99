"""smoothjs-scaffold configuration.

Typed configuration shared by the scaffolder, the validator and the CLI.
Settings use a Pydantic v2 model so they are validated at construction time
and can be serialised to/from JSON or read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_SCAN_EXCLUDE: list[str] = ["node_modules", "dist", "build", "coverage"]


class Config(BaseModel):
    """Global smoothjs-scaffold configuration.

    Instances are created once by the CLI entry point (or by tests) and then
    passed to ``ProjectScaffold`` and ``StructureValidator``.
    """

    framework_package: str = Field(
        default="smoothjs",
        min_length=1,
        description="npm package name of the framework",
    )
    framework_version: str = Field(
        default="latest",
        min_length=1,
        description="Version tag written to package.json when not linking locally",
    )
    link_local: Optional[Path] = Field(
        default=None,
        description="Local checkout of the framework; referenced as a file: dependency",
    )
    scan_exclude: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SCAN_EXCLUDE),
        description="Directory names skipped when scanning for source files",
    )

    @field_validator("scan_exclude")
    @classmethod
    def _strip_exclusions(cls, value: list[str]) -> list[str]:
        return [v.strip() for v in value if v.strip()]

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def dependency_spec(self, project_dir: Path) -> str:
        """Return the ``package.json`` dependency value for the framework.

        With ``link_local`` set this is a ``file:`` reference relative to
        *project_dir*; otherwise it is ``framework_version``.
        """
        if self.link_local is None:
            return self.framework_version
        target = Path(os.path.abspath(self.link_local))
        rel = os.path.relpath(target, os.path.abspath(project_dir))
        return f"file:{Path(rel).as_posix()}"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SMOOTHJS_FRAMEWORK_VERSION, SMOOTHJS_LINK_LOCAL,
            SMOOTHJS_SCAN_EXCLUDE (comma separated).
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SMOOTHJS_FRAMEWORK_VERSION"):
            kwargs["framework_version"] = os.environ["SMOOTHJS_FRAMEWORK_VERSION"]
        if os.environ.get("SMOOTHJS_LINK_LOCAL"):
            kwargs["link_local"] = Path(os.environ["SMOOTHJS_LINK_LOCAL"])
        if os.environ.get("SMOOTHJS_SCAN_EXCLUDE"):
            kwargs["scan_exclude"] = os.environ["SMOOTHJS_SCAN_EXCLUDE"].split(",")
        return cls(**kwargs)
