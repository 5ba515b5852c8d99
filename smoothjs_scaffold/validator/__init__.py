"""Structure validation for SmoothJS projects.

Usage::

    validator = StructureValidator("/path/to/project")
    result = await validator.validate()
    validator.print_report(result)
"""

from __future__ import annotations

from pathlib import Path

from smoothjs_scaffold.config import Config
from smoothjs_scaffold.validator.structure_audit import (
    StructureValidator,
    ValidationResult,
    calculate_score,
    recommendations,
    score_band,
)

__all__ = [
    "StructureValidator",
    "ValidationResult",
    "calculate_score",
    "recommendations",
    "score_band",
    "validate_project",
]


async def validate_project(
    project_path: str | Path, config: Config | None = None
) -> ValidationResult:
    """Validate *project_path* and return the result without printing."""
    return await StructureValidator(project_path, config=config).validate()
