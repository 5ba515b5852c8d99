"""Structure audit for SmoothJS projects.

Walks a project directory and checks it against the conventional layout:
required and recommended directories and files, the content of ``app.js``
and ``package.json``, and component/page files living outside their
directories.  Findings are plain strings grouped into issues, warnings and
suggestions; issues and warnings lower the score.
"""

from __future__ import annotations

import asyncio
import json
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, computed_field
from rich.panel import Panel
from rich.table import Table

from smoothjs_scaffold.config import Config
from smoothjs_scaffold.structure import (
    RECOMMENDED_DIRS,
    RECOMMENDED_FILES,
    REQUIRED_DIRS,
    REQUIRED_FILES,
    SOURCE_EXTENSIONS,
)
from smoothjs_scaffold.utils import console

ISSUE_PENALTY = 20
WARNING_PENALTY = 5

# Lower bound of each band, best first.
SCORE_BANDS: list[tuple[int, str]] = [
    (90, "excellent"),
    (70, "good"),
    (50, "fair"),
    (0, "needs-work"),
]

BAND_MESSAGES: dict[str, str] = {
    "excellent": "Excellent! Your project follows SmoothJS best practices.",
    "good": "Good! Your project has a solid structure with room for improvement.",
    "fair": "Fair. Consider restructuring your project to follow SmoothJS conventions.",
    "needs-work": "Needs work. Your project would benefit from following the recommended structure.",
}


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------

class ValidationResult(BaseModel):
    """Outcome of one validation run."""

    project_path: str = Field(..., description="Absolute path of the validated project")
    is_valid: bool = Field(default=True, description="True when there are no issues")
    issues: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    score: int = Field(default=100, ge=0, le=100)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def band(self) -> str:
        """Qualitative band for the score: excellent, good, fair or needs-work."""
        return score_band(self.score)

    @classmethod
    def from_findings(
        cls,
        project_path: str | Path,
        issues: list[str],
        warnings: list[str],
        suggestions: list[str],
    ) -> "ValidationResult":
        """Build a result, deriving ``is_valid`` and ``score`` from the findings."""
        return cls(
            project_path=str(project_path),
            is_valid=not issues,
            issues=list(issues),
            warnings=list(warnings),
            suggestions=list(suggestions),
            score=calculate_score(len(issues), len(warnings)),
        )


def calculate_score(issue_count: int, warning_count: int) -> int:
    """``max(0, 100 - 20 * issues - 5 * warnings)``."""
    return max(0, 100 - ISSUE_PENALTY * issue_count - WARNING_PENALTY * warning_count)


def score_band(score: int) -> str:
    for lower, name in SCORE_BANDS:
        if score >= lower:
            return name
    return SCORE_BANDS[-1][1]


@dataclass
class _Findings:
    issues: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _read_file_async(path: Path) -> str:
    """Read a file's content asynchronously."""
    return await asyncio.to_thread(path.read_text, "utf-8")


def _collect_files(
    root: Path,
    extensions: frozenset[str],
    skip_dirs: set[str],
    errors: list[str],
) -> list[Path]:
    """Recursively collect files matching *extensions*.

    Hidden directories, symlinked directories and directories named in
    *skip_dirs* are not entered.  Directories that cannot be listed are
    reported in *errors* and skipped.
    """
    results: list[Path] = []
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        errors.append(f"Could not scan {root}: {exc.strerror or exc}")
        return results
    for entry in entries:
        child = Path(entry.path)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = not is_dir and entry.is_file()
        except OSError as exc:
            errors.append(f"Could not scan {child}: {exc.strerror or exc}")
            continue
        if is_dir:
            if entry.name.startswith(".") or entry.name in skip_dirs:
                continue
            results.extend(_collect_files(child, extensions, skip_dirs, errors))
        elif is_file and child.suffix in extensions:
            results.append(child)
    return results


def _stat_mode(path: Path) -> Optional[int]:
    """``st_mode`` of *path*, or None when nothing exists there.

    Any other OSError (permissions, I/O) propagates to the caller.
    """
    try:
        return os.stat(path).st_mode
    except (FileNotFoundError, NotADirectoryError):
        return None


def _relative(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def _is_component_like(rel: Path) -> bool:
    return "component" in rel.name.lower() or rel.suffix in (".jsx", ".tsx")


def _is_page_like(rel: Path) -> bool:
    return "page" in rel.name.lower()


# ---------------------------------------------------------------------------
# StructureValidator
# ---------------------------------------------------------------------------

class StructureValidator:
    """Validates a project directory against the SmoothJS layout.

    Every check catches its own filesystem errors and records them as
    findings, so ``validate`` always returns a complete result.
    """

    def __init__(self, project_path: str | Path, config: Config | None = None) -> None:
        self.project_path = Path(project_path).resolve()
        self.config = config or Config()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def validate(self) -> ValidationResult:
        """Run every check and return the scored result."""
        root = self.project_path
        problem = await asyncio.to_thread(_project_dir_problem, root)
        if problem is not None:
            return ValidationResult(
                project_path=str(root),
                is_valid=False,
                issues=[problem],
                score=0,
            )

        findings = _Findings()
        await self._check_directories(findings)
        await self._check_files(findings)
        await self._check_common_issues(findings)

        return ValidationResult.from_findings(
            root, findings.issues, findings.warnings, findings.suggestions
        )

    # ------------------------------------------------------------------
    # Directories
    # ------------------------------------------------------------------

    async def _check_directories(self, findings: _Findings) -> None:
        for name in REQUIRED_DIRS:
            path = self.project_path / name
            try:
                mode = await asyncio.to_thread(_stat_mode, path)
            except OSError as exc:
                findings.issues.append(f"Could not inspect {name}/: {exc.strerror or exc}")
                continue
            if mode is None:
                findings.issues.append(f"Missing required directory: {name}")
                continue

            if not stat.S_ISDIR(mode):
                findings.issues.append(f"{name}/ exists but is not a directory")
                continue

            try:
                entries = await asyncio.to_thread(os.listdir, path)
            except OSError as exc:
                findings.warnings.append(f"Could not list {name}/: {exc.strerror or exc}")
                continue
            if not entries:
                findings.warnings.append(f"{name}/ directory is empty")

        for name in RECOMMENDED_DIRS:
            try:
                mode = await asyncio.to_thread(_stat_mode, self.project_path / name)
            except OSError as exc:
                findings.warnings.append(f"Could not inspect {name}/: {exc.strerror or exc}")
                continue
            if mode is None or not stat.S_ISDIR(mode):
                findings.suggestions.append(
                    f"Consider adding {name}/ directory for better organization"
                )

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    async def _check_files(self, findings: _Findings) -> None:
        for name in REQUIRED_FILES:
            path = self.project_path / name
            try:
                mode = await asyncio.to_thread(_stat_mode, path)
            except OSError as exc:
                findings.issues.append(f"Could not inspect {name}: {exc.strerror or exc}")
                continue
            if mode is None:
                findings.issues.append(f"Missing required file: {name}")
                continue
            if name == "app.js":
                await self._check_app_js(path, findings)
            elif name == "package.json":
                await self._check_package_json(path, findings)

        for name in RECOMMENDED_FILES:
            try:
                mode = await asyncio.to_thread(_stat_mode, self.project_path / name)
            except OSError as exc:
                findings.warnings.append(f"Could not inspect {name}: {exc.strerror or exc}")
                continue
            if mode is None:
                findings.suggestions.append(f"Consider adding {name} for better project setup")

    async def _check_app_js(self, path: Path, findings: _Findings) -> None:
        """Look for the framework import, the Component class and the router."""
        try:
            content = await _read_file_async(path)
        except (OSError, UnicodeDecodeError) as exc:
            findings.warnings.append(f"Could not read app.js for validation: {exc}")
            return

        if "import" not in content or self.config.framework_package not in content:
            findings.warnings.append("app.js may not be properly importing SmoothJS")
        if "Component" not in content:
            findings.warnings.append("app.js may not be using SmoothJS Component class")
        if "router" not in content:
            findings.warnings.append("app.js may not be using SmoothJS Router")

    async def _check_package_json(self, path: Path, findings: _Findings) -> None:
        """Check the framework dependency, the module type and the dev script."""
        try:
            content = await _read_file_async(path)
        except (OSError, UnicodeDecodeError) as exc:
            findings.warnings.append(f"Could not read package.json for validation: {exc}")
            return
        try:
            pkg = json.loads(content)
        except json.JSONDecodeError as exc:
            findings.warnings.append(f"Could not parse package.json: {exc}")
            return
        if not isinstance(pkg, dict):
            findings.warnings.append("Could not parse package.json: top level is not an object")
            return

        framework = self.config.framework_package
        dependencies = pkg.get("dependencies")
        if not isinstance(dependencies, dict) or not dependencies.get(framework):
            findings.warnings.append(f"package.json does not include {framework} dependency")

        if pkg.get("type") != "module":
            findings.warnings.append(
                'package.json should have "type": "module" for ES modules'
            )

        scripts = pkg.get("scripts")
        if not isinstance(scripts, dict) or not scripts.get("dev"):
            findings.suggestions.append("Consider adding dev script to package.json")

    # ------------------------------------------------------------------
    # Common issues
    # ------------------------------------------------------------------

    async def _check_common_issues(self, findings: _Findings) -> None:
        for name in REQUIRED_DIRS:
            index_path = self.project_path / name / "index.js"
            try:
                mode = await asyncio.to_thread(_stat_mode, index_path)
            except OSError as exc:
                findings.warnings.append(
                    f"Could not inspect {name}/index.js: {exc.strerror or exc}"
                )
                continue
            if mode is None:
                findings.suggestions.append(
                    f"Consider adding index.js in {name}/ for cleaner imports"
                )

        scan_errors: list[str] = []
        files = await asyncio.to_thread(
            _collect_files,
            self.project_path,
            SOURCE_EXTENSIONS,
            set(self.config.scan_exclude),
            scan_errors,
        )
        findings.warnings.extend(scan_errors)

        relative = [_relative(f, self.project_path) for f in files]
        misplaced_components = [
            rel for rel in relative
            if _is_component_like(rel) and "components" not in rel.parts[:-1]
        ]
        if misplaced_components:
            findings.warnings.append(
                "Found component-like files outside components/ directory"
            )

        misplaced_pages = [
            rel for rel in relative
            if _is_page_like(rel) and "pages" not in rel.parts[:-1]
        ]
        if misplaced_pages:
            findings.warnings.append("Found page-like files outside pages/ directory")

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def print_report(self, result: ValidationResult, details: bool = False) -> None:
        """Pretty-print a validation report to the console using Rich."""
        console.print(
            Panel(
                f"[bold]Project Structure Validation Report[/bold]\n"
                f"Project: {result.project_path}",
                border_style="blue",
            )
        )

        if result.issues:
            console.print(f"[red]Found {len(result.issues)} critical issue(s):[/red]")
            for issue in result.issues:
                console.print(f"   • {issue}", markup=False)
        else:
            console.print("[green]No critical issues found.[/green]")

        if result.warnings:
            console.print(f"[yellow]Found {len(result.warnings)} warning(s):[/yellow]")
            for warning in result.warnings:
                console.print(f"   • {warning}", markup=False)

        if result.suggestions:
            console.print(f"[cyan]{len(result.suggestions)} suggestion(s) for improvement:[/cyan]")
            for suggestion in result.suggestions:
                console.print(f"   • {suggestion}", markup=False)

        score_color = "green" if result.score >= 70 else "yellow" if result.score >= 50 else "red"
        console.print(
            f"\n[bold]Project Structure Score:[/bold] "
            f"[{score_color}]{result.score}/100[/{score_color}]"
        )
        console.print(BAND_MESSAGES[result.band])

        if result.issues:
            console.print(
                "\n[bold red]Critical issues must be fixed for the project to work properly.[/bold red]"
            )

        if details:
            self.print_recommendations(result)
        elif result.issues or result.warnings or result.suggestions:
            console.print("\n[dim]Run with --details for detailed recommendations.[/dim]")

    def print_recommendations(self, result: ValidationResult) -> None:
        """Print one suggested action per finding."""
        rows = recommendations(result)
        if not rows:
            return
        table = Table(title="Detailed Recommendations", show_lines=True)
        table.add_column("Kind", width=10)
        table.add_column("Finding")
        table.add_column("Action")
        styles = {"issue": "red", "warning": "yellow", "suggestion": "green"}
        for kind, message, action in rows:
            style = styles[kind]
            table.add_row(f"[{style}]{kind.upper()}[/{style}]", message, action)
        console.print(table)


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------

def recommendations(result: ValidationResult) -> list[tuple[str, str, str]]:
    """Return ``(kind, finding, action)`` for every finding, issues first."""
    rows: list[tuple[str, str, str]] = []
    rows.extend(("issue", i, action_for_issue(i)) for i in result.issues)
    rows.extend(("warning", w, action_for_warning(w)) for w in result.warnings)
    rows.extend(("suggestion", s, action_for_suggestion(s)) for s in result.suggestions)
    return rows


def action_for_issue(issue: str) -> str:
    if issue.startswith("Missing required directory: "):
        directory = issue.split(": ", 1)[1]
        return f"Create the {directory}/ directory and add appropriate files"
    if issue.startswith("Missing required file: "):
        filename = issue.split(": ", 1)[1]
        return f"Create {filename} with proper content"
    return "Review and fix the issue according to SmoothJS conventions"


def action_for_warning(warning: str) -> str:
    if "may not be properly importing" in warning:
        return "Ensure proper SmoothJS imports in your files"
    if "directory is empty" in warning:
        return "Add appropriate files to the directory or remove it if not needed"
    if "outside components/" in warning:
        return "Move component files into components/ and export them from components/index.js"
    if "outside pages/" in warning:
        return "Move page files into pages/ and export them from pages/index.js"
    return "Review the warning and take appropriate action"


def action_for_suggestion(suggestion: str) -> str:
    if suggestion.startswith("Consider adding "):
        # "Consider adding README.md for better project setup" -> "README.md"
        item = suggestion[len("Consider adding "):].split(" for ", 1)[0]
        return f"Add {item} to improve your project structure"
    if suggestion.startswith("Consider restructuring"):
        return "Reorganize your project to follow the recommended directory structure"
    return "Consider implementing the suggestion for better project organization"


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------

def _project_dir_problem(root: Path) -> Optional[str]:
    """Return an issue string if *root* is not an existing directory."""
    try:
        mode = _stat_mode(root)
    except OSError as exc:
        return f"Could not access project directory {root}: {exc.strerror or exc}"
    if mode is None:
        return f"Project directory not found: {root}"
    if not stat.S_ISDIR(mode):
        return f"Project path is not a directory: {root}"
    return None
