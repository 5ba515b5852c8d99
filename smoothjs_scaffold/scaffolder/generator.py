"""Main scaffolding orchestrator.

Creates a new SmoothJS project directory from the Jinja2 templates, and adds
single items (component, page, store, util) to an existing project while
registering them in the matching index file.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

from rich.panel import Panel

from smoothjs_scaffold.config import Config
from smoothjs_scaffold.exceptions import FilesystemError, InvalidInputError
from smoothjs_scaffold.structure import DIRECTORIES, ITEM_TYPES
from smoothjs_scaffold.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

from .index_file import IndexFile
from .templates import TemplateRenderer, camel_case, item_template, pascal_case


PROJECT_NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")

_RE_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")


# ---------------------------------------------------------------------------
# File tables
# ---------------------------------------------------------------------------

# (template, output path relative to the project root), written in order.
TEMPLATE_FILES: list[tuple[str, str]] = [
    ("project/package.json.j2", "package.json"),
    ("project/README.md.j2", "README.md"),
    ("project/index.html.j2", "index.html"),
    ("project/app.js.j2", "app.js"),
    ("project/components/index.js.j2", "components/index.js"),
    ("project/pages/index.js.j2", "pages/index.js"),
    ("project/stores/index.js.j2", "stores/index.js"),
    ("project/router/index.js.j2", "router/index.js"),
    ("project/utils/index.js.j2", "utils/index.js"),
    ("project/styles/index.css.j2", "styles/index.css"),
    ("project/gitignore.j2", ".gitignore"),
    ("project/vite.config.js.j2", "vite.config.js"),
    ("project/jsconfig.json.j2", "jsconfig.json"),
]

EXAMPLE_FILES: list[tuple[str, str]] = [
    ("project/components/Button.js.j2", "components/Button.js"),
    ("project/components/Card.js.j2", "components/Card.js"),
    ("project/pages/HomePage.js.j2", "pages/HomePage.js"),
    ("project/pages/AboutPage.js.j2", "pages/AboutPage.js"),
    ("project/pages/NotFound.js.j2", "pages/NotFound.js"),
    ("project/stores/counter.js.j2", "stores/counter.js"),
    ("project/router/routes.js.j2", "router/routes.js"),
]


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------

def validate_project_name(name: str | None) -> str:
    """Return *name* unchanged if it is a valid project name.

    Raises:
        InvalidInputError: If the name is missing or contains anything other
            than lowercase letters, digits and hyphens.
    """
    if not name:
        raise InvalidInputError("Project name is required")
    if not PROJECT_NAME_PATTERN.match(name):
        raise InvalidInputError(
            "Project name must contain only lowercase letters, numbers, and hyphens"
        )
    return name


# ---------------------------------------------------------------------------
# Main scaffold
# ---------------------------------------------------------------------------


class ProjectScaffold:
    """Creates and extends SmoothJS projects.

    ``project_dir`` is ``target_dir / project_name``.  Every filesystem call
    is awaited one at a time, so files are written in a fixed order.
    """

    def __init__(
        self,
        project_name: str,
        target_dir: str | Path,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.project_name = project_name
        self.target_dir = Path(target_dir).resolve()
        self.project_dir = self.target_dir / project_name
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()
        self.directories = [d.name for d in DIRECTORIES]
        self.written_files: list[Path] = []

    @classmethod
    def from_project(
        cls, project_path: str | Path, config: Config | None = None
    ) -> "ProjectScaffold":
        """Open an existing project directory for ``add_item``."""
        resolved = Path(project_path).resolve()
        return cls(resolved.name, resolved.parent, config=config)

    # -- Public API --------------------------------------------------------

    async def scaffold(self) -> bool:
        """Create the complete project structure.

        Returns ``True`` on success.  On the first failure the error is
        printed and ``False`` is returned; whatever was already written is
        left in place.
        """
        console.print(
            Panel(
                f"[bold]Creating SmoothJS project[/bold] {self.project_name}\n"
                f"Location: {self.project_dir}",
                border_style="blue",
            )
        )
        context = self.build_context()

        try:
            await self._create_project_directory()
            await self._create_subdirectories()
            await self._write_files(TEMPLATE_FILES, context)
            await self._write_files(EXAMPLE_FILES, context)
        except FilesystemError as exc:
            print_error(f"Scaffolding failed: {exc}")
            return False

        print_success(f"Project {self.project_name} created successfully!")
        print_summary_table(
            {
                "Location": str(self.project_dir),
                "Files written": str(len(self.written_files)),
                self.config.framework_package: context["framework_dependency"],
            },
            title="Project",
        )
        console.print("Next steps:")
        console.print(f"  cd {self.project_name}")
        console.print("  npm install")
        console.print("  npm run dev")
        return True

    async def add_item(self, item_type: str, name: str) -> Path:
        """Add a component, page, store or util to the project.

        The item file is written (replacing an existing one) and an export is
        registered in the directory's index file unless one from the same
        module already exists.

        Returns:
            Path of the written item file.

        Raises:
            InvalidInputError: For an unknown type or an unusable name.  Raised
                before anything is written.
            FilesystemError: If the project is missing or the item file
                cannot be written.
        """
        if item_type not in ITEM_TYPES:
            raise InvalidInputError(
                f"Invalid type '{item_type}'. Must be one of: {', '.join(ITEM_TYPES)}"
            )
        if not name or not name.strip():
            raise InvalidInputError("Item name is required")

        pascal = pascal_case(name)
        camel = camel_case(name)
        if not _RE_IDENTIFIER.match(pascal):
            raise InvalidInputError(
                f"Item name must form a valid JavaScript identifier: {name!r}"
            )
        if not self.project_dir.is_dir():
            raise FilesystemError(self.project_dir, "Project directory not found")

        rel_path, template_name, export_names = _item_plan(item_type, pascal, camel)
        context = {
            **self.build_context(),
            "name": pascal if item_type in ("component", "page") else camel,
        }

        out = self.project_dir / rel_path
        if out.exists():
            print_warning(f"Overwriting existing {rel_path}")
        await self._write(template_name, rel_path, context)

        _, index_rel = ITEM_TYPES[item_type]
        await self.update_index_file(index_rel, export_names, f"./{out.name}")
        return out

    async def update_index_file(self, index_rel: str, names: list[str], source: str) -> bool:
        """Register ``export { names } from source`` in *index_rel*.

        A missing index file is created.  Read/write failures are reported as
        warnings and return ``False``; the item file stays written.
        """
        index_path = self.project_dir / index_rel
        text = ""
        if index_path.exists():
            try:
                text = await asyncio.to_thread(index_path.read_text, "utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                print_warning(f"Could not update {index_rel}: {exc}")
                return False

        index = IndexFile.parse(text)
        if index.exports_from(source):
            console.print(f"  [dim]{index_rel} already exports {source}[/dim]")
            return False
        clashes = index.conflicting_names(names)
        if clashes:
            print_warning(
                f"{index_rel} already exports {', '.join(clashes)} from another module; "
                f"add the export for {source} by hand"
            )
            return False
        index.add_export(names, source)

        try:
            await asyncio.to_thread(index_path.write_text, index.render(), "utf-8")
        except OSError as exc:
            print_warning(f"Could not update {index_rel}: {exc}")
            return False
        console.print(f"  [green]Updated[/green] {index_rel}")
        return True

    # -- Context building --------------------------------------------------

    def build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the project settings."""
        return {
            "project_name": self.project_name,
            "framework_package": self.config.framework_package,
            "framework_dependency": self.config.dependency_spec(self.project_dir),
        }

    # -- Filesystem steps --------------------------------------------------

    async def _create_project_directory(self) -> None:
        try:
            await asyncio.to_thread(self.project_dir.mkdir, parents=True, exist_ok=False)
        except FileExistsError as exc:
            raise FilesystemError(self.project_dir, "Project directory already exists") from exc
        except OSError as exc:
            raise FilesystemError(
                self.project_dir, f"Failed to create project directory ({exc.strerror or exc})"
            ) from exc
        console.print(f"  [green]Created[/green] {self.project_name}/")

    async def _create_subdirectories(self) -> None:
        for d in self.directories:
            dir_path = self.project_dir / d
            try:
                await asyncio.to_thread(dir_path.mkdir, parents=True, exist_ok=True)
            except OSError as exc:
                raise FilesystemError(
                    dir_path, f"Failed to create directory {d} ({exc.strerror or exc})"
                ) from exc
            console.print(f"  [green]Created[/green] {d}/")

    async def _write_files(self, files: list[tuple[str, str]], context: dict[str, Any]) -> None:
        for template_name, rel_path in files:
            await self._write(template_name, rel_path, context)

    async def _write(self, template_name: str, rel_path: str, context: dict[str, Any]) -> Path:
        out = self.project_dir / rel_path
        try:
            await self.renderer.render_to_file(template_name, out, context)
        except OSError as exc:
            raise FilesystemError(
                out, f"Failed to create {rel_path} ({exc.strerror or exc})"
            ) from exc
        self.written_files.append(out)
        console.print(f"  [green]Created[/green] {rel_path}")
        return out


# ---------------------------------------------------------------------------
# Convenience wrapper
# ---------------------------------------------------------------------------

async def add_item(
    item_type: str,
    name: str,
    project_path: str | Path,
    config: Config | None = None,
) -> Path:
    """Add an item to the project at *project_path*.  See ``ProjectScaffold.add_item``."""
    scaffold = ProjectScaffold.from_project(project_path, config=config)
    return await scaffold.add_item(item_type, name)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _item_plan(item_type: str, pascal: str, camel: str) -> tuple[str, str, list[str]]:
    """Return (relative path, template, exported names) for an item."""
    directory, _ = ITEM_TYPES[item_type]
    if item_type == "component":
        return f"{directory}/{pascal}.js", item_template(item_type), [pascal]
    if item_type == "page":
        return f"{directory}/{pascal}Page.js", item_template(item_type), [f"{pascal}Page"]
    if item_type == "store":
        return (
            f"{directory}/{camel}.js",
            item_template(item_type),
            [
                f"{camel}Store",
                f"select{pascal}Data",
                f"select{pascal}Loading",
                f"select{pascal}Error",
                f"{camel}Actions",
            ],
        )
    return f"{directory}/{camel}.js", item_template(item_type), [camel, f"{camel}Helper"]
