"""The SmoothJS project layout.

A static table describing which directories and files a SmoothJS project is
expected to contain, with a short description and the conventions that go
with each entry.  The scaffolder creates exactly this layout and the
validator checks projects against it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class DirectorySpec(BaseModel):
    """One directory of the conventional layout."""

    name: str = Field(..., description="Directory name relative to the project root")
    description: str = Field(default="", description="What lives in this directory")
    files: list[str] = Field(
        default_factory=list,
        description="Files the directory is expected to contain",
    )
    conventions: list[str] = Field(default_factory=list)
    required: bool = Field(default=False)


class FileSpec(BaseModel):
    """One top-level file of the conventional layout."""

    name: str = Field(..., description="File name relative to the project root")
    description: str = Field(default="")
    conventions: list[str] = Field(default_factory=list)
    required: bool = Field(default=False)


# ---------------------------------------------------------------------------
# Directories
# ---------------------------------------------------------------------------

DIRECTORIES: list[DirectorySpec] = [
    DirectorySpec(
        name="components",
        description="Reusable UI components",
        files=["index.js"],
        conventions=[
            "Use PascalCase for component names (e.g., Button.js)",
            "Export components from index.js for clean imports",
            "Keep components focused and single-purpose",
        ],
        required=True,
    ),
    DirectorySpec(
        name="pages",
        description="Page components for routing",
        files=["index.js"],
        conventions=[
            'Use PascalCase with "Page" suffix (e.g., HomePage.js)',
            "Export pages from index.js for clean imports",
            "Keep page logic separate from component logic",
        ],
        required=True,
    ),
    DirectorySpec(
        name="stores",
        description="State management stores and selectors",
        files=["index.js"],
        conventions=[
            "Use camelCase for store names (e.g., userStore.js)",
            "Export stores and selectors from index.js",
            "Use createStore for state and createSelector for derived state",
        ],
        required=True,
    ),
    DirectorySpec(
        name="router",
        description="Routing configuration",
        files=["index.js"],
        conventions=[
            "Define all routes in index.js",
            "Use lazy loading for code splitting",
            "Implement navigation guards where needed",
        ],
        required=True,
    ),
    DirectorySpec(
        name="utils",
        description="Utility functions and helpers",
        files=["index.js"],
        conventions=[
            "Use camelCase for utility names",
            "Export utilities from index.js",
            "Keep utilities pure and testable",
        ],
    ),
    DirectorySpec(
        name="assets",
        description="Static assets (images, fonts, etc.)",
        conventions=[
            "Organize by type (images/, fonts/, icons/)",
            "Optimize assets for web delivery",
        ],
    ),
    DirectorySpec(
        name="styles",
        description="CSS and styling files",
        files=["index.css"],
        conventions=[
            "Use CSS custom properties for theming",
            "Keep styles modular and scoped",
        ],
    ),
    DirectorySpec(
        name="tests",
        description="Test files and test utilities",
        conventions=[
            "Mirror the source directory structure",
            "Test components, stores, and utilities",
        ],
    ),
]


# ---------------------------------------------------------------------------
# Top-level files
# ---------------------------------------------------------------------------

FILES: list[FileSpec] = [
    FileSpec(
        name="app.js",
        description="Main application entry point",
        conventions=[
            "Import and use SmoothJS Component class",
            "Set up routing and main app structure",
        ],
        required=True,
    ),
    FileSpec(
        name="package.json",
        description="Project configuration and dependencies",
        conventions=[
            "Include smoothjs dependency",
            'Set "type": "module" for ES modules',
            "Include a dev script",
        ],
        required=True,
    ),
    FileSpec(
        name="index.html",
        description="HTML entry point",
        conventions=["Link to main CSS file", "Include script tag for app.js"],
        required=True,
    ),
    FileSpec(
        name="README.md",
        description="Project documentation",
        conventions=["Include project structure overview"],
    ),
    FileSpec(
        name=".gitignore",
        description="Git ignore rules",
        conventions=["Ignore node_modules and build outputs"],
    ),
    FileSpec(
        name="vite.config.js",
        description="Vite build configuration",
        conventions=["Configure build output directory"],
    ),
    FileSpec(
        name="jsconfig.json",
        description="JavaScript language configuration",
        conventions=["Set ES2020 target and ESNext module"],
    ),
]


REQUIRED_DIRS: list[str] = [d.name for d in DIRECTORIES if d.required]
RECOMMENDED_DIRS: list[str] = [d.name for d in DIRECTORIES if not d.required]
REQUIRED_FILES: list[str] = [f.name for f in FILES if f.required]
RECOMMENDED_FILES: list[str] = [f.name for f in FILES if not f.required]

# Item type -> (directory, index file) used by ``add``.
ITEM_TYPES: dict[str, tuple[str, str]] = {
    "component": ("components", "components/index.js"),
    "page": ("pages", "pages/index.js"),
    "store": ("stores", "stores/index.js"),
    "util": ("utils", "utils/index.js"),
}

SOURCE_EXTENSIONS: frozenset[str] = frozenset({".js", ".jsx", ".ts", ".tsx"})
