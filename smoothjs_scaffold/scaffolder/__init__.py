"""SmoothJS scaffolder -- generates project structures and adds items.

Quick usage::

    from smoothjs_scaffold.scaffolder import ProjectScaffold

    scaffold = ProjectScaffold("my-app", "/tmp/projects")
    ok = await scaffold.scaffold()
    await scaffold.add_item("component", "Button")
"""

from smoothjs_scaffold.scaffolder.generator import (
    ProjectScaffold,
    add_item,
    validate_project_name,
)
from smoothjs_scaffold.scaffolder.index_file import ExportStatement, IndexFile
from smoothjs_scaffold.scaffolder.templates import TemplateRenderer

__all__ = [
    "ExportStatement",
    "IndexFile",
    "ProjectScaffold",
    "TemplateRenderer",
    "add_item",
    "validate_project_name",
]
