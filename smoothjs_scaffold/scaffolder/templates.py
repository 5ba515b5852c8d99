"""Template catalog for generated SmoothJS files.

Every generated file comes from a Jinja2 template under ``templates/``:
``project/`` mirrors the layout of a new project and ``items/`` holds one
template per item type accepted by ``add``.  Templates end in ``.j2`` and
are rendered with a plain dict context.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from smoothjs_scaffold.utils import write_file

TEMPLATE_ROOT = Path(__file__).parent / "templates"
TEMPLATE_SUFFIX = ".j2"

_RE_WORD_SEPARATOR = re.compile(r"[-_\s]+")


def pascal_case(value: str) -> str:
    """``user-profile``, ``user_profile`` and ``userProfile`` all become ``UserProfile``.

    Only the first letter of each word is touched, so ``DataTable`` is kept.
    """
    words = _RE_WORD_SEPARATOR.split(value.strip())
    return "".join(w[:1].upper() + w[1:] for w in words if w)


def camel_case(value: str) -> str:
    """Like ``pascal_case`` but with a lowercase first letter."""
    name = pascal_case(value)
    return name[:1].lower() + name[1:]


def _environment(root: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(root)),
        autoescape=select_autoescape([]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters.update(pascal_case=pascal_case, camel_case=camel_case)
    return env


class TemplateRenderer:
    """Renders the project and item templates.

    A missing context variable never renders as an empty string: printing
    it raises ``jinja2.UndefinedError``, and passing it through ``tojson``
    raises ``TypeError``.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir is not None else TEMPLATE_ROOT
        self.env = _environment(self.template_dir)

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        return self.env.get_template(template_name).render(context)

    def render_item(self, item_type: str, context: dict[str, Any]) -> str:
        """Render the ``items/<item_type>.js.j2`` template."""
        return self.render(item_template(item_type), context)

    async def render_to_file(
        self,
        template_name: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render *template_name* and write it to *output_path*, creating parents.

        Rendering happens before anything touches the disk, so a template
        error leaves no partial file behind.
        """
        content = self.render(template_name, context)
        out = Path(output_path)
        await asyncio.to_thread(write_file, out, content)
        return out

    def list_templates(self, prefix: str = "") -> list[str]:
        """Template names under *prefix* (``"project"``, ``"items"`` or all)."""
        names = self.env.list_templates(filter_func=lambda n: n.endswith(TEMPLATE_SUFFIX))
        if prefix:
            names = [n for n in names if n.startswith(prefix.rstrip("/") + "/")]
        return sorted(names)


def item_template(item_type: str) -> str:
    return f"items/{item_type}.js{TEMPLATE_SUFFIX}"
