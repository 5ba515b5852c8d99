"""Console output and file helpers shared across smoothjs-scaffold.

All user-facing output goes through the module-level Rich ``console``.
Status messages are markup-escaped before styling, so paths and names that
contain square brackets print literally.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

console = Console()

_STATUS_STYLES: dict[str, str] = {
    "success": "bold green",
    "error": "bold red",
    "warning": "bold yellow",
}


def write_file(path: Path, content: str) -> None:
    """Write *content* as UTF-8, creating missing parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Status lines
# ---------------------------------------------------------------------------

def _print_status(kind: str, message: str) -> None:
    style = _STATUS_STYLES[kind]
    console.print(f"[{style}]{escape(message)}[/{style}]")


def print_success(message: str) -> None:
    _print_status("success", message)


def print_error(message: str) -> None:
    _print_status("error", message)


def print_warning(message: str) -> None:
    _print_status("warning", message)


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

def print_header(title: str, color: str = "bright_cyan") -> None:
    """Horizontal rule with *title* centred in it, padded by blank lines."""
    console.line()
    console.print(Rule(Text(f" {title} ", style=f"bold {color}"), style=color))
    console.line()


def print_summary_table(rows: Mapping[str, object], title: str = "Summary") -> None:
    """Label/value pairs as a borderless two-column table."""
    table = Table(title=title, box=box.SIMPLE, show_header=False, title_style="bold cyan")
    table.add_column(style="dim", no_wrap=True)
    table.add_column()
    for label, value in rows.items():
        table.add_row(label, str(value))
    console.print(table)
