"""Command-line entry point for smoothjs-scaffold.

Commands::

    smoothjs-scaffold create <project-name> [target-dir] [--link-local PATH]
    smoothjs-scaffold validate [project-path] [--details] [--json]
    smoothjs-scaffold add <type> <name> [project-path]
    smoothjs-scaffold structure
    smoothjs-scaffold help
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.markup import escape
from rich.table import Table

from smoothjs_scaffold import __version__
from smoothjs_scaffold.config import Config
from smoothjs_scaffold.exceptions import InvalidInputError, ScaffoldError
from smoothjs_scaffold.scaffolder import ProjectScaffold, add_item, validate_project_name
from smoothjs_scaffold.structure import DIRECTORIES, FILES, ITEM_TYPES
from smoothjs_scaffold.utils import console, print_header, print_success
from smoothjs_scaffold.validator import StructureValidator

COMMANDS = ("create", "validate", "add", "structure")


class _ParserExit(Exception):
    """Raised instead of ``SystemExit`` when argparse wants to stop."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors as exceptions instead of exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise InvalidInputError(message)

    def exit(self, status: int = 0, message: Optional[str] = None) -> None:  # type: ignore[override]
        if message:
            console.print(message, markup=False)
        raise _ParserExit(status)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="smoothjs-scaffold",
        description="SmoothJS project scaffolder and structure validator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  smoothjs-scaffold create my-app\n"
            "  smoothjs-scaffold create my-app ./projects --link-local ../smoothjs\n"
            "  smoothjs-scaffold validate ./my-app --details\n"
            "  smoothjs-scaffold add component UserCard ./my-app\n"
            "  smoothjs-scaffold add store userProfile\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", parser_class=_ArgumentParser)

    create = sub.add_parser("create", help="Create a new SmoothJS project")
    create.add_argument("project_name", nargs="?", help="Lowercase letters, digits and hyphens")
    create.add_argument(
        "target_dir",
        nargs="?",
        default=None,
        help="Directory to create the project in (default: current directory)",
    )
    create.add_argument(
        "--link-local",
        default=None,
        metavar="PATH",
        help="Reference a local framework checkout as a file: dependency",
    )
    create.add_argument(
        "--framework-version",
        default=None,
        metavar="VER",
        help="Framework version written to package.json (default: latest)",
    )

    validate = sub.add_parser("validate", help="Validate a project's structure")
    validate.add_argument(
        "project_path",
        nargs="?",
        default=None,
        help="Project to validate (default: current directory)",
    )
    validate.add_argument(
        "--details",
        action="store_true",
        help="Show a suggested action for every finding",
    )
    validate.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print the result as JSON instead of a report",
    )

    add = sub.add_parser("add", help="Add a component, page, store or util")
    add.add_argument("item_type", nargs="?", help=f"One of: {', '.join(ITEM_TYPES)}")
    add.add_argument("name", nargs="?", help="Item name")
    add.add_argument(
        "project_path",
        nargs="?",
        default=None,
        help="Project to add to (default: current directory)",
    )

    sub.add_parser("structure", help="Show the recommended project structure")
    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _resolve(path: Optional[str], cwd: Path) -> Path:
    if not path:
        return cwd
    candidate = Path(path)
    return candidate if candidate.is_absolute() else cwd / candidate


def _cmd_create(args: argparse.Namespace, config: Config, cwd: Path) -> int:
    name = validate_project_name(args.project_name)
    updates: dict[str, object] = {}
    if args.framework_version:
        updates["framework_version"] = args.framework_version
    if args.link_local:
        updates["link_local"] = _resolve(args.link_local, cwd)
    elif config.link_local is not None and not config.link_local.is_absolute():
        # SMOOTHJS_LINK_LOCAL is relative to the invocation directory too.
        updates["link_local"] = _resolve(str(config.link_local), cwd)
    if updates:
        config = config.model_copy(update=updates)

    scaffold = ProjectScaffold(name, _resolve(args.target_dir, cwd), config=config)
    ok = asyncio.run(scaffold.scaffold())
    return 0 if ok else 1


def _cmd_validate(args: argparse.Namespace, config: Config, cwd: Path) -> int:
    validator = StructureValidator(_resolve(args.project_path, cwd), config=config)
    result = asyncio.run(validator.validate())
    if args.as_json:
        console.print_json(result.model_dump_json())
    else:
        validator.print_report(result, details=args.details)
    return 0 if result.is_valid else 1


def _cmd_add(args: argparse.Namespace, config: Config, cwd: Path) -> int:
    if not args.item_type or not args.name:
        raise InvalidInputError("Usage: add <type> <name> [project-path]")
    if args.item_type not in ITEM_TYPES:
        raise InvalidInputError(
            f"Invalid type '{args.item_type}'. Must be one of: {', '.join(ITEM_TYPES)}"
        )
    out = asyncio.run(
        add_item(args.item_type, args.name, _resolve(args.project_path, cwd), config=config)
    )
    print_success(f"Added {args.item_type} {out.name}")
    return 0


def _cmd_structure() -> int:
    print_header("SmoothJS Project Structure")

    dirs = Table(title="Directories", show_lines=True)
    dirs.add_column("Directory", style="cyan", no_wrap=True)
    dirs.add_column("Required", justify="center")
    dirs.add_column("Description")
    dirs.add_column("Conventions")
    for spec in DIRECTORIES:
        dirs.add_row(
            f"{spec.name}/",
            "[green]yes[/green]" if spec.required else "[dim]no[/dim]",
            spec.description,
            "\n".join(f"• {c}" for c in spec.conventions),
        )
    console.print(dirs)

    files = Table(title="Files", show_lines=True)
    files.add_column("File", style="cyan", no_wrap=True)
    files.add_column("Required", justify="center")
    files.add_column("Description")
    files.add_column("Conventions")
    for spec in FILES:
        files.add_row(
            spec.name,
            "[green]yes[/green]" if spec.required else "[dim]no[/dim]",
            spec.description,
            "\n".join(f"• {c}" for c in spec.conventions),
        )
    console.print(files)
    return 0


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None, cwd: str | Path | None = None) -> int:
    """Run the CLI and return the process exit code.

    No arguments, ``help`` or an unknown command prints usage and returns 0.
    Invalid input and failed operations return 1.
    """
    args_list = list(sys.argv[1:] if argv is None else argv)
    work_dir = Path(cwd) if cwd is not None else Path.cwd()
    parser = build_parser()

    if not args_list or args_list[0] == "help" or (
        not args_list[0].startswith("-") and args_list[0] not in COMMANDS
    ):
        parser.print_help()
        return 0

    try:
        args = parser.parse_args(args_list)
        if args.command is None:
            parser.print_help()
            return 0
        config = Config.from_env()
        if args.command == "create":
            return _cmd_create(args, config, work_dir)
        if args.command == "validate":
            return _cmd_validate(args, config, work_dir)
        if args.command == "add":
            return _cmd_add(args, config, work_dir)
        return _cmd_structure()
    except _ParserExit as exc:
        return exc.status
    except ScaffoldError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        return 1
    except ValueError as exc:
        # pydantic ValidationError from environment-provided settings
        console.print(f"[bold red]Error:[/bold red] Invalid configuration: {escape(str(exc))}")
        return 1


def console_main() -> None:
    """Console-script wrapper around ``main``."""
    sys.exit(main())


if __name__ == "__main__":
    console_main()
