"""Index (barrel) file model.

An index file re-exports items from sibling modules.  ``IndexFile`` parses
one into an ordered list of top-level ``export`` statements, each with its
line span, exported names and module specifier.  New exports are inserted
after the *end* of the last statement, so multi-line exports and trailing
comments are never split.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

_RE_EXPORT_START = re.compile(r"^\s*export\b")

_RE_REEXPORT = re.compile(
    r"""
    ^\s*export\s*
    (?:
        \{(?P<names>[^}]*)\}          # export { A, B as C }
        |\*(?:\s+as\s+(?P<ns>[\w$]+))?  # export * / export * as ns
    )
    \s*from\s*['"](?P<source>[^'"]+)['"]
    """,
    re.VERBOSE | re.DOTALL,
)

_RE_DECLARATION = re.compile(
    r"""
    ^\s*export\s+
    (?:default\s+)?
    (?:async\s+)?
    (?:const|let|var|function\*?|class)\s+
    (?P<name>[A-Za-z_$][\w$]*)
    """,
    re.VERBOSE,
)


@dataclass
class ExportStatement:
    """One top-level export statement, spanning lines ``start``..``end`` inclusive."""

    start: int
    end: int
    names: list[str] = field(default_factory=list)
    source: Optional[str] = None


class IndexFile:
    """Parsed view of an index module that supports adding exports."""

    def __init__(self, text: str = "") -> None:
        self.lines: list[str] = text.splitlines()
        self.exports: list[ExportStatement] = _parse_exports(self.lines)

    @classmethod
    def parse(cls, text: str) -> "IndexFile":
        return cls(text)

    # -- Queries -----------------------------------------------------------

    def exported_names(self) -> list[str]:
        """All names exported by the file, in statement order."""
        return [name for stmt in self.exports for name in stmt.names]

    def exports_from(self, source: str) -> list[ExportStatement]:
        return [stmt for stmt in self.exports if stmt.source == source]

    def conflicting_names(self, names: list[str]) -> list[str]:
        """Those of *names* the file already exports, in the given order."""
        existing = set(self.exported_names())
        return [name for name in names if name in existing]

    # -- Mutation ----------------------------------------------------------

    def add_export(self, names: list[str], source: str) -> bool:
        """Insert ``export { names } from 'source';``.

        The statement goes directly after the last export statement, or at
        the end of the file when there is none.  Returns ``False`` without
        changing anything when *source* or any of *names* is already
        exported.
        """
        if self.exports_from(source) or self.conflicting_names(names):
            return False

        statement = f"export {{ {', '.join(names)} }} from '{source}';"
        if self.exports:
            insert_at = self.exports[-1].end + 1
        else:
            insert_at = len(self.lines)
            while insert_at > 0 and not self.lines[insert_at - 1].strip():
                insert_at -= 1
        self.lines.insert(insert_at, statement)
        self.exports = _parse_exports(self.lines)
        return True

    def render(self) -> str:
        """Return the file content, always ending with a newline."""
        if not self.lines:
            return ""
        return "\n".join(self.lines) + "\n"


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

def _parse_exports(lines: list[str]) -> list[ExportStatement]:
    statements: list[ExportStatement] = []
    idx = 0
    in_comment = False
    while idx < len(lines):
        code, in_comment = _skip_block_comments(lines[idx], in_comment)
        if in_comment or not _RE_EXPORT_START.match(code):
            idx += 1
            continue

        end = _statement_end(lines, idx, head=code)
        text = "\n".join([code] + lines[idx + 1:end + 1])
        names, source = _describe(text)
        statements.append(ExportStatement(start=idx, end=end, names=names, source=source))
        idx = end + 1
    return statements


def _skip_block_comments(line: str, in_comment: bool) -> tuple[str, bool]:
    """Drop block comments that precede any code on *line*.

    Returns the remaining text and whether a comment is still open at the
    end of the line.
    """
    code = line
    if in_comment:
        close = code.find("*/")
        if close == -1:
            return "", True
        code = code[close + 2:]
    while True:
        stripped = code.lstrip()
        if not stripped.startswith("/*"):
            return code, False
        close = stripped.find("*/", 2)
        if close == -1:
            return "", True
        code = stripped[close + 2:]


def _statement_end(lines: list[str], start: int, head: Optional[str] = None) -> int:
    """Return the index of the line that closes the statement at *start*.

    Brackets are balanced while skipping string literals and comments.
    Template literals may span lines; quoted strings may not.  *head*
    replaces the first line when leading comments were already removed.
    """
    depth = 0
    quote: Optional[str] = None
    in_comment = False

    for idx in range(start, len(lines)):
        line = head if idx == start and head is not None else lines[idx]
        i = 0
        while i < len(line):
            ch = line[i]
            if in_comment:
                if line.startswith("*/", i):
                    in_comment = False
                    i += 2
                    continue
            elif quote:
                if ch == "\\":
                    i += 2
                    continue
                if ch == quote:
                    quote = None
            elif line.startswith("//", i):
                break
            elif line.startswith("/*", i):
                in_comment = True
                i += 2
                continue
            elif ch in "'\"`":
                quote = ch
            elif ch in "([{":
                depth += 1
            elif ch in ")]}":
                depth -= 1
            i += 1

        if quote in ("'", '"'):
            quote = None
        if depth <= 0 and quote is None and not in_comment:
            return idx
    return len(lines) - 1


def _describe(text: str) -> tuple[list[str], Optional[str]]:
    """Return the exported names and module specifier of a statement."""
    m = _RE_REEXPORT.match(text)
    if m:
        if m.group("names") is not None:
            names = []
            for part in m.group("names").split(","):
                part = part.strip()
                if not part:
                    continue
                if " as " in part:
                    part = part.split(" as ", 1)[1].strip()
                names.append(part)
            return names, m.group("source")
        ns = m.group("ns")
        return ([ns] if ns else []), m.group("source")

    m = _RE_DECLARATION.match(text)
    if m:
        return [m.group("name")], None
    return [], None
