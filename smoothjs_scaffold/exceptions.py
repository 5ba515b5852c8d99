"""Exception types shared by the scaffolder, validator and CLI."""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error raised by smoothjs-scaffold."""


class InvalidInputError(ScaffoldError):
    """Raised for bad user input: project names, item types, missing arguments."""


class FilesystemError(ScaffoldError):
    """Raised when a directory or file cannot be created, read or parsed.

    The failing path is kept on ``.path`` and always appears in the message.
    """

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")
