# mkctx/errors.py

from pathlib import Path
from typing import Optional, Sequence


class MkctxError(Exception):
    """Base exception for everything mkctx treats as fatal."""


class TreeStructureError(MkctxError):
    """Raised when the file list cannot form a tree (file/directory name clash)."""

    def __init__(self, path: str, segment: str):
        super().__init__(f"malformed path '{path}': '{segment}' is both a file and a directory")
        self.path = path
        self.segment = segment


class CommandError(MkctxError):
    """Raised when an external command cannot run or exits non-zero."""

    def __init__(self, command: Sequence[str], returncode: Optional[int], stderr: str = ""):
        detail = stderr.strip() or "no output"
        status = "could not be started" if returncode is None else f"exited with status {returncode}"
        super().__init__(f"`{' '.join(command)}` {status}: {detail}")
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class AssemblyError(MkctxError):
    """Raised when the output document cannot be produced."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class SourceError(MkctxError):
    """Raised when the project files cannot be listed or inspected."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path
