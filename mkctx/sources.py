# mkctx/sources.py
"""
Where the file list comes from, and the two per-file capabilities the
assembler needs (binary classification and binary description).
"""

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from textual import log

from .config import BINARY_CONTROL_RATIO, BINARY_SNIFF_SIZE, VCS_DIR_NAME
from .errors import CommandError, SourceError

BinaryCheck = Callable[[Path], bool]
BinaryDescriber = Callable[[Path, str], bytes]

_ALLOWED_CONTROL = frozenset(b"\n\r\t\f")


@dataclass(frozen=True)
class Workspace:
    base: Path
    prefix: str  # slash separated, "." for the base itself
    in_repo: bool

    @property
    def mode(self) -> str:
        return "git" if self.in_repo else "fs"


def find_repo_root(start: Path) -> Optional[Path]:
    current = start
    while True:
        if (current / VCS_DIR_NAME).is_dir():
            return current
        if current.parent == current:
            return None
        current = current.parent


def discover_workspace(cwd: Optional[Path] = None) -> Workspace:
    cwd = (cwd or Path.cwd()).resolve()
    root = find_repo_root(cwd)
    if root is None:
        return Workspace(base=cwd, prefix=".", in_repo=False)
    return Workspace(base=root, prefix=cwd.relative_to(root).as_posix(), in_repo=True)


def run_command(command: Sequence[str], cwd: Optional[Path] = None, merge_stderr: bool = False) -> bytes:
    try:
        result = subprocess.run(
            list(command),
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        raise CommandError(command, None, str(exc)) from exc
    if result.returncode != 0:
        stderr = result.stdout if merge_stderr else result.stderr
        raise CommandError(command, result.returncode, stderr.decode("utf-8", "replace"))
    return result.stdout


def git_list_files(base: Path, prefix: str = ".") -> List[str]:
    """Tracked plus untracked-but-not-ignored files, as base-relative slash paths."""
    command = [
        "git", "-C", str(base), "ls-files", "-z",
        "--cached", "--others", "--exclude-standard", "--full-name",
    ]
    if prefix != ".":
        command += ["--", prefix]
    out = run_command(command)
    return [os.fsdecode(part) for part in out.split(b"\0") if part]


def walk_files(base: Path) -> List[str]:
    """Every file under ``base`` except inside version-control directories."""

    def fail(exc: OSError) -> None:
        raise SourceError(f"cannot list {exc.filename or base}: {exc}", base) from exc

    files: List[str] = []
    for dirpath, dirnames, filenames in os.walk(base, onerror=fail):
        dirnames[:] = [d for d in dirnames if d != VCS_DIR_NAME]
        rel_dir = Path(dirpath).relative_to(base)
        for name in filenames:
            files.append((rel_dir / name).as_posix())
    return files


def list_files(workspace: Workspace) -> List[str]:
    if workspace.in_repo:
        files = git_list_files(workspace.base, workspace.prefix)
    else:
        files = walk_files(workspace.base)
    log(f"listed {len(files)} files ({workspace.mode}) under {workspace.base}")
    return files


def is_binary(path: Path) -> bool:
    """Cheap sniff of the file head: NUL bytes, invalid UTF-8 dense in control bytes."""
    try:
        with open(path, "rb") as f:
            sample = f.read(BINARY_SNIFF_SIZE)
    except OSError as exc:
        raise SourceError(f"cannot read {path}: {exc}", path) from exc
    if not sample:
        return False
    if b"\0" in sample:
        return True
    try:
        sample.decode("utf-8")
        return False
    except UnicodeDecodeError:
        pass
    control = sum(1 for b in sample if (b < 0x20 or b == 0x7F) and b not in _ALLOWED_CONTROL)
    return control / len(sample) > BINARY_CONTROL_RATIO


def describe_binary(base: Path, rel_path: str) -> bytes:
    """Output of ``file <rel_path>`` run from ``base``, trailing newlines removed."""
    return run_command(["file", rel_path], cwd=base, merge_stderr=True).rstrip(b"\n")


def drop_binaries(base: Path, files: List[str], check: BinaryCheck = is_binary) -> List[str]:
    kept = [rel for rel in files if not check(base / rel)]
    log(f"dropped {len(files) - len(kept)} binary files")
    return kept
