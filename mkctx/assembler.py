# mkctx/assembler.py
"""
Markdown document assembly.

Each selected file becomes::

    ## <path>

    <fence><lang>
    <content>
    <fence>

written straight to the output file, one file at a time.
"""

import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Optional

from textual import log

from .config import (
    BYTES_PER_TOKEN,
    OUTPUT_DIR_NAME,
    OUTPUT_NAME_TEMPLATE,
    OUTPUT_STAMP_FORMAT,
    SCAN_BUFFER_SIZE,
)
from .errors import AssemblyError, MkctxError
from .fence import fence_for, longest_run_in_bytes, longest_run_in_file
from .languages import language_for
from .sources import BinaryCheck, BinaryDescriber, describe_binary, is_binary


@dataclass(frozen=True)
class AssemblyResult:
    path: Path
    size: int
    tokens: int

    def report(self) -> str:
        return f"path={self.path}\nbytes={self.size}\ntokens={self.tokens}"


def estimate_tokens(size: int) -> int:
    """Roughly four bytes per token, rounded up."""
    return (size + BYTES_PER_TOKEN - 1) // BYTES_PER_TOKEN


def output_path(base: Path, now: datetime) -> Path:
    name = OUTPUT_NAME_TEMPLATE.format(stamp=now.strftime(OUTPUT_STAMP_FORMAT))
    return base / OUTPUT_DIR_NAME / name


class DocumentAssembler:
    def __init__(
        self,
        base: Path,
        allow_binary: bool = False,
        binary_check: BinaryCheck = is_binary,
        describe: BinaryDescriber = describe_binary,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.base = base
        self.allow_binary = allow_binary
        self.binary_check = binary_check
        self.describe = describe
        self.clock = clock

    def assemble(self, selected: Iterable[str]) -> AssemblyResult:
        """Write the document; on any failure the partial output is removed."""
        target = output_path(self.base, self.clock())
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            out = open(target, "wb")
        except OSError as exc:
            raise AssemblyError(f"cannot create {target}: {exc}", target) from exc

        try:
            with out:
                for rel_path in selected:
                    self.write_block(out, rel_path, target)
            size = target.stat().st_size
        except MkctxError:
            target.unlink(missing_ok=True)
            raise
        except OSError as exc:
            target.unlink(missing_ok=True)
            raise AssemblyError(f"cannot write {target}: {exc}", target) from exc

        result = AssemblyResult(path=target.resolve(), size=size, tokens=estimate_tokens(size))
        log(f"wrote {result.path} ({result.size} bytes)")
        return result

    def write_block(self, out: BinaryIO, rel_path: str, target: Optional[Path] = None) -> None:
        source = self.base / rel_path
        content = None
        try:
            binary = self.allow_binary and self.binary_check(source)
            if not binary:
                fence = fence_for(longest_run_in_file(source))
                content = open(source, "rb")
        except FileNotFoundError as exc:
            raise AssemblyError(f"selected file is gone: {rel_path}", target) from exc
        except OSError as exc:
            raise AssemblyError(f"cannot read {rel_path}: {exc}", target) from exc

        out.write(f"## {rel_path}\n\n".encode("utf-8"))
        if content is None:
            description = self.describe(self.base, rel_path)
            fence = fence_for(longest_run_in_bytes(description))
            out.write(fence + b"\n")
            out.write(description)
        else:
            with content:
                out.write(fence + language_for(rel_path).encode("utf-8") + b"\n")
                shutil.copyfileobj(content, out, SCAN_BUFFER_SIZE)

        out.write(b"\n" + fence + b"\n\n")
        log(f"assembled {rel_path}")
