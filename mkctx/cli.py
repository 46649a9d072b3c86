# mkctx/cli.py

import sys
from pathlib import Path
from typing import List, Optional

from .app import MkctxApp
from .assembler import AssemblyResult, DocumentAssembler
from .controller import InteractionController
from .errors import MkctxError
from .sources import Workspace, discover_workspace, drop_binaries, list_files
from .tree import build_tree

USAGE = """Usage: mkctx [-b]

Pick files from the current directory (or its git repository) in a terminal
tree and write them into one Markdown document under .mkctx/.

  -b    allow selecting binary files (embedded as `file <path>` output)"""


def parse_args(argv: List[str]) -> bool:
    """Returns whether binary files are allowed."""
    allow_binary = False
    for arg in argv:
        if arg in ("-h", "--help"):
            print(USAGE)
            sys.exit(0)
        elif arg == "-b":
            allow_binary = True
        else:
            print(f"mkctx: unknown argument '{arg}'\n", file=sys.stderr)
            print(USAGE, file=sys.stderr)
            sys.exit(2)
    return allow_binary


def build_app(workspace: Workspace, allow_binary: bool) -> MkctxApp:
    files = list_files(workspace)
    if not allow_binary:
        files = drop_binaries(workspace.base, files)
    tree = build_tree(workspace.prefix, files)
    return MkctxApp(InteractionController(tree), mode=workspace.mode, allow_binary=allow_binary)


def run(argv: List[str], cwd: Optional[Path] = None) -> Optional[AssemblyResult]:
    allow_binary = parse_args(argv)
    workspace = discover_workspace(cwd)
    app = build_app(workspace, allow_binary)
    selected = app.run()
    if app.return_code:
        sys.exit(app.return_code)
    if selected is None:
        return None
    return DocumentAssembler(workspace.base, allow_binary=allow_binary).assemble(selected)


def main() -> None:
    try:
        result = run(sys.argv[1:])
    except MkctxError as e:
        print(f"mkctx: {e}", file=sys.stderr)
        sys.exit(1)
    if result is not None:
        print(result.report())


if __name__ == "__main__":
    main()
