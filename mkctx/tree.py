# mkctx/tree.py
"""
File tree model.

Nodes live in an arena (``FileTree.nodes``) and refer to each other by
index: a node's ``parent`` is the parent's index and ``children`` holds child
indices in display order. Index 0 is always the root directory.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .config import COLLAPSE_THRESHOLD
from .errors import TreeStructureError

ROOT_ID = 0


@dataclass
class Node:
    name: str
    rel_path: str  # base-relative, slash separated
    is_dir: bool
    depth: int
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    by_name: Dict[str, int] = field(default_factory=dict)
    expanded: bool = False  # directories only
    selected: bool = False  # files only


class FileTree:
    def __init__(self, prefix: str = "."):
        self.prefix = prefix
        self.nodes: List[Node] = [Node(name=prefix, rel_path=prefix, is_dir=True, depth=0)]

    @property
    def root(self) -> Node:
        return self.nodes[ROOT_ID]

    def __getitem__(self, node_id: int) -> Node:
        return self.nodes[node_id]

    def _child_path(self, parent: Node, name: str) -> str:
        if parent.rel_path == ".":
            return name
        return f"{parent.rel_path}/{name}"

    def add_child(self, parent_id: int, name: str, is_dir: bool) -> int:
        parent = self.nodes[parent_id]
        node = Node(
            name=name,
            rel_path=self._child_path(parent, name),
            is_dir=is_dir,
            depth=parent.depth + 1,
            parent=parent_id,
        )
        node_id = len(self.nodes)
        self.nodes.append(node)
        parent.children.append(node_id)
        parent.by_name[name] = node_id
        return node_id

    def child(self, parent_id: int, name: str) -> Optional[int]:
        return self.nodes[parent_id].by_name.get(name)

    def insert(self, full_path: str, within: str) -> None:
        """Insert one file given its path below the prefix (``within``)."""
        parts = within.split("/")
        if not parts[-1]:
            return
        current = ROOT_ID
        for segment in parts[:-1]:
            existing = self.child(current, segment)
            if existing is None:
                current = self.add_child(current, segment, is_dir=True)
                continue
            if not self.nodes[existing].is_dir:
                raise TreeStructureError(full_path, segment)
            current = existing

        leaf = parts[-1]
        existing = self.child(current, leaf)
        if existing is None:
            self.add_child(current, leaf, is_dir=False)
        elif self.nodes[existing].is_dir:
            raise TreeStructureError(full_path, leaf)

    def finalize(self, node_id: int = ROOT_ID) -> None:
        """Sort children directories-first then by name, and set default expansion."""
        node = self.nodes[node_id]
        if not node.is_dir:
            return
        node.children.sort(key=lambda cid: (not self.nodes[cid].is_dir, self.nodes[cid].name))
        for child_id in node.children:
            self.finalize(child_id)
        node.expanded = len(node.children) <= COLLAPSE_THRESHOLD

    def selected_paths(self) -> List[str]:
        """Every selected file's path, sorted; independent of tree and toggle order."""
        return sorted(n.rel_path for n in self.nodes if not n.is_dir and n.selected)

    def selected_count(self) -> int:
        return sum(1 for n in self.nodes if not n.is_dir and n.selected)


def build_tree(prefix: str, paths: Iterable[str]) -> FileTree:
    """Build a sorted, depth-tagged tree from base-relative slash paths under ``prefix``."""
    tree = FileTree(prefix)
    strip = "" if prefix == "." else prefix + "/"
    for full_path in paths:
        if strip and not full_path.startswith(strip):
            continue
        within = full_path[len(strip):]
        if not within:
            continue
        tree.insert(full_path, within)
    tree.finalize()
    return tree


def flatten(tree: FileTree) -> List[int]:
    """Depth-first pre-order ids of the visible nodes; collapsed directories hide their subtree."""
    out: List[int] = []
    stack = [ROOT_ID]
    while stack:
        node_id = stack.pop()
        out.append(node_id)
        node = tree[node_id]
        if node.is_dir and node.expanded:
            stack.extend(reversed(node.children))
    return out


def locate(sequence: List[int], node_id: int) -> int:
    try:
        return sequence.index(node_id)
    except ValueError:
        return 0
