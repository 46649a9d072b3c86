# mkctx/controller.py
"""
Interaction state machine for the file picker.

The controller owns the session state (cursor, scroll offset, selection
counter, viewport size, outcome) and mutates the tree in response to
``Key`` events. It does no I/O; whoever renders asks it for ``window()``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .config import CHROME_ROWS
from .tree import FileTree, Node, flatten, locate


class Key(Enum):
    UP = "up"
    DOWN = "down"
    EXPAND = "expand"
    COLLAPSE = "collapse"
    TOGGLE = "toggle"
    CONFIRM = "confirm"
    QUIT = "quit"


class Outcome(Enum):
    RUNNING = "running"
    ABORTED = "aborted"
    CONFIRMED = "confirmed"


@dataclass
class SessionState:
    visible: List[int] = field(default_factory=list)
    cursor: int = 0
    offset: int = 0
    selected_count: int = 0
    width: int = 0
    height: int = 0
    outcome: Outcome = Outcome.RUNNING


@dataclass(frozen=True)
class Row:
    """Display state for one visible node."""

    name: str
    depth: int
    is_dir: bool
    expanded: bool
    selected: bool
    is_cursor: bool

    @property
    def marker(self) -> str:
        if self.is_dir:
            return "▾" if self.expanded else "▸"
        return "[x]" if self.selected else "[ ]"

    def label(self) -> str:
        cursor = ">" if self.is_cursor else " "
        indent = "  " * self.depth
        suffix = "/" if self.is_dir else ""
        return f"{cursor}{indent}{self.marker} {self.name}{suffix}"


class InteractionController:
    def __init__(self, tree: FileTree, width: int = 0, height: int = 0):
        self.tree = tree
        self.state = SessionState(
            visible=flatten(tree),
            selected_count=tree.selected_count(),
            width=width,
            height=height,
        )
        self.ensure_cursor_visible()

    # --- Queries ---
    @property
    def running(self) -> bool:
        return self.state.outcome is Outcome.RUNNING

    @property
    def viewport_height(self) -> int:
        return max(1, self.state.height - CHROME_ROWS)

    @property
    def current(self) -> Node:
        return self.tree[self.state.visible[self.state.cursor]]

    def window(self) -> List[Row]:
        s = self.state
        end = min(s.offset + self.viewport_height, len(s.visible))
        rows = []
        for index in range(s.offset, end):
            node = self.tree[s.visible[index]]
            rows.append(Row(
                name=node.name,
                depth=node.depth,
                is_dir=node.is_dir,
                expanded=node.expanded,
                selected=node.selected,
                is_cursor=index == s.cursor,
            ))
        return rows

    def selected_paths(self) -> List[str]:
        return self.tree.selected_paths()

    # --- Transitions ---
    def handle(self, key: Key) -> bool:
        """Apply one key event. Returns False when the event was a no-op."""
        if not self.running:
            return False
        handler = {
            Key.UP: self.move_up,
            Key.DOWN: self.move_down,
            Key.EXPAND: self.expand,
            Key.COLLAPSE: self.collapse,
            Key.TOGGLE: self.toggle,
            Key.CONFIRM: self.confirm,
            Key.QUIT: self.quit,
        }[key]
        return handler()

    def quit(self) -> bool:
        self.state.outcome = Outcome.ABORTED
        return True

    def confirm(self) -> bool:
        self.state.outcome = Outcome.CONFIRMED
        return True

    def move_up(self) -> bool:
        if self.state.cursor <= 0:
            return False
        self.state.cursor -= 1
        self.ensure_cursor_visible()
        return True

    def move_down(self) -> bool:
        if self.state.cursor >= len(self.state.visible) - 1:
            return False
        self.state.cursor += 1
        self.ensure_cursor_visible()
        return True

    def expand(self) -> bool:
        node = self.current
        if not node.is_dir or node.expanded or not node.children:
            return False
        node.expanded = True
        self._reflatten()
        return True

    def collapse(self) -> bool:
        node = self.current
        if not node.is_dir or not node.expanded or not node.children:
            return False
        node.expanded = False
        self._reflatten()
        return True

    def toggle(self) -> bool:
        node = self.current
        if node.is_dir:
            return False
        node.selected = not node.selected
        self.state.selected_count += 1 if node.selected else -1
        return True

    def resize(self, width: int, height: int) -> None:
        self.state.width = width
        self.state.height = height
        self.ensure_cursor_visible()

    # --- Viewport ---
    def _reflatten(self) -> None:
        pinned = self.state.visible[self.state.cursor]
        self.state.visible = flatten(self.tree)
        self.state.cursor = locate(self.state.visible, pinned)
        self.ensure_cursor_visible()

    def ensure_cursor_visible(self) -> None:
        s = self.state
        vh = self.viewport_height
        s.cursor = max(0, min(s.cursor, len(s.visible) - 1))
        if s.cursor < s.offset:
            s.offset = s.cursor
        if s.cursor >= s.offset + vh:
            s.offset = s.cursor - vh + 1
        s.offset = max(0, min(s.offset, len(s.visible) - vh))
