# mkctx/app.py
"""
Textual front end for the picker.

The app only translates key presses into ``Key`` events for the
``InteractionController`` and paints the window it hands back. It exits with
the sorted list of selected paths on confirm, or ``None`` on quit.
"""

from typing import List, Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widgets import Footer, Static

from .controller import InteractionController, Key, Row


class TreeView(Static):
    """Paints the visible window of the tree, one row per node."""

    def show(self, rows: List[Row]) -> None:
        lines = []
        for row in rows:
            style = "reverse" if row.is_cursor else ""
            if row.is_dir:
                style = f"bold {style}".strip()
            elif row.selected:
                style = f"green {style}".strip()
            lines.append(Text(row.label(), style=style, no_wrap=True, overflow="ellipsis"))
        self.update(Text("\n").join(lines))


class MkctxApp(App[Optional[List[str]]]):
    TITLE = "mkctx"
    CSS = """
    Screen { layout: vertical; }
    #status_bar { height: 1; width: 100%; padding: 0 1; background: $primary-background; color: $text; }
    #tree_view { height: 1fr; width: 100%; }
    Footer { height: 1; }
    """
    BINDINGS = [
        Binding("up", "press('up')", "Up", priority=True),
        Binding("down", "press('down')", "Down", priority=True),
        Binding("right", "press('expand')", "Expand", priority=True),
        Binding("left", "press('collapse')", "Collapse", priority=True),
        Binding("space", "press('toggle')", "Toggle", priority=True),
        Binding("enter", "press('confirm')", "Build", priority=True),
        Binding("q", "press('quit')", "Quit", priority=True),
        Binding("escape", "press('quit')", "Quit", show=False, priority=True),
        Binding("k", "press('up')", "Up", show=False),
        Binding("j", "press('down')", "Down", show=False),
        Binding("l", "press('expand')", "Expand", show=False),
        Binding("h", "press('collapse')", "Collapse", show=False),
    ]
    selected_count = reactive(0)

    def __init__(self, controller: InteractionController, mode: str = "fs", allow_binary: bool = False):
        super().__init__()
        self.controller = controller
        self.mode = mode
        self.allow_binary = allow_binary

    def compose(self) -> ComposeResult:
        yield Static(self.status_text(), id="status_bar")
        yield TreeView(id="tree_view")
        yield Footer()

    def on_mount(self) -> None:
        self.controller.resize(self.size.width, self.size.height)
        self.refresh_view()

    def on_resize(self, event: events.Resize) -> None:
        self.controller.resize(event.size.width, event.size.height)
        self.refresh_view()

    def status_text(self) -> str:
        content = "text+bin" if self.allow_binary else "text"
        return f"{self.mode} | {content} | selected={self.controller.state.selected_count}"

    def watch_selected_count(self, count: int) -> None:
        try:
            self.query_one("#status_bar", Static).update(self.status_text())
        except NoMatches:
            pass

    def refresh_view(self) -> None:
        try:
            self.query_one(TreeView).show(self.controller.window())
        except NoMatches:
            return
        self.selected_count = self.controller.state.selected_count

    def action_press(self, name: str) -> None:
        key = Key(name)
        if not self.controller.handle(key):
            return
        if key is Key.QUIT:
            self.log("selection aborted")
            self.exit(None)
        elif key is Key.CONFIRM:
            selected = self.controller.selected_paths()
            self.log(f"selection confirmed: {len(selected)} files")
            self.exit(selected)
        else:
            if key in (Key.EXPAND, Key.COLLAPSE):
                self.log(f"{key.value} {self.controller.current.rel_path}")
            self.refresh_view()
