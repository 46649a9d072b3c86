# tests/test_app.py

import pytest

from mkctx.app import MkctxApp
from mkctx.controller import InteractionController, Outcome
from mkctx.tree import build_tree

PATHS = ["z.txt", "a.go", "dir/b.md"]
# visible: ".", "dir", "b.md", "a.go", "z.txt"


def make_app(**kwargs):
    return MkctxApp(InteractionController(build_tree(".", PATHS)), **kwargs)


@pytest.mark.asyncio
async def test_app_initialization_and_headless_exit():
    """
    The app mounts headless, sizes the viewport from the terminal and quits cleanly.
    """
    app = make_app(mode="git")
    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.pause()
        assert app.controller.state.height == 24
        assert app.status_text() == "git | text | selected=0"
        await pilot.press("q")
    assert app.return_value is None
    assert app.controller.state.outcome is Outcome.ABORTED


@pytest.mark.asyncio
async def test_confirm_returns_sorted_selection():
    app = make_app()
    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.press("down", "down", "space")  # b.md
        await pilot.press("down", "down", "space")  # z.txt
        await pilot.press("up", "space")  # a.go
        assert app.controller.state.selected_count == 3
        assert app.selected_count == 3
        await pilot.press("enter")
    assert app.return_value == ["a.go", "dir/b.md", "z.txt"]


@pytest.mark.asyncio
async def test_collapse_and_expand_keys():
    app = make_app(allow_binary=True)
    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.press("down", "left")
        assert len(app.controller.state.visible) == 4
        assert app.controller.current.name == "dir"
        await pilot.press("right")
        assert len(app.controller.state.visible) == 5
        assert app.status_text() == "fs | text+bin | selected=0"
        await pilot.press("escape")
    assert app.return_value is None


@pytest.mark.asyncio
async def test_vim_keys_move_cursor():
    app = make_app()
    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.press("j", "j", "j")
        assert app.controller.current.name == "a.go"
        await pilot.press("k")
        assert app.controller.current.name == "b.md"
        await pilot.press("q")


@pytest.mark.asyncio
async def test_confirm_without_selection_returns_empty_list():
    app = make_app()
    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.press("enter")
    assert app.return_value == []


@pytest.mark.asyncio
async def test_terminal_resize_reclamps_scroll():
    paths = [f"f{i:02}.txt" for i in range(20)]
    app = MkctxApp(InteractionController(build_tree(".", paths)))
    async with app.run_test(size=(80, 8)) as pilot:
        for _ in range(15):
            await pilot.press("down")
        assert app.controller.viewport_height == 6
        assert app.controller.state.cursor == 15
        assert app.controller.state.offset == 10
        await pilot.resize_terminal(80, 30)
        await pilot.pause()
        assert app.controller.state.height == 30
        assert app.controller.state.offset == 0
        assert app.controller.state.cursor == 15
        await pilot.press("q")
