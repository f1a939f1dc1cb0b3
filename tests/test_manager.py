from __future__ import annotations

import asyncio
from dataclasses import dataclass

import pytest

from deckframe.customizable import ClickButton, CustomizableView, ToggleButton
from deckframe.errors import StreamDeckError
from deckframe.manager import DisplayManager
from deckframe.navigation import NavigationEntry
from deckframe.render import RenderConfig
from deckframe.theme import Theme


class FakeDeck:
    def __init__(self) -> None:
        self.images = {}
        self.uploads = []
        self.flushes = 0

    async def set_button_image(self, index, image):
        self.images[index] = image
        self.uploads.append(index)

    async def flush(self):
        self.flushes += 1

    async def read(self, timeout):
        return []


class Context:
    def __init__(self) -> None:
        self.log = []
        self.clicks = []
        self.pushed = []


async def _click(ctx):
    ctx.clicks.append("click")


async def _fail(ctx):
    raise RuntimeError("boom")


async def _fetch_false(ctx):
    return False


async def _fetch_fail(ctx):
    raise RuntimeError("fetch failed")


async def _push(ctx, value):
    ctx.pushed.append(value)


@dataclass(frozen=True)
class Screen(NavigationEntry):
    name: str = "main"

    async def get_view(self, context):
        context.log.append(self.name)
        view = CustomizableView(5, 3)
        if self.name == "main":
            view.set_button(0, 0, ClickButton("Click", None, _click))
            view.set_button(1, 0, ClickButton("Dark", None, _click).with_theme(Theme.dark()))
            view.set_button(2, 0, ToggleButton("Toggle", None, _fetch_false, _push))
            view.set_button(3, 0, ClickButton("Fail", None, _fail))
            view.set_navigation(0, 2, Screen("settings"), "Settings", None)
        elif self.name == "broken":
            view.set_button(0, 0, ToggleButton("Broken", None, _fetch_fail, _push))
        else:
            view.set_navigation(4, 2, Screen("main"), "Back", None)
        return view


async def _manager(theme=None):
    deck = FakeDeck()
    context = Context()
    manager, queue = await DisplayManager.create(
        Screen, deck, RenderConfig(), theme or Theme.light(), context
    )
    return manager, queue, deck, context


def _corner(deck, index):
    return deck.images[index].getpixel((0, 0))


@pytest.mark.asyncio
async def test_create_starts_on_default_entry():
    manager, queue, _, context = await _manager()
    assert await manager.get_current_navigation() == Screen()
    assert context.log == ["main"]
    assert queue.maxsize == 1


@pytest.mark.asyncio
async def test_render_uploads_every_key_and_flushes_per_column():
    manager, _, deck, _ = await _manager()
    await manager.render()
    assert sorted(deck.uploads) == list(range(15))
    assert deck.flushes == 5


@pytest.mark.asyncio
async def test_render_uses_global_and_button_themes():
    theme = Theme.light()
    manager, _, deck, _ = await _manager(theme)
    await manager.render()
    assert _corner(deck, 0) == theme.background.to_rgba8()
    assert _corner(deck, 1) == Theme.dark().background.to_rgba8()
    assert deck.images[0].size == (72, 72)


@pytest.mark.asyncio
async def test_on_press_shows_pressed_key_only():
    theme = Theme.light()
    manager, _, deck, _ = await _manager(theme)
    await manager.on_press(0)
    assert _corner(deck, 0) == theme.pressed_background.to_rgba8()
    assert _corner(deck, 4) == theme.background.to_rgba8()


@pytest.mark.asyncio
async def test_on_press_out_of_range_raises():
    manager, _, _, _ = await _manager()
    with pytest.raises(StreamDeckError):
        await manager.on_press(15)


@pytest.mark.asyncio
async def test_on_release_clicks_and_renders():
    manager, _, deck, context = await _manager()
    await manager.on_release(0)
    assert context.clicks == ["click"]
    assert sorted(deck.uploads) == list(range(15))


@pytest.mark.asyncio
async def test_on_release_toggle_becomes_active():
    theme = Theme.light()
    manager, _, deck, context = await _manager(theme)
    await manager.on_release(2)
    assert context.pushed == [True]
    assert _corner(deck, 2) == theme.active_background.to_rgba8()


@pytest.mark.asyncio
async def test_on_release_failure_is_reported_not_raised(capsys):
    manager, _, deck, _ = await _manager()
    await manager.on_release(3)
    assert "Error handling button click: boom" in capsys.readouterr().err
    assert len(deck.uploads) == 15


@pytest.mark.asyncio
async def test_on_release_navigation_key_queues_entry():
    manager, queue, _, _ = await _manager()
    await manager.on_release(10)
    assert queue.get_nowait() == Screen("settings")


@pytest.mark.asyncio
async def test_fetch_all_failure_is_reported(capsys):
    manager, _, _, _ = await _manager()
    await manager.navigate_to(Screen("broken"))
    await manager.fetch_all()
    assert "Error fetching view state: fetch failed" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_navigate_to_switches_view():
    manager, _, _, context = await _manager()
    await manager.navigate_to(Screen("settings"))
    assert await manager.get_current_navigation() == Screen("settings")
    assert context.log == ["main", "settings"]
    matrix = await manager.view.render()
    assert matrix.get_button(4, 2).text == "Back"


@pytest.mark.asyncio
async def test_queue_is_bounded():
    manager, queue, _, _ = await _manager()
    await manager.on_release(10)
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(manager.on_release(10), timeout=0.05)
    assert queue.qsize() == 1