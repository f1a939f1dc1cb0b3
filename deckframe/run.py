"""The main event loop of a deck application."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from .manager import DisplayManager
from .navigation import NavigationEntry
from .render import Deck, RenderConfig
from .theme import Theme

_READ_TIMEOUT = 10.0


@dataclass(frozen=True)
class ButtonDown:
    """Key ``index`` was pressed."""

    index: int


@dataclass(frozen=True)
class ButtonUp:
    """Key ``index`` was released."""

    index: int


@dataclass(frozen=True)
class ExternalTrigger:
    """A navigation request from outside the deck.

    With ``switch_view`` false the request only refreshes the screen when it
    is already the one being shown.
    """

    navigation: NavigationEntry
    switch_view: bool


async def run(
    navigation_type: type[NavigationEntry],
    theme: Theme,
    config: RenderConfig,
    deck: Deck,
    context: Any,
) -> None:
    """Show the start screen of ``navigation_type`` and process events forever."""
    await _serve(navigation_type, theme, config, deck, context, None)


async def run_with_external_triggers(
    navigation_type: type[NavigationEntry],
    theme: Theme,
    config: RenderConfig,
    deck: Deck,
    context: Any,
    receiver: asyncio.Queue,
) -> None:
    """Like :func:`run`, also acting on :class:`ExternalTrigger` items from ``receiver``."""
    await _serve(navigation_type, theme, config, deck, context, receiver)


async def _show(manager: DisplayManager, navigation: NavigationEntry) -> None:
    await manager.navigate_to(navigation)
    await manager.fetch_all()
    await manager.render()


async def _serve(
    navigation_type: type[NavigationEntry],
    theme: Theme,
    config: RenderConfig,
    deck: Deck,
    context: Any,
    triggers: asyncio.Queue | None,
) -> None:
    manager, navigation = await DisplayManager.create(navigation_type, deck, config, theme, context)
    await manager.fetch_all()
    await manager.render()

    while True:
        sources = {"events": deck.read(_READ_TIMEOUT), "navigation": navigation.get()}
        if triggers is not None:
            sources["trigger"] = triggers.get()
        tasks = {name: asyncio.ensure_future(source) for name, source in sources.items()}
        try:
            await asyncio.wait(tasks.values(), return_when=asyncio.FIRST_COMPLETED)
        finally:
            pending = [task for task in tasks.values() if not task.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        if tasks["events"].done():
            for event in tasks["events"].result():
                match event:
                    case ButtonDown(index=index):
                        await manager.on_press(index)
                    case ButtonUp(index=index):
                        await manager.on_release(index)
        if tasks["navigation"].done():
            await _show(manager, tasks["navigation"].result())
        trigger_task = tasks.get("trigger")
        if trigger_task is not None and trigger_task.done():
            trigger: ExternalTrigger = trigger_task.result()
            current = await manager.get_current_navigation()
            if trigger.switch_view or trigger.navigation == current:
                await _show(manager, trigger.navigation)