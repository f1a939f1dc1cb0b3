"""Keeps the current view on the device and routes key events to it."""

from __future__ import annotations

import asyncio
import sys
from typing import Any

from .buttons import Button, ButtonState
from .errors import StreamDeckError
from .matrix import ButtonMatrix
from .navigation import NavigationEntry, View
from .render import Deck, IconWithTextButton, RenderConfig, TextButton, render_button
from .theme import Color, Theme


def _background(theme: Theme, state: ButtonState) -> Color:
    return {
        ButtonState.DEFAULT: theme.background,
        ButtonState.ACTIVE: theme.active_background,
        ButtonState.INACTIVE: theme.inactive_background,
        ButtonState.ERROR: theme.error_background,
        ButtonState.PRESSED: theme.pressed_background,
    }[state]


def _foreground(theme: Theme, state: ButtonState) -> Color:
    if state in (ButtonState.ACTIVE, ButtonState.PRESSED):
        return theme.active_foreground_color
    return theme.foreground_color


class DisplayManager:
    """Renders the current view to a deck and dispatches presses and releases.

    Views request a change of screen by putting a navigation entry on
    ``navigation_queue``; the event loop picks it up and calls
    :meth:`navigate_to`.
    """

    def __init__(
        self,
        deck: Deck,
        config: RenderConfig,
        theme: Theme,
        context: Any,
        view: View,
        current_navigation: NavigationEntry,
        navigation_queue: asyncio.Queue,
    ) -> None:
        self.deck = deck
        self.config = config
        self.theme = theme
        self.context = context
        self.view = view
        self.navigation_queue = navigation_queue
        self._current_navigation = current_navigation

    @classmethod
    async def create(
        cls,
        navigation_type: type[NavigationEntry],
        deck: Deck,
        config: RenderConfig,
        theme: Theme,
        context: Any,
    ) -> tuple[DisplayManager, asyncio.Queue]:
        """Build a manager showing the start screen of ``navigation_type``.

        Returns the manager and the queue on which views post navigation
        requests.
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=1)
        start = navigation_type()
        view = await start.get_view(context)
        return cls(deck, config, theme, context, view, start, queue), queue

    async def navigate_to(self, navigation_entry: NavigationEntry) -> None:
        """Switch to the view that ``navigation_entry`` leads to."""
        view = await navigation_entry.get_view(self.context)
        self.view = view
        self._current_navigation = navigation_entry

    async def get_current_navigation(self) -> NavigationEntry:
        """The navigation entry of the view being shown."""
        return self._current_navigation

    async def render(self) -> None:
        """Draw the current view on the device."""
        matrix = await self.view.render()
        await self._render_matrix(matrix)

    async def fetch_all(self) -> None:
        """Refresh every button of the current view; failures are reported, not raised."""
        try:
            await self.view.fetch_all(self.context)
        except Exception as error:  # noqa: BLE001 - a failing fetch must not stop the deck
            print(f"Error fetching view state: {error}", file=sys.stderr)

    async def _render_matrix(self, matrix: ButtonMatrix) -> None:
        for x in range(matrix.width):
            for y in range(matrix.height):
                button = matrix.get_button(x, y)
                index = y * matrix.width + x
                await self.deck.set_button_image(index, render_button(self._raw(button), self.config))
            await self.deck.flush()

    def _raw(self, button: Button) -> TextButton | IconWithTextButton:
        theme = button.theme or self.theme
        background = _background(theme, button.state)
        foreground = _foreground(theme, button.state)
        if button.icon is not None:
            return IconWithTextButton(button.icon, button.text, background, foreground)
        return TextButton(button.text, background, foreground)

    async def on_press(self, button: int) -> None:
        """Show key ``button`` in its pressed state."""
        matrix = await self.view.render()
        current = matrix.get_button_by_index(button)
        if current is None:
            raise StreamDeckError("Button not found")
        matrix.set_button_by_index(button, current.updated_state(ButtonState.PRESSED))
        await self._render_matrix(matrix)

    async def on_release(self, button: int) -> None:
        """Deliver a click on key ``button`` to the view, then redraw it."""
        try:
            await self.view.on_click(self.context, button, self.navigation_queue)
        except Exception as error:  # noqa: BLE001 - a failing click must not stop the deck
            print(f"Error handling button click: {error}", file=sys.stderr)
        await self.render()