"""A view assembled from individually configured buttons."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Any, Union

from .buttons import Button, ButtonState
from .errors import ButtonIndexOutOfBoundsError, StreamDeckError
from .matrix import ButtonMatrix
from .navigation import NavigationEntry, View
from .theme import Theme

FetchFunction = Callable[[Any], Awaitable[bool]]
PushFunction = Callable[[Any, bool], Awaitable[None]]
ClickAction = Callable[[Any], Awaitable[None]]


class CustomButton(ABC):
    """A button with its own state and click behaviour."""

    @abstractmethod
    def get_state(self) -> Button:
        """Return the button as it should currently be shown."""

    @abstractmethod
    async def fetch(self, context: Any) -> None:
        """Refresh the button's state from the application context."""

    @abstractmethod
    async def click(self, context: Any) -> None:
        """React to the button being clicked."""


class ToggleButton(CustomButton):
    """A button that switches between an inactive and an active look.

    ``fetch_active(context)`` reports the current state and
    ``push_active(context, active)`` applies a new one.
    """

    def __init__(
        self,
        text: str,
        icon: str | None,
        fetch_active: FetchFunction,
        push_active: PushFunction,
    ) -> None:
        self._fetch_active = fetch_active
        self._push_active = push_active
        self.button = Button(text=text, icon=icon, state=ButtonState.DEFAULT)
        self.active_button = Button(text=text, icon=icon, state=ButtonState.ACTIVE)
        self.active = False

    def _copy(self, button: Button, active_button: Button) -> ToggleButton:
        toggle = ToggleButton(self.button.text, self.button.icon, self._fetch_active, self._push_active)
        toggle.button = button
        toggle.active_button = active_button
        toggle.active = self.active
        return toggle

    def when_active(self, text: str, icon: str | None) -> ToggleButton:
        """Return a copy that shows ``text`` and ``icon`` while active."""
        return self._copy(
            self.button, Button(text=text, icon=icon, state=ButtonState.ACTIVE)
        )

    def with_theme(self, theme: Theme) -> ToggleButton:
        """Return a copy drawn with ``theme`` in both states."""
        return self._copy(self.button.with_theme(theme), self.active_button.with_theme(theme))

    def get_state(self) -> Button:
        return self.active_button if self.active else self.button

    async def fetch(self, context: Any) -> None:
        self.active = bool(await self._fetch_active(context))

    async def click(self, context: Any) -> None:
        new_state = not self.active
        await self._push_active(context, new_state)
        self.active = new_state


class ClickButton(CustomButton):
    """A button that runs ``action(context)`` when clicked."""

    def __init__(self, text: str, icon: str | None, action: ClickAction) -> None:
        self._action = action
        self.button = Button(text=text, icon=icon, state=ButtonState.DEFAULT)

    def with_theme(self, theme: Theme) -> ClickButton:
        """Return a copy drawn with ``theme``."""
        themed = ClickButton(self.button.text, self.button.icon, self._action)
        themed.button = self.button.with_theme(theme)
        return themed

    def get_state(self) -> Button:
        return self.button

    async def fetch(self, context: Any) -> None:
        return None

    async def click(self, context: Any) -> None:
        await self._action(context)


@dataclass(frozen=True)
class NavigationButton:
    """A key that leads to another screen when clicked."""

    navigation: NavigationEntry
    button: Button


Slot = Union[CustomButton, NavigationButton, None]


class CustomizableView(View):
    """A ``width`` by ``height`` view whose keys are set one by one."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"view dimensions must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self._slots: list[list[Slot]] = [[None] * width for _ in range(height)]

    def _place(self, x: int, y: int, slot: Slot) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise StreamDeckError("Row or column out of bounds")
        self._slots[y][x] = slot

    def _occupied(self) -> Iterator[tuple[int, int, CustomButton | NavigationButton]]:
        """Yield occupied slots column by column."""
        for x in range(self.width):
            for y in range(self.height):
                slot = self._slots[y][x]
                if slot is not None:
                    yield x, y, slot

    def set_button(self, x: int, y: int, button: CustomButton) -> None:
        """Place a custom button at column ``x``, row ``y``."""
        self._place(x, y, button)

    def set_navigation(
        self, x: int, y: int, navigation: NavigationEntry, text: str, icon: str | None
    ) -> None:
        """Place a key at column ``x``, row ``y`` that navigates to ``navigation``."""
        self._place(x, y, NavigationButton(navigation, Button(text=text, icon=icon)))

    def remove_button(self, x: int, y: int) -> None:
        """Clear the key at column ``x``, row ``y``."""
        self._place(x, y, None)

    async def render(self) -> ButtonMatrix:
        matrix = ButtonMatrix(self.width, self.height)
        for x, y, slot in self._occupied():
            state = slot.button if isinstance(slot, NavigationButton) else slot.get_state()
            matrix.set_button(x, y, state)
        return matrix

    async def on_click(self, context: Any, index: int, navigation: asyncio.Queue) -> None:
        if not 0 <= index < self.width * self.height:
            raise ButtonIndexOutOfBoundsError(index)
        y, x = divmod(index, self.width)
        slot = self._slots[y][x]
        if isinstance(slot, NavigationButton):
            await navigation.put(slot.navigation)
        elif slot is not None:
            await slot.click(context)

    async def fetch_all(self, context: Any) -> None:
        for _, _, slot in self._occupied():
            if not isinstance(slot, NavigationButton):
                await slot.fetch(context)