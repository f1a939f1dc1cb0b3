"""The interfaces that applications implement: navigation entries and views."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any

from .matrix import ButtonMatrix


class View(ABC):
    """One screen of keys: renders buttons, handles clicks and refreshes state."""

    @abstractmethod
    async def render(self) -> ButtonMatrix:
        """Return the grid of buttons this view currently shows."""

    @abstractmethod
    async def on_click(self, context: Any, index: int, navigation: asyncio.Queue) -> None:
        """Handle a click on key ``index``.

        A view that wants to change screen puts a navigation entry on
        ``navigation``.
        """

    @abstractmethod
    async def fetch_all(self, context: Any) -> None:
        """Refresh the state of every button in the view."""


class NavigationEntry(ABC):
    """A destination the application can navigate to.

    Subclasses must be constructible with no arguments, which yields the
    start screen, and must compare equal when they denote the same screen.
    """

    @abstractmethod
    async def get_view(self, context: Any) -> View:
        """Build the view that this entry leads to."""