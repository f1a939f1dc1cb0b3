"""Navigation built from independent plugins sharing a typed context."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from .customizable import CustomizableView
from .navigation import NavigationEntry, View


class PluginContext:
    """Shared objects for plugins, looked up by key (usually their type)."""

    def __init__(self, contexts: Mapping[Any, Any] | None = None) -> None:
        self.contexts: Mapping[Any, Any] = MappingProxyType(dict(contexts or {}))

    async def get_context(self, key: Any) -> Any | None:
        """Return the object stored under ``key``.

        ``None`` is returned when nothing is stored, or when ``key`` is a type
        and the stored object is not an instance of it.
        """
        value = self.contexts.get(key)
        if value is None:
            return None
        if isinstance(key, type) and not isinstance(value, key):
            return None
        return value


class Plugin(ABC):
    """A self-contained screen of a plugin-based application."""

    @abstractmethod
    def name(self) -> str:
        """A name that identifies the plugin; equal names mean the same screen."""

    @abstractmethod
    async def get_view(self, context: PluginContext) -> View:
        """Build the plugin's view."""


class _DefaultPlugin(Plugin):
    def __init__(self, width: int, height: int) -> None:
        self._width = width
        self._height = height

    def name(self) -> str:
        return "DefaultPlugin"

    async def get_view(self, context: PluginContext) -> View:
        return CustomizableView(self._width, self._height)


class PluginNavigation(NavigationEntry):
    """A navigation entry that leads to a plugin's view.

    Without a plugin it leads to an empty view of
    ``DEFAULT_WIDTH`` by ``DEFAULT_HEIGHT`` keys.
    """

    DEFAULT_WIDTH: ClassVar[int] = 5
    DEFAULT_HEIGHT: ClassVar[int] = 3

    def __init__(self, plugin: Plugin | None = None) -> None:
        self.plugin = plugin or _DefaultPlugin(self.DEFAULT_WIDTH, self.DEFAULT_HEIGHT)

    async def get_view(self, context: PluginContext) -> View:
        return await self.plugin.get_view(context)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PluginNavigation):
            return NotImplemented
        return self.plugin.name() == other.plugin.name()

    def __hash__(self) -> int:
        return hash(self.plugin.name())

    def __repr__(self) -> str:
        return f"PluginNavigation({self.plugin.name()!r})"