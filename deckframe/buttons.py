"""Logical buttons as views describe them, before theming and rendering."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

from .theme import Theme


class ButtonState(enum.Enum):
    """The visual state of a button, which selects its theme colours."""

    DEFAULT = "default"
    PRESSED = "pressed"
    ACTIVE = "active"
    INACTIVE = "inactive"
    ERROR = "error"


@dataclass(frozen=True)
class Button:
    """A key's label, optional SVG icon, state and optional theme override."""

    text: str = ""
    icon: str | None = None
    state: ButtonState = ButtonState.DEFAULT
    theme: Theme | None = None

    def updated_text(self, text: str) -> Button:
        """Return a copy of this button with different text."""
        return replace(self, text=text)

    def updated_icon(self, icon: str) -> Button:
        """Return a copy of this button with a different icon."""
        return replace(self, icon=icon)

    def updated_state(self, state: ButtonState) -> Button:
        """Return a copy of this button in a different state."""
        return replace(self, state=state)

    def with_theme(self, theme: Theme) -> Button:
        """Return a copy of this button drawn with ``theme`` instead of the global one."""
        return replace(self, theme=theme)