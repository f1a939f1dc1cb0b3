"""Colours and themes for deck buttons."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """An RGBA colour with channels stored as floats in [0, 1]."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def from_rgba8(cls, red: int, green: int, blue: int, alpha: int) -> Color:
        """Build a colour from four 8-bit channel values."""
        channels = (red, green, blue, alpha)
        for value in channels:
            if not 0 <= value <= 255:
                raise ValueError(f"channel value {value} is outside 0..255")
        return cls(*(value / 255.0 for value in channels))

    def to_rgba8(self) -> tuple[int, int, int, int]:
        """Return the colour as four 8-bit channel values."""
        return tuple(  # type: ignore[return-value]
            min(255, max(0, round(value * 255.0)))
            for value in (self.red, self.green, self.blue, self.alpha)
        )


@dataclass(frozen=True)
class Theme:
    """Background and foreground colours for each button state."""

    background: Color = Color.from_rgba8(20, 20, 25, 255)
    active_background: Color = Color.from_rgba8(235, 51, 148, 255)
    inactive_background: Color = Color.from_rgba8(41, 41, 51, 255)
    pressed_background: Color = Color.from_rgba8(51, 217, 230, 255)
    error_background: Color = Color.from_rgba8(255, 89, 0, 255)
    foreground_color: Color = Color.from_rgba8(242, 242, 255, 255)
    active_foreground_color: Color = Color.from_rgba8(255, 255, 255, 255)

    @classmethod
    def dark(cls) -> Theme:
        """The default dark theme."""
        return cls()

    @classmethod
    def light(cls) -> Theme:
        """A light theme."""
        return cls(
            background=Color.from_rgba8(240, 240, 245, 255),
            active_background=Color.from_rgba8(0, 122, 255, 255),
            inactive_background=Color.from_rgba8(200, 200, 210, 255),
            pressed_background=Color.from_rgba8(0, 180, 180, 255),
            error_background=Color.from_rgba8(255, 59, 48, 255),
            foreground_color=Color.from_rgba8(30, 30, 30, 255),
            active_foreground_color=Color.from_rgba8(255, 255, 255, 255),
        )