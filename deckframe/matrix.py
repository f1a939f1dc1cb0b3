"""A fixed-size grid of buttons addressed by coordinates or key index."""

from __future__ import annotations

from collections.abc import Iterator

from .buttons import Button
from .errors import ButtonIndexOutOfBoundsError, StreamDeckError


class ButtonMatrix:
    """A ``width`` by ``height`` grid of buttons.

    Key indices run row by row: index ``y * width + x``.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"matrix dimensions must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self._rows = [[Button() for _ in range(width)] for _ in range(height)]

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _position(self, index: int) -> tuple[int, int] | None:
        if not 0 <= index < self.size():
            return None
        y, x = divmod(index, self.width)
        return x, y

    def get_button_by_index(self, index: int) -> Button | None:
        """Return the button at key ``index``, or ``None`` if it is out of range."""
        position = self._position(index)
        if position is None:
            return None
        x, y = position
        return self._rows[y][x]

    def get_button(self, x: int, y: int) -> Button | None:
        """Return the button at column ``x``, row ``y``, or ``None`` if out of range."""
        if not self._contains(x, y):
            return None
        return self._rows[y][x]

    def set_button(self, x: int, y: int, button: Button) -> None:
        """Place ``button`` at column ``x``, row ``y``."""
        if not self._contains(x, y):
            raise StreamDeckError("Button index out of bounds")
        self._rows[y][x] = button

    def set_button_by_index(self, index: int, button: Button) -> None:
        """Place ``button`` at key ``index``."""
        position = self._position(index)
        if position is None:
            raise ButtonIndexOutOfBoundsError(index)
        x, y = position
        self._rows[y][x] = button

    def size(self) -> int:
        """The total number of buttons in the grid."""
        return self.width * self.height

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Button]:
        """Yield the buttons in key-index order."""
        for row in self._rows:
            yield from row