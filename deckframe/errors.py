"""Exceptions raised by the deck framework."""

from __future__ import annotations


class StreamDeckError(Exception):
    """Base class for every error the framework raises.

    Raised directly it carries a free-form message.
    """


class DeviceNotFoundError(StreamDeckError):
    """The requested Stream Deck device was not found."""

    def __init__(self) -> None:
        super().__init__("Stream Deck device not found")


class DeviceError(StreamDeckError):
    """Communication with the device failed."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Device error: {message}")


class RenderError(StreamDeckError):
    """A button could not be rendered."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Render error: {message}")


class ImageError(StreamDeckError):
    """Image processing failed."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Image error: {message}")


class ButtonIndexOutOfBoundsError(StreamDeckError):
    """A button index lies outside the device's key grid."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Button index {index} is out of bounds")