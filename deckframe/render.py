"""Raw button descriptions and their rendering to key images."""

from __future__ import annotations

import io
import math
import re
import sys
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Protocol, Union

from PIL import Image, ImageChops, ImageDraw, ImageFont

from .errors import DeviceError, RenderError
from .theme import Color

Point = tuple[float, float]
Rgba8 = tuple[int, int, int, int]

_SUPERSAMPLE = 4
_ICON_VIEW_WIDTH = 40.0
_ICON_OFFSET = (8.0, 6.0)
_TEXT_BOTTOM_MARGIN = 6
_CURVE_STEPS = 16
_ELLIPSE_STEPS = 64
_PATH_COMMANDS = frozenset("MmLlHhVvCcSsQqTtAaZz")
_SEPARATORS = frozenset(" \t\r\n,")
_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_SKIPPED_ELEMENTS = frozenset(
    {"defs", "clipPath", "mask", "symbol", "marker", "pattern", "title", "desc", "metadata", "style"}
)


class Deck(Protocol):
    """The device interface the framework drives."""

    async def set_button_image(self, index: int, image: Image.Image) -> None:
        """Upload ``image`` to the key at ``index``."""

    async def flush(self) -> None:
        """Push pending key images to the device."""

    async def read(self, timeout: float) -> list[Any]:
        """Wait up to ``timeout`` seconds for input events and return them."""


@dataclass
class RenderConfig:
    """Key size and font used when rendering buttons.

    With ``font_data`` left as ``None`` the default Pillow font is used.
    """

    width: int = 72
    height: int = 72
    font_data: bytes | None = None
    font_scale: float = 14.0


@dataclass
class IconButton:
    """An SVG icon on a solid background."""

    svg_data: str
    background: Color
    foreground: Color


@dataclass
class IconWithTextButton:
    """An SVG icon with a text label underneath."""

    svg_data: str
    text: str
    background: Color
    foreground: Color


@dataclass
class TextButton:
    """A text label on a solid background."""

    text: str
    background: Color
    foreground: Color


@dataclass
class CustomImageButton:
    """A ready-made image shown as is."""

    image: Image.Image


@dataclass
class GradientButton:
    """A diagonal gradient between two 8-bit RGBA colours."""

    start_color: Rgba8
    end_color: Rgba8


RawButton = Union[IconButton, IconWithTextButton, TextButton, CustomImageButton, GradientButton]


def render_button(button: RawButton, config: RenderConfig) -> Image.Image:
    """Render ``button`` to an RGBA image of the configured size."""
    match button:
        case IconButton(svg_data=svg, background=background, foreground=foreground):
            return _render_svg(svg, config, background, foreground)
        case IconWithTextButton(
            svg_data=svg, text=text, background=background, foreground=foreground
        ):
            image = _render_svg(svg, config, background, foreground)
            _draw_label(image, text, _opaque(foreground), config)
            return image
        case TextButton(text=text, background=background, foreground=foreground):
            image = Image.new("RGBA", (config.width, config.height), _opaque(background))
            _draw_label(image, text, _opaque(foreground), config)
            return image
        case CustomImageButton(image=image):
            return image.copy()
        case GradientButton(start_color=start, end_color=end):
            return _render_gradient(start, end, config)
    raise TypeError(f"cannot render {type(button).__name__}")


async def set_button(deck: Deck, index: int, button: RawButton, config: RenderConfig) -> None:
    """Render ``button`` and upload it to key ``index`` of ``deck``."""
    try:
        image = render_button(button, config)
    except RenderError as error:
        print(f"Error rendering button: {error}", file=sys.stderr)
        raise DeviceError("bad data") from error
    await deck.set_button_image(index, image)


def _opaque(color: Color) -> Rgba8:
    red, green, blue, _ = color.to_rgba8()
    return (red, green, blue, 255)


def _load_font(config: RenderConfig) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    try:
        if config.font_data is None:
            return ImageFont.load_default(size=config.font_scale)
        return ImageFont.truetype(io.BytesIO(config.font_data), size=config.font_scale)
    except (OSError, ValueError) as error:
        raise RenderError("Failed to load font") from error


def _draw_label(image: Image.Image, text: str, color: Rgba8, config: RenderConfig) -> None:
    font = _load_font(config)
    draw = ImageDraw.Draw(image)
    _, _, text_width, text_height = draw.textbbox((0, 0), text, font=font)
    x = int((config.width - text_width) / 2)
    y = config.height - int(text_height) - _TEXT_BOTTOM_MARGIN
    draw.text((x, y), text, font=font, fill=color)


def _render_gradient(start: Rgba8, end: Rgba8, config: RenderConfig) -> Image.Image:
    width, height = config.width, config.height

    def pixel(x: int, y: int) -> Rgba8:
        t = (x / width + y / height) / 2.0
        red, green, blue = (int(a * (1.0 - t) + b * t) for a, b in zip(start[:3], end[:3]))
        return (red, green, blue, 255)

    image = Image.new("RGBA", (width, height))
    image.putdata([pixel(x, y) for y in range(height) for x in range(width)])
    return image


def _render_svg(
    svg_data: str, config: RenderConfig, background: Color, foreground: Color
) -> Image.Image:
    size = (config.width, config.height)
    coverage = _icon_coverage(svg_data, config)
    base = Image.new("RGBA", size, background.to_rgba8())
    ink = Image.new("RGBA", size, _opaque(foreground))
    blended = Image.composite(ink, base, coverage)
    touched = coverage.point(lambda value: 255 if value else 0)
    alpha = Image.composite(Image.new("L", size, 255), base.getchannel("A"), touched)
    blended.putalpha(alpha)
    return blended


def _icon_coverage(svg_data: str, config: RenderConfig) -> Image.Image:
    """Anti-aliased coverage mask of the icon, placed as on the device."""
    try:
        root = ET.fromstring(svg_data)
    except ET.ParseError as error:
        raise RenderError(f"invalid SVG: {error}") from error
    if _local_name(root.tag) != "svg":
        raise RenderError("document root is not an <svg> element")

    to_user = _viewport_mapping(root)
    scale = config.width / _ICON_VIEW_WIDTH * _SUPERSAMPLE

    def to_pixel(point: Point) -> Point:
        ux, uy = to_user(point)
        return ((ux + _ICON_OFFSET[0]) * scale, (uy + _ICON_OFFSET[1]) * scale)

    large = (config.width * _SUPERSAMPLE, config.height * _SUPERSAMPLE)
    coverage = Image.new("1", large, 0)
    for subpaths in _shapes(root, _fill_of(root) == "none"):
        shape = Image.new("1", large, 0)
        for subpath in subpaths:
            if len(subpath) < 3:
                continue
            layer = Image.new("1", large, 0)
            ImageDraw.Draw(layer).polygon([to_pixel(p) for p in subpath], fill=1)
            shape = ImageChops.logical_xor(shape, layer)
        coverage = ImageChops.logical_or(coverage, shape)
    return coverage.convert("L").resize((config.width, config.height), Image.Resampling.BOX)


def _viewport_mapping(root: ET.Element):
    view_box = [float(n) for n in _NUMBER.findall(root.get("viewBox", ""))]
    if len(view_box) != 4:
        return lambda point: point
    min_x, min_y, view_width, view_height = view_box
    width = _length(root.get("width"))
    height = _length(root.get("height"))
    sx = width / view_width if width and view_width else 1.0
    sy = height / view_height if height and view_height else 1.0
    return lambda point: ((point[0] - min_x) * sx, (point[1] - min_y) * sy)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _length(value: str | None) -> float | None:
    if value is None:
        return None
    match = _NUMBER.match(value.strip())
    return float(match.group()) if match else None


def _attr(element: ET.Element, name: str) -> float:
    value = _length(element.get(name))
    return 0.0 if value is None else value


def _fill_of(element: ET.Element) -> str | None:
    for declaration in element.get("style", "").split(";"):
        name, _, value = declaration.partition(":")
        if name.strip() == "fill":
            return value.strip()
    fill = element.get("fill")
    return fill.strip() if fill is not None else None


def _shapes(element: ET.Element, fill_none: bool) -> Iterator[list[list[Point]]]:
    for child in element:
        tag = _local_name(child.tag)
        if tag in _SKIPPED_ELEMENTS:
            continue
        fill = _fill_of(child)
        child_none = fill_none if fill is None else fill == "none"
        if not child_none:
            outlines = _outlines(child, tag)
            if outlines:
                yield outlines
        yield from _shapes(child, child_none)


def _outlines(element: ET.Element, tag: str) -> list[list[Point]]:
    if tag == "path":
        return _parse_path(element.get("d", ""))
    if tag == "rect":
        x, y = _attr(element, "x"), _attr(element, "y")
        width, height = _attr(element, "width"), _attr(element, "height")
        if width <= 0 or height <= 0:
            return []
        return [[(x, y), (x + width, y), (x + width, y + height), (x, y + height)]]
    if tag == "circle":
        radius = _attr(element, "r")
        return _ellipse(_attr(element, "cx"), _attr(element, "cy"), radius, radius)
    if tag == "ellipse":
        return _ellipse(
            _attr(element, "cx"), _attr(element, "cy"), _attr(element, "rx"), _attr(element, "ry")
        )
    if tag in ("polygon", "polyline"):
        values = iter(float(n) for n in _NUMBER.findall(element.get("points", "")))
        return [list(zip(values, values))]
    return []


def _ellipse(cx: float, cy: float, rx: float, ry: float) -> list[list[Point]]:
    if rx <= 0 or ry <= 0:
        return []
    angles = (2 * math.pi * step / _ELLIPSE_STEPS for step in range(_ELLIPSE_STEPS))
    return [[(cx + rx * math.cos(a), cy + ry * math.sin(a)) for a in angles]]


class _PathScanner:
    """Reads commands, numbers and flags from SVG path data."""

    def __init__(self, data: str) -> None:
        self._data = data
        self._pos = 0

    def _skip(self) -> None:
        while self._pos < len(self._data) and self._data[self._pos] in _SEPARATORS:
            self._pos += 1

    def at_end(self) -> bool:
        self._skip()
        return self._pos >= len(self._data)

    def command(self) -> str | None:
        self._skip()
        char = self._data[self._pos : self._pos + 1]
        if char.isalpha():
            self._pos += 1
            return char
        return None

    def number(self) -> float:
        self._skip()
        match = _NUMBER.match(self._data, self._pos)
        if match is None:
            raise RenderError(f"expected a number at offset {self._pos} of path data")
        self._pos = match.end()
        return float(match.group())

    def flag(self) -> bool:
        self._skip()
        char = self._data[self._pos : self._pos + 1]
        if char not in ("0", "1"):
            raise RenderError(f"expected an arc flag at offset {self._pos} of path data")
        self._pos += 1
        return char == "1"

    def point(self, origin: Point) -> Point:
        x = origin[0] + self.number()
        y = origin[1] + self.number()
        return (x, y)


def _parse_path(data: str) -> list[list[Point]]:
    """Flatten SVG path data into closed polygons, one per subpath."""
    scanner = _PathScanner(data)
    subpaths: list[list[Point]] = []
    pos: Point = (0.0, 0.0)
    start = pos
    current: list[Point] = [pos]
    command: str | None = None
    last_cubic: Point | None = None
    last_quad: Point | None = None

    while not scanner.at_end():
        letter = scanner.command()
        if letter is not None:
            if letter not in _PATH_COMMANDS:
                raise RenderError(f"unknown path command {letter!r}")
            command = letter
        elif command is None or command in "Zz":
            raise RenderError("path data is missing a command")
        elif command in "Mm":
            command = "l" if command == "m" else "L"

        origin = pos if command.islower() else (0.0, 0.0)
        op = command.upper()
        cubic: Point | None = None
        quad: Point | None = None

        if op == "Z":
            if len(current) > 1:
                subpaths.append(current)
            pos = start
            current = [start]
        elif op == "M":
            if len(current) > 1:
                subpaths.append(current)
            pos = start = scanner.point(origin)
            current = [pos]
        elif op == "L":
            pos = scanner.point(origin)
            current.append(pos)
        elif op == "H":
            pos = (origin[0] + scanner.number(), pos[1])
            current.append(pos)
        elif op == "V":
            pos = (pos[0], origin[1] + scanner.number())
            current.append(pos)
        elif op in "CS":
            first = scanner.point(origin) if op == "C" else _reflect(last_cubic, pos)
            second = scanner.point(origin)
            end = scanner.point(origin)
            current.extend(_cubic_points(pos, first, second, end))
            cubic, pos = second, end
        elif op in "QT":
            control = scanner.point(origin) if op == "Q" else _reflect(last_quad, pos)
            end = scanner.point(origin)
            current.extend(_quad_points(pos, control, end))
            quad, pos = control, end
        else:
            rx = scanner.number()
            ry = scanner.number()
            rotation = scanner.number()
            large_arc = scanner.flag()
            sweep = scanner.flag()
            end = scanner.point(origin)
            current.extend(_arc_points(pos, end, rx, ry, rotation, large_arc, sweep))
            pos = end
        last_cubic, last_quad = cubic, quad

    if len(current) > 1:
        subpaths.append(current)
    return subpaths


def _reflect(control: Point | None, pos: Point) -> Point:
    if control is None:
        return pos
    return (2 * pos[0] - control[0], 2 * pos[1] - control[1])


def _cubic_points(p0: Point, p1: Point, p2: Point, p3: Point) -> list[Point]:
    def at(t: float) -> Point:
        u = 1.0 - t
        x, y = (
            u * u * u * a + 3 * u * u * t * b + 3 * u * t * t * c + t * t * t * d
            for a, b, c, d in zip(p0, p1, p2, p3)
        )
        return (x, y)

    return [at(step / _CURVE_STEPS) for step in range(1, _CURVE_STEPS + 1)]


def _quad_points(p0: Point, p1: Point, p2: Point) -> list[Point]:
    def at(t: float) -> Point:
        u = 1.0 - t
        x, y = (u * u * a + 2 * u * t * b + t * t * c for a, b, c in zip(p0, p1, p2))
        return (x, y)

    return [at(step / _CURVE_STEPS) for step in range(1, _CURVE_STEPS + 1)]


def _arc_points(
    start: Point,
    end: Point,
    rx: float,
    ry: float,
    rotation: float,
    large_arc: bool,
    sweep: bool,
) -> list[Point]:
    """Flatten an elliptical arc given in SVG endpoint form."""
    if start == end:
        return []
    rx, ry = abs(rx), abs(ry)
    if rx == 0 or ry == 0:
        return [end]
    phi = math.radians(rotation)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)
    dx = (start[0] - end[0]) / 2
    dy = (start[1] - end[1]) / 2
    x1p = cos_phi * dx + sin_phi * dy
    y1p = -sin_phi * dx + cos_phi * dy

    radii_check = (x1p * x1p) / (rx * rx) + (y1p * y1p) / (ry * ry)
    if radii_check > 1:
        factor = math.sqrt(radii_check)
        rx, ry = rx * factor, ry * factor

    numerator = rx * rx * ry * ry - rx * rx * y1p * y1p - ry * ry * x1p * x1p
    denominator = rx * rx * y1p * y1p + ry * ry * x1p * x1p
    coefficient = math.sqrt(max(numerator, 0.0) / denominator) if denominator else 0.0
    if large_arc == sweep:
        coefficient = -coefficient
    cxp = coefficient * rx * y1p / ry
    cyp = -coefficient * ry * x1p / rx
    cx = cos_phi * cxp - sin_phi * cyp + (start[0] + end[0]) / 2
    cy = sin_phi * cxp + cos_phi * cyp + (start[1] + end[1]) / 2

    theta1 = math.atan2((y1p - cyp) / ry, (x1p - cxp) / rx)
    theta2 = math.atan2((-y1p - cyp) / ry, (-x1p - cxp) / rx)
    delta = theta2 - theta1
    if sweep and delta < 0:
        delta += 2 * math.pi
    elif not sweep and delta > 0:
        delta -= 2 * math.pi

    steps = max(2, math.ceil(abs(delta) / (math.pi / 16)))

    def at(angle: float) -> Point:
        ex, ey = rx * math.cos(angle), ry * math.sin(angle)
        return (cx + ex * cos_phi - ey * sin_phi, cy + ex * sin_phi + ey * cos_phi)

    points = [at(theta1 + delta * step / steps) for step in range(1, steps)]
    points.append(end)
    return points