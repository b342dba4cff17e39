from __future__ import annotations

import colorsys
import re
from typing import Tuple

RGBA = Tuple[int, int, int, int]

NAMED_COLORS: dict[str, RGBA] = {
    "black": (0, 0, 0, 255),
    "white": (255, 255, 255, 255),
    "transparent": (0, 0, 0, 0),
}

_NUM = r"([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)"
_HSLA_RE = re.compile(
    rf"^hsla?\(\s*{_NUM}\s*,\s*{_NUM}%\s*,\s*{_NUM}%\s*(?:,\s*{_NUM}\s*)?\)$"
)
_HEX_RE = re.compile(r"^#([0-9a-fA-F]{6})$")


def _fmt(value: float) -> str:
    # shortest round-trip digits, integral values without ".0", as a browser prints them
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return str(value)


def hsla(hue: float, saturation: float, lightness: float, alpha: float) -> str:
    """CSS fill style, e.g. ``hsla(285, 100%, 20%, 0.2)``."""
    return f"hsla({_fmt(hue)}, {_fmt(saturation)}%, {_fmt(lightness)}%, {_fmt(alpha)})"


def shape_fill(hue: int, generation: int, generations: int, alpha: float = 0.2) -> str:
    lightness = generation / generations * 40 + 20
    return hsla(hue, 100, lightness, alpha)


def _channel(v: float) -> int:
    return int(round(min(1.0, max(0.0, v)) * 255))


def parse_color(style: str) -> RGBA:
    """Convert a fill style string into 8-bit RGBA.

    Accepts ``hsl()``/``hsla()``, ``#rrggbb`` and a few named colours.
    """
    text = style.strip().lower()
    if text in NAMED_COLORS:
        return NAMED_COLORS[text]
    m = _HEX_RE.match(text)
    if m:
        value = int(m.group(1), 16)
        return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 255
    m = _HSLA_RE.match(text)
    if not m:
        raise ValueError(f"unsupported color: {style!r}")
    h, s, l, a = m.groups()
    hue = (float(h) % 360.0) / 360.0
    sat = min(100.0, max(0.0, float(s))) / 100.0
    light = min(100.0, max(0.0, float(l))) / 100.0
    alpha = 1.0 if a is None else float(a)
    r, g, b = colorsys.hls_to_rgb(hue, light, sat)
    return _channel(r), _channel(g), _channel(b), _channel(alpha)
