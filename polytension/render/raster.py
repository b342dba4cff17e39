from __future__ import annotations

import math

import numpy as np
from PIL import Image, ImageDraw

from ..core.colors import RGBA, parse_color
from .surface import PathBuilder


class RasterSurface:
    """Canvas-style drawing onto a Pillow RGBA image.

    Translucent fills are composited over what is already there, so
    overlapping triangles mix the way they do on a browser canvas.
    """

    def __init__(self, width: int, height: int, background: str = "black"):
        width, height = int(width), int(height)
        if width <= 0 or height <= 0:
            raise ValueError(f"surface size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.image = Image.new("RGBA", (width, height), parse_color(background))
        self._fill: RGBA = (0, 0, 0, 255)
        self._path = PathBuilder()

    def set_fill_style(self, style: str) -> None:
        self._fill = parse_color(style)

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        self._paint([[(x, y), (x + w, y), (x + w, y + h), (x, y + h)]])

    def begin_path(self) -> None:
        self._path.begin()

    def move_to(self, x: float, y: float) -> None:
        self._path.move_to(x, y)

    def line_to(self, x: float, y: float) -> None:
        self._path.line_to(x, y)

    def close_path(self) -> None:
        self._path.close()

    def fill(self) -> None:
        self._paint(self._path.polygons())

    def _paint(self, polygons) -> None:
        color = self._fill
        if color[3] == 0 or not polygons:
            return
        if color[3] == 255:
            draw = ImageDraw.Draw(self.image)
            for poly in polygons:
                draw.polygon(poly, fill=color)
            return
        for poly in polygons:
            xs = [p[0] for p in poly]
            ys = [p[1] for p in poly]
            x0 = max(0, int(math.floor(min(xs))))
            y0 = max(0, int(math.floor(min(ys))))
            x1 = min(self.width, int(math.ceil(max(xs))) + 1)
            y1 = min(self.height, int(math.ceil(max(ys))) + 1)
            if x1 <= x0 or y1 <= y0:
                continue
            overlay = Image.new("RGBA", (x1 - x0, y1 - y0), (0, 0, 0, 0))
            ImageDraw.Draw(overlay).polygon([(px - x0, py - y0) for px, py in poly], fill=color)
            self.image.alpha_composite(overlay, dest=(x0, y0))

    def to_image(self) -> Image.Image:
        return self.image.convert("RGB")

    def to_array(self) -> np.ndarray:
        return np.array(self.to_image())
