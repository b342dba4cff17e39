from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np


def clamp01(x):
    return np.clip(x, 0.0, 1.0)


def rotate_coordinates(cx: float, cy: float, x: float, y: float, angle: float) -> tuple[float, float]:
    """Rotate (x, y) about (cx, cy) by `angle` degrees, clockwise in screen space."""
    radians = (math.pi / 180) * angle
    cos = math.cos(radians)
    sin = math.sin(radians)
    nx = cos * (x - cx) + sin * (y - cy) + cx
    ny = cos * (y - cy) - sin * (x - cx) + cy
    return nx, ny


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    id: int


@dataclass(frozen=True)
class Shape:
    """A triangle over three arena point ids; hue and generation are fixed at creation."""

    a: int
    b: int
    c: int
    hue: int
    generation: int

    @property
    def vertex_ids(self) -> tuple[int, int, int]:
        return self.a, self.b, self.c


class PointArena:
    """Insertion-ordered point store keyed by id.

    Coordinates live in one (n, 2) float64 array so the per-frame morph can
    work on all points at once. Ids start at 1 and map to row ``id - 1``.
    """

    def __init__(self, capacity: int = 64):
        self._xy = np.zeros((max(1, int(capacity)), 2), dtype=np.float64)
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __contains__(self, point_id: int) -> bool:
        return 1 <= point_id <= self._count

    def __getitem__(self, point_id: int) -> Point:
        if point_id not in self:
            raise KeyError(point_id)
        x, y = self._xy[point_id - 1]
        return Point(float(x), float(y), point_id)

    def __iter__(self) -> Iterator[Point]:
        for point_id in self.ids():
            yield self[point_id]

    def create(self, x: float, y: float) -> int:
        if self._count == len(self._xy):
            grown = np.zeros((len(self._xy) * 2, 2), dtype=np.float64)
            grown[: self._count] = self._xy[: self._count]
            self._xy = grown
        self._xy[self._count] = (x, y)
        self._count += 1
        return self._count

    def ids(self) -> range:
        return range(1, self._count + 1)

    @property
    def xy(self) -> np.ndarray:
        """Live view of the coordinates, row ``i`` holding point ``i + 1``."""
        return self._xy[: self._count]

    def coords(self, point_id: int) -> tuple[float, float]:
        x, y = self._xy[point_id - 1]
        return float(x), float(y)

    def clear(self) -> None:
        self._xy[:] = 0.0
        self._count = 0
