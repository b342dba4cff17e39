from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .colors import shape_fill
from .geometry import PointArena, Shape, rotate_coordinates
from .morph import morph_points
from .rng import SeededRandom

if TYPE_CHECKING:
    from ..render.surface import Surface

logger = logging.getLogger(__name__)

CENTER = (0.5, 0.5)

# Anchors before rotation.
SINGLE_TRIANGLE = ((0.5, 0.1), (0.9, 0.75), (0.1, 0.75))
SHARED_EDGE = ((0.9, 0.5), (0.1, 0.5))
OPPOSITE_APEXES = ((0.5, 0.1), (0.5, 0.9))


@dataclass
class TessellationParams:
    generations: int = 4
    jitter: float = 0.011
    angle: float = 0.0
    topology: float = 0.0

    @property
    def roots(self) -> int:
        return 1 if self.topology <= 0.5 else 2

    @classmethod
    def draw(cls, rng: SeededRandom) -> "TessellationParams":
        generations = math.floor(rng.random() * 2) + 4
        jitter = rng.random() * 0.02 + 0.001
        angle = rng.random() * 360
        topology = rng.random()
        return cls(generations, jitter, angle, topology)


def js_round(value: float) -> int:
    return math.floor(value + 0.5)


class Tessellation:
    """Seeded triangle tree plus the points it shares between triangles.

    ``generate`` rebuilds everything from a seed; ``morph`` nudges every point
    once and ``draw`` paints the triangles on a canvas-like surface. The
    random stream is shared by generation and morphing, so the order of every
    draw is part of the seed-to-picture mapping.
    """

    def __init__(self):
        self.points = PointArena()
        self.shapes: list[Shape] = []
        self.rng: Optional[SeededRandom] = None
        self.params: Optional[TessellationParams] = None
        self.seed: Optional[str] = None
        self.roots: list[tuple[int, int, int]] = []

    def reset(self) -> None:
        self.points = PointArena()
        self.shapes = []
        self.rng = None
        self.params = None
        self.seed = None
        self.roots = []

    @property
    def generations(self) -> int:
        return self.params.generations

    @property
    def jitter(self) -> float:
        return self.params.jitter

    @property
    def angle(self) -> float:
        return self.params.angle

    def generate(self, seed: str) -> "Tessellation":
        self.reset()
        self.seed = seed
        self.rng = SeededRandom(seed)
        self.params = TessellationParams.draw(self.rng)
        self.roots = self.root_triangles()
        for root in self.roots:
            self.subdivide(*root)
        logger.debug(
            "Seed %r: %d generations, %d roots, %d shapes, %d points",
            seed, self.generations, len(self.roots), len(self.shapes), len(self.points),
        )
        return self

    def create_point(self, x: float, y: float) -> int:
        return self.points.create(x, y)

    def _anchor(self, x: float, y: float) -> int:
        return self.create_point(*rotate_coordinates(CENTER[0], CENTER[1], x, y, self.angle))

    def root_triangles(self) -> list[tuple[int, int, int]]:
        if self.params.topology <= 0.5:
            roots = [tuple(self._anchor(x, y) for x, y in SINGLE_TRIANGLE)]
        else:
            a = self._anchor(*SHARED_EDGE[0])
            b = self._anchor(*SHARED_EDGE[1])
            roots = [(a, b, self._anchor(x, y)) for x, y in OPPOSITE_APEXES]
        return roots

    def subdivide(self, a: int, b: int, c: int, generation: int = 0) -> int:
        rng = self.rng
        hue = js_round(rng.random() * 360)
        self.shapes.append(Shape(a, b, c, hue, generation))

        ax, ay = self.points.coords(a)
        bx, by = self.points.coords(b)
        center = generation % 2 == 0
        if center:
            rx = rng.random() * 0.4 - 0.2 + 1
            ry = rng.random() * 0.4 - 0.2 + 1
            cx, cy = self.points.coords(c)
            new_point = self.create_point((ax + bx + cx) / 3 * rx, (ay + by + cy) / 3 * ry)
        else:
            rx = rng.random() * 0.15 - 0.075 + 1
            ry = rng.random() * 0.15 - 0.075 + 1
            new_point = self.create_point((ax + bx) / 2 * rx, (ay + by) / 2 * ry)

        if generation >= self.generations:
            return new_point

        self.subdivide(a, c, new_point, generation + 1)
        self.subdivide(b, c, new_point, generation + 1)
        if center:
            self.subdivide(a, b, new_point, generation + 1)
        return new_point

    def morph(self) -> None:
        morph_points(self.points, self.rng, self.jitter)

    def fill_style(self, shape: Shape) -> str:
        return shape_fill(shape.hue, shape.generation, self.generations)

    def draw(self, surface: Surface, width: Optional[float] = None, height: Optional[float] = None) -> None:
        width = surface.width if width is None else width
        height = surface.height if height is None else height
        for shape in self.shapes:
            self.draw_shape(surface, shape, width, height)

    def draw_shape(self, surface: Surface, shape: Shape, width: float, height: float) -> None:
        (ax, ay), (bx, by), (cx, cy) = (self.points.coords(i) for i in shape.vertex_ids)
        surface.set_fill_style(self.fill_style(shape))
        surface.begin_path()
        surface.move_to(ax * width, ay * height)
        surface.line_to(bx * width, by * height)
        surface.line_to(cx * width, cy * height)
        surface.close_path()
        surface.fill()

    @staticmethod
    def expected_shape_count(generations: int, roots: int = 1) -> int:
        count = 1
        for generation in range(generations - 1, -1, -1):
            count = 1 + (3 if generation % 2 == 0 else 2) * count
        return count * roots

    def snapshot(self) -> dict:
        """Plain-data view of the current run, for comparisons and export."""
        return {
            "seed": self.seed,
            "params": None if self.params is None else vars(self.params).copy(),
            "points": [(p.id, p.x, p.y) for p in self.points],
            "shapes": [(s.a, s.b, s.c, s.hue, s.generation) for s in self.shapes],
        }


def generate(seed: str) -> Tessellation:
    return Tessellation().generate(seed)
