from __future__ import annotations

import numpy as np

from .geometry import PointArena, clamp01
from .rng import SeededRandom


def morph_factors(rng: SeededRandom, count: int, jitter: float) -> np.ndarray:
    # One draw per coordinate, x before y, points in id order.
    draws = np.fromiter((rng.random() for _ in range(count * 2)), dtype=np.float64, count=count * 2)
    return (draws * jitter + (1 - jitter * 0.5)).reshape(count, 2)


def morph_points(arena: PointArena, rng: SeededRandom, jitter: float) -> None:
    n = len(arena)
    if n == 0:
        return
    xy = arena.xy
    xy[:] = clamp01(xy * morph_factors(rng, n, jitter))
