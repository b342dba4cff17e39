from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import imageio.v3 as iio
import numpy as np
from PIL import Image

from ..core.animation import ManualScheduler, Polytension
from ..core.seed import Location, with_seed
from .raster import RasterSurface

logger = logging.getLogger(__name__)

EXPORT_URL = "polytension://export/"


def render_frames(
    seed: str,
    frames: int,
    width: int,
    height: int,
    background: str = "black",
) -> Iterator[np.ndarray]:
    """Yield `frames` consecutive RGB frames of the animation for `seed`."""
    if frames <= 0:
        raise ValueError(f"frames must be positive, got {frames}")
    surface = RasterSurface(width, height, background)
    scheduler = ManualScheduler()
    session = Polytension(surface, scheduler, Location(with_seed(EXPORT_URL, seed)), background)
    session.run()
    yield surface.to_array()
    for _ in range(frames - 1):
        scheduler.tick()
        yield surface.to_array()


def export_animation(
    path,
    seed: str,
    frames: int = 120,
    fps: float = 30.0,
    width: int = 960,
    height: int = 540,
    background: str = "black",
    loop: bool = True,
) -> Path:
    """Write the animation to ``.gif``, or its last frame to ``.png``."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in (".gif", ".png"):
        raise ValueError(f"unsupported export format: {path.suffix or path.name!r}")
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")

    logger.info("Exporting seed=%s frames=%d size=%dx%d to %s", seed, frames, width, height, path)
    if suffix == ".gif":
        out = list(render_frames(seed, frames, width, height, background))
        dur = max(10, int(1000 / fps))
        # no NETSCAPE block plays once; loop=N would repeat N more times
        options = {"loop": 0} if loop else {}
        iio.imwrite(path, out, extension=".gif", duration=dur, **options)
    else:
        last = None
        for last in render_frames(seed, frames, width, height, background):
            pass
        Image.fromarray(last).save(path, format="PNG")
    return path
