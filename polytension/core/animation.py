from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol

from .seed import Location, resolve_seed, with_seed
from .tessellation import Tessellation

if TYPE_CHECKING:
    from ..render.surface import Surface

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameScheduler(Protocol):
    def schedule_next_frame(self, callback: FrameCallback) -> Any: ...
    def cancel_scheduled_frame(self, handle: Any) -> None: ...


class ManualScheduler:
    """Holds at most one pending frame; ``tick`` runs it.

    Drives the loop wherever nothing refreshes on its own: headless export,
    the web server, tests.
    """

    def __init__(self):
        self._pending: Optional[tuple[int, FrameCallback]] = None
        self._next_handle = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule_next_frame(self, callback: FrameCallback) -> int:
        self._next_handle += 1
        self._pending = (self._next_handle, callback)
        return self._next_handle

    def cancel_scheduled_frame(self, handle: int) -> None:
        if self._pending is not None and self._pending[0] == handle:
            self._pending = None

    def tick(self) -> bool:
        if self._pending is None:
            return False
        _, callback = self._pending
        self._pending = None
        callback()
        return True


class Polytension:
    """One animated tessellation bound to a surface, a scheduler and a URL."""

    def __init__(self, surface: Surface, scheduler: FrameScheduler, location: Location, background: str = "black"):
        self.surface = surface
        self.scheduler = scheduler
        self.location = location
        self.background = background
        self.tessellation = Tessellation()
        self.animation_frame = None
        self.frame = 0
        self.on_frame: Optional[Callable[["Polytension"], None]] = None

    @property
    def seed(self) -> Optional[str]:
        return self.tessellation.seed

    def reset(self) -> None:
        if self.animation_frame is not None:
            self.scheduler.cancel_scheduled_frame(self.animation_frame)
            self.animation_frame = None
        self.tessellation.reset()
        self.frame = 0

    def run(self, force_new_seed: bool = False, seed: Optional[str] = None) -> str:
        self.reset()
        if seed is None:
            seed = resolve_seed(self.location, force_new_seed)
        else:
            self.location.replace_state(with_seed(self.location.url, seed))
        self.tessellation.generate(seed)
        params = self.tessellation.params
        logger.info(
            "Run seed=%s generations=%d jitter=%.5f angle=%.2f shapes=%d",
            seed, params.generations, params.jitter, params.angle, len(self.tessellation.shapes),
        )
        self.animation_loop()
        return seed

    def paint(self) -> None:
        surface = self.surface
        surface.set_fill_style(self.background)
        surface.fill_rect(0, 0, surface.width, surface.height)
        self.tessellation.draw(surface)

    def animation_loop(self) -> None:
        self.tessellation.morph()
        self.paint()
        self.frame += 1
        if self.on_frame is not None:
            self.on_frame(self)
        self.animation_frame = self.scheduler.schedule_next_frame(self.animation_loop)
