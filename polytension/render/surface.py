from __future__ import annotations

from typing import Protocol


class Surface(Protocol):
    """The slice of a 2D canvas context the animation paints through."""

    width: int
    height: int

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None: ...
    def set_fill_style(self, style: str) -> None: ...
    def begin_path(self) -> None: ...
    def move_to(self, x: float, y: float) -> None: ...
    def line_to(self, x: float, y: float) -> None: ...
    def close_path(self) -> None: ...
    def fill(self) -> None: ...


class PathBuilder:
    """Collects the current path as closed polygons in pixel space."""

    def __init__(self):
        self.subpaths: list[list[tuple[float, float]]] = []

    def begin(self) -> None:
        self.subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self.subpaths.append([(float(x), float(y))])

    def line_to(self, x: float, y: float) -> None:
        if not self.subpaths:
            self.move_to(x, y)
            return
        self.subpaths[-1].append((float(x), float(y)))

    def close(self) -> None:
        if self.subpaths and len(self.subpaths[-1]) > 1:
            # closing starts a new subpath at the first vertex
            first = self.subpaths[-1][0]
            self.subpaths.append([first])

    def polygons(self) -> list[list[tuple[float, float]]]:
        return [p for p in self.subpaths if len(p) >= 3]
