class RecordingSurface:
    """Surface that records every drawing call instead of painting."""

    def __init__(self, width=200, height=100):
        self.width = width
        self.height = height
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name,) + args)

    def fill_rect(self, x, y, w, h):
        self._record("fill_rect", x, y, w, h)

    def set_fill_style(self, style):
        self._record("set_fill_style", style)

    def begin_path(self):
        self._record("begin_path")

    def move_to(self, x, y):
        self._record("move_to", x, y)

    def line_to(self, x, y):
        self._record("line_to", x, y)

    def close_path(self):
        self._record("close_path")

    def fill(self):
        self._record("fill")

    def named(self, name):
        return [c for c in self.calls if c[0] == name]

    def clear(self):
        self.calls = []


def shape_generations(shapes):
    """Number of shapes per generation."""
    counts = {}
    for shape in shapes:
        counts[shape.generation] = counts.get(shape.generation, 0) + 1
    return counts
