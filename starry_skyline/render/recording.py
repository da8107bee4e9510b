"""Surface that records drawing commands instead of rasterizing them."""

from typing import Any, List, Tuple

from starry_skyline.render.base import Surface


class RecordingSurface(Surface):
    """Keeps an ordered log of every call as ``(operation, args)``.

    Useful for checking draw order and counts, and for replaying a frame onto
    another surface with ``replay()``.
    """

    def __init__(self):
        self.commands: List[Tuple[str, Tuple[Any, ...]]] = []
        self.depth = 0

    def _record(self, op: str, *args):
        self.commands.append((op, args))

    def fill_rect(self, x, y, width, height):
        self._record("fill_rect", x, y, width, height)

    def fill_ellipse(self, x, y, width, height):
        self._record("fill_ellipse", x, y, width, height)

    def stroke_ellipse(self, x, y, width, height):
        self._record("stroke_ellipse", x, y, width, height)

    def clip_to_rect(self, x, y, width, height):
        self._record("clip_to_rect", x, y, width, height)

    def clip_to_ellipse(self, x, y, width, height):
        self._record("clip_to_ellipse", x, y, width, height)

    def save_state(self):
        self.depth += 1
        self._record("save_state")

    def restore_state(self):
        if self.depth == 0:
            raise RuntimeError("restore_state() called without a matching save_state()")
        self.depth -= 1
        self._record("restore_state")

    def set_fill_color(self, color):
        self._record("set_fill_color", color)

    def set_stroke_color(self, color):
        self._record("set_stroke_color", color)

    def set_line_width(self, width):
        self._record("set_line_width", width)

    def count(self, op: str) -> int:
        """Number of recorded calls to ``op``."""
        return sum(1 for name, _ in self.commands if name == op)

    def operations(self) -> List[str]:
        return [name for name, _ in self.commands]

    def replay(self, surface: Surface):
        """Issue every recorded command on another surface."""
        for op, args in self.commands:
            getattr(surface, op)(*args)

    def reset(self):
        self.commands.clear()
        self.depth = 0
