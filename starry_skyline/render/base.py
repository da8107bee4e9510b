"""Drawing surface interface."""

from abc import ABC, abstractmethod
from contextlib import contextmanager

from starry_skyline.scene.points import Color


class Surface(ABC):
    """Abstract drawing surface.

    Coordinates put the origin at the bottom-left corner with y growing
    upward. Shapes are given by their bounding box ``(x, y, width, height)``.
    Drawing outside the surface is clipped silently by the implementation.
    """

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float):
        """Fill a rectangle with the current fill color."""
        pass

    @abstractmethod
    def fill_ellipse(self, x: float, y: float, width: float, height: float):
        """Fill the ellipse inscribed in the given box with the current fill color."""
        pass

    @abstractmethod
    def stroke_ellipse(self, x: float, y: float, width: float, height: float):
        """Stroke the ellipse outline with the current stroke color and line width."""
        pass

    @abstractmethod
    def clip_to_rect(self, x: float, y: float, width: float, height: float):
        """Intersect the clip region with a rectangle."""
        pass

    @abstractmethod
    def clip_to_ellipse(self, x: float, y: float, width: float, height: float):
        """Intersect the clip region with an ellipse."""
        pass

    @abstractmethod
    def save_state(self):
        """Push colors, line width and clip region."""
        pass

    @abstractmethod
    def restore_state(self):
        """Pop the state pushed by the matching save_state()."""
        pass

    @abstractmethod
    def set_fill_color(self, color: Color):
        pass

    @abstractmethod
    def set_stroke_color(self, color: Color):
        pass

    @abstractmethod
    def set_line_width(self, width: float):
        pass

    @contextmanager
    def saved_state(self):
        """Scope drawing-state changes to a with block."""
        self.save_state()
        try:
            yield self
        finally:
            self.restore_state()
