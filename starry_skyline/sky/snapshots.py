"""Per-frame snapshots of the moving sky objects handed to the renderer."""

from dataclasses import dataclass
from typing import Tuple

from starry_skyline.errors import ConfigurationError
from starry_skyline.scene.points import Color


@dataclass(frozen=True)
class MoonSnapshot:
    """Moon position and phase for one frame.

    ``illuminated_fraction`` is stored as given; the renderer clamps it to
    [0, 1] before deriving any geometry.
    """
    center_x: float
    center_y: float
    radius: float
    illuminated_fraction: float
    waxing: bool

    def __post_init__(self):
        if self.radius <= 0:
            raise ConfigurationError(f"moon radius must be positive, got {self.radius}")

    def bounding_rect(self) -> Tuple[float, float, float, float]:
        """Disc bounding box as (x, y, width, height)."""
        r = self.radius
        return (self.center_x - r, self.center_y - r, 2 * r, 2 * r)


@dataclass(frozen=True)
class FlasherSnapshot:
    """Beacon circle for one frame."""
    center_x: int
    center_y: int
    radius: int
    color: Color

    def bounding_rect(self) -> Tuple[float, float, float, float]:
        r = self.radius
        return (self.center_x - r, self.center_y - r, 2 * r, 2 * r)
