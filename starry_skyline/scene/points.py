"""Color and point value types."""

from dataclasses import dataclass
from typing import Tuple

from starry_skyline.errors import ConfigurationError


@dataclass(frozen=True)
class Color:
    """RGB color with channels normalized to [0, 1]."""
    red: float
    green: float
    blue: float

    def __post_init__(self):
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} channel must be in [0, 1], got {value}")

    @classmethod
    def gray(cls, level: float) -> "Color":
        """Neutral color with all channels set to ``level``."""
        return cls(level, level, level)

    def as_rgb(self) -> Tuple[float, float, float]:
        return (self.red, self.green, self.blue)


BLACK = Color(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Point:
    """A single sampled pixel position and its color."""
    x: int
    y: int
    color: Color
