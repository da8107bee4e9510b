"""Moving sky objects and the snapshots they hand to the renderer."""

from starry_skyline.sky.snapshots import MoonSnapshot, FlasherSnapshot
from starry_skyline.sky.moon import Moon, MoonPath, compute_phase, moon_radius_for_width
from starry_skyline.sky.flasher import Flasher

__all__ = [
    "MoonSnapshot",
    "FlasherSnapshot",
    "Moon",
    "MoonPath",
    "compute_phase",
    "moon_radius_for_width",
    "Flasher",
]
