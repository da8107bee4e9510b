"""
Starry Skyline - procedurally rendered night city.

Features:
- Skyline generation with occlusion-aware star and window-light sampling
- Moon with phase shading built from clip and fill primitives
- Blinking beacon on the tallest building
- numpy raster surface, matplotlib live viewer
- Export to PNG/GIF/MP4
- CLI interface
"""

__version__ = "0.1.0"

from starry_skyline.errors import ConfigurationError
from starry_skyline.scene.points import Color, Point
from starry_skyline.scene.buildings import Building, BuildingStyle, BUILDING_STYLES
from starry_skyline.scene.skyline import Skyline
from starry_skyline.sky.snapshots import MoonSnapshot, FlasherSnapshot
from starry_skyline.render.base import Surface
from starry_skyline.render.raster import RasterSurface
from starry_skyline.render.frame_renderer import SkylineRenderer, FrameStats
from starry_skyline.engine import SkylineEngine

__all__ = [
    "ConfigurationError",
    "Color",
    "Point",
    "Building",
    "BuildingStyle",
    "BUILDING_STYLES",
    "Skyline",
    "MoonSnapshot",
    "FlasherSnapshot",
    "Surface",
    "RasterSurface",
    "SkylineRenderer",
    "FrameStats",
    "SkylineEngine",
]
