"""Drawing surfaces and the frame renderer; the matplotlib viewer lives in render.viewer."""

from starry_skyline.render.base import Surface
from starry_skyline.render.raster import RasterSurface
from starry_skyline.render.recording import RecordingSurface
from starry_skyline.render.frame_renderer import SkylineRenderer, FrameStats

__all__ = ["Surface", "RasterSurface", "RecordingSurface", "SkylineRenderer", "FrameStats"]
