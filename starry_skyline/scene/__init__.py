"""Scene model: primitives, buildings and the skyline layout."""

from starry_skyline.scene.points import Color, Point, BLACK
from starry_skyline.scene.buildings import BuildingStyle, Building, BUILDING_STYLES
from starry_skyline.scene.skyline import Skyline, weighted_height, DEFAULT_BUILDING_COLOR

__all__ = [
    "Color",
    "Point",
    "BLACK",
    "BuildingStyle",
    "Building",
    "BUILDING_STYLES",
    "Skyline",
    "weighted_height",
    "DEFAULT_BUILDING_COLOR",
]
