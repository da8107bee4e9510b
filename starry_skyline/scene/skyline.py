"""Skyline scene model: building layout and occlusion-aware point sampling."""

import logging
from typing import Optional, Sequence, Tuple

import numpy as np

from starry_skyline.errors import ConfigurationError
from starry_skyline.scene.buildings import BUILDING_STYLES, Building, BuildingStyle
from starry_skyline.scene.points import Color, Point

logger = logging.getLogger(__name__)

DEFAULT_BUILDING_COLOR = Color(0.972, 0.945, 0.012)


def weighted_height(max_height: int, rng: np.random.Generator) -> int:
    """Random height in [0, max_height], biased toward low values.

    Squaring a uniform draw yields many short buildings and a few tall ones.
    """
    u = rng.random()
    return int(u ** 2 * max_height)


class Skyline:
    """Generated city skyline for one canvas size.

    Holds the buildings sorted by ``start_x`` and answers the spatial queries
    the renderer needs to scatter stars (outside buildings) and window
    lights (inside buildings). A skyline is immutable; a canvas resize means
    building a new one.
    """

    def __init__(
        self,
        width: int,
        height: int,
        building_height_percent_max: float = 0.35,
        building_width_min: int = 5,
        building_width_max: int = 18,
        building_count: int = 100,
        stars_per_update: int = 12,
        building_lights_per_update: int = 15,
        building_color: Color = DEFAULT_BUILDING_COLOR,
        rng: Optional[np.random.Generator] = None,
        styles: Sequence[BuildingStyle] = BUILDING_STYLES,
        max_sample_attempts: int = 1000,
        uniform_star_heights: bool = False
    ):
        """Generate a skyline.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            building_height_percent_max: Tallest building as a fraction of height
            building_width_min: Minimum building width (inclusive)
            building_width_max: Maximum building width (exclusive)
            building_count: Number of buildings to generate
            stars_per_update: Star samples per frame (renderer draws one extra)
            building_lights_per_update: Light samples per frame (renderer draws one extra)
            building_color: Color of lit windows
            rng: Random generator; a fresh unseeded one if omitted
            styles: Window style palette
            max_sample_attempts: Rejection-sampling cap per point
            uniform_star_heights: Sample star heights uniformly instead of
                with the squared bias used for building heights
        """
        _check_positive("width", width)
        _check_positive("height", height)
        _check_positive("building_count", building_count)
        _check_positive("stars_per_update", stars_per_update)
        _check_positive("building_lights_per_update", building_lights_per_update)
        _check_positive("max_sample_attempts", max_sample_attempts)
        _check_positive("building_width_min", building_width_min)
        if building_width_max <= building_width_min:
            raise ConfigurationError(
                f"building_width_max ({building_width_max}) must exceed "
                f"building_width_min ({building_width_min})"
            )
        if not 0.0 < building_height_percent_max <= 1.0:
            raise ConfigurationError(
                f"building_height_percent_max must be in (0, 1], got {building_height_percent_max}"
            )
        styles = tuple(styles)
        if not styles:
            raise ConfigurationError("building style palette is empty")

        self.width = width
        self.height = height
        self.building_height_percent_max = building_height_percent_max
        self.building_width_min = building_width_min
        self.building_width_max = building_width_max
        self.stars_per_update = stars_per_update
        self.building_lights_per_update = building_lights_per_update
        self.building_color = building_color
        self.max_sample_attempts = max_sample_attempts
        self.uniform_star_heights = uniform_star_heights
        self.styles = styles
        self.rng = rng if rng is not None else np.random.default_rng()
        self.building_max_height = int(height * building_height_percent_max)

        logger.info("building skyline for %dx%d canvas with %d buildings", width, height, building_count)
        logger.debug("using %d building styles", len(styles))

        self.buildings: Tuple[Building, ...] = self._generate_buildings(building_count)

    def _generate_buildings(self, count: int) -> Tuple[Building, ...]:
        working = []
        for z_index in range(count):
            style = self.styles[self.rng.integers(0, len(self.styles))]
            building_height = weighted_height(self.building_max_height, self.rng)
            building_width = int(self.rng.integers(self.building_width_min, self.building_width_max))
            start_x = int(self.rng.integers(0, self.width))
            working.append(Building(
                width=building_width,
                height=building_height,
                start_x=start_x,
                start_y=0,
                z_coordinate=z_index,
                style=style,
            ))

        buildings = tuple(sorted(working, key=lambda b: b.start_x))
        for b in buildings:
            logger.debug("created building at %d, width %d, height %d", b.start_x, b.width, b.height)
        return buildings

    def building_at(self, x: int, y: int) -> Optional[Building]:
        """Front-most building containing ``(x, y)``, or None.

        Sweeps the start_x-sorted list and stops at the first building that
        starts right of ``x``; none of the remaining ones can contain it.
        """
        front = None
        for building in self.buildings:
            if building.start_x > x:
                break
            if building.contains(x, y):
                if front is None or building.z_coordinate > front.z_coordinate:
                    front = building
        return front

    def tallest_building(self) -> Optional[Building]:
        if not self.buildings:
            return None
        return max(self.buildings, key=lambda b: b.height)

    def sample_star(self, rng: Optional[np.random.Generator] = None) -> Optional[Point]:
        """Random star position outside every building.

        Returns None if no free position was found within
        ``max_sample_attempts`` draws.
        """
        rng = rng if rng is not None else self.rng
        for _ in range(self.max_sample_attempts):
            if self.uniform_star_heights:
                y = int(rng.integers(0, self.height))
            else:
                y = weighted_height(self.height, rng)
            x = int(rng.integers(0, self.width))
            if self.building_at(x, y) is None:
                color = Color(
                    red=float(rng.uniform(0.0, 0.5)),
                    green=float(rng.uniform(0.0, 0.5)),
                    blue=float(rng.uniform(0.0, 1.0)),
                )
                return Point(x, y, color)

        logger.debug("no star position found after %d attempts", self.max_sample_attempts)
        return None

    def sample_building_light(self, rng: Optional[np.random.Generator] = None) -> Optional[Point]:
        """Random window-light position inside a building.

        A candidate is accepted when it lies inside a building and the
        window lookup, made with x and y exchanged, reports the tile as
        unlit.
        """
        rng = rng if rng is not None else self.rng
        for _ in range(self.max_sample_attempts):
            y = weighted_height(self.building_max_height, rng)
            x = int(rng.integers(0, self.width))
            building = self.building_at(x, y)
            if building is not None and not building.is_light_on(y, x):
                return Point(x, y, self.building_color)

        logger.debug("no building light position found after %d attempts", self.max_sample_attempts)
        return None


def _check_positive(name: str, value) -> None:
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
