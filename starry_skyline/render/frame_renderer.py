"""Per-frame skyline renderer.

Each call to ``draw_single_frame`` adds a few stars and window lights to
whatever is already on the surface, redraws the moon in place and blinks the
beacon. Layers are painted back to front with no blending:
stars, moon, building lights, flasher.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from starry_skyline.render.base import Surface
from starry_skyline.scene.points import BLACK, Color, Point
from starry_skyline.scene.skyline import Skyline
from starry_skyline.sky.snapshots import FlasherSnapshot, MoonSnapshot

logger = logging.getLogger(__name__)

MOON_LIGHT = Color.gray(0.85)
MOON_DARK = Color.gray(0.08)
MOON_OUTLINE = Color.gray(0.6)

NEW_MOON_THRESHOLD = 0.005
FULL_MOON_THRESHOLD = 0.995
# Keeps the terminator ellipse non-degenerate at exact quarter phase.
MIN_TERMINATOR_WIDTH = 1e-4


@dataclass
class FrameStats:
    """Counts of what one frame sampled and drew."""
    stars_attempted: int = 0
    stars_drawn: int = 0
    lights_attempted: int = 0
    lights_drawn: int = 0
    moon_drawn: bool = False
    flasher_drawn: bool = False


class SkylineRenderer:
    """Draws skyline frames onto a caller-owned surface.

    The renderer keeps one piece of state between frames: the bounding box
    of the last moon it drew, so the next frame can paint over it before
    drawing the moon at its new position.
    """

    def __init__(
        self,
        skyline: Skyline,
        rng: Optional[np.random.Generator] = None,
        background: Color = BLACK,
        star_size: int = 1,
        moon_light: Color = MOON_LIGHT,
        moon_dark: Color = MOON_DARK
    ):
        """Initialize renderer.

        Args:
            skyline: Scene model to sample stars and lights from
            rng: Generator for sampling; defaults to the skyline's
            background: Color used to erase the previous moon
            star_size: Side length of star and light squares
            moon_light: Color of the lit part of the moon
            moon_dark: Color of the shadowed part of the moon
        """
        self.skyline = skyline
        self.rng = rng if rng is not None else skyline.rng
        self.background = background
        self.star_size = star_size
        self.moon_light = moon_light
        self.moon_dark = moon_dark
        self.last_moon_rect: Optional[Tuple[float, float, float, float]] = None

    def draw_single_frame(
        self,
        surface: Surface,
        moon: Optional[MoonSnapshot] = None,
        flasher: Optional[FlasherSnapshot] = None
    ) -> FrameStats:
        """Draw one animation tick.

        Args:
            surface: Surface to draw on; it is never cleared here
            moon: Moon state for this frame, or None to skip the moon
            flasher: Beacon state for this frame, or None to skip it

        Returns:
            FrameStats for the frame
        """
        stats = FrameStats()
        self.draw_stars(surface, stats)
        stats.moon_drawn = self.draw_moon(surface, moon)
        self.draw_building_lights(surface, stats)
        stats.flasher_drawn = self.draw_flasher(surface, flasher)
        logger.debug("frame drawn: %s", stats)
        return stats

    def draw_stars(self, surface: Surface, stats: Optional[FrameStats] = None):
        stats = stats if stats is not None else FrameStats()
        # Inclusive count: stars_per_update + 1 samples per frame.
        for _ in range(self.skyline.stars_per_update + 1):
            stats.stars_attempted += 1
            star = self.skyline.sample_star(self.rng)
            if star is not None:
                self.draw_point(surface, star)
                stats.stars_drawn += 1
        return stats

    def draw_building_lights(self, surface: Surface, stats: Optional[FrameStats] = None):
        stats = stats if stats is not None else FrameStats()
        for _ in range(self.skyline.building_lights_per_update + 1):
            stats.lights_attempted += 1
            light = self.skyline.sample_building_light(self.rng)
            if light is not None:
                self.draw_point(surface, light)
                stats.lights_drawn += 1
        return stats

    def draw_flasher(self, surface: Surface, flasher: Optional[FlasherSnapshot]) -> bool:
        if flasher is None:
            return False
        with surface.saved_state():
            surface.set_fill_color(flasher.color)
            surface.fill_ellipse(*flasher.bounding_rect())
        return True

    def draw_point(self, surface: Surface, point: Point):
        with surface.saved_state():
            surface.set_fill_color(point.color)
            surface.fill_rect(point.x, point.y, self.star_size, self.star_size)

    # Moon rendering
    #
    # Orthographic view of a sun-lit sphere: the limb is a circle of radius r
    # and the terminator projects to an ellipse centered on the disc with a
    # vertical semi-major axis r and horizontal semi-minor axis r*|cos(theta)|,
    # where cos(theta) = 1 - 2f for illuminated fraction f.
    #   f < 0.5: lit region is the part of the disc outside the ellipse on the
    #            lit side.
    #   f > 0.5: dark region is the part of the disc outside the ellipse on the
    #            dark side.
    # The half-disc is painted under a disc+half-plane clip and the ellipse is
    # then refilled in the base color, which leaves only the region between
    # the terminator and the limb changed.

    def erase_moon(self, surface: Surface):
        """Paint the previous moon box, grown by one unit per side, in the background color."""
        if self.last_moon_rect is None:
            return
        x, y, w, h = self.last_moon_rect
        with surface.saved_state():
            surface.set_fill_color(self.background)
            surface.fill_rect(x - 1, y - 1, w + 2, h + 2)
        self.last_moon_rect = None

    def draw_moon(self, surface: Surface, moon: Optional[MoonSnapshot]) -> bool:
        """Erase the previous moon and draw the current one.

        Returns:
            True if a moon was drawn
        """
        self.erase_moon(surface)
        if moon is None:
            return False

        f = min(max(moon.illuminated_fraction, 0.0), 1.0)
        moon_rect = moon.bounding_rect()

        with surface.saved_state():
            if f <= NEW_MOON_THRESHOLD:
                self._fill_disc(surface, moon_rect, self.moon_dark)
            elif f >= FULL_MOON_THRESHOLD:
                self._fill_disc(surface, moon_rect, self.moon_light)
            else:
                terminator_rect = self._terminator_rect(moon, f)
                if f < 0.5:
                    self._fill_disc(surface, moon_rect, self.moon_dark)
                    self._paint_outside_terminator(
                        surface, moon, terminator_rect,
                        fill=self.moon_light, base=self.moon_dark, right_side=moon.waxing,
                    )
                else:
                    self._fill_disc(surface, moon_rect, self.moon_light)
                    self._paint_outside_terminator(
                        surface, moon, terminator_rect,
                        fill=self.moon_dark, base=self.moon_light, right_side=not moon.waxing,
                    )
            self._stroke_limb(surface, moon_rect)

        self.last_moon_rect = moon_rect
        return True

    @staticmethod
    def _terminator_rect(moon: MoonSnapshot, f: float):
        cos_theta = 1.0 - 2.0 * f
        r = moon.radius
        width = max(MIN_TERMINATOR_WIDTH, 2.0 * r * abs(cos_theta))
        return (moon.center_x - width / 2.0, moon.center_y - r, width, 2.0 * r)

    @staticmethod
    def _fill_disc(surface: Surface, rect, color: Color):
        surface.set_fill_color(color)
        surface.fill_ellipse(*rect)

    @staticmethod
    def _paint_outside_terminator(
        surface: Surface,
        moon: MoonSnapshot,
        terminator_rect,
        fill: Color,
        base: Color,
        right_side: bool
    ):
        r = moon.radius
        half_x = moon.center_x if right_side else moon.center_x - r
        half_rect = (half_x, moon.center_y - r, r, 2.0 * r)

        with surface.saved_state():
            surface.clip_to_ellipse(*moon.bounding_rect())
            surface.clip_to_rect(*half_rect)
            surface.set_fill_color(fill)
            surface.fill_rect(*half_rect)
            surface.set_fill_color(base)
            surface.fill_ellipse(*terminator_rect)

    @staticmethod
    def _stroke_limb(surface: Surface, rect):
        surface.set_stroke_color(MOON_OUTLINE)
        surface.set_line_width(1.0)
        surface.stroke_ellipse(*rect)
