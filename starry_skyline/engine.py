"""Engine tying the skyline, the sky objects and the renderer together."""

import logging
from datetime import datetime, timezone
from typing import Optional

import numpy as np

from starry_skyline.render.frame_renderer import FrameStats, SkylineRenderer
from starry_skyline.render.raster import RasterSurface
from starry_skyline.scene.points import BLACK, Color
from starry_skyline.scene.skyline import Skyline
from starry_skyline.sky.flasher import Flasher
from starry_skyline.sky.moon import Moon, MoonPath, moon_radius_for_width
from starry_skyline.utils.config import SkylineConfig
from starry_skyline.utils.reproducibility import make_rng

logger = logging.getLogger(__name__)


class SkylineEngine:
    """Owns one scene and the raster surface it accumulates on.

    Call ``step()`` once per animation tick. The engine is single-threaded;
    the generator it owns must not be shared with other threads.
    """

    def __init__(
        self,
        config: SkylineConfig,
        rng: Optional[np.random.Generator] = None,
        background: Color = BLACK,
        start_time: Optional[datetime] = None
    ):
        """Initialize engine.

        Args:
            config: Scene settings; validated here
            rng: Generator for the scene; seeded from config.seed if None
            background: Canvas background color
            start_time: Clock time the scene starts at; now if None
        """
        config.validate()
        self.config = config
        self.rng = rng if rng is not None else make_rng(config.seed)
        self.background = background
        self.frame_count = 0

        self.skyline: Optional[Skyline] = None
        self.renderer: Optional[SkylineRenderer] = None
        self.moon: Optional[Moon] = None
        self.flasher: Optional[Flasher] = None
        self.surface: Optional[RasterSurface] = None
        self.started_at: Optional[datetime] = None
        self._build(config.width, config.height, start_time)

    def _build(self, width: int, height: int, now: Optional[datetime] = None):
        cfg = self.config
        self.skyline = Skyline(
            width,
            height,
            building_height_percent_max=cfg.building_height_percent_max,
            building_width_min=cfg.building_width_min,
            building_width_max=cfg.building_width_max,
            building_count=cfg.building_count,
            stars_per_update=cfg.stars_per_update,
            building_lights_per_update=cfg.building_lights_per_update,
            building_color=cfg.building_color_value(),
            rng=self.rng,
            max_sample_attempts=cfg.max_sample_attempts,
            uniform_star_heights=cfg.uniform_star_heights,
        )
        bright, dark = cfg.moon_brightness()
        self.renderer = SkylineRenderer(
            self.skyline,
            rng=self.rng,
            background=self.background,
            moon_light=Color.gray(bright),
            moon_dark=Color.gray(dark),
        )
        self.surface = RasterSurface(width, height, background=self.background)

        self.moon = None
        if cfg.moon_enabled:
            radius = moon_radius_for_width(width, cfg.moon_diameter_percent)
            path = MoonPath(
                width,
                height,
                self.skyline.building_max_height,
                radius,
                self.rng,
                traversal_seconds=cfg.moon_traversal_seconds,
            )
            self.moon = Moon(path, phase_override=cfg.moon_phase_override)
            logger.info("moon radius=%d base=%.0f amplitude=%.0f", radius, path.base_y, path.amplitude)

        self.flasher = None
        if cfg.flasher_enabled:
            self.flasher = Flasher(self.skyline, radius=cfg.flasher_radius, period=cfg.flasher_period)

        self.started_at = now if now is not None else datetime.now(timezone.utc)

    @property
    def width(self) -> int:
        return self.surface.width

    @property
    def height(self) -> int:
        return self.surface.height

    def resize(self, width: int, height: int, now: Optional[datetime] = None):
        """Throw away the scene and build a new one for the new canvas size."""
        logger.info("resizing canvas to %dx%d", width, height)
        self._build(width, height, now)

    def should_clear(self, now: datetime) -> bool:
        limit = self.config.clear_after_seconds
        if limit is None:
            return False
        return (now - self.started_at).total_seconds() > limit

    def step(self, now: Optional[datetime] = None) -> FrameStats:
        """Draw one frame for the given wall-clock time.

        Args:
            now: Time of the frame; the current UTC time if None

        Returns:
            FrameStats for the frame
        """
        now = now if now is not None else datetime.now(timezone.utc)
        if self.should_clear(now):
            logger.info("clearing canvas after %.0fs", self.config.clear_after_seconds)
            self._build(self.width, self.height, now)

        elapsed = (now - self.started_at).total_seconds()
        moon = self.moon.snapshot(now) if self.moon is not None else None
        flasher = self.flasher.snapshot(elapsed) if self.flasher is not None else None

        stats = self.renderer.draw_single_frame(self.surface, moon=moon, flasher=flasher)
        self.frame_count += 1
        return stats

    def capture_frame(self) -> np.ndarray:
        return self.surface.capture_frame()
