"""Stylized moon: mean-phase model and a slow arc across the sky.

The phase comes from a mean synodic month counted from a known new moon,
which is close enough for a decorative night scene but is not an ephemeris.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Optional, Tuple

import numpy as np

from starry_skyline.errors import ConfigurationError
from starry_skyline.sky.snapshots import MoonSnapshot

logger = logging.getLogger(__name__)

SYNODIC_MONTH_DAYS = 29.530588853
NEW_MOON_EPOCH = datetime(2000, 1, 6, 18, 14, tzinfo=timezone.utc)


def compute_phase(when: datetime) -> Tuple[float, bool]:
    """Illuminated fraction and waxing flag for a moment in time.

    Args:
        when: Moment to evaluate; naive datetimes are taken as UTC

    Returns:
        Tuple of (illuminated_fraction in [0, 1], waxing)
    """
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    days = (when - NEW_MOON_EPOCH).total_seconds() / 86400.0
    age = days % SYNODIC_MONTH_DAYS
    phase_angle = 2.0 * math.pi * age / SYNODIC_MONTH_DAYS
    fraction = 0.5 * (1.0 - math.cos(phase_angle))
    waxing = age < SYNODIC_MONTH_DAYS / 2.0
    return min(max(fraction, 0.0), 1.0), waxing


def moon_radius_for_width(canvas_width: int, diameter_percent: float) -> int:
    """Moon radius in pixels from a diameter given as a fraction of canvas width."""
    clamped = max(0.001, min(0.25, diameter_percent))
    return max(1, int(round(canvas_width * clamped / 2.0)))


class MoonPath:
    """Arc the moon follows once per traversal period.

    The moon moves linearly across the usable width while its height follows
    half a sine wave above a base line chosen just over the skyline.
    """

    def __init__(
        self,
        canvas_width: int,
        canvas_height: int,
        building_max_height: int,
        radius: int,
        rng: np.random.Generator,
        traversal_seconds: float = 3600.0,
        left_to_right: bool = True
    ):
        if radius <= 0:
            raise ConfigurationError(f"moon radius must be positive, got {radius}")
        if traversal_seconds <= 0:
            raise ConfigurationError(f"traversal_seconds must be positive, got {traversal_seconds}")

        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.radius = radius
        self.traversal_seconds = traversal_seconds
        self.left_to_right = left_to_right

        min_base = max(building_max_height + radius + 10, radius + 10)
        base_upper = min(min_base + int(0.10 * canvas_height), canvas_height - radius - 10)
        if base_upper >= min_base:
            self.base_y = float(rng.integers(min_base, base_upper + 1))
        else:
            self.base_y = float(min_base)

        headroom = float(canvas_height - radius) - self.base_y - 10.0
        self.amplitude = min(max(20.0, 0.15 * canvas_height), max(0.0, headroom))

    def center_at(self, seconds: float) -> Tuple[float, float]:
        """Disc center after ``seconds`` into the day."""
        progress = (seconds % self.traversal_seconds) / self.traversal_seconds
        usable_width = float(self.canvas_width - 2 * self.radius)
        if not self.left_to_right:
            progress_x = 1.0 - progress
        else:
            progress_x = progress
        x = progress_x * usable_width + self.radius
        y = self.base_y + self.amplitude * math.sin(math.pi * progress)
        return x, y


class Moon:
    """Produces a MoonSnapshot for any wall-clock time."""

    def __init__(self, path: MoonPath, phase_override: Optional[float] = None):
        """Initialize moon.

        Args:
            path: Traversal arc
            phase_override: Fixed illuminated fraction, clamped to [0, 1]
        """
        self.path = path
        if phase_override is not None:
            phase_override = min(max(phase_override, 0.0), 1.0)
        self.phase_override = phase_override

    def snapshot(self, now: Optional[datetime] = None) -> MoonSnapshot:
        now = now if now is not None else datetime.now(timezone.utc)
        fraction, waxing = compute_phase(now)
        if self.phase_override is not None:
            fraction = self.phase_override

        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
        x, y = self.path.center_at((now - midnight).total_seconds())
        return MoonSnapshot(
            center_x=x,
            center_y=y,
            radius=self.path.radius,
            illuminated_fraction=fraction,
            waxing=waxing,
        )
