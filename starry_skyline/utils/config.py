"""Configuration management."""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from starry_skyline.errors import ConfigurationError
from starry_skyline.scene.points import Color

logger = logging.getLogger(__name__)

DEFAULT_MOON_BRIGHT_BRIGHTNESS = 0.85
DEFAULT_MOON_DARK_BRIGHTNESS = 0.08
MOON_BRIGHT_RANGE = (0.2, 1.0)
MOON_DARK_RANGE = (0.0, 0.9)


@dataclass
class SkylineConfig:
    """Scene, sky and export settings."""
    # Canvas
    width: int = 800
    height: int = 600

    # Buildings
    building_height_percent_max: float = 0.35
    building_width_min: int = 5
    building_width_max: int = 18
    building_count: int = 100
    building_color: List[float] = field(default_factory=lambda: [0.972, 0.945, 0.012])

    # Sampling
    stars_per_update: int = 12
    building_lights_per_update: int = 15
    max_sample_attempts: int = 1000
    uniform_star_heights: bool = False

    # Moon
    moon_enabled: bool = True
    moon_diameter_percent: float = 80.0 / 3000.0
    moon_traversal_seconds: float = 3600.0
    moon_phase_override: Optional[float] = None
    moon_bright_brightness: float = DEFAULT_MOON_BRIGHT_BRIGHTNESS
    moon_dark_brightness: float = DEFAULT_MOON_DARK_BRIGHTNESS

    # Flasher
    flasher_enabled: bool = True
    flasher_radius: int = 4
    flasher_period: float = 2.0

    # Wipe the canvas and build a new skyline after this long; None keeps it forever
    clear_after_seconds: Optional[float] = 120.0

    # Export
    frames: int = 200
    fps: int = 20
    output_path: str = "skyline"

    # Reproducibility
    seed: Optional[int] = None

    def building_color_value(self) -> Color:
        if len(self.building_color) != 3:
            raise ConfigurationError(f"building_color needs 3 channels, got {self.building_color}")
        return Color(*(float(c) for c in self.building_color))

    def moon_brightness(self) -> Tuple[float, float]:
        """Gray levels of the lit and shadowed parts of the moon.

        Each level is clamped to its range. If the lit level ends up below
        the shadow level both revert to their defaults.

        Returns:
            Tuple of (bright, dark)
        """
        bright = _clamp("moon_bright_brightness", self.moon_bright_brightness, *MOON_BRIGHT_RANGE)
        dark = _clamp("moon_dark_brightness", self.moon_dark_brightness, *MOON_DARK_RANGE)
        if bright < dark:
            logger.error(
                "invalid moon brightness (bright %.3f < dark %.3f), reverting to defaults (%.2f, %.2f)",
                bright, dark, DEFAULT_MOON_BRIGHT_BRIGHTNESS, DEFAULT_MOON_DARK_BRIGHTNESS,
            )
            return DEFAULT_MOON_BRIGHT_BRIGHTNESS, DEFAULT_MOON_DARK_BRIGHTNESS
        return bright, dark

    def validate(self):
        """Check settings that don't need a generated scene.

        Raises:
            ConfigurationError: On the first invalid setting
        """
        for name in ("width", "height", "building_count", "stars_per_update",
                     "building_lights_per_update", "max_sample_attempts",
                     "building_width_min", "fps"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if self.frames < 0:
            raise ConfigurationError(f"frames can't be negative, got {self.frames}")
        if self.building_width_max <= self.building_width_min:
            raise ConfigurationError("building_width_max must exceed building_width_min")
        if not 0.0 < self.building_height_percent_max <= 1.0:
            raise ConfigurationError("building_height_percent_max must be in (0, 1]")
        if self.moon_traversal_seconds <= 0:
            raise ConfigurationError("moon_traversal_seconds must be positive")
        if self.clear_after_seconds is not None and self.clear_after_seconds <= 0:
            raise ConfigurationError("clear_after_seconds must be positive or null")
        self.building_color_value()


def _clamp(name: str, value: float, low: float, high: float) -> float:
    clamped = min(max(float(value), low), high)
    if clamped != value:
        logger.warning("%s=%s out of range, clamped to %s", name, value, clamped)
    return clamped


def config_from_dict(data: dict) -> SkylineConfig:
    known = {f.name for f in fields(SkylineConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown config keys: {unknown}")
    return SkylineConfig(**data)


def load_config(config_path: str) -> SkylineConfig:
    """Load configuration from file.

    Args:
        config_path: Path to config file (.json or .yaml)

    Returns:
        SkylineConfig object
    """
    config_path = Path(config_path)

    with open(config_path, 'r') as f:
        if config_path.suffix in ('.yaml', '.yml'):
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)

    return config_from_dict(data)


def save_config(config: SkylineConfig, output_path: str):
    """Save configuration to file.

    Args:
        config: SkylineConfig object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = asdict(config)

    with open(output_path, 'w') as f:
        if output_path.suffix in ('.yaml', '.yml'):
            yaml.safe_dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
