"""Utility functions for reproducibility, configuration and logging."""

from starry_skyline.utils.reproducibility import make_rng, get_seed_info
from starry_skyline.utils.config import load_config, save_config, SkylineConfig
from starry_skyline.utils.log import setup_logging

__all__ = [
    "make_rng",
    "get_seed_info",
    "load_config",
    "save_config",
    "SkylineConfig",
    "setup_logging",
]
