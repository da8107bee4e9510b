"""Random generator helpers for deterministic scenes."""

from typing import Any, Dict, Optional

import numpy as np


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the generator shared by a skyline and its renderer.

    The generator is not thread-safe; keep it on the render thread.
    """
    return np.random.default_rng(seed)


def get_seed_info(rng: np.random.Generator, seed: Optional[int] = None) -> Dict[str, Any]:
    """Describe a generator's state.

    Args:
        rng: Generator to inspect
        seed: Optional seed to include in info

    Returns:
        Dictionary with seed information
    """
    info: Dict[str, Any] = {}
    if seed is not None:
        info['seed'] = seed
    state = rng.bit_generator.state
    info['bit_generator'] = state.get('bit_generator')
    info['state'] = state.get('state', {}).get('state')
    return info
