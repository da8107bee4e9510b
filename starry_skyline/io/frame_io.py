"""Saving and loading rendered canvas frames."""

import numpy as np
import matplotlib.pyplot as plt
from typing import Tuple, Dict, Any, Optional
from pathlib import Path


def as_uint8_frame(frame: np.ndarray) -> np.ndarray:
    """Copy of an (H, W, 3) image as uint8; floats are read as [0, 1]."""
    frame = np.asarray(frame)
    if frame.ndim != 3 or frame.shape[2] != 3:
        raise ValueError(f"expected an (H, W, 3) image, got shape {frame.shape}")
    if frame.dtype != np.uint8:
        return (np.clip(frame, 0.0, 1.0) * 255).astype(np.uint8)
    return frame.copy()


def save_frame(frame: np.ndarray, output_path: str, metadata: Optional[Dict[str, Any]] = None):
    """Save a captured frame to file.

    Args:
        frame: Image array (H, W, 3) uint8, top row first
        output_path: Output file path (.png or .npz)
        metadata: Optional metadata dictionary (.npz only)
    """
    output_path = Path(output_path)

    if output_path.suffix == '.png':
        plt.imsave(output_path, frame)

    elif output_path.suffix == '.npz':
        save_dict = {'frame': frame}
        if metadata:
            for key, value in metadata.items():
                if isinstance(value, (int, float, str)):
                    save_dict[f'metadata_{key}'] = value
        np.savez_compressed(output_path, **save_dict)

    else:
        raise ValueError(f"Unsupported file format: {output_path.suffix}. Use .png or .npz")


def load_frame(input_path: str) -> Tuple[np.ndarray, Dict[str, Any]]:
    """Load a frame saved by save_frame().

    Args:
        input_path: Input file path

    Returns:
        Tuple of (frame as uint8 (H, W, 3), metadata)
    """
    input_path = Path(input_path)

    if input_path.suffix == '.png':
        image = plt.imread(input_path)
        if image.dtype != np.uint8:
            image = np.round(image * 255).astype(np.uint8)
        return image[:, :, :3], {}

    elif input_path.suffix == '.npz':
        with np.load(input_path) as data:
            frame = data['frame']
            metadata = {}
            for key in data.keys():
                if key.startswith('metadata_'):
                    metadata[key[9:]] = data[key].item()
        return frame, metadata

    else:
        raise ValueError(f"Unsupported file format: {input_path.suffix}. Use .png or .npz")
