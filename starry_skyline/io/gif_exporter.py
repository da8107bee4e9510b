"""Animated GIF export of an accumulating skyline."""

import logging
from typing import List, Optional, Tuple

import imageio.v2 as imageio
import numpy as np

from starry_skyline.io.frame_io import as_uint8_frame
from starry_skyline.render.raster import RasterSurface

logger = logging.getLogger(__name__)


class GIFExporter:
    """Collects frames from a raster surface and writes them as a looping GIF.

    The skyline fills in slowly, so the last frame can be held longer than the
    others to show the finished scene before the loop restarts.
    """

    def __init__(
        self,
        output_path: str,
        fps: int = 20,
        duration: Optional[float] = None,
        hold_last: float = 0.0
    ):
        """Initialize GIF exporter.

        Args:
            output_path: Output file path (.gif)
            fps: Frames per second (used if duration is None)
            duration: Frame duration in seconds (overrides fps)
            hold_last: Extra seconds to show the final frame
        """
        if hold_last < 0:
            raise ValueError(f"hold_last can't be negative, got {hold_last}")
        self.output_path = output_path
        self.fps = fps
        self.duration = duration if duration is not None else (1.0 / fps)
        self.hold_last = hold_last
        self.frames: List[np.ndarray] = []
        self.frame_shape: Optional[Tuple[int, ...]] = None

    def capture(self, surface: RasterSurface):
        """Queue the surface's current image."""
        self.add_frame(surface.capture_frame())

    def add_frame(self, frame: np.ndarray):
        """Queue a frame.

        Args:
            frame: Image array (H, W, 3), uint8 or floats in [0, 1]; every
                frame must have the size of the first one
        """
        frame = as_uint8_frame(frame)
        if self.frame_shape is None:
            self.frame_shape = frame.shape
        elif frame.shape != self.frame_shape:
            raise ValueError(f"frame size {frame.shape} doesn't match {self.frame_shape}")
        self.frames.append(frame)

    def frame_durations(self) -> List[float]:
        """Per-frame display time in milliseconds."""
        durations = [self.duration * 1000.0] * len(self.frames)
        if durations:
            durations[-1] += self.hold_last * 1000.0
        return durations

    def export(self) -> str:
        """Write the queued frames and return the output path."""
        if not self.frames:
            raise ValueError("No frames to export")

        imageio.mimsave(
            self.output_path,
            self.frames,
            duration=self.frame_durations(),
            loop=0  # Infinite loop
        )
        logger.info("wrote %d frames to %s", len(self.frames), self.output_path)
        return self.output_path
