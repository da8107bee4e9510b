"""MP4 export of an accumulating skyline."""

import importlib.util
import logging
from typing import List, Optional, Tuple

import imageio.v2 as imageio
import numpy as np

from starry_skyline.io.frame_io import as_uint8_frame
from starry_skyline.render.raster import RasterSurface

logger = logging.getLogger(__name__)

BACKENDS = ("opencv", "imageio")


def opencv_available() -> bool:
    return importlib.util.find_spec("cv2") is not None


class VideoExporter:
    """Collects frames from a raster surface and encodes them as a video.

    OpenCV is used when it is installed; otherwise imageio's ffmpeg writer
    (from the ``imageio-ffmpeg`` package) encodes with libx264.
    """

    def __init__(
        self,
        output_path: str,
        fps: int = 20,
        codec: str = 'mp4v',
        backend: Optional[str] = None
    ):
        """Initialize video exporter.

        Args:
            output_path: Output file path (.mp4)
            fps: Frames per second
            codec: OpenCV fourcc codec
            backend: 'opencv', 'imageio' or None to pick automatically
        """
        if backend is not None and backend not in BACKENDS:
            raise ValueError(f"Unknown video backend: {backend}. Use one of {BACKENDS}")
        self.output_path = output_path
        self.fps = fps
        self.codec = codec
        self.backend = backend
        self.frames: List[np.ndarray] = []
        self.frame_shape: Optional[Tuple[int, ...]] = None

    def capture(self, surface: RasterSurface):
        """Queue the surface's current image."""
        self.add_frame(surface.capture_frame())

    def add_frame(self, frame: np.ndarray):
        """Queue a frame; every frame must have the size of the first one."""
        frame = as_uint8_frame(frame)
        if self.frame_shape is None:
            self.frame_shape = frame.shape
        elif frame.shape != self.frame_shape:
            raise ValueError(f"frame size {frame.shape} doesn't match {self.frame_shape}")
        self.frames.append(frame)

    def resolve_backend(self) -> str:
        if self.backend is not None:
            return self.backend
        return "opencv" if opencv_available() else "imageio"

    def export(self) -> str:
        """Encode the queued frames.

        Returns:
            Name of the backend that wrote the file
        """
        if not self.frames:
            raise ValueError("No frames to export")

        backend = self.resolve_backend()
        if backend == "opencv":
            self._export_cv2()
        else:
            self._export_imageio()
        logger.info("wrote %d frames to %s with %s", len(self.frames), self.output_path, backend)
        return backend

    def _export_cv2(self):
        import cv2

        height, width = self.frame_shape[:2]
        fourcc = cv2.VideoWriter_fourcc(*self.codec)
        out = cv2.VideoWriter(self.output_path, fourcc, self.fps, (width, height))
        if not out.isOpened():
            raise RuntimeError(f"OpenCV could not open {self.output_path} for writing")
        try:
            for frame in self.frames:
                # OpenCV expects BGR
                out.write(np.ascontiguousarray(frame[:, :, ::-1]))
        finally:
            out.release()

    def _export_imageio(self):
        # libx264 with yuv420p needs even dimensions; ffmpeg rescales to them.
        writer = imageio.get_writer(
            self.output_path,
            fps=self.fps,
            codec='libx264',
            quality=8,
            macro_block_size=2,
        )
        try:
            for frame in self.frames:
                writer.append_data(frame)
        finally:
            writer.close()
