"""I/O utilities for frame export."""

from starry_skyline.io.video_exporter import VideoExporter
from starry_skyline.io.gif_exporter import GIFExporter
from starry_skyline.io.frame_io import save_frame, load_frame

__all__ = ["VideoExporter", "GIFExporter", "save_frame", "load_frame"]
