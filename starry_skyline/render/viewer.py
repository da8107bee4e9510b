"""Live matplotlib window showing a raster surface."""

import time
from typing import Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from starry_skyline.render.raster import RasterSurface


class SkylineViewer:
    """Shows the frames of a RasterSurface in a matplotlib window."""

    def __init__(
        self,
        figsize: Optional[Tuple[float, float]] = None,
        dpi: int = 100,
        target_fps: float = 20.0,
        title: str = "Starry Skyline"
    ):
        """Initialize viewer.

        Args:
            figsize: Figure size in inches; derived from the surface if None
            dpi: Dots per inch
            target_fps: Frames faster than this are skipped
            title: Window title
        """
        self.figsize = figsize
        self.dpi = dpi
        self.title = title
        self.frame_time = 1.0 / target_fps if target_fps > 0 else 0.0
        self.last_show_time = 0.0

        self.fig: Optional[Figure] = None
        self.ax = None
        self.image = None
        self.initialized = False

    def _initialize(self, frame: np.ndarray):
        if self.initialized:
            return
        height, width = frame.shape[:2]
        figsize = self.figsize or (width / self.dpi, height / self.dpi)
        self.fig = plt.figure(figsize=figsize, dpi=self.dpi, facecolor="black")
        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self.ax.set_axis_off()
        self.image = self.ax.imshow(frame, interpolation="nearest")
        if self.fig.canvas.manager is not None:
            self.fig.canvas.manager.set_window_title(self.title)

        plt.show(block=False)
        plt.pause(0.1)
        self.initialized = True

    def is_open(self) -> bool:
        """Whether the window is still open."""
        if self.fig is None:
            return False
        try:
            if not plt.fignum_exists(self.fig.number):
                self._reset()
                return False
            return True
        except (AttributeError, ValueError, RuntimeError):
            self._reset()
            return False

    def _reset(self):
        self.initialized = False
        self.fig = None
        self.ax = None
        self.image = None

    def show(self, surface: RasterSurface) -> bool:
        """Push the surface's current image to the window.

        Returns:
            False once the window has been closed by the user
        """
        if self.initialized and not self.is_open():
            return False

        now = time.time()
        if self.initialized and (now - self.last_show_time) < self.frame_time:
            return True
        self.last_show_time = now

        frame = surface.capture_frame()
        if not self.initialized:
            self._initialize(frame)
        else:
            self.image.set_data(frame)
            self.fig.canvas.draw_idle()
        plt.pause(0.001)
        return True

    def close(self):
        if self.fig is not None:
            plt.close(self.fig)
        self._reset()
