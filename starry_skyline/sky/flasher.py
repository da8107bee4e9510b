"""Blinking beacon on top of the tallest building."""

from typing import Optional

from starry_skyline.scene.points import BLACK, Color
from starry_skyline.scene.skyline import Skyline
from starry_skyline.sky.snapshots import FlasherSnapshot

FLASHER_RED = Color(1.0, 0.0, 0.0)


class Flasher:
    """Aircraft warning light.

    Lit for the first half of each period and drawn black for the second
    half, so the same circle erases itself.
    """

    def __init__(
        self,
        skyline: Skyline,
        radius: int = 4,
        period: float = 2.0,
        color: Color = FLASHER_RED
    ):
        self.radius = radius
        self.period = period
        self.color = color
        self.position = None

        building = skyline.tallest_building()
        if building is not None:
            self.position = (
                building.start_x + building.width // 2,
                building.start_y + building.height + radius,
            )

    def snapshot(self, elapsed_seconds: float) -> Optional[FlasherSnapshot]:
        """Beacon state ``elapsed_seconds`` after the scene started."""
        if self.position is None or self.period <= 0:
            return None
        phase = elapsed_seconds % self.period
        color = self.color if phase < self.period / 2 else BLACK
        cx, cy = self.position
        return FlasherSnapshot(center_x=cx, center_y=cy, radius=self.radius, color=color)
