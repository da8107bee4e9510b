"""Building geometry and window styles."""

from dataclasses import dataclass, field
from typing import Sequence, Tuple

import numpy as np

from starry_skyline.errors import ConfigurationError


class BuildingStyle:
    """Tileable binary window pattern shared by many buildings.

    Rows are indexed by local y, columns by local x. A cell value of 1 means
    the window at that tile position is lit.
    """

    def __init__(self, tiles: Sequence[Sequence[int]]):
        rows = [list(row) for row in tiles]
        if not rows or not rows[0]:
            raise ConfigurationError("building style needs at least one tile")
        if any(len(row) != len(rows[0]) for row in rows):
            raise ConfigurationError("building style rows must all have the same length")

        grid = np.array(rows, dtype=bool)
        grid.setflags(write=False)
        self._tiles = grid

    @property
    def tiles(self) -> np.ndarray:
        return self._tiles

    @property
    def width(self) -> int:
        return self._tiles.shape[1]

    @property
    def height(self) -> int:
        return self._tiles.shape[0]

    def is_lit(self, local_x: int, local_y: int) -> bool:
        """Look up a tile, wrapping both axes."""
        return bool(self._tiles[local_y % self.height, local_x % self.width])

    def __eq__(self, other):
        if not isinstance(other, BuildingStyle):
            return NotImplemented
        return np.array_equal(self._tiles, other._tiles)

    def __hash__(self):
        return hash(self._tiles.tobytes())

    def __repr__(self):
        return f"BuildingStyle({self.width}x{self.height}, lit={int(self._tiles.sum())})"


def _style(*rows: str) -> BuildingStyle:
    # Rows start at local y = 0; missing rows are padded out to 8x8.
    grid = [[int(c) for c in row] for row in rows]
    grid += [[0] * 8 for _ in range(8 - len(grid))]
    return BuildingStyle(grid)


BUILDING_STYLES: Tuple[BuildingStyle, ...] = (
    _style("00001001", "00001001", "00001001", "00001001"),
    _style("11001100", "11001100"),
    _style("10000000", "10000000", "00000000", "00000000", "10000000", "10000000"),
    _style("01010100"),
    _style("10001000", "10001000", "00000000", "10001000", "10001000"),
    _style("01101100", "01101100"),
)


@dataclass(frozen=True)
class Building:
    """A ground-anchored rectangular building.

    ``z_coordinate`` is the construction order and is only compared to pick
    the front-most of several overlapping buildings.
    """
    width: int
    height: int
    start_x: int
    start_y: int
    z_coordinate: int
    style: BuildingStyle = field(repr=False, compare=False)

    def __post_init__(self):
        if self.width <= 0:
            raise ConfigurationError(f"width must be positive, {self.width} is invalid")
        if self.height < 0:
            raise ConfigurationError(f"height can't be negative, {self.height} is invalid")

    def contains(self, x: int, y: int) -> bool:
        """Whether the pixel ``(x, y)`` lies inside the building box."""
        return (self.start_x <= x < self.start_x + self.width
                and self.start_y <= y < self.start_y + self.height)

    def is_light_on(self, x: int, y: int) -> bool:
        """Whether the window tile covering ``(x, y)`` is lit.

        Pixels outside the building are never lit. Inside, coordinates are
        translated to building-local space and tiled with the style grid.
        """
        if not self.contains(x, y):
            return False
        return self.style.is_lit(x - self.start_x, y - self.start_y)
