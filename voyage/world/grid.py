"""Grid — the spatial container for one generated area.

The Grid owns tiles arranged in a 2D layout and provides the spatial
queries used by map generation (area checks, border tests) and by the
movement engine (cardinal neighbours, walkability).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from voyage.world.tile import Tile
from voyage.world.tiles import TileKind

Position = tuple[int, int]

CARDINAL_OFFSETS: tuple[Position, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


@dataclass
class Grid:
    """A fixed-size 2D grid of tiles.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        fill: Kind every tile starts as.
        tiles: 2D list of Tile objects indexed as ``tiles[y][x]``.
    """

    width: int
    height: int
    fill: TileKind = TileKind.GROUND_FIELD
    tiles: list[list[Tile]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Fill the grid with tiles of the baseline kind."""
        if self.width < 1 or self.height < 1:
            msg = f"grid must be at least 1x1, got {self.width}x{self.height}"
            raise ValueError(msg)
        self.tiles = [
            [Tile(x=x, y=y, kind=self.fill) for x in range(self.width)]
            for y in range(self.height)
        ]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_border(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies on the outer ring."""
        return x in (0, self.width - 1) or y in (0, self.height - 1)

    def tile_at(self, x: int, y: int) -> Tile:
        """Return the tile at grid coordinates ``(x, y)``.

        Args:
            x: Column index.
            y: Row index.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not self.in_bounds(x, y):
            msg = f"({x}, {y}) out of bounds for {self.width}x{self.height}"
            raise IndexError(msg)
        return self.tiles[y][x]

    def iter_tiles(self) -> Iterator[Tile]:
        """Yield every tile, row by row."""
        for row in self.tiles:
            yield from row

    def neighbours(self, x: int, y: int) -> list[Tile]:
        """Return the in-bounds up/down/left/right neighbours of ``(x, y)``."""
        result: list[Tile] = []
        for dx, dy in CARDINAL_OFFSETS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                result.append(self.tiles[ny][nx])
        return result

    def adjacent_walkable(self, x: int, y: int) -> set[Position]:
        """Return positions of walkable cardinal neighbours of ``(x, y)``."""
        return {(t.x, t.y) for t in self.neighbours(x, y) if t.walkable}

    def is_area_clear(
        self,
        x0: int,
        y0: int,
        width: int,
        height: int,
        allowed: frozenset[TileKind] | set[TileKind],
    ) -> bool:
        """Check that a rectangle is made only of ``allowed`` kinds.

        The rectangle must also stay off the outer ring, so a structure
        stamped inside it can never be overwritten by the border.

        Args:
            x0: Left column of the rectangle.
            y0: Top row of the rectangle.
            width: Rectangle width in cells.
            height: Rectangle height in cells.
            allowed: Kinds that count as clear.
        """
        if x0 < 1 or y0 < 1 or x0 + width > self.width - 1 or y0 + height > self.height - 1:
            return False
        for y in range(y0, y0 + height):
            for x in range(x0, x0 + width):
                if self.tiles[y][x].kind not in allowed:
                    return False
        return True

    def walkable_mask(self) -> NDArray[np.bool_]:
        """Return a ``(height, width)`` boolean array of walkable tiles."""
        return np.array(
            [[tile.walkable for tile in row] for row in self.tiles],
            dtype=np.bool_,
        )
