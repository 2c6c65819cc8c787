"""Structure stamping — castles and houses.

Both structures are hollow rectangles: a perimeter wall enclosing a
floor, with one doorway in the wall.  They are only stamped where the
footprint plus a one-cell margin is entirely ground-like
(any of ``GROUND_KINDS``).
Separated from ``generator.py`` so new structure kinds can be added
without touching the generation pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from voyage.world.tiles import GROUND_KINDS, TileKind

if TYPE_CHECKING:
    from numpy.random import Generator

    from voyage.world.grid import Grid, Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Structure:
    """A stamped structure.

    Attributes:
        name: ``castle`` or ``house``.
        x: Left column of the footprint.
        y: Top row of the footprint.
        width: Footprint width.
        height: Footprint height.
        door: Doorway position, or None for a doorless house.
    """

    name: str
    x: int
    y: int
    width: int
    height: int
    door: Position | None

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


def stamp_hollow(
    grid: Grid,
    x0: int,
    y0: int,
    width: int,
    height: int,
    wall: TileKind,
    floor: TileKind,
) -> None:
    """Draw a perimeter of ``wall`` around a ``floor`` interior."""
    for y in range(y0, y0 + height):
        for x in range(x0, x0 + width):
            is_wall = x in (x0, x0 + width - 1) or y in (y0, y0 + height - 1)
            grid.tiles[y][x].kind = wall if is_wall else floor


def place_castle(
    grid: Grid,
    allowed: frozenset[TileKind] = GROUND_KINDS,
    size: int = 7,
) -> Structure | None:
    """Stamp a square castle centred on the grid.

    The gate sits at the midpoint of the bottom wall.  There is a single
    attempt: if the footprint is not clear the castle is skipped.

    Args:
        grid: Grid to stamp into.
        allowed: Kinds the footprint and margin may consist of.
        size: Side length of the castle.

    Returns:
        The placed castle, or None if the site was not clear.
    """
    x0 = grid.width // 2 - size // 2
    y0 = grid.height // 2 - size // 2
    if not grid.is_area_clear(x0 - 1, y0 - 1, size + 2, size + 2, allowed):
        logger.debug("Castle site at (%d, %d) is not clear", x0, y0)
        return None

    stamp_hollow(grid, x0, y0, size, size, TileKind.WALL_CASTLE, TileKind.GROUND_STONE)
    gate = (x0 + size // 2, y0 + size - 1)
    grid.tiles[gate[1]][gate[0]].kind = TileKind.DOORWAY_GATE
    logger.info("A grand castle was placed at the map centre (%d, %d)", x0, y0)
    return Structure("castle", x0, y0, size, size, gate)


def place_house(
    grid: Grid,
    rng: Generator,
    allowed: frozenset[TileKind] = GROUND_KINDS,
    *,
    size_range: tuple[int, int] = (4, 6),
    attempts: int = 50,
    door_chance: float = 0.5,
) -> tuple[Structure | None, list[Structure]]:
    """Try to stamp one house at a random clear site.

    The door candidate is the top-wall cell right of the top-left
    corner.  Its roll happens once per stamping; when it fails the
    house stays on the map without a door and the search continues for
    a site where the roll succeeds.

    Args:
        grid: Grid to stamp into.
        rng: Random generator.
        allowed: Kinds the footprint and margin may consist of.
        size_range: Inclusive (min, max) side length.
        attempts: Number of random sites to try.
        door_chance: Probability the door is placed on a stamping.

    Returns:
        ``(house, doorless)``: the house that received a door (or None)
        and every house stamped without one.
    """
    lo, hi = size_range
    width = int(rng.integers(lo, hi + 1))
    height = int(rng.integers(lo, hi + 1))
    doorless: list[Structure] = []

    max_x = grid.width - width - 2
    max_y = grid.height - height - 2
    if max_x < 2 or max_y < 2:
        logger.debug("Grid too small for a %dx%d house", width, height)
        return None, doorless

    for _ in range(attempts):
        x0 = int(rng.integers(2, max_x + 1))
        y0 = int(rng.integers(2, max_y + 1))
        if not grid.is_area_clear(x0 - 1, y0 - 1, width + 2, height + 2, allowed):
            continue

        stamp_hollow(
            grid, x0, y0, width, height, TileKind.WALL_HOUSE, TileKind.GROUND_WOODEN_FLOOR,
        )
        if rng.random() < door_chance:
            door = (x0 + 1, y0)
            grid.tiles[y0][x0 + 1].kind = TileKind.DOORWAY_HOUSE
            logger.debug(
                "A house was placed at (%d, %d) with a door at %s", x0, y0, door,
            )
            return Structure("house", x0, y0, width, height, door), doorless

        house = Structure("house", x0, y0, width, height, None)
        logger.warning("House at (%d, %d) was stamped without a door", x0, y0)
        doorless.append(house)

    return None, doorless
