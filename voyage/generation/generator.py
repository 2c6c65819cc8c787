"""MapGenerator — builds a playable grid for a named area.

A single pipeline handles every area; the ``AreaStyle`` decides whether
the random walk scatters over open ground or carves through solid fill.
The pipeline order is fixed:

1. Fill every cell with the style's baseline kind.
2. Random-walk from the centre, recording the reachable path
   (carving it to ground when the style carves).
3. Maybe stamp a castle at the centre.
4. Stamp a fixed number of houses.
5. Scatter barriers over baseline ground outside structures.
6. Seed encounters on path cells outside structures that are still ground.
7. Force the outer ring to the border kind.
8. Place an exit doorway in the lower band of the map.
9. Pick the player's start from the still-walkable path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from voyage.generation.areas import AreaStyle, style_for
from voyage.generation.structures import Structure, place_castle, place_house
from voyage.world.grid import CARDINAL_OFFSETS, Grid, Position
from voyage.world.tile import ENCOUNTER_TYPES, Encounter

if TYPE_CHECKING:
    from numpy.random import Generator

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Raised when an area cannot be made playable."""


@dataclass
class AreaLayout:
    """A generated area and everything recorded while building it.

    Attributes:
        name: Area name.
        grid: The tile grid.
        player: Player start position.
        reachable: Path cells that are walkable in the finished grid.
        structures: Castles and houses stamped (doorless ones included).
        exit: Exit doorway position, or None if none could be placed.
    """

    name: str
    grid: Grid
    player: Position
    reachable: frozenset[Position] = field(repr=False)
    structures: list[Structure] = field(default_factory=list)
    exit: Position | None = None


@dataclass
class MapGenerator:
    """Runs the generation pipeline with a shared random generator.

    Attributes:
        rng: Random generator.
        styles: Area styles by name (defaults to the built-in table).
        encounters: Encounter templates to seed from.
    """

    rng: Generator
    styles: dict[str, AreaStyle] | None = None
    encounters: tuple[Encounter, ...] = ENCOUNTER_TYPES

    def generate(
        self,
        name: str,
        width: int,
        height: int,
        style: AreaStyle | None = None,
    ) -> AreaLayout:
        """Generate the area ``name``.

        Args:
            name: Area name; also selects the style when none is given.
            width: Grid width.
            height: Grid height.
            style: Explicit style overriding the named one.

        Returns:
            The finished area layout.

        Raises:
            GenerationError: If no walkable path cell survives.
        """
        if width < 3 or height < 3:
            msg = f"area {name!r} must be at least 3x3, got {width}x{height}"
            raise GenerationError(msg)
        style = style or style_for(name, self.styles)
        logger.debug(
            "Generating %r (%dx%d, %s)",
            name,
            width,
            height,
            "carve" if style.carves else "scatter",
        )

        grid = Grid(width=width, height=height, fill=style.fill)
        path = self._walk(grid, style)

        structures: list[Structure] = []
        if self.rng.random() < style.castle_chance:
            castle = place_castle(grid, size=style.castle_size)
            if castle is not None:
                structures.append(castle)
        structures.extend(self._place_houses(grid, style))

        footprints = _footprints(structures)
        self._scatter_barriers(grid, style, footprints)
        self._seed_encounters(grid, style, path - footprints)
        self._finalize_border(grid, style)
        exit_pos = self._place_exit(grid, style, name)

        reachable = frozenset(p for p in path if grid.tiles[p[1]][p[0]].walkable)
        player = self._place_player(grid, reachable, name)
        return AreaLayout(
            name=name,
            grid=grid,
            player=player,
            reachable=reachable,
            structures=structures,
            exit=exit_pos,
        )

    def _walk(self, grid: Grid, style: AreaStyle) -> set[Position]:
        """Random-walk from the centre, staying off the outer ring."""
        x, y = grid.width // 2, grid.height // 2
        path: set[Position] = {(x, y)}
        steps = int(grid.width * grid.height * style.path_coverage)
        for _ in range(steps):
            dx, dy = CARDINAL_OFFSETS[int(self.rng.integers(0, 4))]
            nx, ny = x + dx, y + dy
            if 0 < nx < grid.width - 1 and 0 < ny < grid.height - 1:
                x, y = nx, ny
                path.add((x, y))

        if style.carves:
            for px, py in path:
                grid.tiles[py][px].kind = style.ground
        return path

    def _place_houses(self, grid: Grid, style: AreaStyle) -> list[Structure]:
        placed: list[Structure] = []
        for _ in range(style.house_count):
            house, doorless = place_house(
                grid,
                self.rng,
                size_range=style.house_size,
                attempts=style.house_attempts,
                door_chance=style.door_chance,
            )
            placed.extend(doorless)
            if house is None:
                logger.warning(
                    "A house failed all %d placement attempts", style.house_attempts,
                )
            else:
                placed.append(house)
        return placed

    def _scatter_barriers(
        self, grid: Grid, style: AreaStyle, occupied: set[Position],
    ) -> None:
        """Turn a fraction of baseline ground outside structures into barriers.

        Path cells are fair game; the reachable set is filtered afterwards.
        Carving areas have no baseline ground, so nothing is scattered.
        """
        if style.carves or style.barrier_chance <= 0:
            return
        for y in range(1, grid.height - 1):
            for x in range(1, grid.width - 1):
                tile = grid.tiles[y][x]
                if tile.kind is not style.ground or (x, y) in occupied:
                    continue
                if self.rng.random() < style.barrier_chance:
                    tile.kind = style.barrier

    def _seed_encounters(
        self, grid: Grid, style: AreaStyle, path: set[Position],
    ) -> None:
        if not self.encounters:
            return
        # Sorted so a seeded generator gives the same map every time
        for x, y in sorted(path):
            tile = grid.tiles[y][x]
            if tile.kind is not style.ground:
                continue
            if self.rng.random() < style.encounter_chance:
                index = int(self.rng.integers(0, len(self.encounters)))
                tile.seed_encounter(self.encounters[index])

    def _finalize_border(self, grid: Grid, style: AreaStyle) -> None:
        for tile in grid.iter_tiles():
            if grid.is_border(tile.x, tile.y):
                tile.kind = style.border

    def _place_exit(self, grid: Grid, style: AreaStyle, name: str) -> Position | None:
        """Convert a walkable cell in the lower band into the exit."""
        hi = grid.height - 2
        lo = min(int(grid.height * style.exit_band), hi)
        for _ in range(style.exit_attempts):
            x = int(self.rng.integers(1, grid.width - 1))
            y = int(self.rng.integers(lo, hi + 1))
            tile = grid.tiles[y][x]
            if tile.walkable and not tile.kind.is_doorway:
                tile.kind = style.exit_kind
                logger.debug("Exit for %r placed at (%d, %d)", name, x, y)
                return (x, y)
        logger.warning(
            "No exit placed in %r after %d attempts", name, style.exit_attempts,
        )
        return None

    def _place_player(
        self, grid: Grid, reachable: frozenset[Position], name: str,
    ) -> Position:
        if not reachable:
            msg = f"area {name!r} has no walkable path cell to start on"
            raise GenerationError(msg)
        cells = sorted(reachable)
        x, y = cells[int(self.rng.integers(0, len(cells)))]
        grid.tiles[y][x].visited = True
        return (x, y)


def _footprints(structures: list[Structure]) -> set[Position]:
    cells: set[Position] = set()
    for s in structures:
        cells.update(
            (x, y) for y in range(s.y, s.y + s.height) for x in range(s.x, s.x + s.width)
        )
    return cells
