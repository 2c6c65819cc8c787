"""Tile catalog — the fixed set of tile kinds a map can be built from.

Every grid cell points at one ``TileKind``.  The kind decides whether
the cell can be walked on and whether standing on it offers an action
(travelling to a new area).  Kinds are compared by enum member, never
by the identity of some shared dict.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TileAction(Enum):
    """Action tag carried by a tile kind."""

    TRAVEL = "travel"
    # Reserved; no kind carries it yet.
    BLOCK = "block"


@dataclass(frozen=True)
class TileSpec:
    """Immutable properties of a tile kind.

    Attributes:
        id: Stable string identifier.
        symbol: Short display glyph.
        walkable: Whether the player may stand on the tile.
        color: RGB colour used by the pygame front end.
        action: Optional action tag.
    """

    id: str
    symbol: str
    walkable: bool
    color: tuple[int, int, int]
    action: TileAction | None = None


class TileKind(Enum):
    """All known tile kinds."""

    # Walls
    WALL_CASTLE = TileSpec("wall_castle", "🏰", False, (110, 100, 90))
    WALL_HOUSE = TileSpec("wall_house", "🏠", False, (120, 80, 50))
    WALL_CAVE = TileSpec("wall_cave", "🪨", False, (60, 55, 50))
    WALL_ROCK = TileSpec("wall_rock", "⛰️", False, (90, 90, 95))

    # Hazards
    LAVA = TileSpec("lava", "🔥", False, (200, 60, 20))
    WATER_LAKE = TileSpec("water_lake", "💧", False, (40, 90, 170))

    # Ground
    GROUND_FIELD = TileSpec("ground_field", ".", True, (70, 120, 60))
    GROUND_STONE = TileSpec("ground_stone", "=", True, (140, 140, 130))
    GROUND_WOODEN_FLOOR = TileSpec("ground_wooden_floor", "⬜", True, (150, 110, 70))
    GROUND_ROAD = TileSpec("ground_road", "🛣️", True, (160, 140, 100))
    GROUND_RIVER = TileSpec("ground_river", "~", True, (80, 140, 190))

    # Doorways
    DOORWAY_HOUSE = TileSpec("door_house", "🚪", True, (190, 140, 60), TileAction.TRAVEL)
    DOORWAY_CAVE = TileSpec("door_cave", "🕳️", True, (30, 25, 25), TileAction.TRAVEL)
    DOORWAY_GATE = TileSpec("door_gate", "🚧", True, (210, 180, 60), TileAction.TRAVEL)
    STAIRS_UP = TileSpec("stairs_up", "▲", True, (200, 200, 220), TileAction.TRAVEL)
    STAIRS_DOWN = TileSpec("stairs_down", "▼", True, (120, 120, 150), TileAction.TRAVEL)
    BRIDGE = TileSpec("bridge", "🌉", True, (130, 100, 70), TileAction.TRAVEL)

    # Filler
    BLANK_WALL = TileSpec("blank_wall", "█", False, (51, 51, 51))

    @property
    def id(self) -> str:
        return self.value.id

    @property
    def symbol(self) -> str:
        return self.value.symbol

    @property
    def walkable(self) -> bool:
        return self.value.walkable

    @property
    def action(self) -> TileAction | None:
        return self.value.action

    @property
    def color(self) -> tuple[int, int, int]:
        return self.value.color

    @property
    def is_doorway(self) -> bool:
        """Return True if stepping here offers travel to another area."""
        return self.value.action is TileAction.TRAVEL

    @classmethod
    def from_id(cls, kind_id: str) -> TileKind:
        """Look up a kind by its string identifier.

        Raises:
            KeyError: If no kind carries ``kind_id``.
        """
        for kind in cls:
            if kind.value.id == kind_id:
                return kind
        msg = f"unknown tile kind {kind_id!r}"
        raise KeyError(msg)


# Kinds an area may use as building ground for houses and castles.
GROUND_KINDS: frozenset[TileKind] = frozenset(
    {
        TileKind.GROUND_FIELD,
        TileKind.GROUND_ROAD,
        TileKind.GROUND_STONE,
        TileKind.GROUND_WOODEN_FLOOR,
    },
)
