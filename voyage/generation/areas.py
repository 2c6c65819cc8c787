"""Area styles and doorway destinations.

An ``AreaStyle`` parameterises the single map-generation algorithm.
When ``fill`` and ``ground`` are the same kind the area is generated
by *scatter*: the map starts as open ground and barriers are sprinkled
over it.  When they differ the area is generated by *carve*: the map
starts solid and the random walk carves ground out of it.

``DESTINATIONS`` maps each doorway kind to the area it leads to.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any

from voyage.world.tiles import GROUND_KINDS, TileKind

if TYPE_CHECKING:
    from numpy.random import Generator

logger = logging.getLogger(__name__)

Dimension = int | tuple[int, int]


class UnknownDoorwayError(LookupError):
    """Raised when travel is requested through a kind with no destination."""


@dataclass(frozen=True)
class AreaStyle:
    """Tunable parameters for generating one kind of area.

    Attributes:
        fill: Kind every cell starts as.
        ground: Kind of the walkable path and of legal building sites.
        barrier: Kind scattered as obstacles.
        border: Kind forced onto the outer ring.
        exit_kind: Doorway kind used for the area exit.
        path_coverage: Random-walk length as a fraction of the area.
        castle_chance: Probability of attempting a castle.
        castle_size: Side length of the square castle.
        house_count: Number of houses attempted.
        house_size: Inclusive (min, max) house side length.
        house_attempts: Placement retries per house.
        door_chance: Probability that a house gets its door.
        barrier_chance: Probability of turning a free ground cell into a
            barrier.
        encounter_chance: Probability of seeding an encounter on a path
            cell.
        exit_attempts: Random tries for the exit before giving up.
        exit_band: Fraction of the height below which the exit is placed.
    """

    fill: TileKind = TileKind.GROUND_FIELD
    ground: TileKind = TileKind.GROUND_FIELD
    barrier: TileKind = TileKind.WALL_ROCK
    border: TileKind = TileKind.WALL_ROCK
    exit_kind: TileKind = TileKind.DOORWAY_CAVE
    path_coverage: float = 0.6
    castle_chance: float = 0.25
    castle_size: int = 7
    house_count: int = 4
    house_size: tuple[int, int] = (4, 6)
    house_attempts: int = 50
    door_chance: float = 0.5
    barrier_chance: float = 0.1
    encounter_chance: float = 0.03
    exit_attempts: int = 10
    exit_band: float = 0.75

    def __post_init__(self) -> None:
        if self.ground not in GROUND_KINDS:
            msg = f"{self.ground.id} cannot be used as building ground"
            raise ValueError(msg)
        if self.border.walkable:
            msg = f"border kind {self.border.id} must be impassable"
            raise ValueError(msg)
        if not self.exit_kind.is_doorway:
            msg = f"exit kind {self.exit_kind.id} is not a doorway"
            raise ValueError(msg)
        lo, hi = self.house_size
        if not 3 <= lo <= hi:
            msg = f"house_size must satisfy 3 <= min <= max, got {self.house_size}"
            raise ValueError(msg)

    @property
    def carves(self) -> bool:
        """True when the walk carves ground out of a solid fill."""
        return self.fill is not self.ground

    def with_overrides(self, data: dict[str, Any]) -> AreaStyle:
        """Return a copy with values from a YAML mapping applied.

        Tile kinds are given by their string id; ``house_size`` by a
        two-item list.

        Raises:
            ValueError: If a key is not a style field.
        """
        names = {f.name for f in fields(self)}
        changes: dict[str, Any] = {}
        for key, value in data.items():
            if key not in names:
                msg = f"unknown area style key {key!r}"
                raise ValueError(msg)
            if isinstance(getattr(self, key), TileKind):
                value = TileKind.from_id(value)
            elif key == "house_size":
                value = (int(value[0]), int(value[1]))
            changes[key] = value
        return replace(self, **changes)


AREA_STYLES: dict[str, AreaStyle] = {
    "Landfall": AreaStyle(),
    "Trader's Hut": AreaStyle(
        fill=TileKind.GROUND_WOODEN_FLOOR,
        ground=TileKind.GROUND_WOODEN_FLOOR,
        barrier=TileKind.WALL_HOUSE,
        border=TileKind.WALL_HOUSE,
        castle_chance=0.0,
        house_count=0,
        barrier_chance=0.05,
    ),
    "Dark Cavern": AreaStyle(
        fill=TileKind.WALL_CAVE,
        ground=TileKind.GROUND_STONE,
        barrier=TileKind.WALL_CAVE,
        border=TileKind.WALL_CAVE,
        path_coverage=0.5,
        castle_chance=0.0,
        house_count=0,
        encounter_chance=0.05,
    ),
    "Castle Courtyard": AreaStyle(
        fill=TileKind.GROUND_STONE,
        ground=TileKind.GROUND_STONE,
        border=TileKind.WALL_CASTLE,
        castle_chance=0.0,
        house_count=0,
    ),
}


def style_for(name: str, styles: dict[str, AreaStyle] | None = None) -> AreaStyle:
    """Return the style registered for ``name`` (Landfall's if unknown)."""
    styles = AREA_STYLES if styles is None else styles
    style = styles.get(name)
    if style is None:
        logger.debug("No style for area %r, using the Landfall style", name)
        return styles.get("Landfall", AreaStyle())
    return style


@dataclass(frozen=True)
class Destination:
    """Where a doorway leads.

    Attributes:
        area: Name of the destination area.
        width: Fixed width or inclusive (min, max) range.
        height: Fixed height or inclusive (min, max) range.
        message: Journal line shown when stepping through.
    """

    area: str
    width: Dimension
    height: Dimension
    message: str = ""

    def roll_size(self, rng: Generator) -> tuple[int, int]:
        """Pick a concrete (width, height) for this destination."""
        return _roll(self.width, rng), _roll(self.height, rng)


def _roll(dim: Dimension, rng: Generator) -> int:
    if isinstance(dim, tuple):
        lo, hi = dim
        return int(rng.integers(lo, hi + 1))
    return dim


DESTINATIONS: dict[TileKind, Destination] = {
    TileKind.DOORWAY_HOUSE: Destination(
        "Trader's Hut",
        (8, 12),
        (8, 12),
        "You step through the door_house, entering the Trader's Hut.",
    ),
    TileKind.DOORWAY_CAVE: Destination(
        "Dark Cavern",
        20,
        60,
        "You descend into the cold door_cave.",
    ),
    TileKind.DOORWAY_GATE: Destination(
        "Castle Courtyard",
        10,
        10,
        "You pass through the ancient door_gate.",
    ),
}


def destination_for(kind: TileKind) -> Destination:
    """Return the destination reached through a doorway of ``kind``.

    Raises:
        UnknownDoorwayError: If ``kind`` leads nowhere.
    """
    destination = DESTINATIONS.get(kind)
    if destination is None:
        msg = f"Unhandled doorway type: {kind.id}"
        raise UnknownDoorwayError(msg)
    return destination
