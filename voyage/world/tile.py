"""Tile — a single cell in the area grid, plus encounter templates.

A tile's kind decides walkability.  Encounters are attached once at
generation time; the current encounter is cleared when the player
interacts with it and never comes back.
"""

from __future__ import annotations

from dataclasses import dataclass

from voyage.world.tiles import TileKind


@dataclass(frozen=True)
class Encounter:
    """A template for something the player can meet on a tile.

    Attributes:
        type: Broad category (``enemy``, ``treasure``, ``npc``).
        name: Display name.
        description: Flavour text.
        challenge: Difficulty rating (0 for harmless encounters).
    """

    type: str
    name: str
    description: str
    challenge: int = 0

    @property
    def marker(self) -> str:
        """Single-letter map marker derived from the encounter type."""
        return self.type[:1].upper()


ENCOUNTER_TYPES: tuple[Encounter, ...] = (
    Encounter("enemy", "Draugr", "A restless undead warrior.", challenge=1),
    Encounter("treasure", "Gilded Chest", "A chest containing unknown riches."),
    Encounter("npc", "Friendly Trader", "A traveling merchant willing to trade."),
)


@dataclass
class Tile:
    """A single cell in the area grid.

    Attributes:
        x: Column position.
        y: Row position.
        kind: Current tile kind.
        initial_encounter: Encounter placed at generation time.
        current_encounter: Encounter still present (None once cleared).
        visited: Whether the player has stood here.
        action_taken: Reserved flag; nothing sets it yet.
    """

    x: int
    y: int
    kind: TileKind = TileKind.GROUND_FIELD
    initial_encounter: Encounter | None = None
    current_encounter: Encounter | None = None
    visited: bool = False
    action_taken: bool = False

    @property
    def walkable(self) -> bool:
        return self.kind.walkable

    def seed_encounter(self, encounter: Encounter) -> None:
        """Attach ``encounter`` as both the initial and current encounter."""
        self.initial_encounter = encounter
        self.current_encounter = encounter

    def clear_encounter(self) -> Encounter | None:
        """Remove the current encounter and return it (None if absent)."""
        encounter = self.current_encounter
        self.current_encounter = None
        return encounter
