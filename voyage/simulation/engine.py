"""GameEngine — the world state and every player-facing operation.

Owns the live area, the player position, the clock, and the character.
Each public method is one synchronous request from the front end and
runs to completion before the next one:

- ``generate_area``: build a fresh area and place the player.
- ``move``: one cardinal step, one hour of time, then tile evaluation.
- ``interact_encounter``: clear the encounter under the player.
- ``travel``: replace the area through a doorway; time carries over.
- ``rest``: skip to morning, healing unless the rest is disturbed.

Rejected input comes back as a result object with a reason.  Only
contract errors (a doorway with no destination, an unplayable area)
are raised.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np
from numpy.random import Generator

from voyage.generation.areas import UnknownDoorwayError, destination_for
from voyage.generation.generator import AreaLayout, MapGenerator
from voyage.player.character import Character
from voyage.simulation.config import GameConfig
from voyage.world.clock import (
    GameClock,
    Phase,
    TimeSnapshot,
    hours_until_morning,
    rest_eligible,
)
from voyage.world.grid import Grid, Position
from voyage.world.tile import Encounter, Tile
from voyage.world.tiles import TileKind

logger = logging.getLogger(__name__)

NO_POSITION: Position = (-1, -1)


class TileOutcome(Enum):
    """What the tile under the player currently offers."""

    NONE = auto()
    INTERACT = auto()
    TRAVEL = auto()


@dataclass(frozen=True)
class MoveResult:
    accepted: bool
    reason: str | None = None
    outcome: TileOutcome = TileOutcome.NONE


@dataclass(frozen=True)
class EncounterResult:
    cleared: bool
    encounter: Encounter | None = None
    reason: str | None = None


@dataclass(frozen=True)
class RestResult:
    """Outcome of a rest request.

    Attributes:
        accepted: False if resting was not allowed at this hour.
        hours_skipped: Hours the clock moved forward.
        healed: Health actually gained.
        disturbed: Whether a night attack interrupted the rest.
        fallen: Whether the character is at zero health afterwards.
        reason: Why the rest was rejected.
    """

    accepted: bool
    hours_skipped: int = 0
    healed: float = 0.0
    disturbed: bool = False
    fallen: bool = False
    reason: str | None = None


@dataclass
class GameEngine:
    """Holds all live game state and applies player requests.

    Attributes:
        config: Loaded game configuration.
        rng: Random generator shared by generation and rest rolls.
        character: The player character.
        clock: Hour/day counter (persists across travel).
        area: The live area, or None before the first generation.
        player_pos: Player position, ``(-1, -1)`` before any area.
        pending_action: What the player's tile offers right now.
        rest_available: Whether resting is currently allowed.
        journal: Most recent narrative lines, newest last.
    """

    config: GameConfig = field(default_factory=GameConfig)
    rng: Generator | None = None
    character: Character | None = None
    clock: GameClock = field(init=False)
    generator: MapGenerator = field(init=False, repr=False)
    area: AreaLayout | None = field(init=False, default=None)
    player_pos: Position = field(init=False, default=NO_POSITION)
    pending_action: TileOutcome = field(init=False, default=TileOutcome.NONE)
    rest_available: bool = field(init=False, default=False)
    journal: deque[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Build the RNG, clock, character, and generator from config."""
        if self.rng is None:
            self.rng = np.random.default_rng(self.config.seed)
        if self.character is None:
            self.character = Character(max_hp=self.config.max_hp, hp=self.config.max_hp)
        self.clock = GameClock(hour=self.config.start_hour)
        self.generator = MapGenerator(self.rng, styles=self.config.areas)
        self.journal = deque(maxlen=self.config.journal_size)

    # -- Read-only views ------------------------------------------------------

    @property
    def grid(self) -> Grid | None:
        return self.area.grid if self.area is not None else None

    @property
    def location(self) -> str | None:
        return self.area.name if self.area is not None else None

    @property
    def player_tile(self) -> Tile | None:
        if self.area is None:
            return None
        x, y = self.player_pos
        return self.area.grid.tiles[y][x]

    def current_phase(self) -> Phase:
        return self.clock.phase

    def current_time(self) -> TimeSnapshot:
        return self.clock.snapshot()

    def adjacent_walkable(self, x: int | None = None, y: int | None = None) -> set[Position]:
        """Walkable cardinal neighbours of ``(x, y)`` (default: the player)."""
        if self.area is None:
            return set()
        if x is None or y is None:
            x, y = self.player_pos
        return self.area.grid.adjacent_walkable(x, y)

    # -- Requests -------------------------------------------------------------

    def generate_area(
        self,
        name: str | None = None,
        width: int | None = None,
        height: int | None = None,
    ) -> AreaLayout:
        """Generate a new area and make it the live one.

        Args:
            name: Area name (defaults to the configured start area).
            width: Grid width (defaults to the configured map width).
            height: Grid height (defaults to the configured map height).

        Returns:
            The new area layout.
        """
        name = name or self.config.start_area
        layout = self.generator.generate(
            name,
            width or self.config.map_width,
            height or self.config.map_height,
        )
        self.area = layout
        self.player_pos = layout.player
        logger.info(
            "Entered %r (%dx%d) at %s",
            name,
            layout.grid.width,
            layout.grid.height,
            layout.player,
        )
        self._note(f"You arrive at {name}.")
        self.evaluate_tile_action(layout.grid.tiles[layout.player[1]][layout.player[0]])
        return layout

    def move(self, x: int, y: int) -> MoveResult:
        """Step the player onto ``(x, y)``.

        The target must be exactly one cardinal step away, inside the
        map, and walkable.  A rejected move changes nothing.
        """
        if self.area is None:
            return self._reject_move("There is no map to move on.")
        px, py = self.player_pos
        if abs(x - px) + abs(y - py) != 1:
            return self._reject_move("You can only move one step (Up, Down, Left, or Right).")
        grid = self.area.grid
        if not grid.in_bounds(x, y):
            return self._reject_move("You cannot leave the edge of the map.")
        tile = grid.tiles[y][x]
        if not tile.walkable:
            return self._reject_move(f"You cannot walk on {tile.kind.id}.")

        self._advance_time(1, tile)
        self.player_pos = (x, y)
        tile.visited = True
        self._note(f"Moved to ({x}, {y}).")
        return MoveResult(accepted=True, outcome=self.evaluate_tile_action(tile))

    def evaluate_tile_action(self, tile: Tile) -> TileOutcome:
        """Decide what ``tile`` offers and re-check rest eligibility.

        An encounter takes priority over a doorway.
        """
        if tile.current_encounter is not None:
            encounter = tile.current_encounter
            outcome = TileOutcome.INTERACT
            self._note(f"You have found a {encounter.type}: {encounter.name}!")
        elif tile.kind.is_doorway:
            outcome = TileOutcome.TRAVEL
            self._note("A path to another realm lies before you.")
        else:
            outcome = TileOutcome.NONE
        self.pending_action = outcome
        self._refresh_rest()
        return outcome

    def interact_encounter(self, x: int, y: int) -> EncounterResult:
        """Clear the encounter on ``(x, y)``, which must be the player's tile."""
        if self.area is None:
            return EncounterResult(cleared=False, reason="There is no map.")
        if (x, y) != self.player_pos:
            return EncounterResult(
                cleared=False,
                reason="You must stand on a tile to interact with it.",
            )
        tile = self.area.grid.tiles[y][x]
        encounter = tile.clear_encounter()
        if encounter is None:
            return EncounterResult(cleared=False, reason="There is nothing here.")
        self._note(f"You interact with the {encounter.name}. The encounter fades.")
        self.evaluate_tile_action(tile)
        return EncounterResult(cleared=True, encounter=encounter)

    def travel(self, kind: TileKind | None = None) -> AreaLayout:
        """Leave the current area through a doorway of ``kind``.

        Args:
            kind: Doorway kind (defaults to the kind under the player).

        Returns:
            The newly generated area.

        Raises:
            UnknownDoorwayError: If ``kind`` has no destination.  The
                current area and position are left untouched.
            ValueError: If no kind is given and there is no area yet.
        """
        if kind is None:
            tile = self.player_tile
            if tile is None:
                msg = "travel needs a doorway kind when no area exists"
                raise ValueError(msg)
            kind = tile.kind
        try:
            destination = destination_for(kind)
        except UnknownDoorwayError as exc:
            logger.error("Travel failed: %s", exc)
            self._note(f"ERROR: {exc}")
            raise

        width, height = destination.roll_size(self.rng)
        if destination.message:
            self._note(destination.message)
        return self.generate_area(destination.area, width, height)

    def rest(self) -> RestResult:
        """Rest until the next 06:00.

        Heals a share of max health per hour skipped.  During Night the
        rest may be disturbed: the attack deals fixed damage and the
        rest heals nothing.  Time is skipped either way.
        """
        snap = self.clock.snapshot()
        if not rest_eligible(snap.hour, snap.phase):
            return RestResult(
                accepted=False,
                reason="You can only rest at 23:00 or during the Night.",
            )

        hours = hours_until_morning(snap.hour)
        heal_total = self.character.max_hp * self.config.rest_heal_fraction * hours
        disturbed = False
        if snap.phase.danger:
            self._note(f"You attempt to rest during the dangerous {snap.phase.id} hours...")
            if self.rng.random() < self.config.night_attack_chance:
                disturbed = True
                self._note("A shadow attacks while you rest! You are jolted awake!")
                self._damage(self.config.night_attack_damage)
        else:
            self._note(f"You settle down for a safe rest during the late {snap.phase.id}.")

        healed = 0.0
        if disturbed:
            self._note("The attack disturbed your rest! You gain no healing from this attempt.")
        else:
            healed = self.character.heal(heal_total)
            self._note(f"You feel well-rested and recover {round(healed)} HP.")

        # Always re-check after a rest, even on an encounter tile
        self._advance_time(hours, None)
        self._note(f"It is now {self.clock.label()} ({self.clock.phase.id}).")
        return RestResult(
            accepted=True,
            hours_skipped=hours,
            healed=healed,
            disturbed=disturbed,
            fallen=self.character.is_fallen,
        )

    # -- Internals ------------------------------------------------------------

    def _advance_time(self, hours: int, tile: Tile | None) -> None:
        old_phase = self.clock.phase
        self.clock.advance(hours)
        phase = self.clock.phase
        if phase is not old_phase:
            warning = " Be wary of the shadows!" if phase.danger else ""
            self._note(f"The time changes. It is now {phase.id}.{warning}")
        if tile is None or tile.current_encounter is None:
            self._refresh_rest()

    def _refresh_rest(self) -> None:
        snap = self.clock.snapshot()
        self.rest_available = rest_eligible(snap.hour, snap.phase)
        if self.rest_available:
            self._note("It is time to rest. You may rest to recover health.")

    def _damage(self, amount: float) -> None:
        self.character.take_damage(amount)
        self._note(f"You took {amount:g} damage.")
        if self.character.is_fallen:
            logger.warning("%s has fallen", self.character.name)
            self._note("The warrior has fallen!")

    def _reject_move(self, reason: str) -> MoveResult:
        self._note(reason)
        return MoveResult(accepted=False, reason=reason)

    def _note(self, message: str) -> None:
        logger.debug("%s", message)
        self.journal.append(message)
