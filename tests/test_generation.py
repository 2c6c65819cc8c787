"""Tests for voyage.generation — styles, structures, and the generator."""

import logging
from dataclasses import replace

import numpy as np
import pytest
from numpy.random import Generator

from voyage.generation.areas import (
    AREA_STYLES,
    DESTINATIONS,
    AreaStyle,
    UnknownDoorwayError,
    destination_for,
    style_for,
)
from voyage.generation.generator import GenerationError, MapGenerator
from voyage.generation.structures import place_castle, place_house
from voyage.world.grid import Grid
from voyage.world.tiles import TileKind

# Only the random walk, nothing stamped or scattered
BARE = AreaStyle(castle_chance=0.0, house_count=0, barrier_chance=0.0, encounter_chance=0.0)


class TestAreaStyle:
    """Tests for AreaStyle validation and overrides."""

    def test_landfall_scatters(self) -> None:
        assert not AREA_STYLES["Landfall"].carves

    def test_cavern_carves(self) -> None:
        assert AREA_STYLES["Dark Cavern"].carves

    def test_ground_must_be_building_ground(self) -> None:
        with pytest.raises(ValueError):
            AreaStyle(ground=TileKind.GROUND_RIVER)

    def test_border_must_block(self) -> None:
        with pytest.raises(ValueError):
            AreaStyle(border=TileKind.GROUND_FIELD)

    def test_exit_must_be_doorway(self) -> None:
        with pytest.raises(ValueError):
            AreaStyle(exit_kind=TileKind.WALL_ROCK)

    def test_with_overrides(self) -> None:
        style = AreaStyle().with_overrides(
            {"fill": "wall_cave", "house_size": [3, 5], "castle_chance": 1.0},
        )
        assert style.fill is TileKind.WALL_CAVE
        assert style.house_size == (3, 5)
        assert style.castle_chance == 1.0

    def test_with_overrides_unknown_key(self) -> None:
        with pytest.raises(ValueError):
            AreaStyle().with_overrides({"dragons": 3})

    def test_style_for_unknown_area(self) -> None:
        assert style_for("Nowhere") is AREA_STYLES["Landfall"]


class TestDestinations:
    """Tests for doorway destinations."""

    def test_known_doorways(self) -> None:
        assert destination_for(TileKind.DOORWAY_HOUSE).area == "Trader's Hut"
        assert destination_for(TileKind.DOORWAY_CAVE).area == "Dark Cavern"
        assert destination_for(TileKind.DOORWAY_GATE).area == "Castle Courtyard"

    @pytest.mark.parametrize("kind", [TileKind.BRIDGE, TileKind.STAIRS_UP, TileKind.GROUND_FIELD])
    def test_unknown_doorway(self, kind: TileKind) -> None:
        with pytest.raises(UnknownDoorwayError):
            destination_for(kind)

    def test_roll_size(self, rng: Generator) -> None:
        for _ in range(20):
            width, height = DESTINATIONS[TileKind.DOORWAY_HOUSE].roll_size(rng)
            assert 8 <= width <= 12
            assert 8 <= height <= 12
        assert DESTINATIONS[TileKind.DOORWAY_CAVE].roll_size(rng) == (20, 60)


class TestStructures:
    """Tests for castle and house stamping."""

    def test_castle_centred_with_gate(self) -> None:
        grid = Grid(width=20, height=40)
        castle = place_castle(grid)
        assert castle is not None
        assert (castle.x, castle.y) == (7, 17)
        assert castle.door == (10, 23)
        assert grid.tiles[23][10].kind is TileKind.DOORWAY_GATE
        assert grid.tiles[17][7].kind is TileKind.WALL_CASTLE
        assert grid.tiles[20][10].kind is TileKind.GROUND_STONE

    def test_castle_skipped_when_blocked(self) -> None:
        grid = Grid(width=20, height=40)
        grid.tiles[20][10].kind = TileKind.WALL_ROCK
        assert place_castle(grid) is None
        assert grid.tiles[17][7].kind is TileKind.GROUND_FIELD

    def test_castle_does_not_fit(self) -> None:
        assert place_castle(Grid(width=8, height=8)) is None

    def test_house_with_door(self, rng: Generator) -> None:
        grid = Grid(width=20, height=20)
        house, doorless = place_house(grid, rng, door_chance=1.0)
        assert house is not None
        assert doorless == []
        assert house.door == (house.x + 1, house.y)
        assert grid.tiles[house.y][house.x + 1].kind is TileKind.DOORWAY_HOUSE
        assert grid.tiles[house.y][house.x].kind is TileKind.WALL_HOUSE
        inside = grid.tiles[house.y + 1][house.x + 1]
        assert inside.kind is TileKind.GROUND_WOODEN_FLOOR

    def test_doorless_house_stays_stamped(self, rng: Generator) -> None:
        grid = Grid(width=20, height=20)
        house, doorless = place_house(
            grid, rng, attempts=1, door_chance=0.0,
        )
        assert house is None
        assert len(doorless) == 1
        stamped = doorless[0]
        assert stamped.door is None
        assert grid.tiles[stamped.y][stamped.x + 1].kind is TileKind.WALL_HOUSE

    def test_house_does_not_fit(self, rng: Generator) -> None:
        house, doorless = place_house(Grid(width=6, height=6), rng)
        assert house is None
        assert doorless == []

    def test_house_on_any_ground_like_kind(self, rng: Generator) -> None:
        grid = Grid(width=20, height=20, fill=TileKind.GROUND_ROAD)
        house, _ = place_house(grid, rng, door_chance=1.0)
        assert house is not None

    def test_house_not_on_river(self, rng: Generator) -> None:
        grid = Grid(width=20, height=20, fill=TileKind.GROUND_RIVER)
        house, doorless = place_house(grid, rng, door_chance=1.0)
        assert house is None
        assert doorless == []


class TestMapGenerator:
    """Tests for the full generation pipeline."""

    def test_landfall_scenario(self, rng: Generator) -> None:
        layout = MapGenerator(rng).generate("Landfall", 20, 40)
        grid = layout.grid
        assert (grid.width, grid.height) == (20, 40)
        assert len(grid.tiles) == 40
        assert all(len(row) == 20 for row in grid.tiles)
        for tile in grid.iter_tiles():
            if grid.is_border(tile.x, tile.y):
                assert not tile.walkable
        assert layout.player in layout.reachable

    def test_reachable_cells_are_walkable(self, rng: Generator) -> None:
        gen = MapGenerator(rng)
        for _ in range(5):
            layout = gen.generate("Landfall", 20, 40)
            for x, y in layout.reachable:
                assert layout.grid.tiles[y][x].walkable
            px, py = layout.player
            start = layout.grid.tiles[py][px]
            assert start.walkable
            assert start.visited
            assert sum(t.visited for t in layout.grid.iter_tiles()) == 1

    def test_same_seed_same_map(self) -> None:
        a = MapGenerator(np.random.default_rng(99)).generate("Landfall", 20, 40)
        b = MapGenerator(np.random.default_rng(99)).generate("Landfall", 20, 40)
        kinds_a = [t.kind for t in a.grid.iter_tiles()]
        kinds_b = [t.kind for t in b.grid.iter_tiles()]
        assert kinds_a == kinds_b
        assert a.player == b.player

    def test_exit_in_lower_band(self, rng: Generator) -> None:
        gen = MapGenerator(rng)
        for _ in range(5):
            layout = gen.generate("Landfall", 20, 40)
            if layout.exit is None:
                continue
            x, y = layout.exit
            assert 30 <= y <= 38
            assert layout.grid.tiles[y][x].kind is TileKind.DOORWAY_CAVE

    def test_missing_exit_is_logged(
        self, rng: Generator, caplog: pytest.LogCaptureFixture,
    ) -> None:
        style = AreaStyle(exit_attempts=0)
        with caplog.at_level(logging.WARNING):
            layout = MapGenerator(rng).generate("Landfall", 20, 40, style)
        assert layout.exit is None
        assert any("No exit placed" in r.message for r in caplog.records)

    def test_barriers_also_cover_the_path(self, rng: Generator) -> None:
        style = AreaStyle(
            castle_chance=0.0, house_count=0, barrier_chance=1.0, encounter_chance=0.0,
        )
        # Every ground cell turns to rock, walk path included
        with pytest.raises(GenerationError):
            MapGenerator(rng).generate("Landfall", 20, 40, style)

    def test_barriers_stay_outside_structures(self, rng: Generator) -> None:
        style = AreaStyle(
            castle_chance=1.0, house_count=4, door_chance=1.0, barrier_chance=1.0,
        )
        layout = MapGenerator(rng).generate("Landfall", 30, 30, style)
        built = {
            TileKind.WALL_CASTLE,
            TileKind.GROUND_STONE,
            TileKind.DOORWAY_GATE,
            TileKind.WALL_HOUSE,
            TileKind.GROUND_WOODEN_FLOOR,
            TileKind.DOORWAY_HOUSE,
            style.exit_kind,
        }
        assert layout.structures
        for s in layout.structures:
            for y in range(s.y, s.y + s.height):
                for x in range(s.x, s.x + s.width):
                    kind = layout.grid.tiles[y][x].kind
                    assert kind is not style.barrier
                    assert kind in built

    def test_carved_map_is_exactly_the_path(self, rng: Generator) -> None:
        layout = MapGenerator(rng).generate("Dark Cavern", 20, 60)
        walkable = {(t.x, t.y) for t in layout.grid.iter_tiles() if t.walkable}
        assert walkable == set(layout.reachable)
        assert layout.grid.tiles[0][0].kind is TileKind.WALL_CAVE

    def test_path_coverage_bounds_walk(self, rng: Generator) -> None:
        layout = MapGenerator(rng).generate("Landfall", 20, 40, BARE)
        assert 1 <= len(layout.reachable) <= int(20 * 40 * 0.6) + 1

    def test_encounters_only_on_path_ground(self, rng: Generator) -> None:
        style = AreaStyle(castle_chance=0.0, house_count=0, encounter_chance=1.0)
        layout = MapGenerator(rng).generate("Landfall", 20, 40, style)
        for tile in layout.grid.iter_tiles():
            if tile.initial_encounter is not None:
                assert (tile.x, tile.y) in layout.reachable
                assert tile.current_encounter is tile.initial_encounter
        for x, y in layout.reachable:
            assert layout.grid.tiles[y][x].current_encounter is not None

    def test_no_encounters_when_disabled(self, rng: Generator) -> None:
        layout = MapGenerator(rng).generate("Landfall", 20, 40, BARE)
        assert all(t.current_encounter is None for t in layout.grid.iter_tiles())

    def test_castle_always_attempted(self, rng: Generator) -> None:
        style = AreaStyle(castle_chance=1.0, house_count=0)
        layout = MapGenerator(rng).generate("Landfall", 20, 40, style)
        # Nothing is stamped before the castle, so the centre is still
        # open ground and the castle always fits.
        names = [s.name for s in layout.structures]
        assert names == ["castle"]

    def test_structures_recorded(self, rng: Generator) -> None:
        style = AreaStyle(castle_chance=0.0, house_count=4, door_chance=1.0)
        layout = MapGenerator(rng).generate("Landfall", 30, 30, style)
        for house in layout.structures:
            assert house.name == "house"
            assert house.door is not None
            dx, dy = house.door
            assert layout.grid.tiles[dy][dx].kind is TileKind.DOORWAY_HOUSE

    def test_too_small(self, rng: Generator) -> None:
        with pytest.raises(GenerationError):
            MapGenerator(rng).generate("Landfall", 2, 10)

    def test_empty_path_fails_loudly(self, rng: Generator) -> None:
        gen = MapGenerator(rng)
        with pytest.raises(GenerationError):
            gen._place_player(Grid(width=5, height=5), frozenset(), "Void")

    def test_tiny_area(self, rng: Generator) -> None:
        style = replace(AREA_STYLES["Trader's Hut"], barrier_chance=0.0)
        layout = MapGenerator(rng).generate("Trader's Hut", 3, 3, style)
        assert layout.player == (1, 1)
        assert layout.reachable == frozenset({(1, 1)})
