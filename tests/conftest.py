"""Shared fixtures for the Völva's Voyage test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from voyage.generation.generator import AreaLayout
from voyage.simulation.config import GameConfig
from voyage.simulation.engine import GameEngine
from voyage.world.grid import Grid
from voyage.world.tiles import TileKind


class FixedRoll:
    """Stand-in RNG whose ``random()`` always returns the same value."""

    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


def build_arena(width: int = 7, height: int = 7, *, border: bool = True) -> AreaLayout:
    """An open field (optionally walled in) with the player at the centre."""
    grid = Grid(width=width, height=height)
    if border:
        for tile in grid.iter_tiles():
            if grid.is_border(tile.x, tile.y):
                tile.kind = TileKind.WALL_ROCK
    reachable = frozenset((t.x, t.y) for t in grid.iter_tiles() if t.walkable)
    player = (width // 2, height // 2)
    grid.tiles[player[1]][player[0]].visited = True
    return AreaLayout(name="Arena", grid=grid, player=player, reachable=reachable)


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_grid() -> Grid:
    """A small 8x8 open grid for fast tests."""
    return Grid(width=8, height=8)


@pytest.fixture
def default_config() -> GameConfig:
    """Default game config (no YAML file needed)."""
    return GameConfig()


@pytest.fixture
def engine(rng: Generator) -> GameEngine:
    """An engine with no area generated yet."""
    return GameEngine(config=GameConfig(), rng=rng)


@pytest.fixture
def arena_engine(engine: GameEngine) -> GameEngine:
    """An engine standing in the middle of a walled 7x7 field at 06:00."""
    layout = build_arena()
    engine.area = layout
    engine.player_pos = layout.player
    return engine


@pytest.fixture
def fixed_roll() -> type[FixedRoll]:
    """Factory for an RNG stand-in with a forced ``random()`` result."""
    return FixedRoll
