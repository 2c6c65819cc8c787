"""Pygame 2D front end for Völva's Voyage.

Draws the live area, the player, visited tiles, reachable neighbours,
encounter markers and doorways, plus a side panel with location, time,
health and the journal.  Every input is turned into one engine request;
the engine owns all game state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

from voyage.generation.areas import UnknownDoorwayError
from voyage.simulation.engine import TileOutcome

if TYPE_CHECKING:
    from voyage.simulation.engine import GameEngine

# Colour palette
_BG = (20, 18, 24)
_GRID_LINE = (30, 28, 34)
_PLAYER = (240, 240, 255)
_MOVE_HINT = (255, 255, 255, 70)
_VISITED_TINT = (255, 255, 255, 25)
_TEXT = (210, 210, 210)
_ENCOUNTER = (255, 90, 90)
_HP_BAR = (170, 20, 30)

# Arrow keys as (dx, dy)
_STEP_KEYS: dict[int, tuple[int, int]] = {
    pygame.K_UP: (0, -1),
    pygame.K_DOWN: (0, 1),
    pygame.K_LEFT: (-1, 0),
    pygame.K_RIGHT: (1, 0),
}


class PygameRenderer:
    """Renders a GameEngine into a Pygame window and forwards input.

    Attributes:
        engine: The game engine to drive.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    def __init__(self, engine: GameEngine, cell_size: int = 20) -> None:
        """Initialise the renderer.

        Args:
            engine: The game engine to render.  An area must already
                have been generated.
            cell_size: Pixel width/height per grid cell.
        """
        self.engine = engine
        self.cell_size = cell_size
        self._panel_width = 320

        pygame.init()
        self.screen = pygame.display.set_mode(self._window_size())
        pygame.display.set_caption("Völva's Voyage")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True

    def _window_size(self) -> tuple[int, int]:
        grid = self.engine.grid
        w = grid.width * self.cell_size + self._panel_width
        h = max(grid.height * self.cell_size, 480)
        return w, h

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            self.clock.tick(fps)
            self._handle_events()
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._click(*event.pos)
            elif event.type == pygame.KEYDOWN:
                self._key(event.key)

    def _click(self, px: int, py: int) -> None:
        x, y = px // self.cell_size, py // self.cell_size
        if self.engine.grid.in_bounds(x, y):
            self.engine.move(x, y)

    def _key(self, key: int) -> None:
        engine = self.engine
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key in _STEP_KEYS:
            dx, dy = _STEP_KEYS[key]
            x, y = engine.player_pos
            engine.move(x + dx, y + dy)
        elif key == pygame.K_e and engine.pending_action is TileOutcome.INTERACT:
            engine.interact_encounter(*engine.player_pos)
        elif key == pygame.K_t and engine.pending_action is TileOutcome.TRAVEL:
            try:
                engine.travel()
            except UnknownDoorwayError:
                # The engine journals the error and keeps the current area
                return
            # A new area can have a different size
            self.screen = pygame.display.set_mode(self._window_size())
        elif key == pygame.K_r and engine.rest_available:
            engine.rest()

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_tiles()
        self._draw_overlay()
        self._draw_player()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_tiles(self) -> None:
        """Draw every tile in its kind's colour, with markers."""
        cs = self.cell_size
        for tile in self.engine.grid.iter_tiles():
            rect = (tile.x * cs, tile.y * cs, cs, cs)
            pygame.draw.rect(self.screen, tile.kind.color, rect)
            pygame.draw.rect(self.screen, _GRID_LINE, rect, 1)
            if tile.current_encounter is not None:
                self._blit_centered(tile.current_encounter.marker, tile.x, tile.y, _ENCOUNTER)
            elif tile.kind.is_doorway:
                self._blit_centered(tile.kind.symbol, tile.x, tile.y, _TEXT)

    def _draw_overlay(self) -> None:
        """Tint visited tiles and highlight legal moves."""
        cs = self.cell_size
        grid = self.engine.grid
        overlay = pygame.Surface((grid.width * cs, grid.height * cs), pygame.SRCALPHA)
        for tile in grid.iter_tiles():
            if tile.visited:
                pygame.draw.rect(overlay, _VISITED_TINT, (tile.x * cs, tile.y * cs, cs, cs))
        for x, y in self.engine.adjacent_walkable():
            pygame.draw.rect(overlay, _MOVE_HINT, (x * cs, y * cs, cs, cs), 2)
        self.screen.blit(overlay, (0, 0))

    def _draw_player(self) -> None:
        cs = self.cell_size
        x, y = self.engine.player_pos
        centre = (x * cs + cs // 2, y * cs + cs // 2)
        pygame.draw.circle(self.screen, _PLAYER, centre, max(3, cs // 3))

    def _blit_centered(self, text: str, x: int, y: int, colour: tuple[int, int, int]) -> None:
        cs = self.cell_size
        surf = self.font.render(text, True, colour)
        rect = surf.get_rect(center=(x * cs + cs // 2, y * cs + cs // 2))
        self.screen.blit(surf, rect)

    def _draw_info_panel(self) -> None:
        """Draw location, time, health, actions and the journal."""
        engine = self.engine
        character = engine.character
        snap = engine.current_time()
        panel_x = engine.grid.width * self.cell_size + 10
        y = 10

        lines = [
            f"{engine.location}",
            f"{snap.phase.emoji} {snap.phase.id} - {engine.clock.label()}",
            f"{character.name}  HP {character.hp:.0f} / {character.max_hp:.0f}",
        ]
        for line in lines:
            self.screen.blit(self.font.render(line, True, _TEXT), (panel_x, y))
            y += 18

        bar_w = self._panel_width - 20
        fill = int(bar_w * character.hp / character.max_hp) if character.max_hp else 0
        pygame.draw.rect(self.screen, _GRID_LINE, (panel_x, y, bar_w, 8))
        pygame.draw.rect(self.screen, _HP_BAR, (panel_x, y, fill, 8))
        y += 18

        actions = ["--- Actions ---", "Click/arrows: move"]
        if engine.pending_action is TileOutcome.INTERACT:
            actions.append("E: interact")
        elif engine.pending_action is TileOutcome.TRAVEL:
            actions.append("T: travel")
        if engine.rest_available:
            actions.append("R: rest until morning")
        actions += ["ESC: quit", "", "--- Journal ---"]
        # Newest first
        actions += [f"> {line}" for line in reversed(engine.journal)]

        for line in actions:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18
