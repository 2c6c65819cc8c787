"""Entry point for ``python -m voyage``.

Loads the default YAML config, creates the character, generates the
starting area, and opens a Pygame window to play in.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from voyage.player.character import PATHS, Character
from voyage.simulation.config import GameConfig
from voyage.simulation.engine import GameEngine
from voyage.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def build_parser() -> argparse.ArgumentParser:
    """Return the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="voyage",
        description="Völva's Voyage - tile exploration game",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--gender",
        choices=("male", "female"),
        default="female",
        help="Kin of the hero (default: female)",
    )
    parser.add_argument(
        "--path",
        choices=sorted(PATHS),
        default="volva",
        help="Starting path (default: volva)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=20,
        help="Pixel size per grid cell (default: 20)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Diagnostic log level (default: WARNING)",
    )
    return parser


def main() -> None:
    """Parse CLI args, create engine, launch renderer."""
    args = build_parser().parse_args()
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = GameConfig.from_yaml(args.config)
    character = Character.create(args.gender, args.path, max_hp=config.max_hp)
    engine = GameEngine(config=config, character=character)
    engine.generate_area()
    engine.journal.append(
        f"Welcome, {character.name}! You start your journey at {engine.location}. "
        "Select an adjacent tile to move.",
    )

    renderer = PygameRenderer(engine=engine, cell_size=args.cell_size)
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
