"""Config — load game parameters from YAML files.

Tunable constants (starting map size, rest rules, journal length,
per-area generation styles) live in YAML and are parsed into a typed
dataclass here.  Every key is optional; missing keys keep their
defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from voyage.generation.areas import AREA_STYLES, AreaStyle


@dataclass
class GameConfig:
    """Top-level game configuration.

    Attributes:
        seed: RNG seed; None draws fresh entropy every run.
        start_area: Name of the first area generated.
        map_width: Width of the first area.
        map_height: Height of the first area.
        start_hour: Hour the clock starts at on day 1.
        max_hp: Player maximum health.
        journal_size: Number of narrative lines kept.
        rest_heal_fraction: Share of max health healed per hour rested.
        night_attack_chance: Probability a Night rest is disturbed.
        night_attack_damage: Damage dealt by a disturbed rest.
        areas: Generation style per area name.
    """

    seed: int | None = None
    start_area: str = "Landfall"
    map_width: int = 20
    map_height: int = 40
    start_hour: int = 6
    max_hp: float = 100.0
    journal_size: int = 20
    rest_heal_fraction: float = 0.05
    night_attack_chance: float = 0.2
    night_attack_damage: float = 10.0
    areas: dict[str, AreaStyle] = field(default_factory=lambda: dict(AREA_STYLES))

    def __post_init__(self) -> None:
        if self.map_width < 3 or self.map_height < 3:
            msg = f"map must be at least 3x3, got {self.map_width}x{self.map_height}"
            raise ValueError(msg)
        if not 0 <= self.start_hour < 24:
            msg = f"start_hour must be in 0..23, got {self.start_hour}"
            raise ValueError(msg)
        if not 0.0 <= self.night_attack_chance <= 1.0:
            msg = f"night_attack_chance must be a probability, got {self.night_attack_chance}"
            raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> GameConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated GameConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If an area section names an unknown style key.
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        areas = dict(AREA_STYLES)
        for name, overrides in (data.get("areas") or {}).items():
            base = areas.get(name, AREA_STYLES["Landfall"])
            areas[name] = base.with_overrides(overrides or {})

        return cls(
            seed=data.get("seed", cls.seed),
            start_area=data.get("start_area", cls.start_area),
            map_width=data.get("map_width", cls.map_width),
            map_height=data.get("map_height", cls.map_height),
            start_hour=data.get("start_hour", cls.start_hour),
            max_hp=data.get("max_hp", cls.max_hp),
            journal_size=data.get("journal_size", cls.journal_size),
            rest_heal_fraction=data.get(
                "rest_heal_fraction",
                cls.rest_heal_fraction,
            ),
            night_attack_chance=data.get(
                "night_attack_chance",
                cls.night_attack_chance,
            ),
            night_attack_damage=data.get(
                "night_attack_damage",
                cls.night_attack_damage,
            ),
            areas=areas,
        )
