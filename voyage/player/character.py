"""Character — the player's health, stats, and chosen path.

Paths are the starting classes offered at character creation.  Health
is clamped to ``[0, max_hp]``; reaching zero marks the character as
fallen but does not stop the game.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GamePath:
    """A starting path (class).

    Attributes:
        id: Stable identifier.
        name: Display name.
        focus: Stat the path focuses on.
        description: Flavour text.
    """

    id: str
    name: str
    focus: str
    description: str


PATHS: dict[str, GamePath] = {
    p.id: p
    for p in (
        GamePath(
            "huscarl",
            "Huscarl",
            "Strength",
            "A martial fighter focused on strength and direct combat.",
        ),
        GamePath(
            "volva",
            "Völva",
            "Intellect",
            "A mystic focused on intellect and the manipulation of energies.",
        ),
        GamePath(
            "skirmisher",
            "Skirmisher",
            "Agility",
            "A quick fighter focused on agility and swift movement.",
        ),
    )
}

BASE_STATS: dict[str, int] = {"strength": 10, "intellect": 10, "agility": 10, "stamina": 10}


@dataclass
class Character:
    """The player character.

    Attributes:
        name: Display name.
        gender: Chosen kin, or None.
        path: Chosen path id, or None.
        level: Character level.
        max_hp: Maximum health.
        hp: Current health.
        stats: Base attribute scores.
    """

    name: str = "The Wanderer"
    gender: str | None = None
    path: str | None = None
    level: int = 1
    max_hp: float = 100.0
    hp: float = 100.0
    stats: dict[str, int] = field(default_factory=lambda: dict(BASE_STATS))

    @classmethod
    def create(cls, gender: str, path: str, max_hp: float = 100.0) -> Character:
        """Build a fresh character from the creation choices.

        Raises:
            ValueError: If ``path`` is not a known path id.
        """
        if path not in PATHS:
            msg = f"unknown path {path!r}; expected one of {sorted(PATHS)}"
            raise ValueError(msg)
        name = "The Huscarl" if gender == "male" else "The Shieldmaiden"
        return cls(name=name, gender=gender, path=path, max_hp=max_hp, hp=max_hp)

    @property
    def is_fallen(self) -> bool:
        return self.hp <= 0

    def take_damage(self, amount: float) -> float:
        """Lose ``amount`` health (never below zero); return the loss."""
        before = self.hp
        self.hp = max(0.0, self.hp - amount)
        return before - self.hp

    def heal(self, amount: float) -> float:
        """Gain up to ``amount`` health (capped at max); return the gain."""
        before = self.hp
        self.hp = min(self.max_hp, self.hp + amount)
        return self.hp - before
