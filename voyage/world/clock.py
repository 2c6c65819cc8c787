"""Clock — the 24-hour day/night cycle.

Time advances one hour per step and persists across travel.  The phase
is never stored; it is derived from the hour against a fixed table.
Evening and Night allow resting, and Night is the only dangerous phase.
"""

from __future__ import annotations

from dataclasses import dataclass

HOURS_PER_DAY = 24
MORNING_HOUR = 6


@dataclass(frozen=True)
class Phase:
    """A named segment of the day.

    Attributes:
        id: Phase name.
        start: First hour of the phase (inclusive).
        end: Last hour of the phase (inclusive).  May be lower than
            ``start`` for a phase that wraps past midnight.
        emoji: Tracker glyph for the front end.
        color: RGB colour for the front end.
        can_rest: Whether resting is allowed in this phase.
        danger: Whether rest may be disturbed in this phase.
    """

    id: str
    start: int
    end: int
    emoji: str
    color: tuple[int, int, int]
    can_rest: bool = False
    danger: bool = False

    def contains(self, hour: int) -> bool:
        """Return True if ``hour`` falls inside this phase."""
        if self.start <= self.end:
            return self.start <= hour <= self.end
        return hour >= self.start or hour <= self.end

    @property
    def hours(self) -> int:
        """Number of hours covered by the phase."""
        return (self.end - self.start) % HOURS_PER_DAY + 1


NIGHT = Phase("Night", 0, 5, "🌙", (26, 51, 102), can_rest=True, danger=True)

PHASES: tuple[Phase, ...] = (
    Phase("Morning", 6, 10, "🌄", (247, 208, 132)),
    Phase("Midday", 11, 13, "☀️", (255, 235, 59)),
    Phase("Day", 14, 17, "🌤️", (135, 206, 235)),
    Phase("Evening", 18, 23, "🌥️", (255, 160, 122), can_rest=True),
    NIGHT,
)


def current_phase(hour: int) -> Phase:
    """Return the phase containing ``hour`` (Night if none matches)."""
    for phase in PHASES:
        if phase.contains(hour):
            return phase
    return NIGHT


def rest_eligible(hour: int, phase: Phase) -> bool:
    """Return True if the player may rest at ``hour`` during ``phase``."""
    return hour == HOURS_PER_DAY - 1 or phase is NIGHT


def hours_until_morning(hour: int) -> int:
    """Hours to skip so that the clock lands on the next 06:00."""
    return (MORNING_HOUR - hour) % HOURS_PER_DAY


@dataclass(frozen=True)
class TimeSnapshot:
    """Read-only view of the clock."""

    day: int
    hour: int
    phase: Phase


@dataclass
class GameClock:
    """Hour/day counter.

    Attributes:
        hour: Current hour (0-23).
        day: Current day, starting at 1.
    """

    hour: int = MORNING_HOUR
    day: int = 1

    def __post_init__(self) -> None:
        if not 0 <= self.hour < HOURS_PER_DAY:
            msg = f"hour must be in 0..23, got {self.hour}"
            raise ValueError(msg)

    @property
    def phase(self) -> Phase:
        return current_phase(self.hour)

    def advance(self, hours: int = 1) -> int:
        """Move the clock forward.

        Args:
            hours: Non-negative number of hours to add.

        Returns:
            Number of midnights crossed.

        Raises:
            ValueError: If ``hours`` is negative.
        """
        if hours < 0:
            msg = f"cannot advance time by {hours} hours"
            raise ValueError(msg)
        days, self.hour = divmod(self.hour + hours, HOURS_PER_DAY)
        self.day += days
        return days

    def snapshot(self) -> TimeSnapshot:
        return TimeSnapshot(day=self.day, hour=self.hour, phase=self.phase)

    def label(self) -> str:
        """Format as ``Day N, HH:00``."""
        return f"Day {self.day}, {self.hour:02d}:00"
