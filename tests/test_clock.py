"""Tests for voyage.world.clock — phases, time advance, and rest rules."""

import pytest

from voyage.world.clock import (
    NIGHT,
    PHASES,
    GameClock,
    Phase,
    current_phase,
    hours_until_morning,
    rest_eligible,
)


class TestPhases:
    """Tests for the phase table."""

    def test_phases_partition_the_day(self) -> None:
        for hour in range(24):
            matches = [p for p in PHASES if p.contains(hour)]
            assert len(matches) == 1, hour

    def test_phase_hours_sum_to_a_day(self) -> None:
        assert sum(p.hours for p in PHASES) == 24

    @pytest.mark.parametrize(
        ("hour", "expected"),
        [(0, "Night"), (5, "Night"), (6, "Morning"), (10, "Morning"), (11, "Midday"),
         (13, "Midday"), (14, "Day"), (17, "Day"), (18, "Evening"), (23, "Evening")],
    )
    def test_current_phase(self, hour: int, expected: str) -> None:
        assert current_phase(hour).id == expected

    def test_wrapping_phase(self) -> None:
        late = Phase("Late", 22, 2, "*", (0, 0, 0))
        assert late.contains(23)
        assert late.contains(0)
        assert late.contains(2)
        assert not late.contains(12)
        assert late.hours == 5

    def test_night_fallback(self) -> None:
        assert current_phase(99) is NIGHT

    def test_only_night_is_dangerous(self) -> None:
        assert [p.id for p in PHASES if p.danger] == ["Night"]
        assert {p.id for p in PHASES if p.can_rest} == {"Evening", "Night"}


class TestRestRules:
    """Tests for rest eligibility and the morning skip."""

    @pytest.mark.parametrize("hour", [23, 0, 3, 5])
    def test_eligible(self, hour: int) -> None:
        assert rest_eligible(hour, current_phase(hour))

    @pytest.mark.parametrize("hour", [6, 12, 18, 22])
    def test_not_eligible(self, hour: int) -> None:
        assert not rest_eligible(hour, current_phase(hour))

    def test_hours_until_morning(self) -> None:
        assert hours_until_morning(23) == 7
        assert hours_until_morning(0) == 6
        assert hours_until_morning(5) == 1
        assert hours_until_morning(6) == 0


class TestGameClock:
    """Tests for the hour/day counter."""

    def test_defaults(self) -> None:
        clock = GameClock()
        assert clock.hour == 6
        assert clock.day == 1
        assert clock.phase.id == "Morning"

    def test_invalid_start_hour(self) -> None:
        with pytest.raises(ValueError):
            GameClock(hour=24)

    def test_advance_one_hour(self) -> None:
        clock = GameClock(hour=22)
        assert clock.advance() == 0
        assert (clock.day, clock.hour) == (1, 23)

    def test_advance_wraps_midnight(self) -> None:
        clock = GameClock(hour=23)
        assert clock.advance(1) == 1
        assert (clock.day, clock.hour) == (2, 0)

    @pytest.mark.parametrize("hours", [0, 1, 17, 18, 24, 47, 48, 100])
    def test_advance_many_days(self, hours: int) -> None:
        clock = GameClock(hour=6)
        clock.advance(hours)
        assert 0 <= clock.hour <= 23
        assert clock.day == 1 + (6 + hours) // 24
        assert clock.hour == (6 + hours) % 24

    def test_negative_advance(self) -> None:
        with pytest.raises(ValueError):
            GameClock().advance(-1)

    def test_snapshot_and_label(self) -> None:
        clock = GameClock(hour=3, day=4)
        snap = clock.snapshot()
        assert (snap.day, snap.hour, snap.phase) == (4, 3, NIGHT)
        assert clock.label() == "Day 4, 03:00"
