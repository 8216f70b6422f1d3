"""Tests for sengoku.occult."""
from __future__ import annotations

import pytest

from sengoku.occult import (
    NATURAL_OCCULT_EVENTS,
    OccultTracker,
    investigation_chance,
    perception_description,
    resistance_description,
)

EVENTS = {event.id: event for event in NATURAL_OCCULT_EVENTS}


class TestRolls:
    def test_no_event_above_chance(self, scripted_rng) -> None:
        tracker = OccultTracker(scripted_rng(draws=[0.1]))
        assert tracker.roll_for_event() is None
        assert tracker.witnessed == []

    def test_event_below_chance(self, scripted_rng) -> None:
        tracker = OccultTracker(scripted_rng(draws=[0.05], picks=[2]))
        result = tracker.roll_for_event()
        assert result is not None
        assert tracker.witnessed[0].id == "whispers_1"
        assert tracker.perception_level == 1
        assert tracker.spiritual_resistance == 1


class TestHandleEvent:
    def test_perception_event(self, scripted_rng) -> None:
        tracker = OccultTracker(scripted_rng())
        result = tracker.handle_event(EVENTS["strange_sounds_1"])
        assert result.perception_gained is True
        assert result.spiritual_resistance_gained is False
        assert result.social_impact == "curiosity"
        assert tracker.perception_level == 1

    def test_corruption_event(self, scripted_rng) -> None:
        tracker = OccultTracker(scripted_rng())
        result = tracker.handle_event(EVENTS["shadow_movement_1"])
        assert result.social_impact == "fear"
        assert tracker.perception_level == 0
        assert "something going wrong" in result.description


class TestInvestigate:
    def test_unknown_event(self, scripted_rng) -> None:
        with pytest.raises(ValueError):
            OccultTracker(scripted_rng()).investigate("strange_sounds_1")

    def test_success_adds_perception(self, scripted_rng) -> None:
        tracker = OccultTracker(scripted_rng(draws=[0.5]))
        tracker.handle_event(EVENTS["strange_sounds_1"])
        assert tracker.investigate("strange_sounds_1") is True
        assert tracker.perception_level == 3

    def test_failure(self, scripted_rng) -> None:
        tracker = OccultTracker(scripted_rng(draws=[0.6]))
        tracker.handle_event(EVENTS["strange_sounds_1"])
        assert tracker.investigate("strange_sounds_1") is False
        assert tracker.perception_level == 1
        assert "escapes your grasp" in tracker.log[-1]

    def test_chance_drops_with_difficulty(self) -> None:
        assert investigation_chance(EVENTS["missing_object_1"]) == pytest.approx(0.65)
        assert investigation_chance(EVENTS["shadow_movement_1"]) == pytest.approx(0.5)


class TestDescriptions:
    @pytest.mark.parametrize(
        "level,text",
        [
            (0, "You notice nothing unusual"),
            (3, "You begin to notice strange patterns"),
            (6, "You recognise supernatural phenomena"),
            (7, "You understand the nature of the occult"),
        ],
    )
    def test_perception(self, level: int, text: str) -> None:
        assert perception_description(level) == text

    def test_resistance(self) -> None:
        assert resistance_description(1) == "Resists weak influences"
        assert resistance_description(10) == "Resistant to strong influences"
