"""
sengoku/occult.py
~~~~~~~~~~~~~~~~~
Slow reveal of the supernatural: strange events occasionally happen to the
character, raising their spiritual perception and resistance, and witnessed
events can be investigated for deeper insight.

Perception and resistance live on the tracker only; they are not character
stats and are never written back to the character record.
"""

from __future__ import annotations

import logging
import random
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

EVENT_CHANCE = 0.1
BASE_INVESTIGATION_CHANCE = 0.7
INVESTIGATION_CHANCE_PER_DIFFICULTY = 0.05
INVESTIGATION_PERCEPTION_BONUS = 2


class OccultEventType(str, Enum):
    ENCOUNTER = "encounter"
    RITUAL = "ritual"
    DISCOVERY = "discovery"
    CORRUPTION = "corruption"


class OccultTrigger(str, Enum):
    LOCATION = "location"
    TIME = "time"
    ACTION = "action"
    SOCIAL = "social"


class OccultEffects(BaseModel):
    model_config = ConfigDict(frozen=True)

    perception: bool = False
    spiritual: bool = False
    social: bool = False
    corruption: bool = False


class OccultEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    type: OccultEventType
    trigger: OccultTrigger
    difficulty: int = Field(..., ge=1, le=10)
    effects: OccultEffects = Field(default_factory=OccultEffects)


class OccultResult(BaseModel):
    type: OccultEventType
    description: str
    perception_gained: bool
    spiritual_resistance_gained: bool
    social_impact: str


NATURAL_OCCULT_EVENTS: tuple[OccultEvent, ...] = (
    OccultEvent(
        id="strange_sounds_1",
        name="Strange Sounds",
        description="At night you hear whispers that do not sound human. They come from impossible directions.",
        type=OccultEventType.ENCOUNTER,
        trigger=OccultTrigger.TIME,
        difficulty=2,
        effects=OccultEffects(perception=True),
    ),
    OccultEvent(
        id="missing_object_1",
        name="Missing Object",
        description="A personal belonging vanishes from your room. Nobody saw anything.",
        type=OccultEventType.DISCOVERY,
        trigger=OccultTrigger.LOCATION,
        difficulty=1,
        effects=OccultEffects(perception=True),
    ),
    OccultEvent(
        id="whispers_1",
        name="Incomprehensible Whispers",
        description="In moments of silence you hear whispers in a language you do not recognise.",
        type=OccultEventType.ENCOUNTER,
        trigger=OccultTrigger.SOCIAL,
        difficulty=3,
        effects=OccultEffects(perception=True, spiritual=True),
    ),
    OccultEvent(
        id="shadow_movement_1",
        name="Moving Shadows",
        description="Your shadow moves on its own. Sometimes it takes shapes it should not.",
        type=OccultEventType.CORRUPTION,
        trigger=OccultTrigger.ACTION,
        difficulty=4,
        effects=OccultEffects(corruption=True),
    ),
)

# (upper bound inclusive, description); anything above the last bound uses the final entry
_PERCEPTION_TIERS = (
    (0, "You notice nothing unusual"),
    (3, "You begin to notice strange patterns"),
    (6, "You recognise supernatural phenomena"),
)
_PERCEPTION_TOP = "You understand the nature of the occult"

_RESISTANCE_TIERS = (
    (0, "Vulnerable to influences"),
    (3, "Resists weak influences"),
    (6, "Resists moderate influences"),
)
_RESISTANCE_TOP = "Resistant to strong influences"


def _describe(level: int, tiers: tuple[tuple[int, str], ...], top: str) -> str:
    for upper, text in tiers:
        if level <= upper:
            return text
    return top


def perception_description(level: int) -> str:
    return _describe(level, _PERCEPTION_TIERS, _PERCEPTION_TOP)


def resistance_description(level: int) -> str:
    return _describe(level, _RESISTANCE_TIERS, _RESISTANCE_TOP)


def investigation_chance(event: OccultEvent) -> float:
    return max(0.0, BASE_INVESTIGATION_CHANCE - event.difficulty * INVESTIGATION_CHANCE_PER_DIFFICULTY)


class OccultTracker:
    """Per-character record of witnessed events and occult attributes."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.perception_level = 0
        self.spiritual_resistance = 0
        self.witnessed: list[OccultEvent] = []
        self.log: list[str] = []

    def roll_for_event(self) -> OccultResult | None:
        """Give the world a chance to show something strange."""
        if self.rng.random() < EVENT_CHANCE:
            return self.handle_event(self.rng.choice(NATURAL_OCCULT_EVENTS))
        return None

    def handle_event(self, event: OccultEvent) -> OccultResult:
        line = f"{event.name}: {event.description}"
        self.witnessed.append(event)

        if event.effects.perception:
            self.perception_level += 1
            line += " Your perception increased!"
        if event.effects.spiritual:
            self.spiritual_resistance += 1
            line += " Your spiritual resistance increased!"
        if event.effects.corruption:
            line += " You feel something going wrong..."

        self.log.append(line)
        logger.debug("Occult event %s witnessed.", event.id)
        return OccultResult(
            type=event.type,
            description=line,
            perception_gained=event.effects.perception,
            spiritual_resistance_gained=event.effects.spiritual,
            social_impact="fear" if event.effects.corruption else "curiosity",
        )

    def investigate(self, event_id: str) -> bool:
        """Dig into a witnessed event. Returns True when something was learned."""
        event = next((e for e in self.witnessed if e.id == event_id), None)
        if event is None:
            raise ValueError(f"Occult event '{event_id}' has not been witnessed.")

        line = f"You investigate {event.name}..."
        success = self.rng.random() < investigation_chance(event)
        if success:
            line += f" You discovered: {event.description[:50]}..."
            if event.effects.perception:
                self.perception_level += INVESTIGATION_PERCEPTION_BONUS
                line += " Your perception increased significantly!"
        else:
            line += " You could not fully understand it. Something escapes your grasp."

        self.log.append(line)
        return success
