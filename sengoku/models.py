"""
sengoku/models.py
~~~~~~~~~~~~~~~~~
Pydantic models shared by the rules core, the repository and the API.

``Character`` is the only entity with a lifecycle. ``AgeEvent``, ``Choice``
and ``StatDelta`` are frozen content definitions; ``LifeRules`` carries the
tunable constants loaded from ``config/rules.json``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


# ---------------------------------------------------------------------------
#  Enums
# ---------------------------------------------------------------------------

class StatName(str, Enum):
    """The seven numeric stats an age-event choice may touch."""
    HEALTH = "health"
    HONOR = "honor"
    GOLD = "gold"
    STRENGTH = "strength"
    AGILITY = "agility"
    INTELLIGENCE = "intelligence"
    CHARISMA = "charisma"


Season = Literal["spring", "summer", "autumn", "winter"]
MaritalStatus = Literal["single", "married", "widowed"]


# ---------------------------------------------------------------------------
#  Content definitions
# ---------------------------------------------------------------------------

class StatDelta(BaseModel):
    """Sparse stat change. Stats not mentioned default to zero."""

    model_config = ConfigDict(frozen=True)

    health: int = 0
    honor: int = 0
    gold: int = 0
    strength: int = 0
    agility: int = 0
    intelligence: int = 0
    charisma: int = 0

    def get(self, stat: StatName | str) -> int:
        return getattr(self, StatName(stat).value)


class Choice(BaseModel):
    """A selectable option inside an age event."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1, description="Label shown to the player")
    consequence: str = Field(..., description="Narrative outcome of picking this option")
    effects: StatDelta = Field(default_factory=StatDelta, description="Stat changes")


class AgeEvent(BaseModel):
    """A scripted prompt bound to a single character age."""

    model_config = ConfigDict(frozen=True)

    age: int = Field(..., ge=0, description="Age at which the event triggers")
    title: str = Field(..., min_length=1)
    description: str
    choices: tuple[Choice, ...] = Field(..., min_length=2, max_length=3)


# ---------------------------------------------------------------------------
#  Character
# ---------------------------------------------------------------------------

class Character(BaseModel):
    """
    A player's persistent life-simulation entity.

    Clamping of stats happens when choices are applied, not here, so the
    field constraints only reject values no rule could ever produce.
    """

    id: str = Field(..., description="Opaque character identifier")
    user_id: str | None = Field(None, description="Owning user")
    name: str = Field(..., min_length=1, description="Character's name")
    clan: str = Field(..., description="Origin province")
    profession: str = Field("blacksmith", description="Current trade")

    health: int = Field(100, ge=0, le=100)
    honor: int = Field(50, ge=0, le=100)
    gold: int = Field(0, ge=0)
    strength: int = Field(10, ge=1)
    agility: int = Field(10, ge=1)
    intelligence: int = Field(10, ge=1)
    charisma: int = Field(10, ge=1)

    birth_year: int
    current_year: int
    age: int = Field(..., ge=0)

    is_alive: bool = True
    death_reason: str | None = None

    region: str = Field("", description="Region the character currently stands in")
    current_location: str = "Home village"
    travel_reason: str = ""
    secret_path: str | None = Field(None, description="Most recently discovered secret path")
    discovered_secrets: list[str] = Field(default_factory=list, description="Every secret path discovered, oldest first")

    marital_status: MaritalStatus = "single"
    children_count: int = Field(0, ge=0)

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def death_reason_matches_status(self) -> Character:
        if self.is_alive and self.death_reason is not None:
            raise ValueError("A living character cannot have a death_reason.")
        if not self.is_alive and not self.death_reason:
            raise ValueError("A dead character must have a death_reason.")
        return self

    def stat(self, stat: StatName | str) -> int:
        return getattr(self, StatName(stat).value)


# ---------------------------------------------------------------------------
#  Results and records
# ---------------------------------------------------------------------------

class DeathCheck(BaseModel):
    """Outcome of a death evaluation."""
    is_dead: bool
    reason: str | None = None


class TimeSnapshot(BaseModel):
    """In-game calendar position shown alongside a character."""
    year: int
    season: Season
    month: int = Field(..., ge=1, le=12)


class GameEventRecord(BaseModel):
    """Immutable history entry written after every resolved age event."""

    model_config = ConfigDict(frozen=True)

    character_id: str
    event_type: str = "age_event"
    title: str
    description: str
    choices: list[str] = Field(default_factory=list)
    consequences: list[str] = Field(default_factory=list)
    year: int
    created_at: datetime = Field(default_factory=_utcnow)


# ---------------------------------------------------------------------------
#  Rules
# ---------------------------------------------------------------------------

class LifeRules(BaseModel):
    """
    Tunable life-progression constants.

    Serialised with camelCase keys to match the other files in ``config/``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    natural_death_age: int = Field(80, gt=0)
    mortality_onset_age: int = Field(60, ge=0)
    mortality_rate_per_year: float = Field(0.01, ge=0.0)
    old_age_reason: str = Field("old age", min_length=1)
    wounds_reason: str = Field("wounds", min_length=1)
    random_death_reasons: tuple[str, ...] = Field(
        ("illness", "accident", "poisoning"), min_length=1
    )
    starting_age: int = Field(16, ge=0)
    starting_health: int = Field(100, ge=1, le=100)
    starting_honor: int = Field(50, ge=0, le=100)
    start_year: int = 1560
    creation_stat_min: int = Field(5, ge=1)
    creation_stat_max: int = Field(20, ge=1)

    @model_validator(mode="after")
    def bounds_are_ordered(self) -> LifeRules:
        if self.mortality_onset_age >= self.natural_death_age:
            raise ValueError("mortalityOnsetAge must be lower than naturalDeathAge.")
        if self.creation_stat_min > self.creation_stat_max:
            raise ValueError("creationStatMin must not exceed creationStatMax.")
        if self.starting_age >= self.natural_death_age:
            raise ValueError("startingAge must be lower than naturalDeathAge.")
        return self


DEFAULT_RULES = LifeRules()
