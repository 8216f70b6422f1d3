"""
sengoku/creatures.py
~~~~~~~~~~~~~~~~~~~~
Anomalous creature encounters.

Creatures are grouped by type; each type has a few concrete encounter
variants. An active encounter is investigated step by step and, once
progress reaches 100, resolved with the type's fixed outcome.
"""

from __future__ import annotations

import logging
import random
from enum import Enum

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

ENCOUNTER_CHANCE = 0.05
PROGRESS_STEP = 10
PROGRESS_COMPLETE = 100


class CreatureType(str, Enum):
    SUBSTITUTE = "substitute"
    CONTACT_ENTITY = "contact_entity"
    GHOUL = "ghoul"


class Severity(str, Enum):
    SUBTLE = "subtle"
    MODERATE = "moderate"
    SEVERE = "severe"


class ResolutionType(str, Enum):
    SURVIVE = "survive"
    ESCAPE = "escape"
    TRANSFORM = "transform"
    CORRUPT = "corrupt"


class EncounterEffects(BaseModel):
    model_config = ConfigDict(frozen=True)

    spiritual: bool = False
    psychological: bool = False
    physical: bool = False
    permanent: bool = False


class Resolution(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ResolutionType
    description: str


class EncounterVariant(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    severity: Severity
    effects: EncounterEffects


class CreatureKind(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: CreatureType
    name: str
    description: str
    trigger: str
    resolution: Resolution
    variants: tuple[EncounterVariant, ...]


class CreatureEncounter(BaseModel):
    """A concrete encounter the character is currently caught up in."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: CreatureType
    name: str
    description: str
    detail: str
    severity: Severity
    effects: EncounterEffects


CREATURE_KINDS: tuple[CreatureKind, ...] = (
    CreatureKind(
        type=CreatureType.SUBSTITUTE,
        name="Utsuro Mono (Hollow One)",
        description="Something is wrong. Someone you knew came back, but not truly.",
        trigger="social",
        resolution=Resolution(
            type=ResolutionType.SURVIVE,
            description="You see the truth but choose not to interfere. Some secrets are better left hidden.",
        ),
        variants=(
            EncounterVariant(
                id="substitute_1",
                description=(
                    "Your neighbour Takashi came back from the war, but his eyes never blink. "
                    "He feels no pain, never sleeps and watches too much."
                ),
                severity=Severity.SUBTLE,
                effects=EncounterEffects(psychological=True),
            ),
            EncounterVariant(
                id="substitute_2",
                description=(
                    "The child who played by the river now avoids her reflection. "
                    "She laughs, but there is no joy in it."
                ),
                severity=Severity.MODERATE,
                effects=EncounterEffects(psychological=True),
            ),
        ),
    ),
    CreatureKind(
        type=CreatureType.CONTACT_ENTITY,
        name="Ikai no Mono (Things from the Other Side)",
        description="In liminal places reality breaks. Things that should not exist appear.",
        trigger="location",
        resolution=Resolution(
            type=ResolutionType.ESCAPE,
            description="You flee the anomalous place. Your perception of the world is changed forever.",
        ),
        variants=(
            EncounterVariant(
                id="contact_1",
                description=(
                    "In the abandoned forest the trees grow in spirals. "
                    "The wind whispers names you have never heard."
                ),
                severity=Severity.MODERATE,
                effects=EncounterEffects(spiritual=True, psychological=True),
            ),
            EncounterVariant(
                id="contact_2",
                description=(
                    "The old bridge seems to move when nobody is looking. "
                    "Sometimes shadows pass where there is nothing."
                ),
                severity=Severity.SEVERE,
                effects=EncounterEffects(spiritual=True, psychological=True, physical=True, permanent=True),
            ),
        ),
    ),
    CreatureKind(
        type=CreatureType.GHOUL,
        name="Ketsubutsu (Things of Blood)",
        description="People who survived the impossible, but paid a terrible price.",
        trigger="action",
        resolution=Resolution(
            type=ResolutionType.CORRUPT,
            description="The contact leaves a mark on you. Something inside has changed and never will be the same.",
        ),
        variants=(
            EncounterVariant(
                id="ghoul_1",
                description=(
                    "The old man who was starving on the mountain came back. He no longer "
                    "needs food, and his eyes shine in the dark."
                ),
                severity=Severity.SEVERE,
                effects=EncounterEffects(spiritual=True, psychological=True, physical=True, permanent=True),
            ),
        ),
    ),
)

_KINDS_BY_TYPE = {kind.type: kind for kind in CREATURE_KINDS}


def make_encounter(kind: CreatureKind, variant: EncounterVariant) -> CreatureEncounter:
    return CreatureEncounter(
        id=variant.id,
        type=kind.type,
        name=kind.name,
        description=kind.description,
        detail=variant.description,
        severity=variant.severity,
        effects=variant.effects,
    )


class CreatureTracker:
    """Active encounters and the shared investigation meter."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.active: list[CreatureEncounter] = []
        self.investigation_level = 0
        self.log: list[str] = []

    def roll_for_encounter(self) -> CreatureEncounter | None:
        if self.rng.random() >= ENCOUNTER_CHANCE:
            return None
        kind = self.rng.choice(CREATURE_KINDS)
        encounter = make_encounter(kind, self.rng.choice(kind.variants))
        if not self.handle_encounter(encounter):
            return None
        return encounter

    def handle_encounter(self, encounter: CreatureEncounter) -> bool:
        """Start tracking ``encounter``; returns False if it is already active."""
        if any(e.id == encounter.id for e in self.active):
            logger.debug("Creature encounter %s is already active.", encounter.id)
            return False
        self.active.append(encounter)
        self.log.append(f"Encounter: {encounter.name}")
        logger.debug("Creature encounter %s began.", encounter.id)
        return True

    def investigate(self, encounter_id: str) -> Resolution | None:
        """Raise the investigation meter; resolves the encounter at 100."""
        self._find(encounter_id)
        self.investigation_level = min(self.investigation_level + PROGRESS_STEP, PROGRESS_COMPLETE)
        if self.investigation_level < PROGRESS_COMPLETE:
            return None
        return self.resolve(encounter_id)

    def resolve(self, encounter_id: str) -> Resolution:
        encounter = self._find(encounter_id)
        resolution = _KINDS_BY_TYPE[encounter.type].resolution
        self.log.append(f"Resolution: {resolution.description}")
        self.active = [e for e in self.active if e.id != encounter_id]
        self.investigation_level = 0
        return resolution

    def _find(self, encounter_id: str) -> CreatureEncounter:
        for encounter in self.active:
            if encounter.id == encounter_id:
                return encounter
        raise ValueError(f"No active encounter '{encounter_id}'.")
