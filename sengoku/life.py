"""
sengoku/life.py
~~~~~~~~~~~~~~~
Life-progression rules: applying a choice, advancing the clock and deciding
whether a character dies.

All functions are pure with respect to their inputs and return new
``Character`` copies; persistence is the caller's job. Once a character is
dead every function here hands it back untouched.

``advance_time`` only knows about the natural age ceiling. The health-based
and probabilistic causes live in ``check_death`` and the caller has to run
both (``sengoku.game.LifeSession`` does).
"""

from __future__ import annotations

import logging
import random

from sengoku.models import (
    DEFAULT_RULES,
    Character,
    Choice,
    DeathCheck,
    LifeRules,
    Season,
    StatName,
    TimeSnapshot,
)
from utils.utils import clamp

logger = logging.getLogger(__name__)

# (floor, ceiling) per stat; None means unbounded on that side.
STAT_BOUNDS: dict[StatName, tuple[int | None, int | None]] = {
    StatName.HEALTH: (0, 100),
    StatName.HONOR: (0, 100),
    StatName.GOLD: (0, None),
    StatName.STRENGTH: (1, None),
    StatName.AGILITY: (1, None),
    StatName.INTELLIGENCE: (1, None),
    StatName.CHARISMA: (1, None),
}

SEASONS: tuple[Season, ...] = ("spring", "summer", "autumn", "winter")

MONTHS_PER_YEAR = 12


# ---------------------------------------------------------------------------
#  Event application
# ---------------------------------------------------------------------------

def apply_choice(character: Character, choice: Choice) -> Character:
    """Apply the choice's stat deltas, clamping each stat to its bounds."""
    if not character.is_alive:
        logger.debug("Ignoring choice '%s' for dead character %s.", choice.text, character.id)
        return character

    updates = {
        stat.value: clamp(character.stat(stat) + choice.effects.get(stat), *STAT_BOUNDS[stat])
        for stat in StatName
    }
    return character.model_copy(update=updates)


# ---------------------------------------------------------------------------
#  Time advancement
# ---------------------------------------------------------------------------

def advance_time(
    character: Character,
    months: int = 1,
    rules: LifeRules = DEFAULT_RULES,
) -> Character:
    """
    Move the character's clock forward by whole years.

    Fractional years truncate: 6 months changes nothing, 18 months is one
    year. Reaching the natural death age kills the character of old age,
    replacing whatever reason was there before.
    """
    if months < 0:
        raise ValueError(f"Cannot advance time by a negative number of months ({months}).")
    if not character.is_alive:
        return character

    years = months // MONTHS_PER_YEAR
    new_age = character.age + years
    updates: dict[str, object] = {
        "current_year": character.current_year + years,
        "age": new_age,
        "is_alive": new_age < rules.natural_death_age,
    }
    if new_age >= rules.natural_death_age:
        updates["death_reason"] = rules.old_age_reason
        logger.info("Character %s reached the natural age ceiling at %d.", character.id, new_age)

    return character.model_copy(update=updates)


# ---------------------------------------------------------------------------
#  Death evaluation
# ---------------------------------------------------------------------------

def death_chance(age: int, rules: LifeRules = DEFAULT_RULES) -> float:
    """Nominal yearly chance of a random death; may exceed 1.0 for absurd ages."""
    if age < rules.mortality_onset_age:
        return 0.0
    return (age - rules.mortality_onset_age) * rules.mortality_rate_per_year


def check_death(
    character: Character,
    rng: random.Random | None = None,
    rules: LifeRules = DEFAULT_RULES,
) -> DeathCheck:
    """
    Decide whether the character dies this step.

    Deterministic causes are checked first (old age, then wounds), so a
    character on one of those boundaries never dies of a random cause.
    """
    if not character.is_alive:
        return DeathCheck(is_dead=True, reason=character.death_reason)

    if character.age >= rules.natural_death_age:
        return DeathCheck(is_dead=True, reason=rules.old_age_reason)

    if character.health <= 0:
        return DeathCheck(is_dead=True, reason=rules.wounds_reason)

    if character.age >= rules.mortality_onset_age:
        if rng is None:
            rng = random.Random()
        if rng.random() < death_chance(character.age, rules):
            return DeathCheck(is_dead=True, reason=rng.choice(rules.random_death_reasons))

    return DeathCheck(is_dead=False)


# ---------------------------------------------------------------------------
#  Calendar
# ---------------------------------------------------------------------------

def get_season(years_passed: int) -> Season:
    return SEASONS[years_passed % len(SEASONS)]


def current_time(character: Character) -> TimeSnapshot:
    """Calendar position derived from how many years the character has lived."""
    years_passed = character.current_year - character.birth_year
    return TimeSnapshot(
        year=character.current_year,
        season=get_season(years_passed),
        month=years_passed % MONTHS_PER_YEAR + 1,
    )
