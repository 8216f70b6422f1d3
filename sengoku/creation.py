"""
sengoku/creation.py
~~~~~~~~~~~~~~~~~~~
Builds new characters: capability stats derived from age and profession,
then clamped to the creation range.
"""

from __future__ import annotations

import logging
from enum import Enum

from sengoku.models import DEFAULT_RULES, Character, LifeRules
from utils.utils import clamp, generate_char_id

logger = logging.getLogger(__name__)

CAPABILITIES = ("strength", "agility", "intelligence", "charisma")
BASE_CAPABILITY = 10


class Profession(str, Enum):
    """Trades a common person can start with."""
    BLACKSMITH = "blacksmith"
    PEASANT = "peasant"
    MESSENGER = "messenger"
    NOVICE_MONK = "novice_monk"
    RONIN = "ronin"
    ARTISAN = "artisan"
    MERCHANT = "merchant"


PROFESSION_BONUSES: dict[Profession, dict[str, int]] = {
    Profession.BLACKSMITH: {"strength": 2, "intelligence": 1},
    Profession.PEASANT: {"strength": 1, "agility": 1},
    Profession.MESSENGER: {"agility": 3, "charisma": 1},
    Profession.NOVICE_MONK: {"intelligence": 2, "charisma": 1},
    Profession.RONIN: {"strength": 2, "agility": 2, "charisma": -1},
    Profession.ARTISAN: {"intelligence": 2, "agility": 1},
    Profession.MERCHANT: {"charisma": 3, "intelligence": 1},
}

# Upper age limit (exclusive) of each band and the bonuses it grants.
# Ages past the last band fall through to ELDER_BONUS.
AGE_BANDS: tuple[tuple[int, dict[str, int]], ...] = (
    (25, {"agility": 2, "strength": 1}),
    (40, {"strength": 3, "charisma": 1}),
    (55, {"intelligence": 2, "charisma": 2}),
)
ELDER_BONUS = {"intelligence": 3, "charisma": 1}


def _age_bonus(age: int) -> dict[str, int]:
    for upper, bonus in AGE_BANDS:
        if age < upper:
            return bonus
    return ELDER_BONUS


def calculate_stats(
    age: int,
    profession: Profession | str,
    rules: LifeRules = DEFAULT_RULES,
) -> dict[str, int]:
    """Return starting capability stats for the given age and profession."""
    stats = {name: BASE_CAPABILITY for name in CAPABILITIES}

    for name, bonus in _age_bonus(age).items():
        stats[name] += bonus

    try:
        profession = Profession(profession)
    except ValueError:
        logger.warning("Unknown profession '%s'. No profession bonus applied.", profession)
    else:
        for name, bonus in PROFESSION_BONUSES[profession].items():
            stats[name] += bonus

    return {
        name: clamp(value, rules.creation_stat_min, rules.creation_stat_max)
        for name, value in stats.items()
    }


def create_character(
    name: str,
    clan: str,
    profession: Profession | str = Profession.BLACKSMITH,
    user_id: str | None = None,
    travel_reason: str = "",
    rules: LifeRules = DEFAULT_RULES,
    char_id: str | None = None,
) -> Character:
    """
    Create a fresh character at the starting age.

    Everyone starts at the same age, so stats are derived from that age
    rather than any age the player might have asked for.
    """
    age = rules.starting_age
    profession_value = profession.value if isinstance(profession, Profession) else profession
    character = Character(
        id=char_id or generate_char_id(),
        user_id=user_id,
        name=name.strip(),
        clan=clan,
        profession=profession_value,
        health=rules.starting_health,
        honor=rules.starting_honor,
        gold=0,
        birth_year=rules.start_year - age,
        current_year=rules.start_year,
        age=age,
        region=clan,
        travel_reason=travel_reason,
        **calculate_stats(age, profession, rules),
    )
    logger.info("Created character %s (%s) of %s.", character.name, character.id, clan)
    return character
