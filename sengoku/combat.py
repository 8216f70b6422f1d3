"""
sengoku/combat.py
~~~~~~~~~~~~~~~~~
Street fights against ordinary (non-supernatural) opponents.

A ``CombatEncounter`` keeps its own log and ends either when the player flees
or when ``resolve`` rolls the outcome from the enemy's difficulty. Results
are narrative only; nothing here touches the character's stats.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

BASE_WIN_CHANCE = 0.6
WIN_CHANCE_PER_DIFFICULTY = 0.05


# ---------------------------------------------------------------------------
#  Content
# ---------------------------------------------------------------------------

class EnemyType(str, Enum):
    THUG = "thug"
    GUARD = "guard"
    RIVAL = "rival"
    SPIRIT = "spirit"


class CombatAction(str, Enum):
    ATTACK = "attack"
    DEFEND = "defend"
    FLEE = "flee"


class EnemyRewards(BaseModel):
    model_config = ConfigDict(frozen=True)

    experience: bool = False
    injury: bool = False
    social: bool = False


class Enemy(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: EnemyType
    description: str
    difficulty: int = Field(..., ge=1, le=10)
    rewards: EnemyRewards = Field(default_factory=EnemyRewards)

    @property
    def stars(self) -> int:
        """Difficulty shown as a 1–5 star rating."""
        return -(-self.difficulty // 2)


COMMON_ENEMIES: tuple[Enemy, ...] = (
    Enemy(
        id="thug_1",
        name="Local Bandit",
        type=EnemyType.THUG,
        description="An armed man with a desperate look. He probably needs money.",
        difficulty=2,
        rewards=EnemyRewards(experience=True, injury=True),
    ),
    Enemy(
        id="guard_1",
        name="City Guard",
        type=EnemyType.GUARD,
        description="A uniformed man just doing his job. He does not look for trouble.",
        difficulty=3,
        rewards=EnemyRewards(experience=True, social=True),
    ),
    Enemy(
        id="rival_1",
        name="Rival Blacksmith",
        type=EnemyType.RIVAL,
        description="A craftsman from the neighbouring village, eyeing you with professional hostility.",
        difficulty=4,
        rewards=EnemyRewards(experience=True, injury=True),
    ),
)


def get_enemy(enemy_id: str) -> Enemy | None:
    for enemy in COMMON_ENEMIES:
        if enemy.id == enemy_id:
            return enemy
    return None


def win_chance(enemy: Enemy) -> float:
    return max(0.0, BASE_WIN_CHANCE - enemy.difficulty * WIN_CHANCE_PER_DIFFICULTY)


# ---------------------------------------------------------------------------
#  Encounter
# ---------------------------------------------------------------------------

class CombatError(Exception):
    """Raised when acting in a fight that has already ended."""


class CombatResult(BaseModel):
    winner: Literal["player", "npc", "flee"]
    player_injured: bool = False
    player_gained_experience: bool = False
    description: str


class CombatEncounter:
    def __init__(self, enemy: Enemy, rng: random.Random | None = None) -> None:
        self.enemy = enemy
        self.rng = rng if rng is not None else random.Random()
        self.log: list[str] = [f"Combat started against {enemy.name}!", enemy.description]
        self.result: CombatResult | None = None

    @property
    def in_progress(self) -> bool:
        return self.result is None

    def perform(self, action: CombatAction | str) -> str:
        """Carry out one player action and return the log line it produced."""
        if not self.in_progress:
            raise CombatError(f"The fight against {self.enemy.name} is already over.")

        action = CombatAction(action)
        name = self.enemy.name

        if action is CombatAction.ATTACK:
            if self.rng.random() > 0.4:
                line = f"You attacked {name} and landed the blow!"
                if self.rng.random() > 0.7:
                    line += f" {name} looks wounded!"
            else:
                line = f"You attacked {name} but missed!"
                if self.rng.random() > 0.6:
                    line += " You suffered a shallow cut!"
        elif action is CombatAction.DEFEND:
            line = f"You take a defensive stance against {name}."
            if self.rng.random() > 0.5:
                line += " You blocked the enemy's attack!"
        else:
            if self.rng.random() > 0.3:
                line = f"You escaped from {name}!"
                self._end("flee", injured=False, gained_experience=False)
            else:
                line = f"{name} blocked your escape!"

        self.log.append(line)
        return line

    def resolve(self) -> CombatResult:
        """Settle the fight from the enemy's difficulty."""
        if not self.in_progress:
            raise CombatError(f"The fight against {self.enemy.name} is already over.")

        player_wins = self.rng.random() < win_chance(self.enemy)
        injured = player_wins and self.rng.random() > 0.5
        gained_experience = player_wins and self.enemy.rewards.experience
        return self._end("player" if player_wins else "npc", injured, gained_experience)

    def _end(self, winner: str, injured: bool, gained_experience: bool) -> CombatResult:
        name = self.enemy.name
        if winner == "flee":
            description = "You fled the fight. You escaped with your life, but not your honor."
        elif winner == "player":
            description = f"You defeated {name}!"
            if injured:
                description += " You were wounded in the fight."
            if gained_experience:
                description += " You learned something from the experience."
        else:
            description = f"You were defeated by {name}!"
            if injured:
                description += " You were hurt and needed help."

        self.result = CombatResult(
            winner=winner,
            player_injured=injured,
            player_gained_experience=gained_experience,
            description=description,
        )
        self.log.append(description)
        logger.debug("Combat against %s ended: %s", self.enemy.id, winner)
        return self.result


def fight(enemy: Enemy, rng: random.Random | None = None) -> CombatResult:
    """Start and immediately resolve a fight."""
    return CombatEncounter(enemy, rng).resolve()
