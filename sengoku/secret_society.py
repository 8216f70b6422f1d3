"""
sengoku/secret_society.py
~~~~~~~~~~~~~~~~~~~~~~~~~
Hidden callings a character can uncover through patient investigation.

Each path has numeric requirements checked against the character's occult
standing. Investigating an accessible path raises progress by a fixed step;
reaching 100 discovers it. The character keeps every discovery in
``discovered_secrets`` and the latest one in ``secret_path``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

from sengoku.repository import CharacterRepository

logger = logging.getLogger(__name__)

PROGRESS_STEP = 10
PROGRESS_COMPLETE = 100

# Standing assumed for an ordinary character with no recorded occult history.
COMMON_STANDING: dict[str, int] = {"perception": 3, "spiritual": 2, "social": 1, "honor": 10}


class PathType(str, Enum):
    YOKAI = "yokai"
    KAMI = "kami"
    ONMYOJI = "onmyoji"
    TSUKUMOGAMI = "tsukumogami"


class PathRequirements(BaseModel):
    model_config = ConfigDict(frozen=True)

    perception: int = 0
    spiritual: int = 0
    social: int = 0
    honor: int = 0
    # Narrative hints; not enforced.
    location: str | None = None
    time: str | None = None

    def numeric(self) -> dict[str, int]:
        return {
            "perception": self.perception,
            "spiritual": self.spiritual,
            "social": self.social,
            "honor": self.honor,
        }


class PathRewards(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    abilities: tuple[str, ...] = ()
    knowledge: tuple[str, ...] = ()


class SecretPath(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    type: PathType
    requirements: PathRequirements = Field(default_factory=PathRequirements)
    rewards: PathRewards


SECRET_PATHS: tuple[SecretPath, ...] = (
    SecretPath(
        id="yokai_hunter_path",
        name="Yokai Hunter",
        description=(
            "You begin to see patterns others miss. Tracks that move unnaturally, "
            "shadows that match nothing."
        ),
        type=PathType.YOKAI,
        requirements=PathRequirements(
            perception=3, spiritual=2, social=1, honor=10, location="forest_night", time="night"
        ),
        rewards=PathRewards(
            path="yokai_hunter",
            abilities=("Track Creatures", "Sense Supernatural Presence", "Special Weapons"),
            knowledge=("Yokai Weaknesses", "Creature Types", "Spiritual Weaknesses"),
        ),
    ),
    SecretPath(
        id="kami_shrine_path",
        name="Kami Priest",
        description=(
            "The spirits of nature begin to answer your prayers. You may learn to "
            "speak with beings others fear."
        ),
        type=PathType.KAMI,
        requirements=PathRequirements(
            perception=2, spiritual=5, social=3, honor=15, location="shrine", time="dawn"
        ),
        rewards=PathRewards(
            path="kami_shrine",
            abilities=("Spirit Communication", "Purifying Rituals", "Divine Protection"),
            knowledge=("Names of Spirits", "Sacred History", "Spiritual Weaknesses"),
        ),
    ),
    SecretPath(
        id="onmyoji_path",
        name="Onmyoji",
        description=(
            "You realise emotions shape the spirit world. Through discipline you "
            "may learn to bend that energy."
        ),
        type=PathType.ONMYOJI,
        requirements=PathRequirements(
            perception=4, spiritual=3, social=2, honor=20, location="temple", time="meditation"
        ),
        rewards=PathRewards(
            path="onmyoji",
            abilities=("Emotional Control", "Aura Reading", "Meditation Techniques"),
            knowledge=("Onmyodo Theory", "Spiritual Balance", "History of Emotions"),
        ),
    ),
    SecretPath(
        id="tsukumogami_path",
        name="Tsukumogami Monk",
        description=(
            "You learn that spirits can be contained, calmed and even released. "
            "A dangerous path that demands great discipline."
        ),
        type=PathType.TSUKUMOGAMI,
        requirements=PathRequirements(
            perception=5, spiritual=7, social=1, honor=25, location="isolated_temple", time="midnight"
        ),
        rewards=PathRewards(
            path="tsukumogami",
            abilities=("Spirit Containment", "Spirit Sealing", "Complex Rituals"),
            knowledge=("Spirit Seals", "Names of Demons", "History of the Tsukumogami"),
        ),
    ),
)


def get_path(path_id: str) -> SecretPath | None:
    for path in SECRET_PATHS:
        if path.id == path_id:
            return path
    return None


def can_access(path: SecretPath, standing: Mapping[str, int] | None = None) -> bool:
    """True when every numeric requirement is met by ``standing``."""
    standing = COMMON_STANDING if standing is None else standing
    return all(
        standing.get(key, 0) >= required
        for key, required in path.requirements.numeric().items()
    )


class SecretPathLockedError(Exception):
    pass


class SecretInvestigation:
    """Tracks investigation progress toward a single secret path at a time."""

    def __init__(self, character_id: str, repository: CharacterRepository) -> None:
        self.character_id = character_id
        self.repository = repository
        self.current: SecretPath | None = None
        self.progress = 0
        self.discovered: list[SecretPath] = []

        character = repository.get_character(character_id)
        known_ids = list(character.discovered_secrets)
        if character.secret_path and character.secret_path not in known_ids:
            known_ids.append(character.secret_path)
        for path_id in known_ids:
            path = get_path(path_id)
            if path is None:
                logger.warning("Character %s lists unknown secret path '%s'.", character_id, path_id)
            elif not self.is_discovered(path):
                self.discovered.append(path)

    def is_discovered(self, path: SecretPath) -> bool:
        return any(p.id == path.id for p in self.discovered)

    def start(self, path: SecretPath, standing: Mapping[str, int] | None = None) -> None:
        if not can_access(path, standing):
            raise SecretPathLockedError(f"You are not ready to follow the {path.name} path.")
        self.current = path
        self.progress = 0

    def abandon(self) -> None:
        self.current = None
        self.progress = 0

    def investigate(self) -> SecretPath | None:
        """Advance the current investigation; returns the path once discovered."""
        if self.current is None:
            raise ValueError("No secret path is being investigated.")

        self.progress = min(self.progress + PROGRESS_STEP, PROGRESS_COMPLETE)
        if self.progress < PROGRESS_COMPLETE:
            return None
        return self._discover(self.current)

    def _discover(self, path: SecretPath) -> SecretPath:
        known_ids = [p.id for p in self.discovered]
        if path.id not in known_ids:
            known_ids.append(path.id)
        self.repository.update_character(
            self.character_id, {"secret_path": path.id, "discovered_secrets": known_ids}
        )
        if not self.is_discovered(path):
            self.discovered.append(path)
        logger.info("Character %s discovered the %s path.", self.character_id, path.name)
        self.current = None
        self.progress = 0
        return path
