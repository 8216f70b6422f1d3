"""
sengoku/game.py
~~~~~~~~~~~~~~~
Turn orchestration for a single character.

``LifeSession`` owns the in-memory copy of a character and is the only place
that talks to the repository. Every action follows the same policy: compute
the next state, write it, and only then replace the in-memory copy. A failed
write raises ``PersistenceError`` and leaves the session exactly as it was.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from sengoku import age_events
from sengoku.life import MONTHS_PER_YEAR, advance_time, apply_choice, check_death, current_time
from sengoku.models import (
    DEFAULT_RULES,
    AgeEvent,
    Character,
    Choice,
    GameEventRecord,
    LifeRules,
    TimeSnapshot,
)
from sengoku.repository import CharacterRepository, RepositoryError
from sengoku.travel import MapLocation, travel

logger = logging.getLogger(__name__)

# Fields written back after a choice or a time step.
_PROGRESS_FIELDS = (
    "health", "honor", "gold", "strength", "agility", "intelligence", "charisma",
    "age", "current_year", "is_alive", "death_reason",
)


# ---------------------------------------------------------------------------
#  Errors
# ---------------------------------------------------------------------------

class GameError(Exception):
    """Base class for actions the session refuses or cannot complete."""


class CharacterDeceasedError(GameError):
    def __init__(self, character: Character) -> None:
        super().__init__(
            f"{character.name} died of {character.death_reason} at age {character.age}; "
            "their story is over."
        )


class NoPendingEventError(GameError):
    pass


class InvalidChoiceError(GameError):
    pass


class EventPendingError(GameError):
    """Time cannot pass while an age event is waiting for an answer."""


class PersistenceError(GameError):
    """The repository rejected a write; the named operation was not applied."""

    def __init__(self, operation: str, cause: Exception) -> None:
        super().__init__(f"Error {operation}: {cause}")
        self.operation = operation


# ---------------------------------------------------------------------------
#  Results
# ---------------------------------------------------------------------------

@dataclass
class TurnResult:
    """What happened during one player action."""
    character: Character
    log: list[str] = field(default_factory=list)
    died: bool = False
    death_reason: str | None = None
    next_event: AgeEvent | None = None


# ---------------------------------------------------------------------------
#  Session
# ---------------------------------------------------------------------------

class LifeSession:
    def __init__(
        self,
        character: Character,
        repository: CharacterRepository,
        rng: random.Random | None = None,
        rules: LifeRules | None = None,
    ) -> None:
        self.character = character
        self.repository = repository
        self.rng = rng if rng is not None else random.Random()
        self.rules = rules or DEFAULT_RULES
        self.game_log: list[str] = []

    @classmethod
    def load(
        cls,
        character_id: str,
        repository: CharacterRepository,
        rng: random.Random | None = None,
        rules: LifeRules | None = None,
    ) -> LifeSession:
        return cls(repository.get_character(character_id), repository, rng=rng, rules=rules)

    # ------------------------------------------------------------------
    #  Queries
    # ------------------------------------------------------------------

    @property
    def time(self) -> TimeSnapshot:
        return current_time(self.character)

    def pending_event(self) -> AgeEvent | None:
        """
        The event waiting at the character's current age.

        Answering an event always moves the stored age on (or ends the
        life), so the stored character alone says whether it is still open.
        """
        if not self.character.is_alive:
            return None
        events = age_events.lookup(self.character.age)
        return events[0] if events else None

    # ------------------------------------------------------------------
    #  Actions
    # ------------------------------------------------------------------

    def choose(self, choice_index: int) -> TurnResult:
        """
        Resolve the pending event with the choice at ``choice_index``.

        If the character survives, the clock then moves forward one year.
        The choice, the death check and the year are written together.
        """
        self._ensure_alive()
        event = self.pending_event()
        if event is None:
            raise NoPendingEventError(f"No event pending at age {self.character.age}.")
        if not 0 <= choice_index < len(event.choices):
            raise InvalidChoiceError(
                f"Choice {choice_index} is out of range for '{event.title}' "
                f"({len(event.choices)} options)."
            )
        choice = event.choices[choice_index]
        year = self.character.current_year

        updated = self._settle(apply_choice(self.character, choice))
        if updated.is_alive:
            updated = self._age(updated, MONTHS_PER_YEAR)

        self._commit(updated, "saving")
        self._record_event(event, choice, year)

        result = TurnResult(character=self.character)
        result.log.extend(self._log_lines(
            f"{year} - {event.title}",
            f"Your choice: {choice.text}",
            choice.consequence,
        ))
        self._finish_turn(result)
        return result

    def advance_year(self, months: int = 12) -> TurnResult:
        """Let time pass, then run the death check on the older character."""
        self._ensure_alive()
        event = self.pending_event()
        if event is not None:
            raise EventPendingError(f"'{event.title}' must be answered before time can pass.")

        self._commit(self._age(self.character, months), "advancing time")
        result = TurnResult(character=self.character)
        self._finish_turn(result)
        return result

    def travel(self, location: MapLocation) -> TurnResult:
        """Move to ``location``; raises TravelError when the region is locked."""
        self._ensure_alive()
        moved = travel(self.character, location)
        self._commit(moved, "travelling", fields=("current_location", "region"))
        return TurnResult(
            character=self.character,
            log=self._log_lines(f"You travelled to {location.name}."),
        )

    # ------------------------------------------------------------------
    #  Internals
    # ------------------------------------------------------------------

    def _ensure_alive(self) -> None:
        if not self.character.is_alive:
            raise CharacterDeceasedError(self.character)

    def _settle(self, character: Character) -> Character:
        """Run the death check and fold its verdict into the character."""
        verdict = check_death(character, self.rng, self.rules)
        if verdict.is_dead and character.is_alive:
            return character.model_copy(update={"is_alive": False, "death_reason": verdict.reason})
        return character

    def _age(self, character: Character, months: int) -> Character:
        """
        Advance the clock, then roll for death only if a whole year went by.

        ``advance_time`` handles the natural ceiling first, so a character
        who reaches it dies of old age without a random draw.
        """
        aged = advance_time(character, months, self.rules)
        if aged.is_alive and aged.age != character.age:
            return self._settle(aged)
        return aged

    def _finish_turn(self, result: TurnResult) -> None:
        character = self.character
        if not character.is_alive:
            result.died = True
            result.death_reason = character.death_reason
            result.log.extend(self._log_lines(
                f"{character.name} died of {character.death_reason} at age {character.age}."
            ))
            logger.info(
                "Character %s died of %s at age %d.",
                character.id, character.death_reason, character.age,
            )
            return

        snapshot = self.time
        result.log.extend(self._log_lines(
            f"{snapshot.year} ({snapshot.season}): {character.name} is now {character.age}."
        ))
        result.next_event = self.pending_event()

    def _commit(
        self,
        updated: Character,
        operation: str,
        fields: tuple[str, ...] = _PROGRESS_FIELDS,
    ) -> None:
        updates = {name: getattr(updated, name) for name in fields}
        try:
            self.character = self.repository.update_character(self.character.id, updates)
        except RepositoryError as exc:
            logger.error("Error %s for character %s: %s", operation, self.character.id, exc)
            raise PersistenceError(operation, exc) from exc

    def _record_event(self, event: AgeEvent, choice: Choice, year: int) -> None:
        record = GameEventRecord(
            character_id=self.character.id,
            title=event.title,
            description=event.description,
            choices=[c.text for c in event.choices],
            consequences=[choice.consequence],
            year=year,
        )
        try:
            self.repository.append_event(record)
        except RepositoryError as exc:
            # The character update has already landed at this point.
            logger.warning("Could not record '%s' for %s: %s", event.title, self.character.id, exc)

    def _log_lines(self, *lines: str) -> list[str]:
        self.game_log.extend(lines)
        return list(lines)
