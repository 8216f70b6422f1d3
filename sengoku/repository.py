"""
sengoku/repository.py
~~~~~~~~~~~~~~~~~~~~~
Character storage behind a narrow interface.

Two implementations are provided:
  - InMemoryCharacterRepository: dict-backed, used by tests
  - JsonCharacterRepository: one ``<id>.json`` file per character plus
    an append-only ``<id>.history.jsonl`` event log

Writes are all-or-nothing per call. Callers that need several fields changed
together pass them in a single ``update_character`` call.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from sengoku.models import Character, GameEventRecord, _utcnow

logger = logging.getLogger(__name__)

# Fields the store owns; callers may not overwrite them through updates.
_PROTECTED_FIELDS = frozenset({"id", "created_at"})


# ---------------------------------------------------------------------------
#  Errors
# ---------------------------------------------------------------------------

class RepositoryError(Exception):
    """A read or write against the character store failed."""


class CharacterNotFoundError(RepositoryError):
    def __init__(self, character_id: str) -> None:
        super().__init__(f"Character not found: {character_id}")
        self.character_id = character_id


# ---------------------------------------------------------------------------
#  Interface
# ---------------------------------------------------------------------------

class CharacterRepository(ABC):
    """Read/update contract for character records and their history."""

    @abstractmethod
    def add_character(self, character: Character) -> Character:
        pass

    @abstractmethod
    def get_character(self, character_id: str) -> Character:
        """Return the stored character or raise CharacterNotFoundError."""
        pass

    @abstractmethod
    def list_characters(self, user_id: str | None = None) -> list[Character]:
        pass

    @abstractmethod
    def update_character(self, character_id: str, updates: dict[str, Any]) -> Character:
        """
        Apply a partial update and return the stored result.

        Raises:
            CharacterNotFoundError: no character with that id.
            RepositoryError: the update is invalid or could not be written.
        """
        pass

    @abstractmethod
    def append_event(self, record: GameEventRecord) -> None:
        pass

    @abstractmethod
    def list_events(self, character_id: str) -> list[GameEventRecord]:
        pass

    # ------------------------------------------------------------------
    #  Shared helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _merge(current: Character, updates: dict[str, Any]) -> Character:
        """Validate ``updates`` against ``current`` and return the merged record."""
        forbidden = _PROTECTED_FIELDS.intersection(updates)
        if forbidden:
            raise RepositoryError(f"Cannot update protected fields: {', '.join(sorted(forbidden))}")

        unknown = set(updates) - set(Character.model_fields)
        if unknown:
            raise RepositoryError(f"Unknown character fields: {', '.join(sorted(unknown))}")

        data = current.model_dump()
        data.update(updates)
        data["updated_at"] = _utcnow()
        try:
            return Character.model_validate(data)
        except ValidationError as exc:
            raise RepositoryError(f"Invalid update for character {current.id}: {exc}") from exc


# ---------------------------------------------------------------------------
#  In-memory implementation
# ---------------------------------------------------------------------------

class InMemoryCharacterRepository(CharacterRepository):
    def __init__(self) -> None:
        self._characters: dict[str, Character] = {}
        self._events: dict[str, list[GameEventRecord]] = {}

    def add_character(self, character: Character) -> Character:
        if character.id in self._characters:
            raise RepositoryError(f"Character already exists: {character.id}")
        self._characters[character.id] = character
        return character

    def get_character(self, character_id: str) -> Character:
        try:
            return self._characters[character_id]
        except KeyError:
            raise CharacterNotFoundError(character_id) from None

    def list_characters(self, user_id: str | None = None) -> list[Character]:
        return [
            c for c in self._characters.values()
            if user_id is None or c.user_id == user_id
        ]

    def update_character(self, character_id: str, updates: dict[str, Any]) -> Character:
        merged = self._merge(self.get_character(character_id), updates)
        self._characters[character_id] = merged
        return merged

    def append_event(self, record: GameEventRecord) -> None:
        self.get_character(record.character_id)
        self._events.setdefault(record.character_id, []).append(record)

    def list_events(self, character_id: str) -> list[GameEventRecord]:
        self.get_character(character_id)
        return list(self._events.get(character_id, []))


# ---------------------------------------------------------------------------
#  JSON file implementation
# ---------------------------------------------------------------------------

class JsonCharacterRepository(CharacterRepository):
    """Stores characters as UTF-8 JSON files inside ``save_dir``."""

    def __init__(self, save_dir: str | Path) -> None:
        self._dir = Path(save_dir)
        self._dir.mkdir(parents=True, exist_ok=True)

    def _character_path(self, character_id: str) -> Path:
        if not character_id or any(sep in character_id for sep in ("/", "\\", "..")):
            raise RepositoryError(f"Invalid character id: {character_id!r}")
        return self._dir / f"{character_id}.json"

    def _history_path(self, character_id: str) -> Path:
        return self._dir / f"{character_id}.history.jsonl"

    def _write(self, character: Character) -> None:
        path = self._character_path(character.id)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(character.model_dump(mode="json"), f, indent=4, ensure_ascii=False)
            tmp_path.replace(path)
        except OSError as exc:
            logger.error("Failed to write character %s: %s", character.id, exc)
            raise RepositoryError(f"Could not save character {character.id}: {exc}") from exc

    def add_character(self, character: Character) -> Character:
        if self._character_path(character.id).exists():
            raise RepositoryError(f"Character already exists: {character.id}")
        self._write(character)
        return character

    def get_character(self, character_id: str) -> Character:
        path = self._character_path(character_id)
        if not path.exists():
            raise CharacterNotFoundError(character_id)
        try:
            with open(path, encoding="utf-8") as f:
                return Character.model_validate(json.load(f))
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise RepositoryError(f"Could not read character {character_id}: {exc}") from exc

    def list_characters(self, user_id: str | None = None) -> list[Character]:
        characters = []
        for path in sorted(self._dir.glob("*.json")):
            try:
                character = self.get_character(path.stem)
            except RepositoryError as exc:
                logger.warning("Skipping unreadable save file %s: %s", path.name, exc)
                continue
            if user_id is None or character.user_id == user_id:
                characters.append(character)
        return characters

    def update_character(self, character_id: str, updates: dict[str, Any]) -> Character:
        merged = self._merge(self.get_character(character_id), updates)
        self._write(merged)
        return merged

    def append_event(self, record: GameEventRecord) -> None:
        if not self._character_path(record.character_id).exists():
            raise CharacterNotFoundError(record.character_id)
        try:
            with open(self._history_path(record.character_id), "a", encoding="utf-8") as f:
                f.write(record.model_dump_json() + "\n")
        except OSError as exc:
            logger.error("Failed to append history for %s: %s", record.character_id, exc)
            raise RepositoryError(f"Could not append event for {record.character_id}: {exc}") from exc

    def list_events(self, character_id: str) -> list[GameEventRecord]:
        if not self._character_path(character_id).exists():
            raise CharacterNotFoundError(character_id)
        path = self._history_path(character_id)
        if not path.exists():
            return []
        lines = path.read_text(encoding="utf-8").splitlines()
        return [GameEventRecord.model_validate_json(line) for line in lines if line.strip()]
