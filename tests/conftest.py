"""Shared fixtures for the Sengoku Chronicles test suite."""
from __future__ import annotations

import json
import shutil
from collections import deque
from pathlib import Path
from typing import Any, Sequence

import pytest

from sengoku.models import Character
from sengoku.paths import CONFIG_DIR
from sengoku.repository import InMemoryCharacterRepository


class ScriptedRandom:
    """Random source that replays fixed draws.

    ``random()`` returns the queued values in order and then keeps returning
    ``default``; ``choice`` picks the queued indices, falling back to the
    first element.
    """

    def __init__(
        self,
        draws: Sequence[float] = (),
        picks: Sequence[int] = (),
        default: float = 0.99,
    ) -> None:
        self._draws = deque(draws)
        self._picks = deque(picks)
        self.default = default
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self._draws.popleft() if self._draws else self.default

    def choice(self, seq: Sequence[Any]) -> Any:
        return seq[self._picks.popleft() if self._picks else 0]

    def randrange(self, stop: int) -> int:
        return (self._picks.popleft() if self._picks else 0) % stop


@pytest.fixture
def scripted_rng():
    return ScriptedRandom


@pytest.fixture
def make_character():
    def _make(**overrides: Any) -> Character:
        data: dict[str, Any] = {
            "id": "char_test",
            "user_id": "user_1",
            "name": "Hanzo",
            "clan": "owari",
            "region": "owari",
            "profession": "blacksmith",
            "health": 100,
            "honor": 50,
            "gold": 0,
            "strength": 10,
            "agility": 10,
            "intelligence": 10,
            "charisma": 10,
            "birth_year": 1544,
            "current_year": 1560,
            "age": 16,
        }
        data.update(overrides)
        return Character(**data)

    return _make


@pytest.fixture
def repository() -> InMemoryCharacterRepository:
    return InMemoryCharacterRepository()


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """A private copy of the shipped config folder."""
    target = tmp_path / "config"
    shutil.copytree(CONFIG_DIR, target)
    return target


@pytest.fixture
def write_json():
    def _write(path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
