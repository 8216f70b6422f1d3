"""Tests for the in-memory and JSON character repositories."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from sengoku.models import GameEventRecord
from sengoku.repository import (
    CharacterNotFoundError,
    InMemoryCharacterRepository,
    JsonCharacterRepository,
    RepositoryError,
)


@pytest.fixture(params=["memory", "json"])
def repo(request: pytest.FixtureRequest, tmp_path: Path):
    if request.param == "memory":
        return InMemoryCharacterRepository()
    return JsonCharacterRepository(tmp_path / "saves")


def _record(character_id: str = "char_test", title: str = "Coming-of-Age Ceremony") -> GameEventRecord:
    return GameEventRecord(
        character_id=character_id,
        title=title,
        description="A test event",
        choices=["a", "b"],
        consequences=["a happened"],
        year=1560,
    )


class TestCharacterStorage:
    def test_add_and_get(self, repo, make_character) -> None:
        c = make_character()
        repo.add_character(c)
        loaded = repo.get_character(c.id)
        assert loaded.name == "Hanzo"
        assert loaded.strength == 10

    def test_duplicate_add_rejected(self, repo, make_character) -> None:
        repo.add_character(make_character())
        with pytest.raises(RepositoryError):
            repo.add_character(make_character())

    def test_missing_character(self, repo) -> None:
        with pytest.raises(CharacterNotFoundError) as exc_info:
            repo.get_character("char_nobody")
        assert exc_info.value.character_id == "char_nobody"

    def test_list_filters_by_user(self, repo, make_character) -> None:
        repo.add_character(make_character(id="char_a", user_id="u1"))
        repo.add_character(make_character(id="char_b", user_id="u2"))
        repo.add_character(make_character(id="char_c", user_id="u1"))
        assert {c.id for c in repo.list_characters("u1")} == {"char_a", "char_c"}
        assert len(repo.list_characters()) == 3


class TestUpdates:
    def test_partial_update(self, repo, make_character) -> None:
        repo.add_character(make_character())
        updated = repo.update_character("char_test", {"strength": 15, "age": 17})
        assert updated.strength == 15
        assert updated.age == 17
        assert updated.honor == 50
        assert repo.get_character("char_test").strength == 15

    def test_update_bumps_timestamp(self, repo, make_character) -> None:
        original = repo.add_character(make_character())
        updated = repo.update_character("char_test", {"gold": 5})
        assert updated.updated_at >= original.updated_at
        assert updated.created_at == original.created_at

    def test_update_missing_character(self, repo) -> None:
        with pytest.raises(CharacterNotFoundError):
            repo.update_character("char_nobody", {"gold": 1})

    @pytest.mark.parametrize("field", ["id", "created_at"])
    def test_protected_fields(self, repo, make_character, field: str) -> None:
        repo.add_character(make_character())
        with pytest.raises(RepositoryError):
            repo.update_character("char_test", {field: "x"})

    def test_unknown_field(self, repo, make_character) -> None:
        repo.add_character(make_character())
        with pytest.raises(RepositoryError):
            repo.update_character("char_test", {"luck": 3})

    def test_invalid_update_leaves_record_untouched(self, repo, make_character) -> None:
        repo.add_character(make_character())
        with pytest.raises(RepositoryError):
            repo.update_character("char_test", {"health": 500})
        with pytest.raises(RepositoryError):
            repo.update_character("char_test", {"is_alive": False})
        stored = repo.get_character("char_test")
        assert stored.health == 100
        assert stored.is_alive is True

    def test_death_fields_together(self, repo, make_character) -> None:
        repo.add_character(make_character())
        updated = repo.update_character("char_test", {"is_alive": False, "death_reason": "wounds"})
        assert updated.is_alive is False
        assert updated.death_reason == "wounds"


class TestHistory:
    def test_append_and_list(self, repo, make_character) -> None:
        repo.add_character(make_character())
        repo.append_event(_record(title="First"))
        repo.append_event(_record(title="Second"))
        assert [r.title for r in repo.list_events("char_test")] == ["First", "Second"]

    def test_empty_history(self, repo, make_character) -> None:
        repo.add_character(make_character())
        assert repo.list_events("char_test") == []

    def test_append_for_missing_character(self, repo) -> None:
        with pytest.raises(CharacterNotFoundError):
            repo.append_event(_record(character_id="char_nobody"))

    def test_list_for_missing_character(self, repo) -> None:
        with pytest.raises(CharacterNotFoundError):
            repo.list_events("char_nobody")


class TestJsonRepository:
    def test_files_on_disk(self, tmp_path: Path, make_character) -> None:
        repo = JsonCharacterRepository(tmp_path)
        repo.add_character(make_character())
        repo.append_event(_record())
        data = json.loads((tmp_path / "char_test.json").read_text(encoding="utf-8"))
        assert data["name"] == "Hanzo"
        assert (tmp_path / "char_test.history.jsonl").read_text(encoding="utf-8").count("\n") == 1
        assert not list(tmp_path.glob("*.tmp"))

    def test_survives_new_instance(self, tmp_path: Path, make_character) -> None:
        JsonCharacterRepository(tmp_path).add_character(make_character())
        assert JsonCharacterRepository(tmp_path).get_character("char_test").name == "Hanzo"

    @pytest.mark.parametrize("bad_id", ["../escape", "a/b", "a\\b", ""])
    def test_rejects_path_like_ids(self, tmp_path: Path, bad_id: str) -> None:
        with pytest.raises(RepositoryError):
            JsonCharacterRepository(tmp_path).get_character(bad_id)

    def test_corrupt_file(self, tmp_path: Path) -> None:
        (tmp_path / "char_bad.json").write_text("{not json", encoding="utf-8")
        repo = JsonCharacterRepository(tmp_path)
        with pytest.raises(RepositoryError):
            repo.get_character("char_bad")

    def test_list_skips_corrupt_files(
        self, tmp_path: Path, make_character, caplog: pytest.LogCaptureFixture
    ) -> None:
        repo = JsonCharacterRepository(tmp_path)
        repo.add_character(make_character())
        (tmp_path / "char_bad.json").write_text("{not json", encoding="utf-8")
        assert [c.id for c in repo.list_characters()] == ["char_test"]
        assert "char_bad.json" in caplog.text
