"""Tests for sengoku.secret_society."""
from __future__ import annotations

import pytest

from sengoku.repository import RepositoryError
from sengoku.secret_society import (
    SECRET_PATHS,
    SecretInvestigation,
    SecretPathLockedError,
    can_access,
    get_path,
)


@pytest.fixture
def stored_character(repository, make_character):
    return repository.add_character(make_character())


class TestAccess:
    def test_common_standing_opens_only_the_hunter_path(self) -> None:
        assert [p.id for p in SECRET_PATHS if can_access(p)] == ["yokai_hunter_path"]

    def test_custom_standing(self) -> None:
        standing = {"perception": 5, "spiritual": 7, "social": 3, "honor": 25}
        assert all(can_access(p, standing) for p in SECRET_PATHS)

    def test_missing_keys_count_as_zero(self) -> None:
        assert can_access(get_path("yokai_hunter_path"), {"perception": 9}) is False

    def test_unknown_path(self) -> None:
        assert get_path("ninja_path") is None


class TestInvestigation:
    def test_locked_path(self, repository, stored_character) -> None:
        investigation = SecretInvestigation("char_test", repository)
        with pytest.raises(SecretPathLockedError):
            investigation.start(get_path("tsukumogami_path"))

    def test_discovered_on_tenth_step(self, repository, stored_character) -> None:
        investigation = SecretInvestigation("char_test", repository)
        path = get_path("yokai_hunter_path")
        investigation.start(path)

        for _ in range(9):
            assert investigation.investigate() is None
        assert investigation.progress == 90

        assert investigation.investigate() == path
        assert investigation.is_discovered(path)
        assert investigation.current is None
        assert investigation.progress == 0
        assert repository.get_character("char_test").secret_path == "yokai_hunter_path"

    def test_investigate_without_start(self, repository, stored_character) -> None:
        with pytest.raises(ValueError):
            SecretInvestigation("char_test", repository).investigate()

    def test_abandon_resets(self, repository, stored_character) -> None:
        investigation = SecretInvestigation("char_test", repository)
        investigation.start(get_path("yokai_hunter_path"))
        investigation.investigate()
        investigation.abandon()
        assert investigation.current is None
        assert investigation.progress == 0

    def test_known_path_is_loaded(self, repository, make_character) -> None:
        repository.add_character(make_character(secret_path="onmyoji_path"))
        investigation = SecretInvestigation("char_test", repository)
        assert investigation.is_discovered(get_path("onmyoji_path"))

    def test_failed_write_keeps_progress(self, repository, stored_character, monkeypatch) -> None:
        investigation = SecretInvestigation("char_test", repository)
        investigation.start(get_path("yokai_hunter_path"))
        for _ in range(9):
            investigation.investigate()

        def refuse(*args, **kwargs):
            raise RepositoryError("offline")

        monkeypatch.setattr(repository, "update_character", refuse)
        with pytest.raises(RepositoryError):
            investigation.investigate()
        assert investigation.progress == 100
        assert investigation.current is not None
        assert investigation.discovered == []


class TestDiscoveryHistory:
    SEASONED = {"perception": 5, "spiritual": 7, "social": 3, "honor": 25}

    def _complete(self, investigation: SecretInvestigation, path_id: str) -> None:
        investigation.start(get_path(path_id), self.SEASONED)
        for _ in range(10):
            investigation.investigate()

    def test_two_discoveries_survive_reload(self, repository, stored_character) -> None:
        investigation = SecretInvestigation("char_test", repository)
        self._complete(investigation, "yokai_hunter_path")
        self._complete(investigation, "kami_shrine_path")

        stored = repository.get_character("char_test")
        assert stored.secret_path == "kami_shrine_path"
        assert stored.discovered_secrets == ["yokai_hunter_path", "kami_shrine_path"]

        reloaded = SecretInvestigation("char_test", repository)
        assert [p.id for p in reloaded.discovered] == ["yokai_hunter_path", "kami_shrine_path"]

    def test_rediscovery_is_not_duplicated(self, repository, stored_character) -> None:
        investigation = SecretInvestigation("char_test", repository)
        self._complete(investigation, "onmyoji_path")
        self._complete(investigation, "onmyoji_path")
        assert repository.get_character("char_test").discovered_secrets == ["onmyoji_path"]

    def test_unknown_stored_path_is_skipped(
        self, repository, make_character, caplog: pytest.LogCaptureFixture
    ) -> None:
        repository.add_character(make_character(discovered_secrets=["ninja_path", "onmyoji_path"]))
        investigation = SecretInvestigation("char_test", repository)
        assert [p.id for p in investigation.discovered] == ["onmyoji_path"]
        assert "ninja_path" in caplog.text
