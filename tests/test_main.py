"""Tests for the command-line autoplay in main.py."""
from __future__ import annotations

from pathlib import Path

import pytest

import main
from sengoku.repository import JsonCharacterRepository


class TestRunMain:
    def test_plays_a_full_life(self, tmp_path: Path, config_dir: Path) -> None:
        save_dir = tmp_path / "saves"
        code = main.run_main(
            ["--name", "Kenshin", "--seed", "3", "--save-dir", str(save_dir), "--config-dir", str(config_dir)]
        )
        assert code == 0

        characters = JsonCharacterRepository(save_dir).list_characters()
        assert len(characters) == 1
        character = characters[0]
        assert character.name == "Kenshin"
        assert character.is_alive is False
        assert character.death_reason in ("old age", "illness", "accident", "poisoning", "wounds")
        assert 16 < character.age <= 80
        assert len(JsonCharacterRepository(save_dir).list_events(character.id)) >= 1

    def test_same_seed_same_life(self, tmp_path: Path, config_dir: Path) -> None:
        ages = []
        for run in ("a", "b"):
            save_dir = tmp_path / run
            main.run_main(["--seed", "11", "--save-dir", str(save_dir), "--config-dir", str(config_dir)])
            ages.append(JsonCharacterRepository(save_dir).list_characters()[0].age)
        assert ages[0] == ages[1]

    def test_missing_config(self, tmp_path: Path) -> None:
        code = main.run_main(["--config-dir", str(tmp_path / "nowhere"), "--save-dir", str(tmp_path / "saves")])
        assert code == 1

    def test_rejects_unknown_profession(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main.parse_args(["--profession", "ninja"])
