"""Tests for sengoku.creation."""
from __future__ import annotations

import pytest

from sengoku.creation import Profession, calculate_stats, create_character
from sengoku.models import LifeRules


class TestCalculateStats:
    def test_young_blacksmith(self) -> None:
        stats = calculate_stats(16, Profession.BLACKSMITH)
        assert stats == {"strength": 13, "agility": 12, "intelligence": 11, "charisma": 10}

    def test_profession_accepts_plain_string(self) -> None:
        assert calculate_stats(16, "merchant") == calculate_stats(16, Profession.MERCHANT)

    def test_unknown_profession_gets_age_bonus_only(self, caplog: pytest.LogCaptureFixture) -> None:
        stats = calculate_stats(30, "astronaut")
        assert stats == {"strength": 13, "agility": 10, "intelligence": 10, "charisma": 11}
        assert "Unknown profession" in caplog.text

    def test_elder_band(self) -> None:
        stats = calculate_stats(60, Profession.NOVICE_MONK)
        assert stats["intelligence"] == 15
        assert stats["charisma"] == 12

    @pytest.mark.parametrize("profession", list(Profession))
    @pytest.mark.parametrize("age", [0, 16, 24, 25, 39, 40, 54, 55, 90])
    def test_stats_stay_in_creation_range(self, age: int, profession: Profession) -> None:
        for value in calculate_stats(age, profession).values():
            assert 5 <= value <= 20

    def test_custom_range_clamps(self) -> None:
        rules = LifeRules(creation_stat_min=11, creation_stat_max=12)
        stats = calculate_stats(16, Profession.RONIN, rules)
        assert stats == {"strength": 12, "agility": 12, "intelligence": 11, "charisma": 11}


class TestCreateCharacter:
    def test_defaults(self) -> None:
        c = create_character("  Hanzo ", "owari")
        assert c.name == "Hanzo"
        assert c.clan == "owari"
        assert c.region == "owari"
        assert c.profession == "blacksmith"
        assert c.age == 16
        assert c.current_year == 1560
        assert c.birth_year == 1544
        assert c.health == 100
        assert c.honor == 50
        assert c.gold == 0
        assert c.is_alive is True
        assert c.death_reason is None
        assert c.id.startswith("char_")

    def test_uses_rules(self) -> None:
        rules = LifeRules(starting_age=20, start_year=1570, starting_honor=70)
        c = create_character("Oichi", "mino", Profession.MERCHANT, user_id="u9", rules=rules)
        assert c.age == 20
        assert c.birth_year == 1550
        assert c.honor == 70
        assert c.user_id == "u9"
        assert c.profession == "merchant"

    def test_explicit_id(self) -> None:
        assert create_character("Hanzo", "owari", char_id="char_fixed").id == "char_fixed"

    def test_ids_are_unique(self) -> None:
        ids = {create_character("Hanzo", "owari").id for _ in range(20)}
        assert len(ids) == 20
