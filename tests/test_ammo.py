"""
Tests for the ammunition catalog.
"""

import logging

import pytest

from ammo import AMMO_CATALOG, AmmoProfile, AmmoType, ammo_names, select_ammo


class TestCatalog:
    """Static profile table."""

    def test_six_entries_in_menu_order(self):
        assert ammo_names() == ["Shot", "AP Shot", "AP Shell", "HE Shell", "Mortar Stone", "Smoke Shell"]

    def test_shared_drag(self):
        assert {p.drag for p in AMMO_CATALOG.values()} == {0.01}

    def test_only_mortar_stone_has_low_gravity(self):
        low = [p.name for p in AMMO_CATALOG.values() if p.gravity != 10.0]
        assert low == ["Mortar Stone"]
        assert AMMO_CATALOG[AmmoType.MORTAR_STONE].gravity == 5.0

    @pytest.mark.parametrize("name", ["Shot", "AP Shot", "AP Shell", "HE Shell", "Mortar Stone", "Smoke Shell"])
    def test_select_by_name(self, name):
        assert select_ammo(name).name == name

    def test_unknown_falls_back_to_shot(self, caplog):
        with caplog.at_level(logging.WARNING, logger="ammo"):
            profile = select_ammo("Canister")
        assert profile is AMMO_CATALOG[AmmoType.SHOT]
        assert "Canister" in caplog.text


class TestProfileEquality:
    """Profiles compare by name only."""

    def test_equal_by_name(self):
        tuned = AmmoProfile(kind=AmmoType.HE_SHELL, drag=0.02, gravity=9.81)
        assert tuned == AMMO_CATALOG[AmmoType.HE_SHELL]
        assert hash(tuned) == hash(AMMO_CATALOG[AmmoType.HE_SHELL])

    def test_different_names_differ(self):
        assert AMMO_CATALOG[AmmoType.SHOT] != AMMO_CATALOG[AmmoType.AP_SHOT]

    def test_not_equal_to_other_types(self):
        assert AMMO_CATALOG[AmmoType.SHOT] != "Shot"
