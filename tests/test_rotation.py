"""Tests for rotation.py — equipment duty rotation."""

from datetime import datetime, timedelta, timezone

from pelada.models import GameOccurrence, Player
from pelada.rotation import advance_rotation, next_equipment_manager, rotation_due


def _roster(**took):
    """_roster(Carla=True, Ana=False) -> players named after the keywords."""
    return [Player(id=name.lower(), display_name=name, took_equipment_turn=flag)
            for name, flag in took.items()]


class TestNextEquipmentManager:
    def test_first_by_name_without_turn(self):
        players = _roster(Carla=False, Ana=True, Bruno=False)
        assert next_equipment_manager(players).display_name == "Bruno"

    def test_wraps_to_first_when_everyone_took_a_turn(self):
        players = _roster(Carla=True, Ana=True, Bruno=True)
        assert next_equipment_manager(players).display_name == "Ana"

    def test_empty(self):
        assert next_equipment_manager([]) is None

    def test_missing_names_sort_first(self):
        players = [Player(id="x", display_name=""), Player(id="y", display_name="Ana")]
        assert next_equipment_manager(players).id == "x"


class TestAdvanceRotation:
    def test_marks_current_manager(self):
        players = _roster(Ana=False, Bruno=False, Carla=True)
        manager, updates = advance_rotation(players)
        assert manager.id == "ana"
        assert updates == {"ana": True}

    def test_last_turn_restarts_cycle(self):
        players = _roster(Ana=True, Bruno=True, Carla=False)
        manager, updates = advance_rotation(players)
        assert manager.id == "carla"
        assert updates == {"carla": True, "ana": False, "bruno": False}

    def test_everyone_done_wraps(self):
        players = _roster(Ana=True, Bruno=True, Carla=True)
        manager, updates = advance_rotation(players)
        assert manager.id == "ana"
        assert updates == {"ana": True, "bruno": False, "carla": False}

    def test_does_not_modify_players(self):
        players = _roster(Ana=False, Bruno=False)
        advance_rotation(players)
        assert not any(p.took_equipment_turn for p in players)

    def test_empty(self):
        assert advance_rotation([]) == (None, {})


class TestRotationDue:
    wednesday = GameOccurrence.starting_at(datetime(2026, 3, 11, 19, 30))

    def test_moved_to_next_game(self):
        assert rotation_due("2026-03-09", self.wednesday, datetime(2026, 3, 10, 12, 0))

    def test_same_game(self):
        assert not rotation_due("2026-03-11", self.wednesday, datetime(2026, 3, 10, 12, 0))

    def test_no_previous_game(self):
        assert not rotation_due(None, self.wednesday, datetime(2026, 3, 10, 12, 0))
        assert not rotation_due("", self.wednesday, datetime(2026, 3, 10, 12, 0))

    def test_no_current_game(self):
        assert not rotation_due("2026-03-09", None, datetime(2026, 3, 10, 12, 0))

    def test_new_game_already_started(self):
        assert not rotation_due("2026-03-09", self.wednesday, datetime(2026, 3, 11, 20, 0))

    def test_timezone_aware_now(self):
        brt = timezone(timedelta(hours=-3))
        wednesday = GameOccurrence.starting_at(datetime(2026, 3, 11, 19, 30, tzinfo=brt))
        assert rotation_due("2026-03-09", wednesday, datetime(2026, 3, 10, 12, 0, tzinfo=brt))
