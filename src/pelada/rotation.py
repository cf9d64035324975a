"""Equipment duty rotation (who takes the bibs home after the game)."""

from datetime import datetime, time
from typing import Optional

from pelada.gamedate import game_day
from pelada.models import GameOccurrence, Player


def _rotation_order(players: list[Player]) -> list[Player]:
    return sorted(players, key=lambda p: p.display_name or "")


def next_equipment_manager(players: list[Player]) -> Optional[Player]:
    """First player by name who hasn't taken a turn, wrapping to the first."""
    ordered = _rotation_order(players)
    if not ordered:
        return None
    for p in ordered:
        if not p.took_equipment_turn:
            return p
    return ordered[0]


def advance_rotation(players: list[Player]) -> tuple[Optional[Player], dict[str, bool]]:
    """Record the current manager's turn.

    Returns (manager, updates) where updates maps player id to the new
    took_equipment_turn flag. Once everyone has had a turn the cycle restarts
    and every other player is cleared. Player objects are not modified.
    """
    manager = next_equipment_manager(players)
    if manager is None:
        return None, {}

    updates = {manager.id: True}
    remaining = [p for p in players
                 if not p.took_equipment_turn and p.id != manager.id]
    if not remaining:
        for p in players:
            if p.id != manager.id:
                updates[p.id] = False

    return manager, updates


def rotation_due(previous_game_id: Optional[str],
                 occurrence: Optional[GameOccurrence],
                 now: datetime) -> bool:
    """True when the resolver has moved on from a past game to a future one."""
    if not previous_game_id or occurrence is None:
        return False
    if previous_game_id == occurrence.game_id:
        return False
    previous_day = datetime.combine(game_day(previous_game_id), time.min,
                                    tzinfo=now.tzinfo)
    return previous_day < now < occurrence.start
