"""Presence confirmation and post-game goal entry rules."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pelada.gamedate import game_status
from pelada.models import GameOccurrence, Player

PAY_PER_GAME = "avulso"


@dataclass(frozen=True)
class PresenceDecision:
    allowed: bool
    reason: str = ""


def check_presence(occurrence: Optional[GameOccurrence], now: datetime,
                   player: Player, status: str = "confirmed",
                   allow_confirmation_with_debt: bool = False) -> PresenceDecision:
    """Decide whether a player may answer presence for the resolved game.

    status is "confirmed" or "declined"; declining is never blocked by the
    subscription rule.
    """
    if status not in ("confirmed", "declined"):
        raise ValueError(f"Unknown presence status: {status!r}")
    if occurrence is None:
        return PresenceDecision(False, "No game scheduled.")
    if game_status(occurrence, now).is_finished:
        return PresenceDecision(False, "This game has already finished.")
    if now > occurrence.start:
        return PresenceDecision(False, "The time to confirm presence for this game has passed.")
    if (status == "confirmed" and not allow_confirmation_with_debt
            and player.subscription == PAY_PER_GAME):
        return PresenceDecision(
            False, "Outstanding payments; contact the group manager."
        )
    return PresenceDecision(True)


def goals_card_state(occurrence: Optional[GameOccurrence], now: datetime,
                     goals_submitted: bool) -> dict:
    """State of the post-game goals card: visible, enabled, message."""
    if occurrence is None:
        return {"visible": False, "enabled": False,
                "message": "No game scheduled."}

    status = game_status(occurrence, now)
    if not status.is_finished:
        return {"visible": True, "enabled": False,
                "message": "Wait for the game to end to record your goals."}
    if not status.is_within_grace_period:
        return {"visible": True, "enabled": False,
                "message": "The goal entry period has closed."}
    if goals_submitted:
        return {"visible": True, "enabled": False,
                "message": "You already recorded your goals for this game."}
    return {"visible": True, "enabled": True,
            "message": "The game is over! Record your goals."}


def update_goal_total(previous_goals: Optional[int], new_goals: int,
                      total_goals: Optional[int]) -> int:
    """Replace one game's goal count and return the adjusted career total."""
    if new_goals < 0:
        raise ValueError(f"Goals cannot be negative, got {new_goals}")
    return (total_goals or 0) + new_goals - (previous_goals or 0)
