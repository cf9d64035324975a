"""Data models for the pelada organiser."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional

GAME_DURATION = timedelta(hours=2)


class DayOfWeek(Enum):
    domingo = 0
    segunda = 1
    terca = 2
    quarta = 3
    quinta = 4
    sexta = 5
    sabado = 6

    @classmethod
    def from_date(cls, d: date) -> "DayOfWeek":
        # date.weekday() is Monday=0; tokens are Sunday=0
        return cls((d.weekday() + 1) % 7)

    @classmethod
    def from_str(cls, s: str) -> "DayOfWeek":
        return cls[s.strip().lower()]


DAY_TOKENS = [d.name for d in DayOfWeek]


def format_date_to_id(d: date) -> str:
    """Format the calendar day of a date or datetime as YYYY-MM-DD."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


@dataclass(frozen=True)
class DaySetting:
    """One weekday entry of a group's weekly game template."""
    selected: bool = False
    time: str = ""


@dataclass(frozen=True)
class GameOccurrence:
    """One concrete instance of the recurring game."""
    start: datetime
    end: datetime

    @classmethod
    def starting_at(cls, start: datetime) -> "GameOccurrence":
        return cls(start=start, end=start + GAME_DURATION)

    @property
    def game_id(self) -> str:
        return format_date_to_id(self.start)


@dataclass(frozen=True)
class GameStatus:
    is_finished: bool
    is_confirmation_locked: bool
    is_within_grace_period: bool


@dataclass
class Player:
    """A group member as seen by the sorter and the rotation."""
    id: str
    display_name: str = ""
    rating: Optional[int] = 1
    subscription: str = "mensal"  # "mensal" or "avulso"
    took_equipment_turn: bool = False


@dataclass
class SortResult:
    teams: list[list[Player]] = field(default_factory=list)
    leftovers: list[Player] = field(default_factory=list)
