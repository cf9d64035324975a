"""Resolve which occurrence of the weekly game is current for the pelada organiser.

A group plays on one or more weekdays at fixed times. Given "now", the
resolver looks one week back and two weeks ahead, and returns either the most
recent game (while it is still inside its grace period, so presence and goals
can still be entered) or the next upcoming one.
"""

import re
from collections.abc import Mapping
from datetime import date, datetime, time, timedelta
from typing import Optional

from pelada.models import DayOfWeek, DaySetting, GameOccurrence, GameStatus
from pelada.models import format_date_to_id  # noqa: F401  (re-exported)

LOOKBACK_DAYS = 7
LOOKAHEAD_DAYS = 13
DEFAULT_GRACE_HOURS = 24
CONFIRMATION_WINDOW = timedelta(hours=24)

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_game_time(s) -> Optional[time]:
    """Parse a 24-hour 'HH:MM' string, returning None when it is unusable."""
    if not isinstance(s, str):
        return None
    m = _HHMM.match(s.strip())
    if not m:
        return None
    h, mi = int(m.group(1)), int(m.group(2))
    if h > 23 or mi > 59:
        return None
    return time(h, mi)


def _selected_time(setting) -> Optional[time]:
    """Game time for a day setting, or None if the day doesn't count as selected."""
    if isinstance(setting, DaySetting):
        selected, raw_time = setting.selected, setting.time
    elif isinstance(setting, Mapping):
        selected, raw_time = setting.get("selected"), setting.get("time")
    else:
        return None
    if selected is not True:
        return None
    return parse_game_time(raw_time)


def candidate_occurrences(schedule, now: datetime) -> list[GameOccurrence]:
    """All occurrences on the 21 calendar days around now, ascending by start."""
    if not isinstance(schedule, Mapping):
        return []

    times_by_day: dict[DayOfWeek, time] = {}
    for token, setting in schedule.items():
        if not isinstance(token, str) or token not in DayOfWeek.__members__:
            continue
        t = _selected_time(setting)
        if t is not None:
            times_by_day[DayOfWeek[token]] = t

    if not times_by_day:
        return []

    today = now.date()
    occurrences = []
    for offset in range(-LOOKBACK_DAYS, LOOKAHEAD_DAYS + 1):
        d = today + timedelta(days=offset)
        t = times_by_day.get(DayOfWeek.from_date(d))
        if t is None:
            continue
        start = datetime.combine(d, t, tzinfo=now.tzinfo)
        occurrences.append(GameOccurrence.starting_at(start))

    occurrences.sort(key=lambda o: o.start)
    return occurrences


def compute_grace_period(past_end: datetime,
                         next_start: Optional[datetime]) -> float:
    """Hours after past_end during which the past game stays active.

    The default 24h window is cut short when the next game starts sooner,
    ending one hour before it (never negative).
    """
    if next_start is None:
        return float(DEFAULT_GRACE_HOURS)
    hours_until_next = (next_start - past_end).total_seconds() / 3600
    if hours_until_next < DEFAULT_GRACE_HOURS:
        return max(0.0, hours_until_next - 1)
    return float(DEFAULT_GRACE_HOURS)


def resolve_game_date(schedule, now: datetime) -> Optional[GameOccurrence]:
    """Return the active (in grace) or next game occurrence, or None."""
    candidates = candidate_occurrences(schedule, now)
    past = [o for o in candidates if o.start <= now]
    future = [o for o in candidates if o.start > now]

    most_recent_past = past[-1] if past else None
    next_future = future[0] if future else None

    if most_recent_past is not None:
        grace_hours = compute_grace_period(
            most_recent_past.end,
            next_future.start if next_future else None,
        )
        grace_end = most_recent_past.end + timedelta(hours=grace_hours)
        if now < grace_end:
            return most_recent_past

    return next_future


def game_status(occurrence: GameOccurrence, now: datetime) -> GameStatus:
    """Derived flags that gate presence confirmation and goal entry."""
    window_end = occurrence.end + CONFIRMATION_WINDOW
    return GameStatus(
        is_finished=now > occurrence.end,
        is_confirmation_locked=now > window_end,
        is_within_grace_period=occurrence.end < now < window_end,
    )


def game_day(game_id: str) -> date:
    """Inverse of format_date_to_id."""
    parts = game_id.strip().split("-")
    return date(int(parts[0]), int(parts[1]), int(parts[2]))
