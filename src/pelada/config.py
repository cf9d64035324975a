"""Config loading and validation for the pelada organiser."""

from pathlib import Path

import yaml

from pelada.gamedate import parse_game_time
from pelada.models import DAY_TOKENS, DaySetting, DayOfWeek, Player
from pelada.sorter import MAX_RATING, MIN_RATING

DEFAULT_PLAYERS_PER_TEAM = 5
SUBSCRIPTIONS = ("mensal", "avulso")


def _time_value(value) -> str:
    """Normalise a YAML time value to an 'HH:MM' string.

    YAML 1.1 reads an unquoted 20:00 as the sexagesimal integer 1200.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        h, m = divmod(value, 60)
        return f"{h:02d}:{m:02d}"
    if value is None:
        return ""
    return str(value).strip()


def parse_game_days(raw: dict | None) -> tuple[dict[str, DaySetting], list[str]]:
    """Build a weekly schedule from the YAML game_days mapping.

    Every token is present in the result. Selected days without a usable
    HH:MM time are kept as given (the resolver skips them) and reported.
    Returns (schedule, warnings).
    """
    warnings = []
    schedule = {token: DaySetting() for token in DAY_TOKENS}

    for key, setting in (raw or {}).items():
        try:
            token = DayOfWeek.from_str(str(key)).name
        except KeyError:
            warnings.append(f"Unknown game day '{key}' ignored")
            continue
        if not isinstance(setting, dict):
            warnings.append(f"Game day '{token}' is not a mapping, treated as unselected")
            continue
        selected = bool(setting.get("selected", False))
        time_str = _time_value(setting.get("time"))
        if selected and parse_game_time(time_str) is None:
            warnings.append(f"Game day '{token}' has invalid time '{time_str}', it will be skipped")
        schedule[token] = DaySetting(selected=selected, time=time_str)

    return schedule, warnings


def parse_player(raw: dict) -> tuple[Player, list[str]]:
    warnings = []
    pid = str(raw["id"])
    name = str(raw.get("name", pid))

    rating = raw.get("rating", MIN_RATING)
    if isinstance(rating, bool) or not isinstance(rating, int) or not (
            MIN_RATING <= rating <= MAX_RATING):
        warnings.append(f"Player {pid} has invalid rating {rating!r}, using {MIN_RATING}")
        rating = MIN_RATING

    subscription = str(raw.get("subscription", "mensal")).lower()
    if subscription not in SUBSCRIPTIONS:
        warnings.append(f"Player {pid} has unknown subscription '{subscription}', using mensal")
        subscription = "mensal"

    return Player(
        id=pid,
        display_name=name,
        rating=rating,
        subscription=subscription,
        took_equipment_turn=bool(raw.get("took_equipment_turn", False)),
    ), warnings


def load_config(path: str | Path) -> dict:
    """Load and validate config YAML, returning structured data.

    Returns dict with:
    - group: {name, players_per_team, spread_top_rated,
              allow_confirmation_with_debt, equipment_rotation}
    - schedule: dict[day token -> DaySetting]
    - players: dict[id -> Player], in file order
    - confirmed: list of player ids confirmed for the next game
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    errors = []

    # Group
    graw = raw.get("group", {}) or {}
    group = {
        "name": graw.get("name", ""),
        "players_per_team": graw.get("players_per_team", DEFAULT_PLAYERS_PER_TEAM),
        "spread_top_rated": bool(graw.get("spread_top_rated", False)),
        "allow_confirmation_with_debt": bool(
            graw.get("allow_confirmation_with_debt", False)),
        "equipment_rotation": bool(graw.get("equipment_rotation", False)),
    }
    if not isinstance(group["players_per_team"], int) or group["players_per_team"] < 1:
        errors.append(
            f"players_per_team must be a positive integer, got "
            f"{group['players_per_team']!r}; using {DEFAULT_PLAYERS_PER_TEAM}"
        )
        group["players_per_team"] = DEFAULT_PLAYERS_PER_TEAM

    # Schedule
    schedule, day_warnings = parse_game_days(raw.get("game_days"))
    for w in day_warnings:
        print(f"Warning: {w}")

    # Players
    players: dict[str, Player] = {}
    for pdata in raw.get("players", []) or []:
        if not isinstance(pdata, dict) or "id" not in pdata:
            errors.append(f"Player entry without id: {pdata!r}")
            continue
        player, warnings = parse_player(pdata)
        for w in warnings:
            print(f"Warning: {w}")
        if player.id in players:
            errors.append(f"Duplicate player id {player.id}")
            continue
        players[player.id] = player

    # Confirmed attendees
    confirmed = []
    for pid in raw.get("confirmed", []) or []:
        pid = str(pid)
        if pid not in players:
            errors.append(f"Confirmed player {pid} not in players")
            continue
        if pid in confirmed:
            continue
        confirmed.append(pid)

    if errors:
        print("Config validation errors:")
        for e in errors:
            print(f"  {e}")

    return {
        "group": group,
        "schedule": schedule,
        "players": players,
        "confirmed": confirmed,
    }
