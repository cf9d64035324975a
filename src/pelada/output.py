"""Output formatters for the pelada organiser."""

import csv
from datetime import datetime
from io import StringIO
from pathlib import Path
from typing import Optional

from pelada.gamedate import game_status
from pelada.models import DayOfWeek, GameOccurrence, SortResult
from pelada.sorter import label_teams, player_rating, team_sum


def format_game_status(occurrence: Optional[GameOccurrence], now: datetime) -> str:
    """Human-readable summary of the resolved game and its status flags."""
    if occurrence is None:
        return "No game scheduled."

    status = game_status(occurrence, now)
    day = DayOfWeek.from_date(occurrence.start.date()).name
    lines = []
    lines.append(f"Game {occurrence.game_id} ({day})")
    lines.append(f"  Starts:   {occurrence.start.strftime('%Y-%m-%d %H:%M')}")
    lines.append(f"  Ends:     {occurrence.end.strftime('%Y-%m-%d %H:%M')}")
    if status.is_confirmation_locked:
        state = "closed"
    elif status.is_within_grace_period:
        state = "finished, goal entry open"
    elif now >= occurrence.start:
        state = "in progress"
    else:
        state = "upcoming"
    lines.append(f"  Status:   {state}")
    return "\n".join(lines)


def format_teams(result: SortResult, title: str = "") -> str:
    """Format sorted teams as human-readable text."""
    lines = []
    lines.append("=" * 40)
    lines.append(title.upper() if title else "TEAMS")
    lines.append("=" * 40)

    if not result.teams and not result.leftovers:
        lines.append("\nNo confirmed players.")
        return "\n".join(lines)

    for label, team in label_teams(result):
        if team is result.leftovers:
            lines.append(f"\n{label} ({len(team)})")
        else:
            lines.append(f"\nTeam {label} (rating {team_sum(team)})")
        for p in team:
            stars = "*" * player_rating(p)
            lines.append(f"  {p.display_name or p.id:<24} {stars}")

    return "\n".join(lines)


def format_teams_csv(result: SortResult) -> str:
    """Format sorted teams as CSV: Team, Player_ID, Name, Rating."""
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(["Team", "Player_ID", "Name", "Rating"])
    for label, team in label_teams(result):
        for p in team:
            writer.writerow([label, p.id, p.display_name, player_rating(p)])
    return output.getvalue()


def write_teams(result: SortResult, output_prefix: str = "output",
                title: str = ""):
    """Write teams.txt and teams.csv into {output_prefix}/ directory."""
    out_dir = Path(output_prefix)
    out_dir.mkdir(parents=True, exist_ok=True)

    teams_path = out_dir / "teams.txt"
    teams_path.write_text(format_teams(result, title=title))
    print(f"Written: {teams_path}")

    csv_path = out_dir / "teams.csv"
    csv_path.write_text(format_teams_csv(result))
    print(f"Written: {csv_path}")
