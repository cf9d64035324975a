"""Balance statistics for sorted teams."""

from pelada.models import Player, SortResult
from pelada.sorter import team_label, team_sum


def compute_balance_stats(teams: list[list[Player]]) -> dict:
    """Rating sums per team and the spread between strongest and weakest.

    Returns dict with:
    - sums: list of team rating sums, in team order
    - spread: max(sums) - min(sums), 0 for fewer than two teams
    - mean: average team sum (0.0 with no teams)
    """
    sums = [team_sum(t) for t in teams]
    if not sums:
        return {"sums": [], "spread": 0, "mean": 0.0}
    return {
        "sums": sums,
        "spread": max(sums) - min(sums),
        "mean": sum(sums) / len(sums),
    }


def format_balance_report(result: SortResult) -> str:
    stats = compute_balance_stats(result.teams)
    lines = []
    lines.append("=" * 40)
    lines.append("TEAM BALANCE")
    lines.append("=" * 40)
    for i, team in enumerate(result.teams):
        lines.append(f"  Team {team_label(i):<3} {len(team):>2} players  rating {team_sum(team):>3}")
    lines.append(f"  Mean rating: {stats['mean']:.1f}")
    lines.append(f"  Spread:      {stats['spread']}")
    if result.leftovers:
        lines.append(f"  Leftovers:   {len(result.leftovers)}")
    return "\n".join(lines)
