"""Balanced team sorting for the pelada organiser.

Three phases:
1. Tiered snake draft: players grouped by rating, shuffled within each tier,
   dealt highest tier first in forward/reverse alternating order.
2. Refinement: five passes of pairwise best-swap local search on team
   rating sums.
3. Overflow: players beyond players_per_team in a drafted team become
   leftovers; each main team is shuffled for presentation only.
"""

import random
from typing import Optional

from pelada.models import Player, SortResult

MIN_RATING = 1
MAX_RATING = 5
TOP_RATING = MAX_RATING
REFINEMENT_PASSES = 5


class InvalidConfiguration(ValueError):
    """Raised when the sorter is asked for teams of fewer than one player."""


def player_rating(player: Player) -> int:
    """Rating used for balancing; missing or out-of-range ratings count as 1."""
    r = player.rating
    if isinstance(r, bool) or not isinstance(r, int):
        return MIN_RATING
    if r < MIN_RATING or r > MAX_RATING:
        return MIN_RATING
    return r


def team_sum(team: list[Player]) -> int:
    return sum(player_rating(p) for p in team)


def snake_draft(players: list[Player], num_teams: int,
                rng: random.Random) -> list[list[Player]]:
    """Deal players into num_teams teams, best tier first, in snake order."""
    tiers: dict[int, list[Player]] = {}
    for p in players:
        tiers.setdefault(player_rating(p), []).append(p)

    for tier in tiers.values():
        rng.shuffle(tier)

    pool = []
    for rating in sorted(tiers, reverse=True):
        pool.extend(tiers[rating])

    teams: list[list[Player]] = [[] for _ in range(num_teams)]
    forward = True
    idx = 0
    while idx < len(pool):
        order = range(num_teams) if forward else range(num_teams - 1, -1, -1)
        for t in order:
            if idx >= len(pool):
                break
            teams[t].append(pool[idx])
            idx += 1
        forward = not forward

    return teams


def _best_swap(team_a: list[Player],
               team_b: list[Player]) -> Optional[tuple[int, int]]:
    """Indices of the swap that most reduces the sum gap, if any strictly does."""
    sum_a = team_sum(team_a)
    sum_b = team_sum(team_b)
    best_diff = abs(sum_a - sum_b)
    best = None

    for ia, pa in enumerate(team_a):
        ra = player_rating(pa)
        for ib, pb in enumerate(team_b):
            rb = player_rating(pb)
            new_diff = abs((sum_a - ra + rb) - (sum_b - rb + ra))
            if new_diff < best_diff:
                best_diff = new_diff
                best = (ia, ib)

    return best


def refine_teams(teams: list[list[Player]],
                 passes: int = REFINEMENT_PASSES) -> int:
    """Greedy pairwise swap refinement, in place. Returns the number of swaps."""
    swaps = 0
    for _ in range(passes):
        for i in range(len(teams)):
            for j in range(i + 1, len(teams)):
                swap = _best_swap(teams[i], teams[j])
                if swap is None:
                    continue
                ia, ib = swap
                teams[i][ia], teams[j][ib] = teams[j][ib], teams[i][ia]
                swaps += 1
    return swaps


def balance_top_rated(teams: list[list[Player]]) -> int:
    """Move surplus top-rated players to teams that have none.

    A team holding more than one top-rated player gives its extras away, each
    swapped with the best player of a team without one (best such team first).
    Returns the number of swaps made.
    """
    surplus: list[tuple[int, int]] = []
    lacking: list[tuple[int, int, int]] = []

    for ti, team in enumerate(teams):
        top = [pi for pi, p in enumerate(team) if player_rating(p) == TOP_RATING]
        if len(top) > 1:
            surplus.extend((ti, pi) for pi in top[1:])
        elif not top and team:
            best_pi = max(range(len(team)), key=lambda pi: player_rating(team[pi]))
            lacking.append((ti, best_pi, player_rating(team[best_pi])))

    lacking.sort(key=lambda x: x[2], reverse=True)

    swaps = 0
    while surplus and lacking:
        src_team, src_idx = surplus.pop()
        dst_team, dst_idx, _ = lacking.pop(0)
        a, b = teams[src_team], teams[dst_team]
        a[src_idx], b[dst_idx] = b[dst_idx], a[src_idx]
        swaps += 1
    return swaps


def sort_teams(players: list[Player], players_per_team: int,
               seed: int | None = None,
               rng: random.Random | None = None,
               spread_top_rated: bool = False) -> SortResult:
    """Split players into rating-balanced teams plus a leftovers group.

    Randomness only affects draft order among equally rated players and the
    display order inside each team. Pass rng (or seed) to make it repeatable.
    The caller's list and Player objects are left untouched.
    """
    if players_per_team < 1:
        raise InvalidConfiguration(
            f"players_per_team must be at least 1, got {players_per_team}"
        )
    if not players:
        return SortResult()

    if rng is None:
        rng = random.Random(seed)

    num_teams = max(1, len(players) // players_per_team)
    teams = snake_draft(list(players), num_teams, rng)
    refine_teams(teams)
    if spread_top_rated:
        balance_top_rated(teams)

    result = SortResult()
    for team in teams:
        main = team[:players_per_team]
        result.leftovers.extend(team[players_per_team:])
        if main:
            rng.shuffle(main)
            result.teams.append(main)

    return result


def team_label(index: int) -> str:
    """Spreadsheet-style label: 0 -> A, 25 -> Z, 26 -> AA."""
    label = ""
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        label = chr(ord("A") + rem) + label
    return label


def label_teams(result: SortResult,
                leftovers_label: str = "Next Up") -> list[tuple[str, list[Player]]]:
    """Pair each team with its display label, leftovers last when present."""
    labelled = [(team_label(i), team) for i, team in enumerate(result.teams)]
    if result.leftovers:
        labelled.append((leftovers_label, result.leftovers))
    return labelled
