#!/usr/bin/env python3
"""Scan seeds to see how evenly the sorter splits a group's confirmed players.

Usage: pelada-scan [config.yaml] [-n MAX_SEED]
"""

import argparse
import sys
from pathlib import Path

from pelada.config import load_config
from pelada.models import Player
from pelada.sorter import sort_teams
from pelada.stats import compute_balance_stats


def scan_seed(players: list[Player], players_per_team: int, seed: int,
              spread_top_rated: bool = False) -> dict:
    """Run a single seed and return summary info."""
    result = sort_teams(players, players_per_team, seed=seed,
                        spread_top_rated=spread_top_rated)
    stats = compute_balance_stats(result.teams)
    return {
        "seed": seed,
        "teams": len(result.teams),
        "leftovers": len(result.leftovers),
        "sums": stats["sums"],
        "spread": stats["spread"],
    }


def main():
    parser = argparse.ArgumentParser(
        description="Scan seeds and report team balance for each draw",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to config YAML file (default: config.yaml)"
    )
    parser.add_argument(
        "-n", "--max-seed", type=int, default=100,
        help="Maximum seed to try (default: 100, scans 0..N-1)"
    )
    args = parser.parse_args()

    if args.max_seed < 1:
        print(f"Error: --max-seed must be at least 1, got {args.max_seed}")
        sys.exit(1)

    config_path = args.config
    if not Path(config_path).exists():
        print(f"Error: config file {config_path} not found")
        sys.exit(1)

    config = load_config(config_path)
    group = config["group"]
    players = [config["players"][pid] for pid in config["confirmed"]]
    if not players:
        print("No confirmed players to sort.")
        sys.exit(1)

    max_seed = args.max_seed
    print(f"Scanning seeds 0..{max_seed - 1} using {config_path}...")
    print(f"{'Seed':>6}  {'Teams':>5}  {'Left':>4}  {'Spread':>6}  Sums")
    print("-" * 50)

    spreads = []
    for seed in range(max_seed):
        r = scan_seed(players, group["players_per_team"], seed,
                      spread_top_rated=group["spread_top_rated"])
        spreads.append(r["spread"])
        sums = " ".join(str(s) for s in r["sums"])
        print(f"{seed:>6}  {r['teams']:>5}  {r['leftovers']:>4}  {r['spread']:>6}  {sums}",
              flush=True)

    print("-" * 50)
    best = min(spreads)
    best_seeds = [s for s, sp in enumerate(spreads) if sp == best]
    print(f"\nBest spread {best} on {len(best_seeds)}/{max_seed} seeds: "
          f"{', '.join(str(s) for s in best_seeds[:20])}")


if __name__ == "__main__":
    main()
