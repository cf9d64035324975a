#!/usr/bin/env python3
"""Sort the confirmed players of a group into balanced teams.

Usage:
    pelada-draw [config.yaml] [--seed N] [--players-per-team N] [-o DIR]

Writes:
  {DIR}/teams.txt   Labelled teams (A, B, C, ... and Next Up)
  {DIR}/teams.csv   One row per player with team label and rating

Examples:
    pelada-draw                         # random draw, 5 per team from config
    pelada-draw --seed 42 -o tonight    # reproducible
    pelada-draw --players-per-team 6
"""

import argparse
import sys
from pathlib import Path

from pelada.config import load_config
from pelada.output import format_teams, write_teams
from pelada.sorter import InvalidConfiguration, sort_teams
from pelada.stats import format_balance_report


def main():
    parser = argparse.ArgumentParser(
        description="Sort confirmed players into rating-balanced teams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Exit codes:
  0  Teams sorted (or nobody confirmed)
  1  Missing config or invalid team size
""",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to config YAML file (default: config.yaml)"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for a reproducible draw"
    )
    parser.add_argument(
        "--players-per-team", "-p", type=int, default=None,
        help="Override players_per_team from the config"
    )
    parser.add_argument(
        "--output-prefix", "-o", default=None,
        help="Output directory for teams.txt and teams.csv (default: print only)"
    )
    args = parser.parse_args()

    config_path = args.config
    if not Path(config_path).exists():
        print(f"Error: config file {config_path} not found")
        sys.exit(1)

    print(f"Loading config from {config_path}...")
    config = load_config(config_path)
    group = config["group"]
    players_per_team = group["players_per_team"]
    if args.players_per_team is not None:
        players_per_team = args.players_per_team

    confirmed = [config["players"][pid] for pid in config["confirmed"]]
    print(f"Sorting {len(confirmed)} confirmed players "
          f"({players_per_team} per team, seed={args.seed})...")

    try:
        result = sort_teams(
            confirmed, players_per_team, seed=args.seed,
            spread_top_rated=group["spread_top_rated"],
        )
    except InvalidConfiguration as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("\n" + format_teams(result, title=group["name"]))
    if result.teams:
        print("\n" + format_balance_report(result))

    if args.output_prefix:
        print("\nWriting output files...")
        write_teams(result, output_prefix=args.output_prefix, title=group["name"])


if __name__ == "__main__":
    main()
