#!/usr/bin/env python3
"""Show the active or next pickup game for a group.

Usage: pelada-next [config.yaml] [--now 2026-03-09T21:30]

Prints the resolved game (the one still inside its grace period, or the next
upcoming one), its id, status flags, the confirmed head count and, when the
group uses it, whose turn it is to take the equipment home.
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

from pelada.config import load_config
from pelada.gamedate import game_status, resolve_game_date
from pelada.output import format_game_status
from pelada.rotation import next_equipment_manager


def parse_now(s: str | None) -> datetime:
    if s is None:
        return datetime.now()
    return datetime.fromisoformat(s)


def main():
    parser = argparse.ArgumentParser(
        description="Show the active or next pickup game",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to config YAML file (default: config.yaml)"
    )
    parser.add_argument(
        "--now", default=None,
        help="Reference time in ISO format (default: current local time)"
    )
    args = parser.parse_args()

    config_path = args.config
    if not Path(config_path).exists():
        print(f"Error: config file {config_path} not found")
        sys.exit(1)

    try:
        now = parse_now(args.now)
    except ValueError:
        print(f"Error: invalid --now value {args.now!r}")
        sys.exit(1)

    config = load_config(config_path)
    group = config["group"]
    if group["name"]:
        print(group["name"])

    occurrence = resolve_game_date(config["schedule"], now)
    print(format_game_status(occurrence, now))
    if occurrence is None:
        sys.exit(0)

    status = game_status(occurrence, now)
    print(f"  Finished:            {'yes' if status.is_finished else 'no'}")
    print(f"  Confirmation locked: {'yes' if status.is_confirmation_locked else 'no'}")
    print(f"  Confirmed players:   {len(config['confirmed'])}")

    if group["equipment_rotation"]:
        manager = next_equipment_manager(list(config["players"].values()))
        name = manager.display_name if manager else "-"
        print(f"  Equipment:           {name}")


if __name__ == "__main__":
    main()
