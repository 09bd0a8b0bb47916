"""
MMO HUD command line.

Loads a host snapshot from JSON, computes one refresh and prints it.

Usage:
    python -m mmo_hud.interface snapshot.json --system dnd5e
    python -m mmo_hud.interface snapshot.json --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from ..state.schema import HostSnapshot
from ..state.settings import JsonSettingsStore
from .hud import MmoHud
from .panels import render_hud

logger = logging.getLogger(__name__)

# Shared console instance
console = Console()


def load_snapshot(path: Path | str) -> HostSnapshot:
    """Read a host snapshot file."""
    with open(path, "r", encoding="utf-8") as f:
        return HostSnapshot.model_validate_json(f.read())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="MMO HUD - party and enemy overlay")
    parser.add_argument("snapshot", help="Host snapshot JSON file")
    parser.add_argument(
        "--system", "-s",
        default=None,
        help="Game system id (defaults to the snapshot's systemId)",
    )
    parser.add_argument(
        "--settings",
        default=".",
        help="Directory holding .mmo_hud_settings.json",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print template data as JSON instead of panels",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
    )

    try:
        snapshot = load_snapshot(args.snapshot)
    except (OSError, ValidationError) as e:
        console.print(f"[red]Could not load snapshot {args.snapshot}:[/red] {e}")
        return 1

    system_id = args.system or snapshot.system_id
    hud = MmoHud(system_id, JsonSettingsStore(args.settings))
    view = hud.render(snapshot)

    if args.json:
        print(json.dumps(view.to_template_data(), indent=2))
    else:
        console.print(render_hud(view))
    return 0


if __name__ == "__main__":
    sys.exit(main())
