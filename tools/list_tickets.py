#!/usr/bin/env python3
"""Print every ticket in a CSV corpus, newest first."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List

BASE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = BASE_DIR / "config" / "config.yaml"
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from ticket_organizer.config import ConfigError  # type: ignore  # pylint: disable=import-error
from ticket_organizer.workflow import ListTicketsOptions, list_tickets  # type: ignore  # pylint: disable=import-error

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List submitted tickets as a table and optionally as an HTML page.",
    )
    parser.add_argument("tickets_csv", help="CSV file with ticket_number,title,description,category,status columns.")
    parser.add_argument(
        "--config",
        help=(
            "Path to configuration YAML file. Defaults to "
            f"{DEFAULT_CONFIG_PATH} or config/config.yaml if present."
        ),
    )
    parser.add_argument("--html", help="Write the listing page to this HTML file as well.")
    parser.add_argument(
        "--simple-console",
        action="store_true",
        help="Use a simple console log format instead of Rich formatting.",
    )
    parser.add_argument(
        "--console-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the console logging level.",
    )
    return parser


def main(argv: Iterable[str] | None = None) -> List[str]:
    parser = build_parser()
    args = parser.parse_args(argv)
    options = ListTicketsOptions(
        config_path=args.config,
        tickets_csv=args.tickets_csv,
        html_output=args.html,
        simple_console=args.simple_console,
        console_level=args.console_level,
    )
    try:
        return list_tickets(options, base_dir=Path.cwd())
    except (ConfigError, OSError) as exc:
        LOGGER.error("Failed to list tickets: %s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
