#!/usr/bin/env python3
"""Show tickets that share keywords with a chosen ticket."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

BASE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = BASE_DIR / "config" / "config.yaml"
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from ticket_organizer.config import ConfigError  # type: ignore  # pylint: disable=import-error
from ticket_organizer.similarity import SimilarTickets  # type: ignore  # pylint: disable=import-error
from ticket_organizer.workflow import (  # type: ignore  # pylint: disable=import-error
    SimilarTicketsOptions,
    TicketNotFoundError,
    show_similar_tickets,
)

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rank tickets by keyword similarity and split them into open and solved matches.",
    )
    parser.add_argument("tickets_csv", help="CSV file with ticket_number,title,description,category,status columns.")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--ticket-number", type=int, help="Ticket number to compare against the corpus.")
    target.add_argument("--ticket-id", type=int, help="Internal ticket id to compare against the corpus.")
    parser.add_argument(
        "--config",
        help=(
            "Path to configuration YAML file. Defaults to "
            f"{DEFAULT_CONFIG_PATH} or config/config.yaml if present."
        ),
    )
    parser.add_argument("--limit", type=int, help="Maximum matches per bucket. Overrides matching.result_limit.")
    parser.add_argument("--html", help="Write the ticket detail page to this HTML file.")
    parser.add_argument("--csv", help="Write the matches to this CSV file.")
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


def main(argv: Iterable[str] | None = None) -> SimilarTickets:
    parser = build_parser()
    args = parser.parse_args(argv)
    options = SimilarTicketsOptions(
        config_path=args.config,
        tickets_csv=args.tickets_csv,
        ticket_id=args.ticket_id,
        ticket_number=args.ticket_number,
        limit=args.limit,
        html_output=args.html,
        csv_output=args.csv,
        simple_console=args.simple_console,
        console_level=args.console_level,
    )
    try:
        return show_similar_tickets(options, base_dir=Path.cwd())
    except TicketNotFoundError as exc:
        LOGGER.error("%s", exc)
        raise SystemExit(1) from exc
    except (ConfigError, OSError) as exc:
        LOGGER.error("Failed to find similar tickets: %s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
