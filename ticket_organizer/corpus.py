"""Load ticket corpora from CSV exports."""
from __future__ import annotations

import csv
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from dateutil import parser as date_parser

from .intake import TicketIntake, ValidationError
from .models import Ticket

LOGGER = logging.getLogger(__name__)

CSV_HEADERS = ("ticket_number", "title", "description", "category", "status", "created_at")


def _parse_created_at(value: Optional[str]) -> Optional[datetime]:
    if not value or not value.strip():
        return None
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError):
        LOGGER.debug("Unable to parse created_at value %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def load_tickets_csv(path: Path, *, intake: Optional[TicketIntake] = None) -> List[Ticket]:
    """Read tickets from ``path``, validating every row like a form submission.

    Rows that fail validation are logged and skipped. ``created_at`` is
    optional; rows without it are stamped with the load time.
    """
    intake = intake or TicketIntake()
    tickets: List[Ticket] = []
    LOGGER.info("Loading tickets from %s", path)
    with path.open("r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            try:
                ticket = intake.create_ticket(row, created_at=_parse_created_at(row.get("created_at")))
            except ValidationError as exc:
                LOGGER.warning("Skipping row %s in %s: %s", reader.line_num, path, exc)
                continue
            tickets.append(ticket)
    LOGGER.info("Loaded %s tickets from %s", len(tickets), path)
    return tickets
