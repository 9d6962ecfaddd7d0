from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ticket_organizer.keywords import extract_keywords  # noqa: E402
from ticket_organizer.models import Ticket  # noqa: E402


@pytest.fixture(name="make_ticket")
def fixture_make_ticket() -> Callable[..., Ticket]:
    def _make_ticket(
        ticket_id: int,
        title: Optional[str],
        description: Optional[str],
        *,
        status: str = "Open",
        category: str = "Email Issues",
        ticket_number: Optional[int] = None,
        created_at: Optional[datetime] = None,
    ) -> Ticket:
        return Ticket(
            id=ticket_id,
            ticket_number=ticket_number if ticket_number is not None else ticket_id,
            title=title,  # type: ignore[arg-type]
            description=description,
            category=category,
            status=status,
            keywords=extract_keywords(f"{title or ''} {description or ''}"),
            created_at=created_at or datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc),
        )

    return _make_ticket


@pytest.fixture(name="email_tickets")
def fixture_email_tickets(make_ticket):
    first = make_ticket(1, "Cannot access email account", "Outlook keeps asking for password")
    second = make_ticket(2, "Email login fails", "Outlook password prompt repeats", status="Solved")
    return first, second
