"""Ticket records shared by the intake, matching and rendering modules."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple

STATUS_OPEN = "Open"
STATUS_IN_PROGRESS = "In Progress"
STATUS_SOLVED = "Solved"

DEFAULT_STATUSES: Tuple[str, ...] = (STATUS_OPEN, STATUS_IN_PROGRESS, STATUS_SOLVED)

DEFAULT_CATEGORIES: Tuple[str, ...] = (
    "Email Issues",
    "Login Problems",
    "Software Installation",
    "Network Connectivity",
    "Hardware Issues",
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Ticket:
    id: int
    ticket_number: int
    title: str
    description: Optional[str]
    category: str
    status: str
    keywords: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utc_now)

    @property
    def text(self) -> str:
        """Title and description joined the way keywords are derived from them."""
        return f"{self.title or ''} {self.description or ''}"

    @property
    def is_solved(self) -> bool:
        return self.status == STATUS_SOLVED

    @property
    def created_at_display(self) -> str:
        return self.created_at.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
