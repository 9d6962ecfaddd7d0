"""In-memory ticket storage handed to the intake and matching workflows."""
from __future__ import annotations

import logging
import threading
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import DEFAULT_STATUSES, Ticket

LOGGER = logging.getLogger(__name__)


class InMemoryTicketStore:
    """Process-lifetime ticket collection.

    Readers receive tuple snapshots, so a matcher iterating over one is not
    affected by tickets added while it runs.
    """

    def __init__(self, tickets: Iterable[Ticket] = (), *, statuses: Sequence[str] = DEFAULT_STATUSES) -> None:
        self._tickets: List[Ticket] = list(tickets)
        self._statuses = tuple(statuses)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tickets)

    def add(self, ticket: Ticket) -> Ticket:
        with self._lock:
            self._tickets.append(ticket)
        LOGGER.debug("Stored ticket %s (#%s)", ticket.id, ticket.ticket_number)
        return ticket

    def snapshot(self) -> Tuple[Ticket, ...]:
        with self._lock:
            return tuple(self._tickets)

    def get(self, ticket_id: int) -> Optional[Ticket]:
        for ticket in self.snapshot():
            if ticket.id == ticket_id:
                return ticket
        return None

    def find_by_number(self, ticket_number: int) -> List[Ticket]:
        """Ticket numbers are not unique, so every ticket carrying the number is returned."""
        return [ticket for ticket in self.snapshot() if ticket.ticket_number == ticket_number]

    def list_recent(self) -> List[Ticket]:
        return sorted(self.snapshot(), key=lambda ticket: ticket.created_at, reverse=True)

    def update_status(self, ticket_id: int, status: str) -> Ticket:
        if status not in self._statuses:
            raise ValueError(f"Unknown status '{status}'")
        with self._lock:
            for ticket in self._tickets:
                if ticket.id == ticket_id:
                    ticket.status = status
                    LOGGER.info("Ticket %s moved to %s", ticket_id, status)
                    return ticket
        raise KeyError(ticket_id)
