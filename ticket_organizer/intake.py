"""Validation of submitted ticket forms."""
from __future__ import annotations

import logging
import re
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Mapping, Optional

from rapidfuzz import fuzz, process

from .config import IntakeSettings
from .keywords import DEFAULT_EXTRACTOR, KeywordExtractor
from .models import Ticket

LOGGER = logging.getLogger(__name__)

TICKET_NUMBER_PATTERN = re.compile(r"[0-9]{1,5}")
REQUIRED_FIELDS = ("ticket_number", "title", "description", "category", "status")

_SUGGESTION_SCORE_CUTOFF = 80


class ValidationError(ValueError):
    """Raised when a submitted ticket form is rejected."""

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


def _field(form: Mapping[str, object], name: str) -> str:
    value = form.get(name)
    return "" if value is None else str(value).strip()


class TicketIntake:
    """Turn raw form fields into :class:`Ticket` records."""

    def __init__(
        self,
        *,
        settings: Optional[IntakeSettings] = None,
        extractor: Optional[KeywordExtractor] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.settings = settings or IntakeSettings()
        self.extractor = extractor or DEFAULT_EXTRACTOR
        self._clock = clock
        self._lock = threading.Lock()
        self._last_id = 0

    def _next_id(self) -> int:
        # Millisecond timestamps, bumped so two tickets in the same millisecond differ.
        with self._lock:
            candidate = int(self._clock() * 1000)
            self._last_id = max(candidate, self._last_id + 1)
            return self._last_id

    def _suggest(self, value: str, choices: tuple[str, ...]) -> Optional[str]:
        if not value or not choices:
            return None
        best = process.extractOne(value, choices, scorer=fuzz.WRatio, score_cutoff=_SUGGESTION_SCORE_CUTOFF)
        return best[0] if best else None

    def _choice_error(self, label: str, field: str, value: str, choices: tuple[str, ...]) -> ValidationError:
        message = f"Invalid {label} selected."
        suggestion = self._suggest(value, choices)
        if suggestion:
            message += f" Did you mean '{suggestion}'?"
        return ValidationError(message, field=field)

    def validate(self, form: Mapping[str, object]) -> dict[str, str]:
        """Return the trimmed form values or raise :class:`ValidationError`."""
        values = {name: _field(form, name) for name in REQUIRED_FIELDS}
        missing = [name for name, value in values.items() if not value]
        if missing:
            LOGGER.debug("Rejected ticket form missing %s", ", ".join(missing))
            raise ValidationError("Missing required fields", field=missing[0])

        if not TICKET_NUMBER_PATTERN.fullmatch(values["ticket_number"]):
            raise ValidationError(
                "Invalid ticket number. Must be numeric and maximum 5 digits.",
                field="ticket_number",
            )
        if values["category"] not in self.settings.categories:
            raise self._choice_error("category", "category", values["category"], self.settings.categories)
        if values["status"] not in self.settings.statuses:
            raise self._choice_error("status", "status", values["status"], self.settings.statuses)
        return values

    def create_ticket(self, form: Mapping[str, object], *, created_at: Optional[datetime] = None) -> Ticket:
        values = self.validate(form)
        if created_at is None:
            created_at = datetime.now(timezone.utc)
        elif created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        ticket = Ticket(
            id=self._next_id(),
            ticket_number=int(values["ticket_number"]),
            title=values["title"],
            description=values["description"],
            category=values["category"],
            status=values["status"],
            keywords=self.extractor.extract_keywords(f"{values['title']} {values['description']}"),
            created_at=created_at,
        )
        LOGGER.info("New ticket added: #%s - %s", values["ticket_number"], values["title"])
        return ticket
