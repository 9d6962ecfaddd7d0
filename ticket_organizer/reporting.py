"""Write similar-ticket results to CSV for offline review."""
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple

from .models import Ticket
from .similarity import MatchResult, SimilarTickets

LOGGER = logging.getLogger(__name__)


class MatchReportWriter:
    """Persist matcher output, one row per matched ticket."""

    HEADERS: Sequence[str] = (
        "target_ticket_id",
        "target_ticket_number",
        "bucket",
        "rank",
        "ticket_id",
        "ticket_number",
        "title",
        "status",
        "similarity",
        "common_keywords",
    )

    def __init__(self, *, output_directory: Path, report_name: str) -> None:
        self.output_directory = output_directory
        self.report_name = report_name
        self.output_directory.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _ranked(result: SimilarTickets) -> Iterator[Tuple[str, int, MatchResult]]:
        for bucket, matches in (("similar", result.similar), ("solved", result.solved)):
            for rank, match in enumerate(matches, start=1):
                yield bucket, rank, match

    def write_matches(self, target: Ticket, result: SimilarTickets) -> Path:
        report_path = self.output_directory / self.report_name
        LOGGER.info("Writing similar ticket report to %s", report_path)
        rows: List[List[object]] = [
            [
                target.id,
                target.ticket_number,
                bucket,
                rank,
                match.ticket.id,
                match.ticket.ticket_number,
                match.ticket.title,
                match.ticket.status,
                f"{match.similarity:.4f}",
                " ".join(match.common_keywords),
            ]
            for bucket, rank, match in self._ranked(result)
        ]
        with report_path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle)
            writer.writerow(self.HEADERS)
            writer.writerows(rows)
        return report_path
