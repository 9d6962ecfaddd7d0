"""Higher level workflows used by the command line tools."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import HighlightSettings, IntakeSettings, MatchingSettings, load_config, resolve_path
from .corpus import load_tickets_csv
from .intake import TicketIntake
from .keywords import KeywordExtractor
from .logging_setup import configure_logging
from .models import Ticket
from .rendering import render_ticket_detail, render_ticket_list, ticket_page_name, write_html
from .reporting import MatchReportWriter
from .similarity import MatchResult, SimilarTickets, TicketMatcher
from .store import InMemoryTicketStore

LOGGER = logging.getLogger(__name__)


class TicketNotFoundError(LookupError):
    """Raised when a requested ticket is not in the corpus."""


@dataclass
class ListTicketsOptions:
    config_path: Optional[str]
    tickets_csv: str
    html_output: Optional[str] = None
    simple_console: bool = False
    console_level: Optional[str] = None


@dataclass
class SimilarTicketsOptions:
    config_path: Optional[str]
    tickets_csv: str
    ticket_id: Optional[int] = None
    ticket_number: Optional[int] = None
    limit: Optional[int] = None
    html_output: Optional[str] = None
    csv_output: Optional[str] = None
    simple_console: bool = False
    console_level: Optional[str] = None


@dataclass
class TicketServices:
    """Collaborators built once from configuration and shared by a run."""

    extractor: KeywordExtractor
    matcher: TicketMatcher
    intake: TicketIntake
    store: InMemoryTicketStore
    highlight: HighlightSettings
    config: Dict[str, Any]


def build_services(config: Dict[str, Any]) -> TicketServices:
    matching = MatchingSettings.from_config(config)
    intake_settings = IntakeSettings.from_config(config)
    extractor = KeywordExtractor(stop_words=matching.stop_words, min_length=matching.min_keyword_length)
    matcher = TicketMatcher(
        extractor=extractor,
        similarity_threshold=matching.similarity_threshold,
        result_limit=matching.result_limit,
    )
    return TicketServices(
        extractor=extractor,
        matcher=matcher,
        intake=TicketIntake(settings=intake_settings, extractor=extractor),
        store=InMemoryTicketStore(statuses=intake_settings.statuses),
        highlight=HighlightSettings.from_config(config),
        config=config,
    )


def _prepare_logging(
    config: dict, options: ListTicketsOptions | SimilarTicketsOptions, *, base_dir: Path
) -> None:
    # Empty YAML sections load as None.
    logging_config = config["logging"] = config.get("logging") or {}
    console_cfg = logging_config["console"] = logging_config.get("console") or {}
    if options.simple_console:
        console_cfg["rich_format"] = False
    if options.console_level:
        console_cfg["level"] = options.console_level
    configure_logging(config, base_dir=base_dir)


def _output_directory(config: Dict[str, Any], base_dir: Path) -> Path:
    reporting_cfg = config.get("reporting") or {}
    return resolve_path(reporting_cfg.get("output_directory", "reports"), base=base_dir)


def _load_store(services: TicketServices, tickets_csv: str, *, base_dir: Path) -> InMemoryTicketStore:
    path = resolve_path(tickets_csv, base=base_dir)
    for ticket in load_tickets_csv(path, intake=services.intake):
        services.store.add(ticket)
    return services.store


def select_ticket(
    store: InMemoryTicketStore, *, ticket_id: Optional[int] = None, ticket_number: Optional[int] = None
) -> Ticket:
    """Pick the target ticket by id, or the most recent ticket carrying a number."""
    if ticket_id is not None:
        ticket = store.get(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(f"Ticket id {ticket_id} not found")
        return ticket
    if ticket_number is not None:
        candidates = store.find_by_number(ticket_number)
        if not candidates:
            raise TicketNotFoundError(f"Ticket #{ticket_number} not found")
        if len(candidates) > 1:
            LOGGER.warning(
                "Ticket number %s is shared by %s tickets; using the most recent",
                ticket_number,
                len(candidates),
            )
        return max(candidates, key=lambda ticket: ticket.created_at)
    raise ValueError("Provide a ticket id or a ticket number")


def format_ticket_table(tickets: List[Ticket]) -> List[str]:
    rows = [
        (f"#{ticket.ticket_number}", ticket.title, ticket.category, ticket.status, ticket.created_at_display)
        for ticket in tickets
    ]
    headers = ("Ticket #", "Title", "Category", "Status", "Submitted At")
    widths = [max(len(str(row[index])) for row in rows + [headers]) for index in range(len(headers))]
    lines = ["  ".join(str(value).ljust(width) for value, width in zip(headers, widths)).rstrip()]
    lines.append("  ".join("-" * width for width in widths))
    for row in rows:
        lines.append("  ".join(str(value).ljust(width) for value, width in zip(row, widths)).rstrip())
    lines.append(f"Total tickets: {len(tickets)}")
    return lines


def format_matches(target: Ticket, result: SimilarTickets) -> List[str]:
    lines = [f"Ticket #{target.ticket_number}: {target.title} [{target.status}]"]
    lines.append(f"Keywords: {', '.join(target.keywords[:5])}")

    def _section(title: str, matches: List[MatchResult]) -> None:
        lines.append("")
        lines.append(f"{title} ({len(matches)} found)")
        for match in matches:
            lines.append(
                f"  {match.similarity_percent:>3}%  #{match.ticket.ticket_number}  {match.ticket.title}"
                f"  [{', '.join(match.common_keywords)}]"
            )

    if not result:
        lines.append("")
        lines.append("No similar tickets found. This might be a unique issue.")
        return lines
    _section("Similar open tickets", result.similar)
    _section("Similar solved tickets", result.solved)
    return lines


def list_tickets(options: ListTicketsOptions, *, base_dir: Optional[Path] = None) -> List[str]:
    base_dir = base_dir or Path.cwd()
    config = load_config(options.config_path, allow_missing=True)
    _prepare_logging(config, options, base_dir=base_dir)

    services = build_services(config)
    store = _load_store(services, options.tickets_csv, base_dir=base_dir)
    tickets = store.list_recent()

    if options.html_output:
        html_path = resolve_path(options.html_output, base=_output_directory(config, base_dir))
        write_html(render_ticket_list(tickets), html_path)
        # The listing links to one detail page per ticket in the same directory.
        corpus = store.snapshot()
        for ticket in tickets:
            result = services.matcher.find_similar_tickets(ticket, corpus)
            html = render_ticket_detail(ticket, result, highlight=services.highlight)
            write_html(html, html_path.parent / ticket_page_name(ticket))

    lines = format_ticket_table(tickets)
    for line in lines:
        print(line)
    return lines


def show_similar_tickets(options: SimilarTicketsOptions, *, base_dir: Optional[Path] = None) -> SimilarTickets:
    base_dir = base_dir or Path.cwd()
    config = load_config(options.config_path, allow_missing=True)
    _prepare_logging(config, options, base_dir=base_dir)

    services = build_services(config)
    store = _load_store(services, options.tickets_csv, base_dir=base_dir)
    target = select_ticket(store, ticket_id=options.ticket_id, ticket_number=options.ticket_number)
    result = services.matcher.find_similar_tickets(target, store.snapshot(), options.limit)
    LOGGER.info(
        "Found %s similar and %s solved tickets for #%s",
        len(result.similar),
        len(result.solved),
        target.ticket_number,
    )

    if options.html_output:
        html = render_ticket_detail(target, result, highlight=services.highlight)
        write_html(html, resolve_path(options.html_output, base=_output_directory(config, base_dir)))

    if options.csv_output:
        csv_path = resolve_path(options.csv_output, base=_output_directory(config, base_dir))
        writer = MatchReportWriter(output_directory=csv_path.parent, report_name=csv_path.name)
        writer.write_matches(target, result)

    for line in format_matches(target, result):
        print(line)
    return result
