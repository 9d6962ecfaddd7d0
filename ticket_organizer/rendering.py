"""HTML pages for the ticket listing and ticket detail views."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from jinja2 import Environment
from markupsafe import Markup, escape

from .config import HighlightSettings
from .highlight import highlight_keywords
from .models import Ticket
from .similarity import MatchResult, SimilarTickets

LOGGER = logging.getLogger(__name__)

STATUS_COLORS: Dict[str, str] = {
    "Open": "#dc3545",
    "In Progress": "#ffc107",
    "Solved": "#28a745",
}
DEFAULT_STATUS_COLOR = "#6c757d"
DETAIL_KEYWORD_COUNT = 5

_ENVIRONMENT = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

_BASE_STYLE = """
      body { font-family: Arial, sans-serif; max-width: 1000px; margin: 0 auto; padding: 20px; background-color: #f5f5f5; }
      .container { background-color: white; padding: 30px; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); margin-bottom: 20px; }
      h1, h2 { color: #333; }
      table { width: 100%; border-collapse: collapse; margin-bottom: 20px; }
      th, td { padding: 12px; text-align: left; border-bottom: 1px solid #ddd; }
      th { background-color: #f8f9fa; color: #555; }
      .badge { color: white; padding: 4px 8px; border-radius: 4px; font-size: 12px; }
      .empty { text-align: center; color: #666; font-style: italic; padding: 40px; }
      .similar-ticket { border: 1px solid #ddd; border-radius: 4px; padding: 15px; margin-bottom: 15px; background-color: #f9f9f9; }
      .similarity-score { background-color: #007bff; color: white; padding: 2px 6px; border-radius: 3px; font-size: 12px; margin-left: 10px; }
      .keywords { margin-top: 10px; font-size: 14px; color: #666; }
      mark { background-color: #ffeb3b; padding: 2px; border-radius: 2px; }
"""

LIST_TEMPLATE = _ENVIRONMENT.from_string(
    """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>Submitted Tickets</title>
    <style>{{ style }}</style>
  </head>
  <body>
    <div class="container">
      <h1>Submitted Tickets</h1>
      <p><strong>Total Tickets: {{ tickets|length }}</strong></p>
      {% if tickets %}
      <table>
        <thead><tr><th>Ticket #</th><th>Title</th><th>Category</th><th>Status</th><th>Submitted At</th></tr></thead>
        <tbody>
          {% for ticket in tickets %}
          <tr>
            <td><a href="{{ page(ticket) }}"><strong>#{{ ticket.ticket_number }}</strong></a></td>
            <td><a href="{{ page(ticket) }}">{{ ticket.title or "No title" }}</a></td>
            <td>{{ ticket.category }}</td>
            <td>{{ badge(ticket.status) }}</td>
            <td>{{ ticket.created_at_display }}</td>
          </tr>
          {% endfor %}
        </tbody>
      </table>
      {% else %}
      <div class="empty">No tickets have been submitted yet.</div>
      {% endif %}
    </div>
  </body>
</html>
"""
)

DETAIL_TEMPLATE = _ENVIRONMENT.from_string(
    """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>Ticket #{{ ticket.ticket_number }} - {{ ticket.title }}</title>
    <style>{{ style }}</style>
  </head>
  <body>
    <div class="container">
      <h1>Ticket #{{ ticket.ticket_number }}: {{ ticket.title }}</h1>
      <p>
        <strong>Status:</strong> {{ badge(ticket.status) }} |
        <strong>Category:</strong> {{ ticket.category }} |
        <strong>Created:</strong> {{ ticket.created_at_display }}
      </p>
      <p><strong>Keywords:</strong> {{ top_keywords|join(", ") }}</p>
      <p><strong>Description:</strong><br />{{ ticket.description or "No description" }}</p>
    </div>
    {% for section in sections %}
    {% if section.entries %}
    <div class="container">
      <h2>{{ section.heading }} ({{ section.entries|length }} found)</h2>
      <p>{{ section.blurb }}</p>
      {% for entry in section.entries %}
      <div class="similar-ticket">
        <h4>
          <a href="{{ page(entry.ticket) }}">#{{ entry.ticket.ticket_number }}: {{ entry.title }}</a>
          <span class="similarity-score">{{ entry.percent }}% match</span>
        </h4>
        <p><strong>Category:</strong> {{ entry.ticket.category }} | <strong>Status:</strong> {{ badge(entry.ticket.status) }}</p>
        <p><strong>Description:</strong> {{ entry.description }}</p>
        <div class="keywords"><strong>Common keywords:</strong> {{ entry.common_keywords|join(", ") }}</div>
      </div>
      {% endfor %}
    </div>
    {% endif %}
    {% endfor %}
    {% if not result %}
    <div class="container">
      <h2>Similar Tickets</h2>
      <p>No similar tickets found. This might be a unique issue.</p>
    </div>
    {% endif %}
  </body>
</html>
"""
)


def ticket_page_name(ticket: Ticket) -> str:
    """File name of the static detail page written for ``ticket``."""
    return f"ticket_{ticket.id}.html"


def status_badge(status: str) -> Markup:
    color = STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)
    return Markup('<span class="badge" style="background-color: {0};">{1}</span>').format(color, status)


def _highlight(text: Optional[str], keywords: List[str], settings: HighlightSettings) -> Markup:
    return Markup(
        highlight_keywords(
            text,
            keywords,
            open_tag=settings.open_tag,
            close_tag=settings.close_tag,
            escape=escape,
        )
    )


def _entries(matches: Iterable[MatchResult], settings: HighlightSettings) -> List[Dict[str, Any]]:
    return [
        {
            "ticket": match.ticket,
            "percent": match.similarity_percent,
            "title": _highlight(match.ticket.title, match.common_keywords, settings),
            "description": _highlight(
                match.ticket.description or "No description", match.common_keywords, settings
            ),
            "common_keywords": match.common_keywords,
        }
        for match in matches
    ]


def render_ticket_list(tickets: Iterable[Ticket]) -> str:
    """Render the listing page; callers pass tickets already in display order."""
    return LIST_TEMPLATE.render(
        tickets=list(tickets), badge=status_badge, page=ticket_page_name, style=Markup(_BASE_STYLE)
    )


def render_ticket_detail(
    ticket: Ticket,
    result: SimilarTickets,
    *,
    highlight: Optional[HighlightSettings] = None,
) -> str:
    settings = highlight or HighlightSettings()
    sections = [
        {
            "heading": "Similar Open Tickets",
            "blurb": "These tickets may be related and could be batched together:",
            "entries": _entries(result.similar, settings),
        },
        {
            "heading": "Similar Solved Tickets",
            "blurb": "These solved tickets have similar keywords and may have relevant solutions:",
            "entries": _entries(result.solved, settings),
        },
    ]
    return DETAIL_TEMPLATE.render(
        ticket=ticket,
        result=result,
        sections=sections,
        top_keywords=ticket.keywords[:DETAIL_KEYWORD_COUNT],
        badge=status_badge,
        page=ticket_page_name,
        style=Markup(_BASE_STYLE),
    )


def write_html(html: str, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    LOGGER.info("HTML page written to %s", output_path)
    return output_path
