from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ticket_organizer.corpus import load_tickets_csv

CSV_TEXT = """ticket_number,title,description,category,status,created_at
101,Cannot access email account,Outlook keeps asking for password,Email Issues,Open,2024-03-01T09:15:00Z
1234567,Bad number,Should be skipped,Email Issues,Open,
102,Email login fails,Outlook password prompt repeats,Email Issues,Solved,2024-03-01 12:02:00+02:00
103,VPN drops,Office VPN drops,Network Connectivity,Open,
104,Unknown category,Skipped too,Plumbing,Open,not a date
"""


@pytest.fixture(name="tickets_csv")
def fixture_tickets_csv(tmp_path):
    path = tmp_path / "tickets.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")
    return path


def test_load_tickets_csv_validates_rows(tickets_csv, caplog):
    caplog.set_level("WARNING", logger="ticket_organizer.corpus")

    tickets = load_tickets_csv(tickets_csv)

    assert [ticket.ticket_number for ticket in tickets] == [101, 102, 103]
    assert "Skipping row 3" in caplog.text
    assert "Skipping row 6" in caplog.text


def test_load_tickets_csv_parses_timestamps_as_utc(tickets_csv):
    before = datetime.now(timezone.utc)
    tickets = load_tickets_csv(tickets_csv)

    assert tickets[0].created_at == datetime(2024, 3, 1, 9, 15, tzinfo=timezone.utc)
    assert tickets[1].created_at == datetime(2024, 3, 1, 10, 2, tzinfo=timezone.utc)
    assert tickets[2].created_at >= before


def test_loaded_tickets_have_distinct_ids_and_keywords(tickets_csv):
    tickets = load_tickets_csv(tickets_csv)

    assert len({ticket.id for ticket in tickets}) == 3
    assert tickets[1].keywords == ["email", "login", "fails", "outlook", "password", "prompt", "repeats"]


def test_load_tickets_csv_accepts_byte_order_mark(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text("\ufeff" + CSV_TEXT, encoding="utf-8")

    tickets = load_tickets_csv(path)

    assert [ticket.ticket_number for ticket in tickets] == [101, 102, 103]


def test_skip_warning_reports_file_line_after_multiline_field(tmp_path, caplog):
    caplog.set_level("WARNING", logger="ticket_organizer.corpus")
    path = tmp_path / "tickets.csv"
    path.write_text(
        "ticket_number,title,description,category,status\n"
        '101,Printer jam,"Paper stuck\nin tray two",Hardware Issues,Open\n'
        "abc,Bad number,Skipped,Hardware Issues,Open\n",
        encoding="utf-8",
    )

    tickets = load_tickets_csv(path)

    assert [ticket.ticket_number for ticket in tickets] == [101]
    assert tickets[0].description == "Paper stuck\nin tray two"
    assert "Skipping row 4 in" in caplog.text
