from __future__ import annotations

import sys
from importlib import util
from pathlib import Path

import pytest

from ticket_organizer import workflow as workflow_module
from ticket_organizer.workflow import TicketNotFoundError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
MODULE_PATH = PROJECT_ROOT / "tools" / "find_similar_tickets.py"
spec = util.spec_from_file_location("ticket_organizer_tools.find_similar_tickets", MODULE_PATH)
assert spec and spec.loader
similar_tool = util.module_from_spec(spec)
sys.modules[spec.name] = similar_tool
spec.loader.exec_module(similar_tool)

CSV_TEXT = """ticket_number,title,description,category,status
101,Cannot access email account,Outlook keeps asking for password,Email Issues,Open
102,Email login fails,Outlook password prompt repeats,Email Issues,Solved
"""


@pytest.fixture(name="workspace")
def fixture_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    (tmp_path / "tickets.csv").write_text(CSV_TEXT, encoding="utf-8")
    (tmp_path / "config.yaml").write_text("logging:\n  console:\n    enabled: false\n", encoding="utf-8")
    monkeypatch.setattr(workflow_module, "configure_logging", lambda *args, **kwargs: None)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_tool_prints_matches(workspace, capsys):
    result = similar_tool.main(["tickets.csv", "--ticket-number", "101", "--config", "config.yaml"])

    assert [match.ticket.ticket_number for match in result.solved] == [102]
    assert "Similar solved tickets (1 found)" in capsys.readouterr().out


def test_tool_writes_html_under_reporting_directory(workspace):
    similar_tool.main(["tickets.csv", "--ticket-number", "102", "--config", "config.yaml", "--html", "t.html"])

    html = (workspace / "reports" / "t.html").read_text(encoding="utf-8")
    assert "Similar Open Tickets (1 found)" in html


def test_tool_exits_when_ticket_missing(workspace):
    with pytest.raises(SystemExit) as excinfo:
        similar_tool.main(["tickets.csv", "--ticket-number", "555", "--config", "config.yaml"])

    assert excinfo.value.code == 1


def test_tool_exits_when_corpus_missing(workspace):
    with pytest.raises(SystemExit) as excinfo:
        similar_tool.main(["absent.csv", "--ticket-number", "101", "--config", "config.yaml"])

    assert excinfo.value.code == 1


def test_tool_passes_options_through(monkeypatch):
    captured = {}

    def _fake_show(options, *, base_dir):
        captured["options"] = options
        raise TicketNotFoundError("nope")

    monkeypatch.setattr(similar_tool, "show_similar_tickets", _fake_show)

    with pytest.raises(SystemExit):
        similar_tool.main(["t.csv", "--ticket-id", "42", "--limit", "3", "--csv", "m.csv", "--simple-console"])

    options = captured["options"]
    assert options.ticket_id == 42
    assert options.ticket_number is None
    assert options.limit == 3
    assert options.csv_output == "m.csv"
    assert options.simple_console is True


def test_ticket_selector_is_required():
    with pytest.raises(SystemExit) as excinfo:
        similar_tool.build_parser().parse_args(["tickets.csv"])

    assert excinfo.value.code == 2
