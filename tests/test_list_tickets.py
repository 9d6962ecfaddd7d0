from __future__ import annotations

import sys
from importlib import util
from pathlib import Path

import pytest

from ticket_organizer import workflow as workflow_module

PROJECT_ROOT = Path(__file__).resolve().parents[1]
MODULE_PATH = PROJECT_ROOT / "tools" / "list_tickets.py"
spec = util.spec_from_file_location("ticket_organizer_tools.list_tickets", MODULE_PATH)
assert spec and spec.loader
list_tool = util.module_from_spec(spec)
sys.modules[spec.name] = list_tool
spec.loader.exec_module(list_tool)


def test_list_tool_prints_sample_corpus(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("logging:\n  console:\n    enabled: false\n", encoding="utf-8")
    monkeypatch.setattr(workflow_module, "configure_logging", lambda *args, **kwargs: None)

    sample = PROJECT_ROOT / "config" / "sample_tickets.csv"
    lines = list_tool.main([str(sample), "--config", str(config_path)])

    output = capsys.readouterr().out.splitlines()
    assert output == lines
    assert output[0].split("  ")[0] == "Ticket #"
    assert output[2].startswith("#105")
    assert output[-1] == "Total tickets: 5"


def test_list_tool_exits_on_bad_config(tmp_path: Path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("logging: [broken\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        list_tool.main([str(tmp_path / "tickets.csv"), "--config", str(config_path)])

    assert excinfo.value.code == 1
