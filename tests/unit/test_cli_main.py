from __future__ import annotations

import json
from pathlib import Path

import pytest

from shift_ledger.cli import main as cli_main

PAYLOAD = {
    "date": "2024-05-01",
    "housekeeper": "Alex",
    "shift": "Morning",
    "completedCount": 3,
    "totalTasks": 4,
    "incomplete": ["Linen"],
}


def _write_memory_config(workdir: Path) -> Path:
    cfg = workdir / "config" / "ledger.yml"
    cfg.write_text("store:\n  backend: memory\n", encoding="utf-8")
    return cfg


def test_cli_missing_config(temp_workdir: Path, capsys):
    code = cli_main(["list"])
    assert code == 1
    assert "ERROR config: config file not found" in capsys.readouterr().out


def test_cli_requires_command(temp_workdir: Path):
    with pytest.raises(SystemExit):
        cli_main([])


def test_cli_submit_memory(temp_workdir: Path, capsys):
    _write_memory_config(temp_workdir)
    code = cli_main(["submit", "--payload", json.dumps(PAYLOAD)])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO appended store=memory" in out
    assert '"Linen"' in out


def test_cli_submit_payload_file(temp_workdir: Path, capsys):
    _write_memory_config(temp_workdir)
    payload_file = temp_workdir / "payload.json"
    payload_file.write_text(json.dumps(PAYLOAD), encoding="utf-8")
    assert cli_main(["submit", "--payload-file", str(payload_file)]) == 0


def test_cli_submit_invalid_json(temp_workdir: Path, capsys):
    _write_memory_config(temp_workdir)
    code = cli_main(["submit", "--payload", "{not json"])
    assert code == 1
    assert "ERROR payload:" in capsys.readouterr().out


def test_cli_submit_empty_object_is_accepted(temp_workdir: Path, capsys):
    _write_memory_config(temp_workdir)
    assert cli_main(["submit", "--payload", "{}"]) == 0


def test_cli_list_empty_memory(temp_workdir: Path, capsys):
    _write_memory_config(temp_workdir)
    code = cli_main(["list", "--json"])
    out = capsys.readouterr().out
    assert code == 0
    first_line = out.splitlines()[0]
    assert json.loads(first_line) == {
        "header": [
            "date",
            "housekeeper",
            "shift",
            "completedCount",
            "totalTasks",
            "completionRate",
            "submittedAt",
            "incompleteList",
        ],
        "rows": [],
    }
    assert "SUMMARY records=0 housekeepers=0 completed=0 total=0 avg_rate=0" in out


def test_cli_debug_mode(temp_workdir: Path, capsys):
    _write_memory_config(temp_workdir)
    code = cli_main(["--debug", "list"])
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG store=memory rate_mode=fraction schema_source=header" in out


def test_cli_env_file_overrides_rate_mode(temp_workdir: Path, capsys, monkeypatch):
    _write_memory_config(temp_workdir)
    # registered with monkeypatch so the value dotenv writes is undone afterwards
    monkeypatch.setenv("SHIFT_LEDGER_RATE_MODE", "fraction")
    (temp_workdir / ".env").write_text("SHIFT_LEDGER_RATE_MODE=percent\n", encoding="utf-8")
    code = cli_main(["--debug", "list"])
    assert code == 0
    assert "rate_mode=percent" in capsys.readouterr().out


def test_cli_custom_config_path(temp_workdir: Path, capsys):
    other = temp_workdir / "other.yml"
    other.write_text("rate_mode: percent\nstore:\n  backend: memory\n", encoding="utf-8")
    assert cli_main(["--config", str(other), "submit", "--payload", json.dumps(PAYLOAD)]) == 0
    assert '"75"' in capsys.readouterr().out
