from __future__ import annotations

import json
from pathlib import Path

import pytest

from shift_ledger.logging.error_log import ErrorLogBuffer, read_error_log
from shift_ledger.models.error_record import ErrorRecord

ROW = ["2024-05-01", "Alex", "Morning", "3", "4", "0.75", "2024-05-01T10:00:00Z", "Linen"]
KEYS = {"timestamp", "store", "error_type", "message", "row"}


def test_error_record_creation_and_json_line():
    rec = ErrorRecord.create("excel:data.xlsx#first", "APPEND_FAILED", "disk full", ROW)
    data = json.loads(rec.to_json_line())
    assert set(data.keys()) == KEYS
    assert data["timestamp"].endswith("Z")
    assert data["row"] == ROW
    assert data["error_type"] == "APPEND_FAILED"


def test_error_record_json_round_trip():
    rec = ErrorRecord.create("memory", "APPEND_FAILED", "boom", ROW)
    assert ErrorRecord.from_json_line(rec.to_json_line()) == rec


def test_error_record_non_ascii_preserved():
    rec = ErrorRecord.create("memory", "APPEND_FAILED", "échec", ["2024-05-01", "Zoë"])
    assert "Zoë" in rec.to_json_line()


@pytest.mark.parametrize("line", ["[]", '{"timestamp": "x"}', "not json"])
def test_error_record_from_bad_line(line):
    with pytest.raises(ValueError):
        ErrorRecord.from_json_line(line)


def test_error_record_is_frozen():
    rec = ErrorRecord.create("memory", "APPEND_FAILED", "boom")
    with pytest.raises(AttributeError):
        rec.message = "changed"


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("memory", "APPEND_FAILED", "one", ROW))
    buf.append(ErrorRecord.create("memory", "APPEND_FAILED", "two", ROW))
    path = buf.flush()
    assert path.exists()
    assert path.parent == Path("logs")
    assert path.name.startswith("errors-") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw).keys()) == KEYS
    assert len(buf) == 0


def test_error_log_buffer_multiple_flushes(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("memory", "APPEND_FAILED", "one", ROW))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(ErrorRecord.create("memory", "APPEND_FAILED", "two", ROW))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1


def test_read_error_log(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    buf.append(ErrorRecord.create("memory", "APPEND_FAILED", "one", ROW))
    buf.append(ErrorRecord.create("memory", "APPEND_FAILED", "two", ROW[:3]))
    path = buf.flush()
    with path.open("a", encoding="utf-8") as f:
        f.write("\n")
    records = list(read_error_log(path))
    assert [r.message for r in records] == ["one", "two"]
    assert records[1].row == ROW[:3]


def test_read_error_log_reports_line_number(tmp_path: Path):
    path = tmp_path / "errors.log"
    good = ErrorRecord.create("memory", "APPEND_FAILED", "one", ROW).to_json_line()
    path.write_text(good + "\n" + "garbage\n", encoding="utf-8")
    with pytest.raises(ValueError) as e:
        list(read_error_log(path))
    assert "errors.log:2" in str(e.value)
