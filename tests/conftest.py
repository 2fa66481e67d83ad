# Shared pytest fixtures
from __future__ import annotations

import tempfile
from datetime import UTC, datetime
from pathlib import Path

import pytest

from shift_ledger.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DATABASE_URL", "PGDSN", "SHIFT_LEDGER_RATE_MODE"):
        monkeypatch.delenv(name, raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2024, 5, 1, 10, 0, 0, tzinfo=UTC)


@pytest.fixture()
def sample_config_yaml() -> str:
    return """rate_mode: fraction
schema_source: header
store:
  backend: excel
  path: ./data/submissions.xlsx
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "ledger.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_payload() -> dict:
    return {
        "date": "2024-05-01",
        "housekeeper": "Alex",
        "shift": "Morning",
        "completedCount": 3,
        "totalTasks": 4,
        "incomplete": ["Linen"],
    }
