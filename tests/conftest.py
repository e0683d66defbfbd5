"""
Pytest configuration for the tourism flow records API.

Provides fixtures for:
- Temporary primary store and grouped index files
- Settings pointed at those files
- A FastAPI test client
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from turismo_api.app.core.config import settings
from turismo_api.app.main import app


def make_record(record_id: str, origin: str, destination: str, start: str, total: int) -> Dict[str, Any]:
    return {
        "_id": record_id,
        "from": {"comunidad": origin, "provincia": f"{origin} provincia"},
        "to": {"comunidad": destination, "provincia": f"{destination} provincia"},
        "timeRange": {"fecha_inicio": start, "fecha_fin": start[:8] + "28", "period": start[:4] + "M" + start[5:7]},
        "total": total,
    }


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    return [
        make_record("id-0", "Andalucía", "Comunidad de Madrid", "2024-01-01", 100),
        make_record("id-1", "Cataluña", "Illes Balears", "2024-01-01", 200),
        make_record("id-2", "Comunidad de Madrid", "Andalucía", "2024-02-01", 300),
        make_record("id-3", "País Vasco", "Castilla y León", "2024-02-01", 400),
        make_record("id-4", "Galicia", "Comunidad de Madrid", "2024-03-01", 500),
    ]


@pytest.fixture
def data_file(tmp_path: Path, sample_records: List[Dict[str, Any]]) -> Path:
    path = tmp_path / "TurismoComunidades.json"
    path.write_text(json.dumps(sample_records, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def grouped_file(tmp_path: Path, sample_records: List[Dict[str, Any]]) -> Path:
    grouped = {
        "Comunidad de Madrid": [sample_records[4], sample_records[0]],
        "Castilla y León": [sample_records[3]],
        "Aragón": [],
    }
    path = tmp_path / "Comunidades_Agrupadas.json"
    path.write_text(json.dumps(grouped, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def configured_store(monkeypatch: pytest.MonkeyPatch, data_file: Path, grouped_file: Path) -> None:
    """Point the application settings at the temporary data files."""
    monkeypatch.setattr(settings, "data_file", str(data_file))
    monkeypatch.setattr(settings, "grouped_file", str(grouped_file))


@pytest.fixture
def client(configured_store: None) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
