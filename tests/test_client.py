from __future__ import annotations

import json
from datetime import date
from typing import Any, Dict, List, Optional

import requests

from turismo_client import TurismoAPI

RECORDS = [
    {"_id": "a", "to": {"comunidad": "Galicia"}, "timeRange": {"fecha_inicio": "2024-01-01"}},
    {"_id": "b", "to": {"comunidad": "Aragón"}, "timeRange": {"fecha_inicio": "2024-02-01"}},
    {"_id": "c", "to": {"comunidad": "Galicia"}, "timeRange": {"fecha_inicio": "2024-01-01"}},
    {"_id": "d", "timeRange": {"fecha_inicio": "2024-03-01"}},
]


def make_response(status: int, body: Any = None, text: Optional[str] = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    if text is not None:
        response._content = text.encode("utf-8")
        response.headers["Content-Type"] = "text/plain; charset=utf-8"
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = b""
    response.encoding = "utf-8"
    return response


class StubSession:
    """Records requests and answers them with queued responses."""

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def request(self, **kwargs: Any) -> requests.Response:
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        response.url = kwargs["url"]
        return response


def test_list_records_without_pagination() -> None:
    session = StubSession(make_response(200, RECORDS))
    api = TurismoAPI(base_url="http://api.test/", session=session)

    records, error = api.list_records()

    assert error is None
    assert records == RECORDS
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == "http://api.test/api/turismo"
    assert session.calls[0]["params"] is None


def test_list_records_sends_page_and_size_together() -> None:
    session = StubSession(make_response(200, []), make_response(200, []))
    api = TurismoAPI(base_url="http://api.test", session=session)

    api.list_records(page=1, size=10)
    api.list_records(page=1)

    assert session.calls[0]["params"] == {"page": 1, "size": 10}
    assert session.calls[1]["params"] is None


def test_create_record_returns_confirmation_text() -> None:
    session = StubSession(make_response(200, text="Record added successfully."))
    api = TurismoAPI(base_url="http://api.test", session=session)
    payload = {"from": {"comunidad": "Galicia"}, "timeRange": {"fecha_inicio": "2024-01-01"}}

    message, error = api.create_record(payload)

    assert error is None
    assert message == "Record added successfully."
    assert session.calls[0]["method"] == "POST"
    assert session.calls[0]["json"] == payload


def test_plain_text_error_is_reported() -> None:
    session = StubSession(make_response(404, text="Record not found."))
    api = TurismoAPI(base_url="http://api.test", session=session)

    message, error = api.delete_record("missing")

    assert message is None
    assert error == {"status_code": 404, "message": "Record not found."}
    assert session.calls[0]["url"] == "http://api.test/api/turismo/missing"


def test_json_error_detail_is_reported() -> None:
    session = StubSession(make_response(404, {"detail": "Record not found."}))
    api = TurismoAPI(base_url="http://api.test", session=session)

    record, error = api.get_record("missing")

    assert record is None
    assert error == {"status_code": 404, "message": "Record not found."}


def test_update_record_uses_put_on_record_path() -> None:
    session = StubSession(make_response(200, text="Record updated successfully."))
    api = TurismoAPI(base_url="http://api.test", session=session)

    message, error = api.update_record("id 1", {"total": 3})

    assert error is None
    assert session.calls[0]["method"] == "PUT"
    assert session.calls[0]["url"] == "http://api.test/api/turismo/id%201"


def test_community_name_is_percent_encoded() -> None:
    session = StubSession(make_response(200, RECORDS[:1]))
    api = TurismoAPI(base_url="http://api.test", session=session)

    records, error = api.get_community_records("Castilla y León")

    assert error is None
    assert records == RECORDS[:1]
    assert session.calls[0]["url"] == "http://api.test/api/turismo/community/Castilla%20y%20Le%C3%B3n"


def test_network_failure_is_reported_without_status() -> None:
    session = StubSession(requests.ConnectionError("connection refused"))
    api = TurismoAPI(base_url="http://api.test", session=session)

    records, error = api.list_records()

    assert records == []
    assert error["status_code"] is None
    assert "connection refused" in error["message"]


def test_base_url_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("TURISMO_BASE_URL", "http://env.test:9000/")

    assert TurismoAPI(session=StubSession()).base_url == "http://env.test:9000"


def test_filter_by_start_date() -> None:
    assert [r["_id"] for r in TurismoAPI.filter_by_start_date(RECORDS, date(2024, 1, 1))] == ["a", "c"]
    assert [r["_id"] for r in TurismoAPI.filter_by_start_date(RECORDS, "2024-03-01")] == ["d"]
    assert TurismoAPI.filter_by_start_date(RECORDS, "2030-01-01") == []
    assert TurismoAPI.filter_by_start_date(RECORDS, None) == RECORDS


def test_community_codes_are_distinct_and_sorted() -> None:
    assert TurismoAPI.community_codes(RECORDS) == ["Aragón", "Galicia"]


def test_plus_in_community_name_is_percent_encoded() -> None:
    session = StubSession(make_response(404, {"detail": "No records found for community A B"}))
    api = TurismoAPI(base_url="http://api.test", session=session)

    records, error = api.get_community_records("A+B")

    assert records == []
    assert error["status_code"] == 404
    assert session.calls[0]["url"] == "http://api.test/api/turismo/community/A%2BB"
