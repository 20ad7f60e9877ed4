from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest
import requests


class DummyResponse:
    def __init__(self, status_code: int = 200, body: Any = None, content: Optional[bytes] = None) -> None:
        self.status_code = status_code
        if content is not None:
            self.content = content
        elif isinstance(body, (bytes, str)):
            self.content = body.encode("utf-8") if isinstance(body, str) else body
        else:
            self.content = json.dumps(body).encode("utf-8")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.content)


class DummySession:
    """Replays queued responses and records each GET."""

    def __init__(self, *responses: Any) -> None:
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def get(self, url: str, **kwargs: Any) -> DummyResponse:
        self.calls.append({"url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"Unexpected request to {url}")
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def raw_record() -> Dict[str, Any]:
    return {
        "id": "928094",
        "gen": "Troglodytes",
        "sp": "troglodytes",
        "en": "Eurasian Wren",
        "rec": "J. Doe",
        "cnt": "United Kingdom",
        "loc": "Wytham Woods",
        "lat": "51.77",
        "lon": "-1.33",
        "date": "2024-05-01",
        "time": "05:30",
        "type": "song",
        "q": "A",
        "length": "0:42",
        "smp": "48000",
        "lic": "CC-BY",
        "file": "https://xeno-canto.org/928094/download",
        "file-name": "XC928094-wren.mp3",
    }


@pytest.fixture
def make_session():
    return DummySession


@pytest.fixture
def api_ok(raw_record):
    return DummyResponse(200, {"numRecordings": "1", "recordings": [raw_record]})


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")


@pytest.fixture
def make_response():
    return DummyResponse
