"""Pytest configuration and fixtures."""

import httpx
import pytest

from gemina.api import GeminaClient
from gemina.config import Settings


class FakeGeminaApi:
    """In-memory stand-in for the Gemina API.

    Responses are queued per endpoint kind and served in order; every
    request is recorded for later assertions.
    """

    def __init__(self):
        self.upload_responses: list[httpx.Response] = []
        self.poll_responses: list[httpx.Response] = []
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            return self.upload_responses.pop(0)
        return self.poll_responses.pop(0)

    def client(self, settings: Settings) -> GeminaClient:
        http = httpx.Client(transport=httpx.MockTransport(self.handler))
        return GeminaClient(settings, http=http)

    @property
    def upload_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    @property
    def poll_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "GET"]


class FakeClock:
    """Monotonic clock that only moves when sleep is called."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def settings():
    """Settings with test credentials and no .env lookup."""
    return Settings(
        api_key="test-key",
        client_id="client-123",
        base_url="https://api.test/v1",
        poll_interval_ms=1000,
        max_attempts=10,
        _env_file=None,
    )


@pytest.fixture
def fake_api():
    """Create an empty fake API."""
    return FakeGeminaApi()


@pytest.fixture
def client(fake_api, settings):
    """GeminaClient wired to the fake API."""
    with fake_api.client(settings) as api_client:
        yield api_client


@pytest.fixture
def clock():
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def invoice_file(tmp_path):
    """Create a small stand-in invoice image."""
    path = tmp_path / "invoice.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\nfake image data")
    return path


@pytest.fixture
def prediction_body():
    """A typical prediction payload."""
    return {
        "external_id": "doc-1",
        "created": "2024-03-01T10:15:00",
        "timestamp": 1709288100.5,
        "total_amount": {
            "value": 117.0,
            "confidence": "high",
            "coordinates": {
                "original": [[10, 20], [110, 20], [110, 40], [10, 40]],
                "normalized": [[0.01, 0.02], [0.11, 0.02], [0.11, 0.04], [0.01, 0.04]],
                "relative": [],
            },
        },
        "currency": {"value": "ILS", "confidence": "medium", "coordinates": None},
        "supplier_name": {"value": "Acme Ltd", "confidence": "high"},
    }
