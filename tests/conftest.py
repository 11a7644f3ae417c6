"""Shared fixtures: a scripted native bridge and a stand-in import backend."""

from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, Header, HTTPException

from nbfimport import main
from nbfimport.schemas.entry import ImportPayload
from nbfimport.services import pipeline, reporting, submission
from nbfimport.services.bridge import acquisition, validator

CSRF_TOKEN = "test-csrf-token"
SAMPLE_CSV = "date,metric,value,unit\n2024-01-01,sales,100,usd\n\n"


class FakeBridge:
    """Bridge that answers from a table and records every command."""

    def __init__(self, responses: dict[str, Any]):
        self.responses = responses
        self.calls: list[tuple[str, dict | None]] = []

    async def invoke(self, command: str, args: dict | None = None) -> Any:
        self.calls.append((command, args))
        response = self.responses[command]
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]


class RecordingSink:
    """Report sink that keeps notifications in memory."""

    def __init__(self):
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class RecordingLogger:
    """Stand-in for a structlog logger that keeps (level, event, fields)."""

    def __init__(self):
        self.events: list[tuple[str, str, dict]] = []

    def __getattr__(self, level: str):
        def log(event: str, *args: Any, **fields: Any) -> None:
            self.events.append((level, event, fields))

        return log

    def at(self, level: str) -> list[tuple[str, str, dict]]:
        return [record for record in self.events if record[0] == level]


@pytest.fixture
def make_bridge():
    """Build a FakeBridge; defaults describe a valid one-row import."""

    def _make(**overrides: Any) -> FakeBridge:
        responses = {
            "pick_csv_file": "/home/user/metrics.csv",
            "read_text": SAMPLE_CSV,
            "validate_csv": {"is_valid": True, "message": "CSV is valid (1 rows)"},
        }
        responses.update(overrides)
        return FakeBridge(responses)

    return _make


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def log_events(monkeypatch) -> RecordingLogger:
    """Capture log calls made by the pipeline modules."""
    recorder = RecordingLogger()
    for module in (main, pipeline, reporting, submission, acquisition, validator):
        monkeypatch.setattr(module, "logger", recorder)
    return recorder


@pytest.fixture
def backend_app() -> FastAPI:
    """Minimal persistence backend accepting ``POST /api/import``."""
    app = FastAPI()
    app.state.received = []
    app.state.fail_status = None

    @app.post("/api/import")
    async def import_entries(
        payload: ImportPayload,
        x_csrf_token: str | None = Header(default=None),
    ) -> dict:
        if x_csrf_token != CSRF_TOKEN:
            raise HTTPException(status_code=403, detail="Invalid CSRF token")
        if app.state.fail_status:
            raise HTTPException(status_code=app.state.fail_status, detail="Backend failure")
        app.state.received.append(payload)
        return {"imported": len(payload.entries)}

    return app


@pytest_asyncio.fixture
async def http_client(backend_app: FastAPI):
    """httpx client wired to the stand-in backend."""
    transport = httpx.ASGITransport(app=backend_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
