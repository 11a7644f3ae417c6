"""Tests for the backend submission client."""

import json

import httpx
import pytest

from nbfimport.errors import SubmissionError
from nbfimport.schemas.entry import Entry
from nbfimport.services.submission import SubmissionClient

from conftest import CSRF_TOKEN

ENTRIES = [
    Entry(date="2024-01-01", metric="sales", value=100, unit="usd"),
    Entry(date="2024-01-02", metric="sales", value=0, unit=None),
]


@pytest.mark.asyncio
async def test_submit_posts_entries(http_client, backend_app):
    """Test entries reach the backend."""
    client = SubmissionClient("http://testserver", CSRF_TOKEN, client=http_client)

    ack = await client.submit(ENTRIES)

    assert ack.status_code == 200
    assert ack.entries == 2
    [payload] = backend_app.state.received
    assert payload.entries == ENTRIES


@pytest.mark.asyncio
async def test_submit_wire_format():
    """Test request method, URL, headers and body."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = request.content
        return httpx.Response(201, json={"ok": True})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        client = SubmissionClient("https://app.example/", "tok", client=http)
        await client.submit(ENTRIES[1:])

    assert seen["method"] == "POST"
    assert seen["url"] == "https://app.example/api/import"
    assert seen["headers"]["content-type"] == "application/json"
    assert seen["headers"]["x-csrf-token"] == "tok"
    assert json.loads(seen["body"]) == {
        "entries": [{"date": "2024-01-02", "metric": "sales", "value": 0.0, "unit": None}]
    }


@pytest.mark.asyncio
async def test_submit_rejected_token(http_client, backend_app):
    """Test rejected token raises SubmissionError with status."""
    client = SubmissionClient("http://testserver", "wrong", client=http_client)

    with pytest.raises(SubmissionError) as excinfo:
        await client.submit(ENTRIES)

    assert excinfo.value.status_code == 403
    assert backend_app.state.received == []


@pytest.mark.asyncio
async def test_submit_server_error(http_client, backend_app):
    """Test server error raises SubmissionError."""
    backend_app.state.fail_status = 500
    client = SubmissionClient("http://testserver", CSRF_TOKEN, client=http_client)

    with pytest.raises(SubmissionError, match="HTTP 500"):
        await client.submit(ENTRIES)


@pytest.mark.asyncio
async def test_submit_network_error():
    """Test network error raises SubmissionError."""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        client = SubmissionClient("http://backend", "tok", client=http)
        with pytest.raises(SubmissionError) as excinfo:
            await client.submit(ENTRIES)

    assert excinfo.value.status_code is None
    assert "connection refused" in excinfo.value.message


@pytest.mark.asyncio
async def test_submit_timeout():
    """Test timeout raises SubmissionError."""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        client = SubmissionClient("http://backend", "tok", client=http)
        with pytest.raises(SubmissionError, match="timed out"):
            await client.submit(ENTRIES)


@pytest.mark.asyncio
async def test_close_leaves_injected_client_open(http_client):
    """Test injected client is not closed."""
    client = SubmissionClient("http://testserver", CSRF_TOKEN, client=http_client)
    await client.close()
    assert not http_client.is_closed


@pytest.mark.asyncio
async def test_owned_client_closed_on_exit():
    """Test owned client is closed on exit."""
    async with SubmissionClient("http://backend", "tok") as client:
        http = await client._get_client()
    assert http.is_closed
    assert client._client is None
