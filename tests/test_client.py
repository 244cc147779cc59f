"""Tests for the BWA cloud client.

A fake aiohttp session records every POST and replays queued responses,
so the login and token handling can be exercised without network
access.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import aiohttp
import pytest

from custom_components.bwa_spa.api.client import BwaCloudClient
from custom_components.bwa_spa.exceptions import BwaAuthError, BwaConnectionError

DEVICE_ID = "00000000-00000000-001527FF-FF09818B"
LOGIN_OK = {"token": "abc", "device": {"device_id": DEVICE_ID}}
PANEL_REPLY = "<sci_reply><file_system><data>AAEC</data></file_system></sci_reply>"


class FakeResponse:
    def __init__(self, status: int, body) -> None:
        self.status = status
        self._body = body

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc) -> None:
        return None

    async def json(self, content_type=None):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body

    async def text(self) -> str:
        return self._body


class FakeSession:
    """Stub of aiohttp.ClientSession replaying queued responses."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.calls: list[dict] = []

    def post(self, url, *, json=None, data=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "data": data, "headers": headers})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _client(session: FakeSession) -> BwaCloudClient:
    return BwaCloudClient(session, "user", "secret", base_url="https://example.test/")


@pytest.mark.asyncio
async def test_login_caches_token_and_device() -> None:
    session = FakeSession(FakeResponse(200, LOGIN_OK))
    client = _client(session)
    device = await client.async_login()
    assert device == {"device_id": DEVICE_ID}
    assert client.session.token == "abc"
    assert client.session.device_id == DEVICE_ID
    assert client.token_expired is False
    call = session.calls[0]
    assert call["url"] == "https://example.test/users/login"
    assert call["json"] == {"username": "user", "password": "secret"}
    assert "Authorization" not in call["headers"]


@pytest.mark.asyncio
async def test_login_rejected_with_message() -> None:
    client = _client(FakeSession(FakeResponse(401, {"message": "Wrong password"})))
    with pytest.raises(BwaAuthError, match="Wrong password"):
        await client.async_login()
    assert client.session.token is None


@pytest.mark.asyncio
async def test_login_forbidden() -> None:
    client = _client(FakeSession(FakeResponse(403, None)))
    with pytest.raises(BwaAuthError, match="forbidden"):
        await client.async_login()


@pytest.mark.asyncio
async def test_login_unexpected_status() -> None:
    client = _client(FakeSession(FakeResponse(500, ValueError("no json"))))
    with pytest.raises(BwaConnectionError):
        await client.async_login()


@pytest.mark.asyncio
async def test_network_errors_become_connection_errors() -> None:
    client = _client(FakeSession(aiohttp.ClientConnectionError("down")))
    with pytest.raises(BwaConnectionError):
        await client.async_login()
    client = _client(FakeSession(asyncio.TimeoutError()))
    with pytest.raises(BwaConnectionError):
        await client.async_login()


@pytest.mark.asyncio
async def test_panel_update_logs_in_first() -> None:
    session = FakeSession(FakeResponse(200, LOGIN_OK), FakeResponse(200, PANEL_REPLY))
    client = _client(session)
    assert await client.async_get_panel_update(DEVICE_ID) == "AAEC"
    sci = session.calls[1]
    assert sci["url"] == "https://example.test/devices/sci"
    assert sci["headers"]["Authorization"] == "Bearer abc"
    assert sci["headers"]["Content-Type"] == "application/xml"
    assert '<get_file path="PanelUpdate.txt"/>' in sci["data"]


@pytest.mark.asyncio
async def test_rejected_token_triggers_one_relogin() -> None:
    session = FakeSession(
        FakeResponse(200, LOGIN_OK),
        FakeResponse(401, ""),
        FakeResponse(200, {"token": "fresh", "device": {"device_id": DEVICE_ID}}),
        FakeResponse(200, "<ok/>"),
    )
    client = _client(session)
    await client.async_press_button(DEVICE_ID, 17)
    assert len(session.calls) == 4
    assert session.calls[3]["headers"]["Authorization"] == "Bearer fresh"
    assert '<device_request target_name="Button">17</device_request>' in session.calls[3]["data"]


@pytest.mark.asyncio
async def test_second_rejection_is_an_auth_error() -> None:
    session = FakeSession(
        FakeResponse(200, LOGIN_OK),
        FakeResponse(401, ""),
        FakeResponse(200, LOGIN_OK),
        FakeResponse(401, ""),
    )
    with pytest.raises(BwaAuthError):
        await _client(session).async_set_temperature(DEVICE_ID, 71)


@pytest.mark.asyncio
async def test_stale_token_is_renewed() -> None:
    session = FakeSession(
        FakeResponse(200, LOGIN_OK),
        FakeResponse(200, {"token": "new", "device": {"device_id": DEVICE_ID}}),
        FakeResponse(200, "<ok/>"),
    )
    client = _client(session)
    await client.async_login()
    client.session.login_date = datetime.now(timezone.utc) - timedelta(hours=25)
    await client.async_set_temperature(DEVICE_ID, 102)
    assert session.calls[1]["url"].endswith("/users/login")
    assert session.calls[2]["headers"]["Authorization"] == "Bearer new"
    assert ">102</device_request>" in session.calls[2]["data"]


@pytest.mark.asyncio
async def test_sci_server_error() -> None:
    session = FakeSession(FakeResponse(200, LOGIN_OK), FakeResponse(502, "bad gateway"))
    with pytest.raises(BwaConnectionError):
        await _client(session).async_get_panel_update(DEVICE_ID)
