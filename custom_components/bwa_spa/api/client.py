"""Asynchronous client for the BWA cloud API.

This module defines :class:`BwaCloudClient`, a thin wrapper around an
:class:`aiohttp.ClientSession` talking to the Balboa Water Group cloud.
The cloud exposes two endpoints used by this integration:

* ``POST /users/login`` exchanges the account credentials for a bearer
  token and returns the spa linked to the account;
* ``POST /devices/sci`` forwards XML *SCI requests* to the spa
  controller, either to read a file such as ``PanelUpdate.txt`` or to
  deliver a payload to a controller target.

The client does not interpret panel frames itself; it returns the
base64 payload and leaves decoding to
:mod:`~custom_components.bwa_spa.panel`.  Authentication state lives in
a :class:`~custom_components.bwa_spa.models.SpaSession` owned by the
client.  Tokens are renewed once a day and whenever the cloud answers
an SCI request with ``401``.

The implementation deliberately avoids creating its own HTTP session.
Every instance is constructed with the session Home Assistant shares
between integrations, which makes the client easy to test with a fake
session.

Usage example::

    client = BwaCloudClient(async_get_clientsession(hass), "user", "secret")
    await client.async_login()
    encoded = await client.async_get_panel_update(client.session.device_id)

"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import aiohttp

from ..exceptions import BwaAuthError, BwaConnectionError
from ..models import SpaSession
from ..sci_request import (
    encode_button_press,
    encode_file_request,
    encode_set_temperature,
    extract_file_data,
)
from .parameters import API_BASE_URL, LOGIN_PATH, PANEL_UPDATE_FILE, SCI_PATH


_LOGGER = logging.getLogger(__name__)

# The cloud never says when a token expires; renewing daily is enough.
TOKEN_LIFETIME = timedelta(hours=24)
REQUEST_TIMEOUT = aiohttp.ClientTimeout(total=30)


class BwaCloudClient:
    """Asynchronous HTTPS client for the BWA cloud.

    Parameters
    ----------
    session: aiohttp.ClientSession
        The HTTP session used for every request.
    username: str
        The BWA account user name.
    password: str
        The BWA account password.
    base_url: str, optional
        Root URL of the cloud API.  Only overridden in tests.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        username: str,
        password: str,
        base_url: str = API_BASE_URL,
    ) -> None:
        self._http = session
        self._username: str = username
        self._password: str = password
        self._base_url: str = base_url.rstrip("/")
        self.session: SpaSession = SpaSession()

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    @property
    def token_expired(self) -> bool:
        if self.session.token is None or self.session.login_date is None:
            return True
        return datetime.now(timezone.utc) - self.session.login_date >= TOKEN_LIFETIME

    async def async_login(self) -> Dict[str, Any]:
        """Log in and cache the token and the spa linked to the account.

        Returns
        -------
        dict
            The spa record returned by the cloud (``device_id`` and
            friends).

        Raises
        ------
        BwaAuthError
            If the credentials are rejected.
        BwaConnectionError
            If the cloud cannot be reached or answers unexpectedly.
        """
        _LOGGER.debug("Logging in to the BWA cloud as %s", self._username)
        status, data = await self._async_post(
            LOGIN_PATH,
            json={"username": self._username, "password": self._password},
            authenticate=False,
        )
        if status == 200 and isinstance(data, dict) and data.get("token"):
            self.session.token = data["token"]
            self.session.login_date = datetime.now(timezone.utc)
            self.session.device = dict(data.get("device") or {})
            _LOGGER.debug("Logged in, spa %s", self.session.device_id)
            return self.session.device

        self.session.clear()
        if status == 403:
            raise BwaAuthError("Access forbidden")
        if status == 401:
            message = data.get("message") if isinstance(data, dict) else None
            raise BwaAuthError(message or "Invalid credentials")
        _LOGGER.debug("Unexpected login response %s: %s", status, data)
        raise BwaConnectionError(f"Login unsuccessful (HTTP {status})")

    async def async_ensure_token(self) -> None:
        """Log in again if there is no token or it is a day old."""
        if self.token_expired:
            await self.async_login()

    # ------------------------------------------------------------------
    # Spa operations
    # ------------------------------------------------------------------

    async def async_get_panel_update(self, device_id: str) -> str:
        """Fetch the base64 ``PanelUpdate`` frame of a spa.

        Raises
        ------
        MalformedFrameError
            If the reply does not carry the file contents.
        """
        _LOGGER.debug("Getting panel update for %s", device_id)
        reply = await self.async_sci_request(
            encode_file_request(device_id, PANEL_UPDATE_FILE)
        )
        return extract_file_data(reply)

    async def async_press_button(self, device_id: str, button_id: int) -> str:
        """Press a virtual panel button."""
        _LOGGER.debug("Sending Button:%s command for %s", button_id, device_id)
        return await self.async_sci_request(encode_button_press(device_id, button_id))

    async def async_set_temperature(self, device_id: str, raw_value: int) -> str:
        """Change the setpoint; ``raw_value`` is in the controller's units."""
        _LOGGER.debug("Sending SetTemp:%s command for %s", raw_value, device_id)
        return await self.async_sci_request(encode_set_temperature(device_id, raw_value))

    async def async_sci_request(self, body: str) -> str:
        """Send an SCI request body and return the XML reply.

        A ``401`` answer means the token was revoked early; the client
        logs in again and retries the request exactly once.
        """
        await self.async_ensure_token()
        status, reply = await self._async_post(SCI_PATH, data=body, xml=True)
        if status == 401:
            _LOGGER.info("BWA token rejected, logging in again")
            self.session.clear()
            await self.async_login()
            status, reply = await self._async_post(SCI_PATH, data=body, xml=True)
        if status == 401:
            raise BwaAuthError("BWA cloud rejected a fresh token")
        if status != 200:
            raise BwaConnectionError(f"SCI request failed (HTTP {status})")
        return reply

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    async def _async_post(
        self,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[str] = None,
        xml: bool = False,
        authenticate: bool = True,
    ) -> tuple[int, Any]:
        """POST to the cloud and return the status with the decoded body.

        JSON replies are decoded into Python objects, XML replies are
        returned as text.
        """
        headers = {
            "Content-Type": "application/xml" if xml else "application/json",
        }
        if authenticate and self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        url = f"{self._base_url}{path}"
        try:
            async with self._http.post(
                url,
                json=json,
                data=data,
                headers=headers,
                timeout=REQUEST_TIMEOUT,
            ) as resp:
                if xml:
                    body: Any = await resp.text()
                else:
                    try:
                        body = await resp.json(content_type=None)
                    except ValueError:
                        body = None
                return resp.status, body
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise BwaConnectionError(f"Error talking to the BWA cloud: {err}") from err
