"""Configuration flow for the BWA Spa Manager integration.

This module implements the UI configuration flow used by Home Assistant to
set up the integration.  The flow prompts the user for the BWA cloud
credentials and validates them with a real login, which also tells us
which spa is linked to the account.  A second step asks which
accessories are installed on that spa, since the cloud does not report
it.  An options flow allows adjusting the polling interval and the
accessory selection after initial setup.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.config_entries import ConfigEntry, ConfigFlowResult
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api.client import BwaCloudClient
from .api.parameters import ACCESSORIES
from .const import (
    CONF_ACCESSORIES,
    CONF_DEVICE_ID,
    CONF_PASSWORD,
    CONF_SCAN_INTERVAL,
    CONF_USERNAME,
    DEFAULT_SCAN_INTERVAL,
    DOMAIN,
    SCAN_INTERVAL_OPTIONS,
)
from .exceptions import BwaAuthError, BwaConnectionError

_LOGGER = logging.getLogger(__name__)

# The blower is decoded but has no entity, so it is not offered.
CONFIGURABLE_ACCESSORIES: tuple[str, ...] = tuple(a for a in ACCESSORIES if a != "Blower")

DEFAULT_ACCESSORIES: Dict[str, bool] = {
    accessory: accessory in ("Pump1", "Light1") for accessory in CONFIGURABLE_ACCESSORIES
}


async def _async_validate_input(hass: HomeAssistant, data: Dict[str, Any]) -> Dict[str, Any]:
    """Log in with the user's credentials and return the linked spa.

    Raises :class:`BwaAuthError` or :class:`BwaConnectionError` when the
    login fails.
    """
    client = BwaCloudClient(
        async_get_clientsession(hass), data[CONF_USERNAME], data[CONF_PASSWORD]
    )
    device = await client.async_login()
    if not device.get("device_id"):
        raise BwaConnectionError("No spa is linked to this account")
    return device


def _accessories_schema(current: Dict[str, bool]) -> vol.Schema:
    return vol.Schema(
        {
            vol.Optional(accessory, default=bool(current.get(accessory, False))): bool
            for accessory in CONFIGURABLE_ACCESSORIES
        }
    )


class BwaSpaConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for BWA Spa Manager."""

    VERSION = 1

    def __init__(self) -> None:
        self._errors: Dict[str, str] = {}
        self._credentials: Dict[str, Any] = {}

    async def async_step_user(self, user_input: Dict[str, Any] | None = None) -> ConfigFlowResult:
        """Handle the credentials step of the config flow."""
        self._errors.clear()
        if user_input is not None:
            try:
                device = await _async_validate_input(self.hass, user_input)
            except BwaAuthError as err:
                _LOGGER.warning("BWA login rejected: %s", err)
                self._errors["base"] = "invalid_auth"
            except BwaConnectionError as err:
                _LOGGER.error("Error connecting to the BWA cloud: %s", err)
                self._errors["base"] = "cannot_connect"
            else:
                device_id = device["device_id"]
                await self.async_set_unique_id(device_id)
                self._abort_if_unique_id_configured()
                self._credentials = {
                    CONF_USERNAME: user_input[CONF_USERNAME],
                    CONF_PASSWORD: user_input[CONF_PASSWORD],
                    CONF_DEVICE_ID: device_id,
                }
                return await self.async_step_accessories()

        data_schema = vol.Schema(
            {
                vol.Required(CONF_USERNAME, default=(user_input or {}).get(CONF_USERNAME, "")): str,
                vol.Required(CONF_PASSWORD): str,
            }
        )
        return self.async_show_form(
            step_id="user",
            data_schema=data_schema,
            errors=self._errors,
        )

    async def async_step_accessories(
        self, user_input: Dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Ask which accessories are installed on the spa."""
        if user_input is not None:
            device_id = self._credentials[CONF_DEVICE_ID]
            return self.async_create_entry(
                title=f"Spa {device_id[-8:]}",
                data=self._credentials,
                options={
                    CONF_SCAN_INTERVAL: DEFAULT_SCAN_INTERVAL,
                    CONF_ACCESSORIES: {a: bool(user_input.get(a)) for a in CONFIGURABLE_ACCESSORIES},
                },
            )

        return self.async_show_form(
            step_id="accessories",
            data_schema=_accessories_schema(DEFAULT_ACCESSORIES),
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> "BwaSpaOptionsFlow":
        return BwaSpaOptionsFlow()


class BwaSpaOptionsFlow(config_entries.OptionsFlow):
    """Handle an options flow for BWA Spa Manager."""

    async def async_step_init(self, user_input: Dict[str, Any] | None = None) -> ConfigFlowResult:
        """Manage the polling interval and the installed accessories."""
        if user_input is not None:
            return self.async_create_entry(
                title="",
                data={
                    CONF_SCAN_INTERVAL: int(user_input[CONF_SCAN_INTERVAL]),
                    CONF_ACCESSORIES: {a: bool(user_input.get(a)) for a in CONFIGURABLE_ACCESSORIES},
                },
            )

        options = self.config_entry.options
        accessories = options.get(CONF_ACCESSORIES, DEFAULT_ACCESSORIES)
        schema = vol.Schema(
            {
                vol.Required(
                    CONF_SCAN_INTERVAL,
                    default=options.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL),
                ): vol.In(SCAN_INTERVAL_OPTIONS),
            }
        ).extend(_accessories_schema(accessories).schema)
        return self.async_show_form(step_id="init", data_schema=schema)
