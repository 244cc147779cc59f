"""Home Assistant integration for BWA (Balboa) cloud connected spas.

This module contains the entry points required by Home Assistant to set
up and tear down the integration.  The integration makes use of a
:class:`~homeassistant.helpers.update_coordinator.DataUpdateCoordinator`
to poll the BWA cloud for the spa's panel state at regular intervals.
The coordinator holds an instance of
:class:`~custom_components.bwa_spa.api.client.BwaCloudClient` which is
responsible for the HTTPS communication and the login token.
"""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api.client import BwaCloudClient
from .const import (
    CONF_ACCESSORIES,
    CONF_DEVICE_ID,
    CONF_PASSWORD,
    CONF_SCAN_INTERVAL,
    CONF_USERNAME,
    DEFAULT_SCAN_INTERVAL,
    DOMAIN,
    PLATFORMS,
)
from .coordinator import BwaSpaDataUpdateCoordinator
from .exceptions import BwaSpaError

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up a spa from a config entry.

    This method logs in to the BWA cloud, creates the data coordinator,
    kicks off the first data refresh and forwards the entry to the
    platform modules.
    """
    hass.data.setdefault(DOMAIN, {})

    device_id: str = entry.data[CONF_DEVICE_ID]
    scan_interval: int = entry.options.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL)
    configuration: dict[str, bool] = entry.options.get(CONF_ACCESSORIES, {})

    _LOGGER.debug("Setting up BWA spa entry %s for spa %s", entry.entry_id, device_id)

    client = BwaCloudClient(
        async_get_clientsession(hass),
        entry.data[CONF_USERNAME],
        entry.data[CONF_PASSWORD],
    )
    try:
        await client.async_login()
    except BwaSpaError as err:
        _LOGGER.error("Failed to log in to the BWA cloud: %s", err)
        return False

    coordinator = BwaSpaDataUpdateCoordinator(
        hass, client, device_id, configuration, scan_interval, config_entry=entry
    )

    # Raises ConfigEntryNotReady when the first poll fails.
    await coordinator.async_config_entry_first_refresh()

    hass.data[DOMAIN][entry.entry_id] = {
        "client": client,
        "coordinator": coordinator,
    }

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    # Reload when the polling interval or the accessory selection change.
    entry.async_on_unload(entry.add_update_listener(_async_update_listener))

    return True


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry after its options changed."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        data: dict[str, Any] = hass.data[DOMAIN].pop(entry.entry_id, {})
        _LOGGER.debug("Unloaded BWA spa entry %s (%s)", entry.entry_id, list(data))
    return unload_ok
