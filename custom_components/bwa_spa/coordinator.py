"""Data update coordinator for the BWA Spa Manager integration.

The coordinator encapsulates the logic required to periodically poll the
BWA cloud for the state of one spa.  Each poll fetches the
``PanelUpdate`` frame through the
:class:`~custom_components.bwa_spa.api.client.BwaCloudClient`, decodes it
with :mod:`~custom_components.bwa_spa.panel` and maps the result to
device events with :mod:`~custom_components.bwa_spa.mappings`.  The
outcome is exposed as a :class:`~custom_components.bwa_spa.models.SpaData`
via the :attr:`data` attribute.

A frame that cannot be decoded skips the cycle: the previous data is
kept and nothing half decoded is ever published.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Mapping

from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.event import async_call_later
from homeassistant.helpers.update_coordinator import (
    DataUpdateCoordinator,
    UpdateFailed,
)

from .api.client import BwaCloudClient
from .const import COMMAND_REFRESH_DELAY, DOMAIN
from .exceptions import BwaSpaError, MalformedFrameError
from .mappings import build_device_events
from .models import SpaData
from .panel import decode_panel_frame

_LOGGER = logging.getLogger(__name__)


class BwaSpaDataUpdateCoordinator(DataUpdateCoordinator[SpaData]):
    """Class to manage fetching the panel state of a single spa."""

    def __init__(
        self,
        hass: HomeAssistant,
        client: BwaCloudClient,
        device_id: str,
        configuration: Mapping[str, bool],
        scan_interval: int,
        config_entry=None,
    ) -> None:
        self.client: BwaCloudClient = client
        self.device_id: str = device_id
        self.configuration: dict[str, bool] = dict(configuration)
        self._unsub_delayed_refresh = None
        super().__init__(
            hass,
            _LOGGER,
            config_entry=config_entry,
            name=f"{DOMAIN} {device_id}",
            update_interval=timedelta(minutes=scan_interval),
        )

    async def _async_update_data(self) -> SpaData:
        """Fetch and decode the latest panel update.

        Returns
        -------
        SpaData
            The decoded status and the events derived from it, or the
            previous data when the frame was malformed.
        """
        previous = self.data
        previous_temperature = (
            previous.status.actual_temperature if previous is not None else None
        )
        try:
            encoded = await self.client.async_get_panel_update(self.device_id)
            status = decode_panel_frame(encoded, previous_temperature)
        except MalformedFrameError as err:
            if previous is None:
                raise UpdateFailed(f"Unreadable panel update: {err}") from err
            _LOGGER.warning("Skipping unreadable panel update for %s: %s", self.device_id, err)
            return previous
        except BwaSpaError as err:
            raise UpdateFailed(f"Error fetching spa data: {err}") from err

        return SpaData(
            status=status,
            events=build_device_events(status, self.configuration),
        )

    @callback
    def async_schedule_refresh(self) -> None:
        """Poll again shortly, once the spa has acted on a command."""
        self._async_cancel_delayed_refresh()
        self._unsub_delayed_refresh = async_call_later(
            self.hass, COMMAND_REFRESH_DELAY, self._async_delayed_refresh
        )

    async def _async_delayed_refresh(self, _now) -> None:
        self._unsub_delayed_refresh = None
        await self.async_request_refresh()

    @callback
    def _async_cancel_delayed_refresh(self) -> None:
        if self._unsub_delayed_refresh is not None:
            self._unsub_delayed_refresh()
            self._unsub_delayed_refresh = None

    async def async_shutdown(self) -> None:
        """Cancel a pending post-command poll before shutting down."""
        self._async_cancel_delayed_refresh()
        await super().async_shutdown()
