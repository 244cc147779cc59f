"""Button platform for the BWA Spa Manager integration.

The panel's temperature range toggle has no state in the panel frame
this integration reads, so it is exposed as a stateless button.
"""

from __future__ import annotations

from homeassistant.components.button import ButtonEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .api.parameters import BUTTON_MAP
from .const import DOMAIN
from .coordinator import BwaSpaDataUpdateCoordinator
from .entity import BwaSpaEntity
from .mappings import DEVICE_SPA


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities
) -> None:
    coordinator: BwaSpaDataUpdateCoordinator = hass.data[DOMAIN][entry.entry_id]["coordinator"]
    async_add_entities([BwaSpaTempRangeButton(coordinator)])


class BwaSpaTempRangeButton(BwaSpaEntity, ButtonEntity):
    """Toggle between the high and low temperature ranges."""

    _attr_name = "Toggle temperature range"
    _attr_icon = "mdi:thermometer-lines"

    def __init__(self, coordinator: BwaSpaDataUpdateCoordinator) -> None:
        super().__init__(coordinator, DEVICE_SPA, "temp_range")

    async def async_press(self) -> None:
        await self._async_press_button(BUTTON_MAP["TempRange"])
