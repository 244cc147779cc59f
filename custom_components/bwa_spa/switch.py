"""Switch platform for the BWA Spa Manager integration.

One switch is created for every pump, light, aux output and mister the
user marked as installed.  The cloud only knows button presses, so
turning a switch on or off presses its button, and only when the last
polled state differs from the requested one.
"""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.components.switch import SwitchEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .api.parameters import AUXES, BUTTON_MAP, LIGHTS, PUMPS
from .const import DOMAIN
from .coordinator import BwaSpaDataUpdateCoordinator
from .entity import BwaSpaEntity
from .mappings import accessory_key

_LOGGER = logging.getLogger(__name__)

SWITCH_ACCESSORIES: tuple[str, ...] = (*PUMPS, *LIGHTS, *AUXES, "Mister")

ICONS: dict[str, str] = {
    "Pump": "mdi:pump",
    "Light": "mdi:lightbulb",
    "Aux": "mdi:toggle-switch",
    "Mister": "mdi:weather-fog",
}


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities
) -> None:
    """Set up a switch per installed accessory."""
    coordinator: BwaSpaDataUpdateCoordinator = hass.data[DOMAIN][entry.entry_id]["coordinator"]
    switches = [
        BwaSpaSwitch(coordinator, accessory)
        for accessory in SWITCH_ACCESSORIES
        if coordinator.configuration.get(accessory)
    ]
    if not switches:
        _LOGGER.debug("No switchable accessories configured for %s", coordinator.device_id)
    async_add_entities(switches)


class BwaSpaSwitch(BwaSpaEntity, SwitchEntity):
    """A spa accessory toggled through a panel button."""

    def __init__(self, coordinator: BwaSpaDataUpdateCoordinator, accessory: str) -> None:
        key = accessory_key(accessory)
        super().__init__(coordinator, key, key)
        self._accessory = accessory
        self._button_id = BUTTON_MAP[accessory]
        self._attr_name = accessory.rstrip("0123456789") + (
            f" {accessory[-1]}" if accessory[-1].isdigit() else ""
        )
        self._attr_icon = ICONS.get(accessory.rstrip("0123456789"))

    @property
    def is_on(self) -> bool | None:
        state = self.event_value("switch")
        return None if state is None else state == "on"

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        speed = self.event_value("speed")
        return None if speed is None else {"speed": speed}

    async def async_turn_on(self, **kwargs: Any) -> None:
        if self.is_on is not True:
            await self._async_press_button(self._button_id)

    async def async_turn_off(self, **kwargs: Any) -> None:
        if self.is_on is not False:
            await self._async_press_button(self._button_id)
