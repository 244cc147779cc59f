"""Sensor platform for the BWA Spa Manager integration.

This module defines a generic sensor entity that represents a single
attribute of the spa as reported by the panel: heat mode, filter cycle,
wifi state and so on.  The values are read from the events published by
the central data coordinator, which polls the cloud periodically.  All
sensors are created from the :data:`SPA_SENSORS` table.
"""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.components.sensor import SensorDeviceClass, SensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant

from .const import DOMAIN
from .coordinator import BwaSpaDataUpdateCoordinator
from .entity import BwaSpaEntity
from .mappings import DEVICE_SPA
from .models import AccessibilityType, FilterMode, HeatMode, WifiState

_LOGGER = logging.getLogger(__name__)

# Event name → (display name, icon, enum options or None)
SPA_SENSORS: dict[str, tuple[str, str, list[str] | None]] = {
    "spaStatus": ("Status", "mdi:hot-tub", None),
    "heatMode": ("Heat mode", "mdi:fire", [str(mode) for mode in HeatMode]),
    "filterMode": ("Filter mode", "mdi:air-filter", [str(mode) for mode in FilterMode]),
    "accessibilityType": (
        "Accessibility",
        "mdi:gesture-tap-button",
        [str(kind) for kind in AccessibilityType],
    ),
    "wifiState": ("Wifi state", "mdi:wifi", [str(state) for state in WifiState]),
    "pumpStateStatus": ("Pump status", "mdi:pump", None),
    "time": ("Spa time", "mdi:clock-outline", None),
}

DIAGNOSTIC_SENSORS: set[str] = {"accessibilityType", "wifiState", "time"}


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities,
) -> None:
    """Set up spa sensors from a config entry."""
    coordinator: BwaSpaDataUpdateCoordinator = hass.data[DOMAIN][entry.entry_id]["coordinator"]
    async_add_entities(BwaSpaSensor(coordinator, key) for key in SPA_SENSORS)


class BwaSpaSensor(BwaSpaEntity, SensorEntity):
    """Representation of a single spa attribute."""

    def __init__(self, coordinator: BwaSpaDataUpdateCoordinator, key: str) -> None:
        super().__init__(coordinator, DEVICE_SPA, key)
        self._key = key
        name, icon, options = SPA_SENSORS[key]
        self._attr_name = name
        self._attr_icon = icon
        if options is not None:
            self._attr_device_class = SensorDeviceClass.ENUM
            self._attr_options = options
        if key in DIAGNOSTIC_SENSORS:
            self._attr_entity_category = EntityCategory.DIAGNOSTIC

    @property
    def native_value(self) -> Any:
        """Return the state of the sensor."""
        return self.event_value(self._key)
