"""Base entity for the BWA Spa Manager integration."""

from __future__ import annotations

from typing import Any

from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, MANUFACTURER, MODEL
from .coordinator import BwaSpaDataUpdateCoordinator
from .exceptions import BwaSpaError


class BwaSpaEntity(CoordinatorEntity[BwaSpaDataUpdateCoordinator]):
    """Entity reading one logical device out of the coordinator data."""

    _attr_has_entity_name = True

    def __init__(
        self, coordinator: BwaSpaDataUpdateCoordinator, device_key: str, key: str
    ) -> None:
        super().__init__(coordinator)
        self._device_key = device_key
        self._attr_unique_id = f"{coordinator.device_id}_{key}"

    @property
    def device_info(self) -> DeviceInfo:
        """Return metadata for the device registry."""
        device_id = self.coordinator.device_id
        return DeviceInfo(
            identifiers={(DOMAIN, device_id)},
            name=f"Spa {device_id[-8:]}",
            manufacturer=MANUFACTURER,
            model=MODEL,
        )

    def event_value(self, name: str, default: Any = None) -> Any:
        data = self.coordinator.data
        if data is None:
            return default
        return data.event_value(self._device_key, name, default)

    async def _async_press_button(self, button_id: int) -> None:
        """Press a panel button and poll again once the spa reacted."""
        try:
            await self.coordinator.client.async_press_button(
                self.coordinator.device_id, button_id
            )
        except BwaSpaError as err:
            raise HomeAssistantError(f"Could not press spa button {button_id}: {err}") from err
        self.coordinator.async_schedule_refresh()
