"""Climate platform for the BWA Spa Manager integration.

The spa heater is exposed as a single heat-only thermostat.  The target
temperature is sent to the cloud in the controller's raw units (half
degrees when the panel runs in Celsius) and the heat mode (Ready/Rest)
is exposed as presets; switching presets presses the heat mode toggle
button on the panel.
"""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.components.climate import (
    ClimateEntity,
    ClimateEntityFeature,
    HVACAction,
    HVACMode,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError

from .api.parameters import BUTTON_MAP
from .const import DOMAIN
from .coordinator import BwaSpaDataUpdateCoordinator
from .entity import BwaSpaEntity
from .exceptions import BwaSpaError
from .mappings import (
    DEVICE_THERMOSTAT,
    PRESETS,
    TEMPERATURE_RANGE,
    heat_mode_to_preset,
)
from .models import TemperatureScale
from .utils import to_raw_temperature

_LOGGER = logging.getLogger(__name__)

UNITS: dict[TemperatureScale, str] = {
    TemperatureScale.FAHRENHEIT: UnitOfTemperature.FAHRENHEIT,
    TemperatureScale.CELSIUS: UnitOfTemperature.CELSIUS,
}


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities
) -> None:
    """Set up the spa thermostat from a config entry."""
    coordinator: BwaSpaDataUpdateCoordinator = hass.data[DOMAIN][entry.entry_id]["coordinator"]
    async_add_entities([BwaSpaThermostat(coordinator)])


class BwaSpaThermostat(BwaSpaEntity, ClimateEntity):
    """Heat-only thermostat of the spa."""

    _attr_name = "Thermostat"
    _attr_hvac_modes = [HVACMode.HEAT, HVACMode.OFF]
    _attr_preset_modes = PRESETS
    _attr_supported_features = (
        ClimateEntityFeature.TARGET_TEMPERATURE | ClimateEntityFeature.PRESET_MODE
    )

    def __init__(self, coordinator: BwaSpaDataUpdateCoordinator) -> None:
        super().__init__(coordinator, DEVICE_THERMOSTAT, "thermostat")

    @property
    def _scale(self) -> TemperatureScale:
        data = self.coordinator.data
        if data is None:
            return TemperatureScale.FAHRENHEIT
        return data.status.temperature_scale

    @property
    def temperature_unit(self) -> str:
        return UNITS[self._scale]

    @property
    def min_temp(self) -> float:
        return TEMPERATURE_RANGE[self._scale][0]

    @property
    def max_temp(self) -> float:
        return TEMPERATURE_RANGE[self._scale][1]

    @property
    def target_temperature_step(self) -> float:
        return TEMPERATURE_RANGE[self._scale][2]

    @property
    def current_temperature(self) -> float | None:
        return self.event_value("temperature")

    @property
    def target_temperature(self) -> float | None:
        return self.event_value("heatingSetpoint")

    @property
    def hvac_mode(self) -> HVACMode:
        return HVACMode(self.event_value("thermostatMode", HVACMode.OFF))

    @property
    def hvac_action(self) -> HVACAction:
        if self.event_value("thermostatOperatingState") == "heating":
            return HVACAction.HEATING
        return HVACAction.IDLE

    @property
    def preset_mode(self) -> str | None:
        data = self.coordinator.data
        if data is None:
            return None
        return heat_mode_to_preset(data.status.heat_mode)

    async def async_set_temperature(self, **kwargs: Any) -> None:
        temperature = kwargs.get(ATTR_TEMPERATURE)
        if temperature is None:
            return
        raw_value = to_raw_temperature(float(temperature), self._scale)
        try:
            await self.coordinator.client.async_set_temperature(
                self.coordinator.device_id, raw_value
            )
        except BwaSpaError as err:
            raise HomeAssistantError(f"Could not set spa temperature: {err}") from err
        self.coordinator.async_schedule_refresh()

    async def async_set_preset_mode(self, preset_mode: str) -> None:
        if preset_mode not in PRESETS:
            raise HomeAssistantError(f"Unsupported preset {preset_mode}")
        if preset_mode == self.preset_mode:
            return
        await self._async_press_button(BUTTON_MAP["HeatMode"])

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        # The heater follows the panel; heating cannot be forced from here.
        if hvac_mode == self.hvac_mode:
            _LOGGER.debug("Spa already reports hvac mode %s", hvac_mode)
            return
        raise HomeAssistantError(
            f"The spa controls its heater itself and cannot be set to {hvac_mode}"
        )
