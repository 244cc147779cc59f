"""BWA panel status to Home Assistant mappings.

Splitting these conversions out keeps the entities thin and lets the
same correspondences be reused in tests and by other platforms.

:func:`build_device_events` is the status model proper: it turns one
decoded :class:`~custom_components.bwa_spa.models.PanelStatus` into the
attributes of every logical device of the spa.  Every attribute is
emitted on every poll, changed or not; Home Assistant's state machine
does its own change detection.
"""

from __future__ import annotations

from typing import Mapping

from .api.parameters import AUXES, LIGHTS, PUMPS
from .models import HeatMode, PanelStatus, PumpState, SpaEvent, TemperatureScale
from .utils import format_clock

DEVICE_SPA = "spa"
DEVICE_THERMOSTAT = "thermostat"

# Heat modes reported by the panel → climate presets.  "Ready in Rest"
# is a rest mode that is temporarily heating because a pump was started.
PRESET_READY = "Ready"
PRESET_REST = "Rest"
PRESETS: list[str] = [PRESET_READY, PRESET_REST]

HEAT_MODE_TO_PRESET: dict[HeatMode, str] = {
    HeatMode.READY: PRESET_READY,
    HeatMode.REST: PRESET_REST,
    HeatMode.READY_IN_REST: PRESET_REST,
}

# Setpoint limits per scale: (minimum, maximum, step).
TEMPERATURE_RANGE: dict[TemperatureScale, tuple[float, float, float]] = {
    TemperatureScale.FAHRENHEIT: (80.0, 104.0, 1.0),
    TemperatureScale.CELSIUS: (26.5, 40.0, 0.5),
}


def accessory_key(accessory: str) -> str:
    """Return the device key of an accessory (``"Pump1"`` → ``"pump_1"``)."""
    name = accessory.rstrip("0123456789")
    number = accessory[len(name):]
    return f"{name.lower()}_{number}" if number else name.lower()


def heat_mode_to_preset(heat_mode: HeatMode) -> str | None:
    return HEAT_MODE_TO_PRESET.get(heat_mode)


def spa_status_text(status: PanelStatus) -> str:
    """Short two line summary of the spa, as shown on the spa device."""
    if status.is_heating:
        heating = f"heating to {status.target_temperature:g}°"
    else:
        heating = "not heating"
    return f"{status.heat_mode}\n{heating}"


def accessory_is_on(status: PanelStatus, accessory: str) -> bool:
    """Return ``True`` if the named accessory is running."""
    if accessory in PUMPS:
        return status.pump(PUMPS.index(accessory) + 1) != PumpState.OFF
    if accessory in LIGHTS:
        return status.light(LIGHTS.index(accessory) + 1)
    if accessory in AUXES:
        return status.aux(AUXES.index(accessory) + 1)
    if accessory == "Mister":
        return status.mister_state
    raise KeyError(accessory)


def _events(*events: SpaEvent) -> dict[str, SpaEvent]:
    return {event.name: event for event in events}


def build_device_events(
    status: PanelStatus, configuration: Mapping[str, bool]
) -> dict[str, dict[str, SpaEvent]]:
    """Map a panel status to the events of every logical device.

    Parameters
    ----------
    status: PanelStatus
        The freshly decoded panel update.
    configuration: mapping
        Accessory name → installed.  Only installed accessories get an
        entry; the blower is decoded but never mapped to a device.

    Returns
    -------
    dict
        Device key → event name → :class:`SpaEvent`.
    """
    unit = str(status.temperature_scale)
    on_off = {True: "on", False: "off"}

    devices: dict[str, dict[str, SpaEvent]] = {
        DEVICE_SPA: _events(
            SpaEvent("spaStatus", spa_status_text(status)),
            SpaEvent("heatMode", str(status.heat_mode)),
            SpaEvent("filterMode", str(status.filter_mode)),
            SpaEvent("accessibilityType", str(status.accessibility_type)),
            SpaEvent("wifiState", str(status.wifi_state)),
            SpaEvent("pumpStateStatus", status.pump_state_status),
            SpaEvent("temperatureScale", unit),
            SpaEvent(
                "time",
                format_clock(
                    status.current_time_hour,
                    status.current_time_minute,
                    status.is_24_hour_time,
                ),
            ),
        ),
        DEVICE_THERMOSTAT: _events(
            SpaEvent("temperature", status.actual_temperature, unit),
            SpaEvent("heatingSetpoint", status.target_temperature, unit),
            SpaEvent("thermostatMode", "heat" if status.is_heating else "off"),
            SpaEvent(
                "thermostatOperatingState", "heating" if status.is_heating else "idle"
            ),
            SpaEvent("heatingIntensity", str(status.heating_intensity)),
        ),
    }

    for accessory in (*PUMPS, *LIGHTS, *AUXES, "Mister"):
        if not configuration.get(accessory):
            continue
        events = [SpaEvent("switch", on_off[accessory_is_on(status, accessory)])]
        if accessory in PUMPS:
            speed = status.pump(PUMPS.index(accessory) + 1)
            events.append(SpaEvent("speed", str(speed)))
        devices[accessory_key(accessory)] = _events(*events)

    return devices
