"""Data models for the BWA Spa Manager integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any


class TemperatureScale(StrEnum):
    """Temperature unit the spa panel is configured for."""

    FAHRENHEIT = "F"
    CELSIUS = "C"


class HeatMode(StrEnum):
    READY = "Ready"
    REST = "Rest"
    READY_IN_REST = "Ready in Rest"
    NONE = "None"


class HeatingIntensity(StrEnum):
    LOW = "low"
    HIGH = "high"


class FilterMode(StrEnum):
    OFF = "Off"
    FILTER_1 = "Filter 1"
    FILTER_2 = "Filter 2"
    FILTER_1_AND_2 = "Filter 1 & 2"


class AccessibilityType(StrEnum):
    PUMP_LIGHT = "Pump Light"
    NONE = "None"
    ALL = "All"


class PumpState(StrEnum):
    OFF = "off"
    LOW = "low"
    HIGH = "high"


class BlowerState(StrEnum):
    OFF = "off"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class WifiState(StrEnum):
    OK = "OK"
    SPA_NOT_COMMUNICATING = "Spa Not Communicating"
    STARTUP = "Startup"
    PRIME = "Prime"
    HOLD = "Hold"
    PANEL = "Panel"
    UNKNOWN = "Unknown"


@dataclass(frozen=True, slots=True)
class PanelStatus:
    """Decoded contents of one ``PanelUpdate`` frame.

    Temperatures are expressed in ``temperature_scale`` (the half degree
    encoding used for Celsius has already been undone).  Pumps, lights
    and aux outputs are stored as tuples; use :meth:`pump`,
    :meth:`light` and :meth:`aux` to address them with the 1-based
    numbers printed on the spa panel.
    """

    temperature_scale: TemperatureScale
    actual_temperature: float | None
    target_temperature: float
    current_time_hour: int
    current_time_minute: int
    is_24_hour_time: bool
    heat_mode: HeatMode
    is_heating: bool
    heating_intensity: HeatingIntensity
    filter_mode: FilterMode
    accessibility_type: AccessibilityType
    pump_state: tuple[PumpState, ...]
    blower_state: BlowerState
    light_state: tuple[bool, ...]
    mister_state: bool
    aux_state: tuple[bool, ...]
    wifi_state: WifiState
    pump_state_status: str

    def pump(self, number: int) -> PumpState:
        return self.pump_state[number - 1]

    def light(self, number: int) -> bool:
        return self.light_state[number - 1]

    def aux(self, number: int) -> bool:
        return self.aux_state[number - 1]


@dataclass(frozen=True, slots=True)
class SpaEvent:
    """One attribute of a logical spa device, as published each poll."""

    name: str
    value: Any
    unit: str | None = None


@dataclass(slots=True)
class SpaData:
    """Everything the coordinator publishes after a successful poll."""

    status: PanelStatus
    events: dict[str, dict[str, SpaEvent]] = field(default_factory=dict)

    def event_value(self, device_key: str, name: str, default: Any = None) -> Any:
        """Return the value of ``name`` for ``device_key`` or ``default``."""
        event = self.events.get(device_key, {}).get(name)
        return default if event is None else event.value


@dataclass(slots=True)
class SpaSession:
    """Authentication state held by the cloud client."""

    token: str | None = None
    login_date: datetime | None = None
    device: dict[str, Any] = field(default_factory=dict)

    @property
    def device_id(self) -> str | None:
        return self.device.get("device_id")

    def clear(self) -> None:
        self.token = None
        self.login_date = None
        self.device = {}
