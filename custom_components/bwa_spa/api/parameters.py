"""Protocol definitions for the BWA cloud API.

This module centralises the knowledge about the ``PanelUpdate`` frame
emitted by the spa controller and the button numbers understood by the
cloud ``Button`` target.  The :data:`PANEL_UPDATE` definition maps keys
like ``"HEAT_MODE"`` or ``"PUMP_1"`` to a byte index within the decoded
frame, an optional bit mask and either a Python type or a table of
values.  :func:`~custom_components.bwa_spa.utils.extract_fields` walks
this table; the post processing that needs more than one field lives in
:mod:`~custom_components.bwa_spa.panel`.

External consumers should import these definitions via
``from .api.parameters import PANEL_UPDATE, BUTTON_MAP``.
"""

from __future__ import annotations

from typing import Dict

from ..models import (
    AccessibilityType,
    BlowerState,
    FilterMode,
    HeatingIntensity,
    HeatMode,
    PumpState,
    TemperatureScale,
    WifiState,
)


# ---------------------------------------------------------------------------
# Frame layout
#
# Every entry gives the byte ``index`` into the decoded frame.  When a
# ``mask`` is present the byte is ANDed with it before interpretation.
# Entries with a ``values`` table are looked up there and fall back to
# ``default`` for anything unlisted; the other entries are converted with
# ``type`` (``int`` keeps the byte, ``bool`` tests for a non-zero value).

# Shortest frame that still covers every offset read below.
MIN_FRAME_LENGTH: int = 27

# Raw actual temperature reported while the sensor has no reading.
TEMPERATURE_UNKNOWN: int = 255


def _pump(index: int, shift: int) -> Dict[str, object]:
    return {
        "index": index,
        "mask": 0x03 << shift,
        "values": {1 << shift: PumpState.LOW, 2 << shift: PumpState.HIGH},
        "default": PumpState.OFF,
    }


PANEL_UPDATE: Dict[str, Dict[str, object]] = {
    "ACTUAL_TEMPERATURE": {"index": 6, "type": int},
    "CURRENT_TIME_HOUR": {"index": 7, "type": int},
    "CURRENT_TIME_MINUTE": {"index": 8, "type": int},
    "HEAT_MODE": {
        "index": 9,
        "values": {
            0: HeatMode.READY,
            1: HeatMode.REST,
            2: HeatMode.READY_IN_REST,
        },
        "default": HeatMode.NONE,
    },
    "TEMPERATURE_SCALE": {
        "index": 13,
        "mask": 0x01,
        "values": {0: TemperatureScale.FAHRENHEIT, 1: TemperatureScale.CELSIUS},
        "default": TemperatureScale.FAHRENHEIT,
    },
    "IS_24_HOUR_TIME": {"index": 13, "mask": 0x02, "type": bool},
    "FILTER_MODE": {
        "index": 13,
        "mask": 0x0C,
        "values": {
            4: FilterMode.FILTER_1,
            8: FilterMode.FILTER_2,
            12: FilterMode.FILTER_1_AND_2,
        },
        "default": FilterMode.OFF,
    },
    # Older firmware documentation lists 42 for "None"; that value can
    # never survive the 0x30 mask, so both upper patterns map to None.
    "ACCESSIBILITY_TYPE": {
        "index": 13,
        "mask": 0x30,
        "values": {
            16: AccessibilityType.PUMP_LIGHT,
            32: AccessibilityType.NONE,
            48: AccessibilityType.NONE,
        },
        "default": AccessibilityType.ALL,
    },
    "HEATING_INTENSITY": {
        "index": 14,
        "mask": 0x04,
        "values": {4: HeatingIntensity.HIGH},
        "default": HeatingIntensity.LOW,
    },
    "IS_HEATING": {"index": 14, "mask": 0x30, "type": bool},
    "PUMP_1": _pump(15, 0),
    "PUMP_2": _pump(15, 2),
    "PUMP_3": _pump(15, 4),
    "PUMP_4": _pump(15, 6),
    "PUMP_5": _pump(16, 0),
    "PUMP_6": _pump(16, 2),
    "WIFI_STATE": {
        "index": 16,
        "mask": 0xF0,
        "values": {
            0: WifiState.OK,
            16: WifiState.SPA_NOT_COMMUNICATING,
            32: WifiState.STARTUP,
            48: WifiState.PRIME,
            64: WifiState.HOLD,
            80: WifiState.PANEL,
        },
        "default": WifiState.UNKNOWN,
    },
    "BLOWER": {
        "index": 17,
        "mask": 0x0C,
        "values": {4: BlowerState.LOW, 8: BlowerState.MEDIUM, 12: BlowerState.HIGH},
        "default": BlowerState.OFF,
    },
    "LIGHT_1": {"index": 18, "mask": 0x03, "type": bool},
    "LIGHT_2": {"index": 18, "mask": 0x0C, "type": bool},
    "MISTER": {"index": 19, "mask": 0x01, "type": bool},
    "AUX_1": {"index": 19, "mask": 0x08, "type": bool},
    "AUX_2": {"index": 19, "mask": 0x10, "type": bool},
    "TARGET_TEMPERATURE": {"index": 24, "type": int},
}

# Raw bytes feeding the aggregate pump status (pumps, pumps/wifi, blower).
PUMP_STATUS_BYTES: Dict[int, int] = {15: 0xFF, 16: 0xFF, 17: 0x0C}

# ---------------------------------------------------------------------------
# Accessories and buttons
#
# The accessory names double as the keys of a spa configuration, the
# mapping of accessory name to "installed on this unit".

PUMPS: tuple[str, ...] = tuple(f"Pump{number}" for number in range(1, 7))
LIGHTS: tuple[str, ...] = ("Light1", "Light2")
AUXES: tuple[str, ...] = ("Aux1", "Aux2")
ACCESSORIES: tuple[str, ...] = (*PUMPS, *LIGHTS, *AUXES, "Mister", "Blower")

BUTTON_MAP: Dict[str, int] = {
    "Pump1": 4,
    "Pump2": 5,
    "Pump3": 6,
    "Pump4": 7,
    "Pump5": 8,
    "Pump6": 9,
    "Light1": 17,
    "Light2": 18,
    "Blower": 12,
    "Mister": 14,
    "Aux1": 22,
    "Aux2": 23,
    "TempRange": 80,
    "HeatMode": 81,
}

# ---------------------------------------------------------------------------
# Cloud requests

API_BASE_URL: str = "https://bwgapi.balboawater.com"
LOGIN_PATH: str = "/users/login"
SCI_PATH: str = "/devices/sci"

PANEL_UPDATE_FILE: str = "PanelUpdate"
TARGET_BUTTON: str = "Button"
TARGET_SET_TEMP: str = "SetTemp"

__all__ = [
    "ACCESSORIES",
    "API_BASE_URL",
    "AUXES",
    "BUTTON_MAP",
    "LIGHTS",
    "LOGIN_PATH",
    "MIN_FRAME_LENGTH",
    "PANEL_UPDATE",
    "PANEL_UPDATE_FILE",
    "PUMPS",
    "PUMP_STATUS_BYTES",
    "SCI_PATH",
    "TARGET_BUTTON",
    "TARGET_SET_TEMP",
    "TEMPERATURE_UNKNOWN",
]
