"""Decoder for the ``PanelUpdate`` frame of BWA spa controllers.

The cloud hands out the controller's panel state as a base64 encoded
binary frame with a fixed layout.  Most fields are single bytes or bit
groups inside a byte; :data:`~custom_components.bwa_spa.api.parameters.PANEL_UPDATE`
lists them and :func:`~custom_components.bwa_spa.utils.extract_fields`
does the masking.  This module adds the steps that need more than one
field:

* the actual temperature byte reads 255 while the controller has no
  reading, in which case the previously known temperature is carried
  forward;
* Celsius temperatures are transmitted in half degrees;
* an aggregate pump status string is derived from the pump and blower
  bytes.

Decoding is a pure function of the frame and the previous actual
temperature.  Only frames that are too short (or not base64) are
rejected; unexpected bit patterns resolve to the defaults of the
layout table.

Example
-------

::

    status = decode_panel_frame(encoded, previous_actual_temperature=38.5)
    status.pump(1)  # PumpState.HIGH
"""

from __future__ import annotations

import logging

from .api.parameters import (
    MIN_FRAME_LENGTH,
    PANEL_UPDATE,
    PUMP_STATUS_BYTES,
    TEMPERATURE_UNKNOWN,
)
from .exceptions import MalformedFrameError
from .models import PanelStatus, TemperatureScale
from .utils import decode_base64, extract_fields, from_raw_temperature, to_raw_temperature

_LOGGER = logging.getLogger(__name__)


def decode_panel_frame(
    encoded: str, previous_actual_temperature: float | None = None
) -> PanelStatus:
    """Decode a base64 ``PanelUpdate`` payload into a :class:`PanelStatus`."""
    return decode_panel_update(decode_base64(encoded), previous_actual_temperature)


def decode_panel_update(
    data: bytes, previous_actual_temperature: float | None = None
) -> PanelStatus:
    """Decode a raw ``PanelUpdate`` frame.

    Parameters
    ----------
    data: bytes
        The frame after base64 decoding.
    previous_actual_temperature: float, optional
        The last actual temperature reported to the user, in the unit of
        the spa.  Used only when the frame carries the "no reading"
        sentinel.

    Raises
    ------
    MalformedFrameError
        If the frame is shorter than :data:`MIN_FRAME_LENGTH` bytes.
    """
    if len(data) < MIN_FRAME_LENGTH:
        raise MalformedFrameError(
            f"Panel frame too short: {len(data)} bytes, need {MIN_FRAME_LENGTH}"
        )

    fields = extract_fields(data, PANEL_UPDATE)
    scale: TemperatureScale = fields["TEMPERATURE_SCALE"]

    raw_actual: int | None = fields["ACTUAL_TEMPERATURE"]
    if raw_actual == TEMPERATURE_UNKNOWN:
        if previous_actual_temperature is None:
            raw_actual = None
        else:
            raw_actual = to_raw_temperature(previous_actual_temperature, scale)

    actual_temperature = (
        None if raw_actual is None else from_raw_temperature(raw_actual, scale)
    )
    target_temperature = from_raw_temperature(fields["TARGET_TEMPERATURE"], scale)

    if all(data[index] & mask == 0 for index, mask in PUMP_STATUS_BYTES.items()):
        pump_state_status = "Off"
    else:
        pump_state_status = "Low Heat" if fields["IS_HEATING"] else "Low"

    status = PanelStatus(
        temperature_scale=scale,
        actual_temperature=actual_temperature,
        target_temperature=target_temperature,
        current_time_hour=fields["CURRENT_TIME_HOUR"],
        current_time_minute=fields["CURRENT_TIME_MINUTE"],
        is_24_hour_time=fields["IS_24_HOUR_TIME"],
        heat_mode=fields["HEAT_MODE"],
        is_heating=fields["IS_HEATING"],
        heating_intensity=fields["HEATING_INTENSITY"],
        filter_mode=fields["FILTER_MODE"],
        accessibility_type=fields["ACCESSIBILITY_TYPE"],
        pump_state=tuple(fields[f"PUMP_{number}"] for number in range(1, 7)),
        blower_state=fields["BLOWER"],
        light_state=(fields["LIGHT_1"], fields["LIGHT_2"]),
        mister_state=fields["MISTER"],
        aux_state=(fields["AUX_1"], fields["AUX_2"]),
        wifi_state=fields["WIFI_STATE"],
        pump_state_status=pump_state_status,
    )
    _LOGGER.debug("Decoded panel update: %s", status)
    return status
