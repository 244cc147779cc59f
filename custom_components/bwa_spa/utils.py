"""Common helper functions for the BWA Spa Manager integration.

This module provides the low level conversions shared by the frame
decoder, the status model and the entities: base64 unwrapping of the
panel frame, table driven extraction of bit fields and the half degree
temperature encoding used when the spa runs in Celsius.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Dict

from .exceptions import MalformedFrameError
from .models import TemperatureScale


def decode_base64(encoded: str) -> bytes:
    """Decode the base64 transport encoding of a panel frame.

    Whitespace around and inside the payload (the cloud wraps long
    replies) is ignored; anything else that is not valid base64 raises
    :class:`~custom_components.bwa_spa.exceptions.MalformedFrameError`.
    """
    compact = "".join(encoded.split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as err:
        raise MalformedFrameError(f"Panel frame is not valid base64: {err}") from err


def extract_fields(data: bytes, layout: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Decode a frame according to a layout definition.

    Parameters
    ----------
    data: bytes
        The decoded frame.  Callers must make sure it is long enough for
        every ``index`` used by ``layout``.
    layout: dict
        Mapping of keys to extraction rules.  Each rule has an ``index``
        and optionally a ``mask``.  Rules with a ``values`` table are
        looked up there (falling back to ``default``); otherwise
        ``type`` is applied, ``bool`` meaning "any masked bit set".

    Returns
    -------
    dict
        A mapping from keys to decoded values.
    """
    values: Dict[str, Any] = {}
    for key, entry in layout.items():
        raw = data[entry["index"]]
        mask = entry.get("mask")
        if mask is not None:
            raw &= mask
        table = entry.get("values")
        if table is not None:
            values[key] = table.get(raw, entry.get("default"))
        elif entry.get("type") is bool:
            values[key] = raw != 0
        else:
            values[key] = int(raw)
    return values


def to_raw_temperature(value: float, scale: TemperatureScale) -> int:
    """Convert a displayed temperature to the controller's raw units.

    Celsius temperatures travel in half degrees, Fahrenheit ones in
    whole degrees.
    """
    if scale == TemperatureScale.CELSIUS:
        return int(round(value * 2))
    return int(round(value))


def from_raw_temperature(raw: int, scale: TemperatureScale) -> float:
    """Inverse of :func:`to_raw_temperature`."""
    if scale == TemperatureScale.CELSIUS:
        return raw / 2.0
    return float(raw)


def format_clock(hour: int, minute: int, is_24_hour_time: bool) -> str:
    """Render the spa clock the way the panel shows it."""
    if is_24_hour_time:
        return f"{hour:02d}:{minute:02d}"
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"
