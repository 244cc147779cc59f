"""Shared fixtures for the BWA Spa Manager tests."""

from __future__ import annotations

import base64
from typing import Callable

import pytest


def build_frame(length: int = 27, **offsets: int) -> bytes:
    """Return a zeroed panel frame with the given ``b<index>`` bytes set.

    ``build_frame(b6=140, b13=0x01)`` sets byte 6 to 140 and byte 13 to 1.
    """
    frame = bytearray(length)
    for name, value in offsets.items():
        frame[int(name[1:])] = value
    return bytes(frame)


@pytest.fixture
def panel_frame() -> Callable[..., bytes]:
    return build_frame


@pytest.fixture
def encoded_frame() -> Callable[..., str]:
    def _encode(length: int = 27, **offsets: int) -> str:
        return base64.b64encode(build_frame(length, **offsets)).decode("ascii")

    return _encode
