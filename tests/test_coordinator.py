"""Tests for the BWA Spa Manager data coordinator.

These tests verify that the :class:`~custom_components.bwa_spa.coordinator.BwaSpaDataUpdateCoordinator`
fetches the panel frame via the client, decodes it and publishes the
derived events, and that unreadable frames never replace good data.  A
dummy client supplies precomputed frames, allowing the test to run
without network access.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from homeassistant.helpers.update_coordinator import UpdateFailed

from custom_components.bwa_spa.coordinator import BwaSpaDataUpdateCoordinator
from custom_components.bwa_spa.exceptions import BwaConnectionError, MalformedFrameError
from custom_components.bwa_spa.models import PumpState

DEVICE_ID = "00000000-00000000-001527FF-FF09818B"


class DummyClient:
    """Stub of BwaCloudClient returning predetermined panel frames."""

    def __init__(self, *frames) -> None:
        self.frames = list(frames)
        self.calls: list[str] = []

    async def async_get_panel_update(self, device_id: str) -> str:
        self.calls.append(device_id)
        frame = self.frames.pop(0)
        if isinstance(frame, Exception):
            raise frame
        return frame


def _coordinator(client: DummyClient) -> BwaSpaDataUpdateCoordinator:
    # A bare SimpleNamespace suffices for hass since _async_update_data
    # never touches it.
    return BwaSpaDataUpdateCoordinator(
        SimpleNamespace(), client, DEVICE_ID, {"Pump1": True}, scan_interval=5
    )


@pytest.mark.asyncio
async def test_coordinator_decodes_panel_update(encoded_frame) -> None:
    client = DummyClient(encoded_frame(b6=100, b15=0x02, b24=102))
    coordinator = _coordinator(client)
    assert coordinator.update_interval.total_seconds() == 300
    data = await coordinator._async_update_data()
    assert client.calls == [DEVICE_ID]
    assert data.status.actual_temperature == 100.0
    assert data.status.pump(1) == PumpState.HIGH
    assert data.event_value("pump_1", "switch") == "on"
    assert data.event_value("thermostat", "heatingSetpoint") == 102.0


@pytest.mark.asyncio
async def test_previous_temperature_is_carried_forward(encoded_frame) -> None:
    client = DummyClient(encoded_frame(b6=99, b24=102), encoded_frame(b6=255, b24=102))
    coordinator = _coordinator(client)
    coordinator.data = await coordinator._async_update_data()
    data = await coordinator._async_update_data()
    assert data.status.actual_temperature == 99.0


@pytest.mark.asyncio
async def test_malformed_frame_keeps_previous_data(encoded_frame) -> None:
    client = DummyClient(encoded_frame(b6=99), encoded_frame(length=5))
    coordinator = _coordinator(client)
    coordinator.data = await coordinator._async_update_data()
    assert await coordinator._async_update_data() is coordinator.data


@pytest.mark.asyncio
async def test_malformed_first_frame_fails() -> None:
    coordinator = _coordinator(DummyClient(MalformedFrameError("empty reply")))
    with pytest.raises(UpdateFailed):
        await coordinator._async_update_data()


@pytest.mark.asyncio
async def test_transport_error_fails_update(encoded_frame) -> None:
    client = DummyClient(encoded_frame(), BwaConnectionError("down"))
    coordinator = _coordinator(client)
    coordinator.data = await coordinator._async_update_data()
    with pytest.raises(UpdateFailed):
        await coordinator._async_update_data()


@pytest.mark.asyncio
async def test_shutdown_cancels_pending_refresh() -> None:
    coordinator = _coordinator(DummyClient())
    cancelled = []
    coordinator._unsub_delayed_refresh = lambda: cancelled.append(True)
    await coordinator.async_shutdown()
    assert cancelled == [True]
    assert coordinator._unsub_delayed_refresh is None
