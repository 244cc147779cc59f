"""Tests for the SCI request builders.

This module verifies that the request bodies sent to the BWA cloud
match the envelope the cloud expects, and that file replies are
unwrapped correctly.  The tests do not require a live spa.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from custom_components.bwa_spa.api.parameters import BUTTON_MAP
from custom_components.bwa_spa.exceptions import MalformedFrameError
from custom_components.bwa_spa.models import TemperatureScale
from custom_components.bwa_spa.panel import decode_panel_update
from custom_components.bwa_spa.sci_request import (
    SciRequest,
    encode_button_press,
    encode_file_request,
    encode_set_temperature,
    extract_file_data,
)
from custom_components.bwa_spa.utils import to_raw_temperature

DEVICE_ID = "00000000-00000000-001527FF-FF09818B"


def test_button_press_envelope() -> None:
    body = encode_button_press(DEVICE_ID, BUTTON_MAP["Pump1"])
    assert body == (
        '<sci_request version="1.0"><data_service><targets>'
        f'<device id="{DEVICE_ID}"/></targets><requests>'
        '<device_request target_name="Button">4</device_request>'
        "</requests></data_service></sci_request>"
    )


def test_set_temperature_envelope() -> None:
    body = encode_set_temperature(DEVICE_ID, 71)
    assert '<device_request target_name="SetTemp">71</device_request>' in body
    assert body == SciRequest(DEVICE_ID, "SetTemp", 71).build()


def test_file_request_envelope() -> None:
    assert encode_file_request(DEVICE_ID, "PanelUpdate") == (
        '<sci_request version="1.0"><file_system cache="false"><targets>'
        f'<device id="{DEVICE_ID}"/></targets><commands>'
        '<get_file path="PanelUpdate.txt"/></commands></file_system></sci_request>'
    )


def test_button_table() -> None:
    assert [BUTTON_MAP[f"Pump{n}"] for n in range(1, 7)] == [4, 5, 6, 7, 8, 9]
    assert (BUTTON_MAP["Light1"], BUTTON_MAP["Light2"]) == (17, 18)
    assert (BUTTON_MAP["Aux1"], BUTTON_MAP["Aux2"]) == (22, 23)
    assert BUTTON_MAP["Blower"] == 12
    assert BUTTON_MAP["Mister"] == 14
    assert BUTTON_MAP["TempRange"] == 80
    assert BUTTON_MAP["HeatMode"] == 81


def test_setpoint_round_trip_celsius(panel_frame) -> None:
    """A Celsius setpoint sent as raw units decodes back to the same value."""
    raw = to_raw_temperature(38.5, TemperatureScale.CELSIUS)
    body = encode_set_temperature(DEVICE_ID, raw)
    assert f">{raw}</device_request>" in body
    status = decode_panel_update(panel_frame(b13=0x01, b24=raw))
    assert status.target_temperature == pytest.approx(38.5)


def test_extract_file_data() -> None:
    reply = (
        '<sci_reply version="1.0"><file_system><device id="abc"><commands>'
        "<get_file><data>\n  AAEC\n</data></get_file>"
        "</commands></device></file_system></sci_reply>"
    )
    assert extract_file_data(reply) == "AAEC"


def test_extract_file_data_without_data_element() -> None:
    assert extract_file_data("<reply> AAEC </reply>") == "AAEC"


@pytest.mark.parametrize(
    "reply",
    [
        "not xml at all",
        "<sci_reply><file_system><data> </data></file_system></sci_reply>",
        '<sci_reply><error id="2003">device not connected</error></sci_reply>',
    ],
)
def test_extract_file_data_rejects_bad_replies(reply: str) -> None:
    with pytest.raises(MalformedFrameError):
        extract_file_data(reply)


def test_builders_import_without_the_client() -> None:
    """The request builders load in a fresh interpreter on their own."""
    from custom_components.bwa_spa import api

    assert "BwaCloudClient" not in api.__all__
    result = subprocess.run(
        [sys.executable, "-c", "import custom_components.bwa_spa.sci_request"],
        cwd=Path(__file__).parents[1],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0, result.stderr
