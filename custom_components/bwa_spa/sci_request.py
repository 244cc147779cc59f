"""Utility for constructing BWA cloud SCI request bodies.

The BWA cloud forwards commands to the spa controller wrapped in an XML
envelope called an *SCI request*.  Two flavours are used by this
integration:

* a ``data_service`` request that delivers a payload to a named target
  on the controller (``Button`` presses a virtual panel button,
  ``SetTemp`` changes the heating setpoint);
* a ``file_system`` request that reads a file from the controller, used
  to fetch ``PanelUpdate.txt``.

The :class:`SciRequest` class does not transmit anything; it simply
prepares the body.  Use :class:`~custom_components.bwa_spa.api.client.BwaCloudClient`
to send it.

Example
-------

To build the body that toggles pump 1::

    from custom_components.bwa_spa.sci_request import encode_button_press

    body = encode_button_press("00000000-00000000-001527FF-FF09818B", 4)
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from xml.sax.saxutils import escape, quoteattr

from .api.parameters import TARGET_BUTTON, TARGET_SET_TEMP
from .exceptions import MalformedFrameError

_LOGGER = logging.getLogger(__name__)


class SciRequest:
    """A single ``data_service`` request addressed to one spa controller.

    Parameters
    ----------
    device_id: str
        The cloud identifier of the spa controller, as returned by login.
    target_name: str
        The controller target receiving ``data`` (``"Button"`` or
        ``"SetTemp"``).
    data: int or str
        The payload delivered to the target.  Integers are rendered in
        decimal.
    """

    def __init__(self, device_id: str, target_name: str, data: int | str) -> None:
        self.device_id: str = device_id
        self.target_name: str = target_name
        self.data: str = str(data)

    def build(self) -> str:
        """Assemble the XML body of the request."""
        return (
            '<sci_request version="1.0"><data_service><targets>'
            f"<device id={quoteattr(self.device_id)}/>"
            "</targets><requests>"
            f"<device_request target_name={quoteattr(self.target_name)}>"
            f"{escape(self.data)}"
            "</device_request></requests></data_service></sci_request>"
        )


def encode_button_press(device_id: str, button_id: int) -> str:
    """Return the request body pressing ``button_id`` on the spa panel."""
    return SciRequest(device_id, TARGET_BUTTON, button_id).build()


def encode_set_temperature(device_id: str, value: int) -> str:
    """Return the request body changing the setpoint.

    ``value`` is in the controller's raw units: half degrees in Celsius,
    whole degrees in Fahrenheit.
    """
    return SciRequest(device_id, TARGET_SET_TEMP, int(value)).build()


def encode_file_request(device_id: str, file_name: str) -> str:
    """Return the request body reading ``{file_name}.txt`` from the spa."""
    return (
        '<sci_request version="1.0"><file_system cache="false"><targets>'
        f"<device id={quoteattr(device_id)}/>"
        "</targets><commands>"
        f"<get_file path={quoteattr(file_name + '.txt')}/>"
        "</commands></file_system></sci_request>"
    )


def extract_file_data(reply: str) -> str:
    """Pull the file contents out of the reply to a file request.

    The reply nests the base64 file contents in a ``data`` element.  If
    no such element exists the text content of the whole document is
    used instead.

    Raises
    ------
    MalformedFrameError
        If the reply is not XML, reports an error or carries no data.
    """
    try:
        root = ET.fromstring(reply)
    except ET.ParseError as err:
        raise MalformedFrameError(f"Unreadable file reply: {err}") from err

    error = root.find(".//error")
    if error is not None:
        message = "".join(error.itertext()).strip() or error.get("id", "unknown")
        raise MalformedFrameError(f"Spa reported an error reading the file: {message}")

    data = root.find(".//data")
    text = "".join((data if data is not None else root).itertext()).strip()
    if not text:
        raise MalformedFrameError("File reply carries no data")
    _LOGGER.debug("File reply carried %d characters", len(text))
    return text
