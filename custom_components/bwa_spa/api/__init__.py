"""Internal API package for the BWA Spa Manager integration.

This package provides the classes and structures required to talk to the
BWA cloud.  The high-level :class:`~.client.BwaCloudClient`, which wraps
the HTTP session and the token lifecycle, lives in :mod:`.client` and is
imported from there.  Only the protocol definitions (frame layout,
button numbers) are re-exported here, so that the request builders can
use them without loading the client.
"""

from .parameters import ACCESSORIES, BUTTON_MAP, PANEL_UPDATE  # noqa: F401

__all__ = [
    "ACCESSORIES",
    "BUTTON_MAP",
    "PANEL_UPDATE",
]
