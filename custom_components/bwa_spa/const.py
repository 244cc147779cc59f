"""Constants used by the BWA Spa Manager integration.

This module defines a small set of constants used throughout the
integration.  Separating these values from the rest of the code makes it
easy to modify them in one place and improves the readability of the
components that rely on them.
"""

from __future__ import annotations

from homeassistant.const import Platform


# The domain string is used by Home Assistant to differentiate this
# integration from others.  It must match the name of the directory in
# ``custom_components``.
DOMAIN: str = "bwa_spa"

MANUFACTURER: str = "Balboa Water Group"
MODEL: str = "BWA Spa"

# Configuration keys exposed to the user via the config flow.
CONF_USERNAME: str = "username"
CONF_PASSWORD: str = "password"
CONF_DEVICE_ID: str = "device_id"
CONF_SCAN_INTERVAL: str = "scan_interval"
CONF_ACCESSORIES: str = "accessories"

# Polling interval in minutes.  The cloud only offers a handful of sane
# choices so the options flow restricts the user to these.
SCAN_INTERVAL_OPTIONS: list[int] = [1, 5, 10, 15, 30]
DEFAULT_SCAN_INTERVAL: int = 5

# Seconds to wait after a command before asking the cloud for a fresh
# panel update.
COMMAND_REFRESH_DELAY: int = 2

# Platforms that the integration supports.
PLATFORMS: list[Platform] = [
    Platform.CLIMATE,
    Platform.SWITCH,
    Platform.SENSOR,
    Platform.BUTTON,
]
