"""Exceptions raised by the BWA Spa Manager integration."""

from __future__ import annotations


class BwaSpaError(Exception):
    """Base class for all errors raised by this integration."""


class MalformedFrameError(BwaSpaError):
    """The panel frame (or the reply carrying it) could not be decoded."""


class BwaAuthError(BwaSpaError):
    """The BWA cloud rejected the credentials or the token."""


class BwaConnectionError(BwaSpaError):
    """The BWA cloud could not be reached or answered unexpectedly."""
