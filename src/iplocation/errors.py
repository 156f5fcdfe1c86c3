"""Exceptions raised by iplocation."""

from pathlib import Path
from typing import Optional


class GeoIPError(Exception):
    """Base class for all iplocation errors."""


class ResolutionFailure(GeoIPError):
    """One or more IP addresses could not be resolved to a location."""

    def __init__(self, *ips: str, reason: Optional[str] = None):
        if not ips:
            raise TypeError("ResolutionFailure requires at least one ip")
        self.ips = tuple(ips)
        self.ip = ips[0]
        self.reason = reason
        message = f"could not lookup ip {', '.join(self.ips)}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InitializationFailure(GeoIPError):
    """The GeoIP database could not be opened."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")
