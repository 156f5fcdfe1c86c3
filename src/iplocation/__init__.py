"""Look up the location of IP addresses and the distance between them.

Uses the MaxMind GeoLite2 City database.

    >>> from iplocation import Location, distance
    >>> Location("194.232.104.21").city
    'Vienna'
    >>> round(distance("194.232.104.21", "91.197.28.69"), 2)
    622.77
"""

from .errors import GeoIPError, InitializationFailure, ResolutionFailure
from .geo import Location, LookupService, distance, get_lookup_service

__version__ = "0.1.0"

__all__ = [
    "Location",
    "LookupService",
    "distance",
    "get_lookup_service",
    "GeoIPError",
    "InitializationFailure",
    "ResolutionFailure",
]
