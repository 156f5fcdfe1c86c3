"""Great-circle distance between IP addresses."""

import math
from typing import Optional

from iplocation.errors import ResolutionFailure
from .service import GeoRecord, LookupService, get_lookup_service

# Equatorial radius used by MaxMind's own distance helper, in kilometers
EARTH_RADIUS_KM = 6378.2


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate great-circle distance between two points using Haversine formula.

    Args:
        lat1, lon1: First point in degrees
        lat2, lon2: Second point in degrees

    Returns:
        Distance in kilometers
    """
    lat1 = math.radians(lat1)
    lat2 = math.radians(lat2)
    dlat = lat2 - lat1
    dlon = math.radians(lon2) - math.radians(lon1)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2

    # Antipodal points can push 'a' slightly past 1.0
    a = min(1.0, max(0.0, a))

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def record_distance(ipa: str, loca: GeoRecord, ipb: str, locb: GeoRecord) -> float:
    """Distance in kilometers between two resolved records.

    Raises:
        ResolutionFailure: If a record has no coordinates.
    """
    missing = [
        ip for ip, loc in ((ipa, loca), (ipb, locb))
        if loc.latitude is None or loc.longitude is None
    ]
    if missing:
        raise ResolutionFailure(*missing, reason="no coordinates")

    return haversine_distance(loca.latitude, loca.longitude, locb.latitude, locb.longitude)


def distance(ipa: str, ipb: str, service: Optional[LookupService] = None) -> float:
    """Get the distance in kilometers between two IPs.

    Args:
        ipa: IP address in dot format
        ipb: IP address in dot format
        service: Lookup service to use. Uses the process-wide one if None.

    Returns:
        Distance in kilometers

    Raises:
        ResolutionFailure: Naming every address that could not be resolved.
    """
    service = service or get_lookup_service()
    loca = service.get_location(ipa)
    locb = service.get_location(ipb)

    failed = [ip for ip, loc in ((ipa, loca), (ipb, locb)) if loc is None]
    if failed:
        raise ResolutionFailure(*dict.fromkeys(failed))

    return record_distance(ipa, loca, ipb, locb)
