"""Geographic location of a single IP address."""

from typing import Any, Optional

from iplocation.errors import ResolutionFailure
from .distance import record_distance
from .service import GeoRecord, LookupService, get_lookup_service


class Location:
    """Geo location information for an IP address.

    The address is resolved when the object is built. ``region`` and
    ``timezone`` are derived from the stored record through the service on
    every access.

    Example:
        >>> loc = Location("194.232.104.21")
        >>> loc.country, loc.city, loc.timezone
        ('Austria', 'Vienna', 'Europe/Vienna')

    Raises:
        ResolutionFailure: If the IP address cannot be resolved.
    """

    def __init__(self, ip: str, service: Optional[LookupService] = None):
        self._service = service or get_lookup_service()
        record = self._service.get_location(ip)
        if record is None:
            raise ResolutionFailure(ip)
        self._ip = ip
        self._record = record

    @property
    def ip(self) -> str:
        return self._ip

    @property
    def record(self) -> GeoRecord:
        return self._record

    @property
    def country(self) -> str:
        """Country name (e.g., "Austria")."""
        return self._record.country_name or ""

    @property
    def country_code(self) -> str:
        return self._record.country_code or ""

    @property
    def region(self) -> str:
        """Region name (e.g., "Wien")."""
        return self._service.region_name(self._record)

    @property
    def city(self) -> str:
        """City name, empty when the database has none."""
        return self._record.city or ""

    @property
    def latitude(self) -> Optional[float]:
        return self._record.latitude

    @property
    def longitude(self) -> Optional[float]:
        return self._record.longitude

    @property
    def timezone(self) -> str:
        """Time zone (e.g., "Europe/Berlin")."""
        return self._service.time_zone(self._record)

    def distance_to(self, other: "Location") -> float:
        """Great-circle distance to another location in kilometers.

        Raises:
            ResolutionFailure: If either location has no coordinates.
        """
        return record_distance(self._ip, self._record, other.ip, other.record)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ip": self.ip,
            "country": self.country,
            "country_code": self.country_code,
            "region": self.region,
            "city": self.city,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timezone": self.timezone,
        }

    def __str__(self) -> str:
        """Human-readable location string."""
        parts = []
        if self.country_code:
            parts.append(self.country_code)
        if self.city:
            parts.insert(0, self.city)
        return ", ".join(parts) if parts else "Unknown"

    def __repr__(self) -> str:
        return f"Location({self._ip!r})"
