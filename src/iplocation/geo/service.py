"""Lookup service over the MaxMind GeoIP2 city database."""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import geoip2.database
import maxminddb
from geoip2.errors import AddressNotFoundError

from iplocation.errors import InitializationFailure
from .database import DEFAULT_MODE, get_default_db_path, resolve_mode

logger = logging.getLogger(__name__)

UNKNOWN = ""

# Database types that answer city queries
CITY_DATABASE_TYPES = ("City", "Enterprise")


@dataclass(frozen=True)
class GeoRecord:
    """Raw location data returned by one database lookup."""
    country_code: Optional[str] = None  # ISO 3166-1 alpha-2 (e.g., "AT")
    country_name: Optional[str] = None
    region_code: Optional[str] = None  # ISO 3166-2 subdivision code (e.g., "9")
    region_name: Optional[str] = None
    city: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    time_zone: Optional[str] = None  # IANA name (e.g., "Europe/Vienna")

    @classmethod
    def from_response(cls, response) -> "GeoRecord":
        """Build a record from a geoip2 City response."""
        subdivision = response.subdivisions.most_specific
        return cls(
            country_code=response.country.iso_code,
            country_name=response.country.name,
            region_code=subdivision.iso_code,
            region_name=subdivision.name,
            city=response.city.name,
            latitude=response.location.latitude,
            longitude=response.location.longitude,
            time_zone=response.location.time_zone,
        )


class LookupService:
    """Single point of access to the GeoIP2 city database.

    Region names and time zones come from the reference data GeoLite2 stores
    with each record, so they depend only on the record being asked about.
    """

    def __init__(self, db_path: Optional[Path] = None, mode: str = DEFAULT_MODE):
        """Open the database.

        Args:
            db_path: Path to a GeoIP2/GeoLite2 City or GeoIP2 Enterprise
                database. Uses the installed database if None.
            mode: Open mode name, see ``database.OPEN_MODES``.

        Raises:
            InitializationFailure: If the database cannot be opened or is
                not a City or Enterprise database.
        """
        self._db_path = Path(db_path) if db_path is not None else get_default_db_path()

        try:
            open_mode = resolve_mode(mode)
        except ValueError as e:
            raise InitializationFailure(self._db_path, str(e)) from e

        if not self._db_path.exists():
            raise InitializationFailure(self._db_path, "GeoIP database not found")

        try:
            self._reader = geoip2.database.Reader(str(self._db_path), mode=open_mode)
        except (OSError, ValueError, maxminddb.InvalidDatabaseError) as e:
            raise InitializationFailure(self._db_path, f"Cannot open GeoIP database ({e})") from e

        self._metadata = self._reader.metadata()
        if not any(t in self._metadata.database_type for t in CITY_DATABASE_TYPES):
            self._reader.close()
            raise InitializationFailure(
                self._db_path,
                f"Not a City or Enterprise database ({self._metadata.database_type})",
            )

        self._mode = mode
        self._lock = threading.Lock()
        logger.info(
            f"Opened {self._metadata.database_type} database {self._db_path} (mode={mode})"
        )

    @property
    def db_path(self) -> Path:
        return self._db_path

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def database_type(self) -> str:
        return self._metadata.database_type

    @property
    def build_epoch(self) -> int:
        return self._metadata.build_epoch

    def get_location(self, ip: str) -> Optional[GeoRecord]:
        """Look up the location record for an IP address.

        Args:
            ip: IP address in dot format

        Returns:
            GeoRecord, or None if the address is invalid or not in the database
        """
        with self._lock:
            try:
                response = self._reader.city(ip)
            except (AddressNotFoundError, ValueError) as e:
                logger.debug(f"GeoIP lookup failed for {ip}: {e}")
                return None

        return GeoRecord.from_response(response)

    def region_name(self, record: GeoRecord) -> str:
        """Region name for the record's subdivision, or "" if unknown."""
        return record.region_name or UNKNOWN

    def time_zone(self, record: GeoRecord) -> str:
        """IANA time zone for the record's location, or "" if unknown."""
        return record.time_zone or UNKNOWN

    def close(self):
        """Close the database reader."""
        self._reader.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


_default_service: Optional[LookupService] = None
_default_lock = threading.Lock()


def get_lookup_service(db_path: Optional[Path] = None, mode: Optional[str] = None) -> LookupService:
    """Return the process-wide lookup service, opening it on first use.

    Arguments only take effect on the call that opens the database. Later
    calls asking for a different path or mode get the open service and a
    warning.

    Raises:
        InitializationFailure: If the database cannot be opened.
    """
    global _default_service
    if _default_service is None:
        with _default_lock:
            if _default_service is None:
                _default_service = LookupService(db_path, mode=mode or DEFAULT_MODE)
                return _default_service

    path_differs = db_path is not None and Path(db_path) != _default_service.db_path
    mode_differs = mode is not None and mode != _default_service.mode
    if path_differs or mode_differs:
        logger.warning(
            f"GeoIP database already open at {_default_service.db_path} "
            f"(mode={_default_service.mode}), ignoring db_path={db_path} mode={mode}"
        )
    return _default_service


def reset_lookup_service():
    """Close and forget the process-wide lookup service."""
    global _default_service
    with _default_lock:
        if _default_service is not None:
            _default_service.close()
            _default_service = None
