"""GeoIP lookups and distances."""

from .database import (
    GeoDatabase,
    OPEN_MODES,
    get_database_info,
    get_default_db_path,
)
from .distance import EARTH_RADIUS_KM, distance, haversine_distance
from .location import Location
from .service import (
    GeoRecord,
    LookupService,
    get_lookup_service,
    reset_lookup_service,
)

__all__ = [
    "GeoDatabase",
    "OPEN_MODES",
    "get_database_info",
    "get_default_db_path",
    "EARTH_RADIUS_KM",
    "distance",
    "haversine_distance",
    "Location",
    "GeoRecord",
    "LookupService",
    "get_lookup_service",
    "reset_lookup_service",
]
