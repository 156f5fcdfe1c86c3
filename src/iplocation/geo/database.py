"""GeoIP database location and open modes."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

import maxminddb

DATABASE_FILENAME = "GeoLite2-City.mmdb"

# "index_cache" memory-maps the file: the search tree stays resident in the
# page cache while record payloads are only read when a lookup needs them.
OPEN_MODES = {
    "index_cache": maxminddb.MODE_MMAP,
    "memory": maxminddb.MODE_MEMORY,
    "file": maxminddb.MODE_FILE,
    "auto": maxminddb.MODE_AUTO,
}

DEFAULT_MODE = "index_cache"


def get_default_db_path() -> Path:
    """Get the database path shipped inside the installed package."""
    return Path(__file__).resolve().parent / "db" / DATABASE_FILENAME


def resolve_mode(mode: str) -> int:
    """Map a mode name to the maxminddb open mode.

    Raises:
        ValueError: If the mode name is unknown.
    """
    try:
        return OPEN_MODES[mode]
    except KeyError:
        raise ValueError(
            f"Unknown database mode '{mode}' (use one of: {', '.join(OPEN_MODES)})"
        ) from None


@dataclass
class GeoDatabase:
    """Information about the GeoIP database file."""
    path: Path
    exists: bool
    size_mb: Optional[float] = None
    modified: Optional[datetime] = None

    @property
    def status(self) -> str:
        """Human-readable status string."""
        if not self.exists:
            return "Missing"
        return "Ready"


def get_database_info(db_path: Optional[Path] = None) -> GeoDatabase:
    """Get information about the GeoIP database.

    Args:
        db_path: Path to database file. Uses the installed path if None.

    Returns:
        GeoDatabase with current database status
    """
    path = db_path or get_default_db_path()

    if not path.exists():
        return GeoDatabase(path=path, exists=False)

    stat = path.stat()
    return GeoDatabase(
        path=path,
        exists=True,
        size_mb=stat.st_size / (1024 * 1024),
        modified=datetime.fromtimestamp(stat.st_mtime),
    )
