"""Tests against a real GeoLite2 City database.

Skipped unless the database is installed, or IPLOCATION_TEST_DB points to one.
"""

import os
from pathlib import Path

import pytest

from iplocation.errors import ResolutionFailure
from iplocation.geo import LookupService, Location, distance, get_default_db_path

DB_PATH = Path(os.environ.get("IPLOCATION_TEST_DB", get_default_db_path()))

pytestmark = pytest.mark.skipif(not DB_PATH.exists(), reason=f"No GeoIP database at {DB_PATH}")

VIENNA_IP = "194.232.104.21"
OTHER_IP = "91.197.28.69"


@pytest.fixture(scope="module")
def real_service():
    with LookupService(DB_PATH) as svc:
        yield svc


def test_vienna(real_service):
    loc = Location(VIENNA_IP, service=real_service)
    assert loc.country == "Austria"
    assert loc.city == "Vienna"
    assert loc.timezone == "Europe/Vienna"
    assert loc.latitude == pytest.approx(48.2, abs=0.01)
    assert loc.longitude == pytest.approx(16.37, abs=0.01)


def test_known_distance(real_service):
    assert distance(VIENNA_IP, OTHER_IP, service=real_service) == pytest.approx(622.77, abs=1.0)


def test_symmetric(real_service):
    ab = distance(VIENNA_IP, OTHER_IP, service=real_service)
    ba = distance(OTHER_IP, VIENNA_IP, service=real_service)
    assert ab == pytest.approx(ba)


def test_invalid(real_service):
    with pytest.raises(ResolutionFailure, match="invalid.ip"):
        Location("invalid.ip", service=real_service)
    with pytest.raises(ResolutionFailure):
        distance("invalid.ip", VIENNA_IP, service=real_service)
