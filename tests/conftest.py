"""Shared fixtures: a fake GeoIP2 reader behind a real LookupService."""

import ipaddress
from unittest.mock import MagicMock, patch

import pytest
from geoip2.errors import AddressNotFoundError

from iplocation.geo import service as service_module
from iplocation.geo.service import LookupService

VIENNA_IP = "194.232.104.21"
BERLIN_IP = "85.214.132.117"
NORTH_OF_VIENNA_IP = "91.197.28.69"
COUNTRY_ONLY_IP = "1.0.0.1"
NO_COORDS_IP = "203.0.113.5"
VIENNA_OTHER_IP = "81.217.0.1"
MIAMI_IP = "73.85.0.1"
PENSACOLA_IP = "73.85.128.1"

RESPONSES = {
    VIENNA_IP: dict(
        country_code="AT", country_name="Austria",
        region_code="9", region_name="Wien", city="Vienna",
        latitude=48.19999694824219, longitude=16.36669921875,
        time_zone="Europe/Vienna",
    ),
    BERLIN_IP: dict(
        country_code="DE", country_name="Germany",
        region_code="BE", region_name="Land Berlin", city="Berlin",
        latitude=52.52, longitude=13.405,
        time_zone="Europe/Berlin",
    ),
    COUNTRY_ONLY_IP: dict(
        country_code="US", country_name="United States",
        latitude=37.751, longitude=-97.822,
        time_zone="America/Chicago",
    ),
    NO_COORDS_IP: dict(
        country_code="AU", country_name="Australia",
    ),
    # Due north of VIENNA_IP: 622.77 km with the 6378.2 km earth radius
    NORTH_OF_VIENNA_IP: dict(
        country_code="PL", country_name="Poland",
        region_code="32", region_name="West Pomerania", city="Szczecinek",
        latitude=53.794400, longitude=16.36669921875,
        time_zone="Europe/Warsaw",
    ),
    # Same country/region codes as VIENNA_IP, different record data
    VIENNA_OTHER_IP: dict(
        country_code="AT", country_name="Austria",
        region_code="9", region_name="Vienna", city="Vienna",
        latitude=48.2, longitude=16.37,
        time_zone="Europe/Berlin",
    ),
    # Florida spans two time zones
    MIAMI_IP: dict(
        country_code="US", country_name="United States",
        region_code="FL", region_name="Florida", city="Miami",
        latitude=25.7743, longitude=-80.1937,
        time_zone="America/New_York",
    ),
    PENSACOLA_IP: dict(
        country_code="US", country_name="United States",
        region_code="FL", region_name="Florida", city="Pensacola",
        latitude=30.4213, longitude=-87.2169,
        time_zone="America/Chicago",
    ),
}


def make_response(country_code=None, country_name=None, region_code=None,
                  region_name=None, city=None, latitude=None, longitude=None,
                  time_zone=None):
    """Build a mock geoip2 City response."""
    response = MagicMock()
    response.country.iso_code = country_code
    response.country.name = country_name
    response.subdivisions.most_specific.iso_code = region_code
    response.subdivisions.most_specific.name = region_name
    response.city.name = city
    response.location.latitude = latitude
    response.location.longitude = longitude
    response.location.time_zone = time_zone
    return response


def fake_city(ip):
    """Mimic geoip2.database.Reader.city for the fixture addresses."""
    if ip in RESPONSES:
        return make_response(**RESPONSES[ip])
    try:
        ipaddress.ip_address(ip)
    except ValueError:
        raise ValueError(f"'{ip}' does not appear to be an IPv4 or IPv6 address")
    raise AddressNotFoundError(f"The address {ip} is not in the database.")


@pytest.fixture
def mock_reader():
    """Patch geoip2.database.Reader with a City database fake."""
    with patch("geoip2.database.Reader") as reader_class:
        reader = MagicMock()
        reader_class.return_value = reader
        reader.metadata.return_value.database_type = "GeoLite2-City"
        reader.metadata.return_value.build_epoch = 1700000000
        reader.city.side_effect = fake_city
        yield reader


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "GeoLite2-City.mmdb"
    path.write_bytes(b"fake mmdb content")
    return path


@pytest.fixture
def service(mock_reader, db_path):
    svc = LookupService(db_path)
    yield svc
    svc.close()


@pytest.fixture
def clean_default_service(monkeypatch):
    """Start and end a test without a process-wide service."""
    monkeypatch.setattr(service_module, "_default_service", None)
    yield
    service_module._default_service = None
