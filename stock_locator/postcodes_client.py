"""postcodes.io client for geocoding UK postcodes."""

import logging
import math
import os
from urllib.parse import quote

import requests
from dotenv import load_dotenv

from stock_locator.base_client import Geocoder
from stock_locator.models import GeoCoordinate

load_dotenv()

DEFAULT_BASE_URL = "https://api.postcodes.io"
DEFAULT_TIMEOUT = 10.0

logger = logging.getLogger(__name__)


def clean_postcode(postcode: str) -> str:
    """Strip all whitespace and upper-case a postcode ("bn1 1aa" -> "BN11AA")."""
    return "".join(postcode.split()).upper()


def _parse_coordinate(data) -> GeoCoordinate | None:
    if not isinstance(data, dict) or data.get("status") != 200:
        return None
    result = data.get("result")
    if not isinstance(result, dict):
        return None
    latitude = result.get("latitude")
    longitude = result.get("longitude")
    # Some valid postcodes (e.g. Channel Islands) come back without coordinates.
    if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in (latitude, longitude)):
        return None
    try:
        return GeoCoordinate(latitude=float(latitude), longitude=float(longitude))
    except ValueError:
        return None


class PostcodesIoGeocoder(Geocoder):
    """Geocoder backed by the public postcodes.io lookup API.

    Lookup failures of any kind are reported as None rather than raised, so
    callers can decide whether a missing coordinate is fatal.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = (base_url or os.getenv("POSTCODES_IO_URL", DEFAULT_BASE_URL)).rstrip("/")
        if not math.isfinite(timeout) or timeout <= 0:
            raise ValueError(f"timeout must be a positive number of seconds, got {timeout}")
        self.timeout = timeout
        self.session = requests.Session()

    def geocode(self, postcode: str) -> GeoCoordinate | None:
        cleaned = clean_postcode(postcode or "")
        if not cleaned:
            return None

        url = f"{self.base_url}/postcodes/{quote(cleaned, safe='')}"
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Geocoding %s failed: %s", cleaned, exc)
            return None

        if not resp.ok:
            logger.warning("Geocoding %s returned HTTP %s", cleaned, resp.status_code)
            return None

        try:
            data = resp.json()
        except ValueError:
            logger.warning("Geocoding %s returned invalid JSON", cleaned)
            return None

        coordinate = _parse_coordinate(data)
        if coordinate is None:
            logger.warning("Geocoding %s returned no coordinates", cleaned)
        return coordinate
