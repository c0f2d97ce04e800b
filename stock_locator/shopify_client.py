"""Shopify Admin API client for variant, inventory and location lookups."""

import logging
import math
import os
from urllib.parse import quote

import requests
from dotenv import load_dotenv

from stock_locator.base_client import InventoryPlatformClient
from stock_locator.errors import UpstreamUnavailable, VariantNotFound
from stock_locator.models import InventoryRecord, LocationRecord

load_dotenv()

API_VERSION = "2025-10"
DEFAULT_TIMEOUT = 10.0

logger = logging.getLogger(__name__)


def _require_int(value, what: str) -> int:
    # bool is an int subclass; Shopify never sends one for an id or quantity.
    if isinstance(value, bool) or not isinstance(value, int):
        raise UpstreamUnavailable(f"Malformed {what} in Shopify response: {value!r}")
    return value


def _text(value) -> str:
    return value if isinstance(value, str) else ""


def _parse_inventory_level(level) -> InventoryRecord:
    if not isinstance(level, dict):
        raise UpstreamUnavailable(f"Malformed inventory level in Shopify response: {level!r}")
    location_id = _require_int(level.get("location_id"), "location_id")
    available = level.get("available")
    # Untracked items report null; oversold ones go negative.
    if available is None:
        available = 0
    available = max(0, _require_int(available, "available quantity"))
    return InventoryRecord(location_id=location_id, available=available)


def _parse_location(location) -> LocationRecord:
    if not isinstance(location, dict):
        raise UpstreamUnavailable(f"Malformed location in Shopify response: {location!r}")
    return LocationRecord(
        id=_require_int(location.get("id"), "location id"),
        name=_text(location.get("name")) or "Store",
        address_line=_text(location.get("address1")),
        city=_text(location.get("city")),
        postal_code=_text(location.get("zip")),
        phone=_text(location.get("phone")) or None,
    )


class ShopifyClient(InventoryPlatformClient):
    """Client for the Shopify Admin REST API."""

    def __init__(
        self,
        store_url: str | None = None,
        access_token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.store_url = (store_url or os.getenv("SHOPIFY_STORE_URL", "")).rstrip("/")
        self.access_token = access_token or os.getenv("SHOPIFY_ACCESS_TOKEN", "")
        if not self.store_url or not self.access_token:
            raise ValueError(
                "SHOPIFY_STORE_URL and SHOPIFY_ACCESS_TOKEN must be set "
                "either as arguments or in a .env file."
            )
        if not math.isfinite(timeout) or timeout <= 0:
            raise ValueError(f"timeout must be a positive number of seconds, got {timeout}")
        self.timeout = timeout
        self.base_url = f"https://{self.store_url}/admin/api/{API_VERSION}"
        self.session = requests.Session()
        self.session.headers.update(
            {
                "X-Shopify-Access-Token": self.access_token,
                "Content-Type": "application/json",
            }
        )

    def _request(self, endpoint: str, params: dict | None = None) -> requests.Response:
        url = f"{self.base_url}/{endpoint}.json"
        try:
            return self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Shopify request to %s failed: %s", endpoint, exc)
            raise UpstreamUnavailable(f"Unable to reach Shopify: {exc}") from exc

    def _decode(self, endpoint: str, resp: requests.Response) -> dict:
        try:
            resp.raise_for_status()
        except requests.HTTPError as exc:
            logger.error("Shopify %s returned HTTP %s", endpoint, resp.status_code)
            raise UpstreamUnavailable(
                f"Shopify {endpoint} returned HTTP {resp.status_code}"
            ) from exc
        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamUnavailable(f"Shopify {endpoint} returned invalid JSON") from exc
        if not isinstance(data, dict):
            raise UpstreamUnavailable(f"Shopify {endpoint} returned unexpected payload")
        return data

    def _get(self, endpoint: str, params: dict | None = None) -> dict:
        return self._decode(endpoint, self._request(endpoint, params))

    def get_inventory_item_id(self, variant_id: str) -> int:
        """Resolve a variant to its inventory item id.

        Shopify answers 404 for unknown variants, and a null
        ``inventory_item_id`` for variants that do not track inventory;
        both raise VariantNotFound.
        """
        endpoint = f"variants/{quote(str(variant_id), safe='')}"
        resp = self._request(endpoint)
        if resp.status_code == 404:
            raise VariantNotFound(variant_id)
        data = self._decode(endpoint, resp)

        variant = data.get("variant")
        if not isinstance(variant, dict):
            raise UpstreamUnavailable("Shopify variant response has no 'variant' object")
        inventory_item_id = variant.get("inventory_item_id")
        if inventory_item_id is None:
            raise VariantNotFound(variant_id)
        return _require_int(inventory_item_id, "inventory_item_id")

    def get_inventory_levels(self, inventory_item_id: int) -> list[InventoryRecord]:
        """Fetch stock levels for an inventory item.

        Args:
            inventory_item_id: Id returned by get_inventory_item_id().

        Returns:
            One InventoryRecord per location, in the order Shopify lists them.
        """
        data = self._get("inventory_levels", {"inventory_item_ids": inventory_item_id})
        levels = data.get("inventory_levels")
        if not isinstance(levels, list):
            raise UpstreamUnavailable("Shopify response has no 'inventory_levels' list")
        return [_parse_inventory_level(level) for level in levels]

    def get_locations(self, location_ids: list[int]) -> list[LocationRecord]:
        if not location_ids:
            return []
        ids = ",".join(str(location_id) for location_id in location_ids)
        data = self._get("locations", {"ids": ids})
        locations = data.get("locations")
        if not isinstance(locations, list):
            raise UpstreamUnavailable("Shopify response has no 'locations' list")
        return [_parse_location(location) for location in locations]
