import requests

from stock_locator.base_client import Geocoder, InventoryPlatformClient
from stock_locator.errors import VariantNotFound
from stock_locator.models import GeoCoordinate, LocationRecord


class FakeInventoryClient(InventoryPlatformClient):
    def __init__(self, levels, locations, inventory_item_id=808):
        self.levels = levels
        self.locations = locations
        self.inventory_item_id = inventory_item_id
        self.calls = []

    def get_inventory_item_id(self, variant_id):
        self.calls.append(("variant", variant_id))
        if self.inventory_item_id is None:
            raise VariantNotFound(variant_id)
        return self.inventory_item_id

    def get_inventory_levels(self, inventory_item_id):
        self.calls.append(("levels", inventory_item_id))
        return list(self.levels)

    def get_locations(self, location_ids):
        self.calls.append(("locations", list(location_ids)))
        return [loc for loc in self.locations if loc.id in location_ids]


class FakeGeocoder(Geocoder):
    def __init__(self, coordinates):
        self.coordinates = coordinates
        self.calls = []

    def geocode(self, postcode):
        self.calls.append(postcode)
        return self.coordinates.get(postcode)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, json_error=False):
        self.status_code = status_code
        self.payload = payload
        self.json_error = json_error

    @property
    def ok(self):
        return self.status_code < 400

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.json_error:
            raise ValueError("No JSON object could be decoded")
        return self.payload


class FakeSession:
    """Stand-in for requests.Session returning canned responses by URL suffix."""

    def __init__(self, routes=None, error=None):
        self.routes = routes or {}
        self.error = error
        self.requests = []

    def get(self, url, params=None, timeout=None):
        self.requests.append((url, params, timeout))
        if self.error is not None:
            raise self.error
        for suffix, response in self.routes.items():
            if url.endswith(suffix):
                return response
        return FakeResponse(404, {"errors": "Not Found"})


def location(id, name, postal_code="", address_line="", city="", phone=None):
    return LocationRecord(
        id=id,
        name=name,
        address_line=address_line,
        city=city,
        postal_code=postal_code,
        phone=phone,
    )


BRIGHTON = GeoCoordinate(50.8225, -0.1372)
LONDON = GeoCoordinate(51.5074, -0.1278)
LEWES = GeoCoordinate(50.8739, 0.0088)
CROYDON = GeoCoordinate(51.3762, -0.0982)

