"""Resolve a product variant to nearby stores that have it in stock."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

from stock_locator.base_client import Geocoder, InventoryPlatformClient
from stock_locator.distance import distance_miles
from stock_locator.errors import InvalidPostcode, InvalidRequest
from stock_locator.models import (
    GeoCoordinate,
    InventoryRecord,
    LocationRecord,
    ResolvedStore,
    StockResult,
    StockStatus,
)

DEFAULT_MAX_RESULTS = 3
DEFAULT_GEOCODE_WORKERS = 4

LocationMatcher = Callable[[LocationRecord], bool]

logger = logging.getLogger(__name__)


def name_contains(*needles: str) -> LocationMatcher:
    """Match locations whose name contains any of *needles*, ignoring case."""
    lowered = [n.lower() for n in needles if n]

    def matcher(location: LocationRecord) -> bool:
        name = location.name.lower()
        return any(n in name for n in lowered)

    return matcher


def address_contains(*needles: str) -> LocationMatcher:
    """Match locations whose address line contains any of *needles*, ignoring case."""
    lowered = [n.lower() for n in needles if n]

    def matcher(location: LocationRecord) -> bool:
        address = location.address_line.lower()
        return any(n in address for n in lowered)

    return matcher


def any_of(*matchers: LocationMatcher) -> LocationMatcher:
    def matcher(location: LocationRecord) -> bool:
        return any(m(location) for m in matchers)

    return matcher


def _never(location: LocationRecord) -> bool:
    return False


class StockResolver:
    """Find the nearest stores holding stock of a variant.

    The resolver is stateless between calls: every ``resolve()`` builds its
    records fresh from the collaborators, so one instance can serve
    concurrent requests.

    Args:
        inventory_client: Source of variants, stock levels and locations.
        geocoder: Postcode to coordinate lookup.
        exclude_location: Predicate marking fulfilment-only locations
            (warehouses) that must never be offered to customers.
        max_results: Default cap on the number of stores returned.
        geocode_workers: Thread pool width for geocoding store postcodes.
            1 geocodes stores one at a time.
    """

    def __init__(
        self,
        inventory_client: InventoryPlatformClient,
        geocoder: Geocoder,
        exclude_location: LocationMatcher | None = None,
        max_results: int = DEFAULT_MAX_RESULTS,
        geocode_workers: int = DEFAULT_GEOCODE_WORKERS,
    ):
        if max_results < 1:
            raise ValueError(f"max_results must be positive, got {max_results}")
        if geocode_workers < 1:
            raise ValueError(f"geocode_workers must be positive, got {geocode_workers}")
        self.inventory_client = inventory_client
        self.geocoder = geocoder
        self.exclude_location = exclude_location or _never
        self.max_results = max_results
        self.geocode_workers = geocode_workers

    def resolve(
        self,
        variant_id: str | int,
        customer_postcode: str,
        max_results: int | None = None,
    ) -> StockResult:
        """Rank the stores holding stock of *variant_id* by distance.

        Args:
            variant_id: Platform identifier of the product variant.
            customer_postcode: Postcode the distances are measured from.
            max_results: Overrides the resolver's default result cap.

        Returns:
            A StockResult. ``OUT_OF_STOCK`` means no location holds stock;
            ``NO_QUALIFYING_STORE`` means only excluded locations do.

        Raises:
            InvalidRequest: A required input is missing or max_results < 1.
            VariantNotFound: The variant is unknown or not inventory-tracked.
            InvalidPostcode: The customer postcode could not be geocoded.
            UpstreamUnavailable: The inventory platform failed.
        """
        if variant_id is None or not str(variant_id).strip():
            raise InvalidRequest("A variant ID is required.")
        if not isinstance(customer_postcode, str) or not customer_postcode.strip():
            raise InvalidRequest("A postcode is required.")
        limit = self.max_results if max_results is None else max_results
        if limit < 1:
            raise InvalidRequest(f"max_results must be positive, got {limit}")

        logger.info("Resolving stock for variant %s near %s", variant_id, customer_postcode)

        inventory_item_id = self.inventory_client.get_inventory_item_id(str(variant_id).strip())
        logger.debug("Variant %s has inventory item %s", variant_id, inventory_item_id)

        levels = self.inventory_client.get_inventory_levels(inventory_item_id)
        in_stock = [record for record in levels if record.available > 0]
        logger.info("%d location(s) hold stock of variant %s", len(in_stock), variant_id)
        if not in_stock:
            return StockResult.out_of_stock()

        candidates = self._join_locations(in_stock)
        if not candidates:
            return StockResult.no_qualifying_store()

        customer = self.geocoder.geocode(customer_postcode)
        if customer is None:
            raise InvalidPostcode(customer_postcode)
        logger.debug("Customer coordinates: %s", customer)

        coordinates = self._geocode_stores([location for location, _ in candidates])

        located: list[ResolvedStore] = []
        unlocated: list[ResolvedStore] = []
        for (location, record), coordinate in zip(candidates, coordinates):
            if coordinate is None:
                unlocated.append(ResolvedStore.from_records(location, record))
            else:
                distance = distance_miles(customer, coordinate)
                located.append(ResolvedStore.from_records(location, record, distance))

        if located:
            located.sort(key=lambda store: store.distance_miles)
            return StockResult(StockStatus.OK, located[:limit], ranked_by_distance=True)

        logger.warning("No store postcode could be geocoded; returning stores unranked")
        return StockResult(StockStatus.OK, unlocated[:limit], ranked_by_distance=False)

    def _join_locations(
        self,
        in_stock: list[InventoryRecord],
    ) -> list[tuple[LocationRecord, InventoryRecord]]:
        """Pair stock records with their locations, dropping excluded ones.

        Order follows *in_stock*. Records whose location is missing from the
        directory are skipped.
        """
        location_ids = list(dict.fromkeys(record.location_id for record in in_stock))
        locations = {
            location.id: location
            for location in self.inventory_client.get_locations(location_ids)
        }

        joined: list[tuple[LocationRecord, InventoryRecord]] = []
        for record in in_stock:
            location = locations.get(record.location_id)
            if location is None:
                logger.debug("Location %s missing from directory", record.location_id)
                continue
            if self.exclude_location(location):
                logger.info("Skipping warehouse: %s", location.name)
                continue
            joined.append((location, record))
        return joined

    def _geocode_store(self, location: LocationRecord) -> GeoCoordinate | None:
        if not location.postal_code:
            return None
        return self.geocoder.geocode(location.postal_code)

    def _geocode_stores(self, locations: list[LocationRecord]) -> list[GeoCoordinate | None]:
        """Geocode each store's postcode, keeping the input order."""
        if self.geocode_workers == 1 or len(locations) <= 1:
            return [self._geocode_store(location) for location in locations]
        workers = min(self.geocode_workers, len(locations))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(self._geocode_store, locations))
