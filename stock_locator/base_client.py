"""Abstract base classes for the inventory platform and geocoding service."""

from abc import ABC, abstractmethod

from stock_locator.models import GeoCoordinate, InventoryRecord, LocationRecord


class InventoryPlatformClient(ABC):
    """Base class that all inventory platform clients must implement.

    Implementations raise ``UpstreamUnavailable`` when the platform cannot be
    reached or answers with a malformed payload.
    """

    @abstractmethod
    def get_inventory_item_id(self, variant_id: str) -> int:
        """Look up the inventory-tracking id of a product variant.

        Args:
            variant_id: The platform's variant identifier.

        Returns:
            The inventory item id used for stock levels.

        Raises:
            VariantNotFound: No such variant, or it is not inventory-tracked.
        """

    @abstractmethod
    def get_inventory_levels(self, inventory_item_id: int) -> list[InventoryRecord]:
        """Fetch stock levels for an inventory item across all locations.

        Args:
            inventory_item_id: Id returned by get_inventory_item_id().

        Returns:
            One InventoryRecord per location holding a level for the item.
        """

    @abstractmethod
    def get_locations(self, location_ids: list[int]) -> list[LocationRecord]:
        """Fetch directory entries for the given locations.

        Args:
            location_ids: Distinct location ids to look up.

        Returns:
            LocationRecords for the ids the directory knows about.
        """


class Geocoder(ABC):
    """Base class for postcode geocoding services."""

    @abstractmethod
    def geocode(self, postcode: str) -> GeoCoordinate | None:
        """Resolve a postcode to coordinates.

        Returns:
            The coordinates, or None when the postcode cannot be resolved.
        """
