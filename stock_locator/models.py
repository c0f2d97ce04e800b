"""Shared data models for store stock lookups."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class InventoryRecord:
    """Stock held for one variant at one location."""

    location_id: int
    available: int


@dataclass(frozen=True)
class LocationRecord:
    """A store or warehouse from the platform's location directory."""

    id: int
    name: str
    address_line: str
    city: str
    postal_code: str
    phone: str | None = None

    @property
    def full_address(self) -> str:
        parts = [self.address_line, self.city, self.postal_code]
        return ", ".join(p for p in parts if p)


@dataclass(frozen=True)
class GeoCoordinate:
    """A resolved latitude/longitude pair."""

    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude {self.latitude} out of range [-90, 90]")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude {self.longitude} out of range [-180, 180]")


@dataclass
class ResolvedStore:
    """A nearby store carrying stock, as returned to the caller."""

    name: str
    address_line: str
    city: str
    postal_code: str
    phone: str | None
    available: int
    distance_miles: float | None = None

    @classmethod
    def from_records(
        cls,
        location: LocationRecord,
        inventory: InventoryRecord,
        distance_miles: float | None = None,
    ) -> "ResolvedStore":
        return cls(
            name=location.name,
            address_line=location.address_line,
            city=location.city,
            postal_code=location.postal_code,
            phone=location.phone,
            available=inventory.available,
            distance_miles=distance_miles,
        )


class StockStatus(Enum):
    OK = "ok"
    OUT_OF_STOCK = "out_of_stock"
    NO_QUALIFYING_STORE = "no_qualifying_store"


@dataclass
class StockResult:
    """Outcome of a stock resolution.

    ``stores`` is empty unless ``status`` is ``StockStatus.OK``.
    ``ranked_by_distance`` is False when no store could be geocoded and the
    stores are listed in inventory order instead.
    """

    status: StockStatus
    stores: list[ResolvedStore] = field(default_factory=list)
    ranked_by_distance: bool = False

    @classmethod
    def out_of_stock(cls) -> "StockResult":
        return cls(status=StockStatus.OUT_OF_STOCK)

    @classmethod
    def no_qualifying_store(cls) -> "StockResult":
        return cls(status=StockStatus.NO_QUALIFYING_STORE)
