"""Errors raised while resolving nearby store stock."""


class StockLookupError(Exception):
    """Base class for all stock lookup failures."""


class InvalidRequest(StockLookupError):
    """A required input was missing or out of range."""


class VariantNotFound(StockLookupError):
    """The variant does not exist or has no inventory-tracked item."""

    def __init__(self, variant_id):
        super().__init__(f"Variant {variant_id} not found or not inventory-tracked.")
        self.variant_id = variant_id


class InvalidPostcode(StockLookupError):
    """The customer's postcode could not be geocoded."""

    def __init__(self, postcode: str):
        super().__init__(f"Postcode {postcode!r} could not be resolved.")
        self.postcode = postcode


class UpstreamUnavailable(StockLookupError):
    """The inventory platform was unreachable or returned malformed data."""
