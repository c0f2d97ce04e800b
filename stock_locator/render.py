"""Render stock results for storefront pages and JSON responses."""

from html import escape

from stock_locator.errors import (
    InvalidPostcode,
    InvalidRequest,
    StockLookupError,
    UpstreamUnavailable,
    VariantNotFound,
)
from stock_locator.models import ResolvedStore, StockResult, StockStatus

OUT_OF_STOCK_MESSAGE = "Sorry, this item is currently out of stock at all stores."
NO_QUALIFYING_STORE_MESSAGE = "No stores found with this item in stock."

_ERROR_MESSAGES = {
    InvalidRequest: "Please provide a variant ID and postcode",
    VariantNotFound: "Product variant not found",
    InvalidPostcode: "Invalid UK postcode. Please check and try again.",
    UpstreamUnavailable: "Unable to connect to store. Please try again.",
}
_FALLBACK_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def _store_address(store: ResolvedStore) -> str:
    address = store.address_line
    if store.city:
        address += f", {store.city}"
    if store.postal_code:
        address += f" {store.postal_code}"
    return address.strip(", ")


def _store_item_html(store: ResolvedStore) -> str:
    lines = [
        '<li class="store-item">',
        f'<div class="store-name">{escape(store.name)}</div>',
        f'<div class="store-address">{escape(_store_address(store))}</div>',
    ]
    if store.phone:
        lines.append(f'<div class="store-phone">{escape(store.phone)}</div>')
    stock = f"<strong>{store.available}</strong> in stock"
    if store.distance_miles is not None:
        stock += (
            f' &bull; <span class="store-distance">'
            f"{store.distance_miles:.1f} miles away</span>"
        )
    lines.append(f'<div class="store-stock">{stock}</div>')
    lines.append("</li>")
    return "".join(lines)


def render_html(result: StockResult) -> str:
    """Render a StockResult as the HTML snippet embedded on product pages."""
    if result.status is StockStatus.OUT_OF_STOCK:
        return f'<p class="no-stock">{OUT_OF_STOCK_MESSAGE}</p>'
    if result.status is StockStatus.NO_QUALIFYING_STORE or not result.stores:
        return f'<p class="no-stock">{NO_QUALIFYING_STORE_MESSAGE}</p>'

    if result.ranked_by_distance:
        heading = "Available at these nearby stores:"
    else:
        heading = "Available at these stores:"
    items = "".join(_store_item_html(store) for store in result.stores)
    return (
        '<div class="stock-available">'
        f"<h4>{heading}</h4>"
        f'<ul class="store-list">{items}</ul>'
        "</div>"
    )


def render_error_html(exc: StockLookupError) -> str:
    """Render a lookup error as a customer-facing message."""
    message = _FALLBACK_ERROR_MESSAGE
    for error_type, text in _ERROR_MESSAGES.items():
        if isinstance(exc, error_type):
            message = text
            break
    return f'<p class="error">{message}</p>'


def store_to_dict(store: ResolvedStore) -> dict:
    distance = store.distance_miles
    return {
        "name": store.name,
        "address": store.address_line,
        "city": store.city,
        "postcode": store.postal_code,
        "phone": store.phone,
        "available": store.available,
        "distance_miles": round(distance, 1) if distance is not None else None,
    }


def result_to_dict(result: StockResult) -> dict:
    """Convert a StockResult to a JSON-serialisable dict."""
    return {
        "status": result.status.value,
        "ranked_by_distance": result.ranked_by_distance,
        "locations": [store_to_dict(store) for store in result.stores],
    }
