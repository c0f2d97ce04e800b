from stock_locator.errors import InvalidPostcode, StockLookupError, UpstreamUnavailable, VariantNotFound
from stock_locator.models import ResolvedStore, StockResult, StockStatus
from stock_locator.render import render_error_html, render_html, result_to_dict


def _store(name="Brighton", distance=1.234, phone="01273 000000"):
    return ResolvedStore(
        name=name,
        address_line="2 North St",
        city="Brighton",
        postal_code="BN1 2AB",
        phone=phone,
        available=5,
        distance_miles=distance,
    )


def test_ranked_html():
    html = render_html(StockResult(StockStatus.OK, [_store()], ranked_by_distance=True))

    assert "Available at these nearby stores:" in html
    assert '<div class="store-name">Brighton</div>' in html
    assert "2 North St, Brighton BN1 2AB" in html
    assert "01273 000000" in html
    assert "<strong>5</strong> in stock" in html
    assert "1.2 miles away" in html


def test_fallback_html_has_no_distance():
    html = render_html(StockResult(StockStatus.OK, [_store(distance=None, phone=None)]))

    assert "Available at these stores:" in html
    assert "miles away" not in html
    assert "store-phone" not in html


def test_html_escapes_store_text():
    html = render_html(StockResult(StockStatus.OK, [_store(name="<b>Shop</b>")], ranked_by_distance=True))

    assert "&lt;b&gt;Shop&lt;/b&gt;" in html
    assert "<b>Shop</b>" not in html


def test_non_ok_outcomes():
    assert "out of stock at all stores" in render_html(StockResult.out_of_stock())
    assert "No stores found" in render_html(StockResult.no_qualifying_store())


def test_error_html():
    assert "Invalid UK postcode" in render_error_html(InvalidPostcode("XX"))
    assert "Product variant not found" in render_error_html(VariantNotFound("1"))
    assert "Unable to connect" in render_error_html(UpstreamUnavailable("down"))
    assert "unexpected error" in render_error_html(StockLookupError("?"))


def test_result_to_dict():
    data = result_to_dict(StockResult(StockStatus.OK, [_store(), _store("Lewes", None)], ranked_by_distance=True))

    assert data["status"] == "ok"
    assert data["ranked_by_distance"] is True
    assert data["locations"][0]["distance_miles"] == 1.2
    assert data["locations"][1]["distance_miles"] is None
    assert data["locations"][1]["name"] == "Lewes"
    assert result_to_dict(StockResult.out_of_stock()) == {
        "status": "out_of_stock",
        "ranked_by_distance": False,
        "locations": [],
    }
