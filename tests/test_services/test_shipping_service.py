"""
Unit tests for shipping cost calculation
"""
from decimal import Decimal
from unittest.mock import Mock

from storefront.domain.cart import CartItem
from storefront.services.shipping_service import calculate_shipping, rate_cost, select_rate


def _repository(rates=None, error=None) -> Mock:
    repo = Mock()
    if error:
        repo.find_active.side_effect = error
    else:
        repo.find_active.return_value = rates or []
    return repo


def _line(product_type=None) -> CartItem:
    return CartItem(product_id="p", name="P", price=Decimal("100"), quantity=1, product_type=product_type)


class TestSelectRate:

    def test_first_matching_band_wins(self, rate_factory):
        rates = [
            rate_factory(id="low", min_order_value=Decimal("0"), max_order_value=Decimal("500")),
            rate_factory(id="high", min_order_value=Decimal("500"), max_order_value=None),
        ]

        assert select_rate(rates, Decimal("499.99")).id == "low"
        # 500 sits in both bands; the first one listed applies
        assert select_rate(rates, Decimal("500")).id == "low"
        assert select_rate(rates, Decimal("500.01")).id == "high"

    def test_no_band_matches(self, rate_factory):
        rates = [rate_factory(min_order_value=Decimal("100"), max_order_value=Decimal("200"))]

        assert select_rate(rates, Decimal("50")) is None
        assert select_rate(rates, Decimal("250")) is None


class TestRateCost:

    def test_flat_rate_charges_price(self, rate_factory):
        assert rate_cost(rate_factory(rate_type="flat_rate", price=Decimal("60")), Decimal("300")) == Decimal("60")
        assert rate_cost(rate_factory(rate_type="flat", price=Decimal("45")), Decimal("300")) == Decimal("45")

    def test_percentage_rate_charges_share_of_subtotal(self, rate_factory):
        rate = rate_factory(rate_type="order_value", price=Decimal("5"))

        assert rate_cost(rate, Decimal("1000")) == Decimal("50")

    def test_rate_type_is_case_insensitive(self, rate_factory):
        rate = rate_factory(rate_type="Percentage", price=Decimal("10"))

        assert rate_cost(rate, Decimal("200")) == Decimal("20")

    def test_unknown_type_charges_price(self, rate_factory):
        assert rate_cost(rate_factory(rate_type="weight_based", price=Decimal("80")), Decimal("10")) == Decimal("80")

    def test_free_shipping_threshold(self, rate_factory):
        rate = rate_factory(price=Decimal("60"), free_shipping_threshold=Decimal("1000"))

        assert rate_cost(rate, Decimal("999.99")) == Decimal("60")
        assert rate_cost(rate, Decimal("1000")) == Decimal("0")


class TestCalculateShipping:

    def test_uses_matching_rate(self, rate_factory):
        repo = _repository([rate_factory(price=Decimal("60"))])

        assert calculate_shipping(Decimal("300"), [_line()], repo) == Decimal("60")

    def test_downloadable_only_cart_ships_free_without_lookup(self):
        repo = _repository()

        shipping = calculate_shipping(Decimal("300"), [_line("downloadable"), _line("downloadable")], repo)

        assert shipping == Decimal("0")
        repo.find_active.assert_not_called()

    def test_mixed_cart_is_not_free(self, rate_factory):
        repo = _repository([rate_factory(price=Decimal("60"))])

        assert calculate_shipping(Decimal("300"), [_line("downloadable"), _line("simple")], repo) == Decimal("60")

    def test_no_rates_means_free(self):
        assert calculate_shipping(Decimal("300"), None, _repository([])) == Decimal("0")

    def test_no_matching_rate_means_free(self, rate_factory):
        repo = _repository([rate_factory(min_order_value=Decimal("1000"))])

        assert calculate_shipping(Decimal("300"), None, repo) == Decimal("0")

    def test_fetch_error_means_free(self):
        repo = _repository(error=Exception("connection refused"))

        assert calculate_shipping(Decimal("300"), None, repo) == Decimal("0")
