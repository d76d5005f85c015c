"""
Shipping cost calculation

Evaluates the tiered shipping rules stored in shipping_rates against an order
subtotal. Any failure to load the rules results in free shipping.
"""
import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from storefront.domain.cart import CartItem
from storefront.domain.shipping import ShippingRate
from storefront.repositories.shipping_repository import ShippingRepository

logger = logging.getLogger(__name__)

FLAT_RATE_TYPES = {"flat_rate", "flat"}
PERCENTAGE_RATE_TYPES = {"order_value", "percentage"}

ZERO = Decimal("0")


def select_rate(rates: Sequence[ShippingRate], subtotal: Decimal) -> Optional[ShippingRate]:
    """
    First rate whose order-value band contains the subtotal

    Args:
        rates: Rates ordered by min_order_value ascending
        subtotal: Cart subtotal

    Returns:
        The applicable rate, or None
    """
    for rate in rates:
        meets_min = subtotal >= rate.min_order_value
        meets_max = rate.max_order_value is None or subtotal <= rate.max_order_value
        if meets_min and meets_max:
            return rate
    return None


def rate_cost(rate: ShippingRate, subtotal: Decimal) -> Decimal:
    """Shipping cost charged by a rate for the given subtotal"""
    if rate.free_shipping_threshold is not None and subtotal >= rate.free_shipping_threshold:
        return ZERO

    rate_type = rate.rate_type.lower()

    if rate_type in PERCENTAGE_RATE_TYPES:
        return subtotal * rate.price / 100

    # flat_rate, flat and unknown types charge the fixed price
    return rate.price


def all_downloadable(cart_items: Optional[Iterable[CartItem]]) -> bool:
    items = list(cart_items or [])
    return bool(items) and all(item.product_type == "downloadable" for item in items)


def calculate_shipping(
    subtotal: Decimal,
    cart_items: Optional[List[CartItem]] = None,
    repository: Optional[ShippingRepository] = None
) -> Decimal:
    """
    Shipping cost for an order

    Downloadable-only carts ship free. Otherwise the active rates are loaded
    and the first matching band applies; no rates, no matching band or a
    database error all mean free shipping.

    Args:
        subtotal: Cart subtotal
        cart_items: Cart lines (used for the downloadable check)
        repository: Rate source (defaults to ShippingRepository)

    Returns:
        Shipping cost
    """
    if all_downloadable(cart_items):
        return ZERO

    try:
        rates = (repository or ShippingRepository()).find_active()
    except Exception as e:
        logger.error(f"Error fetching shipping rates: {e}")
        return ZERO

    if not rates:
        return ZERO

    rate = select_rate(rates, subtotal)
    if rate is None:
        return ZERO

    return rate_cost(rate, subtotal)
