"""
Checkout Service

Turns a session cart into an order:
1. Reprice the cart lines from the catalog (client prices are never trusted)
2. Calculate shipping from the active shipping rates
3. Summarize: subtotal + shipping + VAT = total
4. Persist a pending order and hand back the signed PayFast form

PayFast later confirms the payment through an ITN, handled by
handle_payment_notification.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple

from storefront.core.config import settings
from storefront.connectors.payfast_connector import PayFastConnector
from storefront.domain.cart import Cart, CartItem
from storefront.domain.order import CheckoutRequest, Order, OrderItem, OrderSummary
from storefront.domain.user import UserProfile
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.shipping_repository import ShippingRepository
from storefront.services.payfast_service import (
    PayFastForm,
    PayFastPayment,
    build_payment_form,
    ensure_gateway_configured,
    verify_signature,
)
from storefront.services.shipping_service import calculate_shipping

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# PayFast payment_status -> (order payment_status, order status)
PAYMENT_STATUS_MAP = {
    "COMPLETE": ("paid", "processing"),
    "FAILED": ("failed", None),
    "CANCELLED": ("failed", "cancelled"),
}


class PaymentNotificationError(ValueError):
    """ITN that must not change any order"""


def _money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def build_order_summary(cart: Cart, shipping: Decimal, vat_rate: Decimal = None) -> OrderSummary:
    """
    Order summary shown beside the checkout form

    VAT is charged on the subtotal only. All amounts are rounded to cents.
    """
    rate = settings.VAT_RATE if vat_rate is None else vat_rate
    subtotal = _money(cart.subtotal)
    shipping = _money(shipping)
    vat = _money(subtotal * rate)

    return OrderSummary(
        subtotal=subtotal,
        shipping=shipping,
        vat=vat,
        total=subtotal + shipping + vat,
        vat_rate=rate,
        item_count=cart.item_count,
    )


class CheckoutService:
    """Pricing, order placement and payment confirmation"""

    def __init__(
        self,
        products: Optional[ProductRepository] = None,
        orders: Optional[OrderRepository] = None,
        shipping_rates: Optional[ShippingRepository] = None,
        payfast: Optional[PayFastConnector] = None
    ):
        self.products = products or ProductRepository()
        self.orders = orders or OrderRepository()
        self.shipping_rates = shipping_rates or ShippingRepository()
        self.payfast = payfast or PayFastConnector()

    def reprice(self, cart: Cart) -> Tuple[Cart, Dict[str, Optional[str]]]:
        """
        Rebuild the cart with catalog prices

        Lines whose product no longer exists are dropped.

        Returns:
            Tuple of (repriced cart, {product_id: store_id})
        """
        if cart.is_empty:
            return Cart(), {}

        catalog = self.products.find_by_ids([item.product_id for item in cart.items])

        lines: List[CartItem] = []
        stores: Dict[str, Optional[str]] = {}
        for item in cart.items:
            product = catalog.get(item.product_id)
            if product is None:
                logger.warning(f"Dropping unknown product {item.product_id} from cart")
                continue

            lines.append(CartItem(
                product_id=product.id,
                name=product.name,
                price=product.price,
                image=product.image,
                product_type=product.product_type,
                quantity=item.quantity,
            ))
            stores[product.id] = product.vendor_id

        return Cart(items=lines), stores

    def quote(self, cart: Cart) -> OrderSummary:
        repriced, _ = self.reprice(cart)
        shipping = calculate_shipping(repriced.subtotal, repriced.items, self.shipping_rates)
        return build_order_summary(repriced, shipping)

    def place_order(
        self,
        user: UserProfile,
        request: CheckoutRequest,
        cart: Cart
    ) -> Tuple[Order, OrderSummary, PayFastForm]:
        """
        Create a pending order and the PayFast form that pays for it

        Raises:
            ValueError: Empty cart (or nothing purchasable left after repricing),
                or the payment gateway is not configured
            NotImplementedError: Payment method other than PayFast
        """
        if cart.is_empty:
            raise ValueError("Your cart is empty")

        if request.payment_method != "payfast":
            raise NotImplementedError(f"Payment method '{request.payment_method}' is not available yet")

        ensure_gateway_configured()

        repriced, stores = self.reprice(cart)
        if repriced.is_empty:
            raise ValueError("None of the products in your cart are available")

        shipping = calculate_shipping(repriced.subtotal, repriced.items, self.shipping_rates)
        summary = build_order_summary(repriced, shipping)

        items = [
            OrderItem(
                product_id=line.product_id,
                store_id=stores.get(line.product_id),
                product_name=line.name,
                quantity=line.quantity,
                price=line.price,
            )
            for line in repriced.items
        ]

        order = self.orders.create(
            user_id=user.id,
            total=summary.total,
            shipping_address=request.shipping_address.model_dump(),
            items=items,
            payment_method=request.payment_method,
            shipping_method="free" if summary.free_shipping else "standard",
            notes=request.notes,
        )
        logger.info(f"Order {order.id} created for user {user.id}, total {summary.total}")

        address = request.shipping_address
        payment = PayFastPayment(
            amount=summary.total,
            item_name=f"{settings.SITE_NAME} order {order.id[:8]}",
            return_url=f"{settings.SITE_URL}/checkout/success?order={order.id}",
            cancel_url=f"{settings.SITE_URL}/checkout",
            notify_url=f"{settings.API_BASE_URL}/api/v1/checkout/payfast/notify",
            customer_email=address.email,
            customer_first_name=address.first_name,
            customer_last_name=address.last_name,
        )
        form = build_payment_form(payment, order.id)

        return order, summary, form

    async def handle_payment_notification(self, fields: Dict[str, Any]) -> str:
        """
        Apply a PayFast ITN to its order

        Args:
            fields: Form fields posted by PayFast

        Returns:
            The order's new payment_status

        Raises:
            PaymentNotificationError: Bad signature, rejected by PayFast,
                unknown order, amount mismatch or unknown payment status
        """
        if not verify_signature(fields, settings.PAYFAST_PASSPHRASE):
            raise PaymentNotificationError("Invalid signature")

        if settings.PAYFAST_VALIDATE_ITN and not await self.payfast.validate_notification(fields):
            raise PaymentNotificationError("Notification rejected by PayFast")

        order_id = fields.get("m_payment_id")
        order = self.orders.find_by_id(order_id) if order_id else None
        if order is None:
            raise PaymentNotificationError(f"Unknown order {order_id}")

        try:
            amount = Decimal(str(fields.get("amount_gross", "")))
        except ArithmeticError:
            raise PaymentNotificationError("Invalid amount")

        if not amount.is_finite():
            raise PaymentNotificationError(f"Invalid amount {amount}")

        if abs(amount - order.total) > CENT:
            raise PaymentNotificationError(f"Amount {amount} does not match order total {order.total}")

        mapped = PAYMENT_STATUS_MAP.get(str(fields.get("payment_status", "")).upper())
        if mapped is None:
            raise PaymentNotificationError(f"Unknown payment status {fields.get('payment_status')}")

        payment_status, status = mapped
        self.orders.update_payment(order.id, payment_status, status)
        logger.info(f"Order {order.id} payment {payment_status} (pf_payment_id={fields.get('pf_payment_id')})")

        return payment_status
