"""
Order Domain Models

Orders, their line items, the checkout request that creates them and the
summary shown beside the checkout form.
"""
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import Optional, List, Literal, Dict, Any
from datetime import datetime
from decimal import Decimal


OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled", "returned"]
PaymentStatus = Literal["pending", "paid", "failed", "refunded"]


class ShippingAddress(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: Optional[str] = None
    postal_code: str = Field(..., min_length=1)
    country: str = "South Africa"


class CheckoutRequest(BaseModel):
    """Submitted checkout form"""
    shipping_address: ShippingAddress
    payment_method: Literal["payfast", "card"] = "payfast"
    notes: Optional[str] = None


class OrderSummary(BaseModel):
    """Subtotal + shipping + VAT = total, rounded to cents"""
    subtotal: Decimal
    shipping: Decimal
    vat: Decimal
    total: Decimal
    vat_rate: Decimal
    item_count: int = 0

    @property
    def free_shipping(self) -> bool:
        return self.shipping == 0

    def to_dict(self) -> dict:
        return {
            'subtotal': float(self.subtotal),
            'shipping': float(self.shipping),
            'shipping_label': "Free" if self.free_shipping else None,
            'vat': float(self.vat),
            'vat_rate': float(self.vat_rate),
            'total': float(self.total),
            'item_count': self.item_count,
        }


class OrderItem(BaseModel):
    """
    Order line item

    price is the unit price at order time; status tracks the customer-facing
    lifecycle and vendor_status the vendor's fulfilment of this line.
    """
    id: Optional[str] = None
    order_id: Optional[str] = None
    product_id: str
    store_id: Optional[str] = None
    variation_id: Optional[str] = None
    product_name: Optional[str] = None
    quantity: int = Field(..., ge=1)
    price: Decimal = Field(..., ge=0)
    status: OrderStatus = "pending"
    vendor_status: Literal["pending", "confirmed", "shipped", "delivered", "cancelled"] = "pending"
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['price'] = float(self.price)
        data['line_total'] = float(self.line_total)
        return data


class Order(BaseModel):
    """Customer order as stored in the orders table"""
    id: str
    user_id: str
    status: OrderStatus = "pending"
    total: Decimal = Field(..., ge=0)
    shipping_address: Dict[str, Any] = Field(default_factory=dict)
    shipping_method: Optional[str] = None
    payment_method: Optional[str] = None
    payment_status: PaymentStatus = "pending"
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    items: List[OrderItem] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @property
    def customer_name(self) -> str:
        first = self.shipping_address.get('first_name', '')
        last = self.shipping_address.get('last_name', '')
        return f"{first} {last}".strip()

    def to_dict(self) -> dict:
        data = self.model_dump(exclude={'items'})
        data['total'] = float(self.total)
        data['items'] = [item.to_dict() for item in self.items]
        return data
