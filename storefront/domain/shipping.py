"""
Shipping Domain Models
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from decimal import Decimal


class ShippingRate(BaseModel):
    """
    A tiered shipping rule from the shipping_rates table

    A rate applies when min_order_value <= subtotal and (max_order_value is
    null or subtotal <= max_order_value). For "flat_rate" rates price is an
    amount; for "order_value"/"percentage" rates price is a percentage of the
    subtotal.
    """
    id: str
    zone_id: Optional[str] = None
    name: str
    rate_type: str = "flat_rate"
    min_order_value: Decimal = Decimal("0")
    max_order_value: Optional[Decimal] = None
    price: Decimal = Decimal("0")
    free_shipping_threshold: Optional[Decimal] = None
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        data = self.model_dump()
        for field in ['min_order_value', 'max_order_value', 'price', 'free_shipping_threshold']:
            if data.get(field) is not None:
                data[field] = float(data[field])
        return data


class ShippingRateCreate(BaseModel):
    zone_id: str
    name: str
    rate_type: str = "flat_rate"
    min_order_value: Decimal = Field(Decimal("0"), ge=0)
    max_order_value: Optional[Decimal] = Field(None, ge=0)
    price: Decimal = Field(..., ge=0)
    free_shipping_threshold: Optional[Decimal] = Field(None, ge=0)
    is_active: bool = True


class ShippingRateUpdate(BaseModel):
    name: Optional[str] = None
    rate_type: Optional[str] = None
    min_order_value: Optional[Decimal] = Field(None, ge=0)
    max_order_value: Optional[Decimal] = Field(None, ge=0)
    price: Optional[Decimal] = Field(None, ge=0)
    free_shipping_threshold: Optional[Decimal] = Field(None, ge=0)
    is_active: Optional[bool] = None
