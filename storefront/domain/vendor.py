"""
Vendor Domain Models

Vendors own stores; payouts are the money the platform owes a vendor.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Literal
from datetime import datetime
from decimal import Decimal


class Vendor(BaseModel):
    id: str
    user_id: Optional[str] = None
    business_name: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    status: Literal["pending", "approved", "rejected"] = "pending"
    subscription_tier: Optional[str] = None
    subscription_status: Optional[str] = None
    trial_end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Store(BaseModel):
    """Vendor-owned catalog namespace, addressed by slug"""
    id: str
    vendor_id: str
    name: str
    slug: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    shipping_policy: Optional[str] = None
    return_policy: Optional[str] = None
    vendor: Optional[Vendor] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Payout(BaseModel):
    id: str
    vendor_id: str
    amount: Decimal = Field(..., ge=0)
    status: Literal["pending", "processing", "completed", "failed"] = "pending"
    payout_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['amount'] = float(self.amount)
        return data
