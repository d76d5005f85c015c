"""
Shipping Rates Admin API Endpoints
CRUD for the tiered shipping rules used at checkout
"""
from fastapi import APIRouter, Depends, HTTPException
from decimal import Decimal

from storefront.core.auth import require_admin
from storefront.domain.shipping import ShippingRateCreate, ShippingRateUpdate
from storefront.domain.user import UserProfile
from storefront.repositories.shipping_repository import ShippingRepository
from storefront.services.shipping_service import calculate_shipping

router = APIRouter()


@router.get("/")
async def get_shipping_rates(user: UserProfile = Depends(require_admin)):
    try:
        rates = ShippingRepository().find_all()
        return {
            "status": "success",
            "count": len(rates),
            "data": [rate.to_dict() for rate in rates]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching shipping rates: {str(e)}")


@router.get("/preview")
async def preview_shipping(subtotal: Decimal, user: UserProfile = Depends(require_admin)):
    """Shipping the active rates charge for a subtotal"""
    shipping = calculate_shipping(subtotal)
    return {
        "status": "success",
        "subtotal": float(subtotal),
        "shipping": float(shipping)
    }


@router.post("/", status_code=201)
async def create_shipping_rate(rate: ShippingRateCreate, user: UserProfile = Depends(require_admin)):
    try:
        created = ShippingRepository().create(rate)
        return {"status": "success", "data": created.to_dict()}

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error creating shipping rate: {str(e)}")


@router.put("/{rate_id}")
async def update_shipping_rate(
    rate_id: str,
    changes: ShippingRateUpdate,
    user: UserProfile = Depends(require_admin)
):
    try:
        updated = ShippingRepository().update(rate_id, changes)
        if not updated:
            raise HTTPException(status_code=404, detail=f"Shipping rate {rate_id} not found")

        return {"status": "success", "data": updated.to_dict()}

    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating shipping rate: {str(e)}")


@router.delete("/{rate_id}")
async def delete_shipping_rate(rate_id: str, user: UserProfile = Depends(require_admin)):
    try:
        if not ShippingRepository().delete(rate_id):
            raise HTTPException(status_code=404, detail=f"Shipping rate {rate_id} not found")

        return {"status": "success", "message": "Shipping rate deleted"}

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error deleting shipping rate: {str(e)}")
