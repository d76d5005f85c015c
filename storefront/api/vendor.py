"""
Vendor API Endpoints
Vendor dashboard data: profile, stores, orders and payouts
"""
from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.core.auth import require_vendor
from storefront.domain.user import UserProfile
from storefront.domain.vendor import Vendor
from storefront.repositories.store_repository import StoreRepository

router = APIRouter()


def _vendor_for(user: UserProfile, repo: StoreRepository) -> Vendor:
    vendor = repo.find_vendor_by_user(user.id)
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor profile not found")
    return vendor


@router.get("/me")
async def get_vendor_profile(user: UserProfile = Depends(require_vendor)):
    """Vendor record with its stores"""
    try:
        repo = StoreRepository()
        vendor = _vendor_for(user, repo)
        stores = repo.find_stores_by_vendor(vendor.id)

        return {
            "status": "success",
            "data": {
                "vendor": vendor.model_dump(),
                "stores": [store.model_dump() for store in stores]
            }
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching vendor profile: {str(e)}")


@router.get("/orders")
async def get_vendor_orders(
    limit: int = Query(100, ge=1, le=500),
    user: UserProfile = Depends(require_vendor)
):
    """Order lines sold through the vendor's stores"""
    try:
        repo = StoreRepository()
        vendor = _vendor_for(user, repo)
        items = repo.find_order_items_by_vendor(vendor.id, limit=limit)

        return {
            "status": "success",
            "count": len(items),
            "data": [item.to_dict() for item in items]
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching vendor orders: {str(e)}")


@router.get("/payouts")
async def get_vendor_payouts(user: UserProfile = Depends(require_vendor)):
    try:
        repo = StoreRepository()
        vendor = _vendor_for(user, repo)
        payouts = repo.find_payouts_by_vendor(vendor.id)

        return {
            "status": "success",
            "count": len(payouts),
            "total_amount": float(sum(payout.amount for payout in payouts)),
            "data": [payout.to_dict() for payout in payouts]
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching payouts: {str(e)}")
