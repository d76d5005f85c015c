"""
Wishlist API Endpoints
"""
from fastapi import APIRouter, Depends

from storefront.api.cart import get_session_id
from storefront.services.cart_service import CartStore, get_cart_store

router = APIRouter()


@router.get("/")
async def get_wishlist(
    session_id: str = Depends(get_session_id),
    store: CartStore = Depends(get_cart_store)
):
    wishlist = store.get_wishlist(session_id)
    return {
        "status": "success",
        "count": len(wishlist.product_ids),
        "data": wishlist.product_ids
    }


@router.post("/{product_id}")
async def add_to_wishlist(
    product_id: str,
    session_id: str = Depends(get_session_id),
    store: CartStore = Depends(get_cart_store)
):
    added = store.add_to_wishlist(session_id, product_id)
    return {
        "status": "success",
        "added": added,
        "message": "Added to wishlist" if added else "Already in your wishlist"
    }


@router.delete("/{product_id}")
async def remove_from_wishlist(
    product_id: str,
    session_id: str = Depends(get_session_id),
    store: CartStore = Depends(get_cart_store)
):
    store.remove_from_wishlist(session_id, product_id)
    return {"status": "success", "message": "Removed from wishlist"}


@router.post("/{product_id}/toggle")
async def toggle_wishlist(
    product_id: str,
    session_id: str = Depends(get_session_id),
    store: CartStore = Depends(get_cart_store)
):
    """Heart button: add when absent, remove when present"""
    wishlisted = store.toggle_wishlist(session_id, product_id)
    return {"status": "success", "wishlisted": wishlisted}
