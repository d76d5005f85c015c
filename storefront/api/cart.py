"""
Cart API Endpoints
The visitor's cart, keyed by the X-Session-Id header
"""
from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel

from storefront.domain.cart import CartItemInput
from storefront.services.cart_service import CartStore, get_cart_store

router = APIRouter()


class QuantityUpdate(BaseModel):
    quantity: int


async def get_session_id(x_session_id: str = Header(..., alias="X-Session-Id")) -> str:
    """Client-generated session identifier"""
    session_id = x_session_id.strip()
    if not session_id:
        raise HTTPException(status_code=400, detail="X-Session-Id header is required")
    return session_id


@router.get("/")
async def get_cart(
    session_id: str = Depends(get_session_id),
    store: CartStore = Depends(get_cart_store)
):
    return {"status": "success", "data": store.get_cart(session_id).to_dict()}


@router.post("/items")
async def add_to_cart(
    item: CartItemInput,
    session_id: str = Depends(get_session_id),
    store: CartStore = Depends(get_cart_store)
):
    """Add one unit of a product (increments the line if already in the cart)"""
    cart = store.add_to_cart(session_id, item)
    return {
        "status": "success",
        "message": f"{item.name} added to your cart",
        "data": cart.to_dict()
    }


@router.patch("/items/{product_id}")
async def update_quantity(
    product_id: str,
    update: QuantityUpdate,
    session_id: str = Depends(get_session_id),
    store: CartStore = Depends(get_cart_store)
):
    """Set a line's quantity; 0 or less removes the line"""
    cart = store.update_quantity(session_id, product_id, update.quantity)
    return {"status": "success", "data": cart.to_dict()}


@router.delete("/items/{product_id}")
async def remove_from_cart(
    product_id: str,
    session_id: str = Depends(get_session_id),
    store: CartStore = Depends(get_cart_store)
):
    cart = store.remove_from_cart(session_id, product_id)
    return {"status": "success", "data": cart.to_dict()}


@router.delete("/")
async def clear_cart(
    session_id: str = Depends(get_session_id),
    store: CartStore = Depends(get_cart_store)
):
    cart = store.clear_cart(session_id)
    return {"status": "success", "data": cart.to_dict()}
