"""
Orders API Endpoints
The signed-in customer's orders and invoices
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from storefront.core.auth import get_current_user
from storefront.domain.order import Order
from storefront.domain.user import UserProfile
from storefront.repositories.order_repository import OrderRepository
from storefront.services.invoice_service import generate_invoice

router = APIRouter()


def _owned_order(order_id: str, user: UserProfile) -> Order:
    """Order visible to the user (admins see every order)"""
    order = OrderRepository().find_by_id(order_id)
    if not order or (order.user_id != user.id and not user.is_admin):
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return order


@router.get("/")
async def get_my_orders(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user: UserProfile = Depends(get_current_user)
):
    try:
        orders = OrderRepository().find_by_user(user.id, limit=limit, offset=offset)

        return {
            "status": "success",
            "limit": limit,
            "offset": offset,
            "count": len(orders),
            "data": [order.to_dict() for order in orders]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching orders: {str(e)}")


@router.get("/{order_id}")
async def get_order(order_id: str, user: UserProfile = Depends(get_current_user)):
    """Order detail with its items"""
    try:
        order = _owned_order(order_id, user)
        return {"status": "success", "data": order.to_dict()}

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching order: {str(e)}")


@router.get("/{order_id}/invoice")
async def download_invoice(order_id: str, user: UserProfile = Depends(get_current_user)):
    """
    Download the order invoice

    Returns:
        Excel file
    """
    try:
        order = _owned_order(order_id, user)
        excel_file = generate_invoice(order)
        filename = f"Invoice_{order.id[:8]}.xlsx"

        return StreamingResponse(
            excel_file,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={
                "Content-Disposition": f"attachment; filename={filename}"
            }
        )

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error generating invoice: {str(e)}")
