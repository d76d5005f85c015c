"""
Checkout API Endpoints
- Order summary for the session cart
- Order placement with PayFast redirect form
- PayFast ITN (payment notification) callback
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse

from storefront.api.cart import get_session_id
from storefront.core.auth import get_current_user
from storefront.domain.order import CheckoutRequest
from storefront.domain.user import UserProfile
from storefront.services.cart_service import CartStore, get_cart_store
from storefront.services.checkout_service import CheckoutService, PaymentNotificationError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/summary")
async def get_order_summary(
    session_id: str = Depends(get_session_id),
    store: CartStore = Depends(get_cart_store)
):
    """Subtotal, shipping, VAT and total for the current cart"""
    try:
        summary = CheckoutService().quote(store.get_cart(session_id))
        return {"status": "success", "data": summary.to_dict()}

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error calculating order summary: {str(e)}")


@router.post("/")
async def place_order(
    request: CheckoutRequest,
    user: UserProfile = Depends(get_current_user),
    session_id: str = Depends(get_session_id),
    store: CartStore = Depends(get_cart_store)
):
    """
    Create a pending order from the cart

    Returns the PayFast form the client must auto-submit (POST) to `action`.
    The ordered lines leave the cart once the order exists.
    """
    try:
        cart = store.get_cart(session_id)
        order, summary, form = CheckoutService().place_order(user, request, cart)
        store.discard_ordered(session_id, cart)

        return {
            "status": "success",
            "order": order.to_dict(),
            "summary": summary.to_dict(),
            "payment": form.model_dump()
        }

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotImplementedError as e:
        raise HTTPException(status_code=501, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error placing order: {str(e)}")


@router.post("/payfast/notify", response_class=PlainTextResponse)
async def payfast_notify(request: Request):
    """
    PayFast Instant Transaction Notification

    PayFast posts form-encoded fields; any 200 response acknowledges them.
    """
    form = await request.form()
    fields = {key: value for key, value in form.items()}

    try:
        payment_status = await CheckoutService().handle_payment_notification(fields)
        return PlainTextResponse(payment_status)

    except PaymentNotificationError as e:
        logger.warning(f"Rejected PayFast notification: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error processing PayFast notification: {e}")
        raise HTTPException(status_code=500, detail=f"Error processing payment notification: {str(e)}")
