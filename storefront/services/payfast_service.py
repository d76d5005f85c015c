"""
PayFast payment form signing

PayFast expects an HTML form POSTed to its process endpoint. The form fields
are signed with an MD5 over the URL-encoded parameter string, in the order the
fields appear in the form (not alphabetical).
"""
import hashlib
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Any
from urllib.parse import quote_plus

from pydantic import BaseModel, Field

from storefront.core.config import settings

logger = logging.getLogger(__name__)


class PayFastPayment(BaseModel):
    """Data needed to start a PayFast payment"""
    amount: Decimal = Field(..., gt=0)
    item_name: str
    return_url: str
    cancel_url: str
    notify_url: str
    customer_email: str
    customer_first_name: str
    customer_last_name: str


class PayFastForm(BaseModel):
    """Signed form the client auto-submits to PayFast"""
    action: str
    fields: Dict[str, str]


def php_urlencode(value: str) -> str:
    """URL-encode like PHP's urlencode (spaces as '+', uppercase hex)"""
    # quote_plus leaves '~' alone, PHP encodes it
    return quote_plus(value, safe="").replace("~", "%7E")


def _param_string(fields: Dict[str, Any]) -> str:
    pairs = []
    for key, value in fields.items():
        if key == "signature" or value is None:
            continue
        text = str(value).strip()
        if text == "":
            continue
        pairs.append(f"{key}={php_urlencode(text)}")
    return "&".join(pairs)


def _notification_param_string(fields: Dict[str, Any]) -> str:
    # ITNs are signed over every posted field before `signature`, blanks included
    pairs = []
    for key, value in fields.items():
        if key == "signature":
            break
        text = "" if value is None else str(value).strip()
        pairs.append(f"{key}={php_urlencode(text)}")
    return "&".join(pairs)


def _digest(payload: str, passphrase: Optional[str]) -> str:
    if passphrase:
        payload = f"{payload}&passphrase={php_urlencode(passphrase.strip())}"
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


def generate_signature(fields: Dict[str, Any], passphrase: Optional[str] = None) -> str:
    """
    MD5 signature of an outgoing PayFast form

    Args:
        fields: Form fields in submission order (empty values are left out)
        passphrase: Merchant passphrase (omitted from the string when empty)

    Returns:
        Lowercase hex digest
    """
    return _digest(_param_string(fields), passphrase)


def verify_signature(fields: Dict[str, Any], passphrase: Optional[str] = None) -> bool:
    """Check the signature carried by an ITN post, fields in posted order"""
    received = fields.get("signature")
    if not received:
        return False
    return _digest(_notification_param_string(fields), passphrase) == str(received).lower()


def format_amount(amount: Decimal) -> str:
    return str(Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def ensure_gateway_configured() -> None:
    """Raise ValueError when the merchant credentials are missing"""
    if not settings.PAYFAST_MERCHANT_ID or not settings.PAYFAST_MERCHANT_KEY:
        raise ValueError("Payment gateway not configured properly")


def build_payment_form(payment: PayFastPayment, payment_id: str) -> PayFastForm:
    """
    Build the signed PayFast form for a payment

    Args:
        payment: Amount, item and customer details
        payment_id: Merchant payment reference (m_payment_id), the order ID

    Returns:
        PayFastForm with the action URL and signed fields
    """
    ensure_gateway_configured()

    fields: Dict[str, str] = {
        "merchant_id": settings.PAYFAST_MERCHANT_ID,
        "merchant_key": settings.PAYFAST_MERCHANT_KEY,
        "return_url": payment.return_url,
        "cancel_url": payment.cancel_url,
        "notify_url": payment.notify_url,
        "name_first": payment.customer_first_name,
        "name_last": payment.customer_last_name,
        "email_address": payment.customer_email,
        "m_payment_id": payment_id,
        "amount": format_amount(payment.amount),
        "item_name": payment.item_name,
        "item_description": payment.item_name,
        "email_confirmation": "1",
        "confirmation_address": payment.customer_email,
    }
    fields["signature"] = generate_signature(fields, settings.PAYFAST_PASSPHRASE)

    logger.info(f"PayFast payment {payment_id} prepared for amount {fields['amount']}")

    return PayFastForm(action=settings.payfast_process_url, fields=fields)
