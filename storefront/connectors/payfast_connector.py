"""
PayFast API Connector
Server-to-server confirmation of Instant Transaction Notifications (ITN)

PayFast posts the ITN to our notify_url; the same fields are posted back to
/eng/query/validate, which answers with the plain-text body VALID or INVALID.
"""
from typing import Dict, Optional, Any
import httpx
import logging

from storefront.core.config import settings

logger = logging.getLogger(__name__)


class PayFastConnector:
    """Connector for the PayFast validation endpoint"""

    def __init__(self, validate_url: str = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.validate_url = validate_url or settings.payfast_validate_url
        self._transport = transport

    async def validate_notification(self, fields: Dict[str, Any]) -> bool:
        """
        Ask PayFast whether an ITN is genuine

        Args:
            fields: ITN fields as received (signature included)

        Returns:
            True when PayFast answers VALID
        """
        payload = {key: str(value) for key, value in fields.items()}

        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.post(
                    self.validate_url,
                    data=payload,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    timeout=30.0
                )
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.error(f"PayFast validation request failed: {e}")
                return False

        valid = response.text.strip() == "VALID"
        if not valid:
            logger.warning(f"PayFast rejected ITN for {fields.get('m_payment_id')}: {response.text.strip()}")
        return valid
