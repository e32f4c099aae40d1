import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from app.core.config import settings
from app.schemas.payment import PaymentAccount
from app.services.exceptions import BarApiError

logger = logging.getLogger(__name__)


class BarApiClient:
    """Account lookups against the business annual report API."""

    def __init__(self, base_url: str = None, transport: httpx.AsyncBaseTransport = None):
        self.base_url = base_url or f"{settings.BAR_API_URL}{settings.BAR_API_VERSION}"
        self._transport = transport

    async def get_payment_account(self, account_id: str, token: Optional[str] = None) -> PaymentAccount:
        url = f"{self.base_url}/user/accounts/{account_id}/payment"
        headers = {"Authorization": f"Bearer {token}"} if token else {}

        try:
            async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT, transport=self._transport) as cli:
                r = await cli.get(url, headers=headers)
            r.raise_for_status()
            return PaymentAccount.model_validate(r.json())
        except httpx.HTTPStatusError as e:
            raise BarApiError("Error getting payment account details", status_code=e.response.status_code) from e
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, ValidationError) as e:
            raise BarApiError("Error getting payment account details") from e
