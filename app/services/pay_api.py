import logging
from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from app.core.config import settings
from app.schemas.fees import FeeData, FeeInfo
from app.services.exceptions import PayApiError

logger = logging.getLogger(__name__)

# Short fee codes used by the UI, mapped to the pay API fee schedule key.
FEE_TYPE: Dict[str, FeeData] = {
    "BCANN": FeeData(entity_type="BC", filing_type_code="BCANN", future_effective=False, priority=False, waive_fees=False),
}


class PayApiClient:
    """Fee schedule lookups against the pay API."""

    def __init__(self, base_url: str = None, fee_type: Dict[str, FeeData] = None, transport: httpx.AsyncBaseTransport = None):
        self.base_url = base_url or f"{settings.PAY_API_URL}{settings.PAY_API_VERSION}"
        self.fee_type = dict(fee_type) if fee_type is not None else dict(FEE_TYPE)
        self._transport = transport

    async def fetch_fee(self, filing_data: FeeData) -> Optional[FeeInfo]:
        """
        Fetch the fee schedule entry for a filing-data descriptor.

        Returns None when the pay API has no schedule for the descriptor (404).
        Raises PayApiError on any other HTTP failure or a malformed payload.
        """
        url = f"{self.base_url}/fees/{filing_data.entity_type}/{filing_data.filing_type_code}"
        params = {}
        if filing_data.future_effective:
            params["futureEffective"] = "true"
        if filing_data.priority:
            params["priority"] = "true"
        if filing_data.waive_fees:
            params["waiveFees"] = "true"

        try:
            async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT, transport=self._transport) as cli:
                r = await cli.get(url, params=params)
            if r.status_code == 404:
                logger.warning(f"No fee schedule for {filing_data.entity_type}/{filing_data.filing_type_code}")
                return None
            r.raise_for_status()
            return FeeInfo.model_validate(r.json())
        except httpx.HTTPStatusError as e:
            raise PayApiError(f"Fee lookup failed: {e}", status_code=e.response.status_code) from e
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, ValidationError) as e:
            raise PayApiError(f"Fee lookup failed: {e}") from e
