from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
import logging
from typing import Callable

logger = logging.getLogger(__name__)

ACCOUNT_COOKIE = "bar_account_id"
ACCOUNT_HEADER = "Account-Id"
PUBLIC_PREFIXES = ["/health", "/docs", "/openapi.json", "/accounts/validate"]

class AccountContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        endpoint = request.url.path

        # Check cookies first (for web UI), then fall back to headers (for API clients)
        account_id = request.cookies.get(ACCOUNT_COOKIE) or request.headers.get(ACCOUNT_HEADER)
        is_public = endpoint == "/" or any(endpoint.startswith(p) for p in PUBLIC_PREFIXES)

        logger.debug(f"Request to {endpoint}, account_id={account_id}, is_public={is_public}")

        if not account_id and not is_public:
            logger.warning(f"Rejected {request.method} {endpoint}: missing account identifier")
            return JSONResponse(
                status_code=400,
                content={"detail": "Missing account identifier"}
            )

        token = None
        auth_header = request.headers.get("Authorization", "")
        if auth_header.lower().startswith("bearer "):
            token = auth_header[7:].strip() or None

        request.state.account_id = account_id
        request.state.token = token
        return await call_next(request)
