"""Request pipeline middleware: rate limiting and caller identity.

Both read their collaborators from ``app.state`` (set up in ``main.create_app``)
so the API core never touches process-wide state.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from api.errors import rate_limited
from api.responses import handle_api_error

logger = logging.getLogger(__name__)


def client_address(request: Request) -> str:
    """Best-effort client address, honouring proxy headers."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    if request.client:
        return request.client.host
    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject API requests over the configured per-client limit with 429."""

    def __init__(self, app, path_prefix: str = "/api"):
        super().__init__(app)
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limiter = getattr(request.app.state, "rate_limiter", None)
        if limiter is not None and request.url.path.startswith(self.path_prefix):
            if not await limiter.allow(client_address(request)):
                return handle_api_error(rate_limited())
        return await call_next(request)


class IdentityMiddleware(BaseHTTPMiddleware):
    """Resolve the caller once per request and store it on ``request.state``."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        resolver = getattr(request.app.state, "identity_resolver", None)
        identity = resolver.resolve(request) if resolver is not None else None

        request.state.identity = identity
        request.state.user_id = identity.user_id if identity else None
        return await call_next(request)
