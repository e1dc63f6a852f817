"""
Rate limiting utilities using slowapi.
Protects the API from abuse with per-address request limits.

Limits are counted in process memory: approximate, not durable and reset
on restart. Every response carries X-RateLimit-Limit, X-RateLimit-Remaining
and X-RateLimit-Reset headers.

Usage in a router:
    from shared.security.rate_limit import limiter

    @router.post("/login")
    @limiter.limit(settings.login_rate_limit)
    def login(request: Request, response: Response, ...):
        ...
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.utils.exceptions import RateLimitError
from shared.utils.schemas import ErrorResponse

logger = get_logger(__name__)

# Client IP as key, default limit applied to every route by SlowAPIMiddleware
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
    headers_enabled=True,
    enabled=settings.rate_limit_enabled,
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Render rate limit violations in the standard error envelope.

    Must stay synchronous: SlowAPIMiddleware calls it directly.
    """
    error = RateLimitError(
        path=request.url.path,
        limit=str(exc.detail),
        ip_address=get_remote_address(request),
    )
    response = JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(message=error.detail, code=error.status_code).model_dump(
            exclude_none=True
        ),
        headers=error.headers,
    )
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is not None:
        response = request.app.state.limiter._inject_headers(response, view_rate_limit)
    return response
