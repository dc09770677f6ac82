"""
Rate limiting for the Kindred API (slowapi).

Anonymous endpoints that send mail or check credentials get their own,
tighter limits:
- /auth/login: RATE_LIMIT_LOGIN
- /password-request: RATE_LIMIT_PASSWORD_REQUEST
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from kindred.core.config import settings
from kindred.core.logging_config import logger


def get_client_identifier(request: Request) -> str:
    """Rate limit key: authenticated user if known, else client address"""
    user_id = getattr(request.state, 'user_id', None)
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    enabled=settings.RATE_LIMIT_ENABLED,
    strategy="fixed-window",
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(f"[RateLimit] Exceeded for {get_client_identifier(request)}: {exc.detail}")

    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": {
                "code": "RATE_LIMITED",
                "message": "Too many requests. Please slow down.",
                "details": {"limit": str(exc.detail)},
            },
        },
        headers={"Retry-After": "60"},
    )


def password_request_rate_limit():
    return limiter.limit(settings.RATE_LIMIT_PASSWORD_REQUEST)


def login_rate_limit():
    return limiter.limit(settings.RATE_LIMIT_LOGIN)
