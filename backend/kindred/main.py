from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.middleware.sessions import SessionMiddleware

from kindred import __version__
from kindred.api.v1.router import api_router
from kindred.core.config import settings
from kindred.core.database import close_db, init_db
from kindred.core.exceptions import KindredError, error_response
from kindred.core.logging_config import logger
from kindred.core.middleware import (
    LanguageMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from kindred.core.rate_limiter import limiter, rate_limit_exceeded_handler
import kindred.models  # noqa: F401  register tables on Base.metadata


def validate_critical_config() -> None:
    """Fail fast when the secrets the app cannot run without are missing"""
    errors = []

    if not settings.DATABASE_URL:
        errors.append("DATABASE_URL is not set")
    if not settings.SECRET_KEY or settings.SECRET_KEY == "CHANGE_ME":
        errors.append("SECRET_KEY is not set or using default value")
    if not settings.JWT_SECRET_KEY or settings.JWT_SECRET_KEY == "CHANGE_ME":
        errors.append("JWT_SECRET_KEY is not set or using default value")

    if errors:
        for err in errors:
            logger.critical(f"[Startup] CRITICAL: {err}")
        raise RuntimeError(f"Missing critical configuration: {', '.join(errors)}")

    if not settings.SMTP_HOST:
        logger.warning("[Startup] SMTP_HOST not set - password reset mails will not be sent")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME} {__version__} ({settings.ENVIRONMENT})")
    validate_critical_config()
    await init_db()

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    description="Genealogy record management",
    version=__version__,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Last added runs first
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(LanguageMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    session_cookie=settings.SESSION_COOKIE,
    same_site="lax",
    https_only=settings.ENVIRONMENT == "production",
)
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(KindredError)
async def kindred_exception_handler(request: Request, exc: KindredError):
    if exc.status_code >= 500:
        logger.log_error_with_context(exc, f"{request.method} {request.url.path}")
    return JSONResponse(status_code=exc.status_code, content=error_response(exc))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": {
                "code": "INTERNAL_ERROR",
                "message": str(exc) if settings.DEBUG else "An error occurred",
                "details": {},
            },
        },
    )


app.include_router(api_router, prefix=f"/api/{settings.API_VERSION}")
