"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from afterburner import __version__
from afterburner.api import site_routes
from afterburner.config import get_settings
from afterburner.services.cache import get_redis
from afterburner.templating import redirect
from afterburner.utils.security import AuthorizationError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - runs on startup and shutdown."""
    # Startup
    logger.info("Starting %s v%s", settings.app_name, __version__)
    logger.info("Debug mode: %s", settings.debug)
    logger.info("Database: %s", settings.database_url.split("///")[-1])  # Hide path details
    logger.info(
        "GitHub OAuth: %s",
        "configured" if settings.github_client_id else "NOT CONFIGURED",
    )

    # Validate and log warnings
    warnings = settings.validate_runtime_config()
    if warnings:
        logger.warning("Configuration warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
    else:
        logger.info("Configuration validation passed - no warnings")

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Application shutting down")
    if get_redis.cache_info().currsize:
        await get_redis().aclose()


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie="afterburner_session",
    https_only=not settings.debug,
)


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(_request: Request, _exc: AuthorizationError) -> RedirectResponse:
    """Send requests that fail the sign in or permission checks home."""
    return redirect("/")


# Include page routes
app.include_router(site_routes)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the site is running."""
    return {"status": "healthy", "version": __version__}
