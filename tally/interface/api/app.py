"""FastAPI application."""

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from tally.config import Settings
from tally.interface.api.routes import health, votes
from tally.util.di.container import create_container, setup_di
from tally.util.error import ConfigurationError
from tally.util.observability import instrument_fastapi

DEFAULT_SECRET = "CHANGE_ME_IN_PRODUCTION"


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()
    if settings.environment == "production" and DEFAULT_SECRET in (
        settings.auth.jwt_secret,
        settings.auth.session_secret,
    ):
        raise ConfigurationError("Auth secrets must be set in production")

    app_instance = FastAPI(
        title="Tally API",
        description="Votes and vote tallies for news posts, comments and issues",
        version="0.1.0",
    )

    # Trace every HTTP request
    instrument_fastapi(app_instance)

    # Flash messages live in the signed session cookie
    app_instance.add_middleware(
        SessionMiddleware,
        secret_key=settings.auth.session_secret,
        session_cookie=settings.auth.session_cookie,
        same_site="lax",
        https_only=settings.environment == "production",
    )

    container = create_container()
    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(votes.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
