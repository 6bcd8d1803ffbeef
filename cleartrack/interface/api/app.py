"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cleartrack.config import Settings
from cleartrack.interface.api.routes import (
    applications,
    auth,
    health,
    invites,
    registration,
    requests,
)
from cleartrack.interface.error import register_error_handlers
from cleartrack.util.di.container import create_container, setup_di
from cleartrack.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function; start_app.py
    handles that in production.

    Args:
        container: DI container to use instead of the production one
    """
    settings = Settings()

    # Outbound SMS and email calls
    instrument_httpx()

    app_instance = FastAPI(
        title="ClearTrack API",
        description=(
            "Backend API for ClearTrack - client invites, practitioner "
            "assignment and practitioner onboarding"
        ),
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
            "X-Events-Secret",
        ],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(invites.router)
    app_instance.include_router(requests.router)
    app_instance.include_router(applications.router)
    app_instance.include_router(registration.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
