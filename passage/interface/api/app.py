"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from passage.config import Settings
from passage.interface.api.routes import auth, health, users
from passage.interface.error import request_validation_handler
from passage.util.di.container import create_container, setup_di
from passage.util.observability import (
    SERVICE_VERSION,
    instrument_fastapi,
    instrument_httpx,
)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Build the Passage API.

    Logfire must already be configured (scripts/start_app.py does it) for
    spans to be exported.

    Args:
        container: DI container; the production container when omitted
    """
    settings = Settings()

    api = FastAPI(
        title="Passage API",
        description="Local accounts, OAuth sign-in and provider linking",
        version=SERVICE_VERSION,
    )

    instrument_fastapi(api)
    instrument_httpx()

    # The frontend sends the session cookie cross-origin in development
    api.add_middleware(
        CORSMiddleware,
        allow_origins=sorted({settings.api.frontend_url, "http://localhost:3000"}),
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=600,
    )
    api.add_exception_handler(RequestValidationError, request_validation_handler)

    setup_di(api, container or create_container())

    for router in (health.router, auth.router, users.router):
        api.include_router(router)

    return api


# Module-level instance served by uvicorn
app = create_app()
