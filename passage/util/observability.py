"""Logfire setup and instrumentation.

Domain services and use cases report through logfire directly:

    with logfire.span("identity_reconciler.reconcile", provider=provider):
        logfire.info("Provider linked", user_id=str(user.id))
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from passage.config import Settings

SERVICE_NAME = "passage"
SERVICE_VERSION = "0.1.0"


def _should_send(settings: Settings) -> bool:
    # Explicit flag wins, otherwise send whenever a token is configured
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire; without a token, spans only go to the console.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes):
    result = {**attributes}
    if hasattr(request, "url"):
        result["path"] = request.url.path
    if getattr(request, "client", None):
        result["client_host"] = request.client.host
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by the app.

    Headers are not captured: they carry the session cookie.
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace user store queries."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace outbound calls to OAuth providers."""
    logfire.instrument_httpx()
