"""Observability configuration using Logfire.

Domain code logs through logfire directly:

    logfire.info("Invite created", invite_id=str(invite.id))

    with logfire.span("approve_application", application_id=str(app_id)):
        ...

Invite codes and passwords are never passed as attributes.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from cleartrack.config import ObservabilitySettings, Settings

SERVICE_NAME = "cleartrack-api"


def should_send_to_logfire(observability: ObservabilitySettings) -> bool:
    """An explicit ``send_to_logfire`` wins; otherwise send iff a token is set."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the API process and scripts.

    Console output is always on; cloud export follows
    ``should_send_to_logfire``.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send = should_send_to_logfire(observability)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send,
        token=observability.logfire_token,
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
        send_to_logfire=send,
    )


def _request_attributes(request, attributes):
    # WebSocket scopes have no method
    mapped = dict(attributes)
    method = getattr(request, "method", None)
    if method:
        mapped["method"] = method
    mapped["path"] = request.url.path
    mapped["has_auth_cookie"] = "auth_token" in request.cookies
    return mapped


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request.

    Headers are left out because they carry the auth cookie; the span only
    records whether the cookie was present.
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace outbound Twilio, SendGrid and Mailgun calls."""
    logfire.instrument_httpx()
