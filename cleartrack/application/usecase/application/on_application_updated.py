"""Application change handler."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from cleartrack.application.message import approval_welcome_email
from cleartrack.application.usecase.base import BaseUseCase
from cleartrack.domain.error import ValidationError
from cleartrack.domain.service import (
    ApplicationService,
    NotificationService,
    is_approval_transition,
)
from cleartrack.domain.value import ApplicationId, ApplicationStatus


class ApplicationUpdatedEvent(BaseModel):
    """An application changed from ``before_status`` to ``after_status``.

    A missing status means the application did not exist on that side of
    the change (created or deleted).
    """

    application_id: str
    before_status: ApplicationStatus | None = None
    after_status: ApplicationStatus | None = None


class ApplicationUpdatedResult(BaseModel):
    """What the handler did with an event."""

    handled: bool
    email_sent: bool


class OnApplicationUpdatedUseCase(BaseUseCase):
    """Sends the approval welcome email once per application.

    Events may be delivered more than once. The ``approval_email_sent`` flag
    is claimed with a conditional update before sending, so duplicates find
    it already set and do nothing.
    """

    def __init__(
        self,
        application_service: ApplicationService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize use case.

        Args:
            application_service: Application domain service
            notification_service: Notification domain service
        """
        self.application_service = application_service
        self.notification_service = notification_service

    async def execute(
        self, request: ApplicationUpdatedEvent
    ) -> ApplicationUpdatedResult:
        if not is_approval_transition(request.before_status, request.after_status):
            return ApplicationUpdatedResult(handled=False, email_sent=False)

        try:
            application_id = ApplicationId(UUID(request.application_id))
        except ValueError:
            raise ValidationError("Application ID is required")

        with logfire.span(
            "on_application_updated", application_id=str(application_id)
        ):
            if not await self.application_service.claim_approval_email(application_id):
                return ApplicationUpdatedResult(handled=True, email_sent=False)

            application = await self.application_service.get_by_id(application_id)
            welcome = approval_welcome_email(application)
            sent = await self.notification_service.send_email(
                application.email, welcome.subject, welcome.html_body, welcome.text_body
            )
            logfire.info(
                "Approval welcome email processed",
                application_id=str(application_id),
                sent=sent,
            )
            return ApplicationUpdatedResult(handled=True, email_sent=sent)
