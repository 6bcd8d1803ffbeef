"""Approve practitioner application use case."""

from datetime import datetime, timedelta
from uuid import UUID, uuid4

import logfire
from pydantic import BaseModel

from cleartrack.application.message import register_link, registration_email
from cleartrack.application.usecase.application.on_application_updated import (
    ApplicationUpdatedEvent,
    OnApplicationUpdatedUseCase,
)
from cleartrack.application.usecase.base import BaseUseCase
from cleartrack.config import Settings
from cleartrack.domain.error import ValidationError
from cleartrack.domain.model import PractitionerInvitePayload
from cleartrack.domain.service import (
    ApplicationService,
    InviteService,
    NotificationService,
    UserService,
)
from cleartrack.domain.value import (
    ApplicationId,
    ApplicationStatus,
    Caller,
    InviteId,
    InviteKind,
    UserRole,
)


class ApproveApplicationRequest(BaseModel):
    """Request to approve an application."""

    caller: Caller | None = None
    application_id: str


class ApproveApplicationResponse(BaseModel):
    """Registration credentials minted for the applicant."""

    token: str
    code: str
    register_link: str
    expires_at: datetime


class ApproveApplicationUseCase(BaseUseCase):
    """Use case for an administrator approving an application.

    The application is moved to approved before the registration invite is
    stored, with the invite's ID reserved up front. A second approval fails
    on the conditional update and never reaches invite creation.
    """

    def __init__(
        self,
        application_service: ApplicationService,
        invite_service: InviteService,
        user_service: UserService,
        notification_service: NotificationService,
        on_application_updated: OnApplicationUpdatedUseCase,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            application_service: Application domain service
            invite_service: Invite domain service
            user_service: User domain service
            notification_service: Notification domain service
            on_application_updated: Handler notified of the status change
            settings: Application settings
        """
        self.application_service = application_service
        self.invite_service = invite_service
        self.user_service = user_service
        self.notification_service = notification_service
        self.on_application_updated = on_application_updated
        self.settings = settings

    async def execute(
        self, request: ApproveApplicationRequest
    ) -> ApproveApplicationResponse:
        """Approve the application and send the registration link.

        Raises:
            UnauthenticatedError: If there is no caller
            PermissionDeniedError: If the caller is not an administrator
            ValidationError: If the application ID is malformed
            NotFoundError: If the application does not exist
            FailedPreconditionError: If the application is not pending
        """
        admin = await self.user_service.require_role(request.caller, UserRole.ADMIN)

        try:
            application_id = ApplicationId(UUID(request.application_id))
        except ValueError:
            raise ValidationError("Application ID is required")

        with logfire.span(
            "approve_application",
            application_id=str(application_id),
            admin_id=str(admin.id),
        ):
            token = InviteId(uuid4())
            application = await self.application_service.approve(application_id, token)

            invitations = self.settings.invitations
            invite = await self.invite_service.create_invite(
                kind=InviteKind.PRACTITIONER,
                match_key=application.email,
                issuer_id=admin.id,
                payload=PractitionerInvitePayload(
                    application_id=application.id,
                    email=application.email,
                    first_name=application.first_name,
                    last_name=application.last_name,
                    practice_name=application.practice_name,
                ),
                ttl=timedelta(days=invitations.practitioner_ttl_days),
                code_length=invitations.practitioner_code_length,
                invite_id=token,
            )

            link = register_link(
                self.settings.api.frontend_url, str(invite.id), invite.code
            )
            message = registration_email(
                application.first_name,
                link,
                invite.code,
                invitations.practitioner_ttl_days,
            )
            await self.notification_service.send_email(
                application.email, message.subject, message.html_body, message.text_body
            )

            await self.on_application_updated.execute(
                ApplicationUpdatedEvent(
                    application_id=str(application.id),
                    before_status=ApplicationStatus.PENDING,
                    after_status=application.status,
                )
            )

            return ApproveApplicationResponse(
                token=str(invite.id),
                code=invite.code,
                register_link=link,
                expires_at=invite.expires_at,
            )
