"""Submit practitioner application use case."""

import logfire
from pydantic import BaseModel

from cleartrack.application.message import new_application_email
from cleartrack.application.usecase.base import BaseUseCase
from cleartrack.config import Settings
from cleartrack.domain.service import ApplicationService, NotificationService
from cleartrack.domain.value import ApplicationStatus


class SubmitApplicationRequest(BaseModel):
    """Applicant details. Validation of required fields is a domain rule."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    practice_name: str = ""
    practice_number: str | None = None
    sars_number: str | None = None
    years_experience: float | None = None
    qualifications: str = ""
    specializations: list[str] = []
    bio: str | None = None
    message: str | None = None


class SubmitApplicationResponse(BaseModel):
    """Response after submitting an application."""

    application_id: str
    status: ApplicationStatus
    message: str


class SubmitApplicationUseCase(BaseUseCase):
    """Use case for anyone applying to join as a practitioner."""

    def __init__(
        self,
        application_service: ApplicationService,
        notification_service: NotificationService,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            application_service: Application domain service
            notification_service: Notification domain service
            settings: Application settings
        """
        self.application_service = application_service
        self.notification_service = notification_service
        self.settings = settings

    async def execute(
        self, request: SubmitApplicationRequest
    ) -> SubmitApplicationResponse:
        """Store the application and notify the administrators.

        Raises:
            ValidationError: If a required field is missing or malformed
        """
        with logfire.span("submit_application"):
            application = await self.application_service.submit(
                first_name=request.first_name,
                last_name=request.last_name,
                email=request.email,
                phone=request.phone,
                practice_name=request.practice_name,
                qualifications=request.qualifications,
                years_experience=request.years_experience,
                specializations=request.specializations,
                practice_number=request.practice_number,
                sars_number=request.sars_number,
                bio=request.bio,
                message=request.message,
            )

            notice = new_application_email(application, self.settings.api.frontend_url)
            await self.notification_service.send_email(
                self.settings.notifications.admin_email,
                notice.subject,
                notice.html_body,
                notice.text_body,
            )

            return SubmitApplicationResponse(
                application_id=str(application.id),
                status=application.status,
                message=(
                    "Application submitted successfully. "
                    "We will review and contact you soon."
                ),
            )
