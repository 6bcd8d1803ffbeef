"""Practitioner application domain service."""

from uuid import uuid4

import logfire

from cleartrack.domain.error import (
    FailedPreconditionError,
    NotFoundError,
    ValidationError,
)
from cleartrack.domain.model import PractitionerApplication
from cleartrack.domain.model.common import utcnow
from cleartrack.domain.repository import ApplicationRepository
from cleartrack.domain.value import (
    ApplicationId,
    ApplicationStatus,
    EmailAddress,
    InviteId,
)

from .base import Service

_REQUIRED_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "practice_name",
    "qualifications",
)


def is_approval_transition(
    before: ApplicationStatus | None, after: ApplicationStatus | None
) -> bool:
    """Whether an application status change is exactly pending -> approved."""
    return before == ApplicationStatus.PENDING and after == ApplicationStatus.APPROVED


class ApplicationService(Service):
    """Domain service for the practitioner application lifecycle."""

    def __init__(self, application_repository: ApplicationRepository) -> None:
        """Initialize application service.

        Args:
            application_repository: Application repository
        """
        self.application_repository = application_repository

    async def submit(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str,
        practice_name: str,
        qualifications: str,
        years_experience: float | None,
        specializations: list[str],
        practice_number: str | None = None,
        sars_number: str | None = None,
        bio: str | None = None,
        message: str | None = None,
    ) -> PractitionerApplication:
        """Record a new pending application.

        Returns:
            Saved application

        Raises:
            ValidationError: If a required field is missing or malformed
        """
        values = {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "phone": phone,
            "practice_name": practice_name,
            "qualifications": qualifications,
        }
        missing = [n for n in _REQUIRED_FIELDS if not (values[n] or "").strip()]
        if missing:
            raise ValidationError(
                "Required fields are missing: " + ", ".join(missing)
            )

        if years_experience is None or years_experience != years_experience:
            raise ValidationError("Years of experience must be a valid number")
        if years_experience < 0:
            raise ValidationError("Years of experience cannot be negative")

        cleaned_specializations = frozenset(
            s.strip() for s in specializations if s and s.strip()
        )
        if not cleaned_specializations:
            raise ValidationError("At least one specialization is required")

        try:
            normalized_email = EmailAddress(email).root
        except ValueError:
            raise ValidationError("Invalid email address")

        with logfire.span(
            "application_service.submit",
            email_domain=normalized_email.split("@")[-1],
        ):
            now = utcnow()
            application = PractitionerApplication(
                id=ApplicationId(uuid4()),
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                email=normalized_email,
                phone=phone.strip(),
                practice_name=practice_name.strip(),
                practice_number=practice_number or None,
                sars_number=sars_number or None,
                years_experience=years_experience,
                qualifications=qualifications.strip(),
                specializations=cleaned_specializations,
                bio=bio or None,
                message=message or None,
                status=ApplicationStatus.PENDING,
                created_at=now,
                updated_at=now,
            )

            saved = await self.application_repository.save(application)
            logfire.info("Application submitted", application_id=str(saved.id))
            return saved

    async def get_by_id(self, application_id: ApplicationId) -> PractitionerApplication:
        """Get application by ID.

        Raises:
            NotFoundError: If application not found
        """
        application = await self.application_repository.find_by_id(application_id)
        if application is None:
            raise NotFoundError(
                "Application", str(application_id), "Application not found"
            )
        return application

    async def list_by_status(
        self,
        status: ApplicationStatus = ApplicationStatus.PENDING,
        limit: int = 50,
        offset: int = 0,
    ) -> list[PractitionerApplication]:
        """Applications in a status, oldest first."""
        return await self.application_repository.find_by_status(status, limit, offset)

    async def approve(
        self, application_id: ApplicationId, invite_token: InviteId
    ) -> PractitionerApplication:
        """Move a pending application to approved.

        The transition is a single conditional update; a repeated or
        concurrent approval finds the application no longer pending.

        Args:
            application_id: Application to approve
            invite_token: Registration invite ID reserved for the applicant

        Returns:
            The approved application

        Raises:
            NotFoundError: If the application does not exist
            FailedPreconditionError: If the application is not pending
        """
        with logfire.span(
            "application_service.approve", application_id=str(application_id)
        ):
            application = await self.get_by_id(application_id)
            if application.status != ApplicationStatus.PENDING:
                logfire.warn(
                    "Application not pending",
                    application_id=str(application_id),
                    status=application.status.value,
                )
                raise FailedPreconditionError("Application is not in pending status")

            approved = await self.application_repository.approve_if_pending(
                application_id, invite_token, utcnow()
            )
            if approved is None:
                logfire.warn(
                    "Application approved concurrently",
                    application_id=str(application_id),
                )
                raise FailedPreconditionError("Application is not in pending status")

            logfire.info("Application approved", application_id=str(application_id))
            return approved

    async def claim_approval_email(self, application_id: ApplicationId) -> bool:
        """Claim the right to send the welcome email for an application.

        Returns:
            True for exactly one caller per application
        """
        with logfire.span(
            "application_service.claim_approval_email",
            application_id=str(application_id),
        ):
            repository = self.application_repository
            claimed = await repository.mark_approval_email_sent_if_unsent(
                application_id
            )
            if not claimed:
                logfire.info(
                    "Approval email already claimed",
                    application_id=str(application_id),
                )
            return claimed
