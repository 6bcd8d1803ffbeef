"""In-memory practitioner application repository for testing."""

from datetime import datetime
from typing import Optional

from cleartrack.domain.model import PractitionerApplication
from cleartrack.domain.repository.application import ApplicationRepository
from cleartrack.domain.value import ApplicationId, ApplicationStatus, InviteId


class InMemoryApplicationRepository(ApplicationRepository):
    """In-memory implementation of ApplicationRepository for testing."""

    def __init__(self) -> None:
        self._applications: dict[ApplicationId, PractitionerApplication] = {}

    async def find_by_id(
        self, application_id: ApplicationId
    ) -> Optional[PractitionerApplication]:
        return self._applications.get(application_id)

    async def find_by_status(
        self, status: ApplicationStatus, limit: int = 50, offset: int = 0
    ) -> list[PractitionerApplication]:
        matches = [a for a in self._applications.values() if a.status == status]
        matches.sort(key=lambda a: a.created_at)
        return matches[offset : offset + limit]

    async def save(
        self, application: PractitionerApplication
    ) -> PractitionerApplication:
        self._applications[application.id] = application
        return application

    async def approve_if_pending(
        self,
        application_id: ApplicationId,
        invite_token: InviteId,
        approved_at: datetime,
    ) -> Optional[PractitionerApplication]:
        """Approve the application if it is still pending."""
        application = self._applications.get(application_id)
        if application is None or application.status != ApplicationStatus.PENDING:
            return None

        approved = application.model_copy(
            update={
                "status": ApplicationStatus.APPROVED,
                "invite_token": invite_token,
                "approved_at": approved_at,
                "updated_at": approved_at,
            }
        )
        self._applications[application_id] = approved
        return approved

    async def mark_approval_email_sent_if_unsent(
        self, application_id: ApplicationId
    ) -> bool:
        """Set the welcome-email flag if it is not set yet."""
        application = self._applications.get(application_id)
        if application is None or application.approval_email_sent:
            return False

        self._applications[application_id] = application.model_copy(
            update={"approval_email_sent": True}
        )
        return True
