"""Practitioner application repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from cleartrack.domain.model.application import PractitionerApplication
from cleartrack.domain.value import ApplicationId, ApplicationStatus, InviteId


class ApplicationRepository(ABC):
    """Repository for PractitionerApplication entity."""

    @abstractmethod
    async def find_by_id(
        self, application_id: ApplicationId
    ) -> PractitionerApplication | None:
        """Find an application by ID."""
        pass

    @abstractmethod
    async def find_by_status(
        self, status: ApplicationStatus, limit: int = 50, offset: int = 0
    ) -> list[PractitionerApplication]:
        """Find applications in a status, oldest first (review queue order)."""
        pass

    @abstractmethod
    async def save(
        self, application: PractitionerApplication
    ) -> PractitionerApplication:
        """Save an application (create or update)."""
        pass

    @abstractmethod
    async def approve_if_pending(
        self,
        application_id: ApplicationId,
        invite_token: InviteId,
        approved_at: datetime,
    ) -> PractitionerApplication | None:
        """Atomically move a pending application to approved.

        Args:
            application_id: Application to approve
            invite_token: Registration invite minted for the applicant
            approved_at: Approval timestamp

        Returns:
            The updated application, or None if it was not pending
        """
        pass

    @abstractmethod
    async def mark_approval_email_sent_if_unsent(
        self, application_id: ApplicationId
    ) -> bool:
        """Atomically set ``approval_email_sent`` if it is still false.

        Returns:
            True if this call flipped the flag
        """
        pass
