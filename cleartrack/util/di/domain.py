"""Domain layer DI providers."""

from dishka import Scope, provide

from cleartrack.config import AssignmentSettings, AuthSettings
from cleartrack.domain.repository import (
    ApplicationRepository,
    ClientRequestRepository,
    CredentialRepository,
    InviteRepository,
    UserRepository,
)
from cleartrack.domain.service import (
    ApplicationService,
    ClientRequestService,
    EmailSender,
    IdentityService,
    InviteService,
    JWTService,
    NotificationService,
    RotationService,
    SmsSender,
    UserService,
)
from cleartrack.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_identity_service(
        self, credential_repository: CredentialRepository
    ) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(credential_repository=credential_repository)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_invite_service(self, invite_repository: InviteRepository) -> InviteService:
        """Provide invite domain service."""
        return InviteService(invite_repository=invite_repository)

    @provide
    def get_rotation_service(
        self, user_repository: UserRepository, assignment: AssignmentSettings
    ) -> RotationService:
        """Provide practitioner rotation service."""
        return RotationService(
            user_repository=user_repository,
            max_attempts=assignment.max_rotation_attempts,
        )

    @provide
    def get_client_request_service(
        self,
        client_request_repository: ClientRequestRepository,
        rotation_service: RotationService,
        user_service: UserService,
        assignment: AssignmentSettings,
    ) -> ClientRequestService:
        """Provide client request domain service."""
        return ClientRequestService(
            client_request_repository=client_request_repository,
            rotation_service=rotation_service,
            user_service=user_service,
            reapply_needs_on_decline=assignment.reapply_needs_on_decline,
        )

    @provide
    def get_application_service(
        self, application_repository: ApplicationRepository
    ) -> ApplicationService:
        """Provide application domain service."""
        return ApplicationService(application_repository=application_repository)

    @provide
    def get_notification_service(
        self, sms_sender: SmsSender, email_sender: EmailSender
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(sms_sender=sms_sender, email_sender=email_sender)
