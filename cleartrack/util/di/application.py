"""Application layer DI providers."""

from dishka import Scope, provide

from cleartrack.application.usecase.application import (
    ApproveApplicationUseCase,
    CompleteRegistrationUseCase,
    ListApplicationsUseCase,
    OnApplicationUpdatedUseCase,
    SubmitApplicationUseCase,
    VerifyPractitionerInviteUseCase,
)
from cleartrack.application.usecase.auth import (
    GetCurrentUserUseCase,
    LoginUseCase,
    SignupUseCase,
)
from cleartrack.application.usecase.invite import (
    CreateClientInviteUseCase,
    ListClientInvitesUseCase,
    VerifyClientInviteUseCase,
)
from cleartrack.application.usecase.request import (
    CreateClientRequestUseCase,
    ListAssignedRequestsUseCase,
    ListMyRequestsUseCase,
    RespondToClientRequestUseCase,
)
from cleartrack.config import Settings
from cleartrack.domain.service import (
    ApplicationService,
    ClientRequestService,
    IdentityService,
    InviteService,
    JWTService,
    NotificationService,
    UserService,
)
from cleartrack.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        identity_service: IdentityService,
        jwt_service: JWTService,
        user_service: UserService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            identity_service=identity_service,
            jwt_service=jwt_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_signup_use_case(
        self,
        identity_service: IdentityService,
        jwt_service: JWTService,
        user_service: UserService,
        settings: Settings,
    ) -> SignupUseCase:
        """Provide signup use case."""
        return SignupUseCase(
            identity_service=identity_service,
            jwt_service=jwt_service,
            user_service=user_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(user_service=user_service)

    # Invite use cases
    @provide(scope=Scope.REQUEST)
    def get_create_client_invite_use_case(
        self,
        invite_service: InviteService,
        user_service: UserService,
        notification_service: NotificationService,
        settings: Settings,
    ) -> CreateClientInviteUseCase:
        """Provide create client invite use case."""
        return CreateClientInviteUseCase(
            invite_service=invite_service,
            user_service=user_service,
            notification_service=notification_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_verify_client_invite_use_case(
        self, invite_service: InviteService, user_service: UserService
    ) -> VerifyClientInviteUseCase:
        """Provide verify client invite use case."""
        return VerifyClientInviteUseCase(
            invite_service=invite_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_client_invites_use_case(
        self, invite_service: InviteService, user_service: UserService
    ) -> ListClientInvitesUseCase:
        """Provide list client invites use case."""
        return ListClientInvitesUseCase(
            invite_service=invite_service, user_service=user_service
        )

    # Client request use cases
    @provide(scope=Scope.REQUEST)
    def get_create_client_request_use_case(
        self, client_request_service: ClientRequestService, user_service: UserService
    ) -> CreateClientRequestUseCase:
        """Provide create client request use case."""
        return CreateClientRequestUseCase(
            client_request_service=client_request_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_respond_to_client_request_use_case(
        self, client_request_service: ClientRequestService, user_service: UserService
    ) -> RespondToClientRequestUseCase:
        """Provide respond to client request use case."""
        return RespondToClientRequestUseCase(
            client_request_service=client_request_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_assigned_requests_use_case(
        self, client_request_service: ClientRequestService, user_service: UserService
    ) -> ListAssignedRequestsUseCase:
        """Provide list assigned requests use case."""
        return ListAssignedRequestsUseCase(
            client_request_service=client_request_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_my_requests_use_case(
        self, client_request_service: ClientRequestService
    ) -> ListMyRequestsUseCase:
        """Provide list my requests use case."""
        return ListMyRequestsUseCase(client_request_service=client_request_service)

    # Application use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_application_use_case(
        self,
        application_service: ApplicationService,
        notification_service: NotificationService,
        settings: Settings,
    ) -> SubmitApplicationUseCase:
        """Provide submit application use case."""
        return SubmitApplicationUseCase(
            application_service=application_service,
            notification_service=notification_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_applications_use_case(
        self, application_service: ApplicationService, user_service: UserService
    ) -> ListApplicationsUseCase:
        """Provide list applications use case."""
        return ListApplicationsUseCase(
            application_service=application_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_on_application_updated_use_case(
        self,
        application_service: ApplicationService,
        notification_service: NotificationService,
    ) -> OnApplicationUpdatedUseCase:
        """Provide application change handler."""
        return OnApplicationUpdatedUseCase(
            application_service=application_service,
            notification_service=notification_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_approve_application_use_case(
        self,
        application_service: ApplicationService,
        invite_service: InviteService,
        user_service: UserService,
        notification_service: NotificationService,
        on_application_updated: OnApplicationUpdatedUseCase,
        settings: Settings,
    ) -> ApproveApplicationUseCase:
        """Provide approve application use case."""
        return ApproveApplicationUseCase(
            application_service=application_service,
            invite_service=invite_service,
            user_service=user_service,
            notification_service=notification_service,
            on_application_updated=on_application_updated,
            settings=settings,
        )

    # Registration use cases
    @provide(scope=Scope.REQUEST)
    def get_verify_practitioner_invite_use_case(
        self, invite_service: InviteService
    ) -> VerifyPractitionerInviteUseCase:
        """Provide verify practitioner invite use case."""
        return VerifyPractitionerInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_complete_registration_use_case(
        self,
        invite_service: InviteService,
        identity_service: IdentityService,
        user_service: UserService,
        application_service: ApplicationService,
        settings: Settings,
    ) -> CompleteRegistrationUseCase:
        """Provide complete registration use case."""
        return CompleteRegistrationUseCase(
            invite_service=invite_service,
            identity_service=identity_service,
            user_service=user_service,
            application_service=application_service,
            settings=settings,
        )
