"""Practitioner application and registration use cases."""

from cleartrack.application.usecase.application.approve_application import (
    ApproveApplicationRequest,
    ApproveApplicationResponse,
    ApproveApplicationUseCase,
)
from cleartrack.application.usecase.application.complete_registration import (
    CompleteRegistrationRequest,
    CompleteRegistrationResponse,
    CompleteRegistrationUseCase,
)
from cleartrack.application.usecase.application.list_applications import (
    ApplicationItem,
    ListApplicationsRequest,
    ListApplicationsResponse,
    ListApplicationsUseCase,
)
from cleartrack.application.usecase.application.on_application_updated import (
    ApplicationUpdatedEvent,
    ApplicationUpdatedResult,
    OnApplicationUpdatedUseCase,
)
from cleartrack.application.usecase.application.submit_application import (
    SubmitApplicationRequest,
    SubmitApplicationResponse,
    SubmitApplicationUseCase,
)
from cleartrack.application.usecase.application.verify_practitioner_invite import (
    VerifyPractitionerInviteRequest,
    VerifyPractitionerInviteResponse,
    VerifyPractitionerInviteUseCase,
)

__all__ = [
    "ApplicationItem",
    "ApplicationUpdatedEvent",
    "ApplicationUpdatedResult",
    "ApproveApplicationRequest",
    "ApproveApplicationResponse",
    "ApproveApplicationUseCase",
    "CompleteRegistrationRequest",
    "CompleteRegistrationResponse",
    "CompleteRegistrationUseCase",
    "ListApplicationsRequest",
    "ListApplicationsResponse",
    "ListApplicationsUseCase",
    "OnApplicationUpdatedUseCase",
    "SubmitApplicationRequest",
    "SubmitApplicationResponse",
    "SubmitApplicationUseCase",
    "VerifyPractitionerInviteRequest",
    "VerifyPractitionerInviteResponse",
    "VerifyPractitionerInviteUseCase",
]
