"""Client request use cases."""

from cleartrack.application.usecase.request.create_client_request import (
    CreateClientRequestRequest,
    CreateClientRequestResponse,
    CreateClientRequestUseCase,
)
from cleartrack.application.usecase.request.list_assigned_requests import (
    AssignedRequestItem,
    ListAssignedRequestsRequest,
    ListAssignedRequestsResponse,
    ListAssignedRequestsUseCase,
)
from cleartrack.application.usecase.request.list_my_requests import (
    ListMyRequestsRequest,
    ListMyRequestsResponse,
    ListMyRequestsUseCase,
    MyRequestItem,
)
from cleartrack.application.usecase.request.respond_to_client_request import (
    RespondToClientRequestRequest,
    RespondToClientRequestResponse,
    RespondToClientRequestUseCase,
)

__all__ = [
    "AssignedRequestItem",
    "CreateClientRequestRequest",
    "CreateClientRequestResponse",
    "CreateClientRequestUseCase",
    "ListAssignedRequestsRequest",
    "ListAssignedRequestsResponse",
    "ListAssignedRequestsUseCase",
    "ListMyRequestsRequest",
    "ListMyRequestsResponse",
    "ListMyRequestsUseCase",
    "MyRequestItem",
    "RespondToClientRequestRequest",
    "RespondToClientRequestResponse",
    "RespondToClientRequestUseCase",
]
