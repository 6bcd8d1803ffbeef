"""Domain services."""

from .application_service import ApplicationService, is_approval_transition
from .base import Service
from .client_request_service import ClientRequestService
from .identity_service import IdentityService
from .invite_service import InviteService, normalize_mobile
from .jwt_service import JWTService
from .notification_service import EmailSender, NotificationService, SmsSender
from .rotation_service import RotationService, order_candidates
from .user_service import UserService

__all__ = [
    "ApplicationService",
    "ClientRequestService",
    "EmailSender",
    "IdentityService",
    "InviteService",
    "JWTService",
    "NotificationService",
    "RotationService",
    "Service",
    "SmsSender",
    "UserService",
    "is_approval_transition",
    "normalize_mobile",
]
