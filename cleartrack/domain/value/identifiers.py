"""Strongly typed identifiers for ClearTrack domain entities.

Using NewType keeps user, invite, request and application ids from being
mixed up while staying plain UUIDs at runtime.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
InviteId = NewType("InviteId", UUID)
RequestId = NewType("RequestId", UUID)
ApplicationId = NewType("ApplicationId", UUID)
