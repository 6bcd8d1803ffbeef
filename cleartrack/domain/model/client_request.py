"""Client request entity.

A request from a client to be taken on by a practitioner. It moves through
unassigned -> pending -> accepted, with decline-driven reassignment while
pending.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from cleartrack.domain.model.common import DomainModel, utcnow
from cleartrack.domain.value import RequestId, RequestStatus, UserId


class ClientRequest(DomainModel):
    """Client request aggregate.

    ``declined_by`` is append-only; a decliner is excluded from every later
    candidate pool for this request, so it never holds duplicates.
    """

    id: RequestId
    client_id: UserId
    needs: frozenset[str] = Field(min_length=1)
    message: Optional[str] = None
    assigned_practitioner_id: Optional[UserId] = None
    declined_by: tuple[UserId, ...] = ()
    status: RequestStatus = RequestStatus.UNASSIGNED
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
