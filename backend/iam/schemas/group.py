"""Group Schemas — request bodies and service result records for groups.

Invariants:
    - CreateGroupRequest.name is required (presence check only)
    - UpdateGroupRequest fields are all optional; the service decides update semantics
    - Unknown body fields are ignored

Design Decisions:
    - from_attributes on response models: services validate ORM rows directly
    - Timestamps optional on responses: records built outside the database
      (imports, test doubles) need not carry them
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CreateGroupRequest(BaseModel):
    """Group creation body."""
    name: str
    description: str | None = None


class UpdateGroupRequest(BaseModel):
    """Group update body."""
    name: str | None = None
    description: str | None = None


class GroupResponse(BaseModel):
    """Group record as returned by the service."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GroupMemberResponse(BaseModel):
    """Membership record as returned by the service."""
    model_config = ConfigDict(from_attributes=True)

    group_id: str
    user_id: str
    added_at: datetime | None = None
