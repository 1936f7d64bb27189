"""Boundary Protocols — contracts between the API handler and the service layer.

Invariants:
    - The handler depends on GroupService only, never on a concrete implementation
    - Every method is a coroutine; failures are raised, never returned

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Async in Protocol: implementations do IO, and task cancellation of the
      request propagates through the awaited call
"""

from typing import Protocol

from iam.core.domain_types import GroupId, UserId
from iam.schemas.group import (
    CreateGroupRequest, UpdateGroupRequest, GroupResponse, GroupMemberResponse,
)


class GroupService(Protocol):
    """Contract for group and membership management — implemented by shell."""
    async def create_group(self, request: CreateGroupRequest) -> GroupResponse: ...
    async def get_groups(self) -> list[GroupResponse]: ...
    async def get_group(self, group_id: GroupId) -> GroupResponse: ...
    async def update_group(
        self, group_id: GroupId, request: UpdateGroupRequest,
    ) -> GroupResponse: ...
    async def delete_group(self, group_id: GroupId) -> None: ...
    async def get_group_members(
        self, group_id: GroupId,
    ) -> list[GroupMemberResponse]: ...
    async def add_user_to_group(self, group_id: GroupId, user_id: UserId) -> None: ...
    async def remove_user_from_group(
        self, group_id: GroupId, user_id: UserId,
    ) -> None: ...
