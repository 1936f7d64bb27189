"""Group Service — SQLAlchemy implementation of the GroupService protocol.

Invariants:
    - Every mutation commits its own transaction
    - Missing groups/memberships raise ResourceNotFoundError
    - A user is a member of a group at most once (MembershipConflictError)
    - Results are returned as schemas, never as ORM rows
    - Memberships are mutated through Group.members so the loaded collection
      never goes stale within a session

Design Decisions:
    - Partial updates: only fields present (and non-null) in UpdateGroupRequest
      are applied
    - Users are opaque ids: adding a membership does not check a users table
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.core.domain_types import GroupId, UserId
from iam.core.errors import ResourceNotFoundError, MembershipConflictError
from iam.models.group import Group
from iam.models.group_member import GroupMember
from iam.schemas.group import (
    CreateGroupRequest, UpdateGroupRequest, GroupResponse, GroupMemberResponse,
)

logger = logging.getLogger(__name__)


class SQLAlchemyGroupService:
    """Group and membership persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def create_group(self, request: CreateGroupRequest) -> GroupResponse:
        group = Group(name=request.name, description=request.description)
        self._db.add(group)
        await self._db.commit()
        await self._db.refresh(group)
        logger.info(
            f"Group {group.id} persisted",
            extra={"group_id": group.id, "group_name": group.name},
        )
        return GroupResponse.model_validate(group)

    async def get_groups(self) -> list[GroupResponse]:
        result = await self._db.execute(
            select(Group).order_by(Group.created_at, Group.id),
        )
        return [GroupResponse.model_validate(g) for g in result.scalars().all()]

    async def get_group(self, group_id: GroupId) -> GroupResponse:
        group = await self._get_group_or_raise(group_id)
        return GroupResponse.model_validate(group)

    async def update_group(
        self, group_id: GroupId, request: UpdateGroupRequest,
    ) -> GroupResponse:
        group = await self._get_group_or_raise(group_id)
        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        for field_name, value in changes.items():
            setattr(group, field_name, value)
        group.updated_at = datetime.now(timezone.utc)
        await self._db.commit()
        await self._db.refresh(group)
        return GroupResponse.model_validate(group)

    async def delete_group(self, group_id: GroupId) -> None:
        group = await self._get_group_or_raise(group_id)
        await self._db.delete(group)
        await self._db.commit()
        logger.info(f"Group {group_id} removed", extra={"group_id": group_id})

    async def get_group_members(
        self, group_id: GroupId,
    ) -> list[GroupMemberResponse]:
        await self._get_group_or_raise(group_id)
        result = await self._db.execute(
            select(GroupMember)
            .where(GroupMember.group_id == group_id)
            .order_by(GroupMember.added_at, GroupMember.user_id),
        )
        return [
            GroupMemberResponse.model_validate(m) for m in result.scalars().all()
        ]

    async def add_user_to_group(self, group_id: GroupId, user_id: UserId) -> None:
        group = await self._get_group_or_raise(group_id)
        if _find_member(group, user_id) is not None:
            raise MembershipConflictError(group_id, user_id)
        group.members.append(GroupMember(group_id=group_id, user_id=user_id))
        try:
            await self._db.commit()
        except IntegrityError:
            # Concurrent insert of the same membership
            await self._db.rollback()
            raise MembershipConflictError(group_id, user_id)

    async def remove_user_from_group(
        self, group_id: GroupId, user_id: UserId,
    ) -> None:
        group = await self._get_group_or_raise(group_id)
        membership = _find_member(group, user_id)
        if membership is None:
            raise ResourceNotFoundError("Group member", f"{group_id}/{user_id}")
        group.members.remove(membership)
        await self._db.commit()

    async def _get_group_or_raise(self, group_id: GroupId) -> Group:
        group = await self._db.get(Group, group_id)
        if group is None:
            raise ResourceNotFoundError("Group", group_id)
        return group


def _find_member(group: Group, user_id: UserId) -> GroupMember | None:
    return next((m for m in group.members if m.user_id == user_id), None)
