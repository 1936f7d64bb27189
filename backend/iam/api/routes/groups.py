"""Group Routes — HTTP surface for groups and memberships.

Invariants:
    - Every route delegates to GroupHandler; no logic lives here
    - Handler built per request from get_group_service (overridable in tests)
    - Trailing-slash shapes with an empty id reach the handler with "" so they
      answer 400 instead of 404
    - Verbs of the slash-less shapes also work with the slash: POST /groups/
      creates, GET /groups/{id}/members/ lists members

Design Decisions:
    - Raw body bytes passed to the handler: decoding failures map to the
      "Invalid request body" envelope, not FastAPI's validation error
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from iam.api.group_handler import GroupHandler
from iam.core.domain_types import GroupId, UserId
from iam.core.service_protocols import GroupService
from iam.infrastructure.database import get_db
from iam.services.group_service import SQLAlchemyGroupService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/groups", tags=["groups"])


def get_group_service(db: AsyncSession = Depends(get_db)) -> GroupService:
    """FastAPI dependency for the group service."""
    return SQLAlchemyGroupService(db)


def get_group_handler(
    service: GroupService = Depends(get_group_service),
) -> GroupHandler:
    return GroupHandler(logger=logger, service=service)


# ─── Groups ─────────────────────────────────────────────────────

@router.post("")
@router.post("/", include_in_schema=False)
async def create_group(
    request: Request, handler: GroupHandler = Depends(get_group_handler),
):
    """Create a group from a JSON body with `name`."""
    return await handler.create_group(await request.body())


@router.get("")
async def list_groups(handler: GroupHandler = Depends(get_group_handler)):
    """List all groups."""
    return await handler.get_groups()


@router.get("/{group_id}")
async def get_group(
    group_id: str, handler: GroupHandler = Depends(get_group_handler),
):
    """Get one group."""
    return await handler.get_group(GroupId(group_id))


@router.api_route("/{group_id}", methods=["PUT", "PATCH"])
async def update_group(
    group_id: str,
    request: Request,
    handler: GroupHandler = Depends(get_group_handler),
):
    """Update a group; semantics belong to the service."""
    return await handler.update_group(GroupId(group_id), await request.body())


@router.delete("/{group_id}")
async def delete_group(
    group_id: str, handler: GroupHandler = Depends(get_group_handler),
):
    """Delete a group."""
    return await handler.delete_group(GroupId(group_id))


# ─── Memberships ────────────────────────────────────────────────

@router.get("/{group_id}/members")
@router.get("/{group_id}/members/", include_in_schema=False)
async def list_group_members(
    group_id: str, handler: GroupHandler = Depends(get_group_handler),
):
    """List the members of a group."""
    return await handler.get_group_members(GroupId(group_id))


@router.put("/{group_id}/members/{user_id}")
async def add_user_to_group(
    group_id: str,
    user_id: str,
    handler: GroupHandler = Depends(get_group_handler),
):
    """Add a user to a group."""
    return await handler.add_user_to_group(GroupId(group_id), UserId(user_id))


@router.delete("/{group_id}/members/{user_id}")
async def remove_user_from_group(
    group_id: str,
    user_id: str,
    handler: GroupHandler = Depends(get_group_handler),
):
    """Remove a user from a group."""
    return await handler.remove_user_from_group(
        GroupId(group_id), UserId(user_id),
    )


# ─── Empty-id shapes ────────────────────────────────────────────

@router.get("/", include_in_schema=False)
async def get_group_without_id(
    handler: GroupHandler = Depends(get_group_handler),
):
    return await handler.get_group(GroupId(""))


@router.api_route("/", methods=["PUT", "PATCH"], include_in_schema=False)
async def update_group_without_id(
    request: Request, handler: GroupHandler = Depends(get_group_handler),
):
    return await handler.update_group(GroupId(""), await request.body())


@router.delete("/", include_in_schema=False)
async def delete_group_without_id(
    handler: GroupHandler = Depends(get_group_handler),
):
    return await handler.delete_group(GroupId(""))


@router.put("/{group_id}/members/", include_in_schema=False)
async def add_user_to_group_without_user_id(
    group_id: str, handler: GroupHandler = Depends(get_group_handler),
):
    return await handler.add_user_to_group(GroupId(group_id), UserId(""))


@router.delete("/{group_id}/members/", include_in_schema=False)
async def remove_user_from_group_without_user_id(
    group_id: str, handler: GroupHandler = Depends(get_group_handler),
):
    return await handler.remove_user_from_group(GroupId(group_id), UserId(""))
