"""Group Handler — translates group HTTP requests into GroupService calls.

Invariants:
    - Stateless: holds only the injected logger and service
    - Empty group_id/user_id -> 400 before the service is called
    - Undecodable body -> 400 "Invalid request body"
    - Any service failure -> 500 with a fixed message; the cause is only logged
    - Exactly one service call per operation, no retries

Design Decisions:
    - Logger and service injected through the constructor (no module globals),
      so tests substitute any object satisfying GroupService
    - Methods take plain ids and raw body bytes: routing stays in api/routes/groups.py
    - Errors built from ClientError/ServiceError so the envelope code and status
      come from one place
"""

import logging

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from iam.api.responses import respond_success
from iam.core.domain_types import GroupId, UserId
from iam.core.errors import ClientError, ErrorContext, IamError, ServiceError
from iam.core.service_protocols import GroupService
from iam.schemas.group import CreateGroupRequest, UpdateGroupRequest

GROUP_ID_REQUIRED = "Group ID is required"
MEMBERSHIP_IDS_REQUIRED = "Both Group ID and User ID are required"
INVALID_BODY = "Invalid request body"


class GroupHandler:
    """One method per group/membership operation."""

    def __init__(self, logger: logging.Logger, service: GroupService):
        self._log = logger
        self._service = service

    async def create_group(self, body: bytes) -> JSONResponse:
        self._log.info("Create group request received")

        try:
            request = CreateGroupRequest.model_validate_json(body)
        except ValidationError as e:
            self._log.info(f"Failed to decode create group request: {e}")
            return self._respond_with_error(ClientError(INVALID_BODY))

        try:
            group = await self._service.create_group(request)
        except Exception as e:
            self._log.error(
                f"Failed to create group: {e}",
                extra={"group_name": request.name}, exc_info=True,
            )
            return self._respond_with_error(ServiceError("Failed to create group"))

        self._log.info(
            "Group created successfully",
            extra={"group_id": group.id, "group_name": group.name},
        )
        return respond_success(
            status.HTTP_201_CREATED,
            f"Group '{group.name}' created successfully",
            group,
        )

    async def get_groups(self) -> JSONResponse:
        self._log.info("Get groups request received")

        try:
            groups = await self._service.get_groups()
        except Exception as e:
            self._log.error(f"Failed to get groups: {e}", exc_info=True)
            return self._respond_with_error(
                ServiceError("Failed to retrieve groups"),
            )

        self._log.info(
            "Groups retrieved successfully", extra={"count": len(groups)},
        )
        return respond_success(status.HTTP_200_OK, "Success", groups)

    async def get_group(self, group_id: GroupId) -> JSONResponse:
        if not group_id:
            return self._respond_with_error(ClientError(GROUP_ID_REQUIRED))

        self._log.info("Get group request received", extra={"group_id": group_id})

        try:
            group = await self._service.get_group(group_id)
        except Exception as e:
            self._log.error(
                f"Failed to get group: {e}",
                extra={"group_id": group_id}, exc_info=True,
            )
            return self._respond_with_error(
                ServiceError("Failed to retrieve group", ErrorContext(group_id=group_id)),
            )

        self._log.info(
            "Group retrieved successfully", extra={"group_id": group_id},
        )
        return respond_success(status.HTTP_200_OK, "Success", group)

    async def update_group(self, group_id: GroupId, body: bytes) -> JSONResponse:
        if not group_id:
            return self._respond_with_error(ClientError(GROUP_ID_REQUIRED))

        self._log.info("Update group request received", extra={"group_id": group_id})

        try:
            request = UpdateGroupRequest.model_validate_json(body)
        except ValidationError as e:
            self._log.info(
                f"Failed to decode update group request: {e}",
                extra={"group_id": group_id},
            )
            return self._respond_with_error(ClientError(INVALID_BODY))

        try:
            group = await self._service.update_group(group_id, request)
        except Exception as e:
            self._log.error(
                f"Failed to update group: {e}",
                extra={"group_id": group_id}, exc_info=True,
            )
            return self._respond_with_error(
                ServiceError("Failed to update group", ErrorContext(group_id=group_id)),
            )

        self._log.info("Group updated successfully", extra={"group_id": group_id})
        return respond_success(
            status.HTTP_200_OK, "Group updated successfully", group,
        )

    async def delete_group(self, group_id: GroupId) -> JSONResponse:
        if not group_id:
            return self._respond_with_error(ClientError(GROUP_ID_REQUIRED))

        self._log.info("Delete group request received", extra={"group_id": group_id})

        try:
            await self._service.delete_group(group_id)
        except Exception as e:
            self._log.error(
                f"Failed to delete group: {e}",
                extra={"group_id": group_id}, exc_info=True,
            )
            return self._respond_with_error(
                ServiceError("Failed to delete group", ErrorContext(group_id=group_id)),
            )

        self._log.info("Group deleted successfully", extra={"group_id": group_id})
        return respond_success(status.HTTP_200_OK, "Group deleted successfully")

    async def get_group_members(self, group_id: GroupId) -> JSONResponse:
        if not group_id:
            return self._respond_with_error(ClientError(GROUP_ID_REQUIRED))

        self._log.info(
            "Get group members request received", extra={"group_id": group_id},
        )

        try:
            members = await self._service.get_group_members(group_id)
        except Exception as e:
            self._log.error(
                f"Failed to get group members: {e}",
                extra={"group_id": group_id}, exc_info=True,
            )
            return self._respond_with_error(ServiceError(
                "Failed to retrieve group members", ErrorContext(group_id=group_id),
            ))

        self._log.info(
            "Group members retrieved successfully",
            extra={"group_id": group_id, "member_count": len(members)},
        )
        return respond_success(status.HTTP_200_OK, "Success", members)

    async def add_user_to_group(
        self, group_id: GroupId, user_id: UserId,
    ) -> JSONResponse:
        if not group_id or not user_id:
            return self._respond_with_error(ClientError(MEMBERSHIP_IDS_REQUIRED))

        ids = {"group_id": group_id, "user_id": user_id}
        self._log.info("Add user to group request received", extra=ids)

        try:
            await self._service.add_user_to_group(group_id, user_id)
        except Exception as e:
            self._log.error(
                f"Failed to add user to group: {e}", extra=ids, exc_info=True,
            )
            return self._respond_with_error(ServiceError(
                "Failed to add user to group", ErrorContext(**ids),
            ))

        self._log.info("User added to group successfully", extra=ids)
        return respond_success(
            status.HTTP_200_OK, "User added to group successfully",
        )

    async def remove_user_from_group(
        self, group_id: GroupId, user_id: UserId,
    ) -> JSONResponse:
        if not group_id or not user_id:
            return self._respond_with_error(ClientError(MEMBERSHIP_IDS_REQUIRED))

        ids = {"group_id": group_id, "user_id": user_id}
        self._log.info("Remove user from group request received", extra=ids)

        try:
            await self._service.remove_user_from_group(group_id, user_id)
        except Exception as e:
            self._log.error(
                f"Failed to remove user from group: {e}", extra=ids, exc_info=True,
            )
            return self._respond_with_error(ServiceError(
                "Failed to remove user from group", ErrorContext(**ids),
            ))

        self._log.info("User removed from group successfully", extra=ids)
        return respond_success(
            status.HTTP_200_OK, "User removed from group successfully",
        )

    def _respond_with_error(self, error: IamError) -> JSONResponse:
        level = logging.WARNING if error.http_status < 500 else logging.ERROR
        self._log.log(
            level,
            f"Responding with {error.http_status}: {error.message}",
            extra={
                "error_code": error.code,
                "status_code": error.http_status,
                "group_id": error.context.group_id,
                "user_id": error.context.user_id,
            },
        )
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )
