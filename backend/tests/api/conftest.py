"""API test fixtures — fake GroupService + FastAPI test client.

Invariants:
    - get_group_service overridden with FakeGroupService (no database touched)
    - FakeGroupService records every call and can be told to fail per operation

Design Decisions:
    - Override the service, not get_db: the handler is tested against the
      protocol, exactly as a custom service implementation would be plugged in
"""

import logging

import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from iam.api.group_handler import GroupHandler
from iam.api.routes.groups import get_group_service
from iam.main import app


class GroupRecord(BaseModel):
    """Group result with exactly the fields the scenarios expect."""
    id: str
    name: str


class FakeGroupService:
    """In-memory test double satisfying the GroupService protocol."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.results: dict[str, object] = {}
        self.errors: dict[str, Exception] = {}

    async def _call(self, name: str, *args):
        self.calls.append((name, *args))
        if name in self.errors:
            raise self.errors[name]
        return self.results.get(name)

    async def create_group(self, request):
        return await self._call("create_group", request)

    async def get_groups(self):
        return await self._call("get_groups")

    async def get_group(self, group_id):
        return await self._call("get_group", group_id)

    async def update_group(self, group_id, request):
        return await self._call("update_group", group_id, request)

    async def delete_group(self, group_id):
        return await self._call("delete_group", group_id)

    async def get_group_members(self, group_id):
        return await self._call("get_group_members", group_id)

    async def add_user_to_group(self, group_id, user_id):
        return await self._call("add_user_to_group", group_id, user_id)

    async def remove_user_from_group(self, group_id, user_id):
        return await self._call("remove_user_from_group", group_id, user_id)


@pytest.fixture
def fake_service():
    service = FakeGroupService()
    service.results.update({
        "create_group": GroupRecord(id="g1", name="Engineering"),
        "get_groups": [
            {"id": "g1", "name": "Engineering"},
            {"id": "g2", "name": "Design", "description": "UX"},
        ],
        "get_group": {"id": "g1", "name": "Engineering"},
        "update_group": {"id": "g1", "name": "Platform"},
        "get_group_members": [
            {"group_id": "g1", "user_id": "u1"},
            {"group_id": "g1", "user_id": "u2"},
        ],
    })
    return service


@pytest.fixture
def handler(fake_service):
    return GroupHandler(logging.getLogger("tests.group_handler"), fake_service)


@pytest.fixture
async def client(fake_service):
    """FastAPI test client with the group service overridden."""
    app.dependency_overrides[get_group_service] = lambda: fake_service

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
