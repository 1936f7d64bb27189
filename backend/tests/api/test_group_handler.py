"""Group Handler — verifies request plumbing against a fake GroupService.

Tests:
    - Empty group_id/user_id -> 400 without calling the service
    - Undecodable bodies -> 400 "Invalid request body"
    - Service failure -> 500 with a fixed message, cause logged not returned
    - Success -> documented status, message and verbatim payload
"""

import json
import logging

import pytest

from iam.schemas.group import CreateGroupRequest, UpdateGroupRequest


def _body(response) -> dict:
    return json.loads(response.body)


# ─── Path parameter presence ────────────────────────────────────

@pytest.mark.parametrize("operation", ["get_group", "delete_group", "get_group_members"])
async def test_empty_group_id_rejected(handler, fake_service, operation):
    res = await getattr(handler, operation)("")

    assert res.status_code == 400
    assert _body(res) == {
        "status": "error",
        "code": "API_ERROR",
        "message": "Group ID is required",
        "details": None,
    }
    assert fake_service.calls == []


async def test_update_with_empty_group_id_checks_id_before_body(handler, fake_service):
    res = await handler.update_group("", b"not json")

    assert res.status_code == 400
    assert _body(res)["message"] == "Group ID is required"
    assert fake_service.calls == []


@pytest.mark.parametrize("operation", ["add_user_to_group", "remove_user_from_group"])
@pytest.mark.parametrize("group_id,user_id", [("", "u1"), ("g1", ""), ("", "")])
async def test_membership_requires_both_ids(
    handler, fake_service, operation, group_id, user_id,
):
    res = await getattr(handler, operation)(group_id, user_id)

    assert res.status_code == 400
    assert _body(res)["message"] == "Both Group ID and User ID are required"
    assert "data" not in _body(res)
    assert fake_service.calls == []


# ─── Body decoding ──────────────────────────────────────────────

@pytest.mark.parametrize("raw", [b"", b"{", b"not json", b"[]", b'{"name": 42}', b"{}"])
async def test_create_rejects_undecodable_body(handler, fake_service, raw):
    res = await handler.create_group(raw)

    assert res.status_code == 400
    assert _body(res)["message"] == "Invalid request body"
    assert fake_service.calls == []


@pytest.mark.parametrize("raw", [b"", b"{", b"[1, 2]"])
async def test_update_rejects_undecodable_body(handler, fake_service, raw):
    res = await handler.update_group("g1", raw)

    assert res.status_code == 400
    assert _body(res)["message"] == "Invalid request body"
    assert fake_service.calls == []


async def test_create_ignores_unknown_fields(handler, fake_service):
    res = await handler.create_group(b'{"name": "Engineering", "color": "blue"}')

    assert res.status_code == 201
    assert fake_service.calls == [
        ("create_group", CreateGroupRequest(name="Engineering")),
    ]


# ─── Success paths ──────────────────────────────────────────────

async def test_create_group_returns_201_with_group(handler):
    res = await handler.create_group(b'{"name": "Engineering"}')

    assert res.status_code == 201
    assert _body(res) == {
        "status": "success",
        "message": "Group 'Engineering' created successfully",
        "data": {"id": "g1", "name": "Engineering"},
    }


async def test_get_groups_returns_list(handler):
    res = await handler.get_groups()

    assert res.status_code == 200
    assert _body(res)["message"] == "Success"
    assert _body(res)["data"] == [
        {"id": "g1", "name": "Engineering"},
        {"id": "g2", "name": "Design", "description": "UX"},
    ]


async def test_get_groups_empty_list_is_not_null(handler, fake_service):
    fake_service.results["get_groups"] = []

    res = await handler.get_groups()

    assert _body(res)["data"] == []


async def test_get_group_passes_id_through(handler, fake_service):
    res = await handler.get_group("g1")

    assert res.status_code == 200
    assert _body(res)["data"] == {"id": "g1", "name": "Engineering"}
    assert fake_service.calls == [("get_group", "g1")]


async def test_update_group_forwards_decoded_request(handler, fake_service):
    res = await handler.update_group("g1", b'{"name": "Platform"}')

    assert res.status_code == 200
    assert _body(res)["message"] == "Group updated successfully"
    assert _body(res)["data"] == {"id": "g1", "name": "Platform"}
    assert fake_service.calls == [
        ("update_group", "g1", UpdateGroupRequest(name="Platform")),
    ]


async def test_update_group_accepts_empty_object(handler, fake_service):
    res = await handler.update_group("g1", b"{}")

    assert res.status_code == 200
    assert fake_service.calls[0][2].model_fields_set == set()


async def test_delete_group_has_null_payload(handler, fake_service):
    res = await handler.delete_group("g1")

    assert res.status_code == 200
    assert _body(res) == {
        "status": "success",
        "message": "Group deleted successfully",
        "data": None,
    }
    assert fake_service.calls == [("delete_group", "g1")]


async def test_get_group_members_returns_members(handler):
    res = await handler.get_group_members("g1")

    assert res.status_code == 200
    assert _body(res)["data"] == [
        {"group_id": "g1", "user_id": "u1"},
        {"group_id": "g1", "user_id": "u2"},
    ]


async def test_add_user_to_group(handler, fake_service):
    res = await handler.add_user_to_group("g1", "u1")

    assert res.status_code == 200
    assert _body(res)["message"] == "User added to group successfully"
    assert _body(res)["data"] is None
    assert fake_service.calls == [("add_user_to_group", "g1", "u1")]


async def test_remove_user_from_group(handler, fake_service):
    res = await handler.remove_user_from_group("g1", "u1")

    assert res.status_code == 200
    assert _body(res)["message"] == "User removed from group successfully"
    assert fake_service.calls == [("remove_user_from_group", "g1", "u1")]


# ─── Service failures ───────────────────────────────────────────

@pytest.mark.parametrize("operation,args,message", [
    ("create_group", (b'{"name": "Engineering"}',), "Failed to create group"),
    ("get_groups", (), "Failed to retrieve groups"),
    ("get_group", ("g1",), "Failed to retrieve group"),
    ("update_group", ("g1", b'{"name": "x"}'), "Failed to update group"),
    ("delete_group", ("g1",), "Failed to delete group"),
    ("get_group_members", ("g1",), "Failed to retrieve group members"),
    ("add_user_to_group", ("g1", "u1"), "Failed to add user to group"),
    ("remove_user_from_group", ("g1", "u1"), "Failed to remove user from group"),
])
async def test_service_failure_maps_to_500(
    handler, fake_service, operation, args, message,
):
    fake_service.errors[operation] = RuntimeError("connection reset by peer")

    res = await getattr(handler, operation)(*args)

    assert res.status_code == 500
    assert _body(res) == {
        "status": "error",
        "code": "API_ERROR",
        "message": message,
        "details": None,
    }
    assert len(fake_service.calls) == 1


async def test_service_error_detail_is_logged_not_returned(
    handler, fake_service, caplog,
):
    fake_service.errors["delete_group"] = RuntimeError("secret table gone")

    with caplog.at_level(logging.ERROR, logger="tests.group_handler"):
        res = await handler.delete_group("g1")

    assert "secret table gone" in caplog.text
    assert b"secret table gone" not in res.body


async def test_success_is_logged_with_group_id(handler, caplog):
    with caplog.at_level(logging.INFO, logger="tests.group_handler"):
        await handler.get_group("g1")

    records = [r for r in caplog.records if r.getMessage() == "Group retrieved successfully"]
    assert records and records[0].group_id == "g1"


async def test_payload_none_fields_survive(handler, fake_service):
    fake_service.results["get_group"] = {"id": "g1", "name": "E", "description": None}

    res = await handler.get_group("g1")

    assert _body(res) == {
        "status": "success",
        "message": "Success",
        "data": {"id": "g1", "name": "E", "description": None},
    }


async def test_error_response_logs_context_ids(handler, fake_service, caplog):
    fake_service.errors["add_user_to_group"] = RuntimeError("boom")

    with caplog.at_level(logging.ERROR, logger="tests.group_handler"):
        await handler.add_user_to_group("g1", "u1")

    summary = [r for r in caplog.records if r.getMessage().startswith("Responding with 500")]
    assert len(summary) == 1
    assert summary[0].group_id == "g1"
    assert summary[0].user_id == "u1"
    assert summary[0].error_code == "API_ERROR"


async def test_client_error_logged_as_warning(handler, caplog):
    with caplog.at_level(logging.WARNING, logger="tests.group_handler"):
        await handler.get_group("")

    summary = [r for r in caplog.records if r.getMessage().startswith("Responding with 400")]
    assert summary and summary[0].levelno == logging.WARNING
