"""Integration tests for the study group endpoints."""

import pytest
from httpx import AsyncClient

from studysync.domain.services import JoinCodeGenerator


async def _create_group(client: AsyncClient, user: dict, name: str, **fields) -> dict:
    res = await client.post(
        "/api/groups", json={"name": name, **fields}, headers=user["headers"]
    )
    assert res.status_code == 201, res.text
    return res.json()


@pytest.mark.asyncio
async def test_create_requires_auth(client: AsyncClient):
    res = await client.post("/api/groups", json={"name": "Algorithms"})
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_create_private_group(client: AsyncClient, register):
    alice = await register("alice")

    group = await _create_group(client, alice, "Algorithms", description="Weekly sets")

    assert group["is_private"] is True
    assert JoinCodeGenerator.validate(group["join_code"])
    assert group["creator"]["id"] == alice["id"]
    assert [m["id"] for m in group["members"]] == [alice["id"]]
    assert "password_hash" not in group["creator"]


@pytest.mark.asyncio
async def test_create_duplicate_name_conflicts(client: AsyncClient, register):
    alice = await register("alice")
    await _create_group(client, alice, "Algorithms")

    res = await client.post(
        "/api/groups", json={"name": "Algorithms"}, headers=alice["headers"]
    )

    assert res.status_code == 409


@pytest.mark.asyncio
async def test_create_short_name_rejected(client: AsyncClient, register):
    alice = await register("alice")

    res = await client.post("/api/groups", json={"name": "  ab "}, headers=alice["headers"])

    assert res.status_code == 400
    assert res.json()["details"][0]["field"] == "name"


@pytest.mark.asyncio
async def test_listing_visibility(client: AsyncClient, register):
    alice = await register("alice")
    bob = await register("bob")
    private = await _create_group(client, alice, "Alice Private")
    public = await _create_group(client, alice, "Alice Public", is_private=False)

    anonymous = await client.get("/api/groups")
    as_bob = await client.get("/api/groups", headers=bob["headers"])
    as_alice = await client.get("/api/groups", headers=alice["headers"])

    assert [g["id"] for g in anonymous.json()] == [public["id"]]
    assert [g["id"] for g in as_bob.json()] == [public["id"]]
    assert [g["id"] for g in as_alice.json()] == [public["id"], private["id"]]


@pytest.mark.asyncio
async def test_invalid_token_on_optional_endpoint_is_rejected(client: AsyncClient):
    res = await client.get("/api/groups", headers={"Authorization": "Bearer garbage"})
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_get_private_group_requires_membership(client: AsyncClient, register):
    alice = await register("alice")
    bob = await register("bob")
    group = await _create_group(client, alice, "Algorithms")

    assert (await client.get(f"/api/groups/{group['id']}")).status_code == 403
    assert (
        await client.get(f"/api/groups/{group['id']}", headers=bob["headers"])
    ).status_code == 403
    assert (
        await client.get(f"/api/groups/{group['id']}", headers=alice["headers"])
    ).status_code == 200


@pytest.mark.asyncio
async def test_get_unknown_and_malformed_group(client: AsyncClient):
    missing = await client.get("/api/groups/00000000-0000-0000-0000-000000000000")
    malformed = await client.get("/api/groups/not-an-id")

    assert missing.status_code == 404
    assert missing.json()["message"] == "Study group not found."
    assert malformed.status_code == 400


@pytest.mark.asyncio
async def test_join_and_leave(client: AsyncClient, register):
    alice = await register("alice")
    bob = await register("bob")
    group = await _create_group(client, alice, "Algorithms")
    url = f"/api/groups/{group['id']}"

    wrong = await client.post(f"{url}/join", json={"join_code": "WRONGCOD"}, headers=bob["headers"])
    assert wrong.status_code == 403

    joined = await client.post(
        f"{url}/join", json={"join_code": group["join_code"]}, headers=bob["headers"]
    )
    assert joined.status_code == 200
    assert joined.json()["message"] == "Successfully joined the group!"
    assert [m["id"] for m in joined.json()["group"]["members"]] == [alice["id"], bob["id"]]

    again = await client.post(
        f"{url}/join", json={"join_code": group["join_code"]}, headers=bob["headers"]
    )
    assert again.status_code == 400

    left = await client.post(f"{url}/leave", headers=bob["headers"])
    assert left.status_code == 200
    assert left.json()["message"] == "Successfully left the group!"
    assert [m["id"] for m in left.json()["group"]["members"]] == [alice["id"]]

    not_member = await client.post(f"{url}/leave", headers=bob["headers"])
    assert not_member.status_code == 400

    sole_creator = await client.post(f"{url}/leave", headers=alice["headers"])
    assert sole_creator.status_code == 403


@pytest.mark.asyncio
async def test_join_public_group_without_body(client: AsyncClient, register):
    alice = await register("alice")
    bob = await register("bob")
    group = await _create_group(client, alice, "Open Study", is_private=False)

    res = await client.post(f"/api/groups/{group['id']}/join", headers=bob["headers"])

    assert res.status_code == 200


@pytest.mark.asyncio
async def test_update_group(client: AsyncClient, register):
    alice = await register("alice")
    bob = await register("bob")
    group = await _create_group(client, alice, "Open Study", is_private=False)
    url = f"/api/groups/{group['id']}"
    await client.post(f"{url}/join", headers=bob["headers"])

    forbidden = await client.put(url, json={"name": "Taken Over"}, headers=bob["headers"])
    assert forbidden.status_code == 403

    res = await client.put(
        url, json={"description": "Now private", "is_private": True}, headers=alice["headers"]
    )
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Open Study"
    assert body["description"] == "Now private"
    assert JoinCodeGenerator.validate(body["join_code"])

    res = await client.put(url, json={"is_private": False}, headers=alice["headers"])
    assert res.json()["join_code"] is None


@pytest.mark.asyncio
async def test_delete_group(client: AsyncClient, register):
    alice = await register("alice")
    bob = await register("bob")
    group = await _create_group(client, alice, "Open Study", is_private=False)
    url = f"/api/groups/{group['id']}"
    await client.post(f"{url}/join", headers=bob["headers"])

    assert (await client.delete(url, headers=bob["headers"])).status_code == 403

    res = await client.delete(url, headers=alice["headers"])
    assert res.status_code == 200
    assert res.json() == {"message": "Study group deleted successfully."}
    assert (await client.get(url)).status_code == 404
