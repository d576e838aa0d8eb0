"""
Tests for the card API: CRUD contract, update allow-list, ownership scoping.
"""


async def create(client, headers, **fields):
    payload = {"title": "Write spec", "boardId": "todo", **fields}
    res = await client.post("/api/cards", json=payload, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


async def list_all(client, headers):
    res = await client.get("/api/cards", headers=headers)
    assert res.status_code == 200
    return res.json()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Create
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


async def test_create_card_returns_record(client, auth_headers):
    card = await create(
        client,
        auth_headers,
        description="Draft the API contract",
        dueDate="2024-05-01",
        assignee="sam",
    )
    assert isinstance(card["id"], int)
    assert card["title"] == "Write spec"
    assert card["boardId"] == "todo"
    assert card["dueDate"] == "2024-05-01"
    assert card["assignee"] == "sam"
    assert card["priority"] == "Medium"
    assert card["createdAt"] is not None
    assert card["updatedAt"] is not None


async def test_create_card_stamps_owner_from_token(client, auth_headers):
    me = (await client.get("/api/auth/me", headers=auth_headers)).json()
    card = await create(client, auth_headers, ownerId=me["id"] + 100)
    assert card["ownerId"] == me["id"]


async def test_create_card_accepts_any_board_id(client, auth_headers):
    card = await create(client, auth_headers, boardId="archive")
    assert card["boardId"] == "archive"


async def test_create_without_title_fails_and_persists_nothing(client, auth_headers):
    res = await client.post("/api/cards", json={"boardId": "todo"}, headers=auth_headers)
    assert res.status_code == 400
    assert "title" in res.json()["message"]
    assert await list_all(client, auth_headers) == []


async def test_create_without_board_id_fails_and_persists_nothing(client, auth_headers):
    res = await client.post("/api/cards", json={"title": "Orphan"}, headers=auth_headers)
    assert res.status_code == 400
    assert "boardId" in res.json()["message"]
    assert await list_all(client, auth_headers) == []


async def test_create_with_blank_title_fails(client, auth_headers):
    res = await client.post(
        "/api/cards", json={"title": "   ", "boardId": "todo"}, headers=auth_headers
    )
    assert res.status_code == 400
    assert await list_all(client, auth_headers) == []


async def test_create_rejects_unknown_priority(client, auth_headers):
    res = await client.post(
        "/api/cards",
        json={"title": "x", "boardId": "todo", "priority": "Urgent"},
        headers=auth_headers,
    )
    assert res.status_code == 400


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Update
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


async def test_update_applies_only_allowed_fields(client, auth_headers):
    card = await create(client, auth_headers, priority="High")
    res = await client.put(
        f"/api/cards/{card['id']}",
        json={
            **card,
            "title": "Write full spec",
            "description": "now with examples",
            "dueDate": "2024-06-01",
            "assignee": "kim",
            "boardId": "inProgress",
            "priority": "Low",
            "ownerId": 999,
            "createdAt": "2000-01-01T00:00:00Z",
        },
        headers=auth_headers,
    )
    assert res.status_code == 200, res.text
    updated = res.json()

    assert updated["id"] == card["id"]
    assert updated["title"] == "Write full spec"
    assert updated["description"] == "now with examples"
    assert updated["dueDate"] == "2024-06-01"
    assert updated["assignee"] == "kim"
    assert updated["boardId"] == "inProgress"
    # Not part of the update contract
    assert updated["priority"] == "High"
    assert updated["ownerId"] == card["ownerId"]
    assert updated["createdAt"] == card["createdAt"]


async def test_update_leaves_omitted_fields_alone(client, auth_headers):
    card = await create(client, auth_headers, description="keep me")
    res = await client.put(
        f"/api/cards/{card['id']}", json={"boardId": "done"}, headers=auth_headers
    )
    assert res.status_code == 200
    assert res.json()["title"] == "Write spec"
    assert res.json()["description"] == "keep me"


async def test_update_null_clears_optional_field(client, auth_headers):
    card = await create(client, auth_headers, assignee="sam")
    res = await client.put(
        f"/api/cards/{card['id']}", json={"assignee": None}, headers=auth_headers
    )
    assert res.status_code == 200
    assert res.json()["assignee"] is None


async def test_update_rejects_empty_title(client, auth_headers):
    card = await create(client, auth_headers)
    res = await client.put(
        f"/api/cards/{card['id']}", json={"title": ""}, headers=auth_headers
    )
    assert res.status_code == 400
    assert (await list_all(client, auth_headers))[0]["title"] == "Write spec"


async def test_update_unknown_id_is_not_found(client, auth_headers):
    card = await create(client, auth_headers)
    res = await client.put(
        "/api/cards/9999", json={"title": "ghost", "boardId": "done"}, headers=auth_headers
    )
    assert res.status_code == 404
    assert res.json()["message"] == "Card not found"
    assert await list_all(client, auth_headers) == [card]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Delete
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


async def test_delete_twice(client, auth_headers):
    card = await create(client, auth_headers)

    res = await client.delete(f"/api/cards/{card['id']}", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"message": "Card deleted"}
    assert await list_all(client, auth_headers) == []

    res = await client.delete(f"/api/cards/{card['id']}", headers=auth_headers)
    assert res.status_code == 404


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# End to end
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


async def test_create_move_delete(client, auth_headers):
    card = await create(client, auth_headers)
    cards = await list_all(client, auth_headers)
    assert [c["id"] for c in cards if c["boardId"] == "todo"] == [card["id"]]

    res = await client.put(
        f"/api/cards/{card['id']}", json={**card, "boardId": "done"}, headers=auth_headers
    )
    assert res.status_code == 200

    cards = await list_all(client, auth_headers)
    assert [c["id"] for c in cards if c["boardId"] == "done"] == [card["id"]]
    assert [c for c in cards if c["boardId"] == "todo"] == []

    res = await client.delete(f"/api/cards/{card['id']}", headers=auth_headers)
    assert res.status_code == 200
    assert await list_all(client, auth_headers) == []


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Ownership scoping
# Cards are private to their owner; someone else's card behaves like an
# unknown id.
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


async def test_list_only_shows_own_cards(client, auth_headers, other_headers):
    await create(client, auth_headers, title="alice's")
    await create(client, other_headers, title="bob's")

    assert [c["title"] for c in await list_all(client, auth_headers)] == ["alice's"]
    assert [c["title"] for c in await list_all(client, other_headers)] == ["bob's"]


async def test_cannot_update_or_delete_others_card(client, auth_headers, other_headers):
    card = await create(client, auth_headers)

    res = await client.put(
        f"/api/cards/{card['id']}", json={"title": "hijacked"}, headers=other_headers
    )
    assert res.status_code == 404
    res = await client.delete(f"/api/cards/{card['id']}", headers=other_headers)
    assert res.status_code == 404

    assert await list_all(client, auth_headers) == [card]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Stats
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


async def test_stats_counts_per_column(client, auth_headers, other_headers):
    await create(client, auth_headers)
    await create(client, auth_headers, boardId="inProgress")
    await create(client, auth_headers, boardId="inProgress")
    await create(client, auth_headers, boardId="archive")
    await create(client, other_headers, boardId="done")

    res = await client.get("/api/system/stats", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"todo": 1, "inProgress": 2, "done": 0, "total": 4}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Unexpected persistence failures
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


async def test_database_error_surfaces_raw_message(client, auth_headers, monkeypatch):
    from sqlalchemy.exc import OperationalError
    from taskboard.db import crud

    card = await create(client, auth_headers)

    async def broken_update(*args, **kwargs):
        raise OperationalError("UPDATE cards", {}, Exception("database is locked"))

    monkeypatch.setattr(crud, "update_card", broken_update)
    res = await client.put(
        f"/api/cards/{card['id']}", json={"boardId": "done"}, headers=auth_headers
    )
    assert res.status_code == 500
    assert "database is locked" in res.json()["message"]


async def test_openapi_schema_lists_card_routes(client):
    res = await client.get("/openapi.json")
    assert res.status_code == 200
    paths = res.json()["paths"]
    assert "/api/cards" in paths
    assert "/api/cards/{card_id}" in paths
    assert "/api/system/docs.json" not in paths
    assert (await client.get("/api/system/docs.json")).status_code == 404
