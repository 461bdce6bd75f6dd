"""
Item API tests - REST CRUD, ownership and validation (TDD).
Challenge: Ensure endpoints return correct status codes and shape.
"""

import pytest
from httpx import AsyncClient

ITEMS = "/api/v1/items"


async def _create_item(client: AsyncClient, headers: dict, **fields) -> dict:
    body = {"name": "Widget", "price": 10.50, "description": "Desc", "sku": "W-1"}
    body.update(fields)
    response = await client.post(ITEMS, headers=headers, json=body)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_list_items_requires_auth(client: AsyncClient):
    response = await client.get(ITEMS)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_item_requires_auth(client: AsyncClient):
    response = await client.post(ITEMS, json={"name": "Foo", "price": 1})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_item_with_auth(client: AsyncClient, auth_headers: dict, test_user):
    """POST /api/v1/items with valid token creates item and returns 201."""
    data = await _create_item(client, auth_headers)
    assert data["name"] == "Widget"
    assert data["price"] == 10.5
    assert data["sku"] == "W-1"
    assert data["owner_id"] == test_user.id
    assert data["version"] == 1
    assert data["created_at"] == data["updated_at"]
    assert "id" in data


@pytest.mark.asyncio
async def test_create_item_ignores_client_owner(client: AsyncClient, auth_headers, test_user, other_user):
    data = await _create_item(client, auth_headers, owner_id=other_user.id)
    assert data["owner_id"] == test_user.id


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"price": 1},
        {"name": "", "price": 1},
        {"name": "x" * 201, "price": 1},
        {"name": "Foo", "price": -0.01},
        {"name": "Foo", "price": 1, "sku": "s" * 51},
        {"name": "Foo", "price": 1, "description": "d" * 1001},
    ],
)
async def test_create_item_validation(client: AsyncClient, auth_headers, body):
    response = await client.post(ITEMS, headers=auth_headers, json=body)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_only_own_items(client: AsyncClient, auth_headers, other_headers):
    await _create_item(client, auth_headers, name="Mine")
    await _create_item(client, other_headers, name="Theirs")
    response = await client.get(ITEMS, headers=auth_headers)
    assert response.status_code == 200
    assert [i["name"] for i in response.json()] == ["Mine"]


@pytest.mark.asyncio
async def test_list_items_pagination(client: AsyncClient, auth_headers):
    for n in range(3):
        await _create_item(client, auth_headers, name=f"Item {n}")
    response = await client.get(ITEMS, headers=auth_headers, params={"skip": 1, "limit": 1})
    assert [i["name"] for i in response.json()] == ["Item 1"]


@pytest.mark.asyncio
async def test_get_item(client: AsyncClient, auth_headers):
    created = await _create_item(client, auth_headers)
    response = await client.get(f"{ITEMS}/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {**created, "item_locations": []}


@pytest.mark.asyncio
async def test_other_user_gets_404(client: AsyncClient, auth_headers, other_headers):
    created = await _create_item(client, auth_headers)
    url = f"{ITEMS}/{created['id']}"
    assert (await client.get(url, headers=other_headers)).status_code == 404
    assert (await client.put(url, headers=other_headers, json={"name": "Hijack"})).status_code == 404
    assert (await client.delete(url, headers=other_headers)).status_code == 404
    # Unknown id looks exactly the same
    missing = await client.get(f"{ITEMS}/999999", headers=other_headers)
    assert missing.status_code == 404
    assert missing.json() == (await client.get(url, headers=other_headers)).json()


@pytest.mark.asyncio
async def test_update_item_partial(client: AsyncClient, auth_headers):
    created = await _create_item(client, auth_headers)
    response = await client.put(
        f"{ITEMS}/{created['id']}", headers=auth_headers, json={"name": "Gadget", "sku": None}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Gadget"
    assert data["sku"] is None
    assert data["description"] == "Desc"
    assert data["price"] == 10.5
    assert data["version"] == 2


@pytest.mark.asyncio
async def test_update_item_rejects_null_name(client: AsyncClient, auth_headers):
    created = await _create_item(client, auth_headers)
    response = await client.put(f"{ITEMS}/{created['id']}", headers=auth_headers, json={"name": None})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_item_stale_version(client: AsyncClient, auth_headers):
    created = await _create_item(client, auth_headers)
    url = f"{ITEMS}/{created['id']}"
    first = await client.put(url, headers=auth_headers, json={"price": 11, "version": 1})
    assert first.status_code == 200
    stale = await client.put(url, headers=auth_headers, json={"price": 12, "version": 1})
    assert stale.status_code == 409
    assert (await client.get(url, headers=auth_headers)).json()["price"] == 11


@pytest.mark.asyncio
async def test_delete_item(client: AsyncClient, auth_headers):
    created = await _create_item(client, auth_headers)
    url = f"{ITEMS}/{created['id']}"
    assert (await client.delete(url, headers=auth_headers)).status_code == 204
    assert (await client.get(url, headers=auth_headers)).status_code == 404
    assert (await client.delete(url, headers=auth_headers)).status_code == 404


@pytest.mark.asyncio
async def test_delete_item_cascades_assignments(client: AsyncClient, auth_headers):
    item = await _create_item(client, auth_headers)
    keep = await _create_item(client, auth_headers, name="Keep")
    loc = (await client.post("/api/v1/locations", headers=auth_headers, json={"name": "Shelf"})).json()
    for it in (item, keep):
        r = await client.post(
            "/api/v1/itemlocations",
            headers=auth_headers,
            json={"item_id": it["id"], "location_id": loc["id"], "quantity": 2},
        )
        assert r.status_code == 201

    assert (await client.delete(f"{ITEMS}/{item['id']}", headers=auth_headers)).status_code == 204

    remaining = (await client.get("/api/v1/itemlocations", headers=auth_headers)).json()
    assert [r["item_id"] for r in remaining] == [keep["id"]]
    assert (await client.get(f"/api/v1/locations/{loc['id']}", headers=auth_headers)).status_code == 200
