"""
BDD step definitions for the inventory feature (pytest-bdd).
Challenge: Express requirements in Gherkin; map to HTTP calls.
Each request commits its own transaction, like production.
"""

import pytest
from fastapi.testclient import TestClient
from pytest_bdd import given, parsers, scenarios, then, when

API = "/api/v1"

# Load all scenarios from the feature file
scenarios("../features/inventory.feature")


@pytest.fixture
def ctx():
    """Tokens, created entity ids and the last response, shared between steps."""
    return {"tokens": {}, "items": {}, "locations": {}, "response": None}


def _headers(ctx, username: str) -> dict:
    return {"Authorization": f"Bearer {ctx['tokens'][username]}"}


@given(parsers.parse('a registered user "{username}" with email "{email}" and password "{password}"'))
def registered_user(bdd_client: TestClient, ctx, username, email, password):
    r = bdd_client.post(
        f"{API}/auth/register", json={"username": username, "email": email, "password": password}
    )
    assert r.status_code == 200, r.text
    ctx["tokens"][username] = r.json()["token"]


@given(parsers.parse('"{username}" created an item "{name}" priced {price}'))
def created_item(bdd_client: TestClient, ctx, username, name, price):
    r = bdd_client.post(
        f"{API}/items", headers=_headers(ctx, username), json={"name": name, "price": float(price)}
    )
    assert r.status_code == 201, r.text
    ctx["items"][name] = r.json()["id"]


@given(parsers.parse('"{username}" created a location "{name}" of type "{location_type}"'))
def created_location(bdd_client: TestClient, ctx, username, name, location_type):
    r = bdd_client.post(
        f"{API}/locations",
        headers=_headers(ctx, username),
        json={"name": name, "location_type": location_type},
    )
    assert r.status_code == 201, r.text
    ctx["locations"][name] = r.json()["id"]


def _assign(bdd_client: TestClient, ctx, username, item, location, quantity):
    return bdd_client.post(
        f"{API}/itemlocations",
        headers=_headers(ctx, username),
        json={
            "item_id": ctx["items"][item],
            "location_id": ctx["locations"][location],
            "quantity": int(quantity),
        },
    )


@given(parsers.parse('"{username}" assigned "{item}" to "{location}" with quantity {quantity}'))
def assigned(bdd_client: TestClient, ctx, username, item, location, quantity):
    r = _assign(bdd_client, ctx, username, item, location, quantity)
    assert r.status_code == 201, r.text


@when(parsers.parse('"{username}" assigns "{item}" to "{location}" with quantity {quantity}'))
def assigns(bdd_client: TestClient, ctx, username, item, location, quantity):
    ctx["response"] = _assign(bdd_client, ctx, username, item, location, quantity)


@when(parsers.parse('"{username}" requests the item "{name}"'))
def requests_item(bdd_client: TestClient, ctx, username, name):
    ctx["response"] = bdd_client.get(f"{API}/items/{ctx['items'][name]}", headers=_headers(ctx, username))


def _set_parent(bdd_client: TestClient, ctx, username, child, parent):
    return bdd_client.put(
        f"{API}/locations/{ctx['locations'][child]}",
        headers=_headers(ctx, username),
        json={"parent_location_id": ctx["locations"][parent]},
    )


@given(parsers.parse('"{username}" set the parent of "{child}" to "{parent}"'))
def parent_set(bdd_client: TestClient, ctx, username, child, parent):
    r = _set_parent(bdd_client, ctx, username, child, parent)
    assert r.status_code == 200, r.text


@when(parsers.parse('"{username}" sets the parent of "{child}" to "{parent}"'))
def sets_parent(bdd_client: TestClient, ctx, username, child, parent):
    ctx["response"] = _set_parent(bdd_client, ctx, username, child, parent)


@then(parsers.parse("the response status should be {status:d}"))
def response_status(ctx, status):
    assert ctx["response"].status_code == status, ctx["response"].text


@then(parsers.parse('the assignments of "{item}" seen by "{username}" are exactly one with quantity {quantity:d}'))
def assignments_of_item(bdd_client: TestClient, ctx, item, username, quantity):
    r = bdd_client.get(f"{API}/itemlocations/byitem/{ctx['items'][item]}", headers=_headers(ctx, username))
    assert r.status_code == 200
    rows = r.json()
    assert len(rows) == 1
    assert rows[0]["quantity"] == quantity


@then(parsers.parse('the location "{name}" seen by "{username}" has no parent'))
def location_has_no_parent(bdd_client: TestClient, ctx, name, username):
    r = bdd_client.get(f"{API}/locations/{ctx['locations'][name]}", headers=_headers(ctx, username))
    assert r.status_code == 200
    assert r.json()["parent_location_id"] is None
