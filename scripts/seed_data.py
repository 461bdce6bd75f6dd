#!/usr/bin/env python3
"""
Seed script: creates users, a small location tree per user, items and assignments via the API (no direct DB).
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --users 10 --items-per-user 30
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:8000/api/v1"

ITEM_NAMES = [
    "MacBook Pro", "Mechanical keyboard", "Wireless mouse", "Bluetooth headphones",
    "27in monitor", "HD webcam", "USB-C cable", "Power bank", "External drive",
    "Laptop stand", "Coffee maker", "Electric kettle", "Blender", "Air fryer",
    "Backpack", "Graphics tablet", "USB microphone", "Ring light", "Tripod",
]

DESCRIPTIONS = [
    "Good for home office and remote work.",
    "High quality build and reliable performance.",
    "Spare unit, keep sealed.",
    None,
]

# (name, type, parent index or None): parents are created before children
LOCATION_TREE = [
    ("Home", "Building", None),
    ("Office", "Room", 0),
    ("Garage", "Room", 0),
    ("Desk drawer", "Drawer", 1),
    ("Shelf A", "Shelf", 2),
    ("Shelf B", "Shelf", 2),
]


def random_price() -> float:
    return random.choice([0, 9.99, 19.5, 49.99, 99, 199.99, 499, 1299.99])


def seed_user(client: httpx.Client, i: int, items_per_user: int, errors: list[str]) -> tuple[int, int]:
    """Register (or log in) one user and fill their inventory. Returns (items, assignments)."""
    username = f"user{i + 1}"
    password = "password123"
    r = client.post(
        "/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": password},
    )
    if r.status_code != 200:
        # Already exists from an earlier run: reuse same creds
        r = client.post("/auth/login", json={"username": username, "password": password})
        if r.status_code != 200:
            errors.append(f"Login {username}: {r.status_code} {r.text[:80]}")
            return 0, 0
    headers = {"Authorization": f"Bearer {r.json()['token']}"}

    location_ids: list[int] = []
    for name, location_type, parent in LOCATION_TREE:
        body = {"name": name, "location_type": location_type}
        if parent is not None:
            body["parent_location_id"] = location_ids[parent]
        r = client.post("/locations", headers=headers, json=body)
        if r.status_code != 201:
            errors.append(f"Location {username}/{name}: {r.status_code}")
            return 0, 0
        location_ids.append(r.json()["id"])

    items = assignments = 0
    for n in range(items_per_user):
        r = client.post(
            "/items",
            headers=headers,
            json={
                "name": random.choice(ITEM_NAMES),
                "price": random_price(),
                "description": random.choice(DESCRIPTIONS),
                "sku": f"SKU-{i + 1:03d}-{n + 1:04d}",
            },
        )
        if r.status_code != 201:
            errors.append(f"Item {username}: {r.status_code}")
            continue
        items += 1
        item_id = r.json()["id"]
        for location_id in random.sample(location_ids, k=random.randint(1, 2)):
            r = client.post(
                "/itemlocations",
                headers=headers,
                json={"item_id": item_id, "location_id": location_id, "quantity": random.randint(0, 20)},
            )
            if r.status_code == 201:
                assignments += 1
            else:
                errors.append(f"Assign {username}: {r.status_code}")
    return items, assignments


def main():
    ap = argparse.ArgumentParser(description="Seed users, locations, items and assignments via API")
    ap.add_argument("--users", type=int, default=5, help="Number of users to create")
    ap.add_argument("--items-per-user", type=int, default=20, help="Items per user")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    errors: list[str] = []
    total_items = total_assignments = 0

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Seeding {args.users} users...")
        for i in range(args.users):
            try:
                items, assignments = seed_user(client, i, args.items_per_user, errors)
            except httpx.HTTPError as e:
                errors.append(f"user{i + 1}: {e}")
                continue
            total_items += items
            total_assignments += assignments
            print(f"  user{i + 1}: +{items} items, +{assignments} assignments")

    print(f"\nDone. Items created: {total_items}, assignments created: {total_assignments}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
