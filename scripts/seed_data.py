#!/usr/bin/env python3
"""
Seed script: creates items via the API (no direct DB) and optionally warms the translation cache.
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --owners 10 --items-per-owner 20 --languages fr,de
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:8000/api/v1"

NAMES = [
    "Gaming Laptop", "Mechanical Keyboard", "Wireless Mouse", "Bluetooth Headphones",
    "27-inch Monitor", "HD Webcam", "USB-C Cable", "Laptop Stand", "Coffee Maker",
    "Electric Kettle", "Air Fryer", "Smart Watch", "Power Bank", "External Drive",
    "Ring Light", "Tripod", "Streaming Mic", "Graphics Tablet", "Backpack",
]

CATEGORIES = ["electronics", "kitchen", "accessories", "office"]
STATUSES = ["active", "active", "active", "sold", "archived"]

DESCRIPTIONS = [
    "High-performance gaming laptop",
    "Great for home office and remote work.",
    "High quality build and reliable performance.",
    "Popular choice for developers and designers.",
    "Ergonomic and comfortable for long sessions.",
    "Long-lasting battery with fast charging.",
    "Ideal for streaming and online meetings.",
]


def random_price() -> float:
    return random.choice([9.99, 19.99, 49.99, 99.0, 199.0, 499.5, 999.99, 1499.0])


def main():
    ap = argparse.ArgumentParser(description="Seed items via API")
    ap.add_argument("--owners", type=int, default=5, help="Number of owners")
    ap.add_argument("--items-per-owner", type=int, default=10, help="Items per owner")
    ap.add_argument("--languages", default="", help="Comma-separated languages to pre-translate, e.g. fr,de")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    languages = [code for code in args.languages.split(",") if code]
    created = 0
    translated = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Creating {args.owners * args.items_per_owner} items...")
        for o in range(args.owners):
            owner_id = f"user{o + 1}"
            for i in range(args.items_per_owner):
                item_id = f"item{i + 1}"
                try:
                    r = client.post("/items", json={
                        "ownerId": owner_id,
                        "itemId": item_id,
                        "name": random.choice(NAMES),
                        "category": random.choice(CATEGORIES),
                        "price": random_price(),
                        "itemStatus": random.choice(STATUSES),
                        "description": random.choice(DESCRIPTIONS),
                    })
                    if r.status_code == 201:
                        created += 1
                    elif r.status_code != 409:
                        errors.append(f"Create {owner_id}/{item_id}: {r.status_code} {r.text[:80]}")
                        continue
                    for language in languages:
                        t = client.get(f"/items/{owner_id}/{item_id}/translation", params={"language": language})
                        if t.status_code == 200:
                            translated += 1
                        else:
                            errors.append(f"Translate {owner_id}/{item_id} {language}: {t.status_code}")
                except httpx.HTTPError as e:
                    errors.append(f"{owner_id}/{item_id}: {e}")
            print(f"  {owner_id}: done (items created so far: {created})")

    print(f"\nDone. Items created: {created}, translations requested: {translated}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
