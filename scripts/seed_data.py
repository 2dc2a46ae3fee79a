#!/usr/bin/env python3
"""
Seed script: creates products via the API (no direct DB), so every product
goes through validation, cache invalidation and metrics like a real client.
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --count 200 --base-url http://localhost:8000/api/v1
"""

import argparse
import random
from datetime import datetime, timedelta, timezone

import httpx

API_BASE = "http://localhost:8000/api/v1"

# (category, names, brands, price range) - names already satisfy the category rules
CATALOG = [
    (
        "Electronics",
        ["Wireless Headphones", "Smart Watch", "Bluetooth Speaker", "4K Monitor", "USB Charger", "Digital Camera"],
        ["Tech Innovations", "Sonic Labs", "Pixel Works"],
        (50, 900),
    ),
    (
        "Clothing",
        ["Rain Jacket", "Wool Sweater", "Running Shorts", "Denim Jeans", "Linen Shirt"],
        ["Northwind Apparel", "Urban Thread", "Kelp and Co."],
        (10, 300),
    ),
    (
        "Books",
        ["Python Patterns", "Distributed Systems Notes", "The Data Handbook", "Clean Services"],
        ["Oak Press", "Lantern Books"],
        (5, 120),
    ),
    (
        "Home",
        ["Office Chair", "Table Lamp", "Ceramic Vase", "Garden Bench", "Wall Clock"],
        ["Furniture Plus", "Casa Verde"],
        (15, 480),
    ),
]


def random_product(index: int) -> dict:
    category, names, brands, (low, high) = random.choice(CATALOG)
    prefix = category[:4].upper()
    released = datetime.now(timezone.utc) - timedelta(days=random.randint(1, 4 * 365))
    return {
        "name": f"{random.choice(names)} {index}",
        "brand": random.choice(brands),
        "sku": f"{prefix}-{index:06d}",
        "category": category,
        "price": f"{random.uniform(low, high):.2f}",
        "releaseDate": released.isoformat(),
        "imageUrl": f"https://images.example.com/{prefix.lower()}/{index}.jpg",
        "stockQuantity": random.choice([0, 1, 3, 12, 40, 90]),
    }


def already_seeded(response: httpx.Response) -> bool:
    """SKU taken by a previous run: a 400 with a sku error, or a 409 from a racing create."""
    if response.status_code == 409:
        return True
    if response.status_code != 400:
        return False
    errors = response.json().get("errors", [])
    return any(e.get("field") == "sku" for e in errors)


def main():
    ap = argparse.ArgumentParser(description="Seed products via API")
    ap.add_argument("--count", type=int, default=50, help="Number of products to create")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created = 0
    skipped = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Creating {args.count} products...")
        for i in range(args.count):
            payload = random_product(i + 1)
            try:
                r = client.post("/products", json=payload)
                if r.status_code == 201:
                    created += 1
                elif already_seeded(r):
                    skipped += 1
                else:
                    errors.append(f"Product {payload['sku']}: {r.status_code} {r.text[:120]}")
            except httpx.HTTPError as e:
                errors.append(f"Product {payload['sku']}: {e}")
            if (i + 1) % 10 == 0:
                print(f"  ... {i + 1} attempted, {created} created")

    print(f"\nDone. Products created: {created}, already seeded: {skipped}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
