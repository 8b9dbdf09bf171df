#!/usr/bin/env python3
"""
Seed script: creates sellers, buyers, listings and a few requests via the API (no direct DB).
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --sellers 10 --listings-per-seller 20
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:8000/api/v1"
PASSWORD = "password123"

PARTS = [
    ("Turbo", "T-100"), ("Alternator", "ALT-220"), ("Starter motor", "ST-45"),
    ("Radiator", "RAD-9"), ("Fuel injector", "INJ-3"), ("Water pump", "WP-12"),
    ("Brake caliper", "BC-77"), ("Gearbox", "GB-6"), ("Headlight", "HL-2"),
    ("Hydraulic pump", "HP-500"), ("Clutch kit", "CK-18"), ("ECU", "ECU-1"),
]
BRANDS = [("Ford", "Focus"), ("Fiat", "Doblo"), ("Renault", "Clio"), ("Volvo", "FH16"), ("John Deere", "6M")]
PLACES = [("Izmir", "Aegean"), ("Ankara", "Central Anatolia"), ("Istanbul", "Marmara"), ("Antalya", "Mediterranean")]


def random_listing() -> dict:
    name, code = random.choice(PARTS)
    brand, model = random.choice(BRANDS)
    city, region = random.choice(PLACES)
    return {
        "name": name,
        "code": code,
        "brand": brand,
        "model": model,
        "condition": random.choice(["available", "faulty"]),
        "price": random.choice([0, 50, 120, 300, 500, 1200, 4500]),
        "city": city,
        "region": region,
        "details": "Removed from a running vehicle." if random.random() > 0.5 else "",
    }


def register_and_login(client: httpx.Client, email: str, errors: list) -> dict | None:
    r = client.post("/users/register", json={"email": email, "password": PASSWORD})
    if r.status_code not in (200, 201, 409):
        errors.append(f"Register {email}: {r.status_code} {r.text[:80]}")
        return None
    r = client.post("/users/login", json={"email": email, "password": PASSWORD})
    if r.status_code != 200:
        errors.append(f"Login {email}: {r.status_code}")
        return None
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


def main():
    ap = argparse.ArgumentParser(description="Seed users, listings and requests via API")
    ap.add_argument("--sellers", type=int, default=5, help="Number of sellers to create")
    ap.add_argument("--buyers", type=int, default=5, help="Number of buyers to create")
    ap.add_argument("--listings-per-seller", type=int, default=10, help="Listings per seller")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    errors = []
    listing_ids = []
    requests_sent = 0

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Creating {args.sellers} sellers with {args.listings_per_seller} listings each...")
        for i in range(args.sellers):
            headers = register_and_login(client, f"seller{i+1}@example.com", errors)
            if not headers:
                continue
            for _ in range(args.listings_per_seller):
                r = client.post("/listings", headers=headers, json=random_listing())
                if r.status_code == 201:
                    listing_ids.append(r.json()["id"])
                else:
                    errors.append(f"Listing seller{i+1}: {r.status_code}")

        print(f"Creating {args.buyers} buyers and sending requests...")
        for i in range(args.buyers):
            headers = register_and_login(client, f"buyer{i+1}@example.com", errors)
            if not headers or not listing_ids:
                continue
            for listing_id in random.sample(listing_ids, min(3, len(listing_ids))):
                r = client.post("/match-requests", headers=headers, json={"listing_id": listing_id})
                if r.status_code == 201:
                    requests_sent += 1
                elif r.status_code != 409:
                    errors.append(f"Request buyer{i+1}: {r.status_code}")

    print(f"\nDone. Listings created: {len(listing_ids)}, requests sent: {requests_sent}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
