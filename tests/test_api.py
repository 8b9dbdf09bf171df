"""
HTTP API tests - status codes, error bodies and the identity-scoped actions.
"""

import pytest
from httpx import AsyncClient

TURBO = {
    "name": "Turbo",
    "code": "T-100",
    "brand": "Garrett",
    "model": "GT1749",
    "condition": "available",
    "price": 500,
    "city": "Izmir",
    "region": "Aegean",
}


@pytest.mark.asyncio
async def test_register_login_me_logout(client: AsyncClient):
    response = await client.post(
        "/api/v1/users/register", json={"email": "ali@example.com", "password": "password123"}
    )
    assert response.status_code == 201
    assert response.json()["username"] == "ali"

    duplicate = await client.post(
        "/api/v1/users/register", json={"email": "ali@example.com", "password": "password123"}
    )
    assert duplicate.status_code == 409

    login = await client.post(
        "/api/v1/users/login", json={"email": "ali@example.com", "password": "password123"}
    )
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    me = await client.get("/api/v1/users/me", headers=headers)
    assert me.json()["anonymous"] is False
    assert me.json()["email"] == "ali@example.com"

    logout = await client.post("/api/v1/users/logout", headers=headers)
    assert logout.status_code == 200
    assert logout.json()["status"] == "signed_out"

    me = await client.get("/api/v1/users/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["anonymous"] is True


@pytest.mark.asyncio
async def test_email_domain_case_is_normalized(client: AsyncClient):
    response = await client.post(
        "/api/v1/users/register", json={"email": "Ayse@Example.COM", "password": "password123"}
    )
    assert response.status_code == 201
    assert response.json()["email"] == "Ayse@example.com"

    duplicate = await client.post(
        "/api/v1/users/register", json={"email": "Ayse@EXAMPLE.com", "password": "password123"}
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "duplicate"

    login = await client.post(
        "/api/v1/users/login", json={"email": "Ayse@EXAMPLE.com", "password": "password123"}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_login_with_wrong_password(client: AsyncClient):
    response = await client.post(
        "/api/v1/users/login", json={"email": "nobody@example.com", "password": "x"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "auth_error"


@pytest.mark.asyncio
async def test_me_is_anonymous_without_token(client: AsyncClient):
    response = await client.get("/api/v1/users/me")
    assert response.status_code == 200
    assert response.json() == {"id": None, "email": None, "username": None, "anonymous": True}


@pytest.mark.asyncio
async def test_create_listing_requires_auth(client: AsyncClient):
    response = await client.post("/api/v1/listings", json=TURBO)
    assert response.status_code == 401
    assert response.json()["error"] == "auth_error"


@pytest.mark.asyncio
async def test_create_and_search_listing(client: AsyncClient, seller, seller_headers):
    response = await client.post("/api/v1/listings", headers=seller_headers, json=TURBO)
    assert response.status_code == 201
    data = response.json()
    assert data["seller_id"] == seller.id
    assert data["price"] == 500

    found = await client.get("/api/v1/listings", params={"name": "turbo", "price_max": 500})
    assert [item["id"] for item in found.json()] == [data["id"]]

    none = await client.get("/api/v1/listings", params={"condition": "faulty"})
    assert none.json() == []

    detail = await client.get(f"/api/v1/listings/{data['id']}")
    assert detail.json()["code"] == "T-100"

    missing = await client.get(f"/api/v1/listings/{data['id'] + 1}")
    assert missing.status_code == 404
    assert missing.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_negative_price_is_a_validation_error(client: AsyncClient, seller_headers):
    response = await client.post("/api/v1/listings", headers=seller_headers, json={**TURBO, "price": -10})
    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"

    listings = await client.get("/api/v1/listings")
    assert listings.json() == []


@pytest.mark.asyncio
async def test_malformed_body_is_a_validation_error(client: AsyncClient, seller_headers):
    response = await client.post("/api/v1/listings", headers=seller_headers, json={"name": "Turbo"})
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "validation_error"
    assert "code" in body["message"]


@pytest.mark.asyncio
async def test_wrong_method_is_rejected(client: AsyncClient):
    response = await client.put("/api/v1/listings", json=TURBO)
    assert response.status_code == 405
    assert response.json()["error"] == "method_not_allowed"


@pytest.mark.asyncio
async def test_request_workflow(client: AsyncClient, seller_headers, buyer_headers, buyer):
    listing = (await client.post("/api/v1/listings", headers=seller_headers, json=TURBO)).json()

    own = await client.post("/api/v1/match-requests", headers=seller_headers, json={"listing_id": listing["id"]})
    assert own.status_code == 422

    created = await client.post("/api/v1/match-requests", headers=buyer_headers, json={"listing_id": listing["id"]})
    assert created.status_code == 201
    request = created.json()
    assert request["status"] == "pending"
    assert request["buyer_id"] == buyer.id

    again = await client.post("/api/v1/match-requests", headers=buyer_headers, json={"listing_id": listing["id"]})
    assert again.status_code == 409
    assert again.json()["error"] == "duplicate_request"

    pending = (await client.get("/api/v1/match-requests/pending", headers=seller_headers)).json()
    assert [r["id"] for r in pending] == [request["id"]]
    assert pending[0]["listing"]["name"] == "Turbo"

    forbidden = await client.post(
        f"/api/v1/match-requests/{request['id']}/status", headers=buyer_headers, json={"status": "approved"}
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["error"] == "forbidden"

    bad_status = await client.post(
        f"/api/v1/match-requests/{request['id']}/status", headers=seller_headers, json={"status": "maybe"}
    )
    assert bad_status.status_code == 422

    approved = await client.post(
        f"/api/v1/match-requests/{request['id']}/status", headers=seller_headers, json={"status": "approved"}
    )
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"

    pending = (await client.get("/api/v1/match-requests/pending", headers=seller_headers)).json()
    assert pending == []


@pytest.mark.asyncio
async def test_match_workflow(client: AsyncClient, seller, seller_headers, buyer_headers):
    listing = (await client.post("/api/v1/listings", headers=seller_headers, json=TURBO)).json()

    created = await client.post(
        "/api/v1/matches", headers=buyer_headers, json={"listing_id": listing["id"], "status": "interested"}
    )
    assert created.status_code == 201

    again = await client.post(
        "/api/v1/matches", headers=buyer_headers, json={"listing_id": listing["id"], "status": "interested"}
    )
    assert again.status_code == 409
    assert again.json()["error"] == "duplicate_match"

    missing_listing = await client.post(
        "/api/v1/matches", headers=buyer_headers, json={"listing_id": listing["id"] + 1, "status": "interested"}
    )
    assert missing_listing.status_code == 404

    for headers in (buyer_headers, seller_headers):
        mine = (await client.get("/api/v1/matches/mine", headers=headers)).json()
        assert [m["id"] for m in mine] == [created.json()["id"]]
        assert mine[0]["listing"]["seller_id"] == seller.id
