"""
Liveness and readiness tests. Liveness never touches storage; readiness reports
an unreachable database as storage_error so the instance is taken out of rotation.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from partmatch.config import get_settings


@pytest.mark.asyncio
async def test_liveness_reports_app_name(client: AsyncClient):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "app": get_settings().app_name}


@pytest.mark.asyncio
async def test_ready_when_database_answers(client: AsyncClient):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_not_ready_when_database_fails(client: AsyncClient, session: AsyncSession, monkeypatch):
    """The driver error is logged, not echoed; callers only see a generic 503."""

    async def unreachable(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))

    monkeypatch.setattr(session, "execute", unreachable)
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    body = response.json()
    assert body["error"] == "storage_error"
    assert "connection refused" not in body["message"]

    # Liveness is unaffected by storage
    assert (await client.get("/api/v1/health")).status_code == 200
