"""
Health checks - for load balancers, Kubernetes, and monitoring.
"""

from fastapi import APIRouter
from sqlalchemy import text

from partmatch.config import get_settings
from partmatch.db.repositories.base_repository import storage_errors
from partmatch.db.session import DbSession

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready(session: DbSession):
    """Readiness: can the database answer a trivial query?"""
    with storage_errors("readiness check"):
        await session.execute(text("SELECT 1"))
    return {"status": "ready"}
