"""
Health checks - for load balancers, Kubernetes, and monitoring.
Challenge: Fast liveness; DB round-trip for readiness.
"""

from fastapi import APIRouter
from sqlalchemy import text

from app.config import get_settings
from app.db.session import DbSession

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready(session: DbSession):
    """Readiness: can the database answer a query?"""
    await session.execute(text("SELECT 1"))
    return {"status": "ready"}
