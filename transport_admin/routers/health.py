# transport_admin/routers/health.py
"""
System health check endpoint.
Returns status of backend + DB.
"""

from fastapi import APIRouter
from sqlalchemy import text
from transport_admin.database import SessionLocal
from datetime import datetime, timezone

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check():
    result = {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "backend": "ok",
        "database": "unknown",
    }

    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
    except Exception as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"
    finally:
        db.close()

    return result
