from datetime import datetime, timezone

from fastapi import APIRouter

from minpaku.config import settings
from minpaku.db.connection import db_pool

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.ENVIRONMENT,
        "database": db_pool.test_connection(),
    }
