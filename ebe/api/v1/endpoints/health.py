# ebe/api/v1/endpoints/health.py
"""
Health check endpoints for monitoring system status.
"""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ebe.api import deps
from ebe.core.exceptions import DatabaseError

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_check():
    """Basic health check - API is responding."""
    return {"status": "healthy", "service": "ebe-meeting-service"}


@router.get("/db")
def database_health(db: Session = Depends(deps.get_db)):
    """Check database connectivity."""
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "component": "database"}
    except SQLAlchemyError:
        raise DatabaseError("Database unhealthy", details={"component": "database"})
