from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import text

from fleet_ledger.db.session import get_db

router = APIRouter()

@router.get("/")
def health_check(db: Session = Depends(get_db)):
    """
    Liveness of the fleet ledger API and of the database holding vehicles and costs.

    Always answers 200; a failed `SELECT 1` is reported as "unhealthy" in the body.
    """
    health_status = {
        "status": "healthy",
        "api": "online",
        "database": "online",
    }

    # Check database connection
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        health_status["database"] = "offline"
        health_status["status"] = "unhealthy"
        health_status["database_error"] = str(e)

    return health_status
