from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Integer


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel:
    """Base class for all database models."""

    # Primary key with autoincrement=True to match PostgreSQL SERIAL type
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
