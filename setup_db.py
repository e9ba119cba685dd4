"""
Setup script for initializing the fleet ledger database tables.
Only missing tables are created; existing ones are left untouched.
"""

import logging
from fleet_ledger.db.init_db import init_db

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def setup_database():
    """Initialize database tables for the fleet ledger."""
    logger.info("Creating fleet ledger database tables...")
    try:
        init_db()
        logger.info("Database tables created successfully!")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise

if __name__ == "__main__":
    setup_database()
