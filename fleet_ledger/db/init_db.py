import logging
from sqlalchemy.exc import SQLAlchemyError

from fleet_ledger.db.session import Base, engine
# Registers every table on Base.metadata
import fleet_ledger.models  # noqa: F401

logger = logging.getLogger(__name__)

def init_db(bind=None):
    """
    Create the fleet ledger tables that do not exist yet.
    Existing tables are left untouched.
    """
    bind = bind if bind is not None else engine
    try:
        for table in Base.metadata.sorted_tables:
            table.create(bind, checkfirst=True)
            logger.info(f"Table {table.name} ready")

        logger.info("Fleet ledger tables created successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error creating database tables: {e}")
        raise
