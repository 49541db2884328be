import logging
import time

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from services.errors import DatabaseUnavailableError

logger = logging.getLogger(__name__)


def ping(db):
    """Round-trip ``SELECT 1`` on a pooled connection. Raises on failure."""
    with db.engine.connect() as conn:
        return conn.execute(text('SELECT 1')).scalar()


def check_connection(db) -> bool:
    # Connectivity only; application tables may not exist yet.
    try:
        ping(db)
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        return False
    logger.info("Database connected successfully")
    return True


def wait_for_database(db, max_retries: int = 5, retry_delay: float = 5, sleep=time.sleep):
    """
    Block until the store answers a trivial query.

    Args:
        db: Flask-SQLAlchemy extension bound to the current app
        max_retries: Number of attempts before giving up
        retry_delay: Seconds to wait between attempts
        sleep: Sleep function, replaceable in tests

    Raises:
        DatabaseUnavailableError: If every attempt fails
    """
    for attempt in range(1, max_retries + 1):
        if check_connection(db):
            return True
        remaining = max_retries - attempt
        if remaining == 0:
            break
        logger.warning(f"Waiting for database... retries left: {remaining}")
        sleep(retry_delay)

    raise DatabaseUnavailableError(f"Database unavailable after {max_retries} attempts")
