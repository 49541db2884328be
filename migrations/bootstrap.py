"""
Create the waitlist tables if they don't exist and seed the analytics row.

Safe to run on every start: existing tables, indexes and rows are left alone.
"""
import logging

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError

from models.waitlist import WaitlistUser
from models.analytics import WaitlistAnalytics
from services.errors import SchemaBootstrapError

logger = logging.getLogger(__name__)

BOOTSTRAP_MODELS = (WaitlistUser, WaitlistAnalytics)


def create_missing_tables(engine):
    """Create each waitlist table and index that the store lacks."""
    inspector = inspect(engine)
    created = []
    for model in BOOTSTRAP_MODELS:
        table = model.__table__
        if inspector.has_table(table.name):
            logger.debug(f"Table {table.name} already exists")
        else:
            table.create(engine, checkfirst=True)
            created.append(table.name)
            logger.info(f"Created table {table.name}")
        # Tables created elsewhere may lack the lookup indexes
        for index in table.indexes:
            index.create(engine, checkfirst=True)
    return created


def seed_analytics_row(session):
    """Insert the single analytics row when the table is empty."""
    existing = session.scalar(select(func.count()).select_from(WaitlistAnalytics))
    if existing:
        return False
    session.add(WaitlistAnalytics(total_signups=0))
    session.commit()
    logger.info("Seeded waitlist_analytics row")
    return True


def ensure_schema(db):
    """
    Verify the waitlist schema, creating whatever is missing.

    Returns:
        dict: ``created_tables`` and ``seeded_analytics`` describing what changed

    Raises:
        SchemaBootstrapError: If the schema could not be created or verified
    """
    logger.info("Creating or verifying database tables...")
    try:
        created = create_missing_tables(db.engine)
        seeded = seed_analytics_row(db.session)
    except SQLAlchemyError as e:
        db.session.rollback()
        raise SchemaBootstrapError(f"Failed to initialize database: {e}") from e

    logger.info("Database initialized successfully")
    return {'created_tables': created, 'seeded_analytics': seeded}
