#!/usr/bin/env python3
import sys
import logging

from sqlalchemy import inspect

from app import create_app, configure_logging
from models.waitlist import db
from migrations.bootstrap import ensure_schema
from services.database import wait_for_database
from services.errors import DatabaseUnavailableError, SchemaBootstrapError


def init_db():
    """Initialize the database with the waitlist tables"""
    app = create_app()

    with app.app_context():
        wait_for_database(
            db,
            max_retries=app.config['DB_CONNECT_RETRIES'],
            retry_delay=app.config['DB_CONNECT_RETRY_DELAY'],
        )
        summary = ensure_schema(db)

        tables = inspect(db.engine).get_table_names()
        if 'waitlist_users' in tables and 'waitlist_analytics' in tables:
            print("✅ Database tables ready:")
            for table in tables:
                marker = " (created)" if table in summary['created_tables'] else ""
                print(f"  - {table}{marker}")
        else:
            print("❌ Error: Some tables were not created.")
            print(f"Available tables: {tables}")
            return False
    return True


if __name__ == "__main__":
    configure_logging()
    try:
        ok = init_db()
    except (DatabaseUnavailableError, SchemaBootstrapError) as e:
        logging.getLogger(__name__).error(str(e))
        ok = False
    sys.exit(0 if ok else 1)
