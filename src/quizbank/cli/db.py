import sys

import click

from ..database.models import create_database_engine
from ..database.tools import initialize_database, seed_lookup_tables, show_database_stats
from ..errors import QuizbankError, StorageError
from ..utils.logger import get_logger


@click.group()
def db():
    """Database management."""
    pass

@click.command()
def init():
    """Initialize the database."""
    logger = get_logger()
    engine = create_database_engine()

    if not initialize_database(engine):
        logger.error("Database initialization failed.")
        sys.exit(StorageError.exit_code)

    print("Database initialized successfully.")
    try:
        show_database_stats(engine)
    except QuizbankError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)

@click.command()
def info():
    """Show database statistics."""
    logger = get_logger()
    try:
        show_database_stats()
    except QuizbankError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)

@click.command()
def seed():
    """Create the standard difficulties and question types."""
    logger = get_logger()
    engine = create_database_engine()

    if not initialize_database(engine):
        logger.error("Could not initialize database. Exiting.")
        sys.exit(StorageError.exit_code)

    try:
        created = seed_lookup_tables(engine)
    except QuizbankError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)

    logger.info(f"Seeded lookup tables, {created} new rows")

db.add_command(init)
db.add_command(info)
db.add_command(seed)
