import sys

import click

from ..config import get_default_query
from ..database.models import create_database_engine, get_session_factory
from ..database.tools import initialize_database
from ..errors import NoResultsError, QuizbankError, StorageError
from ..ingest.pipeline import ingest_questions
from ..ingest.writer import DeduplicatingWriter
from ..opentdb.fetcher import STOP_NO_RESULTS, BatchFetcher
from ..opentdb.token import TokenManager, load_token
from ..utils.logger import get_logger


@click.command()
def token():
    """Request a new OpenTDB session token and save it."""
    logger = get_logger()
    manager = TokenManager()
    try:
        new_token = manager.acquire_token()
    except QuizbankError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)
    finally:
        manager.close()

    print(f"Token: {new_token.value}")

@click.command()
@click.argument('query', required=False)
def fetch(query):
    """
    Fetch questions into the database until the token is exhausted.

    QUERY is an OpenTDB api.php URL or query string, for example
    "https://opentdb.com/api.php?amount=50&category=31". Defaults to 50
    questions from any category per page.
    """
    logger = get_logger()
    query = query or get_default_query()

    try:
        session_token = load_token()

        engine = create_database_engine()
        if not initialize_database(engine):
            raise StorageError("Could not initialize database")

        fetcher = BatchFetcher(session_token)
        try:
            writer = DeduplicatingWriter(get_session_factory(engine))
            report = ingest_questions(fetcher, writer, query)
        finally:
            fetcher.close()

        if report.pages == 0 and report.stop_reason == STOP_NO_RESULTS:
            raise NoResultsError(f"No questions available for {query}")

    except QuizbankError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)

    print(f"Done. Inserted: {report.inserted}, Skipped (duplicates): {report.skipped}")
