"""
Database maintenance helpers used by the ``quizbank db`` commands.
"""

import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from ..errors import StorageError
from ..ingest.resolver import NormalizationResolver
from .models import Answer, Category, Difficulty, Question, QuestionType, create_tables, get_session

logger = logging.getLogger(__name__)

STANDARD_DIFFICULTIES = ('easy', 'medium', 'hard')
STANDARD_TYPES = ('multiple', 'boolean')


def initialize_database(engine=None):
    """
    Initialize the database by creating all necessary tables.
    Returns True if successful, False otherwise.
    """
    try:
        logger.info("Initializing database...")
        engine = create_tables(engine)

        db_session = get_session(engine)
        try:
            question_count = db_session.query(Question).count()
            logger.info(f"Database connection verified, {question_count} questions stored")
        finally:
            db_session.close()

        return True

    except SQLAlchemyError as e:
        logger.error(f"Error during database initialization: {e}")
        return False


def seed_lookup_tables(engine=None):
    """
    Make sure the standard difficulties and question types exist.

    Returns the number of rows created.
    """
    db_session = get_session(engine)
    try:
        before = db_session.query(Difficulty).count() + db_session.query(QuestionType).count()

        resolver = NormalizationResolver(db_session)
        for level in STANDARD_DIFFICULTIES:
            resolver.resolve(level, Difficulty)
        for name in STANDARD_TYPES:
            resolver.resolve(name, QuestionType)
        db_session.commit()

        after = db_session.query(Difficulty).count() + db_session.query(QuestionType).count()
        return after - before

    except SQLAlchemyError as e:
        db_session.rollback()
        raise StorageError(f"Could not seed lookup tables: {e}") from e
    finally:
        db_session.close()


def get_database_stats(engine=None, top: int = 10):
    """Collect row counts and the largest categories."""
    db_session = get_session(engine)
    try:
        category_counts = db_session.query(
            Category.name,
            func.count(Question.id).label('count')).join(
                Question, Question.category_id == Category.id).group_by(
                    Category.name).order_by(
                        func.count(Question.id).desc()).limit(top).all()

        return {
            'questions': db_session.query(Question).count(),
            'answers': db_session.query(Answer).count(),
            'categories': db_session.query(Category).count(),
            'types': db_session.query(QuestionType).count(),
            'difficulties': db_session.query(Difficulty).count(),
            'top_categories': [(name, count) for name, count in category_counts],
        }
    except SQLAlchemyError as e:
        raise StorageError(f"Could not read database statistics: {e}") from e
    finally:
        db_session.close()


def show_database_stats(engine=None):
    """Show current database statistics."""
    stats = get_database_stats(engine)

    print(f"\n=== Database Statistics ===")
    print(f"Total questions: {stats['questions']}")
    print(f"Answers: {stats['answers']}")
    print(f"Categories: {stats['categories']}")
    print(f"Types: {stats['types']}, difficulties: {stats['difficulties']}")
    print(f"\nTop {len(stats['top_categories'])} categories:")
    for category, count in stats['top_categories']:
        print(f"  {category}: {count} questions")

    return stats['questions']
