from .models import (
    Base,
    Category,
    QuestionType,
    Difficulty,
    Answer,
    Question,
    incorrect_answers_table,
    create_database_engine,
    create_tables,
    get_session,
    get_session_factory,
)

__all__ = [
    'Base',
    'Category',
    'QuestionType',
    'Difficulty',
    'Answer',
    'Question',
    'incorrect_answers_table',
    'create_database_engine',
    'create_tables',
    'get_session',
    'get_session_factory',
]
