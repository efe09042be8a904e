"""
Persists fetched questions, skipping texts that are already stored.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from ..database.models import Answer, Difficulty, Question, QuestionType
from ..errors import StorageError
from ..opentdb.records import RawQuestion
from .resolver import NormalizationResolver, parse_category_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteResult:
    status: str
    question_id: Optional[int] = None

    INSERTED = 'inserted'
    SKIPPED = 'skipped'

    @classmethod
    def inserted(cls, question_id: int) -> 'WriteResult':
        return cls(cls.INSERTED, question_id)

    @classmethod
    def skipped(cls) -> 'WriteResult':
        return cls(cls.SKIPPED)

    @property
    def was_inserted(self) -> bool:
        return self.status == self.INSERTED


class DeduplicatingWriter:
    """
    Writes one question per transaction.

    The duplicate check, label resolution and every insert for a question
    commit together or not at all, and the commit happens before the next
    question is checked.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def write_question(self, raw: RawQuestion) -> WriteResult:
        db_session = self.session_factory()
        try:
            existing = db_session.query(Question.id).filter(Question.question == raw.question).first()
            if existing:
                logger.debug(f"Skipping duplicate question {existing.id}")
                return WriteResult.skipped()

            resolver = NormalizationResolver(db_session)
            type_id = resolver.resolve(raw.type, QuestionType)
            difficulty_id = resolver.resolve(raw.difficulty, Difficulty)
            category_id = resolver.resolve_category(raw.category, parse_category_id(raw.category))

            correct = Answer(answer=raw.correct_answer)
            question = Question(
                question=raw.question,
                type_id=type_id,
                difficulty_id=difficulty_id,
                category_id=category_id,
                correct_answer=correct,
                incorrect_answers=[Answer(answer=text) for text in raw.incorrect_answers],
            )
            db_session.add(question)
            db_session.commit()

            logger.info(f"Inserted question {question.id}")
            return WriteResult.inserted(question.id)

        except SQLAlchemyError as e:
            db_session.rollback()
            logger.error(f"Database error while writing question: {e}")
            raise StorageError(f"Could not store question: {e}") from e
        finally:
            db_session.close()
