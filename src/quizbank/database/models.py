"""
Database models for the question bank.
"""

from sqlalchemy import BigInteger, Column, Integer, String, Text, DateTime, ForeignKey, Table, create_engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import func

from ..config import get_database_url

Base = declarative_base()

# Junction between a question and its wrong choices; rows are owned by the question
incorrect_answers_table = Table(
    'incorrect_answers',
    Base.metadata,
    Column('answer_id', Integer, ForeignKey('answers.id'), primary_key=True),
    Column('question_id', Integer, ForeignKey('questions.id'), primary_key=True),
)

class Category(Base):
    """
    Question category as named by OpenTDB.

    ``opentdb_id`` holds the upstream category id when known, otherwise a
    negative sentinel so the unique constraint still holds.
    """
    __tablename__ = 'categories'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    opentdb_id = Column(BigInteger, nullable=False, unique=True)

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}', opentdb_id={self.opentdb_id})>"

class QuestionType(Base):
    """Question type label, e.g. ``multiple`` or ``boolean``."""
    __tablename__ = 'question_types'
    label_field = 'name'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True)

    def __repr__(self):
        return f"<QuestionType(id={self.id}, name='{self.name}')>"

class Difficulty(Base):
    """Difficulty label, e.g. ``easy``."""
    __tablename__ = 'difficulties'
    label_field = 'level'

    id = Column(Integer, primary_key=True, autoincrement=True)
    level = Column(String(50), nullable=False, unique=True)

    def __repr__(self):
        return f"<Difficulty(id={self.id}, level='{self.level}')>"

class Answer(Base):
    __tablename__ = 'answers'

    id = Column(Integer, primary_key=True, autoincrement=True)
    answer = Column(Text, nullable=False)

    def __repr__(self):
        return f"<Answer(id={self.id}, answer='{self.answer}')>"

class Question(Base):
    """
    A trivia question with one correct answer and a set of incorrect ones.

    The question text is not unique at the database level; the ingestion
    writer skips texts it has already stored.
    """
    __tablename__ = 'questions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    question = Column(Text, nullable=False, index=True)
    type_id = Column(Integer, ForeignKey('question_types.id'), nullable=False)
    difficulty_id = Column(Integer, ForeignKey('difficulties.id'), nullable=False)
    category_id = Column(Integer, ForeignKey('categories.id'), nullable=False)
    correct_answer_id = Column(Integer, ForeignKey('answers.id'), nullable=False)
    created_at = Column(DateTime, default=func.now())

    type = relationship(QuestionType)
    difficulty = relationship(Difficulty)
    category = relationship(Category)
    correct_answer = relationship(Answer, foreign_keys=[correct_answer_id])
    incorrect_answers = relationship(Answer, secondary=incorrect_answers_table)

    def __repr__(self):
        return f"<Question(id={self.id}, category_id={self.category_id}, difficulty_id={self.difficulty_id})>"

# Database setup
def create_database_engine(database_url=None):
    """Create database engine."""
    database_url = database_url or get_database_url()

    if database_url in ('sqlite://', 'sqlite:///:memory:'):
        # Keep a single connection so every session sees the same in-memory database
        return create_engine(
            database_url,
            echo=False,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
        )

    return create_engine(database_url, echo=False)

def create_tables(engine=None):
    """Create all tables in the database."""
    engine = engine or create_database_engine()
    Base.metadata.create_all(engine)
    return engine

def get_session_factory(engine=None):
    engine = engine or create_database_engine()
    return sessionmaker(bind=engine)

def get_session(engine=None):
    """Get database session."""
    return get_session_factory(engine)()
