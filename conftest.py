"""
Shared pytest fixtures: an in-memory database and canned OpenTDB responses.
"""

from unittest.mock import Mock

import pytest
import requests

from quizbank.database.models import create_database_engine, create_tables, get_session_factory


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep log files and token records out of the working tree."""
    monkeypatch.setenv('LOG_DIR', str(tmp_path / 'logs'))
    monkeypatch.setenv('OPENTDB_TOKEN_PATH', str(tmp_path / 'opentdb_token.json'))
    monkeypatch.setenv('OPENTDB_BASE_URL', 'https://opentdb.test')


@pytest.fixture
def engine():
    engine = create_database_engine('sqlite://')
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return get_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


def make_response(body=None, status=200, json_error=False):
    response = Mock()
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    else:
        response.raise_for_status.return_value = None
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = body
    return response


def make_question(text='Q1', category='Entertainment: Japanese Anime & Manga', **overrides):
    data = {
        'type': 'multiple',
        'difficulty': 'easy',
        'category': category,
        'question': text,
        'correct_answer': 'A',
        'incorrect_answers': ['B', 'C', 'D'],
    }
    data.update(overrides)
    return data


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def question_factory():
    return make_question
