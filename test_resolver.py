"""
Tests for lookup-or-create resolution of categories, types and difficulties.
"""

from unittest.mock import patch

from quizbank.database.models import Category, Difficulty, QuestionType
from quizbank.ingest.resolver import NormalizationResolver, make_sentinel_id, parse_category_id


def test_resolve_type_is_idempotent(db_session):
    resolver = NormalizationResolver(db_session)

    first = resolver.resolve('multiple', QuestionType)
    second = resolver.resolve('multiple', QuestionType)

    assert first == second
    assert db_session.query(QuestionType).count() == 1


def test_resolve_difficulty_uses_level_column(db_session):
    resolver = NormalizationResolver(db_session)

    easy = resolver.resolve('easy', Difficulty)
    hard = resolver.resolve('hard', Difficulty)

    assert easy != hard
    assert {row.level for row in db_session.query(Difficulty)} == {'easy', 'hard'}


def test_resolve_category_by_name_twice(db_session):
    resolver = NormalizationResolver(db_session)

    first = resolver.resolve_category('Entertainment: Japanese Anime & Manga', 0)
    second = resolver.resolve_category('Entertainment: Japanese Anime & Manga', 0)

    assert first == second
    assert db_session.query(Category).count() == 1


def test_category_without_id_gets_negative_sentinel(db_session):
    resolver = NormalizationResolver(db_session)

    category_id = resolver.resolve_category('Geography', 0)

    category = db_session.get(Category, category_id)
    assert category.opentdb_id < 0


def test_category_with_positive_id_keeps_it(db_session):
    resolver = NormalizationResolver(db_session)

    category_id = resolver.resolve_category('Entertainment: Japanese Anime & Manga', 31)

    assert db_session.get(Category, category_id).opentdb_id == 31


def test_known_external_id_renames_in_place(db_session):
    """A new label for a known upstream id updates the existing row."""
    resolver = NormalizationResolver(db_session)
    original = resolver.resolve_category('Anime & Manga', 31)

    renamed = resolver.resolve_category('Entertainment: Japanese Anime & Manga', 31)

    assert renamed == original
    assert db_session.query(Category).count() == 1
    assert db_session.get(Category, original).name == 'Entertainment: Japanese Anime & Manga'


def test_unknown_id_category_then_positive_id_under_other_name(db_session):
    resolver = NormalizationResolver(db_session)
    without_id = resolver.resolve_category('Anime', 0)

    with_id = resolver.resolve_category('Entertainment: Japanese Anime & Manga', 31)

    assert with_id != without_id
    assert db_session.query(Category).count() == 2
    assert db_session.get(Category, without_id).name == 'Anime'


def test_name_match_wins_over_external_id(db_session):
    resolver = NormalizationResolver(db_session)
    by_name = resolver.resolve_category('History', 23)
    resolver.resolve_category('Politics', 24)

    assert resolver.resolve_category('History', 24) == by_name


def test_sentinels_in_same_millisecond_do_not_collide(db_session):
    """Two unknown-id categories created at the same instant get distinct sentinels."""
    resolver = NormalizationResolver(db_session)

    with patch('quizbank.ingest.resolver.time.time', return_value=1700000000.5), \
            patch('quizbank.ingest.resolver.random.randint', side_effect=[7, 7, 8]):
        first = resolver.resolve_category('Art', 0)
        second = resolver.resolve_category('Animals', 0)

    sentinels = {row.opentdb_id for row in db_session.query(Category)}
    assert first != second
    assert len(sentinels) == 2
    assert sentinels == {-(1700000000500 * 1000 + 7), -(1700000000500 * 1000 + 8)}


def test_make_sentinel_id_spreads_within_a_millisecond():
    with patch('quizbank.ingest.resolver.time.time', return_value=1700000000.5):
        values = {make_sentinel_id() for _ in range(50)}

    assert all(value < 0 for value in values)
    assert len(values) > 1


def test_parse_category_id():
    assert parse_category_id('Entertainment: Video Games (#15)') == 15
    assert parse_category_id('Science (17)') == 17
    assert parse_category_id('Entertainment: Japanese Anime & Manga') == 0
    assert parse_category_id('Sports (#21) trivia') == 0
