"""
Tests for acquiring, persisting and loading OpenTDB session tokens.
"""

import json
from unittest.mock import Mock

import pytest
import requests

from quizbank.errors import NetworkError, ProtocolError, TokenFileError
from quizbank.opentdb.token import Token, TokenManager, load_token

TOKEN_BODY = {
    'response_code': 0,
    'response_message': 'Token Generated Successfully!',
    'token': 'f00dfacecafe',
}


def make_manager(tmp_path, response):
    session = Mock()
    session.get.return_value = response
    manager = TokenManager(
        token_path=tmp_path / 'token.json',
        token_url='https://opentdb.test/api_token.php?command=request',
        session=session,
    )
    return manager, session


def test_acquire_token_persists_record(tmp_path, response_factory):
    manager, session = make_manager(tmp_path, response_factory(TOKEN_BODY))

    token = manager.acquire_token()

    session.get.assert_called_once_with('https://opentdb.test/api_token.php?command=request')
    assert token.value == 'f00dfacecafe'

    record = json.loads((tmp_path / 'token.json').read_text(encoding='utf-8'))
    assert record['token'] == 'f00dfacecafe'
    assert record['issued_at'] == token.issued_at
    assert record['raw'] == TOKEN_BODY


def test_acquire_token_overwrites_previous(tmp_path, response_factory):
    (tmp_path / 'token.json').write_text(json.dumps({'token': 'old'}), encoding='utf-8')
    manager, _ = make_manager(tmp_path, response_factory(TOKEN_BODY))

    manager.acquire_token()

    assert load_token(tmp_path / 'token.json').value == 'f00dfacecafe'


def test_missing_token_field_is_protocol_error(tmp_path, response_factory):
    manager, _ = make_manager(tmp_path, response_factory({'response_code': 0, 'response_message': ''}))

    with pytest.raises(ProtocolError):
        manager.acquire_token()

    assert not (tmp_path / 'token.json').exists()


def test_non_json_body_is_protocol_error(tmp_path, response_factory):
    manager, _ = make_manager(tmp_path, response_factory(json_error=True))

    with pytest.raises(ProtocolError):
        manager.acquire_token()

    assert not (tmp_path / 'token.json').exists()


def test_http_failure_is_network_error(tmp_path, response_factory):
    manager, _ = make_manager(tmp_path, response_factory(status=503))

    with pytest.raises(NetworkError):
        manager.acquire_token()

    assert not (tmp_path / 'token.json').exists()


def test_connection_failure_is_network_error(tmp_path):
    manager, session = make_manager(tmp_path, None)
    session.get.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(NetworkError):
        manager.acquire_token()


def test_load_token_reads_record(tmp_path):
    path = tmp_path / 'token.json'
    path.write_text(json.dumps({'token': 'abc', 'issued_at': '2026-10-19T00:00:00+00:00', 'raw': {}}),
                    encoding='utf-8')

    assert load_token(path) == Token(value='abc', issued_at='2026-10-19T00:00:00+00:00')


def test_load_token_missing_file(tmp_path):
    with pytest.raises(TokenFileError):
        load_token(tmp_path / 'missing.json')


def test_load_token_malformed_file(tmp_path):
    path = tmp_path / 'token.json'
    path.write_text('{not json', encoding='utf-8')

    with pytest.raises(TokenFileError):
        load_token(path)


def test_load_token_without_token(tmp_path):
    path = tmp_path / 'token.json'
    path.write_text(json.dumps({'issued_at': 'yesterday'}), encoding='utf-8')

    with pytest.raises(TokenFileError):
        load_token(path)


def test_close_closes_http_session(tmp_path):
    manager, session = make_manager(tmp_path, None)

    manager.close()

    session.close.assert_called_once_with()
