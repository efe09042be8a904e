"""
OpenTDB session tokens.

A token makes the question endpoint remember what it already served, so a
run can page through a category without repeats until the token is
exhausted.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

import requests

from ..config import USER_AGENT, get_token_path, get_token_url
from ..errors import NetworkError, ProtocolError, TokenFileError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Token:
    value: str
    issued_at: str


def save_token(path, token: Token, raw: Dict):
    record = {
        'token': token.value,
        'issued_at': token.issued_at,
        'raw': raw,
    }
    Path(path).write_text(json.dumps(record, indent=2), encoding='utf-8')


def load_token(path=None) -> Token:
    """
    Read the token record written by ``TokenManager``.

    Raises:
        TokenFileError: the file is missing, not JSON, or holds no token
    """
    path = Path(path or get_token_path())
    try:
        record = json.loads(path.read_text(encoding='utf-8'))
    except (OSError, ValueError) as e:
        raise TokenFileError(f"Could not read token from {path}: {e}") from e

    if not isinstance(record, dict) or not record.get('token'):
        raise TokenFileError(f"No token found in {path}")

    return Token(value=record['token'], issued_at=record.get('issued_at', ''))


class TokenManager:
    """Requests a fresh session token and writes it to the token file."""

    def __init__(self, token_path=None, token_url: Optional[str] = None, session: Optional[requests.Session] = None):
        self.token_path = Path(token_path or get_token_path())
        self.token_url = token_url or get_token_url()
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': USER_AGENT})

    def acquire_token(self) -> Token:
        """
        Request a token and persist it, replacing any previous one.

        Raises:
            NetworkError: transport failure or non-success HTTP status
            ProtocolError: the body is not JSON or carries no token
        """
        logger.info(f"Requesting token from {self.token_url}")
        try:
            response = self.session.get(self.token_url)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"Failed to fetch token: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise ProtocolError(f"Token response is not JSON: {e}") from e

        if not isinstance(body, dict) or not body.get('token'):
            raise ProtocolError(f"No token found in response: {body!r}")

        token = Token(
            value=body['token'],
            issued_at=datetime.now(timezone.utc).isoformat(),
        )
        save_token(self.token_path, token, body)
        logger.info(f"Token saved to {self.token_path}")
        return token

    def close(self):
        self.session.close()
