"""
Pages through the OpenTDB question endpoint with a session token.
"""

import logging
import time
from typing import Iterator, List, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import requests

from ..config import DEFAULT_PAGE_SIZE, PAGE_DELAY_SECONDS, USER_AGENT, get_api_url
from ..errors import NetworkError, ProtocolError, TokenInvalidError
from .records import RawQuestion
from .token import Token

logger = logging.getLogger(__name__)

# OpenTDB response codes; any other code with an empty page ends the loop
RESPONSE_NO_RESULTS = 1
RESPONSE_TOKEN_NOT_FOUND = 3
RESPONSE_TOKEN_EMPTY = 4

# Why a fetch loop ended without an error
STOP_NO_RESULTS = 'no_results'
STOP_TOKEN_EXHAUSTED = 'token_exhausted'
STOP_EMPTY_PAGE = 'empty_page'


def build_base_query(query: str, page_size: Optional[int] = None, api_url: Optional[str] = None) -> Tuple[str, int]:
    """
    Normalize a caller-supplied query into a token-free URL and its page size.

    ``query`` may be a full URL, a URL without a scheme
    (``opentdb.com/api.php?amount=10``, taken as https) or a bare fragment
    such as ``amount=10&category=31``. An ``amount`` already in the query
    wins over ``page_size``; without either the default page size is used
    and added to the URL.
    """
    query = query.strip()
    if '://' not in query:
        head = query.split('?', 1)[0]
        if head and '=' not in head:
            query = f"https://{query}"
        else:
            query = f"{api_url or get_api_url()}?{query.lstrip('?')}"

    parts = urlsplit(query)
    params = [(key, value) for key, value in parse_qsl(parts.query, keep_blank_values=True) if key != 'token']

    amount = next((value for key, value in params if key == 'amount'), None)
    if amount is not None and amount.isdigit() and int(amount) > 0:
        size = int(amount)
    else:
        size = page_size or DEFAULT_PAGE_SIZE
        params = [(key, value) for key, value in params if key != 'amount']
        params.insert(0, ('amount', str(size)))

    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(params), '')), size


class BatchFetcher:
    """
    Requests pages of questions until OpenTDB reports the query exhausted.

    Single use: the server tracks what the token has already served, so a
    finished loop cannot be replayed.
    """

    def __init__(self, token: Token, session: Optional[requests.Session] = None,
                 delay_seconds: float = PAGE_DELAY_SECONDS, sleep=time.sleep):
        self.token = token
        self.delay_seconds = delay_seconds
        self.sleep = sleep
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': USER_AGENT})
        self.stop_reason = None

    def iter_pages(self, base_query: str, page_size: Optional[int] = None) -> Iterator[List[RawQuestion]]:
        base_url, size = build_base_query(base_query, page_size)
        separator = '&' if '?' in base_url else '?'
        url = f"{base_url}{separator}{urlencode({'token': self.token.value})}"

        round_number = 0
        while True:
            if round_number:
                logger.info(f"Waiting {self.delay_seconds:g} seconds before next batch...")
                self.sleep(self.delay_seconds)
            round_number += 1

            logger.info(f"[round {round_number}] Fetching {size} questions from {base_url}")
            body = self._get(url)

            code = body.get('response_code')
            results = body.get('results') or []
            if not isinstance(results, list):
                raise ProtocolError("results must be a list")

            if code == RESPONSE_TOKEN_NOT_FOUND:
                raise TokenInvalidError("Token not found. Request a new token and run again.")
            if code == RESPONSE_TOKEN_EMPTY:
                logger.info("Token has returned all available questions for this query (response_code=4). Stopping.")
                self.stop_reason = STOP_TOKEN_EXHAUSTED
                return
            if code == RESPONSE_NO_RESULTS:
                logger.info("No results for this query (response_code=1). Stopping.")
                self.stop_reason = STOP_NO_RESULTS
                return
            if not results:
                logger.info(f"No results returned (response_code={code}). Stopping.")
                self.stop_reason = STOP_EMPTY_PAGE
                return

            yield [RawQuestion.from_api(item) for item in results]

    def fetch_all(self, base_query: str, page_size: Optional[int] = None) -> Iterator[RawQuestion]:
        for page in self.iter_pages(base_query, page_size):
            yield from page

    def close(self):
        self.session.close()

    def _get(self, url: str) -> dict:
        try:
            response = self.session.get(url)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"Fetch failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise ProtocolError(f"Question response is not JSON: {e}") from e

        if not isinstance(body, dict) or 'response_code' not in body:
            raise ProtocolError(f"Unexpected question response: {body!r}")
        return body
