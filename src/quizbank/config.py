"""
Runtime configuration read from the environment.

Values may also come from a ``.env`` file; the CLI calls ``load_dotenv()``
before any of these are read.
"""

import os

DEFAULT_DATABASE_URL = 'sqlite:///quizbank.db'
DEFAULT_OPENTDB_BASE_URL = 'https://opentdb.com'
DEFAULT_TOKEN_PATH = 'opentdb_token.json'
DEFAULT_LOG_DIR = 'logs'

# Questions requested per page when the query names no amount
DEFAULT_PAGE_SIZE = 50

# OpenTDB allows one request per IP every 5 seconds
PAGE_DELAY_SECONDS = 5.0

USER_AGENT = 'quizbank/0.1 (+https://opentdb.com)'


def get_database_url():
    """Get database URL from environment variables."""
    return os.getenv('DATABASE_URL') or DEFAULT_DATABASE_URL


def get_opentdb_base_url():
    return (os.getenv('OPENTDB_BASE_URL') or DEFAULT_OPENTDB_BASE_URL).rstrip('/')


def get_token_url():
    return f"{get_opentdb_base_url()}/api_token.php?command=request"


def get_api_url():
    return f"{get_opentdb_base_url()}/api.php"


def get_default_query():
    return f"{get_api_url()}?amount={DEFAULT_PAGE_SIZE}"


def get_token_path():
    return os.getenv('OPENTDB_TOKEN_PATH') or DEFAULT_TOKEN_PATH


def get_log_dir():
    return os.getenv('LOG_DIR') or DEFAULT_LOG_DIR
