"""
Client side of the Open Trivia Database API.
"""

from .fetcher import BatchFetcher, build_base_query
from .records import RawQuestion
from .token import Token, TokenManager, load_token

__all__ = ['BatchFetcher', 'build_base_query', 'RawQuestion', 'Token', 'TokenManager', 'load_token']
