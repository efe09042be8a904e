"""
Exceptions raised by the ingestion loop.

Every error is terminal for a run. Each class carries the process exit code
the CLI uses when it reaches the top level.
"""


class QuizbankError(Exception):
    """Base class for all quizbank failures."""

    exit_code = 1


class TokenFileError(QuizbankError):
    """The persisted token record is missing or unreadable."""

    exit_code = 2


class NetworkError(QuizbankError):
    """Transport failure or non-success HTTP status."""

    exit_code = 3


class NoResultsError(QuizbankError):
    """The query matched no questions at all."""

    exit_code = 4


class TokenInvalidError(QuizbankError):
    """OpenTDB does not know the session token (response code 3)."""

    exit_code = 5


class ProtocolError(QuizbankError):
    """A response body does not have the expected shape."""

    exit_code = 6


class StorageError(QuizbankError):
    """The database rejected a read or write."""

    exit_code = 7
