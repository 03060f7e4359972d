"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a ShortURLModel is not found in the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a ShortURLModel that already exists.

    DataStoreError:
        Raised when the backing file can't be read or written (permissions, disk full, corrupt JSON, etc.).

    SessionNotFoundError:
        Raised when a session token is missing or unknown.

    SessionExpiredError:
        Raised when a session exists but is past its expiry. The session is evicted.

Example:
    >>> from fileshortener.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    fileshortener.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc123' not found.
"""

from fileshortener.exceptions import FileShortenerError


class DAOError(FileShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class ShortURLNotFoundError(DAOError):
    """Raised when a ShortURLModel is not found in the data store."""

    error_code = 'dao:short_url_not_found_error'


class ShortURLAlreadyExistsError(DAOError):
    """Raised when inserting a ShortURLModel that already exists in the data store."""

    error_code = 'dao:short_url_already_exists_error'


class DataStoreError(DAOError):
    """Raised when the data store encounters an error.

    Examples include permission errors, a full disk and a corrupt records file.
    """

    error_code = 'dao:data_store_error'


class SessionNotFoundError(DAOError):
    """Raised when a session token is missing or doesn't map to a session."""

    error_code = 'dao:session_not_found_error'


class SessionExpiredError(SessionNotFoundError):
    """Raised when a session was found but is past its expiry."""

    error_code = 'dao:session_expired_error'
