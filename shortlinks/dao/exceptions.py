"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    LinkNotFoundError:
        Raised when a LinkModel is not found in the data store.

    LinkAlreadyExistsError:
        Raised when a conditional insert finds the hash already taken.
        This is the one conflict signal every backend must produce.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, etc.).

Example:
    >>> from shortlinks.dao.exceptions import LinkNotFoundError
    >>> raise LinkNotFoundError("Link with hash 'abc1' not found.")
    Traceback (most recent call last):
        ...
    shortlinks.dao.exceptions.LinkNotFoundError: Link with hash 'abc1' not found.
"""

from shortlinks.exceptions import ShortLinksError


class DAOError(ShortLinksError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class LinkNotFoundError(DAOError):
    """Raised when a LinkModel is not found in the data store."""

    error_code = 'dao:link_not_found_error'


class LinkAlreadyExistsError(DAOError):
    """Raised when inserting a LinkModel whose hash already exists in the data store."""

    error_code = 'dao:link_already_exists_error'


class DataStoreError(DAOError):
    """Raised when the data store encounters an error.

    Examples include connection issues, timeouts and malformed responses.
    """

    error_code = 'dao:data_store_error'
