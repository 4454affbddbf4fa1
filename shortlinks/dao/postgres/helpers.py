import functools
from typing import TypeVar, Any
from collections.abc import Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shortlinks.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = '23505'
# SQLite extended result code name (local development and tests)
SQLITE_CONSTRAINT_UNIQUE = 'SQLITE_CONSTRAINT_UNIQUE'


def is_unique_violation(error: IntegrityError, constraint: str) -> bool:
    """True if an IntegrityError is a violation of the given unique constraint

    Inspects the DBAPI error's structured fields, never its message text:
        - psycopg 3 (`sqlstate`) / psycopg2 (`pgcode`): SQLSTATE 23505 raised
          by the named constraint (`diag.constraint_name`)
        - sqlite3: extended error name SQLITE_CONSTRAINT_UNIQUE
    """
    orig = error.orig

    sqlstate = getattr(orig, 'sqlstate', None) or getattr(orig, 'pgcode', None)
    if sqlstate is not None:
        diag = getattr(orig, 'diag', None)
        return sqlstate == UNIQUE_VIOLATION and getattr(diag, 'constraint_name', None) == constraint

    return getattr(orig, 'sqlite_errorname', None) == SQLITE_CONSTRAINT_UNIQUE


def handle_sqlalchemy_errors(method: F) -> F:
    """Wrap SQL-interacting DAO methods to handle database errors

    Any SQLAlchemyError left unhandled by the DAO method (pool timeouts,
    refused connections, dropped connections, constraint errors other than
    the hash conflict, ...) becomes a DataStoreError. The DBAPI message is
    kept only on the exception chain.

    Args:
        method (Callable[..., Any]):
            DAO method performing database operations.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on database failures.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            backend = self.engine.dialect.name
            raise DataStoreError(f'{backend} request failed ({e.__class__.__name__}).') from e

    return wrapper
