"""Abstract base class for Link data access objects (DAOs).

This class establishes a consistent contract for all Link DAO implementations,
regardless of the underlying storage mechanism (DynamoDB, PostgreSQL, Redis).

Responsibilities:
    - Provide an atomic insert-if-absent for LinkModel objects.
    - Provide point lookups by hash and a recency-ordered listing.
    - Standardize error handling across multiple data store implementations:
      the conflict signal (LinkAlreadyExistsError) is computed once per backend,
      every other store failure surfaces as DataStoreError.
    - Scope store resources to a `with` block so they are released on every exit path.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shortlinks.dao import LinkPostgresDAO

        >>> with LinkPostgresDAO(url='postgresql+psycopg://...') as dao:
        ...     link = dao.insert('aB3_', 'https://example.com/blog/article-123')
        ...     retrieved = dao.get('aB3_')

        >>> print(retrieved.url)
        https://example.com/blog/article-123

        >>> print(retrieved.created_at == link.created_at)
        True
"""

from abc import ABC, abstractmethod

from shortlinks.models import LinkModel
from shortlinks.utils.constants import LINKS_PAGE_SIZE


class LinkBaseDAO(ABC):
    """Interface for Link data access objects (DAOs).

    Methods:
        insert(hash: str, url: str, **kwargs) -> LinkModel:
            Atomically insert a new link unless its hash is taken.
            Raises LinkAlreadyExistsError if the hash already exists.
            Raises DataStoreError on connection or write failure.

        get(hash: str, **kwargs) -> LinkModel:
            Retrieve a link by hash.
            Raises LinkNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        recent(limit: int, **kwargs) -> list[LinkModel]:
            Retrieve up to `limit` links, newest first.
            Raises DataStoreError on connection or read failure.

        close() -> None:
            Release store resources (engines, clients). Idempotent.

    Subclassing:
        Datastore-specific implementations (e.g., LinkDynamoDBDAO or
        LinkPostgresDAO) must extend this class and implement all
        abstract methods. Implementations must never check-then-write:
        uniqueness is the store's conditional write, nothing else.

    NOTE:
        - Links are immutable. The DAO does not provide update or delete.
    """

    @abstractmethod
    def insert(self, hash: str, url: str, **kwargs) -> LinkModel:
        """Insert a new link into the data store if its hash is free.

        Args:
            hash (str):
                The short identifier to reserve.

            url (str):
                The target URL.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkModel: the persisted link, including its creation timestamp.

        Raises:
            LinkAlreadyExistsError:
                If a link with the same hash already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, hash: str, **kwargs) -> LinkModel:
        """Retrieve a link from the data store by its hash.

        Args:
            hash (str):
                The hash of the link to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkModel: The stored link.

        Raises:
            LinkNotFoundError:
                If no link with the given hash exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def recent(self, limit: int = LINKS_PAGE_SIZE, **kwargs) -> list[LinkModel]:
        """Retrieve the most recently created links.

        Args:
            limit (int):
                Maximum number of links to return. Defaults to LINKS_PAGE_SIZE.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            list[LinkModel]: links ordered by creation recency, newest first.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    def close(self) -> None:
        """Release store resources. Backends holding connections override this."""
        return None

    def __enter__(self) -> 'LinkBaseDAO':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
