from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class LinkModel:
    """Represent a short link mapping.

    Links are immutable: once created they are never updated or deleted.

    Attributes:
        hash (str):
            The unique, case-sensitive short identifier of the link.
        url (str):
            The original long URL that the hash resolves to.
        created_at (Optional[datetime]):
            Time the store accepted the link. None only before insertion.

    Example:
        >>> from datetime import datetime, UTC
        >>> link = LinkModel(
        ...     hash="aB3_",
        ...     url="https://example.com/article/123",
        ...     created_at=datetime(2025, 10, 15, tzinfo=UTC),
        ... )
        >>> link.hash
        'aB3_'
        >>> link.url
        'https://example.com/article/123'
    """
    hash: str
    url: str
    created_at: Optional[datetime] = None
