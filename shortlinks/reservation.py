"""Reserve a hash -> URL mapping against a Link DAO

A reservation is a single conditional insert. Its outcome is one of three
values, so callers branch on the result instead of on DAO exceptions:

    Created(link)            the link was written; carries the stored LinkModel
    Conflict(hash)           the DAO signalled LinkAlreadyExistsError
    TransientFailure(reason) any other DAO failure; `reason` is for logs only

Example:
    >>> match reserve(dao, 'aB3_', 'https://example.com'):
    ...     case Created(link):
    ...         print(link.created_at)
    ...     case Conflict(hash):
    ...         print(f'{hash} is taken')
    ...     case TransientFailure(reason):
    ...         print(reason)
"""

import logging
from dataclasses import dataclass
from typing import TypeAlias

from shortlinks.models import LinkModel
from shortlinks.dao.base import LinkBaseDAO
from shortlinks.dao.exceptions import DataStoreError, LinkAlreadyExistsError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Created:
    link: LinkModel


@dataclass(frozen=True)
class Conflict:
    hash: str


@dataclass(frozen=True)
class TransientFailure:
    reason: str


Reservation: TypeAlias = Created | Conflict | TransientFailure


def reserve(dao: LinkBaseDAO, hash: str, url: str) -> Reservation:
    """Attempt to atomically reserve `hash` for `url`

    Issues exactly one `dao.insert()`. There is no prior existence check:
    the store's conditional write decides.

    Args:
        dao (LinkBaseDAO):
            Store to write to.
        hash (str):
            Candidate short identifier.
        url (str):
            Validated target URL.

    Returns:
        Reservation: Created, Conflict or TransientFailure.
    """
    try:
        link = dao.insert(hash, url)
    except LinkAlreadyExistsError:
        logger.debug('Hash %s is already taken.', hash, extra={'hash': hash})
        return Conflict(hash)
    except DataStoreError as e:
        logger.warning(
            'Failed to reserve hash %s.',
            hash,
            extra={'hash': hash, 'reason': str(e), 'error': e.__class__.__name__},
            exc_info=True,
        )
        return TransientFailure(str(e))
    else:
        return Created(link)
