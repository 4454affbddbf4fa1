"""Select and build the active Link DAO from lambda configuration

Functions:
    link_dao(app_config) -> LinkBaseDAO
        Build the DAO for the single backend present in `app_config`.

Example:
    >>> config = {'postgres': {'url': 'postgresql+psycopg://user:pass@db/links', 'hash_length': 5}}
    >>> with link_dao(config) as dao:
    ...     dao.get('aB3_')
"""

import logging

from shortlinks.types import LambdaConfiguration
from shortlinks.exceptions import BadConfigurationError
from shortlinks.dao.base import LinkBaseDAO
from shortlinks.dao.dynamodb import LinkDynamoDBDAO
from shortlinks.dao.postgres import LinkPostgresDAO
from shortlinks.dao.redis import LinkRedisDAO
from shortlinks.utils.config import app_prefix
from shortlinks.utils.constants import HANDLER_OPTIONS


logger = logging.getLogger(__name__)

BACKENDS = ('dynamodb', 'postgres', 'redis')


def link_dao(app_config: LambdaConfiguration) -> LinkBaseDAO:
    """Build the Link DAO for the active backend

    Handler-level options (`hash_length`, `hash_attempts`) are ignored here;
    everything else in the backend section is passed to the DAO constructor.
    Redis settings get the `redis_` prefix and the application key prefix,
    as RedisClientMixin expects.

    Args:
        app_config (LambdaConfiguration):
            `{<backend>: {<settings>}}` as returned by load_config().

    Returns:
        LinkBaseDAO: a DAO ready to be used as a context manager.

    Raises:
        BadConfigurationError:
            If the configuration names zero or several backends, an unknown
            backend, or settings the backend doesn't accept.
        DataStoreError:
            If the backend checks connectivity on construction and fails.
    """
    if not isinstance(app_config, dict) or len(app_config) != 1:
        raise BadConfigurationError(f'Expected exactly one active backend, got: {list(app_config or {})}.')

    backend, settings = next(iter(app_config.items()))
    settings = {k: v for k, v in (settings or {}).items() if k not in HANDLER_OPTIONS}
    logger.debug('Using %s as the backend database for links.', backend)

    try:
        if backend == 'dynamodb':
            return LinkDynamoDBDAO(**settings)
        elif backend == 'postgres':
            return LinkPostgresDAO(**settings)
        elif backend == 'redis':
            redis_config = {f'redis_{k}': v for k, v in settings.items()}
            return LinkRedisDAO(**redis_config, prefix=app_prefix())
    except TypeError as e:
        raise BadConfigurationError(f"Invalid settings for the '{backend}' backend.") from e

    raise BadConfigurationError(f"Unknown backend '{backend}' (expected one of: {', '.join(BACKENDS)}).")
