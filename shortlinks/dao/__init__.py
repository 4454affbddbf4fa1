from shortlinks.dao.base import LinkBaseDAO
from shortlinks.dao.dynamodb import LinkDynamoDBDAO
from shortlinks.dao.postgres import LinkPostgresDAO
from shortlinks.dao.redis import LinkRedisDAO
from shortlinks.dao.factory import link_dao


__all__ = [
    'LinkBaseDAO',
    'LinkDynamoDBDAO',
    'LinkPostgresDAO',
    'LinkRedisDAO',
    'link_dao',
]
