from shortlinks.dao.postgres.schema import metadata, links_table
from shortlinks.dao.postgres.link_postgres_dao import LinkPostgresDAO


__all__ = [
    'metadata',
    'links_table',
    'LinkPostgresDAO',
]
