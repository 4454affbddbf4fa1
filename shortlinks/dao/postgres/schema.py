"""SQLAlchemy Core schema for the relational links store

    links
    ├── id          INTEGER      primary key, insertion order (recency listing)
    ├── hash        VARCHAR(64)  NOT NULL, UNIQUE (links_hash_uniq)
    ├── url         TEXT         NOT NULL
    └── created_at  TIMESTAMPTZ  NOT NULL DEFAULT now()
"""

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, Text, UniqueConstraint, func

from shortlinks.utils.constants import MAX_HASH_LENGTH


HASH_UNIQUE_CONSTRAINT = 'links_hash_uniq'

metadata = MetaData()

links_table = Table(
    'links',
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('hash', String(MAX_HASH_LENGTH), nullable=False),
    Column('url', Text, nullable=False),
    Column('created_at', DateTime(timezone=True), nullable=False, server_default=func.now()),
    UniqueConstraint('hash', name=HASH_UNIQUE_CONSTRAINT),
)
