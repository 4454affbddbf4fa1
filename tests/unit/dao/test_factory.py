"""Unit tests for link_dao() in factory.py

Test coverage includes:

1. Backend selection
   - Builds the DAO of the single configured backend with its settings.
   - Prefixes Redis settings and namespaces Redis keys with the app prefix.
   - Strips handler-level options before building the DAO.

2. Invalid configuration
   - Unknown backends, zero or several backends and unexpected settings raise BadConfigurationError.
"""

from unittest.mock import MagicMock

import pytest

from shortlinks.dao import factory
from shortlinks.exceptions import BadConfigurationError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def backends(monkeypatch):
    """Replace DAO classes with mocks."""
    mocks = {
        'dynamodb': MagicMock(name='LinkDynamoDBDAO'),
        'postgres': MagicMock(name='LinkPostgresDAO'),
        'redis': MagicMock(name='LinkRedisDAO'),
    }
    monkeypatch.setattr(factory, 'LinkDynamoDBDAO', mocks['dynamodb'])
    monkeypatch.setattr(factory, 'LinkPostgresDAO', mocks['postgres'])
    monkeypatch.setattr(factory, 'LinkRedisDAO', mocks['redis'])
    monkeypatch.setattr(factory, 'app_prefix', lambda: 'shortlinks:test')
    return mocks


# -------------------------------
# 1. Backend selection
# -------------------------------


def test_link_dao_dynamodb(backends):
    dao = factory.link_dao({'dynamodb': {'table_name': 'links', 'region_name': 'eu-west-1', 'hash_length': 6, 'hash_attempts': 3}})

    backends['dynamodb'].assert_called_once_with(table_name='links', region_name='eu-west-1')
    assert dao is backends['dynamodb'].return_value


def test_link_dao_postgres(backends):
    factory.link_dao({'postgres': {'url': 'postgresql+psycopg://user:pass@db/links', 'acquire_timeout': 1}})

    backends['postgres'].assert_called_once_with(url='postgresql+psycopg://user:pass@db/links', acquire_timeout=1)
    backends['dynamodb'].assert_not_called()


def test_link_dao_redis(backends):
    factory.link_dao({'redis': {'host': 'redis', 'port': 6379, 'db': 0, 'hash_length': 5}})

    backends['redis'].assert_called_once_with(redis_host='redis', redis_port=6379, redis_db=0, prefix='shortlinks:test')


def test_link_dao_with_empty_settings(backends):
    factory.link_dao({'postgres': None})
    backends['postgres'].assert_called_once_with()


# -------------------------------
# 2. Invalid configuration
# -------------------------------


@pytest.mark.parametrize(
    'app_config',
    [
        {},
        None,
        {'mongodb': {'uri': 'mongodb://localhost'}},
        {'dynamodb': {'table_name': 'links'}, 'postgres': {'url': 'sqlite://'}},
    ],
)
def test_link_dao_invalid_backend(backends, app_config):
    with pytest.raises(BadConfigurationError):
        factory.link_dao(app_config)


def test_link_dao_unexpected_settings(backends):
    backends['dynamodb'].side_effect = TypeError("unexpected keyword argument 'tablename'")

    with pytest.raises(BadConfigurationError, match="Invalid settings for the 'dynamodb' backend."):
        factory.link_dao({'dynamodb': {'tablename': 'links'}})
