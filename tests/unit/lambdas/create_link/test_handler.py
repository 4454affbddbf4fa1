"""Unit tests for the create_link lambda handler

Test coverage includes:

1. Successful creation
   - System-generated hash of the configured length, 201, Location header.
   - Custom ids used verbatim.
   - Base64-encoded bodies.

2. Input validation
   - Invalid JSON, non-object bodies, invalid URLs and invalid custom ids give
     400 and persist nothing.

3. Conflicts
   - A taken custom id gives 400 "ID already used".
   - A colliding generated hash gives 503, with optional bounded retries.

4. Failures
   - Store failures and configuration errors give a sanitized 500.
   - The DAO is released on every exit path.
"""

import json
import base64
from collections.abc import Iterator

import pytest

from shortlinks.lambdas.create_link import app
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.exceptions import MissingEnvironmentVariableError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def backend(monkeypatch, fake_dao, appconfig):
    """Route the handler to the in-memory DAO and a fixed configuration."""
    monkeypatch.setattr(app, 'load_config', lambda lambda_name: appconfig)
    monkeypatch.setattr(app, 'link_dao', lambda app_config: fake_dao)
    return fake_dao


@pytest.fixture
def make_event(api_event):
    def _make_event(body) -> dict:
        return {**api_event, 'body': body if isinstance(body, str) else json.dumps(body)}

    return _make_event


@pytest.fixture
def fixed_hashes(monkeypatch):
    """Replace the hash generator with a fixed sequence and record requested lengths."""
    lengths = []

    def _fixed_hashes(*hashes: str) -> list[int]:
        sequence: Iterator[str] = iter(hashes)

        def generate_hash(length):
            lengths.append(length)
            return next(sequence)

        monkeypatch.setattr(app, 'generate_hash', generate_hash)
        return lengths

    return _fixed_hashes


def body_of(result) -> dict:
    return json.loads(result['body'])


# -------------------------------
# 1. Successful creation
# -------------------------------


def test_create_link_with_generated_hash(make_event, fake_dao):
    """Ensure a valid URL creates a link with a 4-symbol hash."""
    result = app.lambda_handler(make_event({'url': 'https://example.com'}), None)
    body = body_of(result)

    assert result['statusCode'] == 201
    assert len(body['id']) == 4
    assert body['url'] == 'https://example.com'
    assert body['createdAt'].endswith('Z')
    assert result['headers']['Location'] == f'https://links.example.com/links/{body["id"]}'
    assert fake_dao.links[body['id']].url == 'https://example.com'


def test_create_link_with_configured_hash_length(make_event, appconfig, fake_dao):
    appconfig['dynamodb']['hash_length'] = 7

    body = body_of(app.lambda_handler(make_event({'url': 'https://example.com'}), None))

    assert len(body['id']) == 7


def test_create_link_with_custom_id(make_event, fake_dao):
    """Ensure a custom id is used verbatim."""
    result = app.lambda_handler(make_event({'url': 'https://example.com/page', 'id': 'my-link'}), None)

    assert result['statusCode'] == 201
    assert body_of(result)['id'] == 'my-link'
    assert list(fake_dao.links) == ['my-link']


def test_create_link_with_null_custom_id(make_event, fixed_hashes):
    """Ensure `"id": null` is treated as no custom id."""
    fixed_hashes('gen1')

    result = app.lambda_handler(make_event({'url': 'https://example.com', 'id': None}), None)

    assert body_of(result)['id'] == 'gen1'


def test_create_link_with_base64_body(api_event):
    event = {**api_event, 'isBase64Encoded': True, 'body': base64.b64encode(b'{"url": "https://example.com", "id": "b64"}').decode()}

    result = app.lambda_handler(event, None)

    assert result['statusCode'] == 201
    assert body_of(result)['id'] == 'b64'


# -------------------------------
# 2. Input validation
# -------------------------------


@pytest.mark.parametrize(
    'body, message',
    [
        ('{not json', 'Bad Request: Invalid JSON body'),
        ('["https://example.com"]', 'Bad Request: Invalid JSON body'),
        ('"https://example.com"', 'Bad Request: Invalid JSON body'),
        ({}, 'Bad Request: Invalid URL passed'),
        ({'url': 'example.com'}, 'Bad Request: Invalid URL passed'),
        ({'url': 'ftp://example.com/file'}, 'Bad Request: Invalid URL passed'),
        ({'url': 'http://exa mple.com'}, 'Bad Request: Invalid URL passed'),
        ({'url': 42}, 'Bad Request: Invalid URL passed'),
        ({'url': 'https://example.com', 'id': ''}, 'Bad Request: Invalid ID passed'),
        ({'url': 'https://example.com', 'id': 'x' * 65}, 'Bad Request: Invalid ID passed'),
        ({'url': 'https://example.com', 'id': 1234}, 'Bad Request: Invalid ID passed'),
    ],
)
def test_create_link_invalid_input(make_event, fake_dao, body, message):
    """Ensure invalid requests give 400 and persist nothing."""
    result = app.lambda_handler(make_event(body), None)

    assert result['statusCode'] == 400
    assert body_of(result) == {'message': message, 'errorType': 'InvalidInput', 'errorCode': 'api:invalid_input'}
    assert result['headers']['X-Error-Kind'] == 'InvalidInput'
    assert fake_dao.links == {}
    assert fake_dao.insert_calls == 0


def test_create_link_without_body(api_event, fake_dao):
    result = app.lambda_handler(api_event, None)

    assert result['statusCode'] == 400
    assert body_of(result)['message'] == 'Bad Request: Invalid URL passed'


# -------------------------------
# 3. Conflicts
# -------------------------------


def test_create_link_with_used_custom_id(make_event, fake_dao):
    """Ensure a taken custom id gives 400 and keeps exactly one link."""
    app.lambda_handler(make_event({'url': 'https://example.com/first', 'id': 'my-link'}), None)

    result = app.lambda_handler(make_event({'url': 'https://example.com/second', 'id': 'my-link'}), None)

    assert result['statusCode'] == 400
    assert body_of(result)['message'] == 'Bad Request: Validation error: ID already used: my-link'
    assert len(fake_dao.links) == 1
    assert fake_dao.links['my-link'].url == 'https://example.com/first'


def test_create_link_with_colliding_generated_hash(make_event, fake_dao, fixed_hashes):
    """Ensure a collision of a generated hash gives 503 without retrying by default."""
    fake_dao.insert('aaaa', 'https://example.com/existing')
    fixed_hashes('aaaa', 'bbbb')

    result = app.lambda_handler(make_event({'url': 'https://example.com'}), None)

    assert result['statusCode'] == 503
    assert body_of(result) == {
        'message': 'Service Unavailable: Service temporarily unavailable, please try again.',
        'errorType': 'ServiceUnavailable',
        'errorCode': 'api:service_unavailable',
    }
    assert fake_dao.insert_calls == 2
    assert 'bbbb' not in fake_dao.links


def test_create_link_retries_generated_hash_when_configured(make_event, appconfig, fake_dao, fixed_hashes):
    """Ensure opt-in retries draw a fresh hash after a collision."""
    appconfig['dynamodb']['hash_attempts'] = 3
    fake_dao.insert('aaaa', 'https://example.com/existing')
    lengths = fixed_hashes('aaaa', 'aaaa', 'bbbb')

    result = app.lambda_handler(make_event({'url': 'https://example.com'}), None)

    assert result['statusCode'] == 201
    assert body_of(result)['id'] == 'bbbb'
    assert lengths == [4, 4, 4]


def test_create_link_retries_are_bounded(make_event, appconfig, fake_dao, fixed_hashes):
    """Ensure retries stop at MAX_HASH_ATTEMPTS and end in 503."""
    appconfig['dynamodb']['hash_attempts'] = 100
    fake_dao.insert('aaaa', 'https://example.com/existing')
    lengths = fixed_hashes(*['aaaa'] * 100)

    result = app.lambda_handler(make_event({'url': 'https://example.com'}), None)

    assert result['statusCode'] == 503
    assert len(lengths) == 5


def test_create_link_never_retries_custom_id(make_event, appconfig, fake_dao):
    appconfig['dynamodb']['hash_attempts'] = 5
    fake_dao.insert('my-link', 'https://example.com/existing')

    result = app.lambda_handler(make_event({'url': 'https://example.com', 'id': 'my-link'}), None)

    assert result['statusCode'] == 400
    assert fake_dao.insert_calls == 2


# -------------------------------
# 4. Failures
# -------------------------------


def test_create_link_store_failure(make_event, fake_dao):
    """Ensure store failures give a 500 without driver details."""
    fake_dao.failure = DataStoreError("Can't connect to Redis at 10.0.0.7:6379/0.")

    result = app.lambda_handler(make_event({'url': 'https://example.com'}), None)

    assert result['statusCode'] == 500
    assert body_of(result) == {
        'message': 'Internal Error: Could not create the link.',
        'errorType': 'InternalError',
        'errorCode': 'api:internal_error',
    }
    assert '10.0.0.7' not in result['body']
    assert fake_dao.close_calls == 1


def test_create_link_missing_configuration(monkeypatch, make_event):
    """Ensure configuration errors give a sanitized 500."""

    def load_config(lambda_name):
        raise MissingEnvironmentVariableError("Missing required environment variables: 'APPCONFIG_APP_ID'")

    monkeypatch.setattr(app, 'load_config', load_config)

    result = app.lambda_handler(make_event({'url': 'https://example.com'}), None)

    assert result['statusCode'] == 500
    assert 'APPCONFIG_APP_ID' not in result['body']


@pytest.mark.parametrize('option, value', [('hash_length', 0), ('hash_length', '4'), ('hash_length', 65), ('hash_attempts', 0), ('hash_attempts', True)])
def test_create_link_invalid_hash_options(make_event, appconfig, fake_dao, option, value):
    appconfig['dynamodb'][option] = value

    result = app.lambda_handler(make_event({'url': 'https://example.com'}), None)

    assert result['statusCode'] == 500
    assert fake_dao.insert_calls == 0


def test_create_link_releases_dao(make_event, fake_dao):
    app.lambda_handler(make_event({'url': 'https://example.com'}), None)
    assert fake_dao.close_calls == 1
