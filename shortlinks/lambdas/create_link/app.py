import json
import base64
import logging
from typing import Any

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse, LambdaConfiguration
from shortlinks.dao import link_dao
from shortlinks.exceptions import BadConfigurationError, InvalidInputError, ServiceUnavailableError, InternalError
from shortlinks.reservation import reserve, Created, Conflict, TransientFailure
from shortlinks.utils import generate_hash, load_config, get_link_location, link_to_dict, is_web_uri, is_valid_custom_hash
from shortlinks.utils.responses import guarantee_api_response, response_201
from shortlinks.utils.constants import DEFAULT_HASH_LENGTH, DEFAULT_HASH_ATTEMPTS, MAX_HASH_ATTEMPTS, MAX_HASH_LENGTH
from shortlinks.lambdas.create_link.constants import (
    INVALID_JSON_BODY,
    INVALID_URL,
    INVALID_CUSTOM_ID,
    ID_ALREADY_USED,
    TRY_AGAIN,
    RESERVATION_FAILED,
    LINK_CREATED,
    LINK_HASH_TAKEN,
    LINK_HASH_COLLISION,
    LINK_RESERVATION_FAILED,
    LINK_INVALID_REQUEST,
)


logger = logging.getLogger(__name__)

LAMBDA_NAME = 'create_link'


def request_body(event: LambdaEvent) -> dict[str, Any]:
    """Decode the JSON object sent as request body

    Raises:
        InvalidInputError: If the body is not valid JSON or not a JSON object.
    """
    body = event.get('body') or '{}'
    try:
        if event.get('isBase64Encoded'):
            body = base64.b64decode(body).decode('utf-8')
        payload = json.loads(body)
    except (ValueError, TypeError) as e:
        raise InvalidInputError(INVALID_JSON_BODY) from e

    if not isinstance(payload, dict):
        raise InvalidInputError(INVALID_JSON_BODY)
    return payload


def hash_options(app_config: LambdaConfiguration) -> tuple[int, int]:
    """Read `hash_length` and `hash_attempts` from the active backend section

    `hash_attempts` is capped at MAX_HASH_ATTEMPTS.

    Raises:
        BadConfigurationError: If either option is not a positive integer or the length is too long.
    """
    settings = next(iter(app_config.values()), None) or {}
    length = settings.get('hash_length', DEFAULT_HASH_LENGTH)
    attempts = settings.get('hash_attempts', DEFAULT_HASH_ATTEMPTS)

    for name, value in (('hash_length', length), ('hash_attempts', attempts)):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise BadConfigurationError(f"'{name}' must be a positive integer, got {value!r}.")
    if length > MAX_HASH_LENGTH:
        raise BadConfigurationError(f"'hash_length' must be at most {MAX_HASH_LENGTH}, got {length}.")

    return length, min(attempts, MAX_HASH_ATTEMPTS)


@guarantee_api_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle POST /links requests to create short links

    This Lambda handler follows this procedure to create links:
    - Step 1: Validate request body (`url` and optional custom `id`)
    - Step 2: Load application config for the active backend
    - Step 3: Use the custom id verbatim or generate a random hash
    - Step 4: Reserve hash -> url with a single conditional insert (via DAO)
    - Step 5: Respond to user with 201 and the created link

    HTTP responses:
        201: Link created
            body: {id, url, createdAt}
            Location: URL of the new /links/{id} resource
        400: Bad Request
            invalid JSON body, invalid `url`, invalid or already used custom `id`
        503: Service Unavailable
            a generated hash collided with an existing link; retry
        500: Internal Error
            the store failed or the lambda is misconfigured

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            Lambda Proxy response with status code, headers and JSON body.

    Example:
        >>> event = {'body': '{"url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['id']
        'aB3_'
    """
    # 1- Validate request body
    payload = request_body(event)
    url = payload.get('url')
    if not is_web_uri(url):
        logger.info('Rejected link with invalid url. Responding with 400.', extra={'event': LINK_INVALID_REQUEST})
        raise InvalidInputError(INVALID_URL)

    custom_hash = payload.get('id')
    has_custom_hash = custom_hash is not None
    if has_custom_hash and not is_valid_custom_hash(custom_hash):
        logger.info('Rejected link with invalid custom id. Responding with 400.', extra={'event': LINK_INVALID_REQUEST})
        raise InvalidInputError(INVALID_CUSTOM_ID)

    # 2- Load application config
    app_config = load_config(LAMBDA_NAME)
    hash_length, hash_attempts = hash_options(app_config)

    # 3-4- Accept or generate the hash, then reserve it
    attempts = 1 if has_custom_hash else hash_attempts
    with link_dao(app_config) as dao:
        for attempt in range(1, attempts + 1):
            hash = custom_hash if has_custom_hash else generate_hash(hash_length)
            result = reserve(dao, hash, url)
            if not isinstance(result, Conflict):
                break
            if not has_custom_hash:
                logger.info(
                    'Generated hash collided (attempt %d of %d).',
                    attempt,
                    attempts,
                    extra={'event': LINK_HASH_COLLISION, 'hash': hash},
                )

    # 5- Classify outcome and respond
    match result:
        case Created(link=link):
            logger.info('Link created. Responding with 201.', extra={'event': LINK_CREATED, 'hash': link.hash})
            return response_201(link_to_dict(link), location=get_link_location(link.hash, event))
        case Conflict(hash=hash) if has_custom_hash:
            logger.info('Custom id already used. Responding with 400.', extra={'event': LINK_HASH_TAKEN, 'hash': hash})
            raise InvalidInputError(ID_ALREADY_USED.format(hash=hash))
        case Conflict(hash=hash):
            logger.warning('Generated hash already taken. Responding with 503.', extra={'event': LINK_HASH_TAKEN, 'hash': hash})
            raise ServiceUnavailableError(TRY_AGAIN)
        case TransientFailure(reason=reason):
            logger.error('Link reservation failed. Responding with 500.', extra={'event': LINK_RESERVATION_FAILED, 'reason': reason})
            raise InternalError(RESERVATION_FAILED)
