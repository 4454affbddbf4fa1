import logging

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.dao import link_dao
from shortlinks.dao.exceptions import LinkNotFoundError, DataStoreError
from shortlinks.exceptions import InvalidInputError, NotFoundError, InternalError
from shortlinks.utils import load_config, link_to_dict
from shortlinks.utils.responses import guarantee_api_response, response_200
from shortlinks.lambdas.get_link.constants import (
    INVALID_ID,
    LINK_NOT_FOUND_SUMMARY,
    LOOKUP_FAILED,
    LINK_FOUND,
    LINK_NOT_FOUND,
    LINK_LOOKUP_FAILED,
)


logger = logging.getLogger(__name__)

LAMBDA_NAME = 'get_link'


@guarantee_api_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle GET /links/{id} requests to resolve a short link

    HTTP responses:
        200: {id, url, createdAt}
        400: Bad Request (missing or empty `id` path parameter)
        404: Not Found (no link with this id)
        500: Internal Error (store failure or misconfiguration)

    Example:
        >>> event = {'pathParameters': {'id': 'aB3_'}}
        >>> response = lambda_handler(event, None)
        >>> json.loads(response['body'])['url']
        'https://example.com'
    """
    hash = (event.get('pathParameters') or {}).get('id')
    if not hash:
        raise InvalidInputError(INVALID_ID)

    app_config = load_config(LAMBDA_NAME)

    with link_dao(app_config) as dao:
        try:
            link = dao.get(hash)
        except LinkNotFoundError as e:
            logger.info('Link not found. Responding with 404.', extra={'event': LINK_NOT_FOUND, 'hash': hash})
            raise NotFoundError(LINK_NOT_FOUND_SUMMARY.format(hash=hash)) from e
        except DataStoreError as e:
            logger.exception('Link lookup failed. Responding with 500.', extra={'event': LINK_LOOKUP_FAILED, 'hash': hash})
            raise InternalError(LOOKUP_FAILED) from e

    logger.debug('Link found.', extra={'event': LINK_FOUND, 'hash': hash})
    return response_200(link_to_dict(link))
