import logging

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.dao import link_dao
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.exceptions import InternalError
from shortlinks.utils import load_config, link_to_dict
from shortlinks.utils.responses import guarantee_api_response, response_200
from shortlinks.utils.constants import LINKS_PAGE_SIZE
from shortlinks.lambdas.list_links.constants import LISTING_FAILED, LINKS_LISTED, LINKS_LISTING_FAILED


logger = logging.getLogger(__name__)

LAMBDA_NAME = 'list_links'


@guarantee_api_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle GET /links requests: the 30 newest links, newest first

    HTTP responses:
        200: [{id, url, createdAt}, ...]
        500: Internal Error (store failure or misconfiguration)
    """
    app_config = load_config(LAMBDA_NAME)

    with link_dao(app_config) as dao:
        try:
            links = dao.recent(LINKS_PAGE_SIZE)
        except DataStoreError as e:
            logger.exception('Listing links failed. Responding with 500.', extra={'event': LINKS_LISTING_FAILED})
            raise InternalError(LISTING_FAILED) from e

    logger.debug('Listed %d links.', len(links), extra={'event': LINKS_LISTED, 'count': len(links)})
    return response_200([link_to_dict(link) for link in links])
