import logging

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.utils.responses import guarantee_api_response, response_200
from shortlinks.lambdas.ping.constants import PONG, PING


logger = logging.getLogger(__name__)


@guarantee_api_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Liveness check: GET /ping -> 200 "pong!" """
    logger.debug('Ping received.', extra={'event': PING})
    return response_200(PONG)
