"""API Gateway (Lambda proxy) response rendering

Every handler response goes through this module, so the error taxonomy is
rendered the same way everywhere:

    - status code from the ApiError subclass (400, 404, 503, 500)
    - JSON body: {"message": "<prefix>: <summary>", "errorType": <kind>, "errorCode": <code>}
    - `X-Error-Kind` header carrying the kind

Internal fault details never reach a response: anything that is not an
ApiError is logged and replaced with a fixed InternalError summary.

Functions:
    response(status_code, body) -> dict
    response_200(body) -> dict
    response_201(body, location) -> dict
    error_response(error) -> dict
    guarantee_api_response(handler) -> handler
"""

import json
import logging
import functools
from typing import Any
from collections.abc import Callable

from shortlinks.exceptions import ApiError, InternalError
from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse, HttpHeaders
from shortlinks.utils.constants import CORS_HEADERS


logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_SUMMARY = 'An unexpected error occurred.'


def response(status_code: int, body: Any, headers: HttpHeaders | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {
            'Content-Type': 'application/json',
            **CORS_HEADERS,
            **(headers or {}),
        },
        'body': json.dumps(body),
    }


def response_200(body: Any) -> LambdaResponse:
    return response(200, body)


def response_201(body: Any, *, location: str | None = None) -> LambdaResponse:
    return response(201, body, headers={'Location': location} if location else None)


def error_response(error: ApiError) -> LambdaResponse:
    """Render an ApiError as a Lambda proxy response

    Example:
        >>> error_response(NotFoundError('Link not found with short ID: abc1'))['statusCode']
        404
    """
    body = {
        'message': error.message,
        'errorType': error.kind,
        'errorCode': error.error_code,
    }
    return response(error.status_code, body, headers={'X-Error-Kind': error.kind})


def guarantee_api_response(handler: Callable[[LambdaEvent, LambdaContext], LambdaResponse]) -> Callable:
    """Decorator: turn every outcome of a lambda handler into an API response

    - ApiError subclasses are rendered with their own status code and prefix.
    - Anything else is logged with its traceback and rendered as a sanitized
      InternalError (500).

    Example:
        >>> @guarantee_api_response
        ... def lambda_handler(event, context):
        ...     raise InvalidInputError('Invalid ID passed')
        >>> lambda_handler({}, None)['statusCode']
        400
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        try:
            return handler(event, context)
        except ApiError as error:
            return error_response(error)
        except Exception as error:
            logger.exception(
                'Unhandled error in lambda handler. Responding with 500.',
                extra={'error': error.__class__.__name__, 'errorCode': getattr(error, 'error_code', None)},
            )
            return error_response(InternalError(UNEXPECTED_ERROR_SUMMARY))

    return wrapper
