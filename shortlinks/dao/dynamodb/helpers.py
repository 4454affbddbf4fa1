import functools
from typing import TypeVar, Any
from collections.abc import Callable

from botocore.exceptions import BotoCoreError, ClientError

from shortlinks.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])

CONDITIONAL_CHECK_FAILED = 'ConditionalCheckFailedException'


def is_conditional_check_failure(error: ClientError) -> bool:
    """True if a ClientError is DynamoDB rejecting a ConditionExpression"""
    return error.response.get('Error', {}).get('Code') == CONDITIONAL_CHECK_FAILED


def handle_dynamodb_errors(method: F) -> F:
    """Wrap DynamoDB-interacting DAO methods to handle AWS errors

    Any botocore failure left unhandled by the DAO method (throttling,
    timeouts, endpoint errors, missing tables, ...) becomes a DataStoreError.
    The AWS error code is kept in the message; the caller-facing layer never
    shows it.

    Args:
        method (Callable[..., Any]):
            DAO method performing DynamoDB operations.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on DynamoDB failures.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code', 'Unknown')
            raise DataStoreError(f"DynamoDB request on table '{self.table_name}' failed ({code}).") from e
        except BotoCoreError as e:
            raise DataStoreError(f"Can't reach DynamoDB table '{self.table_name}'.") from e

    return wrapper
