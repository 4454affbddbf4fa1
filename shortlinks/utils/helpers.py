"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_link_location() -> str
        Get the public URL of a link resource for a given hash
    link_to_dict() -> dict
        Render a LinkModel in its wire representation
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present

Example:
    Typical usage inside a Lambda handler:

        >>> from shortlinks.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import functools
from datetime import UTC
from typing import Any
from collections.abc import Callable

from shortlinks.models import LinkModel
from shortlinks.exceptions import MissingEnvironmentVariableError


def base_url(event: dict[str, Any]) -> str:
    """Extract public base URL from API Gateway event

    Works seamlessly with both custom and default AWS API Gateway domains.
    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://links.example.com"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        # If the domain is a custom domain (no execute-api), skip stage
        return f'https://{domain}'
    elif domain:
        # Otherwise include the stage (for AWS default domains)
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def get_link_location(hash: str, event: dict[str, Any]) -> str:
    """Get the public URL of the `/links/{id}` resource

    Args:
        hash (str): link hash
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: link resource URL
    """
    return f'{base_url(event).rstrip("/")}/links/{hash}'


def link_to_dict(link: LinkModel) -> dict[str, Any]:
    """Render a link as `{id, url, createdAt}`

    Naive timestamps (e.g. from SQLite) are assumed to be UTC.

    Example:
        >>> link_to_dict(LinkModel(hash='aB3_', url='https://example.com', created_at=datetime(2025, 10, 15, tzinfo=UTC)))
        {'id': 'aB3_', 'url': 'https://example.com', 'createdAt': '2025-10-15T00:00:00.000Z'}
    """
    created_at = link.created_at
    if created_at is not None:
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        # fmt: off
        created_at = created_at.astimezone(UTC) \
                               .isoformat(timespec='milliseconds') \
                               .replace('+00:00', 'Z')
        # fmt: on
    return {'id': link.hash, 'url': link.url, 'createdAt': created_at}


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator
