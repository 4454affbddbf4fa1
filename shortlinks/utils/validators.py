"""Input validation helpers for API requests.

Functions:
    is_web_uri(value) -> bool
        True if value is a well-formed absolute http(s) URI
    is_valid_custom_hash(value) -> bool
        True if value can be stored as a caller-chosen hash

Example:
    >>> is_web_uri('https://example.com/path?q=1')
    True
    >>> is_web_uri('example.com')
    False
    >>> is_web_uri('http://exa mple.com')
    False
"""

from typing import Any

from pydantic import HttpUrl, TypeAdapter, ValidationError

from shortlinks.utils.constants import MAX_HASH_LENGTH


__all__ = ['is_web_uri', 'is_valid_custom_hash']

_http_url = TypeAdapter(HttpUrl)


def is_web_uri(value: Any) -> bool:
    """Check that a value is a well-formed absolute web URI

    A web URI has an `http` or `https` scheme and a non-empty, valid host.
    The stored URL is the caller's original string; the parsed form is
    only used for validation.

    Args:
        value (Any): candidate URL, usually straight from a request body

    Returns:
        bool: True if the value is a web URI, False otherwise (never raises)
    """
    if not isinstance(value, str) or not value:
        return False

    try:
        _http_url.validate_python(value)
    except ValidationError:
        return False
    return True


def is_valid_custom_hash(value: Any) -> bool:
    """Check that a caller-chosen hash is a non-empty string the stores can hold"""
    return isinstance(value, str) and 0 < len(value) <= MAX_HASH_LENGTH
