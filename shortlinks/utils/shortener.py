"""Hash generation utility

This module provides a helper function for generating short, random,
URL-safe hashes for system-assigned links.

Functions:
    generate_hash(length=4, alphabet=URL_SAFE_ALPHABET):
        Generate a random hash suitable for use as a URL slug.

Example:
    >>> from shortlinks.utils import generate_hash
    >>> generate_hash()
    'k_9Q'
"""

import secrets
import string

from shortlinks.utils.constants import DEFAULT_HASH_LENGTH


# 26 lowercase + 26 uppercase + 10 digits + '-' + '_' = 64 symbols
URL_SAFE_ALPHABET = string.ascii_letters + string.digits + '-_'


def generate_hash(length: int = DEFAULT_HASH_LENGTH, alphabet: str = URL_SAFE_ALPHABET) -> str:
    """Generate a random, URL-safe short hash.

    Each symbol is drawn independently from a cryptographically secure source,
    so consecutive hashes carry no sequential pattern and cannot be enumerated
    from one another.

    Args:
        length (int, optional):
            Number of symbols in the resulting hash.
            Defaults to 4 (64**4 = 16,777,216 possible hashes).

        alphabet (str, optional):
            Symbols to draw from. Defaults to [A-Za-z0-9_-].

    Returns:
        str: A random hash of exactly `length` symbols.

    Example:
        >>> len(generate_hash(length=7))
        7

    NOTE:
        - The generator never consults a data store. Collisions are rare but
          possible and are detected by the store's conditional write.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    if not isinstance(alphabet, str):
        raise TypeError(f'Alphabet must be of type string (given type: {type(alphabet)}).')
    if len(set(alphabet)) < 2:
        raise ValueError(f'Alphabet must contain at least two distinct symbols (given value: {alphabet!r}).')

    return ''.join(secrets.choice(alphabet) for _ in range(length))
