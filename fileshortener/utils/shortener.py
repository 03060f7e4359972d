"""Shortcode generation utility

Functions:
    generate_shortcode(length=6):
        Generate a random Base62 shortcode suitable for use as a URL slug.

Example:
    >>> from fileshortener.utils import generate_shortcode
    >>> generate_shortcode()
    'aZ3kP9'

NOTE:
    Shortcodes are random, so two calls may collide with an existing record.
    The store reports a collision as ShortURLAlreadyExistsError; retrying with a
    fresh code is the caller's responsibility.
"""

import secrets
import string

from fileshortener.constants import Shortcode


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits


def generate_shortcode(length: int = Shortcode.LENGTH) -> str:
    """Generate a random shortcode from the Base62 alphabet [a-zA-Z0-9].

    Characters are drawn with `secrets.choice`, so codes are not predictable
    from previously issued ones.

    Args:
        length (int, optional):
            Number of characters. Defaults to 6.

    Returns:
        str: A random alphanumeric shortcode.

    Raises:
        TypeError: if length is not an integer.
        ValueError: if length is not positive.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
