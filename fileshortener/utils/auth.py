"""Credential check for the administrative surface

Functions:
    check_credentials(username, password, *, expected_username, expected_password) -> str
        Validate a username/password pair against the configured admin credentials.
"""

import hmac

from fileshortener.exceptions import AuthenticationError, ValidationError


def check_credentials(username: str | None, password: str | None, *, expected_username: str, expected_password: str) -> str:
    """Validate a username/password pair in constant time

    Both comparisons always run, so the response time doesn't reveal which half was wrong.

    Returns:
        str: the authenticated username.

    Raises:
        ValidationError:
            If username or password is missing or empty.
        AuthenticationError:
            If the pair doesn't match the expected credentials.

    Example:
        >>> check_credentials('admin', 's3cret', expected_username='admin', expected_password='s3cret')
        'admin'
    """
    if not username or not password:
        raise ValidationError('Username and password must be non-empty.')

    username_ok = hmac.compare_digest(username.encode('utf-8'), expected_username.encode('utf-8'))
    password_ok = hmac.compare_digest(password.encode('utf-8'), expected_password.encode('utf-8'))
    if not (username_ok and password_ok):
        raise AuthenticationError('Invalid username or password.')

    return username
