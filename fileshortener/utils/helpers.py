"""Helper utilities for request handlers.

Handlers receive API Gateway proxy-shaped events:

    {
        "httpMethod": "POST",
        "path": "/admin/urls",
        "pathParameters": {"shortcode": "abc123"},
        "headers": {"Host": "s.example.com", "Cookie": "shorten_session=..."},
        "body": "{\"target_url\": \"https://example.com\"}",
        "isBase64Encoded": false,
        "requestContext": {"domainName": "s.example.com"}
    }

Functions:
    base_url() -> str
        Extract the public base URL from an event
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    headers() -> dict[str, str]
        Return the event headers with lower-cased names
    parse_body() -> dict[str, str]
        Decode a JSON or form-encoded request body
    session_token() -> str | None
        Extract the session token from the Cookie header
    basic_auth() -> tuple[str, str] | None
        Extract HTTP Basic credentials from the Authorization header
    session_cookie() / expired_session_cookie() -> str
        Build Set-Cookie header values for the session cookie
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unhandled handler exceptions into a JSON 500 response

Example:
    >>> from fileshortener.utils.helpers import base_url
    >>> base_url({'headers': {'Host': 's.example.com', 'X-Forwarded-Proto': 'https'}})
    'https://s.example.com'
    >>> base_url({})
    'http://localhost:5768'
"""

import json
import base64
import binascii
import logging
import functools
from http.cookies import SimpleCookie, CookieError
from urllib.parse import parse_qs
from typing import Any
from collections.abc import Callable

from fileshortener.types import HandlerEvent
from fileshortener.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from fileshortener.exceptions import ValidationError
from fileshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def headers(event: HandlerEvent) -> dict[str, str]:
    """Return the event headers with lower-cased names (HTTP header names are case-insensitive)"""
    return {name.lower(): value for name, value in (event.get('headers') or {}).items()}


def base_url(event: HandlerEvent, configured: str | None = None) -> str:
    """Extract the public base URL of the service

    Resolution order:
        1. `configured` (shortener.base_url in the config), if set
        2. Host header, with the scheme from X-Forwarded-Proto (default http)
        3. requestContext.domainName over https
        4. http://localhost:5768

    Args:
        event (dict): handler event
        configured (str | None): configured public base URL

    Returns:
        str: Base URL without a trailing slash
    """
    if configured:
        return configured.rstrip('/')

    request_headers = headers(event)
    host = request_headers.get('host')
    if host:
        scheme = request_headers.get('x-forwarded-proto', 'http')
        return f'{scheme}://{host}'

    domain = (event.get('requestContext') or {}).get('domainName') or ''
    if domain:
        return f'https://{domain}'

    # Fallback: local invocation (tests, scripts, etc.)
    return 'http://localhost:5768'


def get_short_url(shortcode: str, event: HandlerEvent, configured: str | None = None) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        event (dict): handler event
        configured (str | None): configured public base URL

    Returns:
        str: short url string representation
    """
    return f'{base_url(event, configured)}/{shortcode}'


def parse_body(event: HandlerEvent) -> dict[str, Any]:
    """Decode the request body as JSON, or as a form when the content type says so

    Form fields given more than once keep their first value.

    Raises:
        ValidationError: if the body isn't valid JSON, or doesn't decode to an object.
    """
    raw = event.get('body') or ''
    if event.get('isBase64Encoded') and raw:
        try:
            raw = base64.b64decode(raw).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValidationError('Request body is not valid base64-encoded UTF-8.') from e

    content_type = headers(event).get('content-type', '')
    if content_type.startswith('application/x-www-form-urlencoded'):
        return {name: values[0] for name, values in parse_qs(raw, keep_blank_values=True).items()}

    try:
        body = json.loads(raw or '{}')
    except json.JSONDecodeError as e:
        raise ValidationError('Request body is not valid JSON.') from e

    if not isinstance(body, dict):
        raise ValidationError('Request body must be a JSON object.')
    return body


def session_token(event: HandlerEvent, cookie_name: str) -> str | None:
    """Extract the session token from the Cookie header, None if absent or unparsable"""
    cookie_header = headers(event).get('cookie')
    if not cookie_header:
        return None

    cookies = SimpleCookie()
    try:
        cookies.load(cookie_header)
    except CookieError:
        logger.debug('Ignoring malformed Cookie header.')
        return None

    morsel = cookies.get(cookie_name)
    return morsel.value if morsel is not None and morsel.value else None


def basic_auth(event: HandlerEvent) -> tuple[str, str] | None:
    """Extract (username, password) from an HTTP Basic Authorization header

    Returns:
        tuple[str, str] | None: credentials, or None when the header is missing or malformed.
    """
    authorization = headers(event).get('authorization', '')
    scheme, _, encoded = authorization.partition(' ')
    if scheme.lower() != 'basic' or not encoded:
        return None

    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError):
        return None

    username, separator, password = decoded.partition(':')
    if not separator:
        return None
    return username, password


def session_cookie(name: str, value: str, *, max_age: int, secure: bool = False) -> str:
    """Build the Set-Cookie header value that attaches a session token"""
    cookie = f'{name}={value}; Path=/; Max-Age={max_age}; HttpOnly; SameSite=Lax'
    return f'{cookie}; Secure' if secure else cookie


def expired_session_cookie(name: str, *, secure: bool = False) -> str:
    """Build the Set-Cookie header value that clears a session token"""
    cookie = f'{name}=; Path=/; Max-Age=0; Expires=Thu, 01 Jan 1970 00:00:00 GMT; HttpOnly; SameSite=Lax'
    return f'{cookie}; Secure' if secure else cookie


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with a JSON 500 when a handler raises

    When running locally the exception is re-raised instead, so it surfaces
    with its traceback during development.
    """

    @functools.wraps(handler)
    def wrapper(event: HandlerEvent, *args, **kwargs):
        try:
            return handler(event, *args, **kwargs)
        except Exception as e:
            if running_locally():
                raise
            logger.exception(
                'Unhandled exception in handler. Responding with 500.',
                extra={'handler': handler.__name__, 'error': e.__class__.__name__},
            )
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'errorCode': getattr(e, 'error_code', UNKNOWN_INTERNAL_SERVER_ERROR),
                    }
                ),
            }

    return wrapper
