import base64
from typing import cast

import pytest

from fileshortener.types import HandlerEvent


def basic_authorization(username: str, password: str) -> str:
    return 'Basic ' + base64.b64encode(f'{username}:{password}'.encode('utf-8')).decode('ascii')


def cookie_value(set_cookie: str) -> str:
    """Return the token carried by a Set-Cookie header value."""
    return set_cookie.split(';', 1)[0].split('=', 1)[1]


@pytest.fixture
def make_event():
    def _make_event(
        method: str = 'GET',
        path: str = '/',
        *,
        shortcode: str | None = None,
        body: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> HandlerEvent:
        return cast(HandlerEvent, {
            'httpMethod': method,
            'path': path,
            'pathParameters': {'shortcode': shortcode} if shortcode is not None else None,
            'headers': {'Host': 'internal:5768', **(headers or {})},
            'body': body,
            'isBase64Encoded': False,
            'requestContext': {'domainName': 'internal'},
        })

    return _make_event


@pytest.fixture
def authorization():
    return basic_authorization


@pytest.fixture
def cookie_token():
    return cookie_value
