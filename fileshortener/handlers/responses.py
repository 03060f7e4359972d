"""Proxy-format response builders shared by all handlers

Every builder returns {'statusCode': ..., 'headers': ..., 'body': <JSON string>}.
"""

import json
from typing import Any

from fileshortener.models import ShortURLModel
from fileshortener.types import HandlerResponse


JSON_HEADERS = {'Content-Type': 'application/json'}


def _response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> HandlerResponse:
    return {
        'statusCode': status_code,
        'headers': {**JSON_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def _error_body(base: str, message: str | None, error_code: str | None) -> dict[str, Any]:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return body


def response_200(body: dict[str, Any], headers: dict[str, str] | None = None) -> HandlerResponse:
    return _response(200, body, headers)


def response_201(body: dict[str, Any], headers: dict[str, str] | None = None) -> HandlerResponse:
    return _response(201, body, headers)


def response_302(*, location: str) -> HandlerResponse:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> HandlerResponse:
    return _response(400, _error_body('Bad Request', message, error_code))


def response_401(message: str | None = None, error_code: str | None = None, *, basic_realm: str | None = None) -> HandlerResponse:
    headers = {'WWW-Authenticate': f'Basic realm="{basic_realm}"'} if basic_realm else None
    return _response(401, _error_body('Unauthorized', message, error_code), headers)


def response_404(message: str | None = None, error_code: str | None = None) -> HandlerResponse:
    return _response(404, _error_body('Not Found', message, error_code))


def response_409(message: str | None = None, error_code: str | None = None) -> HandlerResponse:
    return _response(409, _error_body('Conflict', message, error_code))


def response_500(message: str | None = None, error_code: str | None = None) -> HandlerResponse:
    return _response(500, _error_body('Internal Server Error', message, error_code))


def short_url_body(short_url: ShortURLModel, short_url_string: str) -> dict[str, Any]:
    """JSON representation of a short URL record, as returned by the API"""
    return {
        'short_code': short_url.shortcode,
        'target_url': short_url.target,
        'short_url': short_url_string,
        'remark': short_url.remark,
        'create_time': short_url.created_at.isoformat() if short_url.created_at else None,
    }
