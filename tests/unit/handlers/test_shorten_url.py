"""Unit tests for the shorten URL handler

Test coverage includes:

1. Authentication
   - Missing, malformed or wrong Basic credentials respond 401 with WWW-Authenticate.

2. Request validation
   - Invalid JSON and missing target_url respond 400.

3. Shortening
   - Requested shortcodes are stored as is, duplicates respond 409.
   - Missing shortcodes are generated, retrying on collision.
"""

import json
from unittest.mock import patch

import pytest

from fileshortener.models import ShortURLModel
from fileshortener.handlers.shorten_url import app


class TestShortenUrlHandler:

    @pytest.fixture(autouse=True)
    def setup(self, services, make_event, authorization) -> None:
        self.services = services
        self.make_event = make_event
        self.authorization = authorization

    def event(self, body: dict | str | None, authorization: str | None = None):
        headers = {'Authorization': authorization or self.authorization('admin', 's3cret'), 'Content-Type': 'application/json'}
        raw = body if isinstance(body, str) or body is None else json.dumps(body)
        return self.make_event('POST', '/api/shorten', body=raw, headers=headers)

    # -------------------------------
    # 1. Authentication
    # -------------------------------

    @pytest.mark.parametrize(
        'header',
        [
            'Bearer token',
            'Basic YWRtaW46d3Jvbmc=',  # admin:wrong
            'Basic Og==',  # empty username and password
        ],
    )
    def test_handler_unauthorized(self, header) -> None:
        response = app.handler(self.event({'target_url': 'https://example.com'}, header), self.services)
        body = json.loads(response['body'])

        assert response['statusCode'] == 401
        assert response['headers']['WWW-Authenticate'] == 'Basic realm="Authorization Required"'
        assert body['errorCode'] == 'UNAUTHORIZED'
        assert self.services.short_urls.count() == 0

    def test_handler_without_authorization_header(self) -> None:
        event = self.make_event('POST', '/api/shorten', body=json.dumps({'target_url': 'https://example.com'}))
        assert app.handler(event, self.services)['statusCode'] == 401

    # -------------------------------
    # 2. Request validation
    # -------------------------------

    def test_handler_with_invalid_json(self) -> None:
        response = app.handler(self.event('{not json'), self.services)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'INVALID_REQUEST_BODY'

    @pytest.mark.parametrize('body', [None, {}, {'target_url': ''}, {'target_url': '   '}, {'short_code': 'abc123'}])
    def test_handler_with_missing_target_url(self, body) -> None:
        response = app.handler(self.event(body), self.services)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['message'] == "Bad Request (missing 'target_url' in request body)"
        assert body['errorCode'] == 'MISSING_TARGET_URL'

    # -------------------------------
    # 3. Shortening
    # -------------------------------

    def test_handler_with_requested_shortcode(self) -> None:
        response = app.handler(
            self.event({'target_url': 'https://example.com/page', 'short_code': 'mine', 'remark': 'landing'}),
            self.services,
        )
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert body['short_code'] == 'mine'
        assert body['target_url'] == 'https://example.com/page'
        assert body['short_url'] == 'https://s.example.com/mine'
        assert body['remark'] == 'landing'
        assert self.services.short_urls.get('mine').target == 'https://example.com/page'

    def test_handler_with_taken_shortcode(self) -> None:
        self.services.short_urls.insert(ShortURLModel(shortcode='mine', target='https://example.com/first'))

        response = app.handler(self.event({'target_url': 'https://example.com/second', 'short_code': 'mine'}), self.services)
        body = json.loads(response['body'])

        assert response['statusCode'] == 409
        assert body['errorCode'] == 'SHORTCODE_ALREADY_EXISTS'
        assert self.services.short_urls.get('mine').target == 'https://example.com/first'

    def test_handler_generates_shortcode(self) -> None:
        response = app.handler(self.event({'target_url': 'https://example.com'}), self.services)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert len(body['short_code']) == 6
        assert body['short_code'].isalnum()
        assert body['short_url'] == f"https://s.example.com/{body['short_code']}"
        assert body['remark'] == ''

    def test_handler_retries_generated_shortcode_collisions(self) -> None:
        self.services.short_urls.insert(ShortURLModel(shortcode='taken1', target='https://example.com/first'))

        with patch('fileshortener.handlers.common.generate_shortcode', side_effect=['taken1', 'free01']):
            response = app.handler(self.event({'target_url': 'https://example.com'}), self.services)

        assert response['statusCode'] == 200
        assert json.loads(response['body'])['short_code'] == 'free01'

    def test_handler_gives_up_after_repeated_collisions(self) -> None:
        self.services.short_urls.insert(ShortURLModel(shortcode='taken1', target='https://example.com/first'))

        with patch('fileshortener.handlers.common.generate_shortcode', return_value='taken1'):
            response = app.handler(self.event({'target_url': 'https://example.com'}), self.services)

        assert response['statusCode'] == 500
        assert json.loads(response['body'])['errorCode'] == 'SHORTCODE_GENERATION_FAILED'
        assert self.services.short_urls.count() == 1
