import dataclasses
from datetime import datetime, UTC

import pytest

from fileshortener.models import ShortURLModel, SessionModel


def test_short_url_model_defaults():
    short_url = ShortURLModel(shortcode='abc123', target='https://example.com')

    assert short_url.remark == ''
    assert short_url.created_at is None


def test_short_url_model_is_immutable():
    short_url = ShortURLModel(shortcode='abc123', target='https://example.com')

    with pytest.raises(dataclasses.FrozenInstanceError):
        short_url.target = 'https://evil.example.com'


def test_session_model_defaults():
    now = datetime.now(UTC)
    session = SessionModel(id='token', created_at=now, expires_at=now)

    assert session.username is None
