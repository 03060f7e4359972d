"""Unit tests for the SessionMemoryDAO

Test coverage includes:

1. Session start
   - Ensures start() without a token issues a fresh session.
   - Ensures start() with a live token renews it in place.
   - Ensures start() with an unknown or expired token issues a new session.
   - Validates sliding renewal keeps a short-lived session alive.

2. Session lookup
   - Ensures get() returns a copy and never renews.
   - Confirms empty and unknown tokens raise SessionNotFoundError.
   - Confirms expired sessions raise SessionExpiredError and are evicted.

3. Destroy and garbage collection
   - Ensures destroy() is idempotent.
   - Ensures gc() evicts exactly the expired sessions.

4. Type checking and configuration
   - Ensures username can only be passed to start() by keyword.
"""

from datetime import datetime, timedelta, UTC

import pytest
from beartype.roar import BeartypeCallHintParamViolation
from freezegun import freeze_time

from fileshortener.dao.memory import SessionMemoryDAO
from fileshortener.dao.memory.session_memory_dao import generate_session_id
from fileshortener.dao.exceptions import SessionNotFoundError, SessionExpiredError


# -------------------------------
# 1. Session start
# -------------------------------


@freeze_time('2025-10-15 12:00:00')
def test_start_issues_new_session(session_dao):
    session, issued = session_dao.start()

    assert issued is True
    assert len(session.id) >= 43
    assert session.created_at == datetime(2025, 10, 15, 12, tzinfo=UTC)
    assert session.expires_at == datetime(2025, 10, 15, 13, tzinfo=UTC)
    assert session.username is None
    assert session_dao.count() == 1


def test_start_renews_live_session():
    dao = SessionMemoryDAO(max_lifetime=60)
    with freeze_time('2025-10-15 12:00:00') as frozen:
        session, _ = dao.start(username='admin')
        frozen.tick(30)
        renewed, issued = dao.start(session.id)

    assert issued is False
    assert renewed.id == session.id
    assert renewed.username == 'admin'
    assert renewed.expires_at == datetime(2025, 10, 15, 12, 1, 30, tzinfo=UTC)
    assert dao.count() == 1


def test_start_sets_username_on_existing_session(session_dao):
    session, _ = session_dao.start()
    renewed, issued = session_dao.start(session.id, username='admin')

    assert issued is False
    assert session_dao.get(session.id).username == 'admin'


@pytest.mark.parametrize('token', [None, '', 'unknown-token'])
def test_start_with_unusable_token_issues_new_session(session_dao, token):
    session, issued = session_dao.start(token)

    assert issued is True
    assert session.id != token


def test_start_with_expired_token_issues_new_session():
    dao = SessionMemoryDAO(max_lifetime=2)
    with freeze_time('2025-10-15 12:00:00') as frozen:
        session, _ = dao.start()
        frozen.tick(2)
        replacement, issued = dao.start(session.id)

    assert issued is True
    assert replacement.id != session.id


def test_sliding_renewal_keeps_session_alive():
    """Ensure a 2 second session touched every second outlives its original lifetime."""
    dao = SessionMemoryDAO(max_lifetime=2)
    with freeze_time('2025-10-15 12:00:00') as frozen:
        session, _ = dao.start()
        for _ in range(5):
            frozen.tick(1)
            _, issued = dao.start(session.id)
            assert issued is False

        assert dao.get(session.id).id == session.id

        frozen.tick(3)
        with pytest.raises(SessionExpiredError):
            dao.get(session.id)


# -------------------------------
# 2. Session lookup
# -------------------------------


def test_get_does_not_renew():
    dao = SessionMemoryDAO(max_lifetime=2)
    with freeze_time('2025-10-15 12:00:00') as frozen:
        session, _ = dao.start()
        frozen.tick(1)
        assert dao.get(session.id).expires_at == session.expires_at
        frozen.tick(1)
        with pytest.raises(SessionExpiredError, match='Session has expired.'):
            dao.get(session.id)

    assert dao.count() == 0


def test_get_returns_a_copy(session_dao):
    session, _ = session_dao.start(username='admin')

    copy = session_dao.get(session.id)
    copy.username = 'mallory'
    copy.expires_at = datetime(2099, 1, 1, tzinfo=UTC)

    assert session_dao.get(session.id).username == 'admin'
    assert session_dao.get(session.id).expires_at == session.expires_at


@pytest.mark.parametrize(
    'token, message',
    [
        (None, 'No session token provided.'),
        ('', 'No session token provided.'),
        ('unknown-token', 'Session does not exist.'),
    ],
)
def test_get_unknown_session(session_dao, token, message):
    with pytest.raises(SessionNotFoundError, match=message):
        session_dao.get(token)


def test_expired_session_is_a_missing_session():
    """Callers catching SessionNotFoundError also handle expired sessions."""
    assert issubclass(SessionExpiredError, SessionNotFoundError)

    dao = SessionMemoryDAO(max_lifetime=1)
    with freeze_time('2025-10-15 12:00:00') as frozen:
        session, _ = dao.start()
        frozen.tick(5)
        with pytest.raises(SessionNotFoundError):
            dao.get(session.id)
        with pytest.raises(SessionNotFoundError, match='Session does not exist.'):
            dao.get(session.id)


# -------------------------------
# 3. Destroy and garbage collection
# -------------------------------


def test_destroy_is_idempotent(session_dao):
    session, _ = session_dao.start()

    assert session_dao.destroy(session.id) is True
    assert session_dao.destroy(session.id) is False
    assert session_dao.destroy(None) is False
    with pytest.raises(SessionNotFoundError):
        session_dao.get(session.id)


def test_gc_evicts_expired_sessions_only():
    dao = SessionMemoryDAO(max_lifetime=10)
    with freeze_time('2025-10-15 12:00:00') as frozen:
        stale = [dao.start()[0] for _ in range(3)]
        frozen.tick(5)
        fresh, _ = dao.start()
        frozen.tick(5)

        assert dao.gc() == 3
        assert dao.count() == 1
        assert dao.get(fresh.id).id == fresh.id
        for session in stale:
            with pytest.raises(SessionNotFoundError, match='Session does not exist.'):
                dao.get(session.id)

    assert dao.gc() == 1
    assert dao.count() == 0


def test_reaper_runs_gc():
    dao = SessionMemoryDAO(max_lifetime=1)
    with freeze_time('2025-10-15 12:00:00') as frozen:
        dao.start()
        frozen.tick(1)
        assert dao._reaper.tick() == 1


# -------------------------------
# 4. Type checking and configuration
# -------------------------------


def test_start_with_invalid_type(session_dao):
    with pytest.raises(BeartypeCallHintParamViolation):
        session_dao.start(12345)


def test_start_username_is_keyword_only(session_dao):
    with pytest.raises(TypeError):
        session_dao.start(None, 'admin')
    assert session_dao.count() == 0


def test_get_with_invalid_type(session_dao):
    with pytest.raises(BeartypeCallHintParamViolation):
        session_dao.get(12345)


@pytest.mark.parametrize('max_lifetime', [0, -1])
def test_non_positive_lifetime(max_lifetime):
    with pytest.raises(ValueError, match='Session lifetime must be a positive number of seconds'):
        SessionMemoryDAO(max_lifetime=max_lifetime)


def test_session_ids_are_unique_and_url_safe():
    ids = {generate_session_id() for _ in range(1000)}

    assert len(ids) == 1000
    assert all(set(session_id) <= set('ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_') for session_id in ids)


def test_max_lifetime_is_a_timedelta(session_dao):
    assert session_dao.max_lifetime == timedelta(hours=1)
