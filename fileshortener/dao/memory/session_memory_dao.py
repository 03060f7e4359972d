"""In-memory Data Access Object (DAO) for login sessions

Sessions live in a process-local dict guarded by a read/write lock and are lost
on restart. A background reaper evicts abandoned sessions every 10 minutes.

Expiry rules:
    - A session is valid while now < expires_at.
    - start() on a valid session renews it: expires_at = now + max_lifetime.
    - get() never renews. An expired session is evicted the first time get() sees it.
    - gc() evicts every session with now >= expires_at.

Example:
    >>> dao = SessionMemoryDAO(max_lifetime=3600).start_reaper()
    >>> session, issued = dao.start(request_token, username='admin')
    >>> if issued:
    ...     set_cookie(session.id)
    >>> dao.get(session.id).username
    'admin'
    >>> dao.destroy(session.id)
    True
    >>> dao.close()
"""

import secrets
import logging
from dataclasses import replace
from datetime import datetime, timedelta, UTC

from beartype import beartype

from fileshortener.models import SessionModel
from fileshortener.constants import Interval, Session
from fileshortener.dao.base import SessionBaseDAO
from fileshortener.dao.exceptions import SessionNotFoundError, SessionExpiredError
from fileshortener.utils.locks import ReadWriteLock
from fileshortener.utils.scheduler import PeriodicTask


logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    """Return a URL-safe token carrying 32 bytes of CSPRNG entropy."""
    return secrets.token_urlsafe(Session.ID_BYTES)


class SessionMemoryDAO(SessionBaseDAO):
    """In-memory session store with sliding expiry and periodic reclamation

    Attributes:
        max_lifetime (timedelta):
            Lifetime granted to a session on creation and on every renewal.

    Methods:
        start(token: str | None = None, username: str | None = None, **kwargs) -> tuple[SessionModel, bool]
        get(token: str | None, **kwargs) -> SessionModel
        destroy(token: str | None, **kwargs) -> bool
        gc(**kwargs) -> int
        count(**kwargs) -> int
        start_reaper() -> SessionMemoryDAO
        close() -> None

    NOTE:
        Every returned SessionModel is a copy. Mutating it doesn't affect the store.
    """

    def __init__(self, max_lifetime: float = Session.MAX_LIFETIME, gc_interval: float = Interval.SESSION_GC):
        if max_lifetime <= 0:
            raise ValueError(f'Session lifetime must be a positive number of seconds (given value: {max_lifetime}).')

        self.max_lifetime = timedelta(seconds=max_lifetime)
        self._lock = ReadWriteLock()
        self._sessions: dict[str, SessionModel] = {}
        self._reaper = PeriodicTask('session-gc', gc_interval, self.gc)

    @beartype
    def start(self, token: str | None = None, *, username: str | None = None, **kwargs) -> tuple[SessionModel, bool]:
        """Renew the live session identified by token, or issue a new one

        NOTE: no collision check is performed on new ids, 32 bytes of entropy
              make a collision practically impossible.

        Args:
            token (str | None):
                Session token carried by the request, if any.
            username (str | None):
                Authenticated username to store in the session (keyword-only). Left untouched when None.

        Returns:
            tuple[SessionModel, bool]:
                The session, and True if it was newly issued.

        Example:
            >>> session, issued = dao.start(None)
            >>> issued
            True
            >>> dao.start(session.id)[1]
            False
        """
        with self._lock.write_lock():
            now = datetime.now(UTC)
            session = self._sessions.get(token) if token else None

            if session is not None and now < session.expires_at:
                session.expires_at = now + self.max_lifetime
                if username is not None:
                    session.username = username
                return replace(session), False

            session = SessionModel(
                id=generate_session_id(),
                created_at=now,
                expires_at=now + self.max_lifetime,
                username=username,
            )
            self._sessions[session.id] = session

        logger.debug('Issued new session.', extra={'expires_at': session.expires_at.isoformat()})
        return replace(session), True

    @beartype
    def get(self, token: str | None, **kwargs) -> SessionModel:
        """Look up a live session without renewing it

        Raises:
            SessionNotFoundError:
                If the token is empty or unknown.
            SessionExpiredError:
                If the session is past its expiry. The session is evicted.
        """
        if not token:
            raise SessionNotFoundError('No session token provided.')

        with self._lock.read_lock():
            session = self._sessions.get(token)
            if session is None:
                raise SessionNotFoundError('Session does not exist.')
            if datetime.now(UTC) < session.expires_at:
                return replace(session)

        # Upgrade to the exclusive lock for eviction. A concurrent start() may
        # have replaced or renewed the session in between, so check again.
        with self._lock.write_lock():
            current = self._sessions.get(token)
            if current is session and datetime.now(UTC) >= current.expires_at:
                del self._sessions[token]
                logger.debug('Evicted expired session on access.')
            elif current is not None and datetime.now(UTC) < current.expires_at:
                return replace(current)

        raise SessionExpiredError('Session has expired.')

    @beartype
    def destroy(self, token: str | None, **kwargs) -> bool:
        """Remove a session. Idempotent.

        Returns:
            bool: True if a session was removed.
        """
        if not token:
            return False

        with self._lock.write_lock():
            return self._sessions.pop(token, None) is not None

    def gc(self, **kwargs) -> int:
        """Evict every expired session and return how many were evicted."""
        with self._lock.write_lock():
            now = datetime.now(UTC)
            expired = [token for token, session in self._sessions.items() if now >= session.expires_at]
            for token in expired:
                del self._sessions[token]

        if expired:
            logger.info('Evicted %s expired sessions.', len(expired), extra={'evicted': len(expired)})
        return len(expired)

    def count(self, **kwargs) -> int:
        with self._lock.read_lock():
            return len(self._sessions)

    def start_reaper(self) -> 'SessionMemoryDAO':
        self._reaper.start()
        return self

    def close(self) -> None:
        self._reaper.stop()
