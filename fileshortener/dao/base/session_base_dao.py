"""Abstract base class for login session data access objects (DAOs).

This interface defines the contract for issuing, validating, renewing and
expiring ephemeral session tokens. Session stores never touch cookies or
requests: callers pass the token they extracted from the request and attach
(or clear) the cookie themselves.

Responsibilities:
    - Issue new sessions with a high-entropy, URL-safe token.
    - Renew the expiry of a live session on every start() (sliding expiry).
    - Report and evict expired sessions.
    - Reclaim abandoned sessions in bulk.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from fileshortener.dao.memory import SessionMemoryDAO
        >>> dao = SessionMemoryDAO(max_lifetime=3600)

        >>> session, issued = dao.start(None, username='admin')
        >>> issued
        True

        >>> dao.get(session.id).username
        'admin'

        >>> dao.destroy(session.id)
        True
"""

from abc import ABC, abstractmethod

from fileshortener.models import SessionModel


class SessionBaseDAO(ABC):
    """Interface for login session data access objects (DAOs)

    Methods:
        start(token: str | None = None, username: str | None = None, **kwargs) -> tuple[SessionModel, bool]:
            Renew the session identified by token, or issue a new one.
            The boolean is True when a new session was issued.

        get(token: str | None, **kwargs) -> SessionModel:
            Look up a live session without renewing it.
            Raises SessionNotFoundError if the token is empty or unknown.
            Raises SessionExpiredError (and evicts) if the session is expired.

        destroy(token: str | None, **kwargs) -> bool:
            Remove a session. Idempotent.

        gc(**kwargs) -> int:
            Evict every expired session. Returns the number of evicted sessions.

        count(**kwargs) -> int:
            Return the number of sessions held, expired ones included.

    Subclassing:
        Concrete implementations (e.g., SessionMemoryDAO) must implement all
        abstract methods.
    """

    @abstractmethod
    def start(self, token: str | None = None, *, username: str | None = None, **kwargs) -> tuple[SessionModel, bool]:
        """Renew an existing live session or issue a new one.

        Args:
            token (str | None):
                Session token carried by the request, if any.

            username (str | None):
                Authenticated username to store in the session (keyword-only). Left untouched when None.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            tuple[SessionModel, bool]:
                The session and True if it was newly issued (the caller must
                attach its token to the response), False if it was renewed.
        """
        pass

    @abstractmethod
    def get(self, token: str | None, **kwargs) -> SessionModel:
        """Look up a live session. Does not renew its expiry.

        Raises:
            SessionNotFoundError:
                If the token is empty or unknown.

            SessionExpiredError:
                If the session is past its expiry. The session is evicted.
        """
        pass

    @abstractmethod
    def destroy(self, token: str | None, **kwargs) -> bool:
        """Remove a session if present.

        Returns:
            bool: True if a session was removed, False if there was nothing to remove.
        """
        pass

    @abstractmethod
    def gc(self, **kwargs) -> int:
        """Evict every expired session.

        Returns:
            int: number of evicted sessions.
        """
        pass

    @abstractmethod
    def count(self, **kwargs) -> int:
        """Return the number of sessions held, expired ones included."""
        pass
