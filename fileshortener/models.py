from dataclasses import dataclass
from datetime import datetime


# fmt: off
@dataclass(frozen=True)
class ShortURLModel:
    shortcode: str                      # Unique, case-sensitive short identifier
    target: str                         # Original long URL
    remark: str = ''                    # Optional free text
    created_at: datetime | None = None  # Stamped by the store on insert, never changed afterwards


@dataclass
class SessionModel:
    id: str                             # URL-safe token, also the cookie value
    created_at: datetime
    expires_at: datetime                # Session is valid while now < expires_at
    username: str | None = None         # Authenticated identity, set on login
# fmt: on
