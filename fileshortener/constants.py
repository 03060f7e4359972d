from enum import StrEnum


class Interval:
    """Background job intervals in seconds."""

    BACKUP = 300  # 5 minutes
    SESSION_GC = 600  # 10 minutes


class Storage:
    """Default on-disk layout of the short URL store."""

    DATA_DIR = 'data'
    RECORDS_FILE = 'shorten_records.json'
    BACKUP_DIR = 'backups'
    BACKUP_TIMESTAMP_FORMAT = '%Y%m%d_%H%M%S'


class Session:
    """Default session settings."""

    COOKIE_NAME = 'shorten_session'
    MAX_LIFETIME = 86_400  # 24 hours
    ID_BYTES = 32


class Shortcode:
    LENGTH = 6


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        LOG_LEVEL = 'LOG_LEVEL'

    class Shorten(StrEnum):
        AUTH_USER = 'SHORTEN_AUTH_USER'
        AUTH_PASS = 'SHORTEN_AUTH_PASS'  # noqa: S105
        DATA_DIR = 'SHORTEN_DATA_DIR'
        BASE_URL = 'SHORTEN_BASE_URL'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
