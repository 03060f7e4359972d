"""Service container wiring the data stores used by every handler

Exactly one ShortURLFileDAO and one SessionMemoryDAO exist per process. They are
built once at startup by build_services() and passed by reference to each
handler, which never constructs stores of its own.

Example:
    >>> from fileshortener.services import build_services
    >>> from fileshortener.handlers.redirect_url import app as redirect_url

    >>> services = build_services().start()
    >>> response = redirect_url.handler({'pathParameters': {'shortcode': 'abc123'}}, services)
    >>> services.close()
"""

import logging
from dataclasses import dataclass

from fileshortener.types import AppConfig
from fileshortener.dao.file import ShortURLFileDAO
from fileshortener.dao.memory import SessionMemoryDAO
from fileshortener.utils.config import load_config
from fileshortener.utils.logging import initialize_logging


logger = logging.getLogger(__name__)


@dataclass
class Services:
    config: AppConfig
    short_urls: ShortURLFileDAO
    sessions: SessionMemoryDAO

    def start(self) -> 'Services':
        """Start the backup scheduler and the session reaper"""
        self.short_urls.start_backup_scheduler()
        self.sessions.start_reaper()
        logger.info('Started background jobs.')
        return self

    def close(self) -> None:
        """Stop background jobs. Records are already on disk, nothing else to flush."""
        self.short_urls.close()
        self.sessions.close()
        logger.info('Stopped background jobs.')


def build_services(config: AppConfig | None = None, *, configure_logging: bool = True) -> Services:
    """Build the service container from the application configuration

    Args:
        config (dict | None):
            Application configuration. Loaded with load_config() when None.
        configure_logging (bool):
            Initialize JSON logging first. Defaults to True.

    Raises:
        DataStoreError:
            If the data directory isn't writable or the records file can't be loaded.
        BadConfigurationError:
            If the configuration file is malformed.
    """
    if configure_logging:
        initialize_logging()
    if config is None:
        config = load_config()

    storage = config['storage']
    sessions = config['sessions']

    return Services(
        config=config,
        short_urls=ShortURLFileDAO(
            data_dir=storage['data_dir'],
            records_file=storage['records_file'],
            backup_dir=storage['backup_dir'],
            backup_interval=float(storage['backup_interval']),
        ),
        sessions=SessionMemoryDAO(
            max_lifetime=float(sessions['max_lifetime']),
            gc_interval=float(sessions['gc_interval']),
        ),
    )
