"""Data Access Object (DAO) implementation for managing shortened URLs in a JSON file

This module provides a file-based implementation of ShortURLBaseDAO. All short URLs
are held in an in-memory cache which is written through to a single JSON file on
every mutation, and periodically copied to timestamped backups.

Responsibilities:
    - Load the records file into the cache on startup (missing file == empty store);
    - Insert, retrieve, update and delete short URLs under a read/write lock;
    - Rewrite the whole records file synchronously (and atomically) on every mutation;
    - Roll back the cache when a rewrite fails, so memory and disk never diverge;
    - Copy the records file to a timestamped backup when it changed since the last backup.

Classes:
    ShortURLFileDAO:
        DAO for storing and retrieving ShortURLModel in a local JSON file.

On-disk format (pretty-printed JSON array):
    [
      {
        "short_code": "abc123",
        "target_url": "https://example.com/page",
        "remark": "landing page",
        "create_time": "2025-10-15T12:00:00+00:00"
      }
    ]

Example:
    >>> from fileshortener.models import ShortURLModel
    >>> from fileshortener.dao.file import ShortURLFileDAO

    >>> dao = ShortURLFileDAO(data_dir='data').start_backup_scheduler()

    >>> dao.insert(ShortURLModel(shortcode='abc123', target='https://example.com/page'))
    ShortURLModel(shortcode='abc123', target='https://example.com/page', remark='', created_at=...)

    >>> dao.get('abc123').target
    'https://example.com/page'

    >>> dao.backup()
    PosixPath('data/backups/shorten_records_20251015_120000.json')

    >>> dao.close()

NOTE:
    Every mutation blocks on a full-file rewrite while holding the exclusive lock.
    This bounds write throughput, and is the price of write-through durability:
    a mutation is on disk before the call returns.
"""

import json
import shutil
import logging
import os
from dataclasses import replace
from datetime import datetime, UTC
from pathlib import Path
from collections.abc import Callable

from beartype import beartype

from fileshortener.models import ShortURLModel
from fileshortener.constants import Interval, Storage
from fileshortener.exceptions import ValidationError
from fileshortener.dao.base import ShortURLBaseDAO
from fileshortener.dao.file.mixins import FileStoreMixin
from fileshortener.dao.file.helpers import handle_file_error, to_document, from_document, atomic_write_json
from fileshortener.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError, ShortURLNotFoundError
from fileshortener.utils.locks import ReadWriteLock
from fileshortener.utils.scheduler import PeriodicTask


logger = logging.getLogger(__name__)


class ShortURLFileDAO(FileStoreMixin, ShortURLBaseDAO):
    """File-based Data Access Object (DAO) for managing short URL mappings

    This class implements the ShortURLBaseDAO interface using a JSON file as a data store.

    Attributes (see FileStoreMixin):
        records_path (Path):
            JSON file holding every record.
        backup_path (Path):
            Directory receiving timestamped backups.
        dirty (bool):
            True when the records file changed since the last backup.
        last_backup (datetime):
            Time of the last backup (construction time until the first one).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLModel
        get(shortcode: str, **kwargs) -> ShortURLModel
        all(**kwargs) -> list[ShortURLModel]
        update(short_url: ShortURLModel, **kwargs) -> ShortURLModel
        delete(shortcode: str, **kwargs) -> None
        count(**kwargs) -> int
        backup(**kwargs) -> Path | None
        start_backup_scheduler() -> ShortURLFileDAO
        close() -> None
    """

    def __init__(
        self,
        data_dir: str | os.PathLike = Storage.DATA_DIR,
        records_file: str = Storage.RECORDS_FILE,
        backup_dir: str = Storage.BACKUP_DIR,
        backup_interval: float = Interval.BACKUP,
    ):
        """Initialize the file store and load existing records into the cache

        Args:
            data_dir, records_file, backup_dir:
                On-disk layout (see FileStoreMixin).

            backup_interval (float):
                Seconds between two backup checks of the scheduler. Defaults to 300.

        Raises:
            DataStoreError:
                If the data directory isn't writable or the records file can't be read or decoded.
        """
        super().__init__(data_dir=data_dir, records_file=records_file, backup_dir=backup_dir)

        self._lock = ReadWriteLock()
        self._cache: dict[str, ShortURLModel] = {}
        self._dirty = False
        self._last_backup = datetime.now(UTC)
        self._scheduler = PeriodicTask('short-url-backup', backup_interval, self.backup)

        self._load()

    @property
    def dirty(self) -> bool:
        with self._lock.read_lock():
            return self._dirty

    @property
    def last_backup(self) -> datetime:
        with self._lock.read_lock():
            return self._last_backup

    @handle_file_error
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> ShortURLModel:
        """Insert a short URL mapping and write it through to the records file

        Args:
            short_url (ShortURLModel):
                Mapping to insert. Its created_at is replaced with the current UTC time.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLModel: the stored model.

        Raises:
            ValidationError:
                If shortcode or target is empty.
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists. The store is left unchanged.
            DataStoreError:
                If the records file can't be written. The insert is rolled back.

        Example:
            >>> dao.insert(ShortURLModel(shortcode='abc123', target='https://example.com'))
            ShortURLModel(shortcode='abc123', target='https://example.com', remark='', created_at=...)
        """
        if not short_url.shortcode:
            raise ValidationError('Short URL code must be a non-empty string.')
        if not short_url.target:
            raise ValidationError(f"Target URL of short URL '{short_url.shortcode}' must be a non-empty string.")

        with self._lock.write_lock():
            if short_url.shortcode in self._cache:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")

            stored = replace(short_url, created_at=datetime.now(UTC))
            self._cache[stored.shortcode] = stored
            self._persist(rollback=lambda: self._cache.pop(stored.shortcode))

        logger.info('Inserted short URL %s.', stored.shortcode, extra={'shortcode': stored.shortcode})
        return stored

    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist.

        Example:
            >>> dao.get('abc123')
            ShortURLModel(shortcode='abc123', target='https://example.com', ...)
        """
        with self._lock.read_lock():
            short_url = self._cache.get(shortcode)

        if short_url is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return short_url

    @beartype
    def all(self, **kwargs) -> list[ShortURLModel]:
        """Return a snapshot of every short URL. Callers must not rely on the order."""
        with self._lock.read_lock():
            return list(self._cache.values())

    @handle_file_error
    @beartype
    def update(self, short_url: ShortURLModel, **kwargs) -> ShortURLModel:
        """Overwrite target and remark of an existing short URL

        The stored creation time is kept, whatever created_at the caller passes.

        Raises:
            ValidationError:
                If target is empty.
            ShortURLNotFoundError:
                If the short URL does not exist.
            DataStoreError:
                If the records file can't be written. The update is rolled back.

        Example:
            >>> dao.update(ShortURLModel(shortcode='abc123', target='https://example.com/v2'))
            ShortURLModel(shortcode='abc123', target='https://example.com/v2', remark='', created_at=...)
        """
        if not short_url.target:
            raise ValidationError(f"Target URL of short URL '{short_url.shortcode}' must be a non-empty string.")

        with self._lock.write_lock():
            existing = self._cache.get(short_url.shortcode)
            if existing is None:
                raise ShortURLNotFoundError(f"Short URL with code '{short_url.shortcode}' not found.")

            stored = replace(short_url, created_at=existing.created_at)
            self._cache[stored.shortcode] = stored
            self._persist(rollback=lambda: self._cache.__setitem__(existing.shortcode, existing))

        logger.info('Updated short URL %s.', stored.shortcode, extra={'shortcode': stored.shortcode})
        return stored

    @handle_file_error
    @beartype
    def delete(self, shortcode: str, **kwargs) -> None:
        """Remove a short URL and write the removal through to the records file

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist.
            DataStoreError:
                If the records file can't be written. The delete is rolled back.
        """
        with self._lock.write_lock():
            existing = self._cache.pop(shortcode, None)
            if existing is None:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

            self._persist(rollback=lambda: self._cache.__setitem__(shortcode, existing))

        logger.info('Deleted short URL %s.', shortcode, extra={'shortcode': shortcode})

    def count(self, **kwargs) -> int:
        with self._lock.read_lock():
            return len(self._cache)

    @handle_file_error
    def backup(self, **kwargs) -> Path | None:
        """Copy the records file to a timestamped backup if it changed since the last backup

        The copy happens under the exclusive lock: mutations wait for it to finish,
        and the backup never observes a half-written records file. Existing backups
        are never overwritten: a second backup within the same second gets a `_1` suffix.

        Returns:
            Path | None:
                Path of the new backup file, or None if nothing changed.

        Raises:
            DataStoreError:
                If the copy fails. The dirty flag stays set so the next tick retries.

        Example:
            >>> dao.backup()
            PosixPath('data/backups/shorten_records_20251015_120000.json')
        """
        with self._lock.write_lock():
            if not self._dirty:
                return None

            now = datetime.now(UTC)
            destination = self._backup_destination(now.strftime(Storage.BACKUP_TIMESTAMP_FORMAT))
            shutil.copyfile(self.records_path, destination)

            self._dirty = False
            self._last_backup = now

        logger.info('Backed up short URL records.', extra={'backup': str(destination)})
        return destination

    def _backup_destination(self, timestamp: str) -> Path:
        """First free backup path for a timestamp: <stem>_<timestamp>.json, then <stem>_<timestamp>_1.json, ..."""
        stem, suffix = f'{self.records_path.stem}_{timestamp}', self.records_path.suffix
        destination = self.backup_path / f'{stem}{suffix}'
        attempt = 0
        while destination.exists():
            attempt += 1
            destination = self.backup_path / f'{stem}_{attempt}{suffix}'
        return destination

    def start_backup_scheduler(self) -> 'ShortURLFileDAO':
        self._scheduler.start()
        return self

    def close(self) -> None:
        self._scheduler.stop()

    def _persist(self, rollback: Callable[[], object]) -> None:
        """Rewrite the records file from the cache. Caller holds the write lock.

        On failure the cache change is undone via `rollback` before re-raising.
        """
        documents = [to_document(short_url) for short_url in self._cache.values()]
        try:
            atomic_write_json(self.records_path, documents)
        except OSError:
            rollback()
            logger.exception('Failed to write short URL records. Change rolled back.', extra={'records': str(self.records_path)})
            raise
        self._dirty = True

    @handle_file_error
    def _load(self) -> None:
        try:
            with self.records_path.open('r', encoding='utf-8') as f:
                documents = json.load(f)
        except FileNotFoundError:
            logger.info('No records file found. Starting with an empty store.', extra={'records': str(self.records_path)})
            return

        # An empty table may have been written as JSON null
        if documents is None:
            documents = []
        if not isinstance(documents, list):
            raise DataStoreError(f'Records file {self.records_path} must contain a JSON array (found {type(documents).__name__}).')

        try:
            short_urls = [from_document(document) for document in documents]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DataStoreError(f'Records file {self.records_path} holds a malformed record: {e!r}.') from e

        with self._lock.write_lock():
            self._cache = {short_url.shortcode: short_url for short_url in short_urls}

        logger.info('Loaded %s short URL records.', len(short_urls), extra={'records': str(self.records_path)})
