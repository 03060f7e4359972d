"""File store mixin providing shared data directory setup and writability checks.

Responsibilities:
    - Resolve the records file and backup directory paths
    - Create the data and backup directories
    - Healthcheck that both directories are writable

Classes:
    - FileStoreMixin: Base mixin to inject on-disk layout and healthcheck into file-backed DAOs.

Example:
    Typical usage with a DAO implementation:

        >>> class ShortURLFileDAO(FileStoreMixin, ShortURLBaseDAO):
        ...     pass
        ...
        >>> dao = ShortURLFileDAO(data_dir='/var/lib/fileshortener')
        >>> dao._healthcheck()
        True
"""

import os
from pathlib import Path

from fileshortener.constants import Storage
from fileshortener.dao.exceptions import DataStoreError


class FileStoreMixin:
    """Mixin for on-disk layout and healthcheck of file-backed DAOs.

    Attributes:
        data_dir (Path):
            Directory holding the records file.

        records_path (Path):
            Path of the JSON records file.

        backup_path (Path):
            Directory receiving timestamped backup copies of the records file.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Verify the data and backup directories exist and are writable.
            Optionally raise a DataStoreError if they are not.
    """

    def __init__(
        self,
        data_dir: str | os.PathLike = Storage.DATA_DIR,
        records_file: str = Storage.RECORDS_FILE,
        backup_dir: str = Storage.BACKUP_DIR,
    ):
        """Initialize the on-disk layout of a file-backed DAO

        Args:
            data_dir (str | os.PathLike):
                Directory holding the records file. Defaults to 'data'.

            records_file (str):
                Name of the records file inside data_dir. Defaults to 'shorten_records.json'.

            backup_dir (str):
                Name of the backup directory inside data_dir. Defaults to 'backups'.

        Raises:
            DataStoreError:
                If the directories can't be created or aren't writable.
        """
        self.data_dir = Path(data_dir)
        self.records_path = self.data_dir / records_file
        self.backup_path = self.data_dir / backup_dir

        try:
            self.backup_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DataStoreError(f"Can't create data directory {self.backup_path}: {e.strerror or e}.") from e

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """Check the data and backup directories are writable

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to True.

        Returns:
            bool:
                True if both directories are writable, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If a directory is missing or not writable and raise_error=True.
        """
        for directory in (self.data_dir, self.backup_path):
            if not (directory.is_dir() and os.access(directory, os.W_OK | os.X_OK)):
                if raise_error:
                    raise DataStoreError(f"Can't write to {directory}. Check the configured data directory and its permissions.")
                return False
        return True
