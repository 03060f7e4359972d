"""Check that the short URL file store is usable on your local machine

Loads the configuration for the current APP_ENV, opens the records file and
prints a one-line summary:

    data/shorten_records.json: 42 short URLs, 3 backups, writable

Exits with status 1 and prints the error when the store can't be opened.

Usage:
    $ python -m fileshortener.healthcheck
"""

import sys

from fileshortener.dao.file import ShortURLFileDAO
from fileshortener.exceptions import FileShortenerError
from fileshortener.utils.config import load_config


def check() -> str:
    storage = load_config()['storage']
    dao = ShortURLFileDAO(
        data_dir=storage['data_dir'],
        records_file=storage['records_file'],
        backup_dir=storage['backup_dir'],
    )
    backups = sum(1 for path in dao.backup_path.iterdir() if path.is_file())
    return f'{dao.records_path}: {dao.count()} short URLs, {backups} backups, writable'


def main() -> int:
    try:
        print(check())
    except FileShortenerError as e:
        print(f'{e.error_code}: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
