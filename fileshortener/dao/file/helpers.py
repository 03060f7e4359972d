import os
import json
import functools
from datetime import datetime, UTC
from pathlib import Path
from typing import Any, TypeVar
from collections.abc import Callable

from fileshortener.models import ShortURLModel
from fileshortener.types import RecordDocument
from fileshortener.dao.exceptions import DataStoreError


__all__ = []


F = TypeVar('F', bound=Callable[..., Any])


def handle_file_error(method: F) -> F:
    """Wrap file-interacting DAO methods to handle I/O and decoding errors

    Args:
        method (Callable[..., Any]):
            DAO method performing file operations which may raise OSError or json.JSONDecodeError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on I/O or decoding failures.

    Example:
        >>> @handle_file_error
        ... def load(self):
        ...     return json.loads(self.records_path.read_text())
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except json.JSONDecodeError as e:
            raise DataStoreError(f"Records file {self.records_path} is not valid JSON: {e}.") from e
        except OSError as e:
            raise DataStoreError(f"Can't access data store file {e.filename or self.records_path}: {e.strerror or e}.") from e

    return wrapper


def to_document(short_url: ShortURLModel) -> RecordDocument:
    """Serialize a ShortURLModel into its on-disk JSON object"""
    return {
        'short_code': short_url.shortcode,
        'target_url': short_url.target,
        'remark': short_url.remark,
        'create_time': short_url.created_at.isoformat() if short_url.created_at else None,
    }


def from_document(document: RecordDocument) -> ShortURLModel:
    """Deserialize an on-disk JSON object into a ShortURLModel

    Timestamps without an offset are read as UTC.

    Raises:
        KeyError: if short_code or target_url is missing.
        TypeError, ValueError: if a field has the wrong type or format.
    """
    created_at = document.get('create_time')
    if created_at is not None:
        created_at = datetime.fromisoformat(created_at)
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)

    return ShortURLModel(
        shortcode=str(document['short_code']),
        target=str(document['target_url']),
        remark=document.get('remark') or '',
        created_at=created_at,
    )


def atomic_write_json(path: Path, data: Any) -> None:
    """Write JSON to a temporary sibling file, fsync it and rename it over `path`

    A crash at any point leaves either the previous file or the new one, never
    a truncated mix of both.

    Raises:
        OSError: if the temporary file can't be written or renamed.
    """
    tmp = path.with_name(f'.{path.name}.tmp')
    try:
        with tmp.open('w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write('\n')
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
