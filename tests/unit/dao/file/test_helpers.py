"""Unit tests for file DAO helpers

Test coverage includes:

1. handle_file_error() translates OSError and JSONDecodeError into DataStoreError
2. to_document() / from_document() map models to the on-disk record layout
3. atomic_write_json() replaces the target and cleans up after failures
"""

import json
from datetime import datetime, UTC
from pathlib import Path

import pytest

from fileshortener.models import ShortURLModel
from fileshortener.dao.exceptions import DataStoreError
from fileshortener.dao.file.helpers import handle_file_error, to_document, from_document, atomic_write_json


class _Store:
    records_path = Path('/data/shorten_records.json')

    @handle_file_error
    def fail_with(self, error: Exception):
        raise error


# -------------------------------
# 1. handle_file_error()
# -------------------------------


def test_handle_file_error_wraps_os_error():
    error = PermissionError(13, 'Permission denied', '/data/shorten_records.json')

    with pytest.raises(DataStoreError, match="Can't access data store file /data/shorten_records.json: Permission denied.") as exc_info:
        _Store().fail_with(error)
    assert exc_info.value.__cause__ is error


def test_handle_file_error_wraps_json_decode_error():
    with pytest.raises(DataStoreError, match='is not valid JSON'):
        _Store().fail_with(json.JSONDecodeError('Expecting value', '', 0))


def test_handle_file_error_lets_other_errors_through():
    with pytest.raises(KeyError):
        _Store().fail_with(KeyError('short_code'))


# -------------------------------
# 2. Record layout
# -------------------------------


def test_to_document():
    short_url = ShortURLModel(
        shortcode='abc123',
        target='https://example.com',
        remark='home',
        created_at=datetime(2025, 10, 15, 12, tzinfo=UTC),
    )
    assert to_document(short_url) == {
        'short_code': 'abc123',
        'target_url': 'https://example.com',
        'remark': 'home',
        'create_time': '2025-10-15T12:00:00+00:00',
    }


def test_from_document_defaults():
    short_url = from_document({'short_code': 'abc123', 'target_url': 'https://example.com', 'remark': None})
    assert short_url == ShortURLModel(shortcode='abc123', target='https://example.com')


def test_from_document_missing_field():
    with pytest.raises(KeyError):
        from_document({'short_code': 'abc123'})


# -------------------------------
# 3. atomic_write_json()
# -------------------------------


def test_atomic_write_json(tmp_path):
    path = tmp_path / 'records.json'
    path.write_text('[]')

    atomic_write_json(path, [{'short_code': 'äbc'}])

    assert path.read_text(encoding='utf-8') == '[\n  {\n    "short_code": "äbc"\n  }\n]\n'
    assert list(tmp_path.iterdir()) == [path]


def test_atomic_write_json_cleans_up_on_failure(tmp_path, monkeypatch):
    path = tmp_path / 'records.json'
    path.write_text('[]')

    def failing_replace(src, dst):
        raise OSError(5, 'Input/output error')

    monkeypatch.setattr('fileshortener.dao.file.helpers.os.replace', failing_replace)

    with pytest.raises(OSError):
        atomic_write_json(path, [{'short_code': 'abc123'}])
    assert path.read_text() == '[]'
    assert list(tmp_path.iterdir()) == [path]
