"""Unit tests for PeriodicTask

Test coverage includes:

1. tick() runs the job and returns its result
2. tick() logs and swallows job failures
3. start()/stop() run the job on a background thread until stopped
4. Non-positive intervals are rejected
"""

import logging
import threading
from unittest.mock import MagicMock

import pytest

from fileshortener.utils.scheduler import PeriodicTask


def test_tick_returns_job_result():
    job = MagicMock(return_value=42)
    assert PeriodicTask('test', 60, job).tick() == 42
    job.assert_called_once_with()


def test_tick_logs_failures(caplog):
    job = MagicMock(side_effect=RuntimeError('disk on fire'))

    with caplog.at_level(logging.ERROR, logger='fileshortener.utils.scheduler'):
        assert PeriodicTask('backup', 60, job).tick() is None

    assert 'Periodic task backup failed.' in caplog.text
    assert 'disk on fire' in caplog.text


def test_start_and_stop():
    calls = threading.Semaphore(0)
    task = PeriodicTask('test', 0.01, calls.release)

    assert task.start() is task
    assert task.running
    assert calls.acquire(timeout=2)
    assert calls.acquire(timeout=2)

    task.stop(timeout=2)
    assert not task.running


def test_loop_survives_failing_job():
    calls = []
    done = threading.Event()

    def flaky():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError('first run fails')
        done.set()

    task = PeriodicTask('flaky', 0.01, flaky).start()
    try:
        assert done.wait(2)
    finally:
        task.stop(timeout=2)


def test_stop_before_start_is_harmless():
    PeriodicTask('test', 60, MagicMock()).stop()


@pytest.mark.parametrize('interval', [0, -5])
def test_non_positive_interval(interval):
    with pytest.raises(ValueError, match='Interval must be a positive number of seconds'):
        PeriodicTask('test', interval, MagicMock())
