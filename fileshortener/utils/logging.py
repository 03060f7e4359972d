"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` once at startup (see `fileshortener.services.build_services`)
before any other logging is done.

Every line is a JSON object tagged with the service (`APP_NAME`, default `fileshortener`)
and environment (`APP_ENV`). Lines from the backup and session reaper threads carry the
thread name. Errors raised by the stores carry their `errorCode`.

Logging format:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "ERROR",
    "service": "fileshortener",
    "env": "local",
    "logger": "fileshortener.utils.scheduler",
    "thread": "short-url-backup",
    "message": "Periodic task short-url-backup failed.",
    "errorCode": "dao:data_store_error",
    "exception": "Traceback (most recent call last): ..."
}

`LOG_LEVEL` applies to the `fileshortener` loggers; everything else logs at WARNING.
"""

import os
import json
import logging
import logging.config
import threading
from datetime import datetime, UTC

from fileshortener.constants import ENV
from fileshortener.utils.config import app_env, app_name


DEFAULT_SERVICE = 'fileshortener'


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    STANDARD_ATTRS = frozenset(
        {
            'args',
            'asctime',
            'created',
            'exc_info',
            'exc_text',
            'filename',
            'funcName',
            'levelname',
            'levelno',
            'lineno',
            'module',
            'msecs',
            'msg',
            'name',
            'pathname',
            'process',
            'processName',
            'relativeCreated',
            'stack_info',
            'thread',
            'threadName',
            'taskName',
        }
    )

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.service = app_name() or DEFAULT_SERVICE
        self.env = app_env()

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'service': self.service,
            'env': self.env,
            'logger': record.name,
        }
        if record.threadName and record.threadName != threading.main_thread().name:
            log['thread'] = record.threadName
        log['message'] = record.getMessage()

        # Attach `extra` fields; unset ones are dropped
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS and value is not None:
                log[key] = value

        if record.exc_info:
            error_code = getattr(record.exc_info[1], 'error_code', None)
            if error_code is not None:
                log.setdefault('errorCode', error_code)
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    log_level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'loggers': {
                DEFAULT_SERVICE: {
                    'level': log_level,
                },
            },
            'root': {
                'level': 'WARNING',
                'handlers': ['stdout'],
            },
        }
    )
