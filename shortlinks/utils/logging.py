"""Structured JSON logging for the lambdas

Every lambda package calls `initialize_logging()` from its `__init__.py`, so
the root logger is configured once per cold start, before the handler module
logs anything. Each record becomes one JSON document on stdout, which
CloudWatch indexes field by field:

    {
        "timestamp": "2025-12-26T12:00:00.000Z",
        "level": "INFO",
        "logger": "shortlinks.lambdas.create_link.app",
        "message": "Link created. Responding with 201.",
        "event": "LINK_CREATED",
        "hash": "aB3_"
    }

Fields passed through `extra=` are copied verbatim; values json can't encode
are rendered with str(). Store SDK chatter (boto3, botocore, urllib3) is held
at WARNING regardless of LOG_LEVEL.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from shortlinks.utils.constants import LOG_LEVEL_ENV


QUIET_LOGGERS = ('boto3', 'botocore', 'urllib3')


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    # Attributes every LogRecord carries; anything else came in through `extra`
    STANDARD_ATTRS = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', None, None))) | {'message', 'asctime'}

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS:
                log[key] = value

        # Tracebacks stay in the logs; they are never part of an API response
        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    log_level = os.getenv(LOG_LEVEL_ENV, 'INFO').upper()
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
            'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
