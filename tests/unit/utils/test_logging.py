"""Unit tests for logging initialization in logging.py

Test coverage includes:

1. JsonFormatter
   - Ensures records are rendered as one JSON object with the standard fields.
   - Ensures `extra` fields are attached.
   - Ensures tracebacks are rendered under 'exception'.

2. initialize_logging()
   - Ensures the root logger level follows LOG_LEVEL.
   - Ensures AWS SDK loggers stay at WARNING.
"""

import sys
import json
import logging
from datetime import datetime, UTC

import pytest

from shortlinks.utils.logging import QUIET_LOGGERS, JsonFormatter, initialize_logging


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def root_logger():
    """Restore the root and SDK logger levels and handlers after the test."""
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    quiet_levels = {name: logging.getLogger(name).level for name in QUIET_LOGGERS}
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, quiet_level in quiet_levels.items():
        logging.getLogger(name).setLevel(quiet_level)


def make_record(msg='Link created.', level=logging.INFO, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord('shortlinks.test', level, __file__, 1, msg, None, exc_info)
    record.created = datetime(2025, 12, 26, 12, 0, 0, tzinfo=UTC).timestamp()
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# -------------------------------
# 1. JsonFormatter
# -------------------------------


def test_json_formatter_standard_fields():
    """Ensure timestamp, level, logger and message are rendered."""
    log = json.loads(JsonFormatter().format(make_record()))

    assert log == {
        'timestamp': '2025-12-26T12:00:00.000Z',
        'level': 'INFO',
        'logger': 'shortlinks.test',
        'message': 'Link created.',
    }


def test_json_formatter_attaches_extra_fields():
    """Ensure `extra` fields are part of the JSON document."""
    log = json.loads(JsonFormatter().format(make_record(event='LINK_CREATED', hash='aB3_')))

    assert log['event'] == 'LINK_CREATED'
    assert log['hash'] == 'aB3_'


def test_json_formatter_serializes_unknown_types():
    """Ensure non-JSON values in `extra` are rendered with str()."""
    log = json.loads(JsonFormatter().format(make_record(when=datetime(2025, 1, 1, tzinfo=UTC))))
    assert log['when'] == '2025-01-01 00:00:00+00:00'


def test_json_formatter_renders_exception():
    """Ensure tracebacks are rendered under 'exception'."""
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record(level=logging.ERROR, exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))
    assert 'RuntimeError: boom' in log['exception']


# -------------------------------
# 2. initialize_logging()
# -------------------------------


@pytest.mark.parametrize('level, expected', [('DEBUG', logging.DEBUG), ('warning', logging.WARNING), (None, logging.INFO)])
def test_initialize_logging_level(monkeypatch, root_logger, level, expected):
    """Ensure the root logger level follows LOG_LEVEL (INFO by default)."""
    if level is None:
        monkeypatch.delenv('LOG_LEVEL', raising=False)
    else:
        monkeypatch.setenv('LOG_LEVEL', level)

    initialize_logging()

    assert root_logger.level == expected
    assert any(isinstance(handler.formatter, JsonFormatter) for handler in root_logger.handlers)


def test_initialize_logging_quiets_sdk_loggers(monkeypatch, root_logger):
    """Ensure boto3, botocore and urllib3 stay at WARNING even under DEBUG."""
    monkeypatch.setenv('LOG_LEVEL', 'DEBUG')

    initialize_logging()

    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING
