"""Unit tests for logging initialization in logging.py

Test coverage includes:

1. JsonFormatter
   - Renders timestamp, level, logger and message as JSON.
   - Attaches `extra` fields and formatted exceptions.

2. initialize_logging()
   - Configures a stdout JSON handler at LOG_LEVEL.
   - Attaches RemoteLogHandler (WARNING and above) only when LOG_URL is set.
"""

import sys
import json
import logging

import pytest

from tinylinks.logship.handler import RemoteLogHandler
from tinylinks.utils.logging import JsonFormatter, initialize_logging


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo dictConfig changes to the root logger after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(msg='Short URL created', level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord('tinylinks.lifecycle.engine', level, __file__, 1, msg, (), exc_info)
    record.created = 1760529600.0  # 2025-10-15T12:00:00Z
    record.__dict__.update(extra)
    return record


# -------------------------------
# 1. JsonFormatter
# -------------------------------


def test_json_formatter():
    log = json.loads(JsonFormatter().format(make_record()))

    assert log['timestamp'] == '2025-10-15T12:00:00.000Z'
    assert log['level'] == 'INFO'
    assert log['logger'] == 'tinylinks.lifecycle.engine'
    assert log['message'] == 'Short URL created'


def test_json_formatter_attaches_extra_fields():
    log = json.loads(JsonFormatter().format(make_record(shortcode='abc123', event='create_succeeded')))

    assert log['shortcode'] == 'abc123'
    assert log['event'] == 'create_succeeded'


def test_json_formatter_attaches_exception():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record(level=logging.ERROR, exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))

    assert 'RuntimeError: boom' in log['exception']


# -------------------------------
# 2. initialize_logging()
# -------------------------------


def test_initialize_logging_without_remote(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'debug')
    monkeypatch.delenv('LOG_URL', raising=False)

    initialize_logging()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonFormatter)


def test_initialize_logging_with_remote(monkeypatch):
    monkeypatch.delenv('LOG_LEVEL', raising=False)
    monkeypatch.setenv('LOG_URL', 'https://logs.example.com/log')
    monkeypatch.setenv('LOG_BEARER_TOKEN', 's3cr3t')

    initialize_logging()

    root = logging.getLogger()
    remote = [h for h in root.handlers if isinstance(h, RemoteLogHandler)]
    assert root.level == logging.INFO
    assert len(remote) == 1
    assert remote[0].level == logging.WARNING
    assert remote[0].client.url == 'https://logs.example.com/log'
    assert remote[0].client.session.headers['Authorization'] == 'Bearer s3cr3t'
