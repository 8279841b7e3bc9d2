from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
import requests

from tinylinks.logship.client import get_remote_log_client


@pytest.fixture
def session():
    """Mock requests.Session answering like the log collector."""
    _session = MagicMock(spec=requests.Session)
    _session.headers = {}
    response = MagicMock(spec=requests.Response, status_code=200)
    response.json.return_value = {'logID': '1760529600000', 'message': 'log created successfully'}
    _session.post.return_value = response
    return _session


@pytest.fixture
def executor():
    """Mock executor running submitted work inline."""
    _executor = MagicMock(spec=ThreadPoolExecutor)
    _executor.submit.side_effect = lambda fn, *args, **kwargs: fn(*args, **kwargs)
    return _executor


@pytest.fixture(autouse=True)
def _fresh_remote_client():
    """get_remote_log_client() is cached per process; reset it around each test."""
    get_remote_log_client.cache_clear()
    yield
    get_remote_log_client.cache_clear()
