from typing import cast

import pytest
from pytest import MonkeyPatch

from tinylinks.types import LambdaConfiguration
from tinylinks.logship import middleware


@pytest.fixture(autouse=True)
def lambda_environment(monkeypatch: MonkeyPatch) -> None:
    """Run handlers as deployed functions without a remote log collector."""
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)
    monkeypatch.delenv('LOG_URL', raising=False)
    monkeypatch.setattr(middleware, 'get_remote_log_client', lambda: None)


@pytest.fixture
def config() -> LambdaConfiguration:
    return cast(LambdaConfiguration, {'redis': {'host': 'redis.test', 'port': 6379, 'db': 0}})
