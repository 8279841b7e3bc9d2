"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to access
configuration data stored in **AWS AppConfig**. Each environment (`APP_ENV`) has
a dedicated AppConfig *Environment* within the shared AppConfig *Application*
identified by `APP_NAME`. Configuration data is stored as a JSON document under
a configuration profile (typically `backend-config`).

The configuration JSON follows this structure:

    {
        "build": 7,
        "active_backend": "redis",
        "configs": {
            "create_short_url": {
                "redis": { ... }
            },
            "stat_short_url": {
                "redis": { ... }
            },
            "redirect_url": {
                "redis": { ... }
            }
        }
    }

Each Lambda loads its own section (e.g., `"create_short_url"`) from this
AppConfig document. For local runs without AppConfig, the Redis connection is
read from `REDIS_HOST`, `REDIS_PORT`, `REDIS_DB`, `REDIS_USERNAME` and
`REDIS_PASSWORD` instead.

Typical usage inside a Lambda handler:
    >>> from tinylinks.utils.config import load_config
    >>> config = load_config('create_short_url')
    >>> print(config['redis']['host'])
    redis-15501.host.docker.internal
"""

import os
import json
import functools
import urllib.parse
import urllib.request
import logging
from collections.abc import Callable

import boto3

from tinylinks.types import LambdaConfiguration, AppConfig
from tinylinks.constants import ENV
from tinylinks.utils.helpers import require_environment
from tinylinks.utils.runtime import running_locally
from tinylinks.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return the Redis key namespace as <app name>:<app env>, or None if APP_NAME is not set."""
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _select_function_config(config: AppConfig, function_name: str) -> LambdaConfiguration:
    try:
        backend = config['active_backend']
        return {backend: config['configs'][function_name][backend]}
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"AppConfig document has no '{function_name}' section for the active backend.") from e


def _sam_load_local_appconfig(func: Callable) -> Callable:  # pragma: no cover
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM.

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the app configuration JSON from the local
          AppConfig agent.
        - Else, call the wrapped function.
    """

    def __validate_appconfig_url(url: str | None) -> str:
        if not url:
            return ''
        components = urllib.parse.urlparse(url)
        if components.scheme not in {'http', 'https'}:
            raise BadConfigurationError(f'Bad scheme {url}')
        if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'}:
            raise BadConfigurationError(f'Bad host {url}')
        if components.port not in {2772, None}:
            raise BadConfigurationError(f'Bad port {url}')
        return url

    @functools.wraps(func)
    def wrapper(function_name: str) -> LambdaConfiguration:
        agent_url = __validate_appconfig_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(function_name)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'functionName': function_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            config = json.load(r)

        data = _select_function_config(config, function_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'functionName': function_name, 'build': config.get('build')})
        return data

    return wrapper


def _load_local_environment(func: Callable) -> Callable:
    """Decorator: build the configuration from REDIS_* variables for local runs.

    Only kicks in when running locally and no AppConfig application is
    configured; deployed functions always go through AppConfig.
    """

    @functools.wraps(func)
    def wrapper(function_name: str) -> LambdaConfiguration:
        if not running_locally() or os.environ.get(ENV.AppConfig.APP_ID):
            return func(function_name)

        redis_config = {
            'host': os.environ.get(ENV.Redis.HOST, 'localhost'),
            'port': os.environ.get(ENV.Redis.PORT, '6379'),
            'db': os.environ.get(ENV.Redis.DB, '0'),
        }
        if os.environ.get(ENV.Redis.USERNAME):
            redis_config['username'] = os.environ[ENV.Redis.USERNAME]
        if os.environ.get(ENV.Redis.PASSWORD):
            redis_config['password'] = os.environ[ENV.Redis.PASSWORD]

        logger.debug(
            'Loaded configuration from environment.',
            extra={'functionName': function_name, 'redisHost': redis_config['host']},
        )
        return {'redis': redis_config}

    return wrapper


@_sam_load_local_appconfig
@_load_local_environment
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(function_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig.

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'create_short_url', 'redirect_url').

    Raises:
        MissingEnvironmentVariableError: If the AppConfig identifiers are not set.
        BadConfigurationError: If the document has no section for this function.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'functionName': function_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    config = json.loads(content.decode('utf-8'))

    data = _select_function_config(config, function_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'functionName': function_name, 'build': config.get('build')})
    return data
