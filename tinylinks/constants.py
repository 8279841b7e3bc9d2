import string
from enum import StrEnum


class Shortcode:
    """Shortcode generation parameters."""

    LENGTH = 6
    ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits  # 62 symbols
    # Auto-generation retry cap (62^6 codes, collisions are practically never consecutive)
    MAX_ATTEMPTS = 10


class Defaults:
    """Default values for short URL records."""

    VALIDITY_MINUTES = 30
    CLICK_SOURCE = 'unknown'  # Used when the client sends no User-Agent header


class RemoteLog:
    """Remote log collector call contract."""

    STACK = 'backend'
    LEVELS = frozenset({'debug', 'info', 'warn', 'error', 'fatal'})
    TIMEOUT_SECONDS = 5
    MAX_WORKERS = 2


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'

    class Redis(StrEnum):
        # Fallback connection details when AppConfig is not available (local runs)
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105

    class RemoteLog(StrEnum):
        URL = 'LOG_URL'
        BEARER_TOKEN = 'LOG_BEARER_TOKEN'  # noqa: S105


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
INVALID_JSON = 'INVALID_JSON'
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
INVALID_SHORTCODE = 'INVALID_SHORTCODE'
UNAUTHORIZED = 'UNAUTHORIZED'
MISSING_LOG_FIELDS = 'MISSING_LOG_FIELDS'
INVALID_LOG_LEVEL = 'INVALID_LOG_LEVEL'
