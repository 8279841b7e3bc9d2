from tinylinks.utils.config import app_env, app_name, app_prefix, load_config
from tinylinks.utils.helpers import (
    base_url,
    get_short_url,
    utcnow,
    isoformat_z,
    require_environment,
    guarantee_500_response,
)
from tinylinks.utils.shortener import generate_shortcode
from tinylinks.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'get_short_url',
    'utcnow',
    'isoformat_z',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
