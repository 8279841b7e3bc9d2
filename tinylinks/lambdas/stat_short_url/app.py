import logging

from tinylinks.types import LambdaEvent, LambdaContext, LambdaResponse
from tinylinks.constants import MISSING_SHORTCODE
from tinylinks.dao.redis import ShortcodeRedisDAO
from tinylinks.dao.redis.mixins import redis_kwargs
from tinylinks.dao.exceptions import DataStoreError
from tinylinks.exceptions import ConfigurationError, ShortcodeLifecycleError, InternalError
from tinylinks.lifecycle import ShortcodeLifecycle, LoggingHooks
from tinylinks.logship import get_remote_log_client, request_logging
from tinylinks.utils import load_config, app_prefix, isoformat_z, guarantee_500_response, initialize_logging
from tinylinks.utils.responses import json_response, response_400, response_500, lifecycle_error_response


initialize_logging()
logger = logging.getLogger(__name__)


@request_logging
@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests for short URL statistics

    This Lambda handler follows this procedure:
    - Step 1: Extract shortcode from request path
    - Step 2: Fetch the live record with its click log
    - Step 3: Respond with click statistics

    HTTP responses:
        200: Statistics of the short URL
            totalClicks, originalUrl, createdAt, expiryDate,
            clickDetails: [{timestamp, source}, ...] in click order
        400: Missing shortcode in path parameters
        404: Short URL doesn't exist (SHORTCODE_NOT_FOUND)
        410: Short URL expired (SHORTCODE_EXPIRED)
        500: Internal server error

    Example:
        >>> event = {'pathParameters': {'shortcode': 'abc123'}}
        >>> response = lambda_handler(event, None)
        >>> json.loads(response['body'])['totalClicks']
        2
    """
    # 0- Get application's config
    try:
        app_config = load_config('stat_short_url')
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for stat short URL function. Responding with 500.')
        return response_500()
    else:
        redis_config = redis_kwargs(app_config['redis'])

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    # 2- Fetch the live record
    try:
        shortcode_dao = ShortcodeRedisDAO(**redis_config, prefix=app_prefix())
    except DataStoreError:
        logger.exception('Redis is unreachable. Responding with 500.')
        return response_500(error_code=InternalError.error_code)

    lifecycle = ShortcodeLifecycle(shortcode_dao, hooks=LoggingHooks(remote=get_remote_log_client()))
    try:
        stats = lifecycle.stat(shortcode)
    except ShortcodeLifecycleError as e:
        return lifecycle_error_response(e)

    # 3- Respond with click statistics
    return json_response(
        200,
        {
            'totalClicks': stats.clicks,
            'originalUrl': stats.target,
            'createdAt': isoformat_z(stats.created_at),
            'expiryDate': isoformat_z(stats.expires_at),
            'clickDetails': [
                {'timestamp': isoformat_z(click.timestamp), 'source': click.source}
                for click in stats.click_events
            ],
        },
    )
