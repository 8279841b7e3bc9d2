import logging

from tinylinks.types import LambdaEvent, LambdaContext, LambdaResponse
from tinylinks.constants import Defaults, MISSING_SHORTCODE
from tinylinks.dao.redis import ShortcodeRedisDAO
from tinylinks.dao.redis.mixins import redis_kwargs
from tinylinks.dao.exceptions import DataStoreError
from tinylinks.exceptions import ConfigurationError, ShortcodeLifecycleError, InternalError
from tinylinks.lifecycle import ShortcodeLifecycle, LoggingHooks
from tinylinks.logship import get_remote_log_client, request_logging
from tinylinks.utils import load_config, get_short_url, app_prefix, guarantee_500_response, initialize_logging
from tinylinks.utils.runtime import get_header
from tinylinks.utils.responses import response_302, response_400, response_500, lifecycle_error_response


initialize_logging()
logger = logging.getLogger(__name__)


@request_logging
@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Record the click (expired and unknown links are rejected)
    - Step 3: Redirect client to target URL

    The click source is the client's User-Agent header, 'unknown' if absent.

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Short URL doesn't exist (SHORTCODE_NOT_FOUND)
        410: Short URL expired (SHORTCODE_EXPIRED)
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the shortcode path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'abc123'}, 'headers': {'User-Agent': 'curl/8.4.0'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for redirect URL function. Responding with 500.')
        return response_500()
    else:
        logger.debug('Assuming Redis as the backend database for short URLs')
        redis_config = redis_kwargs(app_config['redis'])

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info(
            'Missing "shortcode" in path. Responding with 400.',
            extra={'event': MISSING_SHORTCODE},
        )
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Record the click
    try:
        shortcode_dao = ShortcodeRedisDAO(**redis_config, prefix=app_prefix())
    except DataStoreError:
        logger.exception('Redis is unreachable. Responding with 500.')
        return response_500(error_code=InternalError.error_code)

    lifecycle = ShortcodeLifecycle(shortcode_dao, hooks=LoggingHooks(remote=get_remote_log_client()))
    source = get_header(event, 'User-Agent') or Defaults.CLICK_SOURCE
    try:
        target_url = lifecycle.redirect(shortcode, source)
    except ShortcodeLifecycleError as e:
        return lifecycle_error_response(e)

    # 3- Redirect client to target URL
    return response_302(location=target_url)
