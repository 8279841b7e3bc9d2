import json
import logging

from tinylinks.types import LambdaEvent, LambdaContext, LambdaResponse
from tinylinks.constants import INVALID_JSON, INVALID_SHORTCODE
from tinylinks.dao.redis import ShortcodeRedisDAO
from tinylinks.dao.redis.mixins import redis_kwargs
from tinylinks.dao.exceptions import DataStoreError
from tinylinks.exceptions import ConfigurationError, ShortcodeLifecycleError, InternalError
from tinylinks.lifecycle import ShortcodeLifecycle, LoggingHooks
from tinylinks.logship import get_remote_log_client, request_logging
from tinylinks.utils import load_config, get_short_url, app_prefix, isoformat_z, guarantee_500_response, initialize_logging
from tinylinks.utils.responses import json_response, response_400, response_500, lifecycle_error_response


initialize_logging()
logger = logging.getLogger(__name__)


@request_logging
@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract original URL, validity and optional shortcode from request body
    - Step 2: Create the short URL (validation, shortcode claim and storage)
    - Step 3: Respond to user with 201 created

    HTTP responses:
        201: Short URL created
            shortLink: newly generated short url
            expiry: ISO-8601 UTC instant after which the short url stops working
        400: Bad client request
            errorCode: INVALID_JSON, INVALID_SHORTCODE, MISSING_URL, INVALID_URL,
                       INVALID_VALIDITY or DUPLICATE_SHORTCODE
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"url": "https://example.com", "validity": 60, "shortcode": "abc123"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])
        {'shortLink': 'http://localhost:3000/abc123', 'expiry': '2025-10-15T13:00:00.000Z'}
    """
    # 0- Get application's config
    try:
        app_config = load_config('create_short_url')
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for create short URL function. Responding with 500.')
        return response_500()
    else:
        redis_config = redis_kwargs(app_config['redis'])

    # 1- Extract original URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Request body is not valid JSON. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)
    if not isinstance(request_body, dict):
        logger.info('Request body is not a JSON object. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='JSON body must be an object', error_code=INVALID_JSON)

    shortcode = request_body.get('shortcode')
    if shortcode is not None and not isinstance(shortcode, str):
        logger.info('Requested shortcode is not a string. Responding with 400.', extra={'event': INVALID_SHORTCODE})
        return response_400(message="'shortcode' must be a string", error_code=INVALID_SHORTCODE)

    # 2- Create the short URL
    try:
        shortcode_dao = ShortcodeRedisDAO(**redis_config, prefix=app_prefix())
    except DataStoreError:
        logger.exception('Redis is unreachable. Responding with 500.')
        return response_500(error_code=InternalError.error_code)

    lifecycle = ShortcodeLifecycle(shortcode_dao, hooks=LoggingHooks(remote=get_remote_log_client()))
    try:
        created = lifecycle.create(
            request_body.get('url'),
            validity=request_body.get('validity'),
            shortcode=shortcode,
        )
    except ShortcodeLifecycleError as e:
        return lifecycle_error_response(e)

    # 3- Return successful response to user
    return json_response(
        201,
        {
            'shortLink': get_short_url(created.shortcode, event),
            'expiry': isoformat_z(created.expires_at),
        },
    )
