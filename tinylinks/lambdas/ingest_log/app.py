import os
import json
import logging

from tinylinks.types import LambdaEvent, LambdaContext, LambdaResponse
from tinylinks.constants import ENV, RemoteLog, INVALID_JSON, UNAUTHORIZED, MISSING_LOG_FIELDS, INVALID_LOG_LEVEL
from tinylinks.logship import get_remote_log_client
from tinylinks.logship.client import SHIPPED_ATTR
from tinylinks.utils import utcnow, guarantee_500_response, initialize_logging
from tinylinks.utils.runtime import bearer_token_matches
from tinylinks.utils.responses import json_response, response_400, response_401, response_500


initialize_logging()
logger = logging.getLogger(__name__)

LOG_FIELDS = ('stack', 'level', 'package', 'message')


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Relay log events from clients to the remote log collector

    This Lambda handler follows this procedure:
    - Step 1: Authorize the caller (bearer token must equal LOG_BEARER_TOKEN)
    - Step 2: Validate the log event (stack, level, package, message)
    - Step 3: Forward the event to the collector at LOG_URL (fire-and-forget)
    - Step 4: Respond with the event's log id

    HTTP responses:
        200: Log event accepted
            message: success message
            logID: millisecond timestamp of reception
        400: Bad client request
            errorCode: INVALID_JSON, MISSING_LOG_FIELDS or INVALID_LOG_LEVEL
        401: Missing or wrong bearer token
        500: Internal server error (relay not configured)

    Example:
        >>> event = {
        ...     'headers': {'Authorization': 'Bearer s3cr3t'},
        ...     'body': '{"stack": "backend", "level": "info", "package": "db", "message": "connected"}',
        ... }
        >>> json.loads(lambda_handler(event, None)['body'])
        {'message': 'Log received and forwarded successfully', 'logID': '1760529600000'}
    """
    # 1- Authorize the caller
    if not bearer_token_matches(event, os.environ.get(ENV.RemoteLog.BEARER_TOKEN)):
        logger.info('Missing or invalid bearer token. Responding with 401.', extra={'event': UNAUTHORIZED})
        return response_401(message='missing or invalid bearer token', error_code=UNAUTHORIZED)

    # 2- Validate the log event
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)
    if not isinstance(request_body, dict):
        return response_400(message='JSON body must be an object', error_code=INVALID_JSON)

    missing = [field for field in LOG_FIELDS if not request_body.get(field) or not isinstance(request_body[field], str)]
    if missing:
        logger.info('Log event is missing fields. Responding with 400.', extra={'event': MISSING_LOG_FIELDS, 'missing': missing})
        return response_400(message=f'missing required fields: {", ".join(missing)}', error_code=MISSING_LOG_FIELDS)

    stack, level, package, message = (request_body[field] for field in LOG_FIELDS)
    if level.lower() not in RemoteLog.LEVELS:
        return response_400(
            message=f"level must be one of: {', '.join(sorted(RemoteLog.LEVELS))}",
            error_code=INVALID_LOG_LEVEL,
        )

    # 3- Forward the event to the collector
    client = get_remote_log_client()
    if client is None:
        logger.error('LOG_URL is not configured, cannot forward log events. Responding with 500.')
        return response_500()

    client.log(stack, level, package, message)
    logger.info(
        'Received log: [%s] %s/%s - %s',
        level.upper(),
        stack,
        package,
        message,
        extra={SHIPPED_ATTR: True},
    )

    # 4- Respond with the log id
    log_id = str(int(utcnow().timestamp() * 1000))
    return json_response(200, {'message': 'Log received and forwarded successfully', 'logID': log_id})
