import os
import logging

from tinylinks.types import LambdaEvent, LambdaContext, LambdaResponse
from tinylinks.constants import ENV, UNAUTHORIZED
from tinylinks.utils import guarantee_500_response, initialize_logging
from tinylinks.utils.runtime import bearer_token_matches
from tinylinks.utils.responses import json_response, response_401


initialize_logging()
logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Liveness check of the log relay (`GET /` on the relay API)

    The caller must present the relay's bearer token (LOG_BEARER_TOKEN), so
    a 200 also confirms that clients are configured with the right token.

    HTTP responses:
        200: Relay is up and the token is correct
        401: Missing or wrong bearer token
    """
    if not bearer_token_matches(event, os.environ.get(ENV.RemoteLog.BEARER_TOKEN)):
        logger.info('Missing or invalid bearer token. Responding with 401.', extra={'event': UNAUTHORIZED})
        return response_401(message='missing or invalid bearer token', error_code=UNAUTHORIZED)

    return json_response(200, {'message': 'Log relay working fine'})
