from tinylinks.types import LambdaEvent, LambdaContext, LambdaResponse
from tinylinks.utils import guarantee_500_response, initialize_logging
from tinylinks.utils.responses import json_response


initialize_logging()


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Liveness check of the URL shortener API (`GET /`)

    Doesn't touch Redis or AppConfig, so it answers as long as the function runs.

    HTTP responses:
        200: Service is up
            message: status message
    """
    return json_response(200, {'message': 'HTTP URL Shortener Microservice Working Fine'})
