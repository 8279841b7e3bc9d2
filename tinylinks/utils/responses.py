"""API Gateway (Lambda proxy) response builders shared by all handlers."""

import json
from typing import Any

from tinylinks.types import LambdaResponse, HttpHeaders
from tinylinks.exceptions import ShortcodeLifecycleError


CORS_HEADERS: HttpHeaders = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Authorization,Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def json_response(status_code: int, body: dict[str, Any], headers: HttpHeaders | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def error_response(status_code: int, message: str, error_code: str | None = None) -> LambdaResponse:
    body = {'message': message}
    if error_code:
        body['errorCode'] = error_code
    return json_response(status_code, body)


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Bad Request'
    return error_response(400, base if not message else f'{base} ({message})', error_code)


def response_401(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Unauthorized'
    return error_response(401, base if not message else f'{base} ({message})', error_code)


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Internal Server Error'
    return error_response(500, base if not message else f'{base} ({message})', error_code)


def response_302(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 302,
        'headers': {'Location': location, **CORS_HEADERS},
        'body': json.dumps({}),  # no body needed for redirects
    }


def lifecycle_error_response(error: ShortcodeLifecycleError) -> LambdaResponse:
    """Map a lifecycle error to its HTTP response. 5xx responses never expose the cause."""
    message = error.public_message if error.status_code >= 500 else str(error)
    return error_response(error.status_code, message, error.error_code)
