import os
import hmac

from tinylinks.types import LambdaEvent
from tinylinks.constants import ENV


def running_locally() -> bool:
    """Return True if running in SAM local invoke/api, False otherwise."""
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'


def get_header(event: LambdaEvent, name: str) -> str | None:
    """Return a request header from an API Gateway event, matching the name case-insensitively."""
    headers = event.get('headers') or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def bearer_token(event: LambdaEvent) -> str | None:
    """Return the token of an `Authorization: Bearer <token>` header, if any."""
    scheme, _, token = (get_header(event, 'Authorization') or '').partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def bearer_token_matches(event: LambdaEvent, expected: str | None) -> bool:
    """Return True if the request's bearer token equals `expected` (constant-time compare).

    An unset or empty `expected` token never matches.
    """
    token = bearer_token(event)
    if not expected or token is None:
        return False
    return hmac.compare_digest(token.encode(), expected.encode())
