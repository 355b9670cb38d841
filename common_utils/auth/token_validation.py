from typing import Dict

from fastapi import Request

from app.core.logging_config import get_logger
from app.utils.response_utils import unauthenticated
from common_utils.auth.utils import AuthenticationError, verify_token

logger = get_logger(__name__)


def extract_bearer_token(request: Request) -> str:
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Missing or malformed Authorization header")
    return token.strip()


def require_session(request: Request) -> Dict:
    """
    FastAPI dependency guarding every session-only endpoint.

    Any failure is reported as the same 401 so callers cannot tell an
    expired token from a forged one. Decoded claims land on
    `request.state.user` for middleware and handlers downstream.
    """
    try:
        payload = verify_token(extract_bearer_token(request))
    except AuthenticationError as e:
        logger.info(f"Rejected session on {request.method} {request.url.path}: {e}")
        raise unauthenticated()

    request.state.user = payload
    return payload
