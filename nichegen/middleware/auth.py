"""
Authentication middleware for the NicheGen backend.

Authorization is an explicit check that returns a typed outcome. The
``token_required`` decorator runs the check for a protected operation and
hands the caller's identity to the handler as its first argument instead of
stashing it on request globals.
"""

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Optional, TypeVar, Union, cast

import jwt
from flask import request

from ..routes.handlers.common import create_error_response
from ..services import get_services
from ..utils.auth_utils import decode_token, get_user

# Set up logging
logger = logging.getLogger(__name__)

# Type variables for better typing
F = TypeVar('F', bound=Callable[..., Any])

NO_TOKEN_MESSAGE = 'No token, access denied'
INVALID_TOKEN_MESSAGE = 'Not authorized, token failed'


@dataclass(frozen=True)
class Authorized:
    """The bearer token is valid and belongs to an existing user."""
    user_id: int


@dataclass(frozen=True)
class Unauthorized:
    """The request must be rejected with 401; ``reason`` is safe to show."""
    reason: str


AuthOutcome = Union[Authorized, Unauthorized]


def extract_bearer_token(auth_header: Optional[str]) -> Optional[str]:
    if not auth_header:
        return None
    scheme, _, token = auth_header.partition(' ')
    if scheme != 'Bearer' or not token.strip():
        return None
    return token.strip()


def authorize(auth_header: Optional[str], secret: str, user_exists: Callable[[int], bool]) -> AuthOutcome:
    """
    Check an ``Authorization`` header.

    Args:
        auth_header: Raw header value, may be None
        secret: Shared signing secret
        user_exists: Lookup confirming the token's user still exists

    Returns:
        Authorized with the owner id, or Unauthorized with the reason
    """
    token = extract_bearer_token(auth_header)
    if not token:
        return Unauthorized(NO_TOKEN_MESSAGE)

    try:
        payload = decode_token(token, secret)
    except jwt.ExpiredSignatureError:
        logger.warning("Expired token attempted")
        return Unauthorized(INVALID_TOKEN_MESSAGE)
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid token: {e}")
        return Unauthorized(INVALID_TOKEN_MESSAGE)

    user_id = payload.get('id')
    if not isinstance(user_id, int) or not user_exists(user_id):
        logger.warning(f"Token for unknown user id {user_id!r}")
        return Unauthorized(INVALID_TOKEN_MESSAGE)

    return Authorized(user_id)


def token_required(f: F) -> F:
    """
    Decorator that protects a route with JWT authentication.

    Usage:
        @token_required
        def protected_route(user_id):
            ...
    """
    @wraps(f)
    def decorated(*args: Any, **kwargs: Any) -> Any:
        services = get_services()
        outcome = authorize(
            request.headers.get('Authorization'),
            services.config.JWT_SECRET,
            lambda user_id: get_user(services.session_factory, user_id) is not None,
        )
        if isinstance(outcome, Unauthorized):
            return create_error_response(outcome.reason, 401)
        return f(outcome.user_id, *args, **kwargs)

    return cast(F, decorated)
