"""Bearer token authentication for inbound requests."""

from typing import Optional

from ..application.dtos import RequestContext
from ..application.ports import AuthenticationError, AuthService, Logger
from ..core.codes import ErrorCode
from ..core.exceptions import new_error


BEARER_SCHEME = "Bearer"


def authenticate(
    authorization_header: Optional[str],
    auth_service: AuthService,
    logger: Logger,
    request_uri: Optional[str] = None,
) -> RequestContext:
    """
    Derive an authenticated request context from an ``Authorization`` header.

    Args:
        authorization_header: Raw header value, expected as ``Bearer <token>``
        auth_service: Service used to validate the token
        logger: Logger for rejected attempts
        request_uri: Optional URI recorded on the context

    Returns:
        RequestContext carrying the token's user id

    Raises:
        DetailError: UNAUTHORIZED when the header is missing, malformed,
            or carries an invalid token
    """
    if not authorization_header:
        logger.warning("authorization header is missing", request_uri=request_uri)
        raise new_error(ErrorCode.UNAUTHORIZED, ValueError("authorization header is required"))

    parts = authorization_header.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
        logger.warning("invalid token format", request_uri=request_uri)
        raise new_error(ErrorCode.UNAUTHORIZED, ValueError("invalid token format"))

    try:
        user_id = auth_service.validate_token(parts[1])
    except AuthenticationError as e:
        logger.warning("invalid token", error=str(e), request_uri=request_uri)
        raise new_error(ErrorCode.UNAUTHORIZED, e) from e

    logger.info("user authenticated", user_id=user_id)
    return RequestContext.authenticated(user_id, request_uri=request_uri)
