"""Translate exceptions into transport responses."""

from typing import Any, Dict, Optional, Tuple

from ..application.ports import Logger
from ..core.codes import ErrorCode
from ..core.exceptions import DetailError, new_error


def handle_error(
    exc: BaseException,
    logger: Logger,
    request_uri: Optional[str] = None,
) -> Tuple[int, Dict[str, Any]]:
    """
    Log an exception and build the response for it.

    A ``DetailError`` is logged at its own level with its full cause and
    answered with its business error only. Anything else is logged as an
    error and answered with the generic internal error, so no internal
    detail reaches the caller.

    Returns:
        Tuple of (HTTP status, response body)
    """
    if isinstance(exc, DetailError):
        logger.log(
            exc.log_level,
            str(exc) or type(exc.cause).__name__,
            code=exc.code,
            message=exc.message,
            request_uri=request_uri,
        )
        return exc.http_status, exc.business_error.to_dict()

    logger.error(str(exc) or type(exc).__name__, request_uri=request_uri)
    internal = new_error(ErrorCode.INTERNAL_SERVER_ERROR)
    return internal.http_status, internal.business_error.to_dict()
