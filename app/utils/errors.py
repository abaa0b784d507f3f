from typing import Dict

from fastapi import HTTPException, status

from app.core.logging_config import get_logger
from app.rules.errors import (
    AvailabilityConflictError,
    BookingNotFoundError,
    BookingPersistenceError,
    DomainError,
    InvalidStatusTransitionError,
    SelectionInvalidError,
)

logger = get_logger()

STATUS_BY_ERROR = {
    SelectionInvalidError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    AvailabilityConflictError: status.HTTP_409_CONFLICT,
    InvalidStatusTransitionError: status.HTTP_409_CONFLICT,
    BookingPersistenceError: status.HTTP_503_SERVICE_UNAVAILABLE,
    BookingNotFoundError: status.HTTP_404_NOT_FOUND,
}


def error_response(
    message: str,
    field_errors: Dict[str, str],
    code: int = status.HTTP_422_UNPROCESSABLE_ENTITY,
) -> HTTPException:
    """Return an HTTPException with a consistent structure and log details."""
    logger.warning(f"{message} {field_errors}")
    detail = {"message": message, "field_errors": field_errors}
    return HTTPException(status_code=code, detail=detail)


def domain_http_error(error: DomainError) -> HTTPException:
    field_errors = {}
    if isinstance(error, SelectionInvalidError):
        field_errors = error.field_errors()
    elif isinstance(error, AvailabilityConflictError):
        field_errors = {"event_date": "This date is unavailable, please pick another date"}

    code = STATUS_BY_ERROR.get(type(error), status.HTTP_400_BAD_REQUEST)
    return error_response(error.message, field_errors, code)
