from fastapi import HTTPException

from convene.services.error_codes import ErrorCode
from convene.services.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceError,
    ValidationError,
    error_for,
)


def http_error_from_service(err: ServiceError) -> HTTPException:
    if isinstance(err, NotFoundError):
        status = 404
    elif isinstance(err, ConflictError):
        status = 409
    elif isinstance(err, ValidationError):
        status = 422
    else:
        status = 500

    return HTTPException(
        status_code=status,
        detail={"code": err.code, "message": err.message},
    )


def raise_for_code(code: ErrorCode | None, message: str | None = None) -> None:
    if code is not None:
        raise http_error_from_service(error_for(code, message))
