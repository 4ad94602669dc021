from convene.services.error_codes import ErrorCode


class ServiceError(Exception):
    def __init__(self, code: str, message: str | None = None) -> None:
        self.code = code
        self.message = message or code
        super().__init__(self.message)


class NotFoundError(ServiceError):
    pass


class ConflictError(ServiceError):
    pass


class ValidationError(ServiceError):
    pass


_ERROR_CLASSES: dict[ErrorCode, type[ServiceError]] = {
    ErrorCode.EVENT_NOT_FOUND: NotFoundError,
    ErrorCode.DUPLICATE_EVENT_ID: ConflictError,
    ErrorCode.INVALID_EVENT: ValidationError,
    ErrorCode.EVENT_CANCELLED: ConflictError,
    ErrorCode.EVENT_ALREADY_CANCELLED: ConflictError,
    ErrorCode.ALREADY_REGISTERED: ConflictError,
    ErrorCode.NOT_REGISTERED: ValidationError,
    ErrorCode.INVALID_PARTICIPANT: ValidationError,
}


def error_for(code: ErrorCode, message: str | None = None) -> ServiceError:
    return _ERROR_CLASSES[code](code.value, message)
