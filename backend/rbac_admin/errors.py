from typing import Any

from fastapi import status


class AppError(Exception):
    code: str = "APP_ERROR"
    message: str = "Application error"
    status_code: int = status.HTTP_400_BAD_REQUEST
    details: Any | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: Any | None = None,
    ):
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        if details is not None:
            self.details = details

        super().__init__(self.message)


class ValidationError(AppError):
    code = "VALIDATION_ERROR"
    message = "Validation error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(reason, details={"field": field, "reason": reason})


class EntityNotFound(AppError):
    code = "NOT_FOUND"
    message = "Resource not found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity_name: str, entity_id: int):
        self.entity_name = entity_name
        self.entity_id = entity_id
        super().__init__(
            f"{entity_name} with id {entity_id} was not found",
            details={"entity": entity_name, "id": entity_id},
        )


class ConflictError(AppError):
    code = "CONFLICT_ERROR"
    message = "Resource conflict"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(
            f"{field} '{value}' is already in use",
            details={"field": field, "value": value},
        )


class PersistenceError(AppError):
    """Store or connectivity failure. Callers may retry with backoff."""

    code = "PERSISTENCE_ERROR"
    message = "Persistence failure"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, operation: str, entity_name: str | None = None):
        self.operation = operation
        self.entity_name = entity_name
        target = f" on {entity_name}" if entity_name else ""
        super().__init__(f"{operation} failed{target}")


class IntegrityViolation(PersistenceError):
    """A database constraint rejected the write.

    ``kind`` is ``"unique"``, ``"foreign_key"`` or ``"other"``; ``detail`` is
    the driver message naming the constraint or columns involved.
    """

    def __init__(
        self,
        operation: str,
        entity_name: str | None = None,
        *,
        kind: str = "other",
        detail: str = "",
    ):
        self.kind = kind
        self.detail = detail
        super().__init__(operation, entity_name)


class ServiceError(AppError):
    code = "INTERNAL_ERROR"
    message = "Internal server error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        operation: str,
        entity_name: str,
        entity_id: int | None = None,
    ):
        self.operation = operation
        self.entity_name = entity_name
        self.entity_id = entity_id
        # message stays generic, the cause chain carries the detail
        super().__init__()


ERROR_CODE_BY_STATUS: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: ValidationError.code,
    status.HTTP_404_NOT_FOUND: EntityNotFound.code,
    status.HTTP_409_CONFLICT: ConflictError.code,
    status.HTTP_422_UNPROCESSABLE_ENTITY: ValidationError.code,
}


def error_payload(
    code: str,
    message: str,
    details: Any | None = None,
) -> dict[str, Any]:
    return {"error": {"code": code, "message": message, "details": details}}


def resolve_error_code(status_code: int) -> str:
    if status_code in ERROR_CODE_BY_STATUS:
        return ERROR_CODE_BY_STATUS[status_code]
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return ServiceError.code
    return "UNKNOWN_ERROR"
