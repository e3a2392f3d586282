"""
Centralized HTTP exceptions for consistent error handling.

Usage:
    from crud_shared.utils.exceptions import NotFoundError, ValidationError

    raise NotFoundError("Book", book_id)
    raise ValidationError("Invalid ID")
    raise InternalError("Error creating entity")
"""

from typing import Any

from fastapi import HTTPException, status

from crud_shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError()
        raise NotFoundError("Book", book_id)
    """

    def __init__(
        self,
        entity: str | None = None,
        entity_id: Any = None,
        detail: str = "The Entity was not found",
        **log_context: Any,
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            entity_id=str(entity_id) if entity_id is not None else None,
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Payload is not valid")
        raise ValidationError("Invalid value", field="pages", value=-1)
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class InvalidIdentifierError(ValidationError):
    """Identifier is malformed or the nil UUID."""

    def __init__(self, raw_id: str | None = None, **log_context: Any):
        super().__init__("Invalid ID", raw_id=raw_id, **log_context)


# =============================================================================
# 500 Internal Server Errors
# =============================================================================


class InternalError(AppException):
    """
    Internal server error (500).

    Usage:
        raise InternalError("Error deleting entity", entity="Book")
    """

    def __init__(self, detail: str = "Internal server error", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            log_level="error",
            **log_context,
        )
