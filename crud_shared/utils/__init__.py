"""
Utilities module: Exceptions.
"""

from crud_shared.utils.exceptions import (
    AppException,
    NotFoundError,
    ValidationError,
    InvalidIdentifierError,
    InternalError,
)

__all__ = [
    "AppException",
    "NotFoundError",
    "ValidationError",
    "InvalidIdentifierError",
    "InternalError",
]
