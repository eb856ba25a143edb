"""
Secure Error Handling

Provides the portfolio error taxonomy and utilities for handling errors
securely without leaking sensitive information.
"""

import functools
import logging
import uuid
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class PortfolioError(Exception):
    """Base error carrying a message that is safe to show to clients."""

    category = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(PortfolioError):
    """No row matches the requested slug or id."""

    category = "not_found"


class ValidationFailure(PortfolioError):
    """Input is well-formed but cannot be stored (empty or duplicate slug)."""

    category = "validation"


class StorageError(PortfolioError):
    """Any failure raised by the relational store."""

    category = "database"


def log_and_sanitize_error(
    error: Exception,
    context: str,
    user_message: Optional[str] = None
) -> tuple[str, str]:
    """
    Log full error details server-side and return sanitized message for client.

    Args:
        error: The exception that occurred
        context: Description of what operation failed (e.g., "create_project")
        user_message: Optional custom message to show user. If None, uses generic message.

    Returns:
        Tuple of (sanitized_message, error_id) for client response
    """
    # Generate unique error ID for correlation
    error_id = str(uuid.uuid4())[:8]

    # Log full error server-side
    logger.error(
        f"{context} failed [{error_id}]: {type(error).__name__}: {str(error)}",
        exc_info=True
    )

    # Return sanitized message for client
    if user_message:
        sanitized = f"{user_message} (Error ID: {error_id})"
    else:
        sanitized = f"{context} failed. Please try again later. (Error ID: {error_id})"

    return sanitized, error_id


def storage_operation(user_message: str):
    """
    Decorator for gateway functions taking a Session as first argument.

    Any SQLAlchemyError is rolled back, logged with the operation name and
    re-raised as StorageError carrying only the sanitized message.

    Example:
        @storage_operation("Failed to fetch projects")
        def list_projects(db: Session) -> list[Project]:
            ...
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(db, *args, **kwargs):
            try:
                return func(db, *args, **kwargs)
            except SQLAlchemyError as e:
                db.rollback()
                sanitized, _ = log_and_sanitize_error(e, func.__name__, user_message)
                raise StorageError(sanitized) from e
        return wrapper
    return decorator
