"""Domain exceptions.

All domain-level errors that represent business rule violations.
These are raised by validation and repositories when catalog invariants
would be broken, and caught at the application layer.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(DomainError):
    """Raised when input values break a field-level invariant.

    Attributes:
        errors: Mapping of field name to the messages for that field.
    """

    def __init__(self, message: str, errors: dict[str, list[str]]) -> None:
        super().__init__(message, details={"errors": errors})
        self.errors = errors


class InvalidProductError(ValidationError):
    """Raised when product fields fail validation."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__("One or more product fields are invalid.", errors)


class InvalidCategoryError(ValidationError):
    """Raised when category fields fail validation."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__("One or more category fields are invalid.", errors)


# ============================================================================
# Reference Errors
# ============================================================================


class UnknownCategoryError(DomainError):
    """Raised when a product references categories that do not exist.

    This covers both the up-front existence check and a category being
    deleted between that check and the association write.
    """

    def __init__(self, category_ids: list[int] | None = None) -> None:
        """Initialize unknown category error.

        Args:
            category_ids: The ids that were submitted, if known.
        """
        ids = list(category_ids or [])
        super().__init__(
            "One or more category IDs are invalid.",
            details={"category_ids": ids},
        )
        self.category_ids = ids
