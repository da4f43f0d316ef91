"""
Domain Exceptions.

Custom exceptions for domain-level errors.
These exceptions represent business rule violations and are translated
to HTTP responses by the API exception handler.
"""

from typing import Optional, Any, Dict


class DomainException(Exception):
    """Base exception for all domain errors."""

    status_code = 400

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "DOMAIN_ERROR"
        self.details = details or {}


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found."""

    status_code = 404

    def __init__(self, entity_type: str, entity_id: Any = None, message: Optional[str] = None):
        super().__init__(
            message=message or f"{entity_type} not found",
            code="ENTITY_NOT_FOUND",
            details={
                "entity_type": entity_type,
                "entity_id": str(entity_id) if entity_id is not None else None,
            }
        )


class EntityAlreadyExistsException(DomainException):
    """Raised when trying to create an entity that already exists."""

    status_code = 409

    def __init__(self, entity_type: str, identifier: Any, message: Optional[str] = None):
        super().__init__(
            message=message or f"{entity_type} with identifier '{identifier}' already exists",
            code="ENTITY_ALREADY_EXISTS",
            details={"entity_type": entity_type, "identifier": str(identifier)}
        )


class EntityInUseException(DomainException):
    """Raised when deleting an entity that other records still reference."""

    status_code = 409

    def __init__(self, entity_type: str, message: str, usage_count: int = 0):
        super().__init__(
            message=message,
            code="ENTITY_IN_USE",
            details={"entity_type": entity_type, "usage_count": usage_count}
        )


class InvalidOperationException(DomainException):
    """Raised when an operation is not valid in the current state."""

    def __init__(self, message: str, current_state: Optional[str] = None):
        super().__init__(
            message=message,
            code="INVALID_OPERATION",
            details={"current_state": current_state} if current_state else {}
        )


class ValidationException(DomainException):
    """Raised when validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field, "value": str(value) if value is not None else None}
        )
