# transport_admin/exceptions.py
"""
Error taxonomy shared by models, gateway and services.
The API layer maps NotFoundError → 404, DomainValidationError → 400, anything else → 500.
"""

from enum import Enum


class ValidationKind(str, Enum):
    EMPTY_FIELD = "EmptyField"
    FIELD_TOO_LONG = "FieldTooLong"
    OUT_OF_RANGE = "OutOfRange"
    INVALID_DATE_ORDER = "InvalidDateOrder"
    # Raised by services, not by the models themselves
    DUPLICATE = "Duplicate"
    INVALID_STATE = "InvalidState"


class TransportError(Exception):
    """Base class for all application-level exceptions."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class DomainValidationError(TransportError):
    """Bad input or illegal state transition. Always fixable by the caller."""
    def __init__(self, message: str, kind: ValidationKind):
        self.kind = kind
        super().__init__(message)


class NotFoundError(TransportError):
    """Raised when an id does not exist among the visible rows."""
    def __init__(self, entity_name: str, entity_id):
        self.entity_name = entity_name
        self.entity_id = entity_id
        super().__init__(f"{entity_name} with ID '{entity_id}' was not found")


class PersistenceError(TransportError):
    """Store-level failure: constraint violation or lost connectivity."""
