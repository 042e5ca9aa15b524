"""
Shared model plumbing: identity/audit columns, the soft-delete lifecycle,
and the field validators every aggregate runs before it assigns anything.
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Uuid

from transport_admin.exceptions import DomainValidationError, ValidationKind


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the DateTime columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utc_today() -> date:
    return utcnow().date()


def require_text(value, label: str, max_length: int) -> str:
    """Reject blank or over-long input. Returns the trimmed value."""
    if value is None or not str(value).strip():
        raise DomainValidationError(f"{label} cannot be empty", ValidationKind.EMPTY_FIELD)
    if len(value) > max_length:
        raise DomainValidationError(
            f"{label} cannot exceed {max_length} characters. Provided: {len(value)}",
            ValidationKind.FIELD_TOO_LONG,
        )
    return value.strip()


def optional_text(value, label: str, max_length: int):
    if value is None:
        return None
    if len(value) > max_length:
        raise DomainValidationError(
            f"{label} cannot exceed {max_length} characters. Provided: {len(value)}",
            ValidationKind.FIELD_TOO_LONG,
        )
    return value.strip()


class Entity:
    """
    Identity and audit columns. Two entities are equal when they share
    concrete type and id. Loaded rows bypass __init__, so only freshly
    created entities get a new id and created_at.
    """

    id = Column(Uuid, primary_key=True)
    created_at = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime)

    def __init__(self, **kwargs):
        created_at = kwargs.pop("created_at", None) or utcnow()
        super().__init__(**kwargs)
        self.id = uuid.uuid4()
        self.created_at = created_at
        self.updated_at = None

    @classmethod
    def create_for_testing(cls, created_at: datetime, *args, **kwargs):
        """Seed/test path: run the normal factory, then backdate created_at."""
        entity = cls.create(*args, **kwargs)
        entity.created_at = created_at
        return entity

    def _mark_updated(self):
        self.updated_at = utcnow()

    def __eq__(self, other):
        if self is other:
            return True
        if type(self) is not type(other):
            return False
        return self.id is not None and self.id == other.id

    def __hash__(self):
        return hash((type(self), self.id))


class SoftDeletableEntity(Entity):
    """Rows are never removed; is_deleted and deleted_at always move together."""

    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
    deleted_at = Column(DateTime)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.is_deleted = False
        self.deleted_at = None

    def delete(self):
        if self.is_deleted:
            return
        self.is_deleted = True
        self.deleted_at = utcnow()
        self._mark_updated()

    def restore(self):
        if not self.is_deleted:
            return
        self.is_deleted = False
        self.deleted_at = None
        self._mark_updated()
