"""
Persistence gateway: the only data-access seam the services depend on.

Every read takes an explicit include_deleted flag. The default (False) hides
soft-deleted rows. commit() is all-or-nothing and raises PersistenceError.
Search is a case-insensitive literal substring match: "%" and "_" are escaped,
and SQLite connections get a Unicode-aware lower() (see database.py).

Two implementations:
  SqlAlchemyGateway  wraps one SQLAlchemy session (one per request)
  InMemoryGateway    dict-backed fake for tests and local tooling
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from sqlalchemy import String, func, inspect, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from transport_admin.exceptions import PersistenceError
from transport_admin.models.driver import Driver
from transport_admin.models.station import Station
from transport_admin.models.vehicle import Vehicle
from transport_admin.utils.logger import get_logger

logger = get_logger(__name__)

# Store-level uniqueness, scoped to rows that are not soft-deleted
UNIQUE_KEYS = {
    Station: "name",
    Driver: "license_number",
    Vehicle: "registration_number",
}


class PersistenceGateway(ABC):

    @abstractmethod
    def get(self, model, entity_id, include_deleted: bool = False):
        """Return the row with this id, or None."""

    @abstractmethod
    def find_first(self, model, include_deleted: bool = False, exclude_id=None, **criteria):
        """Return the first row whose columns equal every value in criteria, or None."""

    @abstractmethod
    def find_all(self, model, include_deleted: bool = False, search: Optional[str] = None,
                 search_fields: Iterable[str] = (), status=None, order_by: Optional[str] = None) -> list:
        """Rows matching a case-insensitive substring search and an optional status."""

    @abstractmethod
    def add(self, entity):
        """Stage a new entity for the next commit."""

    @abstractmethod
    def commit(self):
        """Persist all staged additions and mutations atomically."""

    @abstractmethod
    def rollback(self):
        """Discard staged additions."""


class SqlAlchemyGateway(PersistenceGateway):

    def __init__(self, session: Session):
        self.session = session

    def _query(self, model, include_deleted: bool):
        q = self.session.query(model)
        if not include_deleted:
            q = q.filter(model.is_deleted.is_(False))
        return q

    def get(self, model, entity_id, include_deleted: bool = False):
        return self._query(model, include_deleted).filter(model.id == entity_id).first()

    def find_first(self, model, include_deleted: bool = False, exclude_id=None, **criteria):
        q = self._query(model, include_deleted).filter_by(**criteria)
        if exclude_id is not None:
            q = q.filter(model.id != exclude_id)
        return q.first()

    def find_all(self, model, include_deleted: bool = False, search: Optional[str] = None,
                 search_fields: Iterable[str] = (), status=None, order_by: Optional[str] = None) -> list:
        q = self._query(model, include_deleted)
        if search and search.strip():
            needle = search.lower()
            q = q.filter(or_(*[
                func.lower(getattr(model, f), type_=String).contains(needle, autoescape=True)
                for f in search_fields
            ]))
        if status is not None:
            q = q.filter(model.status == status)
        if order_by:
            q = q.order_by(getattr(model, order_by).asc())
        return q.all()

    def add(self, entity):
        self.session.add(entity)

    def commit(self):
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.error(f"Constraint violation on commit: {e.orig}")
            raise PersistenceError(f"Constraint violation: {e.orig}") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error on commit: {e}", exc_info=True)
            raise PersistenceError(f"Database error: {e}") from e

    def rollback(self):
        self.session.rollback()


class InMemoryGateway(PersistenceGateway):
    """
    Holds committed entities per model class, keyed by id.
    Fetched entities are live objects, as with an ORM identity map;
    additions only become visible after commit(). Every successful commit
    snapshots the mapped attributes of all rows, and rollback() or a rejected
    commit puts them back, so uncommitted mutations never outlive a failure.
    """

    def __init__(self):
        self._rows = {model: {} for model in UNIQUE_KEYS}
        self._pending = []
        self._snapshots = {}

    def _visible(self, model, include_deleted: bool):
        return [e for e in self._rows[model].values() if include_deleted or not e.is_deleted]

    def get(self, model, entity_id, include_deleted: bool = False):
        entity = self._rows[model].get(entity_id)
        if entity is None or (entity.is_deleted and not include_deleted):
            return None
        return entity

    def find_first(self, model, include_deleted: bool = False, exclude_id=None, **criteria):
        for entity in self._visible(model, include_deleted):
            if exclude_id is not None and entity.id == exclude_id:
                continue
            if all(getattr(entity, k) == v for k, v in criteria.items()):
                return entity
        return None

    def find_all(self, model, include_deleted: bool = False, search: Optional[str] = None,
                 search_fields: Iterable[str] = (), status=None, order_by: Optional[str] = None) -> list:
        rows = self._visible(model, include_deleted)
        if search and search.strip():
            needle = search.lower()
            rows = [e for e in rows
                    if any(needle in (getattr(e, f) or "").lower() for f in search_fields)]
        if status is not None:
            rows = [e for e in rows if e.status == status]
        if order_by:
            rows.sort(key=lambda e: getattr(e, order_by))
        return rows

    def add(self, entity):
        self._pending.append(entity)

    @staticmethod
    def _snapshot(entity) -> dict:
        mapper = inspect(type(entity))
        # Composites first: assigning one rewrites its columns, which come after
        keys = [*mapper.composites.keys(), *mapper.column_attrs.keys()]
        return {key: getattr(entity, key) for key in keys}

    def commit(self):
        staged = {model: dict(rows) for model, rows in self._rows.items()}
        for entity in self._pending:
            staged[type(entity)][entity.id] = entity

        for model, key in UNIQUE_KEYS.items():
            seen = set()
            for entity in staged[model].values():
                if entity.is_deleted:
                    continue
                value = getattr(entity, key)
                if value in seen:
                    self.rollback()
                    logger.error(f"Constraint violation on commit: duplicate {model.__tablename__}.{key}={value}")
                    raise PersistenceError(f"Constraint violation: duplicate {key} '{value}'")
                seen.add(value)

        self._rows = staged
        self._pending = []
        self._snapshots = {
            (model, entity_id): self._snapshot(entity)
            for model, rows in staged.items()
            for entity_id, entity in rows.items()
        }

    def rollback(self):
        self._pending = []
        for (model, entity_id), values in self._snapshots.items():
            entity = self._rows[model][entity_id]
            for key, value in values.items():
                setattr(entity, key, value)
