"""
Entity store.

A thin persistence collaborator over a SQLAlchemy session exposing the
primitives the services rely on: insert, get, query, update, delete and an
atomic batch. The store does not own the session; callers construct it per
request (or per test) and hand it in.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Union
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exception import NotFound, StoreUnavailable
from app.models.account import Account
from app.models.booth import Booth

logger = logging.getLogger(__name__)

ACCOUNTS = "accounts"
BOOTHS = "booths"

COLLECTIONS = {
    ACCOUNTS: Account,
    BOOTHS: Booth,
}


@dataclass
class Insert:
    collection: str
    record: Any


@dataclass
class Update:
    collection: str
    id: int
    fields: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Delete:
    collection: str
    id: int


Operation = Union[Insert, Update, Delete]


class EntityStore:
    def __init__(self, session: Session):
        self.session = session

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, collection: str, record_id: int):
        """Return the record with `record_id` or raise NotFound."""
        model = self._model(collection)
        try:
            record = self.session.get(model, record_id)
        except SQLAlchemyError as e:
            raise self._unavailable("get", collection, e) from e
        if record is None:
            raise NotFound(f"{model.__name__} not found", collection=collection, id=record_id)
        return record

    def find(self, collection: str, record_id: int):
        """Like get() but returns None for a missing record."""
        try:
            return self.get(collection, record_id)
        except NotFound:
            return None

    def query(self, collection: str, **filters) -> List[Any]:
        """
        Return records matching every filter, ordered by id.

        A scalar filter value is an equality test. A set, frozenset, list or
        tuple is a membership test; an empty one matches nothing.
        """
        model = self._model(collection)
        criteria = []
        for name, value in filters.items():
            column = self._column(model, name)
            if isinstance(value, (set, frozenset, list, tuple)):
                if not value:
                    return []
                criteria.append(column.in_(list(value)))
            elif value is None:
                criteria.append(column.is_(None))
            else:
                criteria.append(column == value)
        try:
            return self.session.query(model).filter(*criteria).order_by(model.id).all()
        except SQLAlchemyError as e:
            raise self._unavailable("query", collection, e) from e

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, collection: str, record: Union[Mapping[str, Any], Any]):
        """Persist a record, assigning its id when absent, and return it."""
        try:
            instance = self._apply_insert(collection, record)
            self.session.commit()
            self.session.refresh(instance)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise self._unavailable("insert", collection, e) from e
        return instance

    def update(self, collection: str, record_id: int, fields: Mapping[str, Any]) -> None:
        try:
            self._apply_update(collection, record_id, fields)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise self._unavailable("update", collection, e) from e
        except Exception:
            self.session.rollback()
            raise

    def delete(self, collection: str, record_id: int) -> None:
        try:
            self._apply_delete(collection, record_id)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise self._unavailable("delete", collection, e) from e

    def batch(self, ops: Iterable[Operation]) -> None:
        """Apply every operation in order inside one transaction, or none of them."""
        ops = list(ops)
        try:
            for op in ops:
                if isinstance(op, Insert):
                    self._apply_insert(op.collection, op.record)
                elif isinstance(op, Update):
                    self._apply_update(op.collection, op.id, op.fields)
                elif isinstance(op, Delete):
                    self._apply_delete(op.collection, op.id)
                else:
                    raise TypeError(f"Unsupported batch operation: {op!r}")
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise self._unavailable("batch", "*", e) from e
        except Exception:
            self.session.rollback()
            raise
        logger.debug(f"Batch of {len(ops)} operations committed")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _apply_insert(self, collection: str, record):
        model = self._model(collection)
        instance = model(**record) if isinstance(record, Mapping) else record
        if not isinstance(instance, model):
            raise TypeError(f"Expected {model.__name__} for collection '{collection}'")
        self.session.add(instance)
        # Flush per operation so the database sees writes in batch order
        self.session.flush()
        return instance

    def _apply_update(self, collection: str, record_id: int, fields: Mapping[str, Any]):
        model = self._model(collection)
        instance = self.session.get(model, record_id)
        if instance is None:
            raise NotFound(f"{model.__name__} not found", collection=collection, id=record_id)
        for name, value in fields.items():
            self._column(model, name)
            setattr(instance, name, value)
        self.session.flush()

    def _apply_delete(self, collection: str, record_id: int):
        model = self._model(collection)
        instance = self.session.get(model, record_id)
        if instance is not None:
            self.session.delete(instance)
            self.session.flush()

    @staticmethod
    def _model(collection: str):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection '{collection}'") from None

    @staticmethod
    def _column(model, name: str):
        column = getattr(model, name, None)
        if column is None or not hasattr(column, "property"):
            raise ValueError(f"{model.__name__} has no field '{name}'")
        return column

    @staticmethod
    def _unavailable(action: str, collection: str, error: SQLAlchemyError) -> StoreUnavailable:
        logger.error(f"Store {action} failed on '{collection}': {str(error)}")
        return StoreUnavailable()
