from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

from sqlalchemy import delete, func, insert, inspect, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ors.exceptions import DuplicateKeyError, RollbackFailure, StorageError
from ors.extensions import db
from ors.models.base import IdSequence
from ors.utils.logging_utils import get_logger, log_context

from .descriptor import EntityDescriptor
from .query import build_predicate, build_search, describe

_SENSITIVE_TOKENS = ("password", "secret", "token")
# fixed at creation; an update never rewrites them
_CREATION_COLUMNS = ("created_by", "created_datetime")


def _sanitize_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if any(token in key.lower() for token in _SENSITIVE_TOKENS):
            sanitized[key] = "***REDACTED***"
        elif isinstance(value, (str, int, float, bool)) or value is None:
            sanitized[key] = value
        else:
            sanitized[key] = str(value)
    return sanitized


def default_session() -> Session:
    return Session(bind=db.engine, expire_on_commit=False)


class EntityStore:
    """
    Transactional persistence for one entity.

    Every call opens its own session and releases it on every exit path. A
    mutation commits on success and rolls back on any failure; uniqueness is
    checked inside the same transaction as the write, and a constraint
    violation raised by a concurrent writer is reported as the same
    duplicate error.
    """

    def __init__(self, descriptor: EntityDescriptor, session_factory: Optional[Callable[[], Session]] = None):
        self.descriptor = descriptor
        self._session_factory = session_factory or default_session

    @property
    def logger(self):
        return get_logger("store")

    @property
    def model(self):
        return self.descriptor.model

    @property
    def entity(self) -> str:
        return self.descriptor.name

    # ------------------------------------------------------------------
    # session plumbing
    # ------------------------------------------------------------------
    @contextmanager
    def _session_scope(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
        finally:
            session.close()

    @contextmanager
    def _reading(self, action: str) -> Iterator[Session]:
        with self._session_scope() as session:
            try:
                yield session
            except SQLAlchemyError as exc:
                self.logger.exception("Failed to %s %s", action, self.entity)
                raise StorageError(f"Exception in {action} {self.descriptor.label}", cause=exc) from exc

    def _rollback(self, session: Session, action: str, cause: Optional[BaseException]) -> None:
        try:
            session.rollback()
        except SQLAlchemyError as rollback_exc:
            self.logger.exception("Rollback failed during %s %s", action, self.entity)
            failure = RollbackFailure(action, rollback_exc)
            raise StorageError(
                f"Exception: {action} rollback exception {rollback_exc}",
                cause=cause,
                rollback_failure=failure,
            ) from rollback_exc

    @contextmanager
    def _transaction(self, session: Session, action: str, key: Any = None, own_id: int = 0) -> Iterator[Session]:
        try:
            yield session
            session.commit()
        except DuplicateKeyError:
            self._rollback(session, action, None)
            raise
        except IntegrityError as exc:
            self._rollback(session, action, exc)
            holder = self._lookup_after_conflict(session, action, key, exc)
            if holder is not None and holder.id != own_id:
                self.logger.warning("Constraint conflict on %s key=%s during %s", self.entity, key, action)
                raise self._duplicate(key) from exc
            self.logger.exception("Integrity failure during %s %s", action, self.entity)
            raise StorageError(f"Exception in {action} {self.descriptor.label}", cause=exc) from exc
        except SQLAlchemyError as exc:
            self._rollback(session, action, exc)
            self.logger.exception("Failed to %s %s", action, self.entity)
            raise StorageError(f"Exception in {action} {self.descriptor.label}", cause=exc) from exc
        except Exception as exc:
            self._rollback(session, action, exc)
            self.logger.exception("Unexpected failure during %s %s", action, self.entity)
            raise

    def _lookup_after_conflict(self, session: Session, action: str, key: Any, cause: IntegrityError):
        if key is None:
            return None
        try:
            return self._lookup(session, key)
        except SQLAlchemyError as exc:
            self.logger.exception("Duplicate re-check failed during %s %s", action, self.entity)
            raise StorageError(f"Exception in {action} {self.descriptor.label}", cause=cause) from exc

    def _duplicate(self, key: Any) -> DuplicateKeyError:
        return DuplicateKeyError(
            self.descriptor.label,
            ",".join(self.descriptor.key_fields),
            key,
            message=self.descriptor.duplicate_text,
        )

    # ------------------------------------------------------------------
    # helpers shared by the mutations
    # ------------------------------------------------------------------
    def _lookup(self, session: Session, key: Any):
        return session.scalars(select(self.model).where(*self.descriptor.key_clauses(key))).first()

    def _column_values(self, record) -> Dict[str, Any]:
        return {attr.key: getattr(record, attr.key) for attr in inspect(self.model).column_attrs}

    def _prepare_values(self, session: Session, record, values: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        """Hook for stores that transform column values before writing."""
        return values

    def _next_id(self, session: Session) -> int:
        current_max = session.scalar(select(func.max(self.model.id))) or 0
        sequence = session.get(IdSequence, self.entity)
        issued = sequence.last_id if sequence is not None else 0
        return max(current_max, issued) + 1

    def _remember_issued(self, session: Session, pk: int) -> None:
        sequence = session.get(IdSequence, self.entity)
        if sequence is None:
            session.add(IdSequence(entity=self.entity, last_id=pk))
        elif pk > sequence.last_id:
            sequence.last_id = pk
        session.flush()

    # ------------------------------------------------------------------
    # public operations
    # ------------------------------------------------------------------
    def next_id(self) -> int:
        with self._reading("next_id") as session:
            return self._next_id(session)

    def add(self, record) -> int:
        """Insert ``record`` under a freshly issued id and return that id."""

        key = self.descriptor.key_of(record)
        with log_context(model=self.model.__name__, action="add", actor_id=getattr(record, "modified_by", None)):
            self.logger.info("Adding %s key=%s", self.entity, key)
            with self._session_scope() as session:
                with self._transaction(session, "add", key):
                    if self._lookup(session, key) is not None:
                        self.logger.info("Rejected duplicate %s key=%s", self.entity, key)
                        raise self._duplicate(key)
                    pk = self._next_id(session)
                    values = self._column_values(record)
                    values["id"] = pk
                    values = self._prepare_values(session, record, values, creating=True)
                    session.execute(insert(self.model).values(**values))
                    self._remember_issued(session, pk)
            record.id = pk
            self.logger.info("Added %s id=%s values=%s", self.entity, pk, _sanitize_payload(values))
            return pk

    def update(self, record) -> None:
        """Overwrite the mutable fields of an existing record; ids <= 0 are ignored."""

        pk = record.id or 0
        if pk <= 0:
            self.logger.info("Skipping update of %s without id", self.entity)
            return

        key = self.descriptor.key_of(record)
        with log_context(model=self.model.__name__, action="update", actor_id=getattr(record, "modified_by", None)):
            self.logger.info("Updating %s id=%s key=%s", self.entity, pk, key)
            with self._session_scope() as session:
                with self._transaction(session, "update", key, own_id=pk):
                    holder = self._lookup(session, key)
                    if holder is not None and holder.id != pk:
                        self.logger.info("Rejected update of %s id=%s: key=%s held by id=%s", self.entity, pk, key, holder.id)
                        raise self._duplicate(key)
                    values = self._column_values(record)
                    values.pop("id", None)
                    for name in _CREATION_COLUMNS:
                        values.pop(name, None)
                    values = self._prepare_values(session, record, values, creating=False)
                    result = session.execute(update(self.model).where(self.model.id == pk).values(**values))
                    if result.rowcount == 0:
                        self.logger.warning("Update of %s id=%s matched no row", self.entity, pk)
                    created = session.execute(
                        select(self.model.created_by, self.model.created_datetime).where(self.model.id == pk)
                    ).first()
            if created is not None:
                record.created_by, record.created_datetime = created
            self.logger.info("Updated %s id=%s", self.entity, pk)

    def delete(self, pk: int) -> None:
        with log_context(model=self.model.__name__, action="delete"):
            with self._session_scope() as session:
                with self._transaction(session, "delete"):
                    result = session.execute(delete(self.model).where(self.model.id == pk))
            self.logger.info("Deleted %s id=%s rows=%s", self.entity, pk, result.rowcount)

    def find_by_pk(self, pk: int):
        with self._reading("find_by_pk") as session:
            return session.get(self.model, pk)

    def find_by_unique_key(self, key: Any):
        with self._reading("find_by_unique_key") as session:
            return self._lookup(session, key)

    def search(self, criteria=None, page_no: int = 0, page_size: int = 0) -> List[Any]:
        """
        Records matching every set field of ``criteria`` ordered by id.

        ``page_size <= 0`` returns all matches; otherwise the 1-based page
        ``page_no`` of ``page_size`` records.
        """

        stmt = build_search(self.descriptor, criteria, page_no, page_size)
        with self._reading("search") as session:
            items = list(session.scalars(stmt))
        self.logger.debug(
            "Searched %s filter=%s page_no=%s page_size=%s found=%s",
            self.entity,
            describe(self.descriptor, criteria),
            page_no,
            page_size,
            len(items),
        )
        return items

    def list(self, page_no: int = 0, page_size: int = 0) -> List[Any]:
        return self.search(None, page_no, page_size)

    def count(self, criteria=None) -> int:
        stmt = select(func.count()).select_from(self.model).where(*build_predicate(self.descriptor, criteria))
        with self._reading("count") as session:
            return session.scalar(stmt) or 0
