# pagebuilder/repositories/catalog_store.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from pagebuilder.extensions import db
from pagebuilder.domain.exceptions import PersistenceError

M = TypeVar("M")


class CatalogStore:
    """
    Keyed access to soft-deletable catalog rows.

    Every model passed in must carry `id` and `deleted_at`
    (BaseModel + SoftDeleteMixin). Writes are flushed, never committed:
    the caller owns the transaction.
    """

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    @contextmanager
    def _guard(self, operation: str):
        try:
            yield
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Catalog store failed to {operation}: {exc}") from exc

    # -------------------------------------------------
    # Lookups
    # -------------------------------------------------
    def _active(self, model: Type[M], **key: Any):
        return self.session.query(model).filter_by(**key).filter(model.deleted_at.is_(None))

    def find_active_by_key(self, model: Type[M], **key: Any) -> Optional[M]:
        with self._guard(f"find {model.__name__}"):
            return self._active(model, **key).order_by(model.created_at.asc()).first()

    def find_one_trashed_by_key(self, model: Type[M], **key: Any) -> Optional[M]:
        """Most recently touched soft-deleted row matching `key`, or None."""
        with self._guard(f"find trashed {model.__name__}"):
            return (
                self.session.query(model)
                .filter_by(**key)
                .filter(model.deleted_at.isnot(None))
                .order_by(model.updated_at.desc())
                .first()
            )

    def exists_with_trashed(self, model: Type[M], **key: Any) -> bool:
        with self._guard(f"check {model.__name__}"):
            return self.session.query(model).filter_by(**key).first() is not None

    def find_active(self, model: Type[M], *, order_by=None, **scope: Any) -> List[M]:
        with self._guard(f"list {model.__name__}"):
            query = self._active(model, **scope)
            if order_by is not None:
                query = query.order_by(order_by)
            return query.all()

    def find_active_excluding_ids(self, model: Type[M], ids: Iterable[str], **scope: Any) -> List[M]:
        ids = list(ids)
        with self._guard(f"list {model.__name__}"):
            query = self._active(model, **scope)
            if ids:
                query = query.filter(model.id.notin_(ids))
            return query.all()

    # -------------------------------------------------
    # Writes
    # -------------------------------------------------
    def create(self, model: Type[M], **values: Any) -> M:
        with self._guard(f"create {model.__name__}"):
            entity = model()
            for attr, value in values.items():
                setattr(entity, attr, value)
            self.session.add(entity)
            self.session.flush()
            return entity

    def update(self, entity: M, **values: Any) -> List[str]:
        """Assign only the values that differ; returns the changed attribute names."""
        changed: List[str] = []
        with self._guard(f"update {type(entity).__name__}"):
            for attr, value in values.items():
                if getattr(entity, attr) != value:
                    setattr(entity, attr, value)
                    changed.append(attr)
            if changed:
                self.session.flush()
        return changed

    def update_or_create_by_key(
        self,
        model: Type[M],
        key: Dict[str, Any],
        values: Optional[Dict[str, Any]] = None,
    ) -> Tuple[M, bool]:
        """
        Update the active row matching `key`, or create one from key + values.

        Returns (entity, created).
        """
        values = values or {}
        entity = self.find_active_by_key(model, **key)

        if entity is None:
            return self.create(model, **{**key, **values}), True

        self.update(entity, **values)
        return entity, False

    def restore(self, entity: M) -> M:
        with self._guard(f"restore {type(entity).__name__}"):
            entity.restore()
            self.session.flush()
            return entity

    def soft_delete(self, entity: M) -> M:
        with self._guard(f"soft delete {type(entity).__name__}"):
            entity.soft_delete()
            self.session.flush()
            return entity

    def soft_delete_excluding_ids(self, model: Type[M], ids: Iterable[str], **scope: Any) -> List[M]:
        """
        Soft-delete every active row in `scope` whose id is not in `ids`.

        Rows are updated one by one so timestamps and the identity map stay in step.
        """
        stale = self.find_active_excluding_ids(model, ids, **scope)

        with self._guard(f"prune {model.__name__}"):
            for entity in stale:
                entity.soft_delete()
            if stale:
                self.session.flush()

        return stale
