# pagebuilder/models/soft_delete_mixin.py
from pagebuilder.extensions import db
from .base import utc_now


class SoftDeleteMixin:
    deleted_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)

    def soft_delete(self):
        self.deleted_at = utc_now()

    def restore(self):
        self.deleted_at = None

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    @classmethod
    def active(cls):
        """Query scoped to rows that are not soft-deleted."""
        return cls.query.filter(cls.deleted_at.is_(None))

    @classmethod
    def only_trashed(cls):
        return cls.query.filter(cls.deleted_at.isnot(None))
