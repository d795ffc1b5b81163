"""
test_catalog_store.py - keyed soft-delete aware store operations
"""

import pytest
from sqlalchemy.exc import OperationalError

from pagebuilder.domain.exceptions import PersistenceError
from pagebuilder.extensions import db
from pagebuilder.models.template import Template
from pagebuilder.repositories.catalog_store import CatalogStore


class TestLookups:

    def test_trashed_lookup_ignores_active_rows(self, store):
        store.create(Template, name="home")

        assert store.find_one_trashed_by_key(Template, name="home") is None
        assert store.find_active_by_key(Template, name="home") is not None

    def test_trashed_lookup_returns_entity(self, store):
        template = store.create(Template, name="home")
        store.soft_delete(template)

        found = store.find_one_trashed_by_key(Template, name="home")

        assert found is template
        assert store.find_active_by_key(Template, name="home") is None
        assert store.exists_with_trashed(Template, name="home")

    def test_find_active_excluding_ids(self, store):
        home = store.create(Template, name="home")
        about = store.create(Template, name="about")
        gone = store.create(Template, name="gone")
        store.soft_delete(gone)

        remaining = store.find_active_excluding_ids(Template, {home.id})

        assert remaining == [about]

    def test_empty_exclusion_returns_all_active(self, store):
        store.create(Template, name="home")
        store.create(Template, name="about")

        assert len(store.find_active_excluding_ids(Template, set())) == 2


class TestWrites:

    def test_update_or_create_creates_then_updates(self, store):
        first, created = store.update_or_create_by_key(Template, {"name": "home"})
        second, created_again = store.update_or_create_by_key(Template, {"name": "home"})

        assert created is True
        assert created_again is False
        assert first.id == second.id
        assert Template.query.count() == 1

    def test_update_reports_changed_attributes(self, store):
        template = store.create(Template, name="home")

        assert store.update(template, name="home") == []
        assert store.update(template, name="landing") == ["name"]
        assert template.name == "landing"

    def test_restore_clears_deleted_at(self, store):
        template = store.create(Template, name="home")
        store.soft_delete(template)

        store.restore(template)

        assert template.deleted_at is None
        assert not template.is_deleted

    def test_soft_delete_excluding_ids(self, store):
        home = store.create(Template, name="home")
        about = store.create(Template, name="about")

        pruned = store.soft_delete_excluding_ids(Template, {home.id})

        assert pruned == [about]
        assert about.is_deleted
        assert not home.is_deleted

    def test_duplicate_key_is_persistence_error(self, store):
        store.create(Template, name="home")

        with pytest.raises(PersistenceError):
            store.create(Template, name="home")

        db.session.rollback()


class BrokenSession:
    def query(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))


def test_database_failure_is_persistence_error(app):
    store = CatalogStore(session=BrokenSession())

    with pytest.raises(PersistenceError, match="connection lost"):
        store.find_active_by_key(Template, name="home")
