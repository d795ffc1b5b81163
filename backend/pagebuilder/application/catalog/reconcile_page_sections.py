# pagebuilder/application/catalog/reconcile_page_sections.py
from typing import Any, List, Sequence, Set

from flask import current_app

from pagebuilder.domain.exceptions import (
    AssociationNotFound,
    PageNotFound,
    SectionDefinitionNotFound,
)
from pagebuilder.domain.invariants.section import assert_section_entry, assert_unique_uuids
from pagebuilder.models.page import Page
from pagebuilder.models.page_section import PageSection
from pagebuilder.models.section_definition import SectionDefinition
from pagebuilder.repositories.catalog_store import CatalogStore
from pagebuilder.utils.audit import log_action
from pagebuilder.utils.transaction import transactional


def reconcile_page_sections(
    *,
    page_id: str,
    sections: Sequence[Any] | None,
    store: CatalogStore | None = None,
) -> List[PageSection]:
    """
    Make a page's active sections exactly the submitted list, in order.

    Responsibilities:
    - Entries without a uuid attach a new section definition
    - Entries with a uuid update that association's data and order
    - Every other active association on the page is soft-deleted
    - All or nothing: errors roll back and propagate

    Returns the page's active associations ordered by `order`.
    """
    store = store or CatalogStore()

    entries = [assert_section_entry(entry, position) for position, entry in enumerate(sections or [])]
    assert_unique_uuids(entries)

    page = store.find_active_by_key(Page, id=page_id)
    if page is None:
        raise PageNotFound(page_id)

    kept: Set[str] = set()
    created = 0

    with transactional():
        for key, entry in enumerate(entries):
            order = entry.get("order")
            if order is None:
                order = key

            if not entry.get("uuid"):
                definition = store.find_active_by_key(SectionDefinition, id=entry["id"])
                if definition is None:
                    raise SectionDefinitionNotFound(entry["id"])

                association = store.create(
                    PageSection,
                    page_id=page.id,
                    section_definition_id=definition.id,
                    order=order,
                    data={name: "" for name in definition.field_names},
                )
                created += 1
            else:
                association = store.find_active_by_key(PageSection, uuid=entry["uuid"], page_id=page.id)
                if association is None:
                    raise AssociationNotFound(entry["uuid"], page.id)

                values = {"order": order}
                if "data" in entry:
                    values["data"] = entry["data"]
                store.update(association, **values)

            kept.add(association.id)

        pruned = store.soft_delete_excluding_ids(PageSection, kept, page_id=page.id)

        log_action(
            action="page.sections.reconcile",
            entity_type="page",
            entity_id=page.id,
            payload={
                "kept": len(kept),
                "created": created,
                "pruned": [association.uuid for association in pruned],
            },
        )

    current_app.logger.info(
        "Page %s sections reconciled: %d kept, %d created, %d removed",
        page.id,
        len(kept),
        created,
        len(pruned),
    )

    return store.find_active(PageSection, order_by=PageSection.order.asc(), page_id=page.id)
