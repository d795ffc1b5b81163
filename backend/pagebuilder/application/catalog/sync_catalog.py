# pagebuilder/application/catalog/sync_catalog.py
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from pagebuilder.domain.exceptions import CatalogError, ConfigurationError
from pagebuilder.domain.section_config import SectionConfig, load_descriptor, parse_sections
from pagebuilder.models.page import Page
from pagebuilder.models.page_section import PageSection
from pagebuilder.models.section_definition import SectionDefinition
from pagebuilder.models.template import Template
from pagebuilder.repositories.catalog_store import CatalogStore
from pagebuilder.utils.audit import log_action
from pagebuilder.utils.slug import slugify
from pagebuilder.utils.template_scanner import (
    TemplateDirectory,
    is_dynamic_directory,
    scan_template_directories,
)
from pagebuilder.utils.transaction import transactional


@dataclass
class SyncResult:
    """Outcome of one full catalog pass."""
    seen_template_ids: Set[str] = field(default_factory=set)
    changes: Counter = field(default_factory=Counter)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "templates": len(self.seen_template_ids),
            "changes": dict(self.changes),
            "errors": list(self.errors),
        }


def section_slug(folder_name: str, key: str) -> str:
    return f"{folder_name}-{key}"


def unique_page_slug(store: CatalogStore, folder_name: str) -> str:
    base = slugify(folder_name) or "page"
    slug = base
    suffix = 2

    while store.exists_with_trashed(Page, slug=slug):
        slug = f"{base}-{suffix}"
        suffix += 1

    return slug


# -------------------------------------------------
# Steps
# -------------------------------------------------
def resolve_template(store: CatalogStore, name: str, changes: Counter) -> Template:
    """Restore a trashed template by name, otherwise update-or-create it."""
    trashed = store.find_one_trashed_by_key(Template, name=name)

    if trashed is not None:
        store.restore(trashed)
        changes["templates_restored"] += 1
        current_app.logger.debug("Restored template %s", name)
        return trashed

    template, created = store.update_or_create_by_key(Template, {"name": name})
    if created:
        changes["templates_created"] += 1
    return template


def resolve_page(
    store: CatalogStore,
    folder_name: str,
    template: Template,
    changes: Counter,
) -> Optional[Page]:
    """
    Create the page backing a static template the first time it is seen.

    Existing pages, trashed ones included, are never edited here.
    Returns the active page for the folder, if any.
    """
    if not store.exists_with_trashed(Page, folder_name=folder_name):
        store.create(
            Page,
            folder_name=folder_name,
            title=folder_name,
            slug=unique_page_slug(store, folder_name),
            template_id=template.id,
        )
        changes["pages_created"] += 1

    return store.find_active_by_key(Page, folder_name=folder_name)


def ingest_sections(
    store: CatalogStore,
    folder_name: str,
    template: Template,
    sections: Sequence[SectionConfig],
    changes: Counter,
) -> List[Tuple[SectionDefinition, SectionConfig]]:
    resolved: List[Tuple[SectionDefinition, SectionConfig]] = []

    for section in sections:
        slug = section_slug(folder_name, section.key)
        trashed = store.find_one_trashed_by_key(SectionDefinition, slug=slug)

        if trashed is not None:
            definition = store.restore(trashed)
            changes["sections_restored"] += 1
        else:
            definition, created = store.update_or_create_by_key(
                SectionDefinition,
                {"slug": slug},
                {
                    "name": section.key,
                    "fields": section.fields_dict(),
                    "is_dynamic": section.is_dynamic,
                    "order": section.order,
                    "template_id": template.id,
                },
            )
            if created:
                changes["sections_created"] += 1

        resolved.append((definition, section))

    return resolved


def attach_sections(
    store: CatalogStore,
    page: Page,
    resolved: Sequence[Tuple[SectionDefinition, SectionConfig]],
    changes: Counter,
) -> Set[str]:
    """
    Keep one association per (page, section definition), ordered as configured.

    Returns the ids of the associations this descriptor accounts for.
    """
    seen: Set[str] = set()

    for definition, section in resolved:
        key = {"page_id": page.id, "section_definition_id": definition.id}

        if store.find_active_by_key(PageSection, **key) is None:
            trashed = store.find_one_trashed_by_key(PageSection, **key)
            if trashed is not None:
                store.restore(trashed)
                changes["page_sections_restored"] += 1

        association, created = store.update_or_create_by_key(
            PageSection, key, {"order": section.order}
        )
        if created:
            changes["page_sections_created"] += 1

        # Seed editable fields once; operator data is never overwritten
        if association.data is None:
            store.update(association, data=section.empty_data())

        seen.add(association.id)

    return seen


def prune_page_sections(store: CatalogStore, page: Page, seen: Set[str], changes: Counter) -> None:
    pruned = store.soft_delete_excluding_ids(PageSection, seen, page_id=page.id)
    changes["page_sections_pruned"] += len(pruned)


def prune_section_definitions(
    store: CatalogStore,
    template: Template,
    seen: Set[str],
    changes: Counter,
) -> None:
    pruned = store.soft_delete_excluding_ids(SectionDefinition, seen, template_id=template.id)
    for definition in pruned:
        current_app.logger.debug("Section %s removed from %s", definition.slug, template.name)
    changes["sections_pruned"] += len(pruned)


def prune_templates(store: CatalogStore, seen: Set[str], changes: Counter) -> None:
    pruned = store.soft_delete_excluding_ids(Template, seen)
    for template in pruned:
        current_app.logger.info("Template %s no longer has a directory, soft-deleted", template.name)
    changes["templates_pruned"] += len(pruned)


def sync_template_directory(
    store: CatalogStore,
    directory: TemplateDirectory,
    result: SyncResult,
    *,
    dynamic_marker: str,
) -> str:
    """Reconcile one template directory. Returns the template id it resolved to."""
    template = resolve_template(store, directory.name, result.changes)
    is_dynamic = is_dynamic_directory(directory, dynamic_marker)

    page = None
    if not is_dynamic:
        page = resolve_page(store, directory.name, template, result.changes)

    if not directory.has_config:
        return template.id

    try:
        descriptor = load_descriptor(directory.config_path, template=directory.name)
        sections = parse_sections(directory.name, descriptor, template_is_dynamic=is_dynamic)
    except ConfigurationError as exc:
        current_app.logger.warning("Skipping sections for template %s: %s", directory.name, exc)
        result.errors.append(str(exc))
        return template.id

    resolved = ingest_sections(store, directory.name, template, sections, result.changes)
    prune_section_definitions(
        store,
        template,
        {definition.id for definition, _ in resolved},
        result.changes,
    )

    if page is not None:
        seen = attach_sections(store, page, resolved, result.changes)
        prune_page_sections(store, page, seen, result.changes)

    return template.id


def sync_catalog(
    *,
    root,
    store: CatalogStore | None = None,
    dynamic_marker: str | None = None,
    config_filenames: Sequence[str] | None = None,
) -> SyncResult:
    """
    Bring templates, pages, section definitions and page sections in line
    with the template directories under `root`.

    Does not commit; wrap in `transactional()` (see run_catalog_sync).

    Raises:
    - TemplateRootUnavailable if `root` cannot be listed
    - PersistenceError on any store failure
    """
    store = store or CatalogStore()
    config = current_app.config
    marker = dynamic_marker if dynamic_marker is not None else config["PAGEBUILDER_DYNAMIC_MARKER"]
    filenames = config_filenames or config["PAGEBUILDER_CONFIG_FILENAMES"]

    result = SyncResult()

    for directory in scan_template_directories(root, config_filenames=filenames):
        template_id = sync_template_directory(store, directory, result, dynamic_marker=marker)
        result.seen_template_ids.add(template_id)

    prune_templates(store, result.seen_template_ids, result.changes)

    return result


def run_catalog_sync(root=None) -> Dict[str, Any]:
    """
    Run a full sync as one transaction and report instead of raising.

    Returns {"success": bool, "message": str | None, ...summary}.
    """
    root = root or current_app.config["PAGEBUILDER_TEMPLATES_ROOT"]

    try:
        with transactional():
            result = sync_catalog(root=root)
            summary = result.to_dict()

            log_action(
                action="catalog.sync",
                entity_type="catalog",
                entity_id=None,
                payload={"root": str(root), **summary},
            )
    except (CatalogError, OSError, SQLAlchemyError) as exc:
        current_app.logger.error("Catalog sync of %s failed: %s", root, exc)
        return {"success": False, "message": str(exc)}

    current_app.logger.info(
        "Catalog sync of %s finished: %d templates, changes=%s, errors=%d",
        root,
        summary["templates"],
        summary["changes"],
        len(summary["errors"]),
    )

    return {"success": True, "message": None, **summary}
