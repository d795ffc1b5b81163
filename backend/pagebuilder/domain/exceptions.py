# pagebuilder/domain/exceptions.py
from typing import Optional


class CatalogError(Exception):
    """Base class for everything the reconciliation engine raises."""


class TemplateRootUnavailable(CatalogError, OSError):
    """The templates root is missing or cannot be listed. Fatal for a sync run."""

    def __init__(self, root):
        self.root = str(root)
        super().__init__(f"Templates root is not a readable directory: {self.root}")


class ConfigurationError(CatalogError):
    """A template's section descriptor is malformed. Isolated to that template."""

    def __init__(self, message: str, *, template: str, key: Optional[object] = None):
        self.template = template
        self.key = key
        super().__init__(f"[{template}] {message}")


class PersistenceError(CatalogError):
    """A catalog store operation failed."""


class NotFoundError(CatalogError):
    pass


class PageNotFound(NotFoundError):
    def __init__(self, page_id):
        self.page_id = page_id
        super().__init__(f"Page not found: {page_id}")


class SectionDefinitionNotFound(NotFoundError):
    def __init__(self, section_id):
        self.section_id = section_id
        super().__init__(f"Section definition not found: {section_id}")


class AssociationNotFound(NotFoundError):
    def __init__(self, uuid, page_id):
        self.uuid = uuid
        self.page_id = page_id
        super().__init__(f"Page section {uuid} not found on page {page_id}")
