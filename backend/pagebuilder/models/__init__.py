from .template import Template
from .page import Page
from .section_definition import SectionDefinition
from .page_section import PageSection
from .audit_log import AuditLog

__all__ = ["Template", "Page", "SectionDefinition", "PageSection", "AuditLog"]
