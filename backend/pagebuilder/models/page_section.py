from uuid import uuid4
from pagebuilder.extensions import db
from .base import BaseModel
from .soft_delete_mixin import SoftDeleteMixin

class PageSection(BaseModel, SoftDeleteMixin):
    """
    Ordered, data-bearing link between a page and a section definition.

    `uuid` is the identifier editors submit back; `id` never leaves the API.
    """
    __tablename__ = "page_sections"

    uuid = db.Column(db.String(36), unique=True, nullable=False, default=lambda: str(uuid4()))
    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False)
    section_definition_id = db.Column(
        db.String(36),
        db.ForeignKey("section_definitions.id"),
        nullable=False,
    )
    order = db.Column(db.Integer, nullable=False, default=0)
    data = db.Column(db.JSON(none_as_null=True), nullable=True)

    page = db.relationship("Page", back_populates="sections")
    section = db.relationship("SectionDefinition")

    __table_args__ = (
        db.Index("idx_page_section_page_order", "page_id", "order"),
        db.Index("idx_page_section_pair", "page_id", "section_definition_id"),
    )
