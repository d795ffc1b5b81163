from pagebuilder.extensions import db
from .base import BaseModel
from .soft_delete_mixin import SoftDeleteMixin

class Template(BaseModel, SoftDeleteMixin):
    __tablename__ = "page_templates"

    # Directory name under the templates root
    name = db.Column(db.String(255), unique=True, nullable=False, index=True)

    pages = db.relationship("Page", back_populates="template")
    sections = db.relationship(
        "SectionDefinition",
        back_populates="template",
        order_by="SectionDefinition.order",
    )
