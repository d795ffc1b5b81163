from pagebuilder.extensions import db
from .base import BaseModel
from .soft_delete_mixin import SoftDeleteMixin

class SectionDefinition(BaseModel, SoftDeleteMixin):
    __tablename__ = "section_definitions"

    # "<template folder>-<section key>"
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    fields = db.Column(db.JSON, nullable=False, default=dict)
    is_dynamic = db.Column(db.Boolean, nullable=False, default=False, index=True)
    order = db.Column(db.Integer, nullable=False, default=0)
    template_id = db.Column(db.String(36), db.ForeignKey("page_templates.id"), nullable=True, index=True)

    template = db.relationship("Template", back_populates="sections")

    @property
    def human_name(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def field_names(self) -> list[str]:
        return list((self.fields or {}).keys())
