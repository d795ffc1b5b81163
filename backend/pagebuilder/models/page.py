from pagebuilder.extensions import db
from .base import BaseModel
from .soft_delete_mixin import SoftDeleteMixin

class Page(BaseModel, SoftDeleteMixin):
    __tablename__ = 'pages'

    # Null for pages on a dynamic template
    folder_name = db.Column(db.String(255), nullable=True, index=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), unique=True, nullable=False, index=True)
    template_id = db.Column(db.String(36), db.ForeignKey("page_templates.id"), nullable=False)

    template = db.relationship("Template", back_populates="pages")

    # Every association, trashed ones included; filter on deleted_at for the live set
    sections = db.relationship(
        "PageSection",
        back_populates="page",
        order_by="PageSection.order",
    )
