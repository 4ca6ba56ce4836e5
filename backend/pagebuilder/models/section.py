from pagebuilder.extensions import db
from .base import BaseModel

class Section(BaseModel):
    __tablename__ = "sections"

    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False)
    type = db.Column(db.String(100), nullable=False)  # navigation, hero, menu, ...
    name = db.Column(db.String(200), nullable=False)
    order = db.Column(db.Integer, nullable=False, default=0)
    is_visible = db.Column(db.Boolean, nullable=False, default=True)
    data = db.Column(db.Text, nullable=False, default="{}")  # serialized JSON, shape depends on type

    page = db.relationship("Page", back_populates="sections")

    # No unique (page_id, order): a batch save rewrites orders in place
    __table_args__ = (
        db.Index("idx_section_page_order", "page_id", "order"),
    )
