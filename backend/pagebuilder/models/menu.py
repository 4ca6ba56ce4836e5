from pagebuilder.extensions import db
from .base import BaseModel

class MenuCategory(BaseModel):
    __tablename__ = "menu_categories"

    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, nullable=True)
    order = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    items = db.relationship(
        "MenuItem",
        back_populates="category",
        order_by="MenuItem.order",
        cascade="all, delete-orphan"
    )

class MenuItem(BaseModel):
    __tablename__ = "menu_items"

    category_id = db.Column(db.String(36), db.ForeignKey("menu_categories.id"), nullable=False)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    price = db.Column(db.String(50), nullable=True)  # legacy flat display price, e.g. "$15"
    price_options = db.Column(db.Text, nullable=True)  # JSON list of {name, price}
    image = db.Column(db.String(512), nullable=True)
    is_popular = db.Column(db.Boolean, nullable=False, default=False)
    is_available = db.Column(db.Boolean, nullable=False, default=True)
    order = db.Column(db.Integer, nullable=False, default=0)

    category = db.relationship("MenuCategory", back_populates="items")
