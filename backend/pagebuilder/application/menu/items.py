from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from pagebuilder.domain.exceptions import NotFound, ValidationFailure
from pagebuilder.domain.pricing import PriceVariant, flatten_for_storage, normalize_price_variants
from pagebuilder.extensions import db
from pagebuilder.models.menu import MenuCategory, MenuItem
from pagebuilder.utils.audit import log_action
from pagebuilder.utils.transaction import transactional


class MenuItemInput(BaseModel):
    """Admin payload for a menu item. Prices arrive as variants or a flat price."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: Optional[str] = None
    price_variants: Optional[List[PriceVariant]] = None
    image: Optional[str] = None
    is_popular: bool = False
    is_available: bool = True
    order: int = Field(default=0, ge=0)
    category_id: str = Field(min_length=1)


class MenuItemNotFound(NotFound):
    def __init__(self, item_id: str):
        super().__init__(f"Menu item not found: {item_id}")
        self.item_id = item_id


def _parse(data: Dict[str, Any]) -> MenuItemInput:
    try:
        return MenuItemInput.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise ValidationFailure(f"Invalid menu item: {first['msg']}", field=field) from exc


def _apply(item: MenuItem, payload: MenuItemInput) -> None:
    if not MenuCategory.query.filter_by(id=payload.category_id).first():
        raise ValidationFailure("Unknown menu category", field="categoryId")

    variants = normalize_price_variants(price=payload.price, price_variants=payload.price_variants)
    item.price, item.price_options = flatten_for_storage(variants)

    item.category_id = payload.category_id
    item.name = payload.name
    item.description = payload.description
    item.image = payload.image
    item.is_popular = payload.is_popular
    item.is_available = payload.is_available
    item.order = payload.order


def list_menu_items(*, category_id: Optional[str] = None) -> List[MenuItem]:
    query = MenuItem.query.join(MenuCategory)
    if category_id:
        query = query.filter(MenuItem.category_id == category_id)
    return query.order_by(MenuCategory.order.asc(), MenuItem.order.asc()).all()


def create_menu_item(*, data: Dict[str, Any], actor_id: Optional[str] = None) -> MenuItem:
    """
    Create a menu item, storing its variants in both price columns.

    The first variant's price also goes into the flat ``price`` column so
    readers that only know the legacy field still show a price.
    """
    payload = _parse(data)

    with transactional():
        item = MenuItem()
        _apply(item, payload)
        db.session.add(item)
        db.session.flush()

        log_action(
            action="menu_item.create",
            entity_type="menu_item",
            entity_id=item.id,
            actor_id=actor_id,
            payload={"name": item.name, "category_id": item.category_id},
        )

    return item


def update_menu_item(*, item_id: str, data: Dict[str, Any], actor_id: Optional[str] = None) -> MenuItem:
    item = MenuItem.query.filter_by(id=item_id).first()
    if not item:
        raise MenuItemNotFound(item_id)

    payload = _parse(data)

    with transactional():
        _apply(item, payload)

        log_action(
            action="menu_item.update",
            entity_type="menu_item",
            entity_id=item.id,
            actor_id=actor_id,
            payload={"name": item.name},
        )

    return item
