from typing import Any, Dict

from pagebuilder.domain.pricing import normalize_price_variants, price_labels, project_public_price


def normalize_menu_item(item, admin=False) -> Dict[str, Any]:
    """
    Menu item with pricing reconciled.

    ``priceVariants`` is the canonical list (legacy flat prices become one
    "Regular" variant); ``price`` is the public display shape.
    """
    variants = normalize_price_variants(price=item.price, price_options=item.price_options)
    public_price = project_public_price(variants)

    data = {
        "id": item.id,
        "categoryId": item.category_id,
        "name": item.name,
        "description": item.description,
        "price": public_price,
        "priceVariants": [v.model_dump() for v in variants] or None,
        "priceLabels": price_labels(public_price),
        "image": item.image,
        "isPopular": bool(item.is_popular),
        "isAvailable": bool(item.is_available),
        "order": item.order,
    }

    if admin:
        # stored columns, for editors still reading the legacy fields
        data["storedPrice"] = item.price
        data["storedPriceOptions"] = item.price_options

    return data


def normalize_menu_category(category, *, available_only=True) -> Dict[str, Any]:
    items = sorted(category.items, key=lambda i: i.order)
    if available_only:
        items = [i for i in items if i.is_available]

    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "order": category.order,
        "items": [normalize_menu_item(i) for i in items],
    }
