from typing import Any, Dict, List

from pagebuilder.models.menu import MenuCategory
from pagebuilder.normalizers.menu import normalize_menu_category


def get_menu_categories() -> List[Dict[str, Any]]:
    """Active categories in display order, each with its available items."""
    categories = (
        MenuCategory.query
        .filter_by(is_active=True)
        .order_by(MenuCategory.order.asc())
        .all()
    )
    return [normalize_menu_category(c) for c in categories]
