"""
Menu item pricing shapes.

Three shapes coexist in stored data:

- a legacy flat price string (``"$15"``)
- a ``priceOptions`` JSON blob: a list of ``{"name", "price"}`` variants, or an
  older ``{"<label>": "<price>"}`` mapping
- the public display shape: a bare string, ``{"small", "large"}`` or
  ``{"options": ["<name> <price>", ...]}``

Everything is normalized to a list of PriceVariant on read; the other shapes
are only produced here, at the storage and display boundaries.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_VARIANT_NAME = "Regular"
SIZE_KEYWORDS = ("small", "large")

PublicPrice = Union[str, Dict[str, Any]]


class PriceVariant(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: str


def _variants_from_blob(blob: Any) -> List[PriceVariant]:
    if isinstance(blob, dict):
        return [PriceVariant(name=str(k), price=str(v)) for k, v in blob.items()]
    if isinstance(blob, list):
        return [PriceVariant.model_validate(v) for v in blob]
    raise ValueError(f"Unsupported priceOptions shape: {type(blob).__name__}")


def normalize_price_variants(
    *,
    price: Optional[str] = None,
    price_options: Any = None,
    price_variants: Any = None,
) -> List[PriceVariant]:
    """
    Reconcile the stored pricing fields of one menu item into variants.

    Precedence: explicit variants, then the ``priceOptions`` blob, then the
    legacy flat price. An item with none of them is priceless, which is valid.
    """
    if price_variants:
        return _variants_from_blob(price_variants)

    if price_options:
        try:
            blob = json.loads(price_options) if isinstance(price_options, str) else price_options
            variants = _variants_from_blob(blob)
            if variants:
                return variants
        except (ValueError, TypeError, ValidationError):
            logger.warning("Unreadable priceOptions %r, falling back to flat price", price_options)

    if price:
        return [PriceVariant(name=DEFAULT_VARIANT_NAME, price=price)]

    return []


def _has_size_keyword(name: str) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in SIZE_KEYWORDS)


def project_public_price(variants: List[PriceVariant]) -> Optional[PublicPrice]:
    """
    Project editor-side variants onto the public price shape.

    Size-named variants become ``{"small", "large"}``; a single unnamed or
    "Regular" variant flattens to its bare price; anything else becomes a
    free-form options list.
    """
    if not variants:
        return None

    if any(_has_size_keyword(v.name) for v in variants):
        sized: Dict[str, Any] = {}
        for variant in variants:
            lowered = variant.name.lower()
            for keyword in SIZE_KEYWORDS:
                if keyword in lowered and keyword not in sized:
                    sized[keyword] = variant.price
        return sized

    if len(variants) == 1:
        only = variants[0]
        if not only.name or only.name.lower() == DEFAULT_VARIANT_NAME.lower():
            return only.price

    return {"options": [f"{v.name} {v.price}".strip() for v in variants]}


def flatten_for_storage(variants: List[PriceVariant]) -> Tuple[Optional[str], Optional[str]]:
    """
    Return ``(price, price_options)`` column values for a variant list.

    The first variant's price is kept in the flat column so readers that only
    know the legacy field still show something.
    """
    if not variants:
        return None, None

    blob = json.dumps([v.model_dump() for v in variants])
    return variants[0].price, blob


def price_labels(public_price: Optional[PublicPrice]) -> List[str]:
    """Display lines for a public price, in order."""
    if public_price is None:
        return []
    if isinstance(public_price, str):
        return [public_price]

    if "options" in public_price:
        return [str(option) for option in public_price.get("options") or []]

    return [
        f"{keyword.capitalize()} {public_price[keyword]}"
        for keyword in SIZE_KEYWORDS
        if public_price.get(keyword)
    ]
