"""Structured-text fields of the business-info record (hours, social links)."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from .exceptions import MalformedData

logger = logging.getLogger(__name__)


def load_mapping(raw: Any) -> Dict[str, str]:
    """
    Strictly decode a JSON object of string labels to string values.

    Key order is the order the operator entered; day labels are free-form
    ("Tuesday - Thursday"), not a weekday enum.
    """
    if raw is None or raw == "":
        return {}

    if isinstance(raw, dict):
        decoded = raw
    else:
        try:
            decoded = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise MalformedData(f"Not valid JSON: {exc}") from exc

    if not isinstance(decoded, dict):
        raise MalformedData(f"Expected a JSON object, got {type(decoded).__name__}")

    return {str(key): "" if value is None else str(value) for key, value in decoded.items()}


def parse_hours(raw: Any) -> Dict[str, str]:
    try:
        return load_mapping(raw)
    except MalformedData as exc:
        logger.warning("Ignoring malformed business hours: %s", exc)
        return {}


def parse_social_media(raw: Any) -> Dict[str, str]:
    try:
        return load_mapping(raw)
    except MalformedData as exc:
        logger.warning("Ignoring malformed social media links: %s", exc)
        return {}


def dump_mapping(mapping: Optional[Dict[str, str]]) -> str:
    # sort_keys stays off: display order is insertion order
    return json.dumps(dict(mapping or {}), ensure_ascii=False)


def full_address(info: Dict[str, Any]) -> str:
    parts = [info.get("address"), info.get("city"), info.get("state"), info.get("zip")]
    return " ".join(str(p) for p in parts if p)
