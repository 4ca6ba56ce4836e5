# pagebuilder/normalizers/activity.py
from __future__ import annotations

from typing import Any, Dict

from pagebuilder.models.activity_log import ActivityLog


def normalize_activity_log(log: ActivityLog) -> Dict[str, Any]:
    """
    Normalizes an ActivityLog row into the admin feed's JSON shape.

    Notes:
    - entityId is always a string; bulk actions store "*"
    - payload is whatever the writing service staged, defaulting to {}
    """

    if not log:
        raise ValueError("ActivityLog cannot be None")

    return {
        "id": log.id,
        "actorId": log.actor_id,
        "action": log.action,
        "entityType": log.entity_type,
        "entityId": str(log.entity_id) if log.entity_id is not None else None,
        "payload": log.payload or {},
        "createdAt": log.created_at.isoformat() if log.created_at else None,
    }
