from typing import Any, Dict, List

from pagebuilder.models.activity_log import ActivityLog
from pagebuilder.normalizers.activity import normalize_activity_log

RECENT_ACTIVITY_LIMIT = 10
MAX_ACTIVITY_LIMIT = 100


def list_recent_activity(*, limit: int = RECENT_ACTIVITY_LIMIT) -> List[Dict[str, Any]]:
    """Newest entries first; ``limit`` is clamped to 1..MAX_ACTIVITY_LIMIT."""
    limit = max(1, min(limit, MAX_ACTIVITY_LIMIT))
    logs = (
        ActivityLog.query
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
        .limit(limit)
        .all()
    )
    return [normalize_activity_log(log) for log in logs]
