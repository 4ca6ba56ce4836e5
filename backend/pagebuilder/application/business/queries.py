from typing import Any, Dict, Optional

from pagebuilder.models.business_info import BusinessInfo
from pagebuilder.normalizers.business import normalize_business_info


def get_business_info() -> Optional[Dict[str, Any]]:
    info = BusinessInfo.query.first()
    if not info:
        return None
    return normalize_business_info(info)
