from typing import Any, Dict

from pagebuilder.domain.business import parse_hours, parse_social_media


def normalize_business_info(info) -> Dict[str, Any]:
    return {
        "id": info.id,
        "name": info.name,
        "address": info.address,
        "city": info.city,
        "state": info.state,
        "zip": info.zip,
        "phone": info.phone,
        "email": info.email,
        "hours": parse_hours(info.hours),
        "socialMedia": parse_social_media(info.social_media),
        "mapEmbed": info.map_embed,
    }
