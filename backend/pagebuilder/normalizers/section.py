from pagebuilder.domain.document import SectionInstance
from pagebuilder.domain.section_data import read_section_data

def section_to_instance(section):
    """
    ORM Section → document instance.

    Invalid entries are dropped from ``data``; when that happens the stored
    text rides along so an unedited section is saved back unchanged.
    """
    result = read_section_data(section.type, section.data, section_id=section.id)
    return SectionInstance(
        id=section.id,
        type=section.type,
        name=section.name,
        order=section.order,
        is_visible=section.is_visible,
        data=result.data,
        stored_data=None if result.clean else section.data,
    )

def normalize_section(section, admin=False):
    data = section_to_instance(section).to_dict()
    data["pageId"] = section.page_id

    if admin:
        data["createdAt"] = section.created_at.isoformat() if section.created_at else None
        data["updatedAt"] = section.updated_at.isoformat() if section.updated_at else None

    return data
