from ..exceptions import InvariantViolation

def assert_section_order(sections):
    orders = [section.order for section in sections]
    if not orders:
        return

    expected = list(range(len(orders)))
    if sorted(orders) != expected:
        raise InvariantViolation(
            f"Section orders are not consecutive starting from 0: {orders}"
        )

def assert_unique_ids(sections):
    seen = set()
    for section in sections:
        if section.id in seen:
            raise InvariantViolation(f"Duplicate section id on page: {section.id}")
        seen.add(section.id)

def assert_sections(sections):
    sections = list(sections)
    assert_unique_ids(sections)
    assert_section_order(sections)
