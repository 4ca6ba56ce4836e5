from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol

from pagebuilder.domain.section_types import FOOTER_CANDIDATE_TYPES, SectionType, parse_section_type


class Placeable(Protocol):
    id: str
    type: str
    order: int
    is_visible: bool


@dataclass
class PageLayout:
    navigation: Optional[Placeable] = None
    hero: Optional[Placeable] = None
    content: List[Placeable] = field(default_factory=list)
    footer: Optional[Placeable] = None

    def bands(self) -> List[Placeable]:
        """Every placed section, top to bottom."""
        placed = [self.navigation, self.hero, *self.content, self.footer]
        return [section for section in placed if section is not None]


def partition(sections: Iterable[Placeable]) -> PageLayout:
    """
    Split a page's flat section list into render bands.

    - navigation: first visible navigation section
    - hero: first visible hero section
    - footer: the visible cta/footer section with the highest order; on a tie
      the later one in the list wins
    - content: every other visible section, by ascending order (a second
      hero or navigation lands here)

    Hidden sections never appear. This is a view over the stored list and is
    recomputed for every render.
    """
    visible = [s for s in sections if s.is_visible]

    navigation = next(
        (s for s in visible if parse_section_type(s.type) is SectionType.NAVIGATION), None
    )
    hero = next(
        (s for s in visible if parse_section_type(s.type) is SectionType.HERO), None
    )

    footer = None
    for section in visible:
        if parse_section_type(section.type) not in FOOTER_CANDIDATE_TYPES:
            continue
        if footer is None or section.order >= footer.order:
            footer = section

    placed = {id(s) for s in (navigation, hero, footer) if s is not None}
    content = sorted(
        (s for s in visible if id(s) not in placed),
        key=lambda s: s.order,
    )

    return PageLayout(navigation=navigation, hero=hero, content=content, footer=footer)
