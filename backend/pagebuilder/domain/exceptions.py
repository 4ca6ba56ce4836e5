from typing import Optional


class PageBuilderError(Exception):
    """Base class for every error raised by the composition engine."""


class NotFound(PageBuilderError):
    pass


class TemplateNotFound(NotFound):
    def __init__(self, template_id: str):
        super().__init__(f"Unknown section template: {template_id}")
        self.template_id = template_id


class SectionNotFound(NotFound):
    def __init__(self, section_id: str):
        super().__init__(f"Section not found: {section_id}")
        self.section_id = section_id


class PageNotFound(NotFound):
    def __init__(self, page_id: str):
        super().__init__(f"Page not found: {page_id}")
        self.page_id = page_id


class MalformedData(PageBuilderError):
    """A serialized payload could not be decoded into its expected shape."""


class ValidationFailure(PageBuilderError):
    """
    A field failed required-field or shape validation.

    `field` names the offending field (wire name) so the editor can mark it
    while keeping the rest of the operator's edits.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvariantViolation(PageBuilderError):
    pass


class PersistenceFailure(PageBuilderError):
    """A batched save was rolled back as a whole."""
