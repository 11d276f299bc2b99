"""Guideline aggregation, storage and document rendering."""

from frankenai.guidelines.document import (
    RenderedDocument,
    extract_sections,
    render_document,
    replace_section,
)
from frankenai.guidelines.manager import GuidelineEntry, GuidelineManager
from frankenai.guidelines.store import GuidelineNotFoundError, GuidelineStore

__all__ = [
    "GuidelineEntry",
    "GuidelineManager",
    "GuidelineNotFoundError",
    "GuidelineStore",
    "RenderedDocument",
    "extract_sections",
    "render_document",
    "replace_section",
]
