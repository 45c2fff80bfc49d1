"""File I/O related utilities.

Small modules that format file-backed diagnostics and render reports.
"""

from .source_location import SourceLocation, lookup_source, format_source
from .template_renderer import TemplateRenderer

__all__ = [
    "SourceLocation",
    "lookup_source",
    "format_source",
    "TemplateRenderer",
]
