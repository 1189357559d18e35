"""Path domain: naming templates and segment sanitization."""

from .sanitizer import Sanitizer
from .template import FIELD_NAMES, NamingTemplate, Placeholder

__all__ = ["FIELD_NAMES", "NamingTemplate", "Placeholder", "Sanitizer"]
