"""litdoc: literate-programming documentation from commented source files."""

from .classifier import classify
from .languages import DEFAULT_REGISTRY, Language, LanguageRegistry
from .models import RenderedSection, Section
from .segmenter import segment, segment_text

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_REGISTRY",
    "Language",
    "LanguageRegistry",
    "RenderedSection",
    "Section",
    "classify",
    "segment",
    "segment_text",
]
