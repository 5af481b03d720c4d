"""
Core handling of the raw Docs.json document.

Provides decoding, top-level resolution, categorization, deterministic
sorting and slug validation. The category parsers live in the
``parsers`` package and the orchestration in ``service``.
"""

from .categorizer import (
    ClassCategorizer,
    ClassListReport,
    categorize_data_classes,
    classify,
    validate_class_list,
)
from .decoder import decode_docs
from .diagnostics import DiagnosticWarning, Diagnostics, WarningKind
from .models import (
    CategorizedDataClasses,
    CategoryTag,
    RawClassRecord,
    ResolvedDocs,
    TopLevelClassMap,
)
from .resolver import TopLevelResolver
from .slugs import SlugValidator, slugify
from .sorting import sort_entities

__all__ = [
    # Pipeline stages
    "decode_docs",
    "TopLevelResolver",
    "ClassCategorizer",
    "classify",
    "validate_class_list",
    "categorize_data_classes",
    "sort_entities",
    "SlugValidator",
    "slugify",
    # Models
    "CategoryTag",
    "CategorizedDataClasses",
    "ClassListReport",
    "RawClassRecord",
    "ResolvedDocs",
    "TopLevelClassMap",
    # Diagnostics
    "Diagnostics",
    "DiagnosticWarning",
    "WarningKind",
]
