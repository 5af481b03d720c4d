"""
Diagnostics collected during a pipeline run.

Non-fatal findings are recorded here instead of only being printed, so
callers can inspect them after the run. Each warning is also logged.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class WarningKind(Enum):
    """Kinds of non-fatal findings."""
    INVALID_SLUG = "invalid-slug"
    DUPLICATE_SLUG = "duplicate-slug"


@dataclass(frozen=True)
class DiagnosticWarning:
    """One non-fatal finding."""
    kind: WarningKind
    message: str
    category: Optional[str] = None
    class_name: Optional[str] = None
    slug: Optional[str] = None
    # For duplicates: where the slug was first seen
    other_category: Optional[str] = None
    other_class_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        for key in ("category", "class_name", "slug", "other_category", "other_class_name"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass
class Diagnostics:
    """Collector for warnings raised by one run."""
    warnings: List[DiagnosticWarning] = field(default_factory=list)

    def __post_init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def warn(self, kind: WarningKind, message: str, **details: Optional[str]) -> DiagnosticWarning:
        """Record a warning and log it."""
        warning = DiagnosticWarning(kind=kind, message=message, **details)
        self.warnings.append(warning)
        self.logger.warning(f"WARNING: {message}", extra={"category": warning.category or ""})
        return warning

    def of_kind(self, kind: WarningKind) -> List[DiagnosticWarning]:
        """Return recorded warnings of one kind."""
        return [w for w in self.warnings if w.kind is kind]

    def __len__(self) -> int:
        return len(self.warnings)

    def to_list(self) -> List[Dict[str, Any]]:
        return [w.to_dict() for w in self.warnings]
