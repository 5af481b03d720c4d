"""
Slug derivation and validation.

Slugs are lowercase, hyphenated, URL-safe identifiers. They must be unique
across every category of the output document; violations are reported as
warnings, never raised.
"""

import logging
import re
from typing import Any, Dict, Mapping, Tuple

from .diagnostics import Diagnostics, WarningKind

SLUG_RE = re.compile(r"^[a-z0-9-]+$")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Convert a display name into a slug.

    Example: "Alternate: Pure Iron Ingot" -> "alternate-pure-iron-ingot"
    """
    slug = _NON_SLUG_CHARS.sub("-", str(value or "").casefold())
    return slug.strip("-")


def class_name_to_slug(class_name: str) -> str:
    """Slug from a Docs class name, dropping the common prefix and _C suffix.

    Example: "Recipe_Swatch_Custom_C" -> "swatch-custom"
    """
    name = class_name
    if name.endswith("_C"):
        name = name[:-2]
    for prefix in ("Recipe_", "Schematic_", "Desc_", "Build_", "BP_"):
        if name.startswith(prefix):
            name = name[len(prefix):]
            break
    # Split CamelCase chunks so PureIronIngot -> Pure Iron Ingot
    name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", name)
    return slugify(name)


class SlugValidator:
    """Checks slug format and global uniqueness over all categories."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def validate(
        self, categories: Mapping[str, Mapping[str, Any]], diagnostics: Diagnostics
    ) -> int:
        """Check every record of every category.

        Args:
            categories: Category name -> (class identifier -> record)
            diagnostics: Collector receiving the warnings

        Returns:
            Number of warnings added
        """
        before = len(diagnostics)
        seen: Dict[str, Tuple[str, str]] = {}

        for category, entries in categories.items():
            for class_name, record in entries.items():
                slug = getattr(record, "slug", None)
                if slug is None and isinstance(record, Mapping):
                    slug = record.get("slug")

                if not isinstance(slug, str) or not SLUG_RE.match(slug):
                    diagnostics.warn(
                        WarningKind.INVALID_SLUG,
                        f"Invalid slug format: [{slug}] of [{class_name}] from [{category}]",
                        category=category,
                        class_name=class_name,
                        slug=str(slug),
                    )
                # Only non-empty string slugs take part in the uniqueness check
                if not isinstance(slug, str) or not slug:
                    continue

                first = seen.get(slug)
                if first is None:
                    seen[slug] = (category, class_name)
                    continue
                first_category, first_class = first
                diagnostics.warn(
                    WarningKind.DUPLICATE_SLUG,
                    f"Duplicate global slug: [{slug}] of [{class_name}] from [{category}], "
                    f"first used by [{first_class}] from [{first_category}]",
                    category=category,
                    class_name=class_name,
                    slug=slug,
                    other_category=first_category,
                    other_class_name=first_class,
                )

        added = len(diagnostics) - before
        self.logger.info(f"Checked {len(seen)} unique slugs, {added} warnings")
        return added
