"""
Shared helpers for reading Docs.json member records.

The dump stringifies almost everything: numbers ("6.000000"), booleans
("True"), class references (Unreal object paths) and item lists
("((ItemClass=...,Amount=3),...)"). These helpers turn those strings into
Python values.
"""

import logging
import re
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from ..docs.models import CLASS_NAME_KEY, RawClassRecord
from ..docs.slugs import class_name_to_slug, slugify

logger = logging.getLogger(__name__)

ParseContext = Mapping[str, Mapping[str, Any]]
"""Read-only view of the mappings produced by earlier parsers."""

# Fluids are stored in litres in recipes; entity records use cubic metres
FLUID_AMOUNT_DIVISOR = 1000.0

STACK_SIZES = {
    "SS_ONE": 1,
    "SS_SMALL": 50,
    "SS_MEDIUM": 100,
    "SS_BIG": 200,
    "SS_HUGE": 500,
    "SS_FLUID": 50000,
}

ITEM_FORMS = {
    "RF_SOLID": "solid",
    "RF_LIQUID": "liquid",
    "RF_GAS": "gas",
    "RF_HEAT": "heat",
}

_AMOUNT_RE = re.compile(r"ItemClass=([^,]*),\s*Amount=(\d+(?:\.\d+)?)")
_COLOR_COMPONENT_RE = re.compile(r"([RGBA])=(-?\d+(?:\.\d+)?)")


def read_only_context(**mappings: Mapping[str, Any]) -> ParseContext:
    """Wrap earlier results so later parsers cannot modify them."""
    return MappingProxyType({name: MappingProxyType(dict(m)) for name, m in mappings.items()})


def get_class_name(record: RawClassRecord) -> str:
    """Return the record's ClassName, or '' if absent."""
    value = record.get(CLASS_NAME_KEY)
    return value if isinstance(value, str) else ""


def get_text(record: RawClassRecord, key: str, default: str = "") -> str:
    """Return a string field with surrounding whitespace removed."""
    value = record.get(key)
    if value is None:
        return default
    return str(value).strip()


def parse_float(value: Any, default: float = 0.0) -> float:
    """Parse a stringified number ("6.000000") as float."""
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_int(value: Any, default: int = 0) -> int:
    """Parse a stringified number as int, accepting "3.000000"."""
    number = parse_float(value, float(default))
    return int(number)


def parse_bool(value: Any, default: bool = False) -> bool:
    """Parse the dump's "True"/"False" strings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value:
        return value.strip().lower() == "true"
    return default


def parse_color(value: Any) -> str:
    """
    Convert "(R=1.0,G=0.45,B=0.0,A=1.0)" or "(B=95,G=88,R=74,A=255)" to a hex
    string. Linear colors (all components <= 1) are scaled to 0-255.

    Returns:
        Hex colour string (e.g., "FF7300") or "FFFFFF" if unparseable
    """
    if not isinstance(value, str):
        return "FFFFFF"
    components = {k: float(v) for k, v in _COLOR_COMPONENT_RE.findall(value)}
    if not all(k in components for k in "RGB"):
        return "FFFFFF"

    linear = all(components[k] <= 1.0 for k in "RGB")
    channels = []
    for key in "RGB":
        channel = components[key] * 255 if linear else components[key]
        channels.append(max(0, min(255, int(round(channel)))))
    return "".join(f"{c:02X}" for c in channels)


def class_from_path(path: str) -> str:
    """
    Extract a class name from an Unreal object path.

    Example:
        "/Script/Engine.BlueprintGeneratedClass'/Game/.../Desc_IronIngot.Desc_IronIngot_C'"
        -> "Desc_IronIngot_C"
    """
    cleaned = path.strip().strip("()\"' ")
    return cleaned.rsplit(".", 1)[-1].strip("\"' ")


def parse_class_references(value: Any) -> Tuple[str, ...]:
    """Parse a parenthesized list of object paths into class names."""
    if not isinstance(value, str) or not value.strip("() "):
        return ()
    classes = []
    for part in value.split(","):
        class_name = class_from_path(part)
        if class_name:
            classes.append(class_name)
    return tuple(classes)


def parse_item_amounts(value: Any) -> Tuple[Tuple[str, float], ...]:
    """Parse "((ItemClass=...,Amount=N),...)" into (class name, amount) pairs."""
    if not isinstance(value, str):
        return ()
    return tuple(
        (class_from_path(path), float(amount)) for path, amount in _AMOUNT_RE.findall(value)
    )


def make_slug(name: str, class_name: str, prefix: Optional[str] = None) -> str:
    """Slug from a display name, falling back to the class name when the
    name has no usable characters."""
    slug = slugify(name) or class_name_to_slug(class_name)
    if prefix and slug:
        slug = f"{prefix}-{slug}"
    return slug
