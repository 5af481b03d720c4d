"""
Deterministic ordering of entity mappings.

Keys are paired with their records before sorting and the sorted mapping
is rebuilt from those pairs, so records that share a sort value can never
be swapped between keys.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple, TypeVar

from ..errors import SortInconsistencyError

logger = logging.getLogger(__name__)

V = TypeVar("V")


def _field_value(record: Any, field_name: str) -> Any:
    """Read a field from a dataclass record or a plain dict."""
    if isinstance(record, Mapping):
        return record.get(field_name)
    return getattr(record, field_name, None)


def _sort_value(record: Any, field_name: str) -> str:
    """The record's field as a string; records without it fall back to their
    slug, then to "" (sorted first)."""
    value = _field_value(record, field_name)
    if isinstance(value, str):
        return value
    slug = _field_value(record, "slug")
    return slug if isinstance(slug, str) else ""


def sort_key(value: str) -> Tuple[str, str]:
    """Case-insensitive first, then case as tie-breaker ("iron" < "Iron2" < "iron3")."""
    return (value.casefold(), value)


def sort_entities(
    mapping: Mapping[str, V], field_name: str, category: Optional[str] = None
) -> Dict[str, V]:
    """Return a new dict with the same key/value pairs, ordered by a record field.

    Ties keep their original relative order (the sort is stable). A record
    without a string value for the field sorts by its slug instead, or
    first when it has none.

    Args:
        mapping: Class identifier -> record
        field_name: Record field to order by (e.g. 'slug', 'name', 'item_class')
        category: Category name, used in messages only

    Returns:
        Dict whose iteration yields records in ascending field order

    Raises:
        SortInconsistencyError: If the key count and record count diverge,
            so the rebuilt mapping cannot hold exactly the source entries
    """
    pairs = list(mapping.items())
    if len(pairs) != len(mapping):
        raise SortInconsistencyError(
            f"Could not sort: mapping reports {len(mapping)} keys but yields {len(pairs)} records",
            category,
        )

    decorated = []
    fallbacks = 0
    for key, record in pairs:
        if not isinstance(_field_value(record, field_name), str):
            fallbacks += 1
        decorated.append((sort_key(_sort_value(record, field_name)), key, record))

    decorated.sort(key=lambda item: item[0])
    result: Dict[str, V] = {key: record for _, key, record in decorated}

    if len(result) != len(pairs):
        raise SortInconsistencyError(
            f"Could not sort: {len(pairs)} keys in, {len(result)} entries out", category
        )

    extra = {"category": category or ""}
    if fallbacks:
        logger.debug(
            f"{fallbacks} {category or 'records'} have no '{field_name}'; sorted by slug",
            extra=extra,
        )
    logger.debug(f"Sorted {len(result)} {category or 'records'} by {field_name}", extra=extra)
    return result
