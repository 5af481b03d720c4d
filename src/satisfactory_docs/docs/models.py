"""
Data models for the raw Docs.json document.

Contains type definitions and simple data structures shared by the
resolver, categorizer and pipeline. Raw records stay plain dicts: the
dump's field set varies per class and is only interpreted by the
category parsers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Tuple, TypeAlias

# Type aliases for clarity
RawClassRecord: TypeAlias = Dict[str, Any]
"""A single member class record (e.g. Desc_IronPlate_C) as a dict."""

RawClassCollection: TypeAlias = List[RawClassRecord]
"""The ordered member records of one top-level class."""

TopLevelClassMap: TypeAlias = Dict[str, RawClassCollection]
"""Maps class identifier (e.g. 'FGItemDescriptor') to its member records."""


# Keys of a top-level entry
NATIVE_CLASS_KEY = "NativeClass"
CLASSES_KEY = "Classes"

# Key of the class name inside a member record
CLASS_NAME_KEY = "ClassName"


class CategoryTag(Enum):
    """Closed set of buckets a top-level class can be assigned to."""

    ITEM = "items"
    RESOURCE = "resources"
    BUILDABLE = "buildables"
    BUILDING_DESCRIPTOR = "buildingDescriptors"
    RECIPE = "recipes"
    CUSTOMIZER_RECIPE = "customizerRecipes"
    SCHEMATIC = "schematics"
    UNCATEGORIZED = "uncategorized"


@dataclass
class ResolvedDocs:
    """Output of the top-level resolver.

    docs is the parsed input exactly as decoded; class_map keeps input order;
    class_list is the sorted, de-duplicated list of class identifiers.
    """
    docs: List[Any]
    class_map: TopLevelClassMap
    class_list: List[str]


@dataclass
class CategorizedDataClasses:
    """Top-level classes partitioned by CategoryTag.

    Each bucket is a slice of the TopLevelClassMap. A class identifier lives
    in exactly one bucket.
    """
    buckets: Dict[CategoryTag, TopLevelClassMap] = field(
        default_factory=lambda: {tag: {} for tag in CategoryTag}
    )

    def bucket(self, tag: CategoryTag) -> TopLevelClassMap:
        """Return the class map slice for a tag (empty if nothing matched)."""
        return self.buckets.get(tag, {})

    def records(self, *tags: CategoryTag) -> Iterator[Tuple[str, RawClassRecord]]:
        """Yield (class identifier, record) for every record under the tags.

        Order follows tag order, then input order within each bucket.
        """
        for tag in tags:
            for class_id, records in self.bucket(tag).items():
                for record in records:
                    yield class_id, record

    def count(self, *tags: CategoryTag) -> int:
        """Number of member records under the given tags."""
        return sum(len(records) for tag in tags for records in self.bucket(tag).values())

    def tag_of(self, class_id: str) -> "CategoryTag | None":
        """Return the bucket holding a class identifier, if any."""
        for tag, bucket in self.buckets.items():
            if class_id in bucket:
                return tag
        return None

    def to_dict(self) -> Dict[str, TopLevelClassMap]:
        """Plain mapping keyed by bucket name, for the output metadata."""
        return {tag.value: dict(bucket) for tag, bucket in self.buckets.items()}
