"""
Classification of top-level classes into semantic buckets.

The rule table maps a class identifier to a CategoryTag. Exact rules are
checked first, then prefix rules in order; anything unmatched lands in
CategoryTag.UNCATEGORIZED, so the partition is always total.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..errors import MissingRequiredClassError
from .models import CategorizedDataClasses, CategoryTag, TopLevelClassMap

logger = logging.getLogger(__name__)

DEFAULT_EXACT_RULES: Dict[str, CategoryTag] = {
    "FGItemDescriptor": CategoryTag.ITEM,
    "FGItemDescriptorBiomass": CategoryTag.ITEM,
    "FGItemDescriptorNuclearFuel": CategoryTag.ITEM,
    "FGItemDescriptorPowerBoosterFuel": CategoryTag.ITEM,
    "FGPowerShardDescriptor": CategoryTag.ITEM,
    "FGAmmoTypeProjectile": CategoryTag.ITEM,
    "FGAmmoTypeSpreadshot": CategoryTag.ITEM,
    "FGAmmoTypeInstantHit": CategoryTag.ITEM,
    "FGEquipmentDescriptor": CategoryTag.ITEM,
    "FGConsumableDescriptor": CategoryTag.ITEM,
    "FGResourceDescriptor": CategoryTag.RESOURCE,
    "FGBuildingDescriptor": CategoryTag.BUILDING_DESCRIPTOR,
    "FGPoleDescriptor": CategoryTag.BUILDING_DESCRIPTOR,
    "FGRecipe": CategoryTag.RECIPE,
    "FGCustomizationRecipe": CategoryTag.CUSTOMIZER_RECIPE,
    "FGSchematic": CategoryTag.SCHEMATIC,
}

# Every FGBuildable* subclass (manufacturers, generators, belts...) is a buildable
DEFAULT_PREFIX_RULES: Tuple[Tuple[str, CategoryTag], ...] = (
    ("FGBuildable", CategoryTag.BUILDABLE),
)

DEFAULT_REQUIRED_CLASSES: Tuple[str, ...] = (
    "FGItemDescriptor",
    "FGResourceDescriptor",
    "FGRecipe",
    "FGSchematic",
)


@dataclass
class ClassListReport:
    """Outcome of checking the top-level class list against the known set."""
    unexpected: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.unexpected and not self.missing


class ClassCategorizer:
    """Assigns every top-level class identifier to exactly one CategoryTag."""

    def __init__(
        self,
        exact_rules: Optional[Mapping[str, CategoryTag]] = None,
        prefix_rules: Optional[Sequence[Tuple[str, CategoryTag]]] = None,
        required_classes: Optional[Iterable[str]] = None,
        known_classes: Optional[Iterable[str]] = None,
    ):
        """Initialize with a rule table.

        Args:
            exact_rules: Class identifier -> tag (default: the Docs.json table)
            prefix_rules: (prefix, tag) pairs checked in order after exact rules
            required_classes: Classes whose absence is fatal
            known_classes: Classes expected in a complete dump; defaults to the
                exact rule keys
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.exact_rules: Dict[str, CategoryTag] = dict(
            DEFAULT_EXACT_RULES if exact_rules is None else exact_rules
        )
        self.prefix_rules: Tuple[Tuple[str, CategoryTag], ...] = tuple(
            DEFAULT_PREFIX_RULES if prefix_rules is None else prefix_rules
        )
        self.required_classes = frozenset(
            DEFAULT_REQUIRED_CLASSES if required_classes is None else required_classes
        )
        self.known_classes = frozenset(
            self.exact_rules if known_classes is None else known_classes
        )

    def classify(self, class_id: str) -> CategoryTag:
        """Return the tag for a class identifier. Pure and deterministic."""
        tag = self.exact_rules.get(class_id)
        if tag is not None:
            return tag
        for prefix, prefix_tag in self.prefix_rules:
            if class_id.startswith(prefix):
                return prefix_tag
        return CategoryTag.UNCATEGORIZED

    def is_known(self, class_id: str) -> bool:
        """True if the class is expected, by name or by a prefix rule."""
        if class_id in self.known_classes:
            return True
        return any(class_id.startswith(prefix) for prefix, _ in self.prefix_rules)

    def validate_class_list(self, class_list: Sequence[str]) -> ClassListReport:
        """Compare the dump's class list with the known and required sets.

        Unknown and missing classes are reported, not raised. A missing
        required class is fatal.

        Raises:
            MissingRequiredClassError: If a required class is absent
        """
        present = set(class_list)
        missing_required = self.required_classes - present
        if missing_required:
            raise MissingRequiredClassError(missing_required)

        report = ClassListReport(
            unexpected=[c for c in class_list if not self.is_known(c)],
            missing=sorted(self.known_classes - present),
        )
        if report.unexpected:
            self.logger.info(
                f"{len(report.unexpected)} top-level classes have no category: {report.unexpected}"
            )
        if report.missing:
            self.logger.info(f"Expected top-level classes not found: {report.missing}")
        return report

    def categorize(self, class_map: TopLevelClassMap) -> CategorizedDataClasses:
        """Partition the class map into CategorizedDataClasses buckets.

        Input order is kept inside each bucket.
        """
        categorized = CategorizedDataClasses()
        for class_id, records in class_map.items():
            tag = self.classify(class_id)
            categorized.buckets[tag][class_id] = records

        for tag in CategoryTag:
            bucket = categorized.bucket(tag)
            if bucket:
                self.logger.debug(
                    f"{tag.value}: {len(bucket)} classes, {categorized.count(tag)} records"
                )
        return categorized


_default_categorizer = ClassCategorizer()


def classify(class_id: str) -> CategoryTag:
    """Classify with the default Docs.json rule table."""
    return _default_categorizer.classify(class_id)


def validate_class_list(class_list: Sequence[str]) -> ClassListReport:
    """Validate a class list with the default rule table."""
    return _default_categorizer.validate_class_list(class_list)


def categorize_data_classes(class_map: TopLevelClassMap) -> CategorizedDataClasses:
    """Categorize with the default rule table."""
    return _default_categorizer.categorize(class_map)
