"""Parse FGSchematic classes into Schematic records"""
import logging
from typing import Any, Iterable, List, Mapping, Set, Tuple

from ..docs.models import CategorizedDataClasses, CategoryTag, RawClassRecord
from .common import (
    ParseContext,
    class_from_path,
    get_class_name,
    get_text,
    make_slug,
    parse_class_references,
    parse_float,
    parse_int,
    parse_item_amounts,
)
from .models import Item, ItemQuantity, Schematic, SchematicMapping, SchematicUnlocks
from .recipes import UnknownReferenceError, parse_quantities

logger = logging.getLogger(__name__)

SCHEMATIC_TYPES = {
    "EST_Milestone": "milestone",
    "EST_MAM": "mam",
    "EST_Alternate": "alternate",
    "EST_Tutorial": "tutorial",
    "EST_ResourceSink": "resourceSink",
    "EST_HardDrive": "hardDrive",
    "EST_Custom": "custom",
    "EST_Story": "story",
    "EST_Prototype": "prototype",
    "EST_Cheat": "cheat",
}

RECIPE_CONTEXT_KEYS = ("productionRecipes", "buildableRecipes", "customizerRecipes")


def schematic_type(raw_type: str) -> str:
    """EST_Milestone -> milestone; unknown values lose the EST_ prefix."""
    if raw_type in SCHEMATIC_TYPES:
        return SCHEMATIC_TYPES[raw_type]
    value = raw_type[4:] if raw_type.startswith("EST_") else raw_type
    return value[:1].lower() + value[1:]


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    seen: List[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return tuple(seen)


def _parse_unlocks(
    unlocks: Any,
    recipe_classes: Set[str],
    items: Mapping[str, Item],
    resources: Mapping[str, Any],
) -> SchematicUnlocks:
    recipes: List[str] = []
    scanner_resources: List[str] = []
    items_given: List[ItemQuantity] = []
    inventory_slots = 0
    arm_slots = 0

    if not isinstance(unlocks, list):
        return SchematicUnlocks()

    for unlock in unlocks:
        if not isinstance(unlock, dict):
            continue
        unlock_class = str(unlock.get("Class", ""))

        if unlock_class == "BP_UnlockRecipe_C":
            for recipe_class in parse_class_references(unlock.get("mRecipes")):
                if recipe_class in recipe_classes:
                    recipes.append(recipe_class)
                else:
                    logger.debug(f"Unlock references unparsed recipe {recipe_class}")

        elif unlock_class == "BP_UnlockScannableResource_C":
            found = list(parse_class_references(unlock.get("mResourcesToAddToScanner")))
            pairs = unlock.get("mResourcePairs")
            if isinstance(pairs, list):
                found.extend(
                    class_from_path(pair["ResourceDescriptor"])
                    for pair in pairs
                    if isinstance(pair, dict) and isinstance(pair.get("ResourceDescriptor"), str)
                )
            scanner_resources.extend(cls for cls in found if cls in resources)

        elif unlock_class == "BP_UnlockInventorySlot_C":
            inventory_slots += parse_int(unlock.get("mNumInventorySlotsToUnlock"))

        elif unlock_class == "BP_UnlockArmEquipmentSlot_C":
            arm_slots += parse_int(unlock.get("mNumArmEquipmentSlotsToUnlock"))

        elif unlock_class == "BP_UnlockGiveItem_C":
            for item_class, amount in parse_item_amounts(unlock.get("mItemsToGive")):
                if item_class in items:
                    items_given.append(ItemQuantity(item_class=item_class, quantity=amount))

    return SchematicUnlocks(
        recipes=_unique(recipes),
        scanner_resources=_unique(scanner_resources),
        inventory_slots=inventory_slots,
        arm_slots=arm_slots,
        items_given=tuple(items_given),
    )


def _parse_dependencies(record: RawClassRecord, schematic_classes: Set[str]) -> Tuple[str, ...]:
    dependencies = record.get("mSchematicDependencies")
    if not isinstance(dependencies, list):
        return ()
    required: List[str] = []
    for dependency in dependencies:
        if isinstance(dependency, dict):
            required.extend(
                cls for cls in parse_class_references(dependency.get("mSchematics"))
                if cls in schematic_classes
            )
    return _unique(required)


def parse_schematics(
    categorized: CategorizedDataClasses, context: ParseContext
) -> SchematicMapping:
    """
    Parse every SCHEMATIC record.

    Context must provide ``items``, ``resources`` and the three recipe
    mappings. Unlocked recipes, scanner resources and given items are kept
    only when an earlier parser produced them.
    """
    items: Mapping[str, Item] = context["items"]
    resources: Mapping[str, Any] = context["resources"]
    recipe_classes: Set[str] = set()
    for key in RECIPE_CONTEXT_KEYS:
        recipe_classes.update(context[key])

    schematic_classes = {
        get_class_name(record) for _, record in categorized.records(CategoryTag.SCHEMATIC)
    }

    schematics: SchematicMapping = {}
    for native_class, record in categorized.records(CategoryTag.SCHEMATIC):
        class_name = get_class_name(record)
        if not class_name:
            logger.warning(f"Skipped {native_class} record without ClassName")
            continue

        try:
            cost = parse_quantities(record.get("mCost"), items, class_name)
        except UnknownReferenceError as e:
            logger.warning(f"Skipped schematic: {e}")
            continue

        name = get_text(record, "mDisplayName") or class_name
        schematics[class_name] = Schematic(
            slug=make_slug(name, class_name, prefix="schematic"),
            name=name,
            schematic_class=class_name,
            type=schematic_type(get_text(record, "mType")),
            tier=parse_int(record.get("mTechTier")),
            time_to_complete=parse_float(record.get("mTimeToComplete")),
            cost=cost,
            unlocks=_parse_unlocks(record.get("mUnlocks"), recipe_classes, items, resources),
            required_schematics=_parse_dependencies(record, schematic_classes),
        )

    logger.info(f"Parsed {len(schematics)} schematics")
    return schematics
