"""Parse FGRecipe and FGCustomizationRecipe classes into the three recipe kinds"""
import logging
from typing import Mapping, Optional, Tuple

from ..docs.models import CategorizedDataClasses, CategoryTag, RawClassRecord
from ..docs.slugs import class_name_to_slug
from .buildables import buildable_for
from .common import (
    FLUID_AMOUNT_DIVISOR,
    ParseContext,
    get_class_name,
    get_text,
    make_slug,
    parse_class_references,
    parse_float,
    parse_item_amounts,
)
from .models import (
    Buildable,
    BuildableRecipe,
    BuildableRecipeMapping,
    CustomizerRecipe,
    CustomizerRecipeMapping,
    Item,
    ItemQuantity,
    ProductionRecipe,
    ProductionRecipeMapping,
)

logger = logging.getLogger(__name__)

BUILD_GUN_CLASSES = frozenset({"BP_BuildGun_C", "FGBuildGun"})
WORKBENCH_CLASSES = frozenset({"BP_WorkBenchComponent_C", "FGBuildableAutomatedWorkBench"})
WORKSHOP_CLASSES = frozenset({"BP_WorkshopComponent_C"})


class UnknownReferenceError(ValueError):
    """A recipe names an item or buildable that no earlier parser produced."""
    pass


def parse_quantities(
    value: object, items: Mapping[str, Item], recipe_class: str
) -> Tuple[ItemQuantity, ...]:
    """
    Parse an mIngredients/mProduct string into ItemQuantity values.

    Raises:
        UnknownReferenceError: If an item class is not in ``items``
    """
    quantities = []
    for item_class, amount in parse_item_amounts(value):
        item = items.get(item_class)
        if item is None:
            raise UnknownReferenceError(f"{recipe_class} references unknown item {item_class}")
        if item.is_fluid:
            amount = amount / FLUID_AMOUNT_DIVISOR
        quantities.append(ItemQuantity(item_class=item_class, quantity=amount))
    return tuple(quantities)


def _find_buildable(
    descriptor_class: str, buildables: Mapping[str, Buildable]
) -> Optional[str]:
    """Map a build gun product (a Desc_ class) to a buildable class."""
    candidate = buildable_for(descriptor_class)
    if candidate in buildables:
        return candidate
    for buildable_class, buildable in buildables.items():
        if buildable.descriptor_class == descriptor_class:
            return buildable_class
    return None


def _parse_production_recipe(
    record: RawClassRecord,
    class_name: str,
    produced_in: Tuple[str, ...],
    items: Mapping[str, Item],
    buildables: Mapping[str, Buildable],
) -> ProductionRecipe:
    name = get_text(record, "mDisplayName") or class_name
    machines = tuple(cls for cls in produced_in if cls in buildables)
    return ProductionRecipe(
        slug=make_slug(name, class_name, prefix="recipe"),
        name=name,
        recipe_class=class_name,
        alternate=name.startswith("Alternate") or "_Alternate_" in class_name,
        duration=parse_float(record.get("mManufactoringDuration")),
        manual_duration_multiplier=parse_float(
            record.get("mManualManufacturingMultiplier"), 1.0
        ),
        ingredients=parse_quantities(record.get("mIngredients"), items, class_name),
        products=parse_quantities(record.get("mProduct"), items, class_name),
        produced_in=machines,
        handcraftable=any(cls in WORKBENCH_CLASSES for cls in produced_in),
        workshop_craftable=any(cls in WORKSHOP_CLASSES for cls in produced_in),
    )


def _parse_buildable_recipe(
    record: RawClassRecord,
    class_name: str,
    items: Mapping[str, Item],
    buildables: Mapping[str, Buildable],
) -> BuildableRecipe:
    products = parse_item_amounts(record.get("mProduct"))
    if not products:
        raise UnknownReferenceError(f"{class_name} has no product")
    descriptor_class = products[0][0]
    product = _find_buildable(descriptor_class, buildables)
    if product is None:
        raise UnknownReferenceError(
            f"{class_name} builds {descriptor_class}, which is not a known buildable"
        )

    name = get_text(record, "mDisplayName") or buildables[product].name
    return BuildableRecipe(
        slug=make_slug(name, class_name, prefix="build"),
        name=name,
        recipe_class=class_name,
        product=product,
        ingredients=parse_quantities(record.get("mIngredients"), items, class_name),
    )


def parse_recipes(
    categorized: CategorizedDataClasses, context: ParseContext
) -> Tuple[ProductionRecipeMapping, BuildableRecipeMapping, CustomizerRecipeMapping]:
    """
    Parse every RECIPE and CUSTOMIZER_RECIPE record.

    Context must provide ``items`` and ``buildables``. A recipe is a
    buildable recipe when the build gun produces it; otherwise it is a
    production recipe when a machine, the craft bench or the workshop
    produces it. Recipes produced nowhere are skipped.
    """
    items: Mapping[str, Item] = context["items"]
    buildables: Mapping[str, Buildable] = context["buildables"]

    production: ProductionRecipeMapping = {}
    buildable_recipes: BuildableRecipeMapping = {}
    customizer: CustomizerRecipeMapping = {}

    for native_class, record in categorized.records(CategoryTag.RECIPE):
        class_name = get_class_name(record)
        if not class_name:
            logger.warning(f"Skipped {native_class} record without ClassName")
            continue

        produced_in = parse_class_references(record.get("mProducedIn"))
        try:
            if any(cls in BUILD_GUN_CLASSES for cls in produced_in):
                buildable_recipes[class_name] = _parse_buildable_recipe(
                    record, class_name, items, buildables
                )
            elif produced_in:
                production[class_name] = _parse_production_recipe(
                    record, class_name, produced_in, items, buildables
                )
            else:
                logger.debug(f"Skipped recipe {class_name}: not produced anywhere")
        except UnknownReferenceError as e:
            logger.warning(f"Skipped recipe: {e}")

    for native_class, record in categorized.records(CategoryTag.CUSTOMIZER_RECIPE):
        class_name = get_class_name(record)
        if not class_name:
            logger.warning(f"Skipped {native_class} record without ClassName")
            continue
        try:
            ingredients = parse_quantities(record.get("mIngredients"), items, class_name)
        except UnknownReferenceError as e:
            logger.warning(f"Skipped customizer recipe: {e}")
            continue

        # Display names repeat across customizations; the class name does not
        customizer[class_name] = CustomizerRecipe(
            slug=f"customizer-{class_name_to_slug(class_name)}",
            name=get_text(record, "mDisplayName") or class_name,
            recipe_class=class_name,
            ingredients=ingredients,
        )

    logger.info(
        f"Parsed {len(production)} production, {len(buildable_recipes)} buildable "
        f"and {len(customizer)} customizer recipes"
    )
    return production, buildable_recipes, customizer
