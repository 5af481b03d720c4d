"""Parse buildable classes into Buildable records"""
import logging
from typing import Any, Dict, List, Mapping, Tuple

from ..docs.models import CategorizedDataClasses, CategoryTag, RawClassRecord
from .common import (
    ITEM_FORMS,
    ParseContext,
    class_from_path,
    get_class_name,
    get_text,
    make_slug,
    parse_class_references,
    parse_float,
)
from .models import Buildable, BuildableMapping, Item

logger = logging.getLogger(__name__)

BUILD_PREFIX = "Build_"
DESCRIPTOR_PREFIX = "Desc_"


def descriptor_for(buildable_class: str) -> str:
    """Build_ConstructorMk1_C -> Desc_ConstructorMk1_C (naming convention)."""
    if buildable_class.startswith(BUILD_PREFIX):
        return DESCRIPTOR_PREFIX + buildable_class[len(BUILD_PREFIX):]
    return ""


def buildable_for(descriptor_class: str) -> str:
    """Desc_ConstructorMk1_C -> Build_ConstructorMk1_C (naming convention)."""
    if descriptor_class.startswith(DESCRIPTOR_PREFIX):
        return BUILD_PREFIX + descriptor_class[len(DESCRIPTOR_PREFIX):]
    return ""


def _resolve_fuel_classes(
    fuel_class: str, items: Mapping[str, Item]
) -> List[str]:
    """A fuel entry names an item class, or a whole item category such as
    FGItemDescriptorBiomass."""
    if fuel_class in items:
        return [fuel_class]
    return [cls for cls, item in items.items() if item.native_class == fuel_class]


def _parse_fuels(record: RawClassRecord, items: Mapping[str, Item]) -> Tuple[str, ...]:
    raw_fuels: List[str] = []
    fuel_list = record.get("mFuel")
    if isinstance(fuel_list, list):
        for fuel in fuel_list:
            if isinstance(fuel, dict) and isinstance(fuel.get("mFuelClass"), str):
                raw_fuels.append(class_from_path(fuel["mFuelClass"]))
    raw_fuels.extend(parse_class_references(record.get("mDefaultFuelClasses")))

    fuels: List[str] = []
    for fuel_class in raw_fuels:
        for resolved in _resolve_fuel_classes(fuel_class, items):
            if resolved not in fuels:
                fuels.append(resolved)
    return tuple(fuels)


def _parse_allowed_resources(
    record: RawClassRecord, items: Mapping[str, Item], resources: Mapping[str, Any]
) -> Tuple[str, ...]:
    listed = parse_class_references(record.get("mAllowedResources"))
    if listed:
        return tuple(cls for cls in listed if cls in resources)

    # Extractors without an explicit list accept every resource of their forms
    raw_forms = get_text(record, "mAllowedResourceForms")
    if not raw_forms:
        return ()
    tokens = (token.strip() for token in raw_forms.strip("()").split(","))
    forms = {ITEM_FORMS[token] for token in tokens if token in ITEM_FORMS}
    return tuple(
        cls for cls in resources if cls in items and items[cls].form in forms
    )


def parse_buildables(
    categorized: CategorizedDataClasses, context: ParseContext
) -> BuildableMapping:
    """
    Parse every BUILDABLE record.

    Context must provide ``items`` and ``resources``: generators list the
    items they burn and extractors the resources they mine.
    """
    items: Mapping[str, Item] = context["items"]
    resources: Mapping[str, Any] = context["resources"]

    descriptors: Dict[str, RawClassRecord] = {
        get_class_name(record): record
        for _, record in categorized.records(CategoryTag.BUILDING_DESCRIPTOR)
    }

    buildables: BuildableMapping = {}
    for native_class, record in categorized.records(CategoryTag.BUILDABLE):
        class_name = get_class_name(record)
        if not class_name:
            logger.warning(f"Skipped {native_class} record without ClassName")
            continue

        descriptor_class = descriptor_for(class_name)
        descriptor = descriptors.get(descriptor_class)
        if descriptor is None:
            descriptor_class = ""

        name = get_text(record, "mDisplayName")
        if not name and descriptor is not None:
            name = get_text(descriptor, "mDisplayName")
        if not name:
            logger.debug(f"Skipped buildable {class_name}: no display name")
            continue

        description = get_text(record, "mDescription")
        if not description and descriptor is not None:
            description = get_text(descriptor, "mDescription")

        buildables[class_name] = Buildable(
            slug=make_slug(name, class_name),
            name=name,
            buildable_class=class_name,
            description=description,
            descriptor_class=descriptor_class,
            native_class=native_class,
            power_consumption=parse_float(record.get("mPowerConsumption")),
            power_production=parse_float(record.get("mPowerProduction")),
            manufacturing_speed=parse_float(record.get("mManufacturingSpeed")),
            fuels=_parse_fuels(record, items),
            allowed_resources=_parse_allowed_resources(record, items, resources),
        )

    logger.info(f"Parsed {len(buildables)} buildables")
    return buildables
