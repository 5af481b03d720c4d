"""Parse item and resource descriptors into Item and Resource records"""
import logging
from typing import Tuple

from ..docs.models import CategorizedDataClasses, CategoryTag
from .common import (
    ITEM_FORMS,
    STACK_SIZES,
    ParseContext,
    get_class_name,
    get_text,
    make_slug,
    parse_color,
    parse_float,
    parse_int,
)
from .models import Item, ItemMapping, Resource, ResourceMapping

logger = logging.getLogger(__name__)


def parse_items(
    categorized: CategorizedDataClasses, context: ParseContext
) -> Tuple[ItemMapping, ResourceMapping]:
    """
    Parse every ITEM and RESOURCE record.

    Resource descriptors are items too (iron ore sits in inventories), so
    they appear in both mappings: the Item carries inventory data, the
    Resource carries node data.
    """
    items: ItemMapping = {}
    resources: ResourceMapping = {}

    for native_class, record in categorized.records(CategoryTag.ITEM, CategoryTag.RESOURCE):
        class_name = get_class_name(record)
        if not class_name:
            logger.warning(f"Skipped {native_class} record without ClassName")
            continue

        name = get_text(record, "mDisplayName") or class_name
        slug = make_slug(name, class_name)
        if not slug:
            logger.warning(f"Skipped item {class_name}: no usable name for a slug")
            continue

        form = ITEM_FORMS.get(get_text(record, "mForm"), "invalid")
        is_resource = categorized.tag_of(native_class) is CategoryTag.RESOURCE

        stack_size = parse_int(record.get("mCachedStackSize"), 0)
        if not stack_size:
            stack_size = STACK_SIZES.get(get_text(record, "mStackSize"), 0)

        items[class_name] = Item(
            slug=slug,
            name=name,
            item_class=class_name,
            description=get_text(record, "mDescription"),
            native_class=native_class,
            stack_size=stack_size,
            sink_points=parse_int(record.get("mResourceSinkPoints")),
            energy_value=parse_float(record.get("mEnergyValue")),
            radioactive_decay=parse_float(record.get("mRadioactiveDecay")),
            form=form,
            is_fluid=form in ("liquid", "gas"),
            is_resource=is_resource,
        )

        if is_resource:
            resources[class_name] = Resource(
                slug=f"{slug}-resource",
                name=name,
                item_class=class_name,
                ping_color=parse_color(record.get("mPingColor")),
                collect_speed_multiplier=parse_float(
                    record.get("mCollectSpeedMultiplier"), 1.0
                ),
            )

    logger.info(f"Parsed {len(items)} items and {len(resources)} resources")
    return items, resources
