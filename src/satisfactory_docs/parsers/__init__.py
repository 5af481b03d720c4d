"""
Category parsers: categorized Docs.json records -> typed entity records.

Parsers run in a fixed order (items/resources, buildables, recipes,
schematics); each one receives the earlier results as a read-only context.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

from ..docs.models import CategorizedDataClasses
from .buildables import parse_buildables
from .common import ParseContext, read_only_context
from .items import parse_items
from .models import (
    Buildable,
    BuildableRecipe,
    CustomizerRecipe,
    Item,
    ItemQuantity,
    ProductionRecipe,
    Resource,
    Schematic,
    SchematicUnlocks,
)
from .recipes import parse_recipes
from .schematics import parse_schematics

EntityMap = Dict[str, Any]

ItemsParser = Callable[[CategorizedDataClasses, ParseContext], Tuple[EntityMap, EntityMap]]
BuildablesParser = Callable[[CategorizedDataClasses, ParseContext], EntityMap]
RecipesParser = Callable[
    [CategorizedDataClasses, ParseContext], Tuple[EntityMap, EntityMap, EntityMap]
]
SchematicsParser = Callable[[CategorizedDataClasses, ParseContext], EntityMap]


@dataclass(frozen=True)
class CategoryParsers:
    """The four parser stages used by the pipeline.

    Replace any stage to adapt the pipeline to another dump layout.
    """
    items: ItemsParser = parse_items
    buildables: BuildablesParser = parse_buildables
    recipes: RecipesParser = parse_recipes
    schematics: SchematicsParser = parse_schematics


__all__ = [
    "CategoryParsers",
    "ParseContext",
    "read_only_context",
    "parse_items",
    "parse_buildables",
    "parse_recipes",
    "parse_schematics",
    "Item",
    "Resource",
    "Buildable",
    "ProductionRecipe",
    "BuildableRecipe",
    "CustomizerRecipe",
    "Schematic",
    "SchematicUnlocks",
    "ItemQuantity",
]
