"""
Entity records produced by the category parsers.

Records are frozen dataclasses: once a parser has emitted a mapping, later
stages only read it. References to other entities are class identifiers
(lookup keys into the earlier mappings), never embedded copies.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple, TypeAlias


# =============================================================================
# Shared value types
# =============================================================================

@dataclass(frozen=True)
class ItemQuantity:
    """An amount of an item, as used in recipe inputs/outputs and costs.

    Fluid quantities are in cubic metres (the dump stores litres).
    """
    item_class: str
    quantity: float


# =============================================================================
# Items
# =============================================================================

@dataclass(frozen=True)
class Item:
    """Anything that can sit in an inventory slot or a pipe."""
    slug: str
    name: str
    item_class: str
    description: str = ""
    native_class: str = ""
    stack_size: int = 0
    sink_points: int = 0
    energy_value: float = 0.0
    radioactive_decay: float = 0.0
    form: str = "invalid"
    is_fluid: bool = False
    is_resource: bool = False


@dataclass(frozen=True)
class Resource:
    """Extraction properties of an item that occurs as a resource node."""
    slug: str
    name: str
    item_class: str
    ping_color: str = "FFFFFF"
    collect_speed_multiplier: float = 1.0


# =============================================================================
# Buildables
# =============================================================================

@dataclass(frozen=True)
class Buildable:
    """A structure placed with the build gun."""
    slug: str
    name: str
    buildable_class: str
    description: str = ""
    descriptor_class: str = ""
    native_class: str = ""
    power_consumption: float = 0.0
    power_production: float = 0.0
    manufacturing_speed: float = 0.0
    # Item classes this generator can burn
    fuels: Tuple[str, ...] = ()
    # Resource classes this extractor can mine
    allowed_resources: Tuple[str, ...] = ()


# =============================================================================
# Recipes
# =============================================================================

@dataclass(frozen=True)
class ProductionRecipe:
    """A recipe run in a machine, the craft bench or the equipment workshop."""
    slug: str
    name: str
    recipe_class: str
    alternate: bool = False
    duration: float = 0.0
    manual_duration_multiplier: float = 1.0
    ingredients: Tuple[ItemQuantity, ...] = ()
    products: Tuple[ItemQuantity, ...] = ()
    produced_in: Tuple[str, ...] = ()
    handcraftable: bool = False
    workshop_craftable: bool = False


@dataclass(frozen=True)
class BuildableRecipe:
    """The build gun cost of a buildable."""
    slug: str
    name: str
    recipe_class: str
    product: str
    ingredients: Tuple[ItemQuantity, ...] = ()


@dataclass(frozen=True)
class CustomizerRecipe:
    """A cosmetic customization (swatch, pattern, material) and its cost."""
    slug: str
    name: str
    recipe_class: str
    ingredients: Tuple[ItemQuantity, ...] = ()


# =============================================================================
# Schematics
# =============================================================================

@dataclass(frozen=True)
class SchematicUnlocks:
    """What purchasing a schematic grants."""
    recipes: Tuple[str, ...] = ()
    scanner_resources: Tuple[str, ...] = ()
    inventory_slots: int = 0
    arm_slots: int = 0
    items_given: Tuple[ItemQuantity, ...] = ()


@dataclass(frozen=True)
class Schematic:
    """A milestone, MAM research, shop entry or other unlockable."""
    slug: str
    name: str
    schematic_class: str
    type: str = ""
    tier: int = 0
    time_to_complete: float = 0.0
    cost: Tuple[ItemQuantity, ...] = ()
    unlocks: SchematicUnlocks = field(default_factory=SchematicUnlocks)
    required_schematics: Tuple[str, ...] = ()


# Mapping aliases
ItemMapping: TypeAlias = Dict[str, Item]
ResourceMapping: TypeAlias = Dict[str, Resource]
BuildableMapping: TypeAlias = Dict[str, Buildable]
ProductionRecipeMapping: TypeAlias = Dict[str, ProductionRecipe]
BuildableRecipeMapping: TypeAlias = Dict[str, BuildableRecipe]
CustomizerRecipeMapping: TypeAlias = Dict[str, CustomizerRecipe]
SchematicMapping: TypeAlias = Dict[str, Schematic]
