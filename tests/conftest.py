"""Shared fixtures: a small Docs.json sample in the game's real field layout."""

import logging
from typing import Any, Dict, List, Tuple

import orjson
import pytest


def native(class_id: str) -> str:
    """Full NativeClass value for a top-level class identifier."""
    return f"/Script/CoreUObject.Class'/Script/FactoryGame.{class_id}'"


def obj_path(class_name: str) -> str:
    """Unreal object path of a blueprint class."""
    stem = class_name[:-2] if class_name.endswith("_C") else class_name
    return f"/Game/FactoryGame/{stem}.{class_name}"


def amounts(*pairs: Tuple[str, float]) -> str:
    """Build an mIngredients/mProduct/mCost string."""
    parts = [
        f"(ItemClass=\"/Script/Engine.BlueprintGeneratedClass'{obj_path(cls)}'\",Amount={amount})"
        for cls, amount in pairs
    ]
    return "(" + ",".join(parts) + ")"


def refs(*classes: str) -> str:
    """Build a parenthesized list of object paths."""
    return "(" + ",".join(f'"{obj_path(cls)}"' for cls in classes) + ")"


def item(class_name: str, name: str, **fields: Any) -> Dict[str, Any]:
    record = {
        "ClassName": class_name,
        "mDisplayName": name,
        "mDescription": f"{name} description.",
        "mStackSize": "SS_BIG",
        "mForm": "RF_SOLID",
        "mResourceSinkPoints": "6",
        "mEnergyValue": "0.000000",
        "mRadioactiveDecay": "0.000000",
    }
    record.update(fields)
    return record


def build_sample_docs() -> List[Dict[str, Any]]:
    return [
        {
            "NativeClass": native("FGItemDescriptor"),
            "Classes": [
                item("Desc_IronPlate_C", "Iron Plate"),
                item("Desc_IronIngot_C", "Iron Ingot", mStackSize="SS_MEDIUM"),
            ],
        },
        {
            "NativeClass": native("FGResourceDescriptor"),
            "Classes": [
                item(
                    "Desc_OreIron_C",
                    "Iron Ore",
                    mStackSize="SS_MEDIUM",
                    mPingColor="(R=1.000000,G=0.000000,B=0.000000,A=1.000000)",
                    mCollectSpeedMultiplier="1.000000",
                ),
                item(
                    "Desc_Water_C",
                    "Water",
                    mStackSize="SS_FLUID",
                    mForm="RF_LIQUID",
                    mResourceSinkPoints="0",
                    mCollectSpeedMultiplier="2.000000",
                ),
                item("Desc_Coal_C", "Coal", mEnergyValue="300.000000"),
            ],
        },
        {
            "NativeClass": native("FGItemDescriptorBiomass"),
            "Classes": [item("Desc_Leaves_C", "Leaves", mEnergyValue="15.000000")],
        },
        {
            "NativeClass": native("FGBuildableManufacturer"),
            "Classes": [
                {
                    "ClassName": "Build_ConstructorMk1_C",
                    "mDisplayName": "Constructor",
                    "mDescription": "Crafts 1 part into another part.",
                    "mPowerConsumption": "4.000000",
                    "mManufacturingSpeed": "1.000000",
                }
            ],
        },
        {
            "NativeClass": native("FGBuildableGeneratorFuel"),
            "Classes": [
                {
                    "ClassName": "Build_GeneratorCoal_C",
                    "mDisplayName": "Coal Generator",
                    "mPowerProduction": "75.000000",
                    "mFuel": [{"mFuelClass": "Desc_Coal_C", "mSupplementalResourceClass": "Desc_Water_C"}],
                },
                {
                    "ClassName": "Build_GeneratorBiomass_C",
                    "mDisplayName": "Biomass Burner",
                    "mPowerProduction": "30.000000",
                    "mFuel": [{"mFuelClass": "FGItemDescriptorBiomass"}],
                },
            ],
        },
        {
            "NativeClass": native("FGBuildableResourceExtractor"),
            "Classes": [
                {
                    "ClassName": "Build_MinerMk1_C",
                    "mDisplayName": "Miner Mk.1",
                    "mPowerConsumption": "5.000000",
                    "mAllowedResources": "",
                    "mAllowedResourceForms": "(RF_SOLID)",
                },
                {
                    "ClassName": "Build_WaterPump_C",
                    "mDisplayName": "Water Extractor",
                    "mPowerConsumption": "20.000000",
                    "mAllowedResources": refs("Desc_Water_C"),
                },
            ],
        },
        {
            "NativeClass": native("FGBuildingDescriptor"),
            "Classes": [
                {"ClassName": "Desc_ConstructorMk1_C", "mDisplayName": "Constructor"},
                {"ClassName": "Desc_MinerMk1_C", "mDisplayName": "Miner Mk.1"},
            ],
        },
        {
            "NativeClass": native("FGRecipe"),
            "Classes": [
                {
                    "ClassName": "Recipe_IronPlate_C",
                    "mDisplayName": "Iron Plate",
                    "mIngredients": amounts(("Desc_IronIngot_C", 3)),
                    "mProduct": amounts(("Desc_IronPlate_C", 2)),
                    "mManufactoringDuration": "6.000000",
                    "mManualManufacturingMultiplier": "1.000000",
                    "mProducedIn": refs("Build_ConstructorMk1_C", "BP_WorkBenchComponent_C"),
                },
                {
                    "ClassName": "Recipe_Alternate_PureIronIngot_C",
                    "mDisplayName": "Alternate: Pure Iron Ingot",
                    "mIngredients": amounts(("Desc_OreIron_C", 7), ("Desc_Water_C", 4000)),
                    "mProduct": amounts(("Desc_IronIngot_C", 13)),
                    "mManufactoringDuration": "12.000000",
                    "mProducedIn": refs("Build_ConstructorMk1_C"),
                },
                {
                    "ClassName": "Recipe_ConstructorMk1_C",
                    "mDisplayName": "Constructor",
                    "mIngredients": amounts(("Desc_IronPlate_C", 2)),
                    "mProduct": amounts(("Desc_ConstructorMk1_C", 1)),
                    "mProducedIn": refs("BP_BuildGun_C"),
                },
                {
                    "ClassName": "Recipe_MinerMk1_C",
                    "mDisplayName": "Miner Mk.1",
                    "mIngredients": amounts(("Desc_IronPlate_C", 10)),
                    "mProduct": amounts(("Desc_MinerMk1_C", 1)),
                    "mProducedIn": '("/Script/FactoryGame.FGBuildGun")',
                },
                {
                    "ClassName": "Recipe_Unused_C",
                    "mDisplayName": "Unused",
                    "mIngredients": amounts(("Desc_IronPlate_C", 1)),
                    "mProduct": amounts(("Desc_IronIngot_C", 1)),
                    "mProducedIn": "",
                },
                {
                    "ClassName": "Recipe_Broken_C",
                    "mDisplayName": "Broken",
                    "mIngredients": amounts(("Desc_Unobtainium_C", 1)),
                    "mProduct": amounts(("Desc_IronPlate_C", 1)),
                    "mProducedIn": refs("Build_ConstructorMk1_C"),
                },
            ],
        },
        {
            "NativeClass": native("FGCustomizationRecipe"),
            "Classes": [
                {
                    "ClassName": "Recipe_Swatch_Custom_C",
                    "mDisplayName": "Custom Swatch",
                    "mIngredients": "",
                    "mProducedIn": refs("BP_BuildGun_C"),
                },
                {
                    "ClassName": "Recipe_Swatch_Slot1_C",
                    "mDisplayName": "Swatch",
                    "mIngredients": amounts(("Desc_IronPlate_C", 1)),
                    "mProducedIn": refs("BP_BuildGun_C"),
                },
            ],
        },
        {
            "NativeClass": native("FGSchematic"),
            "Classes": [
                {
                    "ClassName": "Schematic_1-1_C",
                    "mDisplayName": "Base Building",
                    "mType": "EST_Milestone",
                    "mTechTier": "1",
                    "mTimeToComplete": "120.000000",
                    "mCost": amounts(("Desc_IronPlate_C", 10)),
                    "mUnlocks": [
                        {
                            "Class": "BP_UnlockRecipe_C",
                            "mRecipes": refs(
                                "Recipe_ConstructorMk1_C", "Recipe_IronPlate_C", "Recipe_Unused_C"
                            ),
                        },
                        {"Class": "BP_UnlockInventorySlot_C", "mNumInventorySlotsToUnlock": "3"},
                        {
                            "Class": "BP_UnlockScannableResource_C",
                            "mResourcesToAddToScanner": refs("Desc_Coal_C"),
                        },
                        {
                            "Class": "BP_UnlockGiveItem_C",
                            "mItemsToGive": amounts(("Desc_IronPlate_C", 50)),
                        },
                    ],
                    "mSchematicDependencies": [],
                },
                {
                    "ClassName": "Schematic_Alternate_PureIronIngot_C",
                    "mDisplayName": "Alternate: Pure Iron Ingot",
                    "mType": "EST_Alternate",
                    "mTechTier": "0",
                    "mCost": "",
                    "mUnlocks": [
                        {
                            "Class": "BP_UnlockRecipe_C",
                            "mRecipes": refs("Recipe_Alternate_PureIronIngot_C"),
                        }
                    ],
                    "mSchematicDependencies": [
                        {
                            "Class": "BP_SchematicPurchasedDependency_C",
                            "mSchematics": refs("Schematic_1-1_C"),
                            "mRequireAllSchematicsToBePurchased": "True",
                        }
                    ],
                },
            ],
        },
        {
            "NativeClass": native("FGCustomizerSubCategory"),
            "Classes": [{"ClassName": "SC_Swatches_C"}],
        },
    ]


@pytest.fixture
def sample_docs() -> List[Dict[str, Any]]:
    """A fresh copy of the sample dump as Python data."""
    return build_sample_docs()


@pytest.fixture
def sample_text(sample_docs) -> str:
    """The sample dump as JSON text."""
    return orjson.dumps(sample_docs).decode("utf-8")


@pytest.fixture
def sample_utf16(sample_text) -> bytes:
    """The sample dump encoded the way the game writes it (UTF-16 with BOM)."""
    return sample_text.encode("utf-16")


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging so caplog sees package records in every test."""
    yield
    package_logger = logging.getLogger("satisfactory_docs")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def categorized(sample_text):
    """The sample dump resolved and partitioned with the default rules."""
    from satisfactory_docs.docs.categorizer import ClassCategorizer
    from satisfactory_docs.docs.resolver import TopLevelResolver

    resolved = TopLevelResolver().resolve(sample_text)
    return ClassCategorizer().categorize(resolved.class_map)
