"""
Main pipeline for normalizing a Docs.json dump.

Composes decoding, top-level resolution, categorization, the category
parsers, sorting and slug validation into one call that returns a
complete OutputDocument or raises.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import orjson

from .docs.categorizer import ClassCategorizer, ClassListReport
from .docs.decoder import RawInput, decode_docs
from .docs.diagnostics import Diagnostics
from .docs.models import CategorizedDataClasses, CategoryTag
from .docs.resolver import TopLevelResolver
from .docs.slugs import SlugValidator
from .docs.sorting import sort_entities
from .parsers import CategoryParsers, read_only_context
from .settings import ParserSettings

# Output categories in dependency order, with the bucket tags each one is built from
CATEGORY_SOURCES: Dict[str, tuple] = {
    "items": (CategoryTag.ITEM, CategoryTag.RESOURCE),
    "resources": (CategoryTag.RESOURCE,),
    "buildables": (CategoryTag.BUILDABLE,),
    "productionRecipes": (CategoryTag.RECIPE,),
    "buildableRecipes": (CategoryTag.RECIPE,),
    "customizerRecipes": (CategoryTag.CUSTOMIZER_RECIPE,),
    "schematics": (CategoryTag.SCHEMATIC,),
}
CATEGORIES = tuple(CATEGORY_SOURCES)

EntityMapping = Mapping[str, Any]


@dataclass(frozen=True)
class DocumentMeta:
    """Diagnostic data about the resolution step.

    The top-level containers are read-only (tuples and mapping proxies).
    The raw records inside them are the decoded input objects, shared with
    ``data_classes_by_category``, and are not copied.
    """
    original_docs: Tuple[Any, ...]
    top_level_class_list: Tuple[str, ...]
    data_classes_by_top_level_class: Mapping[str, Any]
    data_classes_by_category: CategorizedDataClasses
    class_report: ClassListReport
    counts: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "originalDocs": list(self.original_docs),
            "topLevelClassList": list(self.top_level_class_list),
            "dataClassesByTopLevelClass": dict(self.data_classes_by_top_level_class),
            "dataClassesByCategory": self.data_classes_by_category.to_dict(),
            "classReport": {
                "unexpected": self.class_report.unexpected,
                "missing": self.class_report.missing,
            },
            "counts": self.counts,
        }


@dataclass(frozen=True)
class OutputDocument:
    """The normalized catalog produced from one Docs.json dump.

    ``categories`` and ``sorted_categories`` are read-only views keyed by
    category name (items, resources, buildables, productionRecipes,
    buildableRecipes, customizerRecipes, schematics).
    """
    meta: DocumentMeta
    categories: Mapping[str, EntityMapping]
    sorted_categories: Mapping[str, EntityMapping]
    diagnostics: Diagnostics

    def category(self, name: str, ordered: bool = False) -> EntityMapping:
        """Return one category mapping, unsorted (input order) or sorted."""
        source = self.sorted_categories if ordered else self.categories
        return source[name]

    @property
    def items(self) -> EntityMapping:
        return self.categories["items"]

    @property
    def resources(self) -> EntityMapping:
        return self.categories["resources"]

    @property
    def buildables(self) -> EntityMapping:
        return self.categories["buildables"]

    @property
    def production_recipes(self) -> EntityMapping:
        return self.categories["productionRecipes"]

    @property
    def buildable_recipes(self) -> EntityMapping:
        return self.categories["buildableRecipes"]

    @property
    def customizer_recipes(self) -> EntityMapping:
        return self.categories["customizerRecipes"]

    @property
    def schematics(self) -> EntityMapping:
        return self.categories["schematics"]

    def to_dict(self, include_meta: bool = True) -> Dict[str, Any]:
        """Plain document with camelCase keys: meta, the seven categories,
        the seven ``...Sorted`` categories and the warnings."""
        data: Dict[str, Any] = {}
        if include_meta:
            data["meta"] = self.meta.to_dict()
        for name in CATEGORIES:
            data[name] = dict(self.categories[name])
        for name in CATEGORIES:
            data[f"{name}Sorted"] = dict(self.sorted_categories[name])
        data["diagnostics"] = self.diagnostics.to_list()
        return data

    def to_json(self, include_meta: bool = True, indent: bool = False) -> bytes:
        """Serialize with orjson (records are dataclasses)."""
        option = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(self.to_dict(include_meta=include_meta), option=option)


class DocsParser:
    """Runs the normalization pipeline.

    Stateless between calls: every ``parse`` builds its own structures, so
    one instance can be reused for many inputs.
    """

    def __init__(
        self,
        settings: Optional[ParserSettings] = None,
        categorizer: Optional[ClassCategorizer] = None,
        parsers: Optional[CategoryParsers] = None,
    ):
        """Initialize the pipeline.

        Args:
            settings: Parser settings (defaults if omitted)
            categorizer: Classification rule table (Docs.json defaults if omitted)
            parsers: Category parser stages (Docs.json defaults if omitted)

        Raises:
            ConfigError: If the settings are invalid
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings if settings is not None else ParserSettings()
        self.settings.ensure_valid()

        self.resolver = TopLevelResolver(
            native_class_pattern=self.settings.native_class_pattern,
            strict_duplicates=self.settings.strict_duplicates,
        )
        self.categorizer = categorizer if categorizer is not None else ClassCategorizer()
        self.parsers = parsers if parsers is not None else CategoryParsers()
        self.slug_validator = SlugValidator()

    def parse(self, raw: RawInput) -> OutputDocument:
        """Normalize one dump.

        Args:
            raw: Docs.json as bytes (UTF-16 or UTF-8) or text

        Returns:
            The complete OutputDocument

        Raises:
            DocsParserError: Any structural problem; no partial output is produced
        """
        self.logger.info("Starting Docs.json processing...")
        diagnostics = Diagnostics()

        text = decode_docs(raw, self.settings.encodings)
        resolved = self.resolver.resolve(text)
        class_report = self.categorizer.validate_class_list(resolved.class_list)
        categorized = self.categorizer.categorize(resolved.class_map)

        items, resources = self.parsers.items(categorized, read_only_context())
        buildables = self.parsers.buildables(
            categorized, read_only_context(items=items, resources=resources)
        )
        production, buildable_recipes, customizer = self.parsers.recipes(
            categorized, read_only_context(items=items, buildables=buildables)
        )
        schematics = self.parsers.schematics(
            categorized,
            read_only_context(
                items=items,
                resources=resources,
                productionRecipes=production,
                buildableRecipes=buildable_recipes,
                customizerRecipes=customizer,
            ),
        )

        data: Dict[str, EntityMapping] = {
            "items": items,
            "resources": resources,
            "buildables": buildables,
            "productionRecipes": production,
            "buildableRecipes": buildable_recipes,
            "customizerRecipes": customizer,
            "schematics": schematics,
        }
        data_sorted = {
            name: sort_entities(mapping, self.settings.sort_key_for(name), category=name)
            for name, mapping in data.items()
        }

        counts = self._count(categorized, data)
        self.slug_validator.validate(data, diagnostics)

        meta = DocumentMeta(
            original_docs=tuple(resolved.docs),
            top_level_class_list=tuple(resolved.class_list),
            data_classes_by_top_level_class=MappingProxyType(dict(resolved.class_map)),
            data_classes_by_category=categorized,
            class_report=class_report,
            counts=counts,
        )
        self.logger.info(
            f"Docs.json processing completed with {len(diagnostics)} warnings"
        )
        return OutputDocument(
            meta=meta,
            categories=MappingProxyType(
                {name: MappingProxyType(dict(m)) for name, m in data.items()}
            ),
            sorted_categories=MappingProxyType(
                {name: MappingProxyType(m) for name, m in data_sorted.items()}
            ),
            diagnostics=diagnostics,
        )

    def _count(
        self, categorized: CategorizedDataClasses, data: Mapping[str, EntityMapping]
    ) -> Dict[str, Dict[str, int]]:
        """Source record versus parsed record counts per category.

        Production and buildable recipes share the FGRecipe source bucket.
        """
        counts: Dict[str, Dict[str, int]] = {}
        for name, tags in CATEGORY_SOURCES.items():
            source = categorized.count(*tags)
            parsed = len(data[name])
            counts[name] = {"source": source, "parsed": parsed}
            self.logger.debug(f"{name}: parsed {parsed} of {source} source records")
        return counts


def parse_docs(
    raw: RawInput,
    settings: Optional[ParserSettings] = None,
    categorizer: Optional[ClassCategorizer] = None,
    parsers: Optional[CategoryParsers] = None,
) -> OutputDocument:
    """Normalize one Docs.json dump with a one-off DocsParser."""
    return DocsParser(settings=settings, categorizer=categorizer, parsers=parsers).parse(raw)
