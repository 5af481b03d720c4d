"""
Top-level resolver for Docs.json.

Parses the decoded text with orjson, validates each top-level entry and
groups member class records by their short class identifier.
"""

import logging
import re
from typing import Any, List, Union

import orjson

from ..errors import (
    DuplicateClassError,
    MalformedInputError,
    MissingFieldError,
    UnrecognizedClassError,
)
from ..settings.core import DEFAULT_NATIVE_CLASS_PATTERN
from .models import CLASSES_KEY, NATIVE_CLASS_KEY, ResolvedDocs, TopLevelClassMap


class TopLevelResolver:
    """Builds the TopLevelClassMap from decoded Docs.json text."""

    def __init__(
        self,
        native_class_pattern: Union[str, re.Pattern] = DEFAULT_NATIVE_CLASS_PATTERN,
        strict_duplicates: bool = False,
    ):
        """Initialize the resolver.

        Args:
            native_class_pattern: Regex whose first group captures the class
                identifier from a NativeClass value
            strict_duplicates: Fail instead of overwriting when the same class
                identifier appears twice
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.pattern = re.compile(native_class_pattern)
        self.strict_duplicates = strict_duplicates

    def extract_class_identifier(self, native_class: Any) -> str:
        """Return the short class identifier captured from a NativeClass value.

        Raises:
            UnrecognizedClassError: If the value is not a string, does not
                match, or captures an empty identifier
        """
        if not isinstance(native_class, str):
            raise UnrecognizedClassError(native_class)
        match = self.pattern.search(native_class)
        if not match or not match.group(1):
            raise UnrecognizedClassError(native_class)
        return match.group(1)

    def parse_json(self, text: str) -> List[Any]:
        """Parse the text and check that the root is an array."""
        try:
            docs = orjson.loads(text)
        except orjson.JSONDecodeError as e:
            raise MalformedInputError(f"Invalid Docs.json file: {e}") from e

        if not isinstance(docs, list):
            raise MalformedInputError(
                f"Invalid Docs.json file: root is {type(docs).__name__}, not an array"
            )
        return docs

    def resolve(self, text: str) -> ResolvedDocs:
        """Parse text and build the class map.

        Args:
            text: Decoded Docs.json payload

        Returns:
            ResolvedDocs with the parsed document, class map and sorted class list
        """
        docs = self.parse_json(text)

        class_map: TopLevelClassMap = {}
        for index, entry in enumerate(docs):
            if not isinstance(entry, dict):
                raise MalformedInputError(
                    f"Invalid Docs.json file: entry {index} is not an object"
                )
            for key in (NATIVE_CLASS_KEY, CLASSES_KEY):
                if key not in entry:
                    raise MissingFieldError(index, key)

            classes = entry[CLASSES_KEY]
            if not isinstance(classes, list):
                raise MalformedInputError(
                    f"Invalid Docs.json file: '{CLASSES_KEY}' of entry {index} is not an array"
                )

            class_id = self.extract_class_identifier(entry[NATIVE_CLASS_KEY])
            if class_id in class_map:
                if self.strict_duplicates:
                    raise DuplicateClassError(class_id)
                self.logger.warning(
                    f"Top-level class {class_id} appears more than once; keeping the last entry"
                )
            class_map[class_id] = classes

        class_list = sorted(class_map)
        self.logger.info(
            f"Resolved {len(class_list)} top-level classes from {len(docs)} entries"
        )
        self.logger.debug(f"Top-level classes: {class_list}")
        return ResolvedDocs(docs=docs, class_map=class_map, class_list=class_list)
