"""
Exception taxonomy for the docs pipeline.

Every structural problem with the input document is fatal and raised to
the caller. Slug problems are not errors: they are collected as warnings
(see ``docs.diagnostics``).
"""

from typing import Iterable, Optional


class DocsParserError(Exception):
    """Base class for all fatal pipeline errors."""
    pass


class DecodeError(DocsParserError):
    """Raised when raw bytes cannot be decoded with any configured encoding."""

    def __init__(self, encodings: Iterable[str], reason: str = ""):
        self.encodings = tuple(encodings)
        message = f"Could not decode input as any of {', '.join(self.encodings)}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MalformedInputError(DocsParserError):
    """Raised when the input is not JSON or its root is not an array."""
    pass


class MissingFieldError(DocsParserError):
    """Raised when a top-level entry lacks a required key."""

    def __init__(self, index: int, field_name: str):
        self.index = index
        self.field_name = field_name
        super().__init__(
            f"Invalid Docs.json file: entry {index} is missing required key '{field_name}'"
        )


class UnrecognizedClassError(DocsParserError):
    """Raised when a NativeClass value does not match the extraction pattern."""

    def __init__(self, native_class: object):
        self.native_class = native_class
        super().__init__(f"Could not parse top-level class {native_class!r}")


class MissingRequiredClassError(DocsParserError):
    """Raised when a class the categorizer cannot work without is absent."""

    def __init__(self, missing: Iterable[str]):
        self.missing = sorted(missing)
        super().__init__(f"Required top-level classes missing: {', '.join(self.missing)}")


class SortInconsistencyError(DocsParserError):
    """Raised when sorting would lose, duplicate or misplace records."""

    def __init__(self, message: str, category: Optional[str] = None):
        self.category = category
        if category:
            message = f"[{category}] {message}"
        super().__init__(message)


class DuplicateClassError(DocsParserError):
    """Raised in strict mode when a top-level class identifier repeats."""

    def __init__(self, class_id: str):
        self.class_id = class_id
        super().__init__(f"Top-level class {class_id} appears more than once")
