"""
Exceptions raised by the DTDL/SDF translation engine.

Every error unwinds the whole conversion call; no partial document is
returned. Unmapped types and units are not errors (see type_tables).
"""

from typing import Optional


class ConversionError(Exception):
    """Base class for all conversion failures."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.message = message
        self.source = source
        super().__init__(message)

    def __str__(self) -> str:
        if self.source:
            return f"{self.source}: {self.message}"
        return self.message


class DocumentParseError(ConversionError):
    """Input text is not valid JSON or lacks a required block."""


class MalformedIdentifier(ConversionError):
    """A qualified identifier has fewer than two segments."""

    def __init__(self, identifier: object, source: Optional[str] = None):
        self.identifier = identifier
        super().__init__(f"Malformed identifier: {identifier!r}", source)


class UnsupportedSchemaKind(ConversionError):
    """A schema shape that has no counterpart in the target dialect."""

    def __init__(self, construct: str, source: Optional[str] = None):
        self.construct = construct
        super().__init__(f"Unsupported schema: {construct}", source)


class MultipleInterfacesUnsupported(ConversionError):
    """An array-wrapped input holds more (or fewer) than one Interface."""

    def __init__(self, count: int, source: Optional[str] = None):
        self.count = count
        super().__init__(
            f"Expected exactly one Interface in the input array, found {count}",
            source,
        )
