"""
Exceptions raised while reading TMX documents.

=============================================================================
ERROR TAXONOMY
=============================================================================

    TmxError
    ├── TmxSyntaxError         malformed XML, unexpected end of input
    ├── TmxStructureError      well-formed XML that is not a <map>
    └── TmxAttributeError      an attribute value could not be decoded
        ├── AttributeFormatError   wrong shape (terrain list field count)
        └── AttributeValueError    bad content (hex color, integer)

Any of these aborts the whole decode: there is no partial result.

TmxAttributeError also derives from ValueError so callers that already
catch ValueError around int()-style parsing keep working.

=============================================================================
"""

from typing import Optional, Tuple


class TmxError(Exception):
    """Base class for every error raised by tmx_reader."""


class TmxSyntaxError(TmxError):
    """
    The input is not well-formed XML.

    position is the (line, column) reported by the XML parser, if known.
    """

    def __init__(self, message: str, position: Optional[Tuple[int, int]] = None):
        super().__init__(message)
        self.position = position


class TmxStructureError(TmxError):
    """The document is well-formed but is not shaped like a TMX map."""


class TmxAttributeError(TmxError, ValueError):
    """
    An attribute value could not be decoded.

    The decoders themselves only know the raw value. The element tag and
    attribute name are filled in by decode_attribute() once the error
    reaches the field being decoded.
    """

    def __init__(self, message: str, value: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.value = value
        self.element: Optional[str] = None
        self.attribute: Optional[str] = None

    def locate(self, element: str, attribute: str) -> 'TmxAttributeError':
        """Record where the offending value was found."""
        self.element = element
        self.attribute = attribute
        return self

    def __str__(self) -> str:
        if self.element is None:
            return self.message
        return f"<{self.element} {self.attribute}=...>: {self.message}"


class AttributeFormatError(TmxAttributeError):
    """The value does not have the expected shape."""


class AttributeValueError(TmxAttributeError):
    """The value has the right shape but its content is invalid."""
