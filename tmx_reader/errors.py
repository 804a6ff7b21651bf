"""
Exceptions raised while decoding TMX documents.

Every failure aborts the decode of the current element: there is no
partial result. Errors raised by collaborators (image resolver, property
parser) are not wrapped, they reach the caller as they were raised.

    TmxError
    ├── PathIsNotFileError
    ├── AttributeCoercionError   (also a ValueError)
    ├── MalformedAttributesError
    └── StructuralError
"""


class TmxError(Exception):
    """Base class for all decoding errors."""


class PathIsNotFileError(TmxError):
    """
    The document path has no parent directory.

    Raised when the caller hands over something like "/" instead of the
    path of the .tmx file, so relative resources cannot be resolved.
    """

    def __init__(self, path):
        self.path = path
        super().__init__(f"Path is not a file: {path!r}")


class AttributeCoercionError(TmxError, ValueError):
    """A recognized attribute has a value of the wrong type."""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for attribute {name!r}: {value!r}")


class MalformedAttributesError(TmxError):
    """A required attribute is missing from a start tag."""

    def __init__(self, element: str, name: str):
        self.element = element
        self.name = name
        super().__init__(f"<{element}> is missing required attribute {name!r}")


class StructuralError(TmxError):
    """The document ended early or is not well-formed XML."""
