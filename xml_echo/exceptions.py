from __future__ import annotations

from typing import Optional


class XmlRequestError(Exception):
    """Base class for XML request processing errors."""


class MalformedXmlError(XmlRequestError):
    """Raised when the request body is not well-formed XML."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class UnexpectedRootElementError(XmlRequestError):
    """Raised when the document root is not the element the handler expects."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected root element <{expected}> but found <{actual}>.")


class RootOccurrenceError(XmlRequestError):
    """Raised when a parsed document does not hold exactly one root occurrence."""


class ConfigurationError(XmlRequestError):
    """Raised when environment configuration cannot be interpreted."""
