"""XML echo Lambda package."""

from .exceptions import (
    MalformedXmlError,
    RootOccurrenceError,
    UnexpectedRootElementError,
    XmlRequestError,
)
from .options import ParserOptions
from .parser import ParsedDocument, XmlDocumentParser
from .transformer import RequestTransformer, TransformResult, XmlResponse

__all__ = [
    "MalformedXmlError",
    "ParsedDocument",
    "ParserOptions",
    "RequestTransformer",
    "RootOccurrenceError",
    "TransformResult",
    "UnexpectedRootElementError",
    "XmlDocumentParser",
    "XmlRequestError",
    "XmlResponse",
]
