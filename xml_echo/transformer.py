"""Turns an XML request body into an XML echo response."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from .exceptions import RootOccurrenceError, UnexpectedRootElementError, XmlRequestError
from .parser import ParsedDocument, XmlDocumentParser

DEFAULT_ROOT_TAG = "catalog"
XML_CONTENT_TYPE = "text/xml"


def _xml_headers() -> Dict[str, str]:
    return {"Content-Type": XML_CONTENT_TYPE}


@dataclass
class XmlResponse:
    body: str
    status_code: int = 200
    headers: Dict[str, str] = field(default_factory=_xml_headers)

    def to_dict(self) -> Dict[str, object]:
        """Render the API Gateway proxy response shape."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
        }


@dataclass
class TransformResult:
    """Outcome of one transform: exactly one of ``response`` or ``error``."""

    response: Optional[XmlResponse] = None
    error: Optional[XmlRequestError] = None

    def __post_init__(self) -> None:
        if (self.response is None) == (self.error is None):
            raise ValueError("TransformResult requires exactly one of response or error")

    @property
    def ok(self) -> bool:
        return self.error is None


class RequestTransformer:
    """
    Validates a request body as XML and echoes its root element back.
    Holds no per-request state, so one instance serves every invocation.
    """

    def __init__(
        self,
        parser: Optional[XmlDocumentParser] = None,
        root_tag: Optional[str] = DEFAULT_ROOT_TAG,
    ) -> None:
        self._parser = parser or XmlDocumentParser()
        # None accepts whatever root the document declares.
        self._root_tag = root_tag

    @property
    def root_tag(self) -> Optional[str]:
        return self._root_tag

    def transform(self, text: Union[str, bytes, None]) -> XmlResponse:
        """Parse ``text`` and return the echo response.

        Raises MalformedXmlError for bodies that are not well-formed,
        UnexpectedRootElementError when the root is not the expected element.
        """
        document = self._parser.parse(text)
        element = self._extract_root(document)
        return XmlResponse(body=document.serialize(element))

    def try_transform(self, text: Union[str, bytes, None]) -> TransformResult:
        try:
            return TransformResult(response=self.transform(text))
        except XmlRequestError as exc:
            return TransformResult(error=exc)

    def _extract_root(self, document: ParsedDocument):
        expected = self._root_tag or document.root_tag
        if document.root_tag != expected:
            raise UnexpectedRootElementError(expected, document.root_tag)

        occurrences = document.occurrences(expected)
        if len(occurrences) != 1:
            raise RootOccurrenceError(
                f"Root element <{expected}> occurred {len(occurrences)} times; expected exactly one."
            )
        return occurrences[0]
