"""Hardened lxml parsing for request bodies."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from lxml import etree

from .exceptions import MalformedXmlError
from .options import DEFAULT_OPTIONS, ParserOptions

_WHITESPACE_RUN = re.compile(r"\s+")
_LOCATION_SUFFIX = re.compile(r", line \d+, column \d+$")
# Text input is already decoded; a declared encoding must not re-decode it.
_DECLARED_ENCODING = re.compile(r"^(\ufeff?<\?xml\b[^>]*?)\s+encoding\s*=\s*([\"'])[^\"']*\2")


def qualified_name(node: etree._Element, name: Optional[str] = None) -> str:
    """Return ``prefix:local`` for a tag or attribute name in Clark notation."""
    qname = etree.QName(name if name is not None else node.tag)
    if qname.namespace is None:
        return qname.localname
    for prefix, uri in node.nsmap.items():
        if uri == qname.namespace and prefix:
            return f"{prefix}:{qname.localname}"
    return qname.localname


@dataclass
class ParsedDocument:
    """A parsed request body. Lives for a single invocation."""

    root: etree._Element
    options: ParserOptions = field(default=DEFAULT_OPTIONS)

    @property
    def root_tag(self) -> str:
        return qualified_name(self.root)

    def occurrences(self, tag: str) -> List[etree._Element]:
        """Return every top-level element named ``tag``.

        Always a list, even though a well-formed document has a single root.
        """
        return [self.root] if self.root_tag == tag else []

    def to_object(self) -> Any:
        """Render the tree as nested dicts and lists.

        Attributes live under ``options.attr_key`` (or among the children when
        ``merge_attrs`` is set), text under ``options.char_key`` and child
        elements under their tag name.
        """
        node = _element_to_object(self.root, self.options)
        if not self.options.explicit_root:
            return node
        return {self.root_tag: [node] if self.options.explicit_array else node}

    def serialize(self, element: Optional[etree._Element] = None) -> str:
        return etree.tostring(element if element is not None else self.root, encoding="unicode")


class XmlDocumentParser:
    """Parses request text into a :class:`ParsedDocument`.

    The underlying lxml parser never recovers from errors, never resolves
    external entities and never touches the network.
    """

    def __init__(self, options: Optional[ParserOptions] = None) -> None:
        self.options = options or DEFAULT_OPTIONS

    def _build_parser(self) -> etree.XMLParser:
        return etree.XMLParser(
            recover=False,
            resolve_entities="internal",
            no_network=True,
            huge_tree=False,
            remove_blank_text=False,
            remove_comments=self.options.strip_comments,
        )

    def parse(self, text: Union[str, bytes, None]) -> ParsedDocument:
        if text is None:
            text = b""
        if isinstance(text, str):
            text = _DECLARED_ENCODING.sub(r"\1", text, count=1).encode("utf-8")
        if not text.strip():
            raise MalformedXmlError("Document is empty", 1, 1)

        try:
            root = etree.fromstring(text, parser=self._build_parser())
        except etree.XMLSyntaxError as exc:
            line, column = exc.position
            raise MalformedXmlError(_LOCATION_SUFFIX.sub("", exc.msg), line, column) from exc

        # external entities are left as references and would not re-parse once echoed
        unresolved = next(root.iter(tag=etree.Entity), None)
        if unresolved is not None:
            raise MalformedXmlError(f"Entity '{unresolved.name}' cannot be resolved", unresolved.sourceline)

        self._apply_options(root)
        return ParsedDocument(root=root, options=self.options)

    def _apply_options(self, root: etree._Element) -> None:
        options = self.options
        for element in root.iter(tag=etree.Element):
            if options.ignore_attrs:
                element.attrib.clear()
            if options.rewrites_text:
                element.text = _rewrite_text(element.text, options)
                if element is not root:
                    element.tail = _rewrite_text(element.tail, options)
            if options.empty_tag is not None and _is_empty(element):
                element.text = options.empty_tag


def _rewrite_text(text: Optional[str], options: ParserOptions) -> Optional[str]:
    if text is None:
        return None
    if options.trim:
        text = text.strip()
    if options.normalize:
        text = _WHITESPACE_RUN.sub(" ", text)
    return text or None


def _is_empty(element: etree._Element) -> bool:
    return not element.text and not len(element) and not element.attrib


def _collect_text(element: etree._Element) -> str:
    parts = [element.text or ""]
    for child in element:
        parts.append(child.tail or "")
    return "".join(parts)


def _append(target: Dict[str, Any], key: str, value: Any, explicit_array: bool) -> None:
    if key not in target:
        target[key] = [value] if explicit_array else value
        return
    existing = target[key]
    if not isinstance(existing, list):
        target[key] = [existing]
    target[key].append(value)


def _element_to_object(element: etree._Element, options: ParserOptions) -> Any:
    node: Dict[str, Any] = {}

    if element.attrib and not options.ignore_attrs:
        attributes = {qualified_name(element, key): value for key, value in element.attrib.items()}
        if options.merge_attrs:
            for key, value in attributes.items():
                _append(node, key, value, options.explicit_array)
        else:
            node[options.attr_key] = attributes

    for child in element.iterchildren(tag=etree.Element):
        _append(node, qualified_name(child), _element_to_object(child, options), options.explicit_array)

    text = _collect_text(element)
    if text.strip():
        node[options.char_key] = text

    if not node:
        return options.empty_tag
    if list(node) == [options.char_key] and not options.explicit_charkey:
        return node[options.char_key]
    return node
