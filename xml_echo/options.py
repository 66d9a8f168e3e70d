"""Parser option set shared by the document parser and the transformer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class ParserOptions:
    """Immutable parser configuration.

    ``trim``
        Strip leading and trailing whitespace from text nodes.
    ``normalize``
        Collapse runs of interior whitespace inside text nodes to one space.
    ``explicit_root``
        Wrap the object view of a document as ``{root_tag: [root]}``.
    ``empty_tag``
        Value used for elements without text, attributes or children. When it
        is a string it is also written into empty elements of the tree.
    ``explicit_array``
        Always represent child elements as lists in the object view, even when
        only one child with a given tag exists.
    ``ignore_attrs``
        Drop attributes from the tree entirely.
    ``merge_attrs``
        Fold attributes into the child mapping of the object view instead of
        keeping them under ``attr_key``.
    ``explicit_charkey``
        Always place text under ``char_key`` in the object view.
    ``strip_comments``
        Remove XML comments from the parsed tree.
    """

    trim: bool = False
    normalize: bool = False
    explicit_root: bool = False
    empty_tag: Optional[str] = None
    explicit_array: bool = True
    ignore_attrs: bool = False
    merge_attrs: bool = False
    attr_key: str = "$"
    char_key: str = "_"
    explicit_charkey: bool = False
    strip_comments: bool = False

    @property
    def rewrites_text(self) -> bool:
        return self.trim or self.normalize

    def with_overrides(self, **changes) -> "ParserOptions":
        return replace(self, **changes)


DEFAULT_OPTIONS = ParserOptions()
