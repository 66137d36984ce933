"""Tag vocabulary and read-only tree traversal for tagged experimental text."""
from . import tags
from .tree import (
    child_elements,
    children_with_tags,
    descendants_with_tags,
    element_value,
    is_terminal,
    next_sibling,
    next_terminal,
    parse_tagged_document,
    previous_sibling,
    previous_terminal,
    terminals,
    to_xml,
)

__all__ = [
    "tags",
    "parse_tagged_document",
    "element_value",
    "is_terminal",
    "terminals",
    "descendants_with_tags",
    "children_with_tags",
    "child_elements",
    "next_sibling",
    "previous_sibling",
    "next_terminal",
    "previous_terminal",
    "to_xml",
]
