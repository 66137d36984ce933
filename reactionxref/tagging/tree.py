"""
Read-only traversal helpers over tagged-sentence element trees.

The trees are lxml elements produced by the tagger. Nothing in this module
mutates a tree; every helper returns elements already present in it.
"""

from typing import Iterable, List, Optional, Union

from lxml import etree


def parse_tagged_document(xml: Union[str, bytes]) -> etree._Element:
    """
    Parse tagger XML output into an element tree.

    Whitespace-only text between elements is dropped so that element values
    are formed from token text alone.

    Args:
        xml: Serialized tagger output

    Returns:
        Root element of the tagged document
    """
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    parser = etree.XMLParser(remove_blank_text=True, remove_comments=True)
    return etree.fromstring(xml, parser)


def _is_element(node) -> bool:
    # comments and processing instructions carry a callable tag
    return node is not None and isinstance(node.tag, str)


def is_terminal(el: etree._Element) -> bool:
    """True if the element has no child elements (a token)."""
    return not any(_is_element(child) for child in el)


def terminals(el: etree._Element) -> List[etree._Element]:
    """All token elements under (and including) el, in document order."""
    return [node for node in el.iter() if _is_element(node) and is_terminal(node)]


def element_value(el: etree._Element) -> str:
    """
    Text of an element.

    For a token this is its stripped text; for a container the token texts
    are joined with single spaces.
    """
    if is_terminal(el):
        return (el.text or "").strip()
    return " ".join(value for value in (element_value(t) for t in terminals(el)) if value)


def descendants_with_tags(el: etree._Element, tags: Iterable[str]) -> List[etree._Element]:
    """Descendant elements with any of the given tags, in document order."""
    return list(el.iterdescendants(*tuple(tags)))


def children_with_tags(el: etree._Element, tags: Iterable[str]) -> List[etree._Element]:
    """Direct child elements with any of the given tags, in document order."""
    wanted = set(tags)
    return [child for child in el if _is_element(child) and child.tag in wanted]


def child_elements(el: etree._Element) -> List[etree._Element]:
    return [child for child in el if _is_element(child)]


def previous_sibling(el: etree._Element) -> Optional[etree._Element]:
    sibling = el.getprevious()
    while sibling is not None and not _is_element(sibling):
        sibling = sibling.getprevious()
    return sibling


def next_sibling(el: etree._Element) -> Optional[etree._Element]:
    sibling = el.getnext()
    while sibling is not None and not _is_element(sibling):
        sibling = sibling.getnext()
    return sibling


def next_terminal(el: etree._Element) -> Optional[etree._Element]:
    """
    The first token that follows el's subtree in document order.

    Climbs through ancestors until one has a following sibling, then descends
    to that sibling's first token.
    """
    node = el
    while node is not None:
        sibling = next_sibling(node)
        if sibling is not None:
            return terminals(sibling)[0]
        node = node.getparent()
    return None


def previous_terminal(el: etree._Element) -> Optional[etree._Element]:
    """The last token that precedes el's subtree in document order."""
    node = el
    while node is not None:
        sibling = previous_sibling(node)
        if sibling is not None:
            return terminals(sibling)[-1]
        node = node.getparent()
    return None


def to_xml(el: etree._Element) -> str:
    """Serialize an element for diagnostics."""
    return etree.tostring(el, encoding="unicode")
