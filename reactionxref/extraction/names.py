"""
Chemical name extraction from tagged mention spans.
"""

from typing import List

from lxml import etree

from reactionxref.tagging import tags
from reactionxref.tagging.tree import descendants_with_tags, element_value, terminals

# Tokens never part of a name
_NON_NAME_TOKENS = {tags.LRB, tags.RRB, tags.COMMA, tags.COLON, tags.DT, tags.DT_THE}

# Spans whose tokens describe rather than name the chemical
_NON_NAME_SPANS = {tags.QUANTITY, tags.REFERENCE_TO_COMPOUND, tags.PROCEDURE}


def find_molecule_name_from_oscarcm(oscarcm: etree._Element) -> List[str]:
    """Name tokens of a chemical-name span, without its brackets or delimiters."""
    name_tokens = descendants_with_tags(oscarcm, [tags.OSCAR_CM])
    if not name_tokens:
        name_tokens = [t for t in terminals(oscarcm) if t.tag not in _NON_NAME_TOKENS]
    return [element_value(t) for t in name_tokens if element_value(t)]


def _inside_non_name_span(token: etree._Element, mention: etree._Element) -> bool:
    node = token.getparent()
    while node is not None and node is not mention:
        if node.tag in _NON_NAME_SPANS:
            return True
        node = node.getparent()
    return False


def find_molecule_name(mention: etree._Element) -> List[str]:
    """
    Name tokens of a molecule or unnamed-molecule span.

    A molecule is named by its first chemical-name span. An unnamed molecule
    ("the title compound", "the residue") is named by its remaining words once
    quantities, references and determiners are removed.
    """
    oscarcms = descendants_with_tags(mention, [tags.OSCARCM])
    if oscarcms:
        return find_molecule_name_from_oscarcm(oscarcms[0])

    return [element_value(t) for t in terminals(mention)
            if t.tag not in _NON_NAME_TOKENS
            and not _inside_non_name_span(t, mention)
            and element_value(t)]
