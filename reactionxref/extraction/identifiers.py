"""
Section and step identifier parsing.

Reads the labels out of tagged procedure spans such as "Example 3",
"Step 2" or "Example 3, step a". Identifiers are the numeric, alphanumeric
and identifier-tagged tokens of the span; an identifier preceded by an
"example"/"method" qualifier word is a section identifier.
"""

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from loguru import logger
from lxml import etree

from reactionxref.extraction.types import SectionAndStepIdentifier
from reactionxref.tagging import tags
from reactionxref.tagging.tree import descendants_with_tags, element_value, previous_sibling, to_xml

DEFAULT_STEP_SYNONYMS = ('step', 'steps', 'stage', 'stages', 'part', 'parts', 'phase')

_Builder = Callable[[etree._Element, etree._Element], Optional[SectionAndStepIdentifier]]


def _first_is_section(first, second):
    return SectionAndStepIdentifier(element_value(first), element_value(second))


def _second_is_section(first, second):
    return SectionAndStepIdentifier(element_value(second), element_value(first))


def _not_interpretable(first, second):
    return None


# (first marked as section, second marked as section) -> interpretation
TWO_IDENTIFIER_RULES: Dict[Tuple[bool, bool], _Builder] = {
    (True, False): _first_is_section,
    (False, True): _second_is_section,
    (False, False): _first_is_section,   # document order
    (True, True): _not_interpretable,
}


class SectionAndStepIdentifierParser:
    """
    Extracts section/step identifiers from procedure spans.

    Args:
        step_synonyms: Qualifier words that denote a step; an identifier
            qualified by one of these is never a section identifier
    """

    def __init__(self, step_synonyms: Optional[Iterable[str]] = None):
        self.step_synonyms = frozenset(
            s.lower() for s in (step_synonyms if step_synonyms is not None else DEFAULT_STEP_SYNONYMS)
        )

    def is_synonym_of_step(self, word: str) -> bool:
        return word.lower() in self.step_synonyms

    def find_identifiers(self, procedure_el: etree._Element) -> List[etree._Element]:
        return descendants_with_tags(procedure_el, tags.IDENTIFIER_TAGS)

    def is_section_identifier(self, identifier_el: etree._Element) -> bool:
        """Is the identifier preceded by an example/method qualifier that is not a step synonym?"""
        qualifier = previous_sibling(identifier_el)
        return (qualifier is not None
                and qualifier.tag in tags.SECTION_QUALIFIER_TAGS
                and not self.is_synonym_of_step(element_value(qualifier)))

    def get_section_identifier(self, procedure_el: etree._Element) -> Optional[str]:
        """
        The single identifier of a procedure span that labels a section.

        Returns:
            The identifier, or None unless exactly one identifier is present
        """
        identifiers = self.find_identifiers(procedure_el)
        if len(identifiers) == 1:
            return element_value(identifiers[0])
        return None

    def get_step_identifier(self, procedure_el: etree._Element, section_identifier: str) -> Optional[str]:
        """
        The step identifier of a procedure span that labels a step of the given section.

        One identifier is the step; with two, the first must repeat the
        section identifier and the second is the step.

        Returns:
            The step identifier, or None if the span cannot be read that way
        """
        identifiers = self.find_identifiers(procedure_el)
        if len(identifiers) == 1:
            return element_value(identifiers[0])
        if len(identifiers) == 2 and element_value(identifiers[0]) == section_identifier:
            return element_value(identifiers[1])
        return None

    def get_section_and_step_identifier(
        self,
        procedure_el: etree._Element,
        enclosing_section_identifier: Optional[str],
    ) -> Optional[SectionAndStepIdentifier]:
        """
        Interpret a procedure span that refers to another procedure.

        Args:
            procedure_el: The referring procedure span
            enclosing_section_identifier: Identifier of the section the
                reference appears in; a lone step identifier belongs to it

        Returns:
            SectionAndStepIdentifier, or None when the span is not interpretable
        """
        identifiers = self.find_identifiers(procedure_el)
        if len(identifiers) == 1:
            identifier = identifiers[0]
            if self.is_section_identifier(identifier):
                return SectionAndStepIdentifier(element_value(identifier), None)
            return SectionAndStepIdentifier(enclosing_section_identifier, element_value(identifier))

        if len(identifiers) == 2:
            first, second = identifiers
            key = (self.is_section_identifier(first), self.is_section_identifier(second))
            result = TWO_IDENTIFIER_RULES[key](first, second)
            if result is None:
                logger.debug(f"Both identifiers are section identifiers in: {to_xml(procedure_el)}")
            return result

        logger.debug(f"{len(identifiers)} identifiers found in procedure: {to_xml(procedure_el)}")
        return None
