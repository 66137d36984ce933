"""
Entity-type classification of chemical mentions.

Assigns each mention one of the EntityType values from the chemical name and
the tagged words around it. The rules form an ordered chain:

  1. False-positive filters (NMR shifts, atmospheres, formulae, silica)
  2. Plural ending of the name -> chemical class
  3. Name is a known functional class -> chemical class
  4. Head noun after the mention (surface / compounds / group ...)
  5. Qualifier before the mention (on / a / the)
  6. Explicit reference-to-compound overrides to definite reference
  7. Fallback: exact, or false positive if nothing anchors the mention

Rules 1-5 stop at the first one that yields a type. Rule 6 applies to any
type except falsePositive; rule 7 only when no type was found.
"""

import re
from typing import Callable, List, Optional, Tuple

from loguru import logger
from lxml import etree

from reactionxref.chemistry.functional_groups import FunctionalGroupDictionary
from reactionxref.chemistry.models import Chemical, EntityType
from reactionxref.resolvers.base import NameResolver
from reactionxref.tagging import tags
from reactionxref.tagging.tree import (
    descendants_with_tags,
    element_value,
    next_terminal,
    previous_terminal,
)

# Patterns are matched against the whole string
MATCH_PLURAL_ENDING = re.compile(r".*[abcdefghklmnpqrtwy]s", re.IGNORECASE)
MATCH_SURFACE_PRE_QUALIFIER = re.compile(r"on|onto", re.IGNORECASE)
MATCH_SURFACE_QUALIFIER = re.compile(r"surface|interface", re.IGNORECASE)
MATCH_CLASS_QUALIFIER = re.compile(r"(compound|derivative)s?", re.IGNORECASE)
MATCH_FRAGMENT_QUALIFIER = re.compile(
    r"groups?|atoms?|functional|rings?|chains?|bonds?|bridges?|contacts?|complex",
    re.IGNORECASE,
)
# "1H", "400 MHz 1H", "13C NMR"
MATCH_NMR = re.compile(r"(?:.*\s)?\d+H|.*[nN][mM][rR]")

Rule = Callable[[etree._Element, Chemical], Optional[EntityType]]


class EntityTypeClassifier:
    """
    Ordered-rule classifier for chemical mentions.

    The classifier only reads the tagged tree; the sole state it changes is
    the entity type of the chemical passed to assign_entity_type().
    """

    def __init__(self, functional_groups: FunctionalGroupDictionary, name_resolver: NameResolver):
        self.functional_groups = functional_groups
        self.name_resolver = name_resolver
        self.rules: List[Tuple[str, Rule]] = [
            ('false_positive', self.false_positive_rule),
            ('plural_ending', self.plural_ending_rule),
            ('functional_class', self.functional_class_rule),
            ('head_noun', self.head_noun_rule),
            ('preceding_qualifier', self.preceding_qualifier_rule),
        ]

    def determine_entity_type(self, mention: etree._Element, chemical: Chemical) -> EntityType:
        entity_type = None
        for rule_name, rule in self.rules:
            entity_type = rule(mention, chemical)
            if entity_type is not None:
                logger.trace(f"'{chemical.name}' typed {entity_type.value} by {rule_name} rule")
                break

        if entity_type is not EntityType.FALSE_POSITIVE and self.has_qualifying_identifier(mention):
            entity_type = EntityType.DEFINITE_REFERENCE

        if entity_type is None:
            if self.is_unanchored(mention, chemical):
                entity_type = EntityType.FALSE_POSITIVE
            else:
                entity_type = EntityType.EXACT
        return entity_type

    def assign_entity_type(self, mention: etree._Element, chemical: Chemical) -> EntityType:
        """
        Classify the mention and record the type on its chemical.

        Raises:
            EntityTypeAlreadyAssigned: if the chemical was already classified
        """
        entity_type = self.determine_entity_type(mention, chemical)
        chemical.entity_type = entity_type
        return entity_type

    # ── Rules ─────────────────────────────────────────────────────────

    def false_positive_rule(self, mention: etree._Element, chemical: Chemical) -> Optional[EntityType]:
        name = chemical.name
        if MATCH_NMR.fullmatch(name):
            return EntityType.FALSE_POSITIVE
        parent = mention.getparent()
        if parent is not None and parent.tag == tags.ATMOSPHERE_PHRASE:
            return EntityType.FALSE_POSITIVE
        name_lc = name.lower()
        if "=" in name_lc or name_lc.startswith("silica"):
            return EntityType.FALSE_POSITIVE
        return None

    def plural_ending_rule(self, mention: etree._Element, chemical: Chemical) -> Optional[EntityType]:
        if MATCH_PLURAL_ENDING.fullmatch(chemical.name):
            return EntityType.CHEMICAL_CLASS
        return None

    def functional_class_rule(self, mention: etree._Element, chemical: Chemical) -> Optional[EntityType]:
        if self.functional_groups.is_functional_class(chemical.name):
            return EntityType.CHEMICAL_CLASS
        return None

    def head_noun_rule(self, mention: etree._Element, chemical: Chemical) -> Optional[EntityType]:
        next_el = next_terminal(mention)
        if next_el is None:
            return None
        head_noun = element_value(next_el)
        if MATCH_SURFACE_QUALIFIER.fullmatch(head_noun):
            return EntityType.FALSE_POSITIVE
        if MATCH_CLASS_QUALIFIER.fullmatch(head_noun):
            return EntityType.CHEMICAL_CLASS
        if MATCH_FRAGMENT_QUALIFIER.fullmatch(head_noun):
            return EntityType.FRAGMENT
        return None

    def preceding_qualifier_rule(self, mention: etree._Element, chemical: Chemical) -> Optional[EntityType]:
        previous_el = self.element_before_first_chemical_name(mention)
        if previous_el is None:
            return None
        if MATCH_SURFACE_PRE_QUALIFIER.fullmatch(element_value(previous_el)):
            return EntityType.FALSE_POSITIVE
        if previous_el.tag == tags.DT:
            return EntityType.CHEMICAL_CLASS
        if previous_el.tag == tags.DT_THE:
            return EntityType.DEFINITE_REFERENCE
        return None

    # ── Context checks ───────────────────────────────────────────────

    @staticmethod
    def element_before_first_chemical_name(mention: etree._Element) -> Optional[etree._Element]:
        oscarcms = descendants_with_tags(mention, [tags.OSCARCM])
        if oscarcms:
            return previous_terminal(oscarcms[0])
        return previous_terminal(mention)

    @staticmethod
    def has_qualifying_identifier(mention: etree._Element) -> bool:
        return len(descendants_with_tags(mention, [tags.REFERENCE_TO_COMPOUND])) > 0

    def is_unanchored(self, mention: etree._Element, chemical: Chemical) -> bool:
        """No structure, no quantity and no name part the resolver can interpret."""
        return (chemical.smiles is None
                and chemical.inchi is None
                and len(descendants_with_tags(mention, [tags.QUANTITY])) == 0
                and len(self.name_resolver.find_systematic_names(chemical.name)) == 0)
