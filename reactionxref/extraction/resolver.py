"""
Alias and reference resolution for chemical mentions.

A mention may denote a chemical established earlier in the document:

- by label, through a reference-to-compound span ("compound 3a"),
- as the product of another procedure ("the product of Example 3"),
- by a synonym defined in the text ("X (also known as Y)").

The resolver copies the identifier pair of the referenced chemical onto the
mention's chemical, and harvests alias definitions for later mentions. Every
ambiguous, missing or disqualified candidate is logged and left unresolved.
"""

from typing import Dict, Optional

from loguru import logger
from lxml import etree

from reactionxref.chemistry.models import Chemical, ChemicalIdentifierPair, EntityType, get_product_inchis
from reactionxref.extraction.identifiers import SectionAndStepIdentifierParser
from reactionxref.extraction.names import find_molecule_name_from_oscarcm
from reactionxref.extraction.state import PreviousReactionData
from reactionxref.extraction.types import AnaphoraResolution, ResolutionOutcome
from reactionxref.resolvers.base import NameResolver, join_name
from reactionxref.tagging import tags
from reactionxref.tagging.tree import (
    child_elements,
    children_with_tags,
    descendants_with_tags,
    element_value,
    next_sibling,
    to_xml,
)

ALIAS_DEFINING_TYPES = (EntityType.EXACT, EntityType.DEFINITE_REFERENCE)


def has_shorter_inchi(compound: Chemical, compound_to_compare_with: Chemical) -> bool:
    """
    True only if both chemicals have an InChI and compound's is strictly shorter.

    A shorter InChI is taken to describe a less specific structure.
    """
    return (compound.inchi is not None and compound_to_compare_with.inchi is not None
            and len(compound.inchi) < len(compound_to_compare_with.inchi))


def get_identifier_from_reference(reference_el: etree._Element) -> str:
    """Space-joined identifier tokens that are direct children of a reference span."""
    identifier_els = children_with_tags(reference_el, tags.IDENTIFIER_TAGS)
    return " ".join(element_value(el) for el in identifier_els)


class ReferenceResolver:
    """
    Resolves back-references against the document's PreviousReactionData.

    Args:
        previous_reaction_data: State of the current document
        identifier_parser: Reads section/step labels from procedure spans
        name_resolver: Resolves synonym names when harvesting aliases
    """

    def __init__(self,
                 previous_reaction_data: PreviousReactionData,
                 identifier_parser: SectionAndStepIdentifierParser,
                 name_resolver: NameResolver):
        if previous_reaction_data is None or identifier_parser is None or name_resolver is None:
            raise ValueError("Null input parameter")
        self.previous_reaction_data = previous_reaction_data
        self.identifier_parser = identifier_parser
        self.name_resolver = name_resolver

    # ── Anaphora ─────────────────────────────────────────────────────

    def attempt_to_resolve_anaphora(self, mention: etree._Element, chemical: Chemical,
                                    section_identifier: Optional[str]) -> AnaphoraResolution:
        """
        Try to give the chemical the structure of what the mention refers to.

        Mentions that already have a SMILES and have been typed as anything
        other than a definite reference are left alone.

        Args:
            mention: Molecule or unnamed-molecule span
            chemical: Chemical created for the mention
            section_identifier: Identifier of the enclosing section, used for
                procedure references that only name a step

        Returns:
            Outcome of the compound- and procedure-reference attempts
        """
        result = AnaphoraResolution()
        if (chemical.entity_type is not None and chemical.smiles is not None
                and chemical.entity_type is not EntityType.DEFINITE_REFERENCE):
            result.compound_reference = ResolutionOutcome.SKIPPED
            result.procedure_reference = ResolutionOutcome.SKIPPED
            return result

        references = descendants_with_tags(mention, [tags.REFERENCE_TO_COMPOUND])
        if len(references) == 1:
            result.compound_reference = self.attempt_to_resolve_reference_to_compound(references[0], chemical)
        elif len(references) > 1:
            logger.debug(f"Multiple referenceToCompounds present in: {to_xml(mention)}")
            result.compound_reference = ResolutionOutcome.AMBIGUOUS

        procedures = descendants_with_tags(mention, [tags.PROCEDURE])
        if len(procedures) == 1:
            result.procedure_reference = self.attempt_to_resolve_reference_to_procedure(
                procedures[0], chemical, section_identifier
            )
        elif len(procedures) > 1:
            logger.debug(f"Multiple procedures present in: {to_xml(mention)}")
            result.procedure_reference = ResolutionOutcome.AMBIGUOUS

        return result

    def attempt_to_resolve_reference_to_compound(self, reference_el: etree._Element,
                                                 chemical: Chemical) -> ResolutionOutcome:
        identifier = get_identifier_from_reference(reference_el)
        referenced_chemical = self.previous_reaction_data.get_chemical_by_alias(identifier)
        if referenced_chemical is None:
            logger.trace(f"Failed to resolve reference to compound: {identifier}")
            return ResolutionOutcome.UNRESOLVED

        if not referenced_chemical.has_inchi():
            logger.trace(f"{identifier} resolved to a compound with no InChI! This identifier was ignored.")
            return ResolutionOutcome.REJECTED_NO_INCHI
        if has_shorter_inchi(referenced_chemical, chemical):
            logger.trace(f"{identifier} resolved to a compound with a shorter InChI! This identifier was ignored.")
            return ResolutionOutcome.REJECTED_SHORTER_INCHI

        chemical.chemical_identifier_pair = referenced_chemical.chemical_identifier_pair
        return ResolutionOutcome.RESOLVED

    def attempt_to_resolve_reference_to_procedure(self, procedure_el: etree._Element, chemical: Chemical,
                                                  section_identifier: Optional[str]) -> ResolutionOutcome:
        """
        Resolve the chemical as the product of the referenced procedure.
        """
        identifier = self.identifier_parser.get_section_and_step_identifier(procedure_el, section_identifier)
        if identifier is None:
            logger.trace(f"Failed to interpret reference to procedure: {to_xml(procedure_el)}")
            return ResolutionOutcome.UNINTERPRETABLE

        referenced_chemical = self.previous_reaction_data.get_product_of_reaction(
            identifier.section_identifier, identifier.step_identifier
        )
        if referenced_chemical is None:
            logger.trace(f"Failed to resolve reference to procedure: {to_xml(procedure_el)}")
            return ResolutionOutcome.UNRESOLVED

        if (chemical.inchi is not None and chemical.inchi != referenced_chemical.inchi
                and identifier.step_identifier is None):
            section_reactions = self.previous_reaction_data.get_reactions(identifier.section_identifier)
            if chemical.inchi in get_product_inchis(section_reactions):
                # the reference is to the product of a sub step
                return ResolutionOutcome.SUB_STEP_PRODUCT

        if not referenced_chemical.has_inchi():
            logger.trace(f"{to_xml(procedure_el)} resolved to a compound with no InChI! "
                         f"This procedure reference was ignored.")
            return ResolutionOutcome.REJECTED_NO_INCHI
        if has_shorter_inchi(referenced_chemical, chemical):
            logger.trace(f"{to_xml(procedure_el)} resolved to a compound with a shorter InChI! "
                         f"This procedure reference was ignored.")
            return ResolutionOutcome.REJECTED_SHORTER_INCHI

        chemical.chemical_identifier_pair = referenced_chemical.chemical_identifier_pair
        return ResolutionOutcome.RESOLVED

    # ── Alias harvesting ─────────────────────────────────────────────

    def find_alias_definitions(self, mention: etree._Element, chemical: Chemical) -> Dict[str, Chemical]:
        """
        Aliases defined by a molecule mention.

        Only exact chemicals and definite references define aliases: the
        label of a single reference-to-compound span, and a synonym name
        given alongside the chemical name.

        Returns:
            Alias -> chemical mapping, typically of size 0 or 1
        """
        aliases: Dict[str, Chemical] = {}
        if chemical.entity_type not in ALIAS_DEFINING_TYPES:
            return aliases

        aliases.update(self.extract_synonymous_chemical_name_aliases(mention))
        references = descendants_with_tags(mention, [tags.REFERENCE_TO_COMPOUND])
        if len(references) == 1:
            aliases[get_identifier_from_reference(references[0])] = chemical
        elif len(references) > 1:
            logger.debug(f"Multiple referenceToCompounds present in: {to_xml(mention)}")
        return aliases

    def extract_synonymous_chemical_name_aliases(self, mention: etree._Element) -> Dict[str, Chemical]:
        """
        Detect "X (Y)" style synonym definitions.

        The mention must have exactly two chemical-name/mixture children, the
        first a chemical name. If exactly one of the two names resolves to a
        structure, the other name becomes an alias for that structure.
        """
        aliases: Dict[str, Chemical] = {}
        oscarcms_and_mixtures = children_with_tags(mention, [tags.OSCARCM, tags.MIXTURE])
        if len(oscarcms_and_mixtures) != 2 or oscarcms_and_mixtures[0].tag != tags.OSCARCM:
            return aliases

        first_oscarcm = oscarcms_and_mixtures[0]
        if oscarcms_and_mixtures[1].tag == tags.MIXTURE:
            second_oscarcm = self._find_synonym_oscarcm_from_mixture(oscarcms_and_mixtures[1])
            if second_oscarcm is None:
                return aliases
        else:
            second_oscarcm = oscarcms_and_mixtures[1]
            if not self._oscarcm_is_bracketed(second_oscarcm):
                return aliases

        name_components1 = find_molecule_name_from_oscarcm(first_oscarcm)
        smiles1 = self.name_resolver.resolve_name_to_smiles(name_components1)
        name1 = join_name(name_components1)
        name_components2 = find_molecule_name_from_oscarcm(second_oscarcm)
        smiles2 = self.name_resolver.resolve_name_to_smiles(name_components2)
        name2 = join_name(name_components2)

        if smiles1 is not None and smiles2 is None:
            synonym = Chemical(name2)
            synonym.chemical_identifier_pair = ChemicalIdentifierPair(
                smiles1, self.name_resolver.resolve_name_to_inchi(name_components1)
            )
            aliases[name2] = synonym
            logger.trace(f"{name1} is the same as {name2}")
        elif smiles1 is None and smiles2 is not None:
            synonym = Chemical(name1)
            synonym.chemical_identifier_pair = ChemicalIdentifierPair(
                smiles2, self.name_resolver.resolve_name_to_inchi(name_components2)
            )
            aliases[name1] = synonym
            logger.trace(f"{name1} is the same as {name2}")
        return aliases

    @staticmethod
    def _oscarcm_is_bracketed(oscarcm: etree._Element) -> bool:
        children = child_elements(oscarcm)
        return (len(children) >= 3
                and children[0].tag == tags.LRB
                and children[-1].tag == tags.RRB)

    @staticmethod
    def _find_synonym_oscarcm_from_mixture(mixture: etree._Element) -> Optional[etree._Element]:
        """The chemical name in "( name , ..." or "( name : ..." inside a mixture span."""
        lrbs = children_with_tags(mixture, [tags.LRB])
        if not lrbs:
            return None
        oscarcm = next_sibling(lrbs[0])
        if oscarcm is None or oscarcm.tag != tags.OSCARCM:
            return None
        delimiter = next_sibling(oscarcm)
        if delimiter is not None and delimiter.tag in (tags.COMMA, tags.COLON):
            return oscarcm
        return None
