"""
Experimental section parsing.

Walks the steps of one experimental section in order. For every mention in a
step the chemical is created, typed, resolved against earlier mentions and
procedures, and allowed to define aliases; the step's reactions are then
extracted and filed so that later steps can refer to them.
"""

from typing import Dict, List, Optional

from loguru import logger
from lxml import etree

from reactionxref.chemistry.functional_groups import FunctionalGroupDictionary
from reactionxref.chemistry.models import KNOWN_EMPTY_PAIR, Chemical, Reaction
from reactionxref.extraction.classifier import EntityTypeClassifier
from reactionxref.extraction.identifiers import SectionAndStepIdentifierParser
from reactionxref.extraction.names import find_molecule_name
from reactionxref.extraction.resolver import ReferenceResolver
from reactionxref.extraction.state import PreviousReactionData
from reactionxref.extraction.types import (
    ExperimentalSection,
    ExperimentalStep,
    MissingProcedureError,
    Paragraph,
    ReactionExtractor,
)
from reactionxref.resolvers.base import NameResolver
from reactionxref.tagging import tags
from reactionxref.tagging.tree import descendants_with_tags, to_xml


class ExperimentalSectionParser:
    """
    Extracts the reactions of one experimental section.

    Args:
        experimental_section: Section to parse
        previous_reaction_data: State of the document the section belongs to
        reaction_extractor: Builds reactions from a step's typed and resolved chemicals
        name_resolver: Name-to-structure resolver
        functional_groups: Functional group dictionary (loaded from config/ if None)
        identifier_parser: Section/step identifier parser (default lexicon if None)
    """

    def __init__(self,
                 experimental_section: ExperimentalSection,
                 previous_reaction_data: PreviousReactionData,
                 reaction_extractor: ReactionExtractor,
                 name_resolver: NameResolver,
                 functional_groups: Optional[FunctionalGroupDictionary] = None,
                 identifier_parser: Optional[SectionAndStepIdentifierParser] = None):
        if (experimental_section is None or previous_reaction_data is None
                or reaction_extractor is None or name_resolver is None):
            raise ValueError("Null input parameter")
        self.experimental_section = experimental_section
        self.previous_reaction_data = previous_reaction_data
        self.reaction_extractor = reaction_extractor
        self.name_resolver = name_resolver
        if functional_groups is None:
            functional_groups = FunctionalGroupDictionary.from_yaml()
        self.functional_groups = functional_groups
        self.identifier_parser = identifier_parser if identifier_parser is not None else SectionAndStepIdentifierParser()
        self.classifier = EntityTypeClassifier(self.functional_groups, name_resolver)
        self.resolver = ReferenceResolver(previous_reaction_data, self.identifier_parser, name_resolver)
        self.mention_to_chemical: Dict[etree._Element, Chemical] = {}

    def parse_for_reactions(self) -> List[Reaction]:
        """
        Find all the reactions in this section.

        Returns:
            Reactions of every step, in step order

        Raises:
            MissingProcedureError: if the section has no procedure span
        """
        section = self.experimental_section
        if section.procedure_element is None:
            raise MissingProcedureError("procedure element should never be None after section creation")

        section_reactions: List[Reaction] = []
        ultimate_target_compound = None
        if section.target_chemical_alias_pair is not None:
            ultimate_target_compound = section.target_chemical_alias_pair.chemical
            if section.target_chemical_alias_pair.alias is not None:
                self.previous_reaction_data.register_alias(
                    section.target_chemical_alias_pair.alias, ultimate_target_compound
                )

        steps = section.steps
        for i, step in enumerate(steps):
            current_step_target_compound = None
            if step.target_chemical_alias_pair is not None:
                current_step_target_compound = step.target_chemical_alias_pair.chemical
                if step.target_chemical_alias_pair.alias is not None:
                    self.previous_reaction_data.register_alias(
                        step.target_chemical_alias_pair.alias, current_step_target_compound
                    )
            elif i == len(steps) - 1:
                # last step can be implicitly the ultimate target compound
                current_step_target_compound = ultimate_target_compound

            title_compound = current_step_target_compound or ultimate_target_compound

            self.process_mentions(step.paragraphs)
            reactions = self.reaction_extractor(
                step, self.mention_to_chemical, current_step_target_compound, title_compound
            )
            section_reactions.extend(reactions)
            self.record_reactions(reactions, step)

        return section_reactions

    @property
    def section_identifier(self) -> Optional[str]:
        return self.identifier_parser.get_section_identifier(self.experimental_section.procedure_element)

    def process_mentions(self, paragraphs: List[Paragraph]) -> None:
        """
        Create, type and resolve a chemical for every mention in the paragraphs.

        Molecules are typed before resolution and may define aliases.
        Unnamed molecules are resolved before they are typed, since their
        type depends on whether a structure was found.
        """
        section_identifier = self.section_identifier
        for paragraph in paragraphs:
            root = paragraph.tagged_document
            for molecule in descendants_with_tags(root, [tags.MOLECULE]):
                chemical = self.generate_chemical_from_mention(molecule)
                self.mention_to_chemical[molecule] = chemical
                self.classifier.assign_entity_type(molecule, chemical)
                self.resolver.attempt_to_resolve_anaphora(molecule, chemical, section_identifier)
                self.previous_reaction_data.register_aliases(
                    self.resolver.find_alias_definitions(molecule, chemical)
                )

            for unnamed_molecule in descendants_with_tags(root, [tags.UNNAMED_MOLECULE]):
                chemical = self.generate_chemical_from_mention(unnamed_molecule)
                self.mention_to_chemical[unnamed_molecule] = chemical
                self.resolver.attempt_to_resolve_anaphora(unnamed_molecule, chemical, section_identifier)
                self.classifier.assign_entity_type(unnamed_molecule, chemical)

    def generate_chemical_from_mention(self, mention: etree._Element) -> Chemical:
        """
        Build the chemical for a mention from its name and local information.

        A name that is a known alias takes the aliased structure; a name that
        is a functional class is given the known-empty identifier pair.
        """
        chemical = self.name_resolver.create_chemical_from_name(find_molecule_name(mention))
        name = chemical.name
        referenced_chemical = self.previous_reaction_data.get_chemical_by_alias(name)
        if referenced_chemical is not None:
            chemical.chemical_identifier_pair = referenced_chemical.chemical_identifier_pair

        smarts = self.functional_groups.get_smarts(name)
        chemical.smarts = smarts
        if smarts is not None and self.functional_groups.get_functional_class_smarts(name) is not None:
            chemical.chemical_identifier_pair = KNOWN_EMPTY_PAIR
        return chemical

    def record_reactions(self, reactions: List[Reaction], step: ExperimentalStep) -> bool:
        """
        File the step's reactions under the section and step identifiers.

        Returns:
            True if filed; False if the identifiers could not be read, in
            which case the reactions stay invisible to later references
        """
        procedure_el = self.experimental_section.procedure_element
        if procedure_el is None:
            raise MissingProcedureError("procedure element should never be None after section creation")

        section_identifier = self.identifier_parser.get_section_identifier(procedure_el)
        if section_identifier is None:
            logger.debug(f"{to_xml(procedure_el)} was not understood as section identifier")
            return False

        step_identifier = None
        if step.procedure_element is not None:
            step_identifier = self.identifier_parser.get_step_identifier(step.procedure_element, section_identifier)
            if step_identifier is None:
                logger.debug(f"{to_xml(step.procedure_element)} was not understood as step identifier")
                return False

        self.previous_reaction_data.add_reactions(reactions, section_identifier, step_identifier)
        return True
