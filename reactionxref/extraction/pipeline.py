"""
Document-level extraction.

Parses the experimental sections of one document in order, sharing a single
PreviousReactionData between them so that later sections can refer to the
aliases and products of earlier ones.
"""

from typing import Iterable, List, Optional

from loguru import logger

from reactionxref.chemistry.functional_groups import FunctionalGroupDictionary
from reactionxref.chemistry.models import Reaction
from reactionxref.extraction.identifiers import SectionAndStepIdentifierParser
from reactionxref.extraction.section_parser import ExperimentalSectionParser
from reactionxref.extraction.state import PreviousReactionData
from reactionxref.extraction.types import ExperimentalSection, ReactionExtractor
from reactionxref.resolvers.base import NameResolver
from reactionxref.resolvers.dictionary import DictionaryNameResolver
from reactionxref.resolvers.pubchem import PubChemNameResolver
from reactionxref.utils.config_manager import ConfigManager
from reactionxref.utils.logging_setup import setup_logging


class DocumentReactionExtractor:
    """
    Extracts reactions from the experimental sections of documents.

    The collaborators are shared across documents; the cross-section state
    is created afresh for each call to extract().
    """

    def __init__(self,
                 reaction_extractor: ReactionExtractor,
                 name_resolver: NameResolver,
                 functional_groups: Optional[FunctionalGroupDictionary] = None,
                 identifier_parser: Optional[SectionAndStepIdentifierParser] = None):
        self.reaction_extractor = reaction_extractor
        self.name_resolver = name_resolver
        if functional_groups is None:
            functional_groups = FunctionalGroupDictionary.from_yaml()
        self.functional_groups = functional_groups
        self.identifier_parser = identifier_parser if identifier_parser is not None else SectionAndStepIdentifierParser()
        self.last_document_state: Optional[PreviousReactionData] = None

    def extract(self, sections: Iterable[ExperimentalSection]) -> List[Reaction]:
        """
        Extract the reactions of one document.

        Args:
            sections: The document's experimental sections, in document order

        Returns:
            All reactions, in section and step order
        """
        previous_reaction_data = PreviousReactionData()
        self.last_document_state = previous_reaction_data

        reactions: List[Reaction] = []
        for section_number, section in enumerate(sections, start=1):
            parser = ExperimentalSectionParser(
                section,
                previous_reaction_data,
                self.reaction_extractor,
                self.name_resolver,
                functional_groups=self.functional_groups,
                identifier_parser=self.identifier_parser,
            )
            section_reactions = parser.parse_for_reactions()
            logger.debug(f"Section {section_number}: {len(section_reactions)} reaction(s)")
            reactions.extend(section_reactions)

        logger.info(f"Extracted {len(reactions)} reaction(s) from document")
        return reactions


def build_name_resolver(config: ConfigManager) -> NameResolver:
    """Create the name resolver selected by name_resolver.backend."""
    settings = config.get_resolver_settings()
    backend = settings.get('backend', 'dictionary')
    if backend == 'pubchem':
        return PubChemNameResolver(
            cache_dir=config.resolve_path(settings['cache_dir']) if settings.get('cache_dir') else None,
            timeout=settings.get('timeout', 15),
            cache_expire_after=settings.get('cache_expire_after', 86400),
        )
    if backend == 'dictionary':
        dictionary_path = settings.get('dictionary_path')
        if dictionary_path:
            return DictionaryNameResolver.from_yaml(config.resolve_path(dictionary_path))
        logger.warning("No name dictionary configured; names will not resolve to structures")
        return DictionaryNameResolver()
    raise ValueError(f"Unknown name resolver backend: {backend}")


def build_extractor(
    reaction_extractor: ReactionExtractor,
    config: Optional[ConfigManager] = None,
    name_resolver: Optional[NameResolver] = None,
    configure_logging: bool = False,
) -> DocumentReactionExtractor:
    """
    Build a DocumentReactionExtractor with all collaborators wired from config.

    Args:
        reaction_extractor: Downstream reaction builder
        config: Configuration (config/extraction_config.yaml if None)
        name_resolver: Overrides the configured resolver
        configure_logging: Install log sinks from the logging section

    Returns:
        Fully-wired DocumentReactionExtractor instance
    """
    config = config or ConfigManager.from_default_path()
    if configure_logging:
        log_file = config.get('logging', 'log_file')
        setup_logging(config.get('logging', 'level'), config.resolve_path(log_file) if log_file else None)
    if name_resolver is None:
        name_resolver = build_name_resolver(config)
    return DocumentReactionExtractor(
        reaction_extractor,
        name_resolver,
        functional_groups=FunctionalGroupDictionary.from_yaml(config.get_functional_groups_path()),
        identifier_parser=SectionAndStepIdentifierParser(config.get_step_synonyms()),
    )
