"""
Extraction core: entity typing and cross-reference resolution.

For each experimental section, step by step, every chemical mention is:
- typed by the EntityTypeClassifier (exact, class, fragment, reference, false positive)
- resolved by the ReferenceResolver against aliases and earlier procedures
- allowed to define aliases for later mentions

Each step's reactions are then filed in the document's PreviousReactionData
under the section/step identifiers read by SectionAndStepIdentifierParser.
"""

from .classifier import EntityTypeClassifier
from .identifiers import SectionAndStepIdentifierParser
from .pipeline import DocumentReactionExtractor, build_extractor, build_name_resolver
from .resolver import ReferenceResolver, get_identifier_from_reference, has_shorter_inchi
from .section_parser import ExperimentalSectionParser
from .state import PreviousReactionData
from .types import (
    AnaphoraResolution,
    ExperimentalSection,
    ExperimentalStep,
    MissingProcedureError,
    Paragraph,
    ReactionExtractor,
    ReactionXrefError,
    ResolutionOutcome,
    SectionAndStepIdentifier,
)

__all__ = [
    "EntityTypeClassifier",
    "SectionAndStepIdentifierParser",
    "ReferenceResolver",
    "get_identifier_from_reference",
    "has_shorter_inchi",
    "ExperimentalSectionParser",
    "PreviousReactionData",
    "DocumentReactionExtractor",
    "build_extractor",
    "build_name_resolver",
    "AnaphoraResolution",
    "ExperimentalSection",
    "ExperimentalStep",
    "Paragraph",
    "ReactionExtractor",
    "ResolutionOutcome",
    "SectionAndStepIdentifier",
    "ReactionXrefError",
    "MissingProcedureError",
]
