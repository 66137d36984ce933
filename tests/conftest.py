"""
Pytest configuration and shared fixtures for extraction tests.

Provides:
- Dictionary name resolver with sample structures
- Functional group dictionary from config/
- Classifier, identifier parser, resolver and fresh per-test document state
"""

import pytest
from pathlib import Path

from reactionxref.chemistry.functional_groups import FunctionalGroupDictionary
from reactionxref.extraction.classifier import EntityTypeClassifier
from reactionxref.extraction.identifiers import SectionAndStepIdentifierParser
from reactionxref.extraction.resolver import ReferenceResolver
from reactionxref.extraction.state import PreviousReactionData
from reactionxref.resolvers.dictionary import DictionaryNameResolver
from tests.fixtures.tagged_documents import KNOWN_NAMES, RecordingReactionExtractor

PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"


@pytest.fixture
def name_resolver() -> DictionaryNameResolver:
    """Resolver knowing benzene, toluene, ethanol, nitrobenzene and aniline."""
    return DictionaryNameResolver(KNOWN_NAMES)


@pytest.fixture(scope="session")
def functional_groups() -> FunctionalGroupDictionary:
    return FunctionalGroupDictionary.from_yaml(CONFIG_DIR / "functional_groups.yaml")


@pytest.fixture
def classifier(functional_groups, name_resolver) -> EntityTypeClassifier:
    return EntityTypeClassifier(functional_groups, name_resolver)


@pytest.fixture
def identifier_parser() -> SectionAndStepIdentifierParser:
    return SectionAndStepIdentifierParser()


@pytest.fixture
def state() -> PreviousReactionData:
    """Fresh document state for each test."""
    return PreviousReactionData()


@pytest.fixture
def resolver(state, identifier_parser, name_resolver) -> ReferenceResolver:
    return ReferenceResolver(state, identifier_parser, name_resolver)


@pytest.fixture
def reaction_extractor() -> RecordingReactionExtractor:
    return RecordingReactionExtractor()
