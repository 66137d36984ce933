"""
Chemical and reaction records plus the functional-group dictionary.
"""

from .models import (
    KNOWN_EMPTY_PAIR,
    Chemical,
    ChemicalAliasPair,
    ChemicalIdentifierPair,
    EntityType,
    EntityTypeAlreadyAssigned,
    Reaction,
    get_product_inchis,
)
from .functional_groups import FunctionalGroupDictionary

__all__ = [
    'Chemical',
    'ChemicalAliasPair',
    'ChemicalIdentifierPair',
    'EntityType',
    'EntityTypeAlreadyAssigned',
    'KNOWN_EMPTY_PAIR',
    'Reaction',
    'get_product_inchis',
    'FunctionalGroupDictionary',
]
