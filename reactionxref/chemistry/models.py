"""
Type definitions for chemicals and reactions.

Defines the records produced per textual mention and the reactions that the
downstream extraction step assembles from them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class EntityType(Enum):
    """Semantic role of a chemical mention."""
    EXACT = "exact"
    CHEMICAL_CLASS = "chemicalClass"
    FRAGMENT = "fragment"
    DEFINITE_REFERENCE = "definiteReference"
    FALSE_POSITIVE = "falsePositive"


@dataclass(frozen=True)
class ChemicalIdentifierPair:
    """
    Structure identifiers of a chemical.

    A pair with neither SMILES nor InChI is the "known empty" pair: the
    chemical is intentionally left unresolved (e.g. a functional class).
    """
    smiles: Optional[str] = None
    inchi: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.smiles is None and self.inchi is None


KNOWN_EMPTY_PAIR = ChemicalIdentifierPair(None, None)


class EntityTypeAlreadyAssigned(ValueError):
    """Raised when a second entity type is assigned to a chemical."""


@dataclass
class Chemical:
    """
    A chemical as mentioned in the text.

    Attributes:
        name: Name as extracted from the text
        chemical_identifier_pair: SMILES/InChI pair, KNOWN_EMPTY_PAIR, or None if unknown
        smarts: SMARTS pattern when the name is a known functional group/class
    """
    name: str
    chemical_identifier_pair: Optional[ChemicalIdentifierPair] = None
    smarts: Optional[str] = None
    _entity_type: Optional[EntityType] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        if self.name is None:
            raise ValueError("Chemical name must not be None")

    @property
    def entity_type(self) -> Optional[EntityType]:
        return self._entity_type

    @entity_type.setter
    def entity_type(self, value: EntityType) -> None:
        if self._entity_type is not None:
            raise EntityTypeAlreadyAssigned(
                f"Entity type of '{self.name}' already set to {self._entity_type.value}"
            )
        self._entity_type = value

    @property
    def smiles(self) -> Optional[str]:
        if self.chemical_identifier_pair is None:
            return None
        return self.chemical_identifier_pair.smiles

    @property
    def inchi(self) -> Optional[str]:
        if self.chemical_identifier_pair is None:
            return None
        return self.chemical_identifier_pair.inchi

    def has_inchi(self) -> bool:
        return self.inchi is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging and reporting."""
        return {
            "name": self.name,
            "smiles": self.smiles,
            "inchi": self.inchi,
            "smarts": self.smarts,
            "entity_type": self._entity_type.value if self._entity_type else None,
        }


@dataclass
class ChemicalAliasPair:
    """A target chemical together with the label the text uses for it (e.g. "3a")."""
    chemical: Chemical
    alias: Optional[str] = None


@dataclass
class Reaction:
    """Reactants, products and spectators of one extracted reaction."""
    reactants: List[Chemical] = field(default_factory=list)
    products: List[Chemical] = field(default_factory=list)
    spectators: List[Chemical] = field(default_factory=list)

    def add_reactant(self, chemical: Chemical) -> None:
        self.reactants.append(chemical)

    def add_product(self, chemical: Chemical) -> None:
        self.products.append(chemical)

    def add_spectator(self, chemical: Chemical) -> None:
        self.spectators.append(chemical)


def get_product_inchis(reactions: Iterable[Reaction]) -> List[str]:
    """InChIs of every product of the given reactions, skipping products without one."""
    return [product.inchi for reaction in reactions for product in reaction.products
            if product.inchi is not None]
