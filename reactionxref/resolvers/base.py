"""
Name-to-structure resolver interface.

Resolvers turn the name tokens of a chemical mention into SMILES and InChI.
They are pure lookups: an unresolvable or malformed name yields None rather
than an exception.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from reactionxref.chemistry.models import Chemical, ChemicalIdentifierPair


def join_name(name_components: Sequence[str]) -> str:
    """Join name tokens into the name string used for lookups and aliases."""
    return " ".join(c for c in name_components if c)


class NameResolver(ABC):
    """Abstract base class for name-to-structure resolvers."""

    @abstractmethod
    def resolve_name_to_smiles(self, name_components: Sequence[str]) -> Optional[str]:
        """
        Resolve name tokens to a SMILES string.

        Args:
            name_components: Tokens making up the chemical name

        Returns:
            SMILES, or None if the name cannot be resolved
        """

    @abstractmethod
    def resolve_name_to_inchi(self, name_components: Sequence[str]) -> Optional[str]:
        """
        Resolve name tokens to a standard InChI.

        Args:
            name_components: Tokens making up the chemical name

        Returns:
            InChI, or None if the name cannot be resolved
        """

    def find_systematic_names(self, text: str) -> List[str]:
        """
        Find the parts of free text that this resolver can interpret as names.

        The whole text is tried first, then each whitespace-separated word.
        """
        if not text or not text.strip():
            return []
        if self.resolve_name_to_smiles([text.strip()]) is not None:
            return [text.strip()]
        words = text.split()
        if len(words) < 2:
            return []
        return [word for word in words if self.resolve_name_to_smiles([word]) is not None]

    def create_chemical_from_name(self, name_components: Sequence[str]) -> Chemical:
        """Build a Chemical for the given name, with structure if resolvable."""
        chemical = Chemical(join_name(name_components))
        smiles = self.resolve_name_to_smiles(name_components)
        inchi = self.resolve_name_to_inchi(name_components)
        if smiles is not None or inchi is not None:
            chemical.chemical_identifier_pair = ChemicalIdentifierPair(smiles, inchi)
        return chemical
