"""
Dictionary-backed name resolver.

Resolves names against a fixed table of known structures. Used for curated
reagent lists and as the resolver in tests.
"""

from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence, Union

import yaml
from loguru import logger

from reactionxref.chemistry.models import ChemicalIdentifierPair
from reactionxref.resolvers.base import NameResolver, join_name


class DictionaryNameResolver(NameResolver):
    """
    Resolve names by case-insensitive exact lookup.

    Entries may be given as ChemicalIdentifierPair or as (smiles, inchi) tuples.
    """

    def __init__(self, entries: Optional[Mapping[str, Union[ChemicalIdentifierPair, tuple]]] = None):
        self._entries: Dict[str, ChemicalIdentifierPair] = {}
        for name, value in (entries or {}).items():
            self.add(name, value)

    @classmethod
    def from_yaml(cls, path: Path) -> "DictionaryNameResolver":
        """
        Load entries from a YAML mapping of name -> {smiles, inchi}.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        entries = {
            name: ChemicalIdentifierPair(value.get("smiles"), value.get("inchi"))
            for name, value in data.items()
        }
        logger.debug(f"Loaded {len(entries)} names from {path}")
        return cls(entries)

    def add(self, name: str, value: Union[ChemicalIdentifierPair, tuple]) -> None:
        if not isinstance(value, ChemicalIdentifierPair):
            value = ChemicalIdentifierPair(*value)
        self._entries[name.strip().lower()] = value

    def _lookup(self, name_components: Sequence[str]) -> Optional[ChemicalIdentifierPair]:
        if not name_components:
            return None
        name = join_name(name_components).strip().lower()
        if not name:
            return None
        return self._entries.get(name)

    def resolve_name_to_smiles(self, name_components: Sequence[str]) -> Optional[str]:
        pair = self._lookup(name_components)
        return pair.smiles if pair else None

    def resolve_name_to_inchi(self, name_components: Sequence[str]) -> Optional[str]:
        pair = self._lookup(name_components)
        return pair.inchi if pair else None

    def __len__(self) -> int:
        return len(self._entries)
