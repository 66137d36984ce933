"""
PubChem-backed name resolver.

Queries PubChem's PUG REST API for the SMILES and InChI of a chemical name.
Every lookup (hit or miss) is memoised for the lifetime of the resolver and
HTTP responses are cached on disk, so repeated mentions of the same name in a
document cost one request at most.

Rate-limited to respect PubChem's 5 req/sec guideline.
"""

import urllib.parse
from pathlib import Path
from typing import Dict, Optional, Sequence

from loguru import logger

from reactionxref.chemistry.models import ChemicalIdentifierPair
from reactionxref.resolvers.base import NameResolver, join_name
from reactionxref.resolvers.base_api import APIError, BaseAPIClient

# Names longer than this are not sent to PubChem
MAX_NAME_LENGTH = 300


class PubChemNameResolver(BaseAPIClient, NameResolver):
    """
    Resolve chemical names through PubChem.

    Network and HTTP failures are logged and reported as "unresolvable"
    (None); they never propagate to the extraction pipeline.
    """

    BASE_URL = "https://pubchem.ncbi.nlm.nih.gov/rest/pug"

    def __init__(self, cache_dir: Optional[Path] = None, timeout: int = 15, **kwargs):
        super().__init__(cache_dir=cache_dir, timeout=timeout, **kwargs)
        self._memo: Dict[str, Optional[ChemicalIdentifierPair]] = {}
        self.api_calls = 0

    def _lookup(self, name_components: Sequence[str]) -> Optional[ChemicalIdentifierPair]:
        if not name_components:
            return None
        name = join_name(name_components).strip()
        if not name or len(name) > MAX_NAME_LENGTH:
            return None

        key = name.lower()
        if key in self._memo:
            return self._memo[key]

        try:
            pair = self._fetch_identifiers(name)
        except APIError as e:
            logger.warning(f"PubChem lookup failed for '{name}': {e}")
            return None

        self._memo[key] = pair
        return pair

    def _fetch_identifiers(self, name: str) -> Optional[ChemicalIdentifierPair]:
        """
        Fetch SMILES and InChI for a name.

        Returns:
            ChemicalIdentifierPair, or None if PubChem does not know the name
        """
        encoded = urllib.parse.quote(name, safe="")
        url = f"{self.BASE_URL}/compound/name/{encoded}/property/IsomericSMILES,InChI/JSON"

        response = self._make_request(url)
        self.api_calls += 1
        data = self._parse_json_response(response)
        if not data:
            logger.trace(f"PubChem: no compound named '{name}'")
            return None

        try:
            props = data["PropertyTable"]["Properties"][0]
        except (KeyError, IndexError, TypeError):
            logger.debug(f"PubChem: unexpected response shape for '{name}'")
            return None

        # PubChem now reports isomeric SMILES under "SMILES"
        smiles = props.get("SMILES") or props.get("IsomericSMILES") or props.get("CanonicalSMILES")
        inchi = props.get("InChI")
        if smiles is None and inchi is None:
            return None
        return ChemicalIdentifierPair(smiles, inchi)

    def resolve_name_to_smiles(self, name_components: Sequence[str]) -> Optional[str]:
        pair = self._lookup(name_components)
        return pair.smiles if pair else None

    def resolve_name_to_inchi(self, name_components: Sequence[str]) -> Optional[str]:
        pair = self._lookup(name_components)
        return pair.inchi if pair else None
