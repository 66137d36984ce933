"""
Functional group and functional class dictionary.

Maps lower-cased names such as "hydroxy" or "ketones" to SMARTS patterns.
Functional classes ("alcohol", "amines") are kept in a separate table because
a mention of one denotes a class of compounds rather than a single structure.
"""

from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml
from loguru import logger

# Default dictionary path relative to project root
DEFAULT_DICTIONARY_PATH = Path(__file__).parent.parent.parent / "config" / "functional_groups.yaml"


class FunctionalGroupDictionary:
    """
    Read-only lookup of SMARTS patterns by chemical name.

    Lookups are exact matches on the lower-cased name.
    """

    def __init__(self,
                 functional_groups: Optional[Mapping[str, str]] = None,
                 functional_classes: Optional[Mapping[str, str]] = None):
        self._functional_groups: Dict[str, str] = {
            k.lower(): v for k, v in (functional_groups or {}).items()
        }
        self._functional_classes: Dict[str, str] = {
            k.lower(): v for k, v in (functional_classes or {}).items()
        }

    @classmethod
    def from_yaml(cls, path: Optional[Path] = None) -> "FunctionalGroupDictionary":
        """
        Load the dictionary from YAML.

        Expected layout::

            functional_groups:
              hydroxy: "[OX2H]"
            functional_classes:
              alcohol: "[#6][OX2H]"

        Args:
            path: YAML file (default: config/functional_groups.yaml)

        Returns:
            Loaded dictionary; empty if the file does not exist
        """
        path = Path(path) if path else DEFAULT_DICTIONARY_PATH
        if not path.exists():
            logger.warning(f"Functional group dictionary not found at {path}, using empty dictionary")
            return cls()

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        dictionary = cls(
            functional_groups=data.get("functional_groups") or {},
            functional_classes=data.get("functional_classes") or {},
        )
        logger.debug(
            f"Loaded {len(dictionary._functional_groups)} functional groups and "
            f"{len(dictionary._functional_classes)} functional classes from {path}"
        )
        return dictionary

    def get_smarts(self, name: str) -> Optional[str]:
        """SMARTS for a functional class or functional group name, or None."""
        if not name:
            return None
        name_lc = name.lower()
        smarts = self._functional_classes.get(name_lc)
        if smarts is None:
            smarts = self._functional_groups.get(name_lc)
        return smarts

    def get_functional_class_smarts(self, name: str) -> Optional[str]:
        """SMARTS only if the name is a functional class, else None."""
        if not name:
            return None
        return self._functional_classes.get(name.lower())

    def is_functional_class(self, name: str) -> bool:
        return self.get_functional_class_smarts(name) is not None

    def __len__(self) -> int:
        return len(self._functional_groups) + len(self._functional_classes)
