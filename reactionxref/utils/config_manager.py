"""
Configuration management for the extraction system.

Loads the YAML settings for the step-synonym lexicon, the functional-group
dictionary location, the name resolver backend and logging.
"""

import copy
import logging
from pathlib import Path
from typing import Any, List, Optional
import yaml

logger = logging.getLogger(__name__)

# Default config path relative to project root
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / 'config' / 'extraction_config.yaml'

VALID_RESOLVER_BACKENDS = ('dictionary', 'pubchem')


class ConfigManager:
    """
    Manages system configuration.

    Loaded YAML is merged section by section over DEFAULT_CONFIG so that
    every key exists even when the file only overrides a few.
    """

    DEFAULT_CONFIG = {
        'extraction': {
            # words that denote a step rather than a section ("step 2", "stage 2")
            'step_synonyms': ['step', 'steps', 'stage', 'stages', 'part', 'parts', 'phase'],
        },
        'functional_groups': {
            'path': None,
        },
        'name_resolver': {
            'backend': 'dictionary',
            'dictionary_path': None,
            'cache_dir': 'data/cache/name_resolution',
            'cache_expire_after': 86400,
            'timeout': 15,
        },
        'logging': {
            'level': 'INFO',
            'log_file': None,
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path = config_path
        self.config: dict[str, Any] = {}

        if config_path and config_path.exists():
            self.load_config(config_path)
        else:
            logger.info("No config file found, using defaults")
            self.config = copy.deepcopy(self.DEFAULT_CONFIG)

    @classmethod
    def from_default_path(cls) -> 'ConfigManager':
        return cls(DEFAULT_CONFIG_PATH)

    def load_config(self, path: Path) -> dict[str, Any]:
        """
        Read a YAML file and merge it over DEFAULT_CONFIG.

        An empty file yields the defaults. A missing file raises
        FileNotFoundError; malformed YAML is logged and re-raised.
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            loaded = yaml.safe_load(path.read_text(encoding='utf-8'))
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in {path}: {e}")
            raise

        if loaded:
            self.config = self._merge_with_defaults(loaded)
        else:
            logger.warning(f"{path} is empty, falling back to defaults")
            self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        self.config_path = path
        logger.info(f"Loaded configuration from {path}")
        return self.config

    def get(self, section: str, name: str) -> Any:
        """
        Get a parameter by section and name.

        Raises:
            KeyError: If parameter not found
        """
        if name not in self.config.get(section, {}):
            raise KeyError(f"Parameter '{section}.{name}' not found in configuration")
        return self.config[section][name]

    def set(self, section: str, name: str, value: Any) -> None:
        old_value = self.config.setdefault(section, {}).get(name)
        self.config[section][name] = value
        logger.info(f"Updated '{section}.{name}': {old_value} -> {value}")

    def get_step_synonyms(self) -> List[str]:
        return [s.lower() for s in self.get('extraction', 'step_synonyms')]

    def get_functional_groups_path(self) -> Optional[Path]:
        path = self.get('functional_groups', 'path')
        return self.resolve_path(path) if path else None

    def get_resolver_settings(self) -> dict[str, Any]:
        return copy.deepcopy(self.config['name_resolver'])

    def resolve_path(self, path: str) -> Path:
        """Relative paths are taken relative to the config file's project root."""
        p = Path(path)
        if p.is_absolute():
            return p
        base = self.config_path.parent.parent if self.config_path else DEFAULT_CONFIG_PATH.parent.parent
        return base / p

    def _merge_with_defaults(self, loaded_config: dict) -> dict:
        """Merge loaded config with defaults to ensure all keys exist."""
        merged = copy.deepcopy(self.DEFAULT_CONFIG)

        for section, values in loaded_config.items():
            if section in merged and isinstance(values, dict):
                merged[section].update(values)
            else:
                merged[section] = values

        return merged

    def validate_config(self) -> list[str]:
        """
        Validate the current configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        synonyms = self.config.get('extraction', {}).get('step_synonyms')
        if not isinstance(synonyms, list) or not all(isinstance(s, str) for s in synonyms):
            errors.append("extraction.step_synonyms must be a list of strings")

        resolver = self.config.get('name_resolver', {})
        backend = resolver.get('backend')
        if backend not in VALID_RESOLVER_BACKENDS:
            errors.append(f"name_resolver.backend must be one of {VALID_RESOLVER_BACKENDS}, got {backend!r}")

        timeout = resolver.get('timeout')
        if not isinstance(timeout, (int, float)) or timeout <= 0:
            errors.append("name_resolver.timeout must be a positive number")

        level = self.config.get('logging', {}).get('level')
        if level not in ('TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL'):
            errors.append(f"logging.level is not a valid level: {level!r}")

        return errors
