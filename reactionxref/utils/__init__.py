"""Configuration and logging utilities."""
from .config_manager import ConfigManager
from .logging_setup import setup_logging

__all__ = ['ConfigManager', 'setup_logging']
