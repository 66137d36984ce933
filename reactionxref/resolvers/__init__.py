"""Name-to-structure resolvers."""
from .base import NameResolver, join_name
from .base_api import APIError, BaseAPIClient, RateLimitExceeded
from .dictionary import DictionaryNameResolver
from .pubchem import PubChemNameResolver

__all__ = [
    # Resolvers
    "NameResolver",
    "DictionaryNameResolver",
    "PubChemNameResolver",
    "BaseAPIClient",
    # Exceptions
    "APIError",
    "RateLimitExceeded",
    # Helpers
    "join_name",
]
