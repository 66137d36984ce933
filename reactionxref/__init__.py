"""
Reaction cross-reference engine - Source Package

Main modules:
- tagging: Tag vocabulary and read-only traversal of tagged sentence trees
- chemistry: Chemical/Reaction records and the functional-group dictionary
- resolvers: Name-to-structure resolvers (dictionary and PubChem backed)
- extraction: Entity typing, reference resolution and cross-section state
- utils: Configuration and logging setup
"""

__version__ = "1.0.0"
