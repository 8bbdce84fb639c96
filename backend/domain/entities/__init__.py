"""
Domain Entities

Entities are business objects with identity and lifecycle.
Their identifier is assigned by storage and persists through their lifetime.

Examples:
- Movie entity: A catalogued movie
"""

from .movie import MUTABLE_FIELDS, Movie

__all__ = ["MUTABLE_FIELDS", "Movie"]
