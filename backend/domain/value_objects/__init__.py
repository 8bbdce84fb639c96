"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

Examples:
- Runtime: Running time with formatting and length classification
"""

from .runtime import LengthCategory, Runtime

__all__ = ["LengthCategory", "Runtime"]
