"""
Runtime Value Object

Immutable representation of a movie's running time with formatting and
classification.
"""

from dataclasses import dataclass
from enum import Enum

from constants import MovieLimits


class LengthCategory(str, Enum):
    """
    Length label derived from the running time.

    Never persisted: computed from duration_minutes on every read.
    """

    SHORT = "SHORT"
    FEATURE = "FEATURE"
    EPIC = "EPIC"

    @classmethod
    def for_minutes(cls, minutes: int) -> "LengthCategory":
        """Classify a running time in minutes."""
        if minutes < SHORT_FILM_LIMIT:
            return cls.SHORT
        if minutes > FEATURE_FILM_LIMIT:
            return cls.EPIC
        return cls.FEATURE


# Below this many minutes a movie counts as a short film
SHORT_FILM_LIMIT = 40
# Above this many minutes a feature becomes an epic
FEATURE_FILM_LIMIT = 150


@dataclass(frozen=True)
class Runtime:
    """
    Immutable running time value object.

    Provides human-readable formatting and validation.
    """

    minutes: int

    def __post_init__(self):
        """Validate running time."""
        if not MovieLimits.DURATION_MIN_MINUTES <= self.minutes <= MovieLimits.DURATION_MAX_MINUTES:
            raise ValueError(
                f"Running time must be between {MovieLimits.DURATION_MIN_MINUTES} and "
                f"{MovieLimits.DURATION_MAX_MINUTES} minutes: {self.minutes}"
            )

    def to_human_readable(self) -> str:
        """
        Format running time in human-readable format.

        Returns:
            String like "2h 05m" or "45m"
        """
        hours, minutes = divmod(self.minutes, 60)
        if hours == 0:
            return f"{minutes}m"
        return f"{hours}h {minutes:02d}m"

    @property
    def category(self) -> LengthCategory:
        """Length category for this running time."""
        return LengthCategory.for_minutes(self.minutes)
