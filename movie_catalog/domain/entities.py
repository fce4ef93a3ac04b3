"""
Name: Domain Entities

Responsibilities:
  - Define the Movie entity and its rating classification
  - Provide type safety for the domain layer

Collaborators:
  - None (pure domain layer, no external dependencies)

Constraints:
  - No dependencies on infrastructure or frameworks
  - Rating is one of the five fixed classifications
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class MovieRating(str, Enum):
    """R: Fixed classification set for movies."""

    G = "G"
    PG = "PG"
    M = "M"
    MA = "MA"
    R = "R"


@dataclass(frozen=True)
class MovieDraft:
    """
    R: Validated movie fields, before the store assigns identity.

    Used for both create and full-replace update.
    """

    title: str
    rating: MovieRating
    release_date: date


@dataclass
class Movie:
    """
    R: A movie in the catalog.

    Attributes:
        id: Store-assigned identifier (positive integer)
        title: Non-empty title
        rating: One of MovieRating
        release_date: Calendar release date
        created_at: Creation timestamp (store-assigned)
        updated_at: Last modification timestamp (>= created_at)
    """

    id: int
    title: str
    rating: MovieRating
    release_date: date
    created_at: datetime
    updated_at: datetime
