"""
People Finder - fuzzy search over a personal collection of people.

This package keeps a small collection of people met (notes, where and when
they were met, tags) and finds them by approximate text match, returning
ranked results with character-level highlight segments.
"""

__version__ = "1.0.0"

from .core.directory import PeopleDirectory
from .core.engine import SearchEngine
from .models.record import Record
from .models.response import SearchHit, SearchResponse

__all__ = [
    "PeopleDirectory",
    "SearchEngine",
    "Record",
    "SearchHit",
    "SearchResponse",
]
