"""Core fuzzy search functionality."""

from .directory import PeopleDirectory
from .engine import MatchResult, SearchEngine
from .fuzzy_matcher import FuzzyMatch, FuzzyMatcher
from .highlight import highlight_record, project
from .index import DEFAULT_FIELDS, RecordIndex, SearchableField, build_index
from .normalizer import TextNormalizer

__all__ = [
    "PeopleDirectory",
    "MatchResult",
    "SearchEngine",
    "FuzzyMatch",
    "FuzzyMatcher",
    "highlight_record",
    "project",
    "DEFAULT_FIELDS",
    "RecordIndex",
    "SearchableField",
    "build_index",
    "TextNormalizer",
]
