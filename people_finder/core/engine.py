"""Query engine ranking indexed records against a fuzzy query."""

import sys
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from ..models.response import MatchSpan
from .fuzzy_matcher import FuzzyMatcher
from .index import IndexedRecord, RecordIndex
from .normalizer import TextNormalizer

EPSILON = sys.float_info.epsilon


@dataclass(frozen=True)
class MatchResult:
    """A record that matched a query, with its aggregate score and spans."""

    record: Any
    position: int
    score: float
    matches: Tuple[MatchSpan, ...]


class SearchEngine:
    """
    Stateless fuzzy search over a RecordIndex.
    
    Every indexed value is matched independently. A record's aggregate
    score is the product of ``score ** (weight * norm)`` over all of its
    matching values, so a record matching in several heavily weighted short
    fields ranks first. The engine keeps no state between calls and can be
    shared freely.
    """
    
    def __init__(self, threshold: float = 0.35, min_match_length: int = 2) -> None:
        """
        Initialize the search engine.
        
        Args:
            threshold: Maximum accepted per-value score
            min_match_length: Minimum run of matched characters for a hit
        """
        self.threshold = threshold
        self.min_match_length = min_match_length
        self.fuzzy_matcher = FuzzyMatcher(threshold, min_match_length)
        self.normalizer = TextNormalizer()
    
    def search(self, index: RecordIndex, query: str) -> List[MatchResult]:
        """
        Search the index for records approximately matching a query.
        
        Args:
            index: Index built from the current collection snapshot
            query: Raw query text
            
        Returns:
            Matches sorted by ascending score, ties in collection order.
            Empty for a blank query.
        """
        normalized_query = self.normalizer.normalize_query(query)
        if not normalized_query:
            return []
        
        results = []
        for entry in index.entries:
            result = self._match_record(entry, normalized_query)
            if result is not None:
                results.append(result)
        
        results.sort(key=lambda r: (r.score, r.position))
        return results
    
    def _match_record(self, entry: IndexedRecord, query: str) -> Optional[MatchResult]:
        """
        Match every indexed value of one record.
        
        Args:
            entry: Indexed record
            query: Normalized query
            
        Returns:
            MatchResult, or None when no value matched
        """
        total_score = 1.0
        spans = []
        
        for indexed_field in entry.fields:
            for value in indexed_field.values:
                match = self.fuzzy_matcher.match(query, value.normalized)
                if match is None:
                    continue
                
                base = EPSILON if match.score == 0 else match.score
                total_score *= base ** (indexed_field.weight * value.norm)
                spans.append(
                    MatchSpan(
                        field=indexed_field.name,
                        array_index=value.array_index,
                        ranges=match.ranges,
                    )
                )
        
        if not spans:
            return None
        
        return MatchResult(
            record=entry.record,
            position=entry.position,
            score=total_score,
            matches=tuple(spans),
        )
