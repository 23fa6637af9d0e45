"""Fuzzy matching of a query against field text, with matched character ranges."""

from typing import NamedTuple, Optional, Tuple

from rapidfuzz import fuzz
from rapidfuzz.distance import Indel

# Score floor for inexact matches, so only identical text scores 0
MIN_INEXACT_SCORE = 0.001


class FuzzyMatch(NamedTuple):
    """Outcome of matching a query against one text value."""

    score: float
    ranges: Tuple[Tuple[int, int], ...]


class FuzzyMatcher:
    """
    Location-insensitive approximate substring matcher.
    
    The query is aligned against the best window of the text (anywhere in
    it, with no penalty for distance from the start). The score is the
    normalized Indel distance between the query and that window: 0 for an
    identical value, up to 1 for nothing in common.
    """
    
    def __init__(self, threshold: float = 0.35, min_match_length: int = 2) -> None:
        """
        Initialize the fuzzy matcher.
        
        Args:
            threshold: Maximum accepted score (normalized edit distance)
            min_match_length: Shortest run of matched characters that counts
        """
        self.threshold = threshold
        self.min_match_length = min_match_length
        
    def match(self, query: str, text: str) -> Optional[FuzzyMatch]:
        """
        Match a normalized query against normalized text.
        
        Args:
            query: Normalized, non-blank query
            text: Normalized field value
            
        Returns:
            FuzzyMatch with score and inclusive ranges, or None if no match
        """
        if not query or not text:
            return None
        
        if query == text:
            score = 0.0
            window_start, window_end = 0, len(text)
        elif len(text) < len(query):
            # Text cannot contain the query, compare it as a whole
            score = self._score(fuzz.ratio(query, text))
            window_start, window_end = 0, len(text)
        else:
            alignment = fuzz.partial_ratio_alignment(query, text)
            score = self._score(alignment.score)
            window_start, window_end = self._widen(
                query, text, alignment.dest_start, alignment.dest_end
            )

        if score > self.threshold:
            return None
        
        ranges = self.matched_ranges(query, text[window_start:window_end], window_start)
        if not ranges:
            return None
        
        return FuzzyMatch(score=score, ranges=ranges)
    
    def matched_ranges(
        self, 
        query: str, 
        window: str, 
        offset: int = 0
    ) -> Tuple[Tuple[int, int], ...]:
        """
        Ranges of ``window`` that are kept unchanged when aligning ``query``.
        
        Touching runs are merged and runs shorter than the minimum match
        length are dropped.
        
        Args:
            query: Normalized query
            window: Aligned part of the normalized text
            offset: Position of the window in the full text
            
        Returns:
            Increasing, non-overlapping inclusive (start, end) ranges
        """
        ranges = []
        for opcode in Indel.opcodes(query, window):
            if opcode.tag != "equal":
                continue
            start = offset + opcode.dest_start
            end = offset + opcode.dest_end - 1
            if ranges and start == ranges[-1][1] + 1:
                ranges[-1] = (ranges[-1][0], end)
            else:
                ranges.append((start, end))
        
        return tuple(
            (start, end) for start, end in ranges
            if end - start + 1 >= self.min_match_length
        )
    
    @staticmethod
    def _widen(query: str, text: str, start: int, end: int) -> Tuple[int, int]:
        """
        Grow an aligned window by the number of query characters it misses.

        The alignment window is exactly as long as the query, so a query
        missing a character ends one short of the matched word.
        """
        window = text[start:end]
        matched = (len(query) + len(window) - Indel.distance(query, window)) // 2
        pad = len(query) - matched
        return max(0, start - pad), min(len(text), end + pad)

    @staticmethod
    def _score(similarity: float) -> float:
        """Turn a 0-100 similarity into a 0-1 score where lower is better."""
        return max(MIN_INEXACT_SCORE, 1.0 - similarity / 100.0)
