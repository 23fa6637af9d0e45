"""Unit tests for the fuzzy matcher functionality."""

import pytest
from people_finder.core.fuzzy_matcher import FuzzyMatcher, MIN_INEXACT_SCORE


class TestFuzzyMatcher:
    """Test cases for the FuzzyMatcher class."""
    
    @pytest.fixture
    def matcher(self):
        """Create a fuzzy matcher instance for testing."""
        return FuzzyMatcher(threshold=0.35, min_match_length=2)
    
    def test_matcher_initialization(self, matcher):
        """Test fuzzy matcher initialization."""
        assert matcher.threshold == 0.35
        assert matcher.min_match_length == 2
    
    def test_exact_match(self, matcher):
        """Identical text scores 0 and is fully covered."""
        result = matcher.match("gym", "gym")
        
        assert result is not None
        assert result.score == 0.0
        assert result.ranges == ((0, 2),)
    
    def test_exact_substring_anywhere(self, matcher):
        """A literal occurrence deep inside the text is found."""
        result = matcher.match("park", "alice park")
        
        assert result is not None
        assert result.score == MIN_INEXACT_SCORE
        assert result.ranges == ((6, 9),)
    
    def test_missing_character(self, matcher):
        """A query missing one character still matches."""
        text = "met at a conference"
        result = matcher.match("confrence", text)
        
        assert result is not None
        assert 0.0 < result.score <= 0.35
        # Everything but the skipped "e" of "conference", through the last letter
        assert result.ranges == ((9, 12), (14, 18))

    def test_missing_character_whole_value(self, matcher):
        """The final character of the value is highlighted too."""
        result = matcher.match("confrence", "conference")

        assert result is not None
        assert result.ranges == ((0, 3), (5, 9))

    def test_transposed_characters(self, matcher):
        """Swapped characters still match and keep the common prefix."""
        result = matcher.match("alcie", "alice")
        
        assert result is not None
        assert result.score <= 0.35
        assert result.ranges[0][0] == 0
    
    def test_no_match_below_threshold(self, matcher):
        """Unrelated text is rejected."""
        assert matcher.match("xyz", "alice park") is None
    
    def test_custom_threshold(self):
        """A stricter threshold rejects near misses."""
        strict = FuzzyMatcher(threshold=0.05)
        loose = FuzzyMatcher(threshold=0.35)
        
        assert strict.match("confrence", "conference") is None
        assert loose.match("confrence", "conference") is not None
    
    def test_single_character_query_never_matches(self, matcher):
        """Runs shorter than the minimum match length do not count."""
        assert matcher.match("a", "alice") is None
        assert matcher.match("a", "a") is None
    
    def test_text_shorter_than_query(self, matcher):
        """A short value contained in a long query is not a match."""
        assert matcher.match("gymnasium", "gym") is None
    
    def test_empty_inputs(self, matcher):
        """Test handling of empty query or text."""
        assert matcher.match("", "alice") is None
        assert matcher.match("alice", "") is None
    
    def test_matched_ranges_offset(self, matcher):
        """Ranges are shifted by the window offset."""
        assert matcher.matched_ranges("abc", "abc", offset=5) == ((5, 7),)
    
    def test_matched_ranges_drop_short_runs(self, matcher):
        """Single matched characters are dropped."""
        assert matcher.matched_ranges("axc", "abc") == ()
    
    def test_score_range(self, matcher):
        """Scores stay within [0, threshold]."""
        for query, text in [("ann", "anna bell"), ("seatle", "seattle"), ("bob", "bob")]:
            result = matcher.match(query, text)
            assert result is not None
            assert 0.0 <= result.score <= matcher.threshold
    
    def test_ranges_are_increasing_and_disjoint(self, matcher):
        """Ranges never overlap or go backwards."""
        result = matcher.match("conferense", "met someone at the conference hall")
        
        assert result is not None
        previous_end = -1
        for start, end in result.ranges:
            assert start > previous_end
            assert end >= start
            previous_end = end
