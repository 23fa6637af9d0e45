"""Text normalization utilities for case-insensitive matching."""

import math
import re
from typing import List


class TextNormalizer:
    """
    Normalizes field text and queries for comparison.
    
    Normalization never changes the length of the text: character offsets
    found in the normalized form are valid offsets into the original, which
    is what the highlight spans rely on.
    """
    
    def __init__(self) -> None:
        """Initialize the normalizer."""
        self.token_regex = re.compile(r'[^ ]+')
        
    def normalize(self, text: str) -> str:
        """
        Lower-case text one character at a time.
        
        Args:
            text: Input text to normalize
            
        Returns:
            Normalized text of the same length as the input
        """
        if not text:
            return ""
        
        # Characters whose lower-case form has another length (e.g. 'İ') stay as is
        return "".join(
            lowered if len(lowered) == 1 else char
            for char, lowered in ((c, c.lower()) for c in text)
        )
    
    def normalize_query(self, query: str) -> str:
        """Strip surrounding whitespace and normalize a query."""
        if not query:
            return ""
        return self.normalize(query.strip())
    
    def tokenize(self, text: str) -> List[str]:
        """
        Split text into space-separated tokens.
        
        Args:
            text: Input text
            
        Returns:
            List of tokens
        """
        if not text:
            return []
        return self.token_regex.findall(text)
    
    def field_norm(self, text: str) -> float:
        """
        Weight that favours matches in short fields.
        
        A value made of ``n`` tokens gets ``1 / sqrt(n)``, rounded to three
        decimals; a value without tokens gets 1.0.
        """
        num_tokens = len(self.tokenize(text))
        if num_tokens == 0:
            return 1.0
        return round(1 / math.sqrt(num_tokens), 3)
