"""
Text Utilities - Single Source of Truth
=======================================

Normalization and edit-distance helpers shared by every comparison in the
package. All functions are pure and total.
"""

import re
import logging
from typing import List

logger = logging.getLogger(__name__)


# =============================================================================
# NORMALIZATION
# =============================================================================

# Pre-compiled patterns for performance
_NON_WORD_PATTERN = re.compile(r'[^\w\s]')
_WHITESPACE_PATTERN = re.compile(r'\s+')


def normalize(text: str) -> str:
    """
    Canonicalize raw label text for comparison.
    
    Lowercases, replaces every character that is neither a word character
    (letter, digit, underscore) nor whitespace with a space, collapses
    whitespace runs into a single space and trims both ends.
    
    Args:
        text: Raw text (typically OCR output)
        
    Returns:
        Normalized text, possibly empty
        
    Examples:
        >>> normalize("  Organic PEANUT-Butter!! ")
        'organic peanut butter'
        >>> normalize("...")
        ''
    """
    text = _NON_WORD_PATTERN.sub(' ', text.lower())
    return _WHITESPACE_PATTERN.sub(' ', text).strip()


def tokenize(text: str) -> List[str]:
    """
    Normalize text and split it into tokens.
    
    An empty normalized string yields an empty list, never ``[""]``.
    Short tokens are kept; callers decide what to skip.
    """
    normalized = normalize(text)
    if not normalized:
        return []
    return normalized.split(' ')


# =============================================================================
# STRING METRICS (Edit Distance)
# =============================================================================

def levenshtein_distance(s1: str, s2: str) -> int:
    """
    Calculate Levenshtein (edit) distance between two strings.
    
    The Levenshtein distance is the minimum number of single-character edits
    (insertions, deletions, or substitutions) required to transform s1 into s2.
    
    Time Complexity: O(len(s1) * len(s2))
    Space Complexity: O(min(len(s1), len(s2)))
    
    Args:
        s1: First string
        s2: Second string
        
    Returns:
        Integer edit distance between the strings
        
    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("salt", "salt")
        0
        >>> levenshtein_distance("", "test")
        4
    """
    # Ensure s1 is the longer string so the rows span the shorter one
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    
    if len(s2) == 0:
        return len(s1)
    
    # Only keep two rows (current and previous)
    previous_row = list(range(len(s2) + 1))
    current_row = [0] * (len(s2) + 1)
    for i, c1 in enumerate(s1):
        current_row[0] = i + 1
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row[j + 1] = min(insertions, deletions, substitutions)
        previous_row, current_row = current_row, previous_row
    
    return previous_row[-1]


def similarity(a: str, b: str) -> float:
    """
    Edit-distance similarity in [0, 1].
    
    ``(max_len - distance) / max_len`` where ``max_len`` is the length of the
    longer string; two empty strings are identical (1.0). Case-sensitive,
    so callers pass normalized tokens.
    
    Examples:
        >>> round(similarity("buter", "butter"), 3)
        0.833
        >>> similarity("", "abc")
        0.0
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    
    distance = levenshtein_distance(a, b)
    return (max_len - distance) / max_len
