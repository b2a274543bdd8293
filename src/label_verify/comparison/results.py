"""
Comparison result types.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .products import product_summary


@dataclass
class ComparisonResult:
    """
    Outcome of comparing OCR text against one expectation.
    
    Attributes:
        matches: Whether ``confidence`` reached the verdict threshold
        confidence: Fraction of considered expected items found (1.0 when
            nothing was considered)
        discrepancies: Human-readable message per missing item
        matched_text: Expected items found, in expectation order
        missing_text: Expected items not found, in expectation order
    """
    matches: bool
    confidence: float
    discrepancies: List[str] = field(default_factory=list)
    matched_text: List[str] = field(default_factory=list)
    missing_text: List[str] = field(default_factory=list)
    
    @classmethod
    def vacuous(cls) -> 'ComparisonResult':
        """Result for an empty expectation: nothing to miss."""
        return cls(matches=True, confidence=1.0)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'matches': self.matches,
            'confidence': self.confidence,
            'discrepancies': list(self.discrepancies),
            'matched_text': list(self.matched_text),
            'missing_text': list(self.missing_text),
        }


@dataclass
class RankedMatch:
    """A candidate product whose expected ingredients were found in the OCR text."""
    product: Any
    match_score: float
    matched_ingredients: List[str] = field(default_factory=list)
    missing_ingredients: List[str] = field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'product': product_summary(self.product),
            'match_score': self.match_score,
            'matched_ingredients': list(self.matched_ingredients),
            'missing_ingredients': list(self.missing_ingredients),
        }
