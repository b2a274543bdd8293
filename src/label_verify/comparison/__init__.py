"""
Label Verify Comparison Module
==============================

Verbage and ingredient comparison plus ingredient-based product ranking.
"""

from .results import ComparisonResult, RankedMatch
from .products import HasOptionalIngredients, ProductCandidate, ProductLike
from .comparator import (
    TextComparator,
    compare_verbage,
    compare_ingredients,
    find_matching_products_by_ingredients,
)

__all__ = [
    # Results
    "ComparisonResult",
    "RankedMatch",
    # Products
    "HasOptionalIngredients",
    "ProductCandidate",
    "ProductLike",
    # Comparison
    "TextComparator",
    "compare_verbage",
    "compare_ingredients",
    "find_matching_products_by_ingredients",
]
