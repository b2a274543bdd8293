"""
Label Verify Core Module
========================

Text normalization, edit-distance similarity and ingredient entry types.
"""

from .text_utils import (
    normalize,
    tokenize,
    levenshtein_distance,
    similarity,
)
from .ingredients import (
    IngredientKind,
    IngredientEntry,
    display_name,
    coerce_ingredients,
)

__all__ = [
    # Normalization
    "normalize",
    "tokenize",
    # Similarity
    "levenshtein_distance",
    "similarity",
    # Ingredients
    "IngredientKind",
    "IngredientEntry",
    "display_name",
    "coerce_ingredients",
]
