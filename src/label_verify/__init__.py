"""
Label Verify
============

Checks OCR text from scanned product labels against known product records.

Package Structure:
    label_verify/
    ├── core/           # Normalization, edit distance, ingredient entries
    ├── comparison/     # Verbage/ingredient comparison and product ranking
    ├── pipeline/       # Scan verification (barcode lookup, OCR quality)
    ├── config.py       # Thresholds and logging settings
    └── cli.py          # label-verify command

Quick Start:
    from label_verify import compare_verbage, compare_ingredients
    
    result = compare_verbage("organic peanut buter", "organic peanut butter")
    print(result.matches, result.confidence)
    
    result = compare_ingredients("sugar salt water", ["sugar", "salt", "pepper"])
    print(result.missing_text)  # ['pepper']

Version: 1.0.0
"""

__version__ = "1.0.0"

from .core import (
    normalize,
    tokenize,
    levenshtein_distance,
    similarity,
    IngredientKind,
    IngredientEntry,
    display_name,
    coerce_ingredients,
)
from .comparison import (
    ComparisonResult,
    RankedMatch,
    HasOptionalIngredients,
    ProductCandidate,
    TextComparator,
    compare_verbage,
    compare_ingredients,
    find_matching_products_by_ingredients,
)
from .errors import LabelVerifyError, ConfigurationError, CatalogLoadError

__all__ = [
    "__version__",
    # Core
    "normalize",
    "tokenize",
    "levenshtein_distance",
    "similarity",
    "IngredientKind",
    "IngredientEntry",
    "display_name",
    "coerce_ingredients",
    # Comparison
    "ComparisonResult",
    "RankedMatch",
    "HasOptionalIngredients",
    "ProductCandidate",
    "TextComparator",
    "compare_verbage",
    "compare_ingredients",
    "find_matching_products_by_ingredients",
    # Errors
    "LabelVerifyError",
    "ConfigurationError",
    "CatalogLoadError",
]


# Lazy import for the scan pipeline (touches global config and logging)
def __getattr__(name: str):
    """Lazy import for pipeline classes."""
    if name in ("LabelScanVerifier", "OCRResult", "ScanReport"):
        from . import pipeline
        return getattr(pipeline, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
