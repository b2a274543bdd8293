"""
Text Comparator
===============

Decides whether OCR text from a product label is consistent with what the
product record says should be printed on it.

Three operations:
    compare_verbage      - expected label wording vs OCR text, word by word
    compare_ingredients  - expected ingredient list vs OCR text
    find_matching_products_by_ingredients
                         - rank candidate products by ingredient coverage

Every expected item is searched for among the OCR tokens using edit-distance
similarity; confidence is the fraction of considered items found. Items whose
normalized form is shorter than ``min_token_length`` are not considered at
all (neither matched nor missing).

Usage:
    from label_verify.comparison import compare_verbage

    result = compare_verbage("organic peanut buter", "Organic Peanut Butter")
    print(result.matches, result.confidence)
"""

import logging
from typing import Any, Iterable, List, Optional, Sequence

import numpy as np

from ..config import MatchingConfig, VerifierConfig
from ..core.ingredients import coerce_ingredients, display_name
from ..core.text_utils import normalize, similarity, tokenize
from .products import ProductLike, product_field
from .results import ComparisonResult, RankedMatch

logger = logging.getLogger(__name__)


def _contains_similar(tokens: Sequence[str], target: str, threshold: float) -> bool:
    """True if any token is strictly more similar to ``target`` than ``threshold``."""
    return any(similarity(token, target) > threshold for token in tokens)


def _lacks_ingredients(expected: Any) -> bool:
    """None, a missing field or an empty scalar such as ``""`` carries no expectation."""
    if isinstance(expected, (list, tuple)):
        return False
    return not expected


def _matching_from_environment() -> MatchingConfig:
    """Default thresholds with ``LABEL_*`` overrides, range-checked."""
    return VerifierConfig().validate().matching


def _confidence(matched: int, missing: int) -> float:
    considered = matched + missing
    return matched / considered if considered > 0 else 1.0


class TextComparator:
    """
    Fuzzy comparison of OCR text against product expectations.

    Stateless apart from its thresholds, so one instance can be shared
    between threads.

    Args:
        config: Matching thresholds (defaults plus ``LABEL_*`` environment
            overrides, range-checked, when None)
    """

    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or _matching_from_environment()

    def compare_verbage(self, ocr_text: str, expected_verbage: str) -> ComparisonResult:
        """
        Compare OCR text with the label wording a product should carry.

        Each expected word is matched if any OCR word is more than
        ``verbage_word_similarity`` similar to it. Duplicate expected words
        are scored once per occurrence.

        Args:
            ocr_text: Raw OCR output
            expected_verbage: Expected label text

        Returns:
            ComparisonResult; ``matches`` when confidence reaches
            ``verbage_match_threshold``
        """
        cfg = self.config
        ocr_words = tokenize(ocr_text)

        matched_words: List[str] = []
        missing_words: List[str] = []
        discrepancies: List[str] = []

        for expected_word in tokenize(expected_verbage):
            if len(expected_word) < cfg.min_token_length:
                continue

            if _contains_similar(ocr_words, expected_word, cfg.verbage_word_similarity):
                matched_words.append(expected_word)
            else:
                missing_words.append(expected_word)
                discrepancies.append(f'Missing expected word: "{expected_word}"')

        confidence = _confidence(len(matched_words), len(missing_words))
        result = ComparisonResult(
            matches=confidence >= cfg.verbage_match_threshold,
            confidence=confidence,
            discrepancies=discrepancies,
            matched_text=matched_words,
            missing_text=missing_words,
        )
        logger.debug(
            f"Verbage comparison: {len(matched_words)} matched, "
            f"{len(missing_words)} missing, confidence={confidence:.3f}"
        )
        return result

    def compare_ingredients(self, ocr_text: str, expected_ingredients: Any) -> ComparisonResult:
        """
        Compare OCR text with a product's expected ingredient list.

        Args:
            ocr_text: Raw OCR output
            expected_ingredients: List of ingredient names, mappings with
                ``name``, or ``IngredientEntry`` values. None or a non-list
                value means no expectation and yields a vacuous match.

        Returns:
            ComparisonResult listing display names; ``matches`` when
            confidence reaches ``ingredient_match_threshold``
        """
        entries = coerce_ingredients(expected_ingredients)
        if entries is None:
            return ComparisonResult.vacuous()

        cfg = self.config
        ocr_words = tokenize(ocr_text)

        matched: List[str] = []
        missing: List[str] = []
        discrepancies: List[str] = []

        for entry in entries:
            name = display_name(entry)
            normalized = normalize(name)
            if len(normalized) < cfg.min_token_length:
                continue

            if _contains_similar(ocr_words, normalized, cfg.ingredient_similarity):
                matched.append(name)
            else:
                missing.append(name)
                discrepancies.append(f'Missing expected ingredient: "{name}"')

        confidence = _confidence(len(matched), len(missing))
        logger.debug(
            f"Ingredients comparison: {len(matched)} matched, "
            f"{len(missing)} missing, confidence={confidence:.3f}"
        )
        return ComparisonResult(
            matches=confidence >= cfg.ingredient_match_threshold,
            confidence=confidence,
            discrepancies=discrepancies,
            matched_text=matched,
            missing_text=missing,
        )

    def find_matching_products_by_ingredients(
        self,
        ocr_text: str,
        candidates: Iterable[ProductLike],
    ) -> List[RankedMatch]:
        """
        Rank products whose expected ingredients appear in the OCR text.

        Used when no barcode is available. Candidates without an ingredient
        expectation (``expected_ingredients`` missing, None or an empty
        string) are skipped; an empty list is a vacuous expectation. The rest
        are included when their ingredient confidence reaches
        ``ranking_min_score``.

        Args:
            ocr_text: Raw OCR output
            candidates: Objects exposing ``expected_ingredients`` (plain
                mappings are read by key)

        Returns:
            Matches sorted by score, highest first; ties keep input order
        """
        matches: List[RankedMatch] = []
        considered = 0

        for product in candidates:
            expected = product_field(product, 'expected_ingredients')
            if _lacks_ingredients(expected):
                continue
            considered += 1

            comparison = self.compare_ingredients(ocr_text, expected)
            if comparison.confidence >= self.config.ranking_min_score:
                matches.append(RankedMatch(
                    product=product,
                    match_score=comparison.confidence,
                    matched_ingredients=comparison.matched_text,
                    missing_ingredients=comparison.missing_text,
                ))

        logger.debug(f"Ranked {len(matches)} of {considered} candidates with ingredients")

        if len(matches) < 2:
            return matches

        scores = np.array([m.match_score for m in matches], dtype=np.float64)
        order = np.argsort(-scores, kind='stable')
        return [matches[i] for i in order]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def compare_verbage(ocr_text: str, expected_verbage: str) -> ComparisonResult:
    """
    Compare OCR text with expected verbage.
    
    Thresholds are the ``MatchingConfig`` defaults with any ``LABEL_*``
    environment overrides applied.
    
    Raises:
        ConfigurationError: If an environment override is out of range
    """
    return TextComparator().compare_verbage(ocr_text, expected_verbage)


def compare_ingredients(ocr_text: str, expected_ingredients: Any) -> ComparisonResult:
    """Compare OCR text with expected ingredients (thresholds as in ``compare_verbage``)."""
    return TextComparator().compare_ingredients(ocr_text, expected_ingredients)


def find_matching_products_by_ingredients(
    ocr_text: str,
    candidates: Iterable[ProductLike],
) -> List[RankedMatch]:
    """Rank candidate products by ingredient match (thresholds as in ``compare_verbage``)."""
    return TextComparator().find_matching_products_by_ingredients(ocr_text, candidates)
