"""
Label Scan Verification Pipeline
================================

Turns the outputs of external collaborators (OCR text and confidence, a
decoded barcode, the catalog's candidate products) into a single scan
report with discrepancy notes.

Three scan kinds:
    verify_verbage     - barcode lookup, then label wording comparison
    verify_barcode     - barcode lookup only
    verify_ingredients - no barcode; best product by ingredient ranking

Usage:
    from label_verify.pipeline import LabelScanVerifier, OCRResult

    verifier = LabelScanVerifier()
    report = verifier.verify_verbage(
        OCRResult(text=ocr_text, confidence=0.92),
        barcode="012345678905",
        candidates=products,
    )
    print(report.status)  # "matched" or "discrepancy"
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from ..comparison import ComparisonResult, RankedMatch, TextComparator
from ..comparison.products import ProductLike, product_field, product_summary
from ..config import ScanConfig, get_config

logger = logging.getLogger(__name__)


class DiscrepancyType(str, Enum):
    """Category of a scan discrepancy note."""
    VERBAGE = 'verbage'
    INGREDIENTS = 'ingredients'
    PRODUCT = 'product'
    BARCODE = 'barcode'
    OCR_QUALITY = 'ocr_quality'


STATUS_MATCHED = 'matched'
STATUS_DISCREPANCY = 'discrepancy'


@dataclass
class OCRResult:
    """
    Text handed over by the OCR provider.

    Attributes:
        text: Recognized text string
        confidence: Provider confidence score (0.0 to 1.0)
        provider: Name of the OCR provider used
        metadata: Additional provider-specific metadata
    """
    text: str
    confidence: float
    provider: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "text": self.text,
            "confidence": self.confidence,
            "provider": self.provider,
            "metadata": self.metadata,
        }


@dataclass
class DiscrepancyNote:
    """One reason a scan did not come out clean."""
    type: DiscrepancyType
    message: str
    details: Optional[List[str]] = None
    confidence: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'type': self.type.value, 'message': self.message}
        if self.details is not None:
            data['details'] = list(self.details)
        if self.confidence is not None:
            data['confidence'] = self.confidence
        return data


@dataclass
class ScanReport:
    """Structured scan verdict."""
    product: Any = None
    ocr_text: Optional[str] = None
    ocr_confidence: Optional[float] = None
    barcode: Optional[str] = None
    verbage_comparison: Optional[ComparisonResult] = None
    ingredients_comparison: Optional[ComparisonResult] = None
    alternative_matches: List[RankedMatch] = field(default_factory=list)
    discrepancy_notes: List[DiscrepancyNote] = field(default_factory=list)
    processing_time_ms: float = 0.0

    @property
    def status(self) -> str:
        return STATUS_MATCHED if not self.discrepancy_notes else STATUS_DISCREPANCY

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'status': self.status,
            'product': product_summary(self.product),
            'ocr_text': self.ocr_text,
            'ocr_confidence': self.ocr_confidence,
            'barcode': self.barcode,
            'verbage_comparison': self.verbage_comparison.to_dict() if self.verbage_comparison else None,
            'ingredients_comparison': self.ingredients_comparison.to_dict() if self.ingredients_comparison else None,
            'alternative_matches': [m.to_dict() for m in self.alternative_matches],
            'discrepancy_notes': [n.to_dict() for n in self.discrepancy_notes],
            'processing_time_ms': self.processing_time_ms,
        }


def find_by_barcode(candidates: Iterable[ProductLike], barcode: str) -> Optional[Any]:
    """First candidate whose barcode equals ``barcode`` (surrounding whitespace ignored)."""
    wanted = barcode.strip()
    for product in candidates:
        value = product_field(product, 'barcode')
        if value is not None and str(value).strip() == wanted:
            return product
    return None


@contextmanager
def _timer():
    """Context manager for timing operations."""
    start = time.perf_counter()
    elapsed = {'ms': 0.0}
    yield elapsed
    elapsed['ms'] = (time.perf_counter() - start) * 1000


class LabelScanVerifier:
    """
    Merges comparison verdicts with barcode lookup and OCR quality checks.

    Holds no per-scan state; safe to share between threads.

    Example:
        verifier = LabelScanVerifier()
        report = verifier.verify_ingredients(OCRResult("sugar salt", 0.9), products)
        print(report.to_dict())
    """

    def __init__(
        self,
        comparator: Optional[TextComparator] = None,
        scan_config: Optional[ScanConfig] = None,
    ):
        """
        Initialize the verifier.

        Args:
            comparator: Text comparator (built from the global config if None)
            scan_config: Scan settings (global config if None)
        """
        config = get_config()
        self.comparator = comparator or TextComparator(config.matching)
        self.scan_config = scan_config or config.scan

    def verify_verbage(
        self,
        ocr: OCRResult,
        barcode: Optional[str],
        candidates: Iterable[ProductLike],
    ) -> ScanReport:
        """
        Verify label wording for the product identified by ``barcode``.

        Args:
            ocr: OCR text and confidence
            barcode: Decoded barcode, or None when none was detected
            candidates: Products to look the barcode up in

        Returns:
            ScanReport with ``verbage_comparison`` when the product was found
            and carries expected verbage
        """
        with _timer() as elapsed:
            report = ScanReport(ocr_text=ocr.text, ocr_confidence=ocr.confidence, barcode=barcode)

            if barcode:
                report.product = find_by_barcode(candidates, barcode)

            expected_verbage = product_field(report.product, 'expected_verbage') if report.product is not None else None

            if expected_verbage:
                comparison = self.comparator.compare_verbage(ocr.text, expected_verbage)
                report.verbage_comparison = comparison
                if not comparison.matches:
                    report.discrepancy_notes.append(DiscrepancyNote(
                        type=DiscrepancyType.VERBAGE,
                        message="Text does not match expected verbage",
                        details=comparison.discrepancies,
                    ))
            elif barcode:
                report.discrepancy_notes.append(DiscrepancyNote(
                    type=DiscrepancyType.PRODUCT,
                    message="Product not found in database for barcode",
                ))
            else:
                report.discrepancy_notes.append(DiscrepancyNote(
                    type=DiscrepancyType.BARCODE,
                    message="No barcode detected",
                ))

            self._check_ocr_quality(ocr, report)

        report.processing_time_ms = elapsed['ms']
        logger.info(f"Verbage scan: status={report.status}, barcode={barcode}, notes={len(report.discrepancy_notes)}")
        return report

    def verify_barcode(self, barcode: Optional[str], candidates: Iterable[ProductLike]) -> ScanReport:
        """Look up the product for a barcode without any text comparison."""
        with _timer() as elapsed:
            report = ScanReport(barcode=barcode)

            if barcode:
                report.product = find_by_barcode(candidates, barcode)
                if report.product is None:
                    report.discrepancy_notes.append(DiscrepancyNote(
                        type=DiscrepancyType.PRODUCT,
                        message="Product not found in database for barcode",
                    ))
            else:
                report.discrepancy_notes.append(DiscrepancyNote(
                    type=DiscrepancyType.BARCODE,
                    message="No barcode detected",
                ))

        report.processing_time_ms = elapsed['ms']
        logger.info(f"Barcode scan: status={report.status}, barcode={barcode}")
        return report

    def verify_ingredients(self, ocr: OCRResult, candidates: Iterable[ProductLike]) -> ScanReport:
        """
        Identify the product from its ingredient list and verify it.

        The best-ranked candidate becomes the report's product; up to
        ``max_alternatives`` runners-up are attached as alternatives.
        """
        with _timer() as elapsed:
            report = ScanReport(ocr_text=ocr.text, ocr_confidence=ocr.confidence)

            ranked = self.comparator.find_matching_products_by_ingredients(ocr.text, candidates)

            if ranked:
                best = ranked[0]
                report.product = best.product
                report.alternative_matches = ranked[1:1 + self.scan_config.max_alternatives]

                comparison = self.comparator.compare_ingredients(
                    ocr.text, product_field(best.product, 'expected_ingredients')
                )
                report.ingredients_comparison = comparison
                if not comparison.matches:
                    report.discrepancy_notes.append(DiscrepancyNote(
                        type=DiscrepancyType.INGREDIENTS,
                        message="Ingredients do not match expected ingredients",
                        details=comparison.discrepancies,
                    ))
            else:
                report.discrepancy_notes.append(DiscrepancyNote(
                    type=DiscrepancyType.PRODUCT,
                    message="No products match the scanned ingredients",
                ))

            self._check_ocr_quality(ocr, report)

        report.processing_time_ms = elapsed['ms']
        logger.info(
            f"Ingredients scan: status={report.status}, "
            f"candidates_matched={len(ranked)}, notes={len(report.discrepancy_notes)}"
        )
        return report

    def _check_ocr_quality(self, ocr: OCRResult, report: ScanReport) -> None:
        if ocr.confidence < self.scan_config.low_ocr_confidence:
            logger.debug(f"Low OCR confidence: {ocr.confidence:.2f}")
            report.discrepancy_notes.append(DiscrepancyNote(
                type=DiscrepancyType.OCR_QUALITY,
                message="Low OCR confidence",
                confidence=ocr.confidence,
            ))
