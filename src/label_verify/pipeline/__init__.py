"""
Label Verify Pipeline Module
============================

Scan-level orchestration: barcode lookup, comparisons and quality notes.
"""

from .scan_pipeline import (
    LabelScanVerifier,
    OCRResult,
    ScanReport,
    DiscrepancyNote,
    DiscrepancyType,
    find_by_barcode,
)

__all__ = [
    "LabelScanVerifier",
    "OCRResult",
    "ScanReport",
    "DiscrepancyNote",
    "DiscrepancyType",
    "find_by_barcode",
]
