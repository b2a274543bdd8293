#!/usr/bin/env python3
"""
Label Verify CLI - Command Line Interface
=========================================

Main CLI entry point for label verification.

Usage:
    label-verify verbage <ocr_text> <expected>              Compare label wording
    label-verify ingredients <ocr_text> --ingredients JSON  Compare ingredient list
    label-verify rank <ocr_text> --products FILE            Rank products by ingredients
    label-verify scan-verbage <ocr_text> --products FILE --barcode CODE
    label-verify scan-ingredients <ocr_text> --products FILE

Product files are JSON or YAML lists of product mappings with keys
id, name, barcode, expected_verbage, expected_ingredients.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from . import __version__
from .comparison import ComparisonResult, ProductCandidate, TextComparator
from .config import VerifierConfig, get_config, set_config
from .errors import CatalogLoadError, LabelVerifyError
from .pipeline import LabelScanVerifier, OCRResult, ScanReport

logger = logging.getLogger(__name__)


def load_products(path: str) -> List[ProductCandidate]:
    """
    Read candidate products from a JSON or YAML file.

    Raises:
        CatalogLoadError: If the file is missing, unparsable, or not a list
            of mappings
    """
    file_path = Path(path)
    if not file_path.exists():
        raise CatalogLoadError(path, "file not found")

    try:
        with open(file_path) as f:
            if file_path.suffix.lower() in ('.yaml', '.yml'):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogLoadError(path, str(e)) from e

    if isinstance(data, dict) and 'products' in data:
        data = data['products']

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise CatalogLoadError(path, "expected a list of product mappings")

    products = [ProductCandidate.from_dict(item) for item in data]
    logger.debug(f"Loaded {len(products)} products from {path}")
    return products


def _print_comparison(result: ComparisonResult, label: str):
    status = "MATCH" if result.matches else "MISMATCH"
    print(f"{label}: {status} (confidence: {result.confidence:.3f})")
    print(f"  Matched: {', '.join(result.matched_text) or '-'}")
    print(f"  Missing: {', '.join(result.missing_text) or '-'}")
    for discrepancy in result.discrepancies:
        print(f"  - {discrepancy}")


def _print_report(report: ScanReport):
    print(f"Status: {report.status}")
    if report.product is not None:
        print(f"Product: {report.product.name} (id={report.product.id}, barcode={report.product.barcode})")
    else:
        print("Product: -")
    if report.ocr_confidence is not None:
        print(f"OCR confidence: {report.ocr_confidence:.2f}")
    if report.verbage_comparison is not None:
        _print_comparison(report.verbage_comparison, "Verbage")
    if report.ingredients_comparison is not None:
        _print_comparison(report.ingredients_comparison, "Ingredients")
    for match in report.alternative_matches:
        print(f"  Alternative: {match.product.name} (score: {match.match_score:.3f})")
    for note in report.discrepancy_notes:
        print(f"  [{note.type.value}] {note.message}")


def cmd_verbage(args, comparator: TextComparator) -> int:
    """Compare OCR text with expected verbage."""
    result = comparator.compare_verbage(args.ocr_text, args.expected)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        _print_comparison(result, "Verbage")

    return 0 if result.matches else 1


def cmd_ingredients(args, comparator: TextComparator) -> int:
    """Compare OCR text with an expected ingredient list."""
    expected = None
    if args.ingredients:
        try:
            expected = json.loads(args.ingredients)
        except json.JSONDecodeError as e:
            print(f"Error: --ingredients is not valid JSON: {e}")
            return 1

    result = comparator.compare_ingredients(args.ocr_text, expected)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        _print_comparison(result, "Ingredients")

    return 0 if result.matches else 1


def cmd_rank(args, comparator: TextComparator) -> int:
    """Rank products from a file by ingredient match."""
    products = load_products(args.products)
    matches = comparator.find_matching_products_by_ingredients(args.ocr_text, products)

    if args.top is not None:
        matches = matches[:args.top]

    if args.json:
        print(json.dumps([m.to_dict() for m in matches], indent=2))
    else:
        if not matches:
            print("No products match the scanned ingredients")
        for rank, match in enumerate(matches, 1):
            print(f"{rank}. {match.product.name} (id={match.product.id}) score: {match.match_score:.3f}")
            if match.missing_ingredients:
                print(f"   Missing: {', '.join(match.missing_ingredients)}")

    return 0 if matches else 1


def cmd_scan_verbage(args, comparator: TextComparator) -> int:
    """Run a verbage scan against products from a file."""
    products = load_products(args.products)
    verifier = LabelScanVerifier(comparator=comparator)
    report = verifier.verify_verbage(
        OCRResult(text=args.ocr_text, confidence=args.ocr_confidence, provider="cli"),
        barcode=args.barcode,
        candidates=products,
    )

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        _print_report(report)

    return 0 if report.status == "matched" else 1


def cmd_scan_ingredients(args, comparator: TextComparator) -> int:
    """Run an ingredients scan against products from a file."""
    products = load_products(args.products)
    verifier = LabelScanVerifier(comparator=comparator)
    report = verifier.verify_ingredients(
        OCRResult(text=args.ocr_text, confidence=args.ocr_confidence, provider="cli"),
        candidates=products,
    )

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        _print_report(report)

    return 0 if report.status == "matched" else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='label-verify',
        description='Label Verify - Check OCR text from product labels against product records',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', '-c', help='JSON or YAML configuration file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
    parser.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Verbage command
    verbage_parser = subparsers.add_parser('verbage', help='Compare OCR text with expected verbage')
    verbage_parser.add_argument('ocr_text', help='OCR text from the label')
    verbage_parser.add_argument('expected', help='Expected label verbage')

    # Ingredients command
    ingredients_parser = subparsers.add_parser('ingredients', help='Compare OCR text with expected ingredients')
    ingredients_parser.add_argument('ocr_text', help='OCR text from the label')
    ingredients_parser.add_argument('--ingredients', '-i',
                                    help='Expected ingredients as a JSON list (omit for no constraint)')

    # Rank command
    rank_parser = subparsers.add_parser('rank', help='Rank products by ingredient match')
    rank_parser.add_argument('ocr_text', help='OCR text from the label')
    rank_parser.add_argument('--products', '-p', required=True, help='JSON or YAML product file')
    rank_parser.add_argument('--top', '-n', type=int, help='Show only the top N matches')

    # Scan commands
    scan_verbage_parser = subparsers.add_parser('scan-verbage', help='Verify a label scan by barcode and verbage')
    scan_verbage_parser.add_argument('ocr_text', help='OCR text from the label')
    scan_verbage_parser.add_argument('--products', '-p', required=True, help='JSON or YAML product file')
    scan_verbage_parser.add_argument('--barcode', '-b', help='Decoded barcode (omit if none detected)')
    scan_verbage_parser.add_argument('--ocr-confidence', type=float, default=1.0,
                                     help='OCR confidence score (default: 1.0)')

    scan_ingredients_parser = subparsers.add_parser('scan-ingredients',
                                                    help='Identify and verify a product by its ingredients')
    scan_ingredients_parser.add_argument('ocr_text', help='OCR text from the label')
    scan_ingredients_parser.add_argument('--products', '-p', required=True, help='JSON or YAML product file')
    scan_ingredients_parser.add_argument('--ocr-confidence', type=float, default=1.0,
                                         help='OCR confidence score (default: 1.0)')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.config:
            config = set_config(VerifierConfig.load(args.config))
        else:
            config = get_config()

        if args.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        commands = {
            'verbage': cmd_verbage,
            'ingredients': cmd_ingredients,
            'rank': cmd_rank,
            'scan-verbage': cmd_scan_verbage,
            'scan-ingredients': cmd_scan_ingredients,
        }

        return commands[args.command](args, TextComparator(config.matching))
    except LabelVerifyError as e:
        logger.debug(f"Command failed: {e.to_dict()}")
        print(f"Error: {e.message}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
