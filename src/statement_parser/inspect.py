"""Command-line inspection of a statement PDF.

Prints what every extraction view sees for one document, which is the
first thing to look at when a field comes back empty:

    statement-inspect statement.pdf
    statement-inspect statement.pdf --password secret --json
"""

import argparse
import sys
from pathlib import Path

from pypdf import PdfReader

from statement_parser.core.config import settings
from statement_parser.core.exceptions import InvalidDocumentError
from statement_parser.core.logging import setup_logging
from statement_parser.parsers.extractor import DocumentViews, PDFExtractor, group_rows
from statement_parser.parsers.factory import get_default_registry
from statement_parser.parsers.patterns import clean_text, extract_all_amounts, extract_all_dates
from statement_parser.services.statement import StatementService

SEARCH_KEYWORDS = [
    "Card Number", "Card No", "Card ending",
    "Statement Date", "Bill Date",
    "Payment Due Date", "Due Date",
    "Total Amount Due", "Amount Due", "Outstanding",
    "Credit Limit", "Available Credit",
    "Minimum Payment", "Minimum Amount",
    "Card Type", "Product", "Card Variant",
    "HDFC", "ICICI", "SBI", "Axis", "American Express",
]


def _section(title: str) -> None:
    print(f"\n--- {title} ---")


def print_basic_info(path: Path, password: str | None) -> None:
    _section("BASIC PDF INFO")
    print(f"File: {path.name}")
    print(f"Size: {path.stat().st_size // 1024} KB")

    reader = PdfReader(str(path))
    if reader.is_encrypted:
        print("Encrypted: yes")
        reader.decrypt(password or "")
    print(f"Pages: {len(reader.pages)}")
    if reader.pages:
        box = reader.pages[0].mediabox
        orientation = "Landscape" if box.width > box.height else "Portrait"
        print(f"Page size: {float(box.width):.0f} x {float(box.height):.0f} ({orientation})")


def print_views(views: DocumentViews) -> None:
    _section("RAW TEXT")
    print(f"Extracted {len(views.text)} characters")
    print(views.text[:500])

    _section("LAYOUT TEXT")
    print(f"Extracted {len(views.layout_text)} characters")
    print(views.layout_text[:500])

    _section("REGIONS")
    for name, content in views.regions.items():
        print(f"{name}: {len(content)} characters")
        print(f"  {clean_text(content)[:200]}")

    _section("TEXT LINES")
    print(f"Total lines: {len(views.lines)}")
    for line in views.lines[:20]:
        size = f"{line.font_size:.1f}" if line.font_size else "?"
        print(f"  x={line.x:6.1f} y={line.y:7.1f} size={size:>4}  {line.text}")

    rows = group_rows(views.lines)
    _section("TABLE ROWS")
    print(f"Detected {len(rows)} rows")
    for index, row in enumerate(rows[:10]):
        print(f"  Row {index}: {row}")

    dates = extract_all_dates(views.text)
    _section("DATES FOUND")
    print(f"Found {len(dates)} dates")
    for value in dates:
        print(f"  - {value.isoformat()}")

    amounts = extract_all_amounts(views.text)
    _section("AMOUNTS FOUND")
    print(f"Found {len(amounts)} amounts")
    for value in amounts[:20]:
        print(f"  - {value}")


def print_keyword_report(text: str) -> None:
    _section("KEYWORD SEARCH")
    upper = text.upper()
    for keyword in SEARCH_KEYWORDS:
        index = upper.find(keyword.upper())
        if index < 0:
            continue
        start = max(0, index - 30)
        end = min(len(text), index + len(keyword) + 50)
        print(f"Found: {keyword}")
        print(f"  Context: ...{clean_text(text[start:end])}...")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect how a statement PDF is read")
    parser.add_argument("file", help="Path to the statement PDF")
    parser.add_argument("--password", default=None, help="Password for encrypted PDFs")
    parser.add_argument("--json", action="store_true", help="Also print the parsed record as JSON")
    args = parser.parse_args(argv)

    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    path = Path(args.file)
    if not path.is_file():
        print(f"File not found: {path}", file=sys.stderr)
        return 1

    extractor = PDFExtractor()
    registry = get_default_registry()

    print("=" * 80)
    print(f"PDF ANALYSIS REPORT: {path.name}")
    print("=" * 80)

    try:
        extractor.validate(path, password=args.password)
        print_basic_info(path, args.password)
        views = extractor.extract_views(path, password=args.password)
    except InvalidDocumentError as e:
        print(f"{e.user_message} ({e.error_code})", file=sys.stderr)
        return 1

    print_views(views)
    print_keyword_report(views.text)

    _section("ISSUER")
    print(f"Detected issuer: {registry.detect_issuer(views.text)}")

    if args.json:
        _section("PARSED RECORD")
        record = StatementService(registry, extractor).parse(path, password=args.password)
        if record is None:
            print("null")
        else:
            print(record.model_dump_json(indent=2))

    print("\n" + "=" * 80)
    print("ANALYSIS COMPLETE")
    print("=" * 80)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
