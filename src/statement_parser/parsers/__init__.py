"""PDF parsing module for credit card statements.

This module extracts structured data from credit card statement PDFs:
- PDFExtractor produces the text views of a document
- GenericParser runs the field fallback chains for every issuer
- Issuer refinements declare only their vocabulary
- StrategyRegistry picks the refinement for a document
"""

from statement_parser.parsers.detector import DetectionRule
from statement_parser.parsers.extractor import DocumentViews, PDFExtractor, TextLine
from statement_parser.parsers.factory import (
    StrategyRegistry,
    build_default_registry,
    get_default_registry,
)
from statement_parser.parsers.generic import FieldSpec, GenericParser

__all__ = [
    "DetectionRule",
    "DocumentViews",
    "FieldSpec",
    "GenericParser",
    "PDFExtractor",
    "StrategyRegistry",
    "TextLine",
    "build_default_registry",
    "get_default_registry",
]
