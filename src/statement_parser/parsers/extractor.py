"""PDF text extraction wrapper using pdfplumber and pypdf.

This module is the only place that touches PDF internals. It turns a
document into four text views that issuer strategies work on:

- linear text (reading order, one string)
- layout text (tab inserted at wide column gaps)
- named regions of the first page (header, account, transactions)
- positioned text lines (text, x, y, font size)

Structural checks (encryption, password, page count) go through pypdf;
text and word positions come from pdfplumber.
"""

import io
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pdfplumber
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from statement_parser.core.config import settings
from statement_parser.core.exceptions import InvalidDocumentError

logger = logging.getLogger(__name__)

Document = bytes | str | Path

REGION_NAMES = ("header", "account", "transactions")


@dataclass(frozen=True)
class TextLine:
    """A run of words sharing one baseline, with its page position."""

    text: str
    x: float
    y: float
    font_size: float | None = None


@dataclass(frozen=True)
class DocumentViews:
    """The four text views of one document."""

    text: str
    layout_text: str = ""
    regions: dict[str, str] = field(default_factory=dict)
    lines: tuple[TextLine, ...] = ()


def _source(document: Document) -> Any:
    if isinstance(document, (bytes, bytearray)):
        return io.BytesIO(bytes(document))
    return str(document)


def _group_words(words: list[dict], y_tolerance: float) -> list[list[dict]]:
    """Group pdfplumber words into lines by their ``top`` coordinate.

    A word joins the current line while it stays within ``y_tolerance``
    of the line's first word; each line is returned sorted left to right.
    """
    if not words:
        return []

    ordered = sorted(words, key=lambda w: (w["top"], w["x0"]))
    lines: list[list[dict]] = []
    current = [ordered[0]]
    anchor = ordered[0]["top"]

    for word in ordered[1:]:
        if abs(word["top"] - anchor) <= y_tolerance:
            current.append(word)
        else:
            lines.append(sorted(current, key=lambda w: w["x0"]))
            current = [word]
            anchor = word["top"]

    lines.append(sorted(current, key=lambda w: w["x0"]))
    return lines


def _split_at_gaps(line: list[dict], gap_threshold: float) -> list[list[dict]]:
    segments: list[list[dict]] = [[line[0]]]
    for previous, word in zip(line, line[1:]):
        if word["x0"] - previous["x1"] > gap_threshold:
            segments.append([word])
        else:
            segments[-1].append(word)
    return segments


def group_rows(lines: list[TextLine] | tuple[TextLine, ...], y_tolerance: float | None = None) -> list[list[str]]:
    """Group positioned lines into table rows.

    Rows come out top to bottom, cells left to right. Blank cells are
    dropped, and rows with no cells are skipped.

    Args:
        lines: Positioned lines from extract_text_lines
        y_tolerance: Maximum vertical distance from the row anchor
            (defaults to ROW_Y_TOLERANCE)

    Returns:
        List of rows, each a list of cell strings
    """
    if y_tolerance is None:
        y_tolerance = settings.ROW_Y_TOLERANCE
    if not lines:
        return []

    ordered = sorted(lines, key=lambda line: (line.y, line.x))
    rows: list[list[TextLine]] = []
    current = [ordered[0]]
    anchor = ordered[0].y

    for line in ordered[1:]:
        if abs(line.y - anchor) <= y_tolerance:
            current.append(line)
        else:
            rows.append(current)
            current = [line]
            anchor = line.y
    rows.append(current)

    table: list[list[str]] = []
    for row in rows:
        cells = [line.text.strip() for line in sorted(row, key=lambda line: line.x)]
        cells = [cell for cell in cells if cell]
        if cells:
            table.append(cells)
    return table


class PDFExtractor:
    """Reads text views out of a statement PDF.

    Every method opens the document itself and closes it before
    returning, including when extraction fails. Failures are raised as
    InvalidDocumentError with the underlying exception chained.

    Example:
        >>> extractor = PDFExtractor()
        >>> extractor.validate(pdf_bytes)
        >>> views = extractor.extract_views(pdf_bytes)
        >>> views.regions["header"]
    """

    def __init__(
        self,
        gap_threshold: float | None = None,
        line_tolerance: float | None = None,
        regions: dict[str, tuple[float, float, float, float]] | None = None,
    ):
        """Initialize the extractor.

        Args:
            gap_threshold: Horizontal gap (points) that starts a new column
            line_tolerance: Vertical distance (points) that starts a new line
            regions: Region name -> (left, top, right, bottom) page fractions
        """
        self.gap_threshold = gap_threshold if gap_threshold is not None else settings.LAYOUT_GAP_THRESHOLD
        self.line_tolerance = line_tolerance if line_tolerance is not None else settings.LINE_Y_TOLERANCE
        self.regions = regions or {
            "header": settings.HEADER_REGION,
            "account": settings.ACCOUNT_REGION,
            "transactions": settings.TRANSACTIONS_REGION,
        }

    # ------------------------------------------------------------------
    # Structural checks
    # ------------------------------------------------------------------

    def validate(self, document: Document, password: str | None = None) -> None:
        """Check that the document is an openable PDF with at least one page.

        Raises:
            InvalidDocumentError: PARSE_002 (unreadable), PARSE_003 (password
                required), PARSE_004 (wrong password) or PARSE_006 (no pages)
        """
        if document is None or (isinstance(document, (bytes, bytearray)) and len(document) == 0):
            raise InvalidDocumentError("PARSE_002", {"reason": "empty document"})

        try:
            reader = PdfReader(_source(document))
            if reader.is_encrypted:
                if not password:
                    # Some PDFs are encrypted with an empty user password.
                    if not reader.decrypt(""):
                        raise InvalidDocumentError("PARSE_003")
                elif not reader.decrypt(password):
                    raise InvalidDocumentError("PARSE_004")
            page_count = len(reader.pages)
        except (PyPdfError, OSError, ValueError) as e:
            raise InvalidDocumentError("PARSE_002", {"error": str(e)}) from e

        if page_count == 0:
            raise InvalidDocumentError("PARSE_006")

        logger.debug("Document validated: %d page(s)", page_count)

    def is_valid_document(self, document: Document, password: str | None = None) -> bool:
        """Return True if validate() would pass."""
        try:
            self.validate(document, password=password)
        except InvalidDocumentError as e:
            logger.info("Document rejected: %s", e.error_code)
            return False
        return True

    # ------------------------------------------------------------------
    # Text views
    # ------------------------------------------------------------------

    @contextmanager
    def open(self, document: Document, password: str | None = None) -> Iterator[Any]:
        """Open a document with pdfplumber; the handle is always closed."""
        try:
            with pdfplumber.open(_source(document), password=password or "") as pdf:
                yield pdf
        except InvalidDocumentError:
            raise
        except Exception as e:
            raise InvalidDocumentError("PARSE_002", {"error": str(e)}) from e

    def extract_text(self, document: Document, password: str | None = None) -> str:
        """Extract linear text from all pages."""
        with self.open(document, password) as pdf:
            return self._text(pdf)

    def extract_layout_text(self, document: Document, password: str | None = None) -> str:
        """Extract text with a tab wherever a column gap is found."""
        with self.open(document, password) as pdf:
            return self._layout_text(pdf)

    def extract_regions(self, document: Document, password: str | None = None) -> dict[str, str]:
        """Extract the named regions of the first page."""
        with self.open(document, password) as pdf:
            return self._regions(pdf)

    def extract_text_lines(self, document: Document, password: str | None = None) -> list[TextLine]:
        """Extract positioned text lines from all pages."""
        with self.open(document, password) as pdf:
            return self._text_lines(pdf)

    def extract_tables(self, document: Document, password: str | None = None) -> list[list[str]]:
        """Extract positioned lines and group them into table rows."""
        return group_rows(self.extract_text_lines(document, password))

    def extract_views(self, document: Document, password: str | None = None) -> DocumentViews:
        """Extract all four views with a single open."""
        with self.open(document, password) as pdf:
            views = DocumentViews(
                text=self._text(pdf),
                layout_text=self._layout_text(pdf),
                regions=self._regions(pdf),
                lines=tuple(self._text_lines(pdf)),
            )

        logger.debug(
            "Extracted views: %d chars text, %d chars layout, %d lines",
            len(views.text),
            len(views.layout_text),
            len(views.lines),
        )
        return views

    def _text(self, pdf: Any) -> str:
        return "\n".join((page.extract_text() or "") for page in pdf.pages)

    def _words(self, page: Any) -> list[dict]:
        return page.extract_words(
            x_tolerance=settings.WORD_X_TOLERANCE,
            extra_attrs=["size"],
        )

    def _layout_text(self, pdf: Any) -> str:
        pages: list[str] = []
        for page in pdf.pages:
            rendered: list[str] = []
            for line in _group_words(self._words(page), self.line_tolerance):
                parts = [line[0]["text"]]
                for previous, word in zip(line, line[1:]):
                    separator = "\t" if word["x0"] - previous["x1"] > self.gap_threshold else " "
                    parts.append(separator + word["text"])
                rendered.append("".join(parts))
            pages.append("\n".join(rendered))
        return "\n".join(pages)

    def _regions(self, pdf: Any) -> dict[str, str]:
        if not pdf.pages:
            return {name: "" for name in self.regions}

        page = pdf.pages[0]
        x0, top, x1, bottom = page.bbox
        width, height = x1 - x0, bottom - top

        regions: dict[str, str] = {}
        for name, (left, upper, right, lower) in self.regions.items():
            bbox = (
                x0 + left * width,
                top + upper * height,
                x0 + right * width,
                top + lower * height,
            )
            regions[name] = page.crop(bbox).extract_text() or ""
        return regions

    def _text_lines(self, pdf: Any) -> list[TextLine]:
        lines: list[TextLine] = []
        offset = 0.0
        for page in pdf.pages:
            for line in _group_words(self._words(page), self.line_tolerance):
                y = offset + line[0]["top"]
                for segment in _split_at_gaps(line, self.gap_threshold):
                    lines.append(
                        TextLine(
                            text=" ".join(word["text"] for word in segment),
                            x=segment[0]["x0"],
                            y=y,
                            font_size=segment[0].get("size"),
                        )
                    )
            # Page offsets keep y increasing across pages
            offset += page.height
        return lines
