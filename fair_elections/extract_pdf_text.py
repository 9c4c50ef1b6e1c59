"""
Extract layout-preserving text from a report PDF.

The parser relies on column alignment, so pages are extracted with
pdfplumber's layout mode and joined with form feeds, which is what the page
splitter expects between pages.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from pathlib import Path

try:
    import pdfplumber
except ImportError as exc:  # pragma: no cover - dependency guard
    raise SystemExit(
        "Missing dependency pdfplumber. Install with: pip install pdfplumber"
    ) from exc

from .report import ParsedReport, parse_report

PAGE_SEPARATOR = "\f"


class TextExtractionError(Exception):
    """Raised when a PDF cannot be turned into text."""


@dataclass
class ExtractionResult:
    """Extracted document text plus page statistics."""

    text: str = ""
    pages_processed: int = 0
    pages_with_text: int = 0


def page_text(raw: str) -> str:
    """
    Layout text of one page with the page margin removed.

    pdfplumber measures columns from the page's left edge, so every line
    carries the left margin as spaces. Columns have to count from the
    leftmost text on the page instead, where "#" and the line numbers sit.
    """
    lines = [line.rstrip() for line in raw.splitlines()]
    return textwrap.dedent("\n".join(lines)).strip("\n")


def extract_text(input_pdf: Path) -> ExtractionResult:
    """Return the text of every page of `input_pdf`, separated by form feeds."""
    result = ExtractionResult()
    pages = []
    try:
        with pdfplumber.open(str(input_pdf)) as pdf:
            for page in pdf.pages:
                result.pages_processed += 1
                text = page_text(page.extract_text(layout=True) or "")
                if text.strip():
                    result.pages_with_text += 1
                pages.append(text)
    except Exception as exc:  # pdfminer raises its own exception types
        raise TextExtractionError(f"Unable to extract text from {input_pdf}: {exc}") from exc

    result.text = PAGE_SEPARATOR.join(pages)
    return result


def parse_report_file(input_pdf: Path, **options) -> ParsedReport:
    """Extract `input_pdf` and parse the resulting text."""
    extraction = extract_text(input_pdf)
    if not extraction.pages_with_text:
        raise TextExtractionError(f"No text layer found in {input_pdf}")
    return parse_report(extraction.text, **options)


__all__ = [
    "ExtractionResult",
    "TextExtractionError",
    "extract_text",
    "page_text",
    "parse_report_file",
]
