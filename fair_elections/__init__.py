"""
Parser for DC Office of Campaign Finance "Fair Elections" report text.

This package exposes a programmatic API for:
  * parsing extracted report text into contributions and expenditures (`report.parse_report`)
  * the building blocks behind it: column layouts, page segmentation, row
    assembly and record normalization
  * the contributor identity key used for limit checks (`normalize.normalize_name_and_address`)
  * extracting report text from a PDF (`extract_pdf_text.extract_text`)
  * DataFrame views for export and excess-contribution checks (`exports`)
"""

from .columns import ColumnLayout, FieldSpan, detect_layout
from .errors import (
    AddressFormatError,
    ErrorKind,
    FormatError,
    MissingLineNumberError,
    NameFormatError,
    ReportParseError,
    SequenceError,
    TrailingContentError,
    UnexpectedContinuationError,
    UnknownScheduleTypeError,
)
from .normalize import (
    fix_amount,
    fix_date,
    normalize_name_and_address,
    parse_address,
    parse_name,
)
from .pages import Page, segment_pages
from .records import Contribution, Expenditure, normalize_row
from .report import ParsedReport, ParseOutcome, parse_report, try_parse_report
from .rows import RawRow, assemble_rows

__all__ = [
    "AddressFormatError",
    "ColumnLayout",
    "Contribution",
    "ErrorKind",
    "Expenditure",
    "FieldSpan",
    "FormatError",
    "MissingLineNumberError",
    "NameFormatError",
    "Page",
    "ParseOutcome",
    "ParsedReport",
    "RawRow",
    "ReportParseError",
    "SequenceError",
    "TrailingContentError",
    "UnexpectedContinuationError",
    "UnknownScheduleTypeError",
    "assemble_rows",
    "detect_layout",
    "fix_amount",
    "fix_date",
    "normalize_name_and_address",
    "normalize_row",
    "parse_address",
    "parse_name",
    "parse_report",
    "segment_pages",
    "try_parse_report",
]
