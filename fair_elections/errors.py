"""
Error types raised while parsing a Fair Elections report.

Every error is fatal for the document being parsed: it means the report's
layout drifted away from the rules encoded here and a person needs to look at
it. `ErrorKind` lets callers tell these apart from ordinary programming bugs.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    FORMAT = "format"
    SEQUENCE = "sequence"
    UNEXPECTED_CONTINUATION = "unexpected_continuation"
    MISSING_LINE_NUMBER = "missing_line_number"
    TRAILING_CONTENT = "trailing_content"
    NAME_FORMAT = "name_format"
    ADDRESS_FORMAT = "address_format"
    UNKNOWN_SCHEDULE_TYPE = "unknown_schedule_type"


class ReportParseError(Exception):
    """Base class for layout/format problems found in a report."""

    kind: ErrorKind = ErrorKind.FORMAT

    def __init__(
        self,
        message: str,
        *,
        page: Optional[int] = None,
        schedule: Optional[str] = None,
        line: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.page = page
        self.schedule = schedule
        self.line = line

    def with_context(
        self,
        *,
        page: Optional[int] = None,
        schedule: Optional[str] = None,
    ) -> "ReportParseError":
        """Fill in page/schedule if the raising code did not know them."""
        if self.page is None:
            self.page = page
        if self.schedule is None:
            self.schedule = schedule
        return self

    def __str__(self) -> str:
        context = []
        if self.page is not None:
            context.append(f"page {self.page}")
        if self.schedule is not None:
            context.append(f"schedule {self.schedule}")
        text = self.message
        if context:
            text = f"{text} ({', '.join(context)})"
        if self.line is not None:
            text = f"{text}: {self.line!r}"
        return text


class FormatError(ReportParseError):
    kind = ErrorKind.FORMAT


class SequenceError(ReportParseError):
    kind = ErrorKind.SEQUENCE


class UnexpectedContinuationError(ReportParseError):
    kind = ErrorKind.UNEXPECTED_CONTINUATION


class MissingLineNumberError(ReportParseError):
    kind = ErrorKind.MISSING_LINE_NUMBER


class TrailingContentError(ReportParseError):
    kind = ErrorKind.TRAILING_CONTENT


class NameFormatError(ReportParseError):
    kind = ErrorKind.NAME_FORMAT


class AddressFormatError(ReportParseError):
    kind = ErrorKind.ADDRESS_FORMAT


class UnknownScheduleTypeError(ReportParseError):
    kind = ErrorKind.UNKNOWN_SCHEDULE_TYPE


__all__ = [
    "AddressFormatError",
    "ErrorKind",
    "FormatError",
    "MissingLineNumberError",
    "NameFormatError",
    "ReportParseError",
    "SequenceError",
    "TrailingContentError",
    "UnexpectedContinuationError",
    "UnknownScheduleTypeError",
]
