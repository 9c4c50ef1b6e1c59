"""
Group a page's table body into logical rows.

A row starts on a line beginning with its line number and may wrap onto a few
continuation lines. Only address-like and free-text columns are expected to
wrap; a value turning up anywhere else on a continuation line means the
layout is not what we think it is.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .columns import LINE_NUMBER_FIELD, ColumnLayout, detect_layout
from .errors import (
    FormatError,
    MissingLineNumberError,
    TrailingContentError,
    UnexpectedContinuationError,
)

MAX_ROW_LINES = 6
TABLE_HEAD_RE = re.compile(r"(#.+)\n(?:.*\n)?\n(?=\d|\s*Subtotal)")
SUBTOTAL_RE = re.compile(r"^\s*Subtotal")
ADDRESS_LIKE_FIELD_RE = re.compile(r"^(?:address|business|individual)$|_name$|_address$")
FREE_TEXT_FIELDS = frozenset(
    {
        "occupation",
        "reason",
        "mode_of_payment",
        "equipment_short_description",
        "purpose_of_expenditure",
    }
)


@dataclass
class RawRow:
    """One logical table row: field name -> accumulated text."""

    fields: Dict[str, str]
    lines: Tuple[str, ...] = ()
    page: Optional[int] = None
    schedule: Optional[str] = None


@dataclass
class TableHead:
    header_line: str
    layout: ColumnLayout
    remainder: str = field(repr=False, default="")


def read_table_head(body: str, *, page: Optional[int] = None, schedule: Optional[str] = None) -> TableHead:
    """Find the "#  ..." header at the top of a page body and build its layout."""
    match = TABLE_HEAD_RE.match(body)
    if not match:
        raise FormatError(
            "Can't find table head",
            page=page,
            schedule=schedule,
            line=body.strip().splitlines()[0] if body.strip() else "",
        )
    header_line = match.group(1)
    layout = detect_layout(header_line)
    if not layout:
        raise FormatError("Empty table head", page=page, schedule=schedule, line=header_line)
    return TableHead(header_line=header_line, layout=layout, remainder=body[match.end() :])


def continuation_key(name: str) -> str:
    """Field that receives a wrapped address-like value."""
    if name.endswith("address"):
        return name
    if name == "individual":
        return "payee_address"
    if name.endswith("_name"):
        return name[: -len("_name")] + "_address"
    return name + "_address"


def merge_continuation(
    row: Dict[str, str],
    values: Dict[str, str],
    *,
    page: Optional[int] = None,
    schedule: Optional[str] = None,
    line: Optional[str] = None,
) -> None:
    for name, value in values.items():
        if value == "":
            continue
        if ADDRESS_LIKE_FIELD_RE.search(name):
            key = continuation_key(name)
            row[key] = f"{row[key]}\n{value}" if row.get(key) else value
        elif name in FREE_TEXT_FIELDS:
            row[name] = f"{row[name]} {value}" if row.get(name) else value
        else:
            raise UnexpectedContinuationError(
                f'Unexpected row format: "{value}" found in {name} in later line',
                page=page,
                schedule=schedule,
                line=line,
            )


def build_row(
    lines: Sequence[str],
    layout: ColumnLayout,
    *,
    page: Optional[int] = None,
    schedule: Optional[str] = None,
) -> RawRow:
    fields = layout.slice(lines[0])
    if not fields.get(LINE_NUMBER_FIELD):
        raise MissingLineNumberError(
            "Missing line number", page=page, schedule=schedule, line=lines[0]
        )
    for line in lines[1:]:
        merge_continuation(
            fields, layout.slice(line), page=page, schedule=schedule, line=line
        )
    return RawRow(fields=fields, lines=tuple(lines), page=page, schedule=schedule)


def _starts_row(line: str) -> bool:
    return line[:1].isdigit()


def assemble_rows(
    text: str,
    layout: ColumnLayout,
    *,
    page: Optional[int] = None,
    schedule: Optional[str] = None,
) -> List[RawRow]:
    """
    Consume rows from the start of `text` up to the page's Subtotal line.

    `text` is the table body after the header; it must run straight into the
    first row (or Subtotal, for an empty table).
    """
    lines = text.split("\n")
    rows: List[RawRow] = []
    idx = 0
    while idx < len(lines) and _starts_row(lines[idx]):
        end = idx + 1
        while end < len(lines) and not _starts_row(lines[end]) and not SUBTOTAL_RE.match(lines[end]):
            end += 1
        row_lines = lines[idx:end]
        while row_lines and not row_lines[-1].strip():
            row_lines.pop()
        if len(row_lines) > MAX_ROW_LINES:
            raise TrailingContentError(
                f"Row spans {len(row_lines)} lines",
                page=page,
                schedule=schedule,
                line=row_lines[0],
            )
        rows.append(build_row(row_lines, layout, page=page, schedule=schedule))
        idx = end

    remainder = "\n".join(lines[idx:])
    if not SUBTOTAL_RE.match(remainder):
        raise TrailingContentError(
            "Unexpected format at end of page",
            page=page,
            schedule=schedule,
            line=remainder.strip().splitlines()[0] if remainder.strip() else "",
        )
    return rows


__all__ = [
    "RawRow",
    "TableHead",
    "assemble_rows",
    "build_row",
    "continuation_key",
    "read_table_head",
]
