"""
Parse the full text of a Fair Elections report into grouped records.

This is the entry point most callers want: give it the text produced by the
PDF-to-text step and it returns the committee name, the report deadline and
the records of each schedule in page order. Any layout surprise aborts the
whole document; there is no partial output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Collection, Dict, List, Optional

from .errors import ReportParseError, SequenceError
from .pages import (
    EXCLUDED_SCHEDULES,
    FIRST_PAGE_NUMBER,
    SKIPPED_LEADING_PAGES,
    Page,
    find_deadline,
    segment_pages,
)
from .records import Contribution, Expenditure, Record, normalize_row
from .rows import assemble_rows, read_table_head


@dataclass
class ParsedReport:
    committee_name: str
    deadline: str
    rows_by_schedule: Dict[str, List[Record]] = field(default_factory=dict)
    committee_id: str = ""
    pages: List[Page] = field(default_factory=list)

    @property
    def contributions(self) -> List[Contribution]:
        return [
            record
            for schedule, records in self.rows_by_schedule.items()
            if schedule.startswith("A")
            for record in records
        ]

    @property
    def expenditures(self) -> List[Expenditure]:
        return [
            record
            for schedule, records in self.rows_by_schedule.items()
            if schedule.startswith("B")
            for record in records
        ]

    def to_dict(self) -> dict:
        return {
            "committee_name": self.committee_name,
            "deadline": self.deadline,
            "rows_by_schedule": {
                schedule: [record.to_dict() for record in records]
                for schedule, records in self.rows_by_schedule.items()
            },
        }


@dataclass
class ParseOutcome:
    """Result of `try_parse_report`: exactly one of report/error is set."""

    report: Optional[ParsedReport] = None
    error: Optional[ReportParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_page_records(page: Page) -> List[Record]:
    """Read the table on one schedule page and normalize each of its rows."""
    head = read_table_head(page.body, page=page.number, schedule=page.schedule)
    page.rows = assemble_rows(
        head.remainder, head.layout, page=page.number, schedule=page.schedule
    )
    records = [
        normalize_row(
            raw,
            head.layout,
            committee_name=page.committee_name,
            schedule=page.schedule,
        )
        for raw in page.rows
    ]
    logging.debug(
        "Parsed %d rows from page %d (schedule %s)",
        len(records),
        page.number,
        page.schedule,
    )
    return records


def parse_report(
    text: str,
    *,
    skip_pages: int = SKIPPED_LEADING_PAGES,
    first_page: int = FIRST_PAGE_NUMBER,
    excluded_schedules: Collection[str] = EXCLUDED_SCHEDULES,
) -> ParsedReport:
    """
    Parse a whole report.

    Records are grouped by schedule code. Within a schedule the line numbers
    must run 1, 2, 3, ... across pages; they restart when the schedule
    changes. A schedule that comes back after another one has started is
    treated as a sequence error.
    """
    deadline = find_deadline(text)
    committee_id = ""
    committee_name = ""
    rows_by_schedule: Dict[str, List[Record]] = {}
    pages: List[Page] = []
    current_schedule: Optional[str] = None
    line_number = 0

    for page in segment_pages(
        text,
        skip_pages=skip_pages,
        first_page=first_page,
        excluded_schedules=excluded_schedules,
    ):
        pages.append(page)
        if page.committee_name:
            committee_name = page.committee_name
            committee_id = page.committee_id
        if not page.is_tabular:
            logging.debug("Keeping schedule %s page %d as metadata only", page.schedule, page.number)
            continue

        if page.schedule != current_schedule:
            if page.schedule in rows_by_schedule:
                raise SequenceError(
                    f"Schedule {page.schedule} resumes after schedule {current_schedule}",
                    page=page.number,
                    schedule=page.schedule,
                )
            current_schedule = page.schedule
            rows_by_schedule[current_schedule] = []
            line_number = 0

        for record in parse_page_records(page):
            line_number += 1
            if record.line_number != line_number:
                raise SequenceError(
                    f"Expected line {line_number}, got line {record.line_number}",
                    page=page.number,
                    schedule=page.schedule,
                )
            rows_by_schedule[current_schedule].append(record)

    logging.info(
        "Parsed report for %s (deadline %s): %s",
        committee_name or "unknown committee",
        deadline,
        ", ".join(f"{code}={len(rows)}" for code, rows in rows_by_schedule.items()) or "no rows",
    )
    return ParsedReport(
        committee_name=committee_name,
        deadline=deadline,
        rows_by_schedule=rows_by_schedule,
        committee_id=committee_id,
        pages=pages,
    )


def try_parse_report(text: str, **options) -> ParseOutcome:
    """Like `parse_report`, but report-format problems come back as a value."""
    try:
        return ParseOutcome(report=parse_report(text, **options))
    except ReportParseError as exc:
        logging.debug("Report rejected: %s", exc)
        return ParseOutcome(error=exc)


__all__ = [
    "ParseOutcome",
    "ParsedReport",
    "parse_page_records",
    "parse_report",
    "try_parse_report",
]
