"""
Split a report's text into pages and read each page's header.

Every schedule page opens with a line like

    FEP00123 - Friends of Jane Doe        Page 4 of 12
    SCHEDULE A-1  Contributions from Individuals

The first two pages of a report (cover page and summary) carry no schedule
data and are skipped. Administrative runover pages that contain only
boilerplate footer text are tolerated; anything else without a recognisable
header is a format error.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Collection, Iterator, List, Optional

from .errors import FormatError, SequenceError

COMMITTEE_ID_PREFIX = "FEP"
SKIPPED_LEADING_PAGES = 2
FIRST_PAGE_NUMBER = 3
# Public funds (A-3) and interest/offsets (A-7) carry no contributor rows.
EXCLUDED_SCHEDULES = frozenset({"A3", "A7"})
FIRST_UNPARSED_SCHEDULE = "C"

PAGE_BOUNDARY_RE = re.compile(rf"[\n\f] *(?={COMMITTEE_ID_PREFIX}\w+\s+-\s)")
PAGE_HEADER_RE = re.compile(
    r"^(?P<committee_id>\S+) - (?P<committee_name>\S[^\n]+\S)\s+"
    r"Page (?P<page>\d+) of \d+\s+"
    r"SCHEDULE (?P<schedule>\S+)[^\S\n]+[^\n]+\n+"
)
BOILERPLATE_PAGE_RE = re.compile(
    r"Page \d+ of \d+\s+(?:Any information copied from"
    r"|2\. Total Debts incurred This Period"
    r"|4\. Balance Outstanding at the end of this period)"
)
DEADLINE_RE = re.compile(
    r"Covering Period \d\d/\d\d/\d{4} through (\d\d)/(\d\d)/(\d{4})"
)


@dataclass(frozen=True)
class PageHeader:
    committee_id: str
    committee_name: str
    page: int
    schedule: str
    body_offset: int = 0


@dataclass
class Page:
    number: int
    schedule: str
    committee_id: str
    committee_name: str
    body: str = ""
    rows: List = field(default_factory=list)

    @property
    def is_tabular(self) -> bool:
        """True for schedules whose table layout we know how to read."""
        return self.schedule < FIRST_UNPARSED_SCHEDULE


def split_pages(text: str) -> List[str]:
    """Break document text into raw page chunks with form feeds removed."""
    return [chunk.replace("\f", "") for chunk in PAGE_BOUNDARY_RE.split(text)]


def first_line(text: str) -> str:
    stripped = text.strip()
    return stripped.splitlines()[0] if stripped else ""


def read_page_header(chunk: str, *, expected_page: Optional[int] = None) -> Optional[PageHeader]:
    """
    Parse the header at the top of a page chunk.

    Returns None for blank chunks and for boilerplate runover pages. Raises
    FormatError when the chunk is neither.
    """
    if not chunk.strip():
        return None
    match = PAGE_HEADER_RE.match(chunk)
    if not match:
        if BOILERPLATE_PAGE_RE.search(chunk):
            logging.debug("Skipping boilerplate runover page %s", expected_page)
            return None
        raise FormatError(
            "Unexpected header in page",
            page=expected_page,
            line=first_line(chunk),
        )
    return PageHeader(
        committee_id=match.group("committee_id"),
        committee_name=match.group("committee_name"),
        page=int(match.group("page")),
        schedule=match.group("schedule").replace("-", ""),
        body_offset=match.end(),
    )


def segment_pages(
    text: str,
    *,
    skip_pages: int = SKIPPED_LEADING_PAGES,
    first_page: int = FIRST_PAGE_NUMBER,
    excluded_schedules: Collection[str] = EXCLUDED_SCHEDULES,
) -> Iterator[Page]:
    """
    Yield each schedule page of the document in order.

    Page numbers are checked against a running counter; administrative
    schedules are validated and then dropped. Pages for schedules at or after
    "C" are yielded with their body but are never broken into rows.
    """
    expected = first_page - 1
    for chunk in split_pages(text)[skip_pages:]:
        expected += 1
        header = read_page_header(chunk, expected_page=expected)
        if header is None:
            continue
        if header.page != expected:
            raise SequenceError(
                f"Expected page {expected}, got page {header.page}",
                page=header.page,
                schedule=header.schedule,
                line=first_line(chunk),
            )
        if header.schedule in excluded_schedules:
            logging.debug(
                "Skipping administrative schedule %s on page %d",
                header.schedule,
                header.page,
            )
            continue
        yield Page(
            number=header.page,
            schedule=header.schedule,
            committee_id=header.committee_id,
            committee_name=header.committee_name,
            body=chunk[header.body_offset :],
        )


def find_deadline(text: str) -> str:
    """Return the end of the covering period as YYYY-MM-DD."""
    match = DEADLINE_RE.search(text)
    if not match:
        raise FormatError("Missing covering period deadline", line=first_line(text))
    month, day, year = match.groups()
    return f"{year}-{month}-{day}"


__all__ = [
    "EXCLUDED_SCHEDULES",
    "Page",
    "PageHeader",
    "find_deadline",
    "read_page_header",
    "segment_pages",
    "split_pages",
]
