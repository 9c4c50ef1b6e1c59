"""Unit tests for page splitting and page header validation."""

import pytest
import pytest_check as check

from fair_elections.errors import ErrorKind, FormatError, SequenceError
from fair_elections.pages import (
    find_deadline,
    read_page_header,
    segment_pages,
    split_pages,
)
from tests import builders


def _schedule_page(page: int, total: int, schedule: str) -> str:
    return builders.table_page(
        page,
        total,
        schedule,
        builders.contribution_header(),
        [builders.contribution_row(1, "Jane Doe", occupation="Teacher", employer="DCPS")],
    )


class TestSplitPages:
    """Tests for breaking the document into page chunks."""

    def test_one_chunk_per_page(self, contribution_report: str) -> None:
        """Cover, summary and schedule page come back as three chunks."""
        chunks = split_pages(contribution_report)
        check.equal(len(chunks), 3)
        check.is_true(chunks[2].startswith(builders.COMMITTEE_ID))

    def test_form_feeds_removed(self, contribution_report: str) -> None:
        """No chunk keeps the page separator."""
        for chunk in split_pages(contribution_report):
            check.is_not_in("\f", chunk)

    def test_splits_on_newline_before_committee_id(self) -> None:
        """A committee id at the start of a line also opens a page."""
        text = "FEP1 - A   Page 1 of 2\nbody\n  FEP1 - A   Page 2 of 2\nmore"
        chunks = split_pages(text)
        check.equal(len(chunks), 2)
        check.is_true(chunks[1].startswith("FEP1 - A"))


class TestReadPageHeader:
    """Tests for the header at the top of each page."""

    def test_reads_header_fields(self, contribution_page: str) -> None:
        """Committee id, name, page and schedule are extracted."""
        header = read_page_header(contribution_page, expected_page=3)
        assert header is not None
        check.equal(header.committee_id, builders.COMMITTEE_ID)
        check.equal(header.committee_name, builders.COMMITTEE_NAME)
        check.equal(header.page, 3)
        check.equal(header.schedule, "A")
        check.is_true(contribution_page[header.body_offset :].startswith("#"))

    def test_hyphen_removed_from_schedule(self) -> None:
        """"A-6" is reported as "A6"."""
        header = read_page_header(_schedule_page(4, 4, "A-6"))
        assert header is not None
        check.equal(header.schedule, "A6")

    def test_blank_chunk_is_skipped(self) -> None:
        """Whitespace-only chunks produce no header."""
        check.is_none(read_page_header("   \n\n"))

    def test_boilerplate_page_is_skipped(self) -> None:
        """Administrative runover pages produce no header."""
        chunk = (
            f"{builders.COMMITTEE_ID} - {builders.COMMITTEE_NAME}    Page 4 of 4\n"
            "Any information copied from such reports and statements may not be sold\n"
        )
        check.is_none(read_page_header(chunk, expected_page=4))

    def test_unrecognised_page_raises(self) -> None:
        """A page without a schedule header is a format error."""
        with pytest.raises(FormatError) as excinfo:
            read_page_header("Something else entirely\nsecond line\n", expected_page=7)
        check.equal(excinfo.value.page, 7)
        check.equal(excinfo.value.line, "Something else entirely")
        check.equal(excinfo.value.kind, ErrorKind.FORMAT)


class TestSegmentPages:
    """Tests for page iteration with numbering and schedule filters."""

    def test_yields_schedule_pages_only(self, contribution_report: str) -> None:
        """The two leading pages are never yielded."""
        pages = list(segment_pages(contribution_report))
        check.equal([page.number for page in pages], [3])
        check.equal(pages[0].schedule, "A")
        check.equal(pages[0].committee_name, builders.COMMITTEE_NAME)
        check.is_true(pages[0].body.startswith("#"))

    def test_page_number_mismatch_raises(self) -> None:
        """A page claiming to be page 5 in third position is rejected."""
        text = builders.report_with(_schedule_page(5, 5, "A"))
        with pytest.raises(SequenceError) as excinfo:
            list(segment_pages(text))
        check.equal(excinfo.value.page, 5)
        check.is_in("Expected page 3", str(excinfo.value))

    def test_excluded_schedule_dropped(self) -> None:
        """A-3 pages are validated and then left out."""
        text = builders.report_with(_schedule_page(3, 4, "A-3"), _schedule_page(4, 4, "A"))
        pages = list(segment_pages(text))
        check.equal([(page.number, page.schedule) for page in pages], [(4, "A")])

    def test_excluded_schedule_still_numbered(self) -> None:
        """Misnumbered excluded pages still raise."""
        text = builders.report_with(_schedule_page(9, 4, "A-7"), _schedule_page(4, 4, "A"))
        with pytest.raises(SequenceError):
            list(segment_pages(text))

    def test_exclusions_can_be_overridden(self) -> None:
        """Passing an empty exclusion set keeps A-3 pages."""
        text = builders.report_with(_schedule_page(3, 3, "A-3"))
        pages = list(segment_pages(text, excluded_schedules=()))
        check.equal([page.schedule for page in pages], ["A3"])

    def test_later_schedules_are_not_tabular(self) -> None:
        """Schedule C pages are yielded but flagged as metadata."""
        text = builders.report_with(
            _schedule_page(3, 4, "A"),
            builders.page_header(4, 4, "C", "Loans Received") + "Nothing to report\n",
        )
        pages = list(segment_pages(text))
        check.equal([page.is_tabular for page in pages], [True, False])
        check.equal(pages[1].body, "Nothing to report\n")


class TestFindDeadline:
    """Tests for the covering period end date."""

    def test_reads_end_of_period(self, contribution_report: str) -> None:
        """The second date of the covering period is the deadline."""
        check.equal(find_deadline(contribution_report), "2020-03-10")

    def test_missing_period_raises(self) -> None:
        """Reports without a covering period are rejected."""
        with pytest.raises(FormatError):
            find_deadline("FEP1 - Someone   Page 1 of 1\nno dates here\n")
