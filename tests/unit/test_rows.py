"""Unit tests for table head detection and row assembly."""

import pytest
import pytest_check as check

from fair_elections.columns import ColumnLayout
from fair_elections.errors import (
    FormatError,
    MissingLineNumberError,
    TrailingContentError,
    UnexpectedContinuationError,
)
from fair_elections.pages import read_page_header
from fair_elections.rows import (
    assemble_rows,
    build_row,
    continuation_key,
    merge_continuation,
    read_table_head,
)
from tests import builders

SUBTOTAL = "                                        Subtotal          $0.00\n"


def _body(page_text: str) -> str:
    header = read_page_header(page_text)
    assert header is not None
    return page_text[header.body_offset :]


class TestReadTableHead:
    """Tests for locating the header row of a page table."""

    def test_finds_header_and_remainder(self, contribution_page: str) -> None:
        """The header line is parsed and the remainder starts at row 1."""
        head = read_table_head(_body(contribution_page), page=3, schedule="A")
        check.equal(head.header_line, builders.contribution_header())
        check.equal(head.layout.names[0], "line_number")
        check.is_true(head.remainder.startswith("1 "))

    def test_allows_one_line_between_header_and_blank(self) -> None:
        """A sub-heading line may sit between the header and the rows."""
        body = builders.contribution_header() + "\n     (continued)\n\n" + SUBTOTAL
        head = read_table_head(body)
        check.is_true(head.remainder.lstrip().startswith("Subtotal"))

    def test_missing_head_raises(self) -> None:
        """A body without a "#" header is a format error."""
        with pytest.raises(FormatError) as excinfo:
            read_table_head("No itemized transactions\n", page=4, schedule="B")
        check.equal(excinfo.value.page, 4)
        check.equal(excinfo.value.schedule, "B")
        check.equal(excinfo.value.line, "No itemized transactions")


class TestContinuationKey:
    """Tests for where wrapped address text is stored."""

    def test_aliases(self) -> None:
        check.equal(continuation_key("contributor_name"), "contributor_address")
        check.equal(continuation_key("employer_name"), "employer_address")
        check.equal(continuation_key("individual"), "payee_address")
        check.equal(continuation_key("business"), "business_address")
        check.equal(continuation_key("address"), "address")
        check.equal(continuation_key("source_address"), "source_address")


class TestMergeContinuation:
    """Tests for folding a continuation line into a row."""

    def test_address_like_values_join_with_newline(self) -> None:
        row = {"contributor_name": "Jane Doe", "contributor_address": "1 Main St"}
        merge_continuation(row, {"contributor_name": "Washington, DC 20001"})
        check.equal(row["contributor_address"], "1 Main St\nWashington, DC 20001")
        check.equal(row["contributor_name"], "Jane Doe")

    def test_free_text_joins_with_space(self) -> None:
        row = {"occupation": "Software"}
        merge_continuation(row, {"occupation": "Engineer", "amount": ""})
        check.equal(row["occupation"], "Software Engineer")

    def test_first_value_has_no_separator(self) -> None:
        row = {"business": "Acme"}
        merge_continuation(row, {"business": "1 Main St"})
        check.equal(row["business_address"], "1 Main St")

    def test_value_in_other_column_raises(self) -> None:
        """Amounts never wrap, so one on a continuation line is an error."""
        with pytest.raises(UnexpectedContinuationError) as excinfo:
            merge_continuation({"amount": "$5.00"}, {"amount": "$1.00"}, page=3, line="x")
        check.is_in("amount", str(excinfo.value))
        check.equal(excinfo.value.page, 3)


class TestBuildRow:
    """Tests for building one raw row."""

    def test_single_line_matches_slice(self, contribution_layout: ColumnLayout) -> None:
        """Without continuations the row is exactly the sliced line."""
        lines = builders.contribution_row(2, "Jane Doe", occupation="Teacher", employer="DCPS")
        row = build_row(lines, contribution_layout, page=3, schedule="A")
        check.equal(row.fields, contribution_layout.slice(lines[0]))
        check.equal(row.lines, tuple(lines))
        check.equal(row.page, 3)

    def test_missing_line_number_raises(self, contribution_layout: ColumnLayout) -> None:
        line = builders.place((5, "Jane Doe"), (40, "Teacher"))
        with pytest.raises(MissingLineNumberError):
            build_row([line], contribution_layout)


class TestAssembleRows:
    """Tests for grouping table lines into rows."""

    def test_groups_continuation_lines(self, contribution_layout: ColumnLayout) -> None:
        lines = builders.contribution_row(
            1,
            "John Smith",
            occupation="Attorney",
            employer="Smith LLP",
            continuations=[
                ("123 Main Street NW", "1000 K Street NW"),
                ("Washington, DC 20001", "Washington, DC 20005"),
            ],
        ) + builders.contribution_row(2, "Jane Doe", occupation="Teacher")
        rows = assemble_rows("\n".join(lines) + "\n" + SUBTOTAL, contribution_layout)

        check.equal(len(rows), 2)
        check.equal(rows[0].fields["contributor_name"], "John Smith")
        check.equal(rows[0].fields["contributor_address"], "123 Main Street NW\nWashington, DC 20001")
        check.equal(rows[0].fields["employer_address"], "1000 K Street NW\nWashington, DC 20005")
        check.equal(rows[1].fields["line_number"], "2")
        check.is_not_in("contributor_address", rows[1].fields)

    def test_wrapped_occupation(self, contribution_layout: ColumnLayout) -> None:
        lines = builders.contribution_row(1, "Jane Doe", occupation="Software")
        lines.append(builders.place((40, "Engineer")))
        rows = assemble_rows("\n".join(lines) + "\n" + SUBTOTAL, contribution_layout)
        check.equal(rows[0].fields["occupation"], "Software Engineer")

    def test_blank_lines_inside_table_are_ignored(self, contribution_layout: ColumnLayout) -> None:
        lines = builders.contribution_row(1, "Jane Doe") + [""]
        rows = assemble_rows("\n".join(lines) + "\n" + SUBTOTAL, contribution_layout)
        check.equal(len(rows), 1)
        check.equal(rows[0].lines, tuple(lines[:1]))

    def test_empty_table(self, contribution_layout: ColumnLayout) -> None:
        check.equal(assemble_rows(SUBTOTAL, contribution_layout), [])

    def test_overlong_row_raises(self, contribution_layout: ColumnLayout) -> None:
        """Rows may not run past six lines."""
        lines = builders.contribution_row(
            1,
            "Jane Doe",
            continuations=[(f"Line {n}", "") for n in range(6)],
        )
        with pytest.raises(TrailingContentError):
            assemble_rows("\n".join(lines) + "\n" + SUBTOTAL, contribution_layout, page=3)

    def test_content_without_subtotal_raises(self, contribution_layout: ColumnLayout) -> None:
        with pytest.raises(TrailingContentError) as excinfo:
            assemble_rows("Total receipts this period\n", contribution_layout, schedule="A")
        check.equal(excinfo.value.line, "Total receipts this period")
        check.equal(excinfo.value.schedule, "A")

    def test_amount_on_continuation_line_raises(self, contribution_layout: ColumnLayout) -> None:
        lines = builders.contribution_row(1, "Jane Doe")
        lines.append(builders.place(builders.right(builders.CONTRIBUTION_AMOUNT_END, "$5.00")))
        with pytest.raises(UnexpectedContinuationError):
            assemble_rows("\n".join(lines) + "\n" + SUBTOTAL, contribution_layout)
