"""Pytest fixtures and shared test configuration.

Fixtures:
    - contribution_layout: ColumnLayout for the standard contribution table
    - expenditure_layout: ColumnLayout for the standard expenditure table
    - contribution_page: one Schedule A page with a wrapped and an unwrapped row
    - contribution_report: three-page report containing `contribution_page`
"""

import pytest

from fair_elections.columns import ColumnLayout, detect_layout
from tests import builders


@pytest.fixture
def contribution_layout() -> ColumnLayout:
    """Layout detected from the synthetic contribution header."""
    return detect_layout(builders.contribution_header())


@pytest.fixture
def expenditure_layout() -> ColumnLayout:
    """Layout detected from the synthetic expenditure header."""
    return detect_layout(builders.expenditure_header())


@pytest.fixture
def contribution_page() -> str:
    """Page 3, Schedule A: row 1 wraps onto two address lines, row 2 does not.

    Returns:
        Page text including its header and Subtotal line.
    """
    return builders.table_page(
        3,
        3,
        "A",
        builders.contribution_header(),
        [
            builders.contribution_row(
                1,
                "John A. Smith Jr.",
                occupation="Attorney",
                employer="Smith & Jones LLP",
                amount="$250.00",
                continuations=[
                    ("123 Main Street NW", "1000 K Street NW"),
                    ("Washington, DC 20001", "Washington, DC-20005"),
                ],
            ),
            builders.contribution_row(
                2,
                "Jane Doe",
                occupation="Teacher",
                employer="DCPS",
                mode="Credit Card",
                date="02/01/2020",
                amount="$1,234.50",
            ),
        ],
        description="Contributions from Individuals",
    )


@pytest.fixture
def contribution_report(contribution_page: str) -> str:
    """Cover, summary and one contribution page."""
    return builders.report_with(contribution_page)
