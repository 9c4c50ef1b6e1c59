"""
Tabular views of parsed records for the export and limit-checking steps.

Nothing here writes files; callers decide whether a DataFrame ends up in a
CSV, a workbook or a database.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence, Tuple

import pandas as pd

from .records import Contribution, Expenditure
from .report import ParsedReport

CONTRIBUTION_EXPORT_COLUMNS = [
    "contributor_first_name",
    "contributor_middle_name",
    "contributor_last_name",
    "number_and_street",
    "city",
    "state",
    "zip",
    "occupation",
    "employer_name",
    "employer_address",
    "contribution_type",
    "receipt_date",
    "amount",
]
REFUND_PURPOSES = ("Refund", "Return Check and Fees")
EXCESS_COLUMNS = [
    "Committee",
    "First Name",
    "Middle Name",
    "Last Name",
    "Address",
    "City",
    "State",
    "Zip",
    "Date",
    "Amount",
    "Total",
    "Excess",
]
GROUP_COLUMNS = ["committee_name", "normalized"]


def contributions_frame(
    records: Iterable[Contribution],
    columns: Sequence[str] = CONTRIBUTION_EXPORT_COLUMNS,
) -> pd.DataFrame:
    """Contribution records as a DataFrame limited to `columns`, in order."""
    rows = [record.to_dict() for record in records]
    if not rows:
        return pd.DataFrame(columns=list(columns))
    return pd.DataFrame(rows)[list(columns)]


def refund_contributions(report: ParsedReport) -> List[Contribution]:
    """
    Negative contributions offsetting refunds and returned checks.

    An expenditure only counts when its identity key matches a contribution
    from the same committee; the contributor's type, employer and occupation
    are copied from the first such contribution.
    """
    by_key: Dict[Tuple[str, str], Contribution] = {}
    for contribution in report.contributions:
        by_key.setdefault((contribution.committee_name, contribution.normalized), contribution)

    offsets: List[Contribution] = []
    for expenditure in report.expenditures:
        if expenditure.purpose_of_expenditure not in REFUND_PURPOSES:
            continue
        if not isinstance(expenditure.amount, Decimal):
            continue
        match = by_key.get((expenditure.committee_name, expenditure.normalized))
        if match is None:
            continue
        offsets.append(_offset_for(expenditure, match))
    return offsets


def _offset_for(expenditure: Expenditure, contribution: Contribution) -> Contribution:
    return replace(
        contribution,
        line_number=expenditure.line_number,
        contributor_first_name=expenditure.payee_first_name,
        contributor_middle_name=expenditure.payee_middle_name,
        contributor_last_name=expenditure.payee_last_name,
        number_and_street=expenditure.number_and_street,
        city=expenditure.city,
        state=expenditure.state,
        zip=expenditure.zip,
        contribution_type=expenditure.purpose_of_expenditure,
        receipt_date=expenditure.payment_date,
        amount=-expenditure.amount,
        normalized=expenditure.normalized,
        schedule=expenditure.schedule,
        page=expenditure.page,
        extra={},
    )


def excess_contributions(records: Iterable[Contribution], limit: Decimal) -> pd.DataFrame:
    """
    Contributions from contributors whose total to one committee is over `limit`.

    Rows are grouped by committee and identity key and sorted by date; the
    group total and the amount over the limit appear on the first row of each
    group only.
    """
    rows = [record.to_dict() for record in records if isinstance(record.amount, Decimal)]
    totals: Dict[Tuple[str, str], Decimal] = {}
    for row in rows:
        key = (row["committee_name"], row["normalized"])
        totals[key] = totals.get(key, Decimal(0)) + row["amount"]
    over = {key: total for key, total in totals.items() if total > limit}
    if not over:
        return pd.DataFrame(columns=EXCESS_COLUMNS)

    frame = pd.DataFrame(rows)
    frame["total"] = [over.get(key) for key in zip(frame["committee_name"], frame["normalized"])]
    frame = frame[frame["total"].notna()]
    frame = frame.sort_values(GROUP_COLUMNS + ["receipt_date"], kind="stable")

    first_in_group = ~frame.duplicated(GROUP_COLUMNS)
    total = frame["total"]
    result = pd.DataFrame(
        {
            "Committee": frame["committee_name"],
            "First Name": frame["contributor_first_name"],
            "Middle Name": frame["contributor_middle_name"],
            "Last Name": frame["contributor_last_name"],
            "Address": frame["number_and_street"],
            "City": frame["city"],
            "State": frame["state"],
            "Zip": frame["zip"],
            "Date": frame["receipt_date"],
            "Amount": frame["amount"],
            "Total": total.where(first_in_group, ""),
            "Excess": (total - limit).where(first_in_group, ""),
        }
    )
    return result.reset_index(drop=True)


__all__ = [
    "CONTRIBUTION_EXPORT_COLUMNS",
    "contributions_frame",
    "excess_contributions",
    "refund_contributions",
]
