"""
Turn raw table rows into canonical contribution and expenditure records.

Schedule A pages list contributions and Schedule B pages list expenditures,
but each lettered sub-schedule uses its own columns. Which sub-variant a row
belongs to is decided by which optional columns carry a value; the tags are
enumerated here so every combination can be reasoned about (and tested) in
one place.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, Mapping, Optional, Union

from .columns import LINE_NUMBER_FIELD, ColumnLayout
from .errors import ReportParseError, SequenceError, UnknownScheduleTypeError
from .normalize import (
    fix_amount,
    fix_date,
    make_address,
    make_name,
    normalize_name_and_address,
    parse_address,
    parse_name,
)
from .rows import RawRow

TREASURY_PAYEE = "DC Treasury"
REFUND_PURPOSE = "Refund"
# A table with this column lists contributions; anything else lists expenditures.
RECEIPT_DATE_FIELD = "receipt_date"


class ContributionVariant(str, Enum):
    UNAUTHORIZED = "unauthorized"  # business + free-standing address column
    ORGANIZATION = "organization"  # A-6
    INDIVIDUAL = "individual"


class ExpenditureVariant(str, Enum):
    REFUND = "refund"
    TREASURY_PAYMENT = "treasury_payment"  # B-5
    EQUIPMENT = "equipment"  # B-1
    PAYMENT = "payment"


@dataclass
class Contribution:
    line_number: int
    committee_name: str = ""
    contributor_first_name: str = ""
    contributor_middle_name: str = ""
    contributor_last_name: str = ""
    contributor_organization_name: str = ""
    number_and_street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    contributor_type: str = ""
    contribution_type: str = ""
    employer_name: str = ""
    employer_address: str = ""
    occupation: str = ""
    receipt_date: str = ""
    amount: Union[Decimal, str] = ""
    normalized: str = ""
    schedule: str = ""
    page: Optional[int] = None
    extra: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Expenditure:
    line_number: int
    committee_name: str = ""
    payee_first_name: str = ""
    payee_middle_name: str = ""
    payee_last_name: str = ""
    payee_organization_name: str = ""
    number_and_street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    purpose_of_expenditure: str = ""
    payment_date: str = ""
    amount: Union[Decimal, str] = ""
    normalized: str = ""
    schedule: str = ""
    page: Optional[int] = None
    extra: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


Record = Union[Contribution, Expenditure]


def classify_contribution(fields: Mapping[str, str]) -> ContributionVariant:
    if fields.get("address"):
        return ContributionVariant.UNAUTHORIZED
    if fields.get("organization_name"):
        return ContributionVariant.ORGANIZATION
    return ContributionVariant.INDIVIDUAL


def classify_expenditure(fields: Mapping[str, str]) -> ExpenditureVariant:
    if fields.get("refund_date"):
        return ExpenditureVariant.REFUND
    if fields.get("mode_of_payment"):
        return ExpenditureVariant.TREASURY_PAYMENT
    if fields.get("equipment_short_description"):
        return ExpenditureVariant.EQUIPMENT
    return ExpenditureVariant.PAYMENT


def normalize_employer_address(value: str) -> str:
    """One-line employer address with "ST ZIP" rather than "ST-ZIP"."""
    text = value.replace("\n", ", ")
    text = re.sub(r",[\s,]*", ", ", text)
    return re.sub(r", ([A-Z]{2})-(\d{5}(?:-\d{4})?)$", r", \1 \2", text)


def _contribution_fields(fields: Dict[str, str]) -> Dict[str, str]:
    row = dict(fields)
    variant = classify_contribution(row)
    if variant is ContributionVariant.UNAUTHORIZED:
        business = row.pop("business", "")
        business_address = row.pop("business_address", "")
        if business_address:
            business = f"{business} {business_address}"
        row["contributor_name"] = business
        row["contributor_address"] = row.pop("address", "")
    else:
        if variant is ContributionVariant.ORGANIZATION:
            row["contributor_name"] = row.pop("organization_name", "")
            row["contributor_address"] = row.pop("organization_address", "")
            row.pop("phone_number", None)
        row["employer_address"] = normalize_employer_address(row.get("employer_address", ""))
        row.pop("cumulative_amount", None)
    row["contributor_organization_name"] = ""
    row["contribution_type"] = row.pop("mode_of_payment", "")
    row["contributor_type"] = "Candidate" if row.pop("relationship", "") else "Individual"
    row["receipt_date"] = fix_date(row.get("receipt_date", ""))
    return row


def _expenditure_fields(fields: Dict[str, str]) -> Dict[str, str]:
    row = dict(fields)
    variant = classify_expenditure(row)
    if variant is ExpenditureVariant.REFUND:
        if row.get("individual"):
            row["payee_name"] = row.pop("individual")
        elif row.get("contributor_name"):
            row["payee_name"] = row.pop("contributor_name")
            row["payee_address"] = row.pop("contributor_address", "")
        row["purpose_of_expenditure"] = REFUND_PURPOSE
        row["payment_date"] = row.pop("refund_date")
        for dropped in ("individual", "contribution_date", "reason", "mode_of_payment"):
            row.pop(dropped, None)
    elif variant is ExpenditureVariant.TREASURY_PAYMENT:
        row["payee_name"] = TREASURY_PAYEE
        row["purpose_of_expenditure"] = row.pop("reason", "")
        row.pop("mode_of_payment", None)
        row["payment_date"] = row.pop("date", "")
    elif variant is ExpenditureVariant.EQUIPMENT:
        row["purpose_of_expenditure"] = row.pop("equipment_short_description")
        row["payee_name"] = row.pop("source", "")
        row["payee_address"] = row.pop("source_address", "")
        row.pop("source_type", None)
        row["payment_date"] = row.pop("date", "")
    else:
        row["payee_name"] = row.pop("business", "")
        row["payee_address"] = row.pop("business_address", "")
        row["payment_date"] = row.pop("date", "")
    row["payment_date"] = fix_date(row.get("payment_date", ""))
    return row


def _split_party(row: Dict[str, str], prefix: str) -> None:
    name = row.pop(f"{prefix}_name", "")
    if name:
        parts = parse_name(name)
        row[f"{prefix}_first_name"] = parts.first
        row[f"{prefix}_middle_name"] = parts.middle
        row[f"{prefix}_last_name"] = parts.last
    address = row.pop(f"{prefix}_address", "")
    if address:
        parsed = parse_address(address)
        row["number_and_street"] = parsed.street
        row["city"] = parsed.city
        row["state"] = parsed.state
        row["zip"] = parsed.zip


def _build(cls, row: Dict[str, str], **values) -> Record:
    known = set(cls.__dataclass_fields__) - {"extra"}
    kwargs = {key: value for key, value in row.items() if key in known}
    kwargs.update(values)
    extra = {key: value for key, value in row.items() if key not in known}
    return cls(extra=extra, **kwargs)


def normalize_row(
    raw: RawRow,
    layout: ColumnLayout,
    *,
    committee_name: str = "",
    schedule: Optional[str] = None,
) -> Record:
    """
    Map one raw row onto a Contribution or Expenditure.

    The record type follows the table layout (a Receipt Date column means
    contributions); the sub-variant follows which optional columns are filled.
    """
    schedule = schedule if schedule is not None else (raw.schedule or "")
    if schedule[:1] not in ("A", "B"):
        raise UnknownScheduleTypeError(
            f"No record type for schedule {schedule!r}",
            page=raw.page,
            schedule=schedule,
            line=raw.lines[0] if raw.lines else None,
        )
    try:
        if RECEIPT_DATE_FIELD in layout:
            cls = Contribution
            row = _contribution_fields(raw.fields)
            _split_party(row, "contributor")
        else:
            cls = Expenditure
            row = _expenditure_fields(raw.fields)
            _split_party(row, "payee")
        line_number = row.pop(LINE_NUMBER_FIELD, "")
        if not line_number.isdigit():
            raise SequenceError(f"Non-numeric line number {line_number!r}")
        amount = fix_amount(row.pop("amount", ""))
        record = _build(
            cls,
            row,
            line_number=int(line_number),
            amount=amount,
            committee_name=committee_name,
            schedule=schedule,
            page=raw.page,
        )
    except ReportParseError as exc:
        raise exc.with_context(page=raw.page, schedule=schedule)
    record.normalized = normalize_name_and_address(make_name(record), make_address(record))
    return record


__all__ = [
    "Contribution",
    "ContributionVariant",
    "Expenditure",
    "ExpenditureVariant",
    "Record",
    "classify_contribution",
    "classify_expenditure",
    "normalize_employer_address",
    "normalize_row",
]
