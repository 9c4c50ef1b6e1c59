"""
Scalar clean-up, name/address decomposition and the contributor identity key.

`normalize_name_and_address` produces the string used downstream to add up
contributions per contributor and to spot duplicates, so it has to map the
many ways a report spells the same person and address onto one value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Union

from .errors import AddressFormatError, NameFormatError

_DATE_RE = re.compile(r"^(\d\d)/(\d\d)/(\d{4})$")
_AMOUNT_RE = re.compile(r"^\$?(?:\d[\d,]*(?:\.\d*)?|\.\d+)$")
_NAME_RE = re.compile(r"^(?:(\S+)(?: (.+?))? )?(\S+(?: (?:[JS]r|I+|IV|VI*)\.?)?)$")
_ADDRESS_LAST_LINE_RE = re.compile(r"^(\S.+\S),\s*([A-Z]{2})[- ](\d{5}(?:-\d{4})?)$")

STREET_TYPE_ABBREVIATIONS = {
    "STREET": "ST",
    "ROAD": "RD",
    "DRIVE": "DR",
    "AVENUE": "AVE",
    "COURT": "CT",
    "LANE": "LN",
    "TERRACE": "TER",
    "CIRCLE": "CIR",
    "BOULEVARD": "BLVD",
    "HIGHWAY": "HWY",
    "PLACE": "PL",
    "PARKWAY": "PKWY",
    "SQUARE": "SQ",
    "NORTHWEST": "NW",
    "NORTHEAST": "NE",
    "SOUTHWEST": "SW",
    "SOUTHEAST": "SE",
}
ORDINAL_ABBREVIATIONS = {
    "FIRST": "1ST",
    "SECOND": "2ND",
    "THIRD": "3RD",
    "FOURTH": "4TH",
    "FIFTH": "5TH",
    "SIXTH": "6TH",
    "SEVENTH": "7TH",
    "EIGHTH": "8TH",
    "NINTH": "9TH",
    "TENTH": "10TH",
    "ELEVENTH": "11TH",
    "TWELFTH": "12TH",
    "THIRTEENTH": "13TH",
    "FOURTEENTH": "14TH",
    "FIFTEENTH": "15TH",
    "SIXTEENTH": "16TH",
    "SEVENTEENTH": "17TH",
    "EIGHTEENTH": "18TH",
    "NINETEENTH": "19TH",
    "TWENTIETH": "20TH",
}
_STREET_TYPE_RE = re.compile(r"\b(" + "|".join(STREET_TYPE_ABBREVIATIONS) + r")\b")
_ORDINAL_RE = re.compile(r"\b(" + "|".join(ORDINAL_ABBREVIATIONS) + r")\b")
_CORPORATE_SUFFIX_RE = re.compile(
    r"(?: (?:LTD|LLC|LLP|PLLC|INC|CORP|LP|PA|CO|LLLP|PLLP|PLC|PC))+$"
)
_STATE_NAMES = (
    (re.compile(r" VIRGINIA$"), " VA"),
    (re.compile(r" MARYLAND$"), " MD"),
    (re.compile(r" DISTRICT OF COLUMBIA$"), " DC"),
)
_CAPITOL_PREFIXES = (
    (re.compile(r"\bE CAPITOL\b"), "EAST CAPITOL"),
    (re.compile(r"\bN CAPITOL\b"), "NORTH CAPITOL"),
    (re.compile(r"\bS CAPITOL\b"), "SOUTH CAPITOL"),
)


@dataclass(frozen=True)
class PersonName:
    first: str
    middle: str
    last: str


@dataclass(frozen=True)
class Address:
    street: str
    city: str
    state: str
    zip: str


def fix_date(value: str) -> str:
    """MM/DD/YYYY -> YYYY-MM-DD; anything else is returned unchanged."""
    if not value:
        return value
    return _DATE_RE.sub(r"\3-\1-\2", value)


def fix_amount(value: str) -> Union[Decimal, str]:
    """Convert a plain currency string to Decimal; leave "N/A" and the like alone."""
    if not value or not _AMOUNT_RE.match(value):
        return value
    try:
        return Decimal(value.replace("$", "").replace(",", ""))
    except InvalidOperation:
        return value


def parse_name(name: str) -> PersonName:
    """Split "First [Middle] Last[ Jr.]" into its parts."""
    collapsed = " ".join(name.split())
    match = _NAME_RE.match(collapsed)
    if not match:
        raise NameFormatError(f'Unexpected name format "{name}"', line=name)
    first, middle, last = match.groups()
    return PersonName(first=first or "", middle=middle or "", last=last)


def parse_address(address: str) -> Address:
    """
    Split a multi-line address whose last line is "City, ST 12345[-6789]".

    Earlier lines are joined with ", " to form the street part.
    """
    lines = address.strip().split("\n")
    last_line = lines.pop().strip()
    match = _ADDRESS_LAST_LINE_RE.match(last_line)
    if not match:
        raise AddressFormatError(f'Unexpected address format "{address}"', line=address)
    city, state, zip_code = match.groups()
    return Address(
        street=", ".join(line.strip() for line in lines),
        city=city,
        state=state,
        zip=zip_code,
    )


def _normalize_name(name: str) -> str:
    text = name.upper()
    text = re.sub(r"[ ,]*,[ ,]*", " ", text)
    text = text.replace(".", "")
    text = re.sub(r"^(?:MR|MS|MRS|DR) ", "", text)
    text = re.sub(r" AND ", " & ", text)
    text = re.sub(r"\s*\+\s*", " & ", text)
    text = re.sub(r"^THE ", "", text)
    text = _CORPORATE_SUFFIX_RE.sub("", text)
    text = re.sub(r"\s*&\s*", " & ", text)
    text = re.sub(r"[\- ]*-[\- ]*", " ", text)
    return " ".join(text.split())


def _normalize_address(address: str) -> str:
    text = address.upper()
    text = re.sub(r"[ ,]*,[ ,]*", " ", text)
    text = text.replace(".", "").replace("'", "")
    text = re.sub(r"[()]", "", text)
    text = " ".join(text.split())
    text = re.sub(r"[ \-][\d \-]+$", "", text)  # zip
    text = re.sub(r"[\- ]*-[\- ]*", " ", text)
    for pattern, replacement in _STATE_NAMES:
        text = pattern.sub(replacement, text)
    text = re.sub(r" MC LEAN\b", " MCLEAN", text)

    text = re.sub(r"\b(?:SUITE|STE|APT|APARTMENT|UNIT)\b[ #]*", "#", text)
    text = re.sub(r"#\s+", "#", text)
    text = re.sub(r"( [NS][EW] )\S+ (?=WASHINGTON)", r"\1", text)  # unit with no marker
    text = re.sub(r" FL(?:OOR)? \d\d?(?:[NR]?D|ST|TH)?(?= |$)", "", text)
    text = re.sub(r" \d\d?(?:[NR]?D|ST|TH)? FL(?:OOR)?(?= |$)", "", text)

    text = re.sub(r"( \w+)(\1 [A-Z]{2})$", r"\2", text)  # repeated city
    text = re.sub(r"( \w+ [A-Z]{2})\1$", r"\1", text)  # repeated city and state
    text = re.sub(r"\s*#\S*", "", text)

    text = re.sub(r"\W+", " ", text)
    text = _STREET_TYPE_RE.sub(lambda m: STREET_TYPE_ABBREVIATIONS[m.group(1)], text)
    text = _ORDINAL_RE.sub(lambda m: ORDINAL_ABBREVIATIONS[m.group(1)], text)
    text = re.sub(r"\b([NS]) ([EW])\b", r"\1\2", text)
    for pattern, replacement in _CAPITOL_PREFIXES:
        text = pattern.sub(replacement, text)
    text = re.sub(r"\bEYE ST\b", "I ST", text)
    text = re.sub(r"\bQUE ST\b", "Q ST", text)
    return " ".join(text.split())


def normalize_name_and_address(name: str, address: str = "") -> str:
    """
    Build the identity key "<NAME>, <ADDRESS>" (or just "<NAME>").

    >>> normalize_name_and_address("The Acme Group, LLC", "1 First Street NE, Washington, DC 20002")
    'ACME GROUP, 1 1ST ST NE WASHINGTON DC'
    """
    normalized = _normalize_name(name)
    if address:
        normalized += ", " + _normalize_address(address)
    return normalized


def make_name(record: Union[Mapping[str, Any], Any], prefix: str = "") -> str:
    """Rejoin first/middle/last/organization name columns of a record."""
    if not prefix:
        prefix = "contributor_" if _lookup(record, "contributor_last_name") is not None else "payee_"
    parts = (
        _lookup(record, prefix + column)
        for column in ("first_name", "middle_name", "last_name", "organization_name")
    )
    return " ".join(part for part in parts if part)


def make_address(record: Union[Mapping[str, Any], Any]) -> str:
    """Rejoin number_and_street/city/state/zip as "street, city, ST zip"."""
    address = _lookup(record, "number_and_street") or ""
    for column, separator in (("city", ", "), ("state", ", "), ("zip", " ")):
        value = _lookup(record, column)
        if value:
            address = f"{address}{separator}{value}" if address else value
    return address


def _lookup(record: Union[Mapping[str, Any], Any], key: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


__all__ = [
    "Address",
    "ORDINAL_ABBREVIATIONS",
    "PersonName",
    "STREET_TYPE_ABBREVIATIONS",
    "fix_amount",
    "fix_date",
    "make_address",
    "make_name",
    "normalize_name_and_address",
    "parse_address",
    "parse_name",
]
