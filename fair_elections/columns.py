"""
Infer fixed-width column spans from a table header line.

Report tables are rendered as plain text, so the only clue to where one column
ends and the next begins is the position of each heading. Headings are
separated by two or more spaces; a heading may itself contain single spaces
("Receipt Date"). Values sit roughly under their heading but may overhang it
by a character on the left, and the right-aligned Amount column overhangs its
short heading by a few characters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

HEADER_TOKEN_RE = re.compile(r"\S+(?: \S+)*(?: {2,}|$)")
LINE_NUMBER_TOKEN_RE = re.compile(r"^#\s*$")
LINE_NUMBER_FIELD = "line_number"
AMOUNT_FIELD = "amount"
AMOUNT_SHIFT = 3
LAST_FIELD_PADDING = 20


@dataclass(frozen=True)
class FieldSpan:
    start: int
    length: int

    def extract(self, line: str) -> str:
        start = max(self.start, 0)
        return line[start : start + max(self.length, 0)].strip()


@dataclass(frozen=True)
class ColumnLayout:
    """Ordered, immutable mapping of field name to its span in a text line."""

    fields: Tuple[Tuple[str, FieldSpan], ...] = ()

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    def slice(self, line: str) -> Dict[str, str]:
        """Cut `line` into a field -> stripped value mapping, in layout order."""
        return {name: span.extract(line) for name, span in self.fields}

    def __contains__(self, name: object) -> bool:
        return any(field_name == name for field_name, _ in self.fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.fields)

    def __bool__(self) -> bool:
        return bool(self.fields)


def field_name(heading: str) -> str:
    """
    Turn a column heading into a lower_snake_case field name.

    "#" becomes `line_number`; anything after a "/" is dropped, so
    "Contributor Name/Address" becomes `contributor_name`.
    """
    if LINE_NUMBER_TOKEN_RE.match(heading):
        return LINE_NUMBER_FIELD
    text = heading.split("/", 1)[0].strip()
    text = re.sub(r"([a-z\d])([A-Z]+)", r"\1_\2", text)
    text = re.sub(r"[-\s]+", "_", text)
    return text.lower()


def detect_layout(header_line: str) -> ColumnLayout:
    """
    Derive field spans from one header line.

    Each field may start one character before its heading, except the first,
    which instead gives up one character on its right edge. `amount` starts a
    further three characters to the left at the expense of the previous
    field, and the last field is padded so long trailing values survive.
    """
    line = header_line.rstrip()
    spans: Dict[str, list] = {}
    last_key: Optional[str] = None
    pos = 0
    while pos < len(line):
        match = HEADER_TOKEN_RE.match(line, pos)
        if not match or match.end() == pos:
            break
        token = match.group(0)
        key = field_name(token)
        if match.start() > 0:
            spans[key] = [match.start() - 1, len(token)]
        else:
            spans[key] = [0, len(token) - 1]
        if key == AMOUNT_FIELD:
            spans[key][0] -= AMOUNT_SHIFT
            if last_key is not None:
                spans[last_key][1] -= AMOUNT_SHIFT
        last_key = key
        pos = match.end()

    if last_key is not None:
        spans[last_key][1] += LAST_FIELD_PADDING

    return ColumnLayout(
        tuple((name, FieldSpan(start, length)) for name, (start, length) in spans.items())
    )


__all__ = ["ColumnLayout", "FieldSpan", "detect_layout", "field_name"]
