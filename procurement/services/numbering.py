"""Document number allocation.

Numbers are derived from what already exists: parse, take the maximum and
add one. Callers allocate inside ``transaction.atomic`` and rely on the
unique constraints of the numbered columns to reject races.
"""

from __future__ import annotations

import re
from typing import Iterable

from django.conf import settings

from . import clock

INDENT_PREFIX = "SI"
ISSUE_PREFIX = "IS"
LIFT_PREFIX = "LF"


def _max_sequence(existing: Iterable[str | None], prefix: str) -> int:
    pattern = re.compile(rf"^{re.escape(prefix)}-(\d+)$")
    highest = 0
    for value in existing:
        match = pattern.match((value or "").strip())
        if match:
            highest = max(highest, int(match.group(1)))
    return highest


def next_sequence_number(existing: Iterable[str | None], prefix: str, offset: int = 0) -> str:
    """Return ``<prefix>-NNNN`` following the highest value in ``existing``.

    ``offset`` skips ahead for callers allocating several numbers at once.
    """

    return f"{prefix}-{_max_sequence(existing, prefix) + 1 + offset:04d}"


def next_indent_number(existing: Iterable[str | None], offset: int = 0) -> str:
    return next_sequence_number(existing, INDENT_PREFIX, offset)


def next_issue_number(existing: Iterable[str | None], offset: int = 0) -> str:
    return next_sequence_number(existing, ISSUE_PREFIX, offset)


def next_lift_number(existing: Iterable[str | None], offset: int = 0) -> str:
    return next_sequence_number(existing, LIFT_PREFIX, offset)


def po_prefix(on=None) -> str:
    return settings.PO_NUMBER_TEMPLATE.format(fy=clock.fiscal_year_code(on))


def next_po_number(existing: Iterable[str | None], prefix: str) -> str:
    """Return ``prefix`` followed by one more than the highest number used.

    Revision suffixes (``/2``) are ignored; values that do not parse to a
    positive integer after the prefix are skipped.
    """

    highest = 0
    for value in existing:
        value = (value or "").strip()
        if not value.startswith(prefix):
            continue
        tail = value[len(prefix):].split("/", 1)[0]
        if not tail.isdigit():
            continue
        number = int(tail)
        if number > 0:
            highest = max(highest, number)
    return f"{prefix}{highest + 1}"


def next_po_revision(po_number: str, existing: Iterable[str | None]) -> str:
    """Return ``<base>/<n>`` for the next revision of ``po_number``.

    The unrevised number counts as revision 0.
    """

    base = (po_number or "").strip().split("/", 1)[0]
    latest = 0
    for value in existing:
        value = (value or "").strip()
        head, sep, rev = value.partition("/")
        if head != base:
            continue
        if not sep:
            continue
        if rev.isdigit():
            latest = max(latest, int(rev))
    return f"{base}/{latest + 1}"


__all__ = [
    "next_sequence_number",
    "next_indent_number",
    "next_issue_number",
    "next_lift_number",
    "po_prefix",
    "next_po_number",
    "next_po_revision",
]
