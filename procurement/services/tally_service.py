"""Audit and correction of lifts before and after their Tally entry.

Stage 1 audits the entry. A clean audit (``Done``) goes straight to the
Tally entry step (4); otherwise the mistake is rectified (2) and
re-audited (3) first. After the entry is taken, a final audit (5) closes
the record.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..models import TallyEntry
from ..models.tally import DONE, NOT_DONE
from . import clock
from .events import record_event
from .stages import AGAIN_AUDIT, AUDIT, REAUDIT, RECTIFY, TALLY_ENTRY

logger = logging.getLogger(__name__)

AGAIN_AUDIT_STATUSES = ("okey", "not okey")

Result = Tuple[bool, str, Optional[TallyEntry]]


def _check(stage, entry: TallyEntry, status: str, remarks: str) -> Optional[str]:
    if not stage.is_pending(entry):
        return f"{entry.lift_number} is not pending in {stage.label.lower()}"
    if status not in (DONE, NOT_DONE):
        return "Status must be Done or Not Done"
    if not (remarks or "").strip():
        return "Remarks are required"
    return None


def _complete(stage, entry: TallyEntry, n: int, status: str, remarks: str, next_stage: int, user) -> Result:
    stamp = clock.now()
    setattr(entry, f"actual{n}", stamp)
    setattr(entry, f"status{n}", status)
    setattr(entry, f"remarks{n}", remarks.strip())
    setattr(entry, f"planned{next_stage}", stamp)
    entry.save()
    record_event(
        stage=stage.key,
        entity_type="tally_entry",
        entity_id=entry.lift_number,
        user=user,
        firm=entry.firm_name_match,
        changes={"status": status, "remarks": remarks.strip()},
    )
    return True, f"{stage.label} saved for {entry.lift_number}", entry


def audit(entry: TallyEntry, status: str, remarks: str, user=None) -> Result:
    error = _check(AUDIT, entry, status, remarks)
    if error:
        return False, error, None
    return _complete(AUDIT, entry, 1, status, remarks, 4 if status == DONE else 2, user)


def rectify(entry: TallyEntry, status: str, remarks: str, user=None) -> Result:
    error = _check(RECTIFY, entry, status, remarks)
    if error:
        return False, error, None
    return _complete(RECTIFY, entry, 2, status, remarks, 3, user)


def reaudit(entry: TallyEntry, status: str, remarks: str, user=None) -> Result:
    error = _check(REAUDIT, entry, status, remarks)
    if error:
        return False, error, None
    return _complete(REAUDIT, entry, 3, status, remarks, 4, user)


def take_entry(entry: TallyEntry, status: str, remarks: str, user=None) -> Result:
    error = _check(TALLY_ENTRY, entry, status, remarks)
    if error:
        return False, error, None
    return _complete(TALLY_ENTRY, entry, 4, status, remarks, 5, user)


def again_audit(entry: TallyEntry, status: str, user=None) -> Result:
    if not AGAIN_AUDIT.is_pending(entry):
        return False, f"{entry.lift_number} is not pending in again auditing", None
    if status not in AGAIN_AUDIT_STATUSES:
        return False, "Status must be okey or not okey", None
    entry.actual5 = clock.now()
    entry.status5 = status
    entry.save()
    record_event(
        stage=AGAIN_AUDIT.key,
        entity_type="tally_entry",
        entity_id=entry.lift_number,
        user=user,
        firm=entry.firm_name_match,
        changes={"status": status},
    )
    return True, f"Again auditing saved for {entry.lift_number}", entry


ACTIONS = {
    AUDIT.key: audit,
    RECTIFY.key: rectify,
    REAUDIT.key: reaudit,
    TALLY_ENTRY.key: take_entry,
}
