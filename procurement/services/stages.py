"""Workflow stage registry and status derivation.

Every record carries sparse ``plannedN``/``actualN`` timestamp pairs. A
stage decides from those columns (plus a few text columns for the indent
stages) whether a record waits in its *pending* list or sits in its
*history* list. Each stage exposes the rule twice: as a ``Q`` filter for
querysets and as a predicate for a single loaded record. The two must agree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from django.db.models import F, Q, QuerySet

from ..models import FullKitting, Indent, Lift, StoreIssue, TallyEntry
from ..models.indents import (
    STATUS_COMPLETE,
    STATUS_PENDING,
    VENDOR_PENDING,
    VENDOR_THREE_PARTY,
)

Predicate = Callable[[Any], bool]


def _is_set(value) -> bool:
    return value is not None and value != ""


@dataclass(frozen=True)
class Stage:
    key: str
    label: str
    model: type
    planned: str
    actual: str
    pending_q: Q
    history_q: Q
    pending_check: Predicate
    history_check: Predicate
    view_permission: str
    action_permission: str
    history_order: Optional[str] = None

    def pending(self, qs: Optional[QuerySet] = None) -> QuerySet:
        qs = self.model.objects.all() if qs is None else qs
        return qs.filter(self.pending_q).order_by(
            F(self.planned).asc(nulls_last=True), "pk"
        )

    def history(self, qs: Optional[QuerySet] = None) -> QuerySet:
        qs = self.model.objects.all() if qs is None else qs
        order = self.history_order or self.actual
        return qs.filter(self.history_q).order_by(
            F(order).desc(nulls_last=True), "-pk"
        )

    def is_pending(self, obj) -> bool:
        return self.pending_check(obj)

    def is_history(self, obj) -> bool:
        return self.history_check(obj)

    def rows(self, qs: Optional[QuerySet] = None, view: str = "pending") -> QuerySet:
        return self.history(qs) if view == "history" else self.pending(qs)


def _pair_stage(
    key: str,
    label: str,
    model: type,
    n: int,
    view_permission: str,
    action_permission: Optional[str] = None,
    extra_q: Optional[Q] = None,
    extra_check: Optional[Predicate] = None,
) -> Stage:
    """Build a stage whose state is the plain ``plannedN``/``actualN`` pair."""

    planned, actual = f"planned{n}", f"actual{n}"
    extra_q = extra_q or Q()
    extra_check = extra_check or (lambda obj: True)
    return Stage(
        key=key,
        label=label,
        model=model,
        planned=planned,
        actual=actual,
        pending_q=Q(**{f"{planned}__isnull": False, f"{actual}__isnull": True}) & extra_q,
        history_q=Q(**{f"{planned}__isnull": False, f"{actual}__isnull": False}) & extra_q,
        pending_check=lambda obj: _is_set(getattr(obj, planned))
        and not _is_set(getattr(obj, actual))
        and extra_check(obj),
        history_check=lambda obj: _is_set(getattr(obj, planned))
        and _is_set(getattr(obj, actual))
        and extra_check(obj),
        view_permission=view_permission,
        action_permission=action_permission or view_permission,
    )


_UNDECIDED_VENDOR = Q(vendor_type="") | Q(vendor_type=VENDOR_PENDING)


def _approval_pending(obj) -> bool:
    return obj.actual1 is None and (obj.vendor_type or "") in ("", VENDOR_PENDING)


APPROVAL = Stage(
    key="approval",
    label="Indent approval",
    model=Indent,
    planned="planned1",
    actual="actual1",
    pending_q=Q(actual1__isnull=True) & _UNDECIDED_VENDOR,
    history_q=Q(actual1__isnull=False) | ~_UNDECIDED_VENDOR,
    pending_check=_approval_pending,
    history_check=lambda obj: not _approval_pending(obj),
    view_permission="indent_approval_view",
    action_permission="indent_approval_action",
)

VENDOR_UPDATE = _pair_stage(
    "vendor_update", "Vendor rate update", Indent, 2,
    "update_vendor_view", "update_vendor_action",
)


def _three_party(obj) -> bool:
    return obj.vendor_type == VENDOR_THREE_PARTY


RATE_APPROVAL = _pair_stage(
    "rate_approval", "Three party approval", Indent, 3,
    "three_party_approval_view", "three_party_approval_action",
    extra_q=Q(vendor_type=VENDOR_THREE_PARTY),
    extra_check=_three_party,
)


def _po_decision_pending(obj) -> bool:
    return (
        obj.status == STATUS_PENDING
        and _is_set(obj.approved_vendor_name)
        and not _is_set(obj.po_required)
    )


PO_DECISION = Stage(
    key="po_decision",
    label="Pending POs",
    model=Indent,
    planned="planned4",
    actual="actual4",
    pending_q=Q(status=STATUS_PENDING, po_required="")
    & ~Q(approved_vendor_name=""),
    history_q=Q(po_required__in=["Yes", "No"]),
    pending_check=_po_decision_pending,
    history_check=lambda obj: obj.po_required in ("Yes", "No"),
    view_permission="pending_indents_view",
    action_permission="pending_indents_view",
    history_order="updated_at",
)

PURCHASE_ORDER = _pair_stage(
    "purchase_order", "Create PO", Indent, 4, "create_po",
    extra_q=Q(po_required="Yes"),
    extra_check=lambda obj: obj.po_required == "Yes",
)

LIFT = Stage(
    key="lift",
    label="Receive items",
    model=Indent,
    planned="planned5",
    actual="actual5",
    pending_q=Q(status=STATUS_PENDING, planned5__isnull=False),
    history_q=Q(status=STATUS_COMPLETE, planned5__isnull=False),
    pending_check=lambda obj: obj.status == STATUS_PENDING and obj.planned5 is not None,
    history_check=lambda obj: obj.status == STATUS_COMPLETE and obj.planned5 is not None,
    view_permission="receive_item_view",
    action_permission="receive_item_action",
)

STORE_IN = _pair_stage("store_in", "Store in", Lift, 6, "store_in")
QUALITY_CHECK = _pair_stage(
    "quality_check", "Quality check", Lift, 7,
    "instead_of_quality_check_in_received_item",
)
DEBIT_NOTE = _pair_stage("debit_note", "Send debit note", Lift, 9, "send_debit_note")
BILL_PENDING = _pair_stage("bill_pending", "Bill not received", Lift, 11, "bill_not_received")
FULL_KITTING = _pair_stage("full_kitting", "Full kitting", FullKitting, 1, "full_kitting")

AUDIT = _pair_stage("audit", "Audit data", TallyEntry, 1, "audit_data")
RECTIFY = _pair_stage("rectify", "Rectify the mistake", TallyEntry, 2, "rectify_the_mistake")
REAUDIT = _pair_stage("reaudit", "Re-audit data", TallyEntry, 3, "reaudit_data")
TALLY_ENTRY = _pair_stage("tally_entry", "Take entry by Tally", TallyEntry, 4, "take_entry_by_telly")
AGAIN_AUDIT = _pair_stage("again_audit", "Again auditing", TallyEntry, 5, "again_auditing")

ISSUE_APPROVAL = _pair_stage("issue_approval", "Issue data", StoreIssue, 1, "issue_data")

STAGES: Dict[str, Stage] = {
    stage.key: stage
    for stage in (
        APPROVAL,
        VENDOR_UPDATE,
        RATE_APPROVAL,
        PO_DECISION,
        PURCHASE_ORDER,
        LIFT,
        STORE_IN,
        QUALITY_CHECK,
        DEBIT_NOTE,
        BILL_PENDING,
        FULL_KITTING,
        AUDIT,
        RECTIFY,
        REAUDIT,
        TALLY_ENTRY,
        AGAIN_AUDIT,
        ISSUE_APPROVAL,
    )
}


def get_stage(key: str) -> Stage:
    return STAGES[key]


def stages_for(model: type) -> List[Stage]:
    return [stage for stage in STAGES.values() if stage.model is model]


def current_stage(obj) -> Optional[Stage]:
    """Return the first stage in which ``obj`` is pending, if any."""

    for stage in stages_for(type(obj)):
        if stage.is_pending(obj):
            return stage
    return None


__all__ = ["Stage", "STAGES", "get_stage", "stages_for", "current_stage"]
