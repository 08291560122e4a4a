"""Store issues: material handed out of the store and its approval."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from django.db import IntegrityError, transaction

from ..models import StoreIssue
from . import clock, numbering
from .events import record_event
from .firm_scope import is_unrestricted
from .indent_service import to_decimal
from .stages import ISSUE_APPROVAL

logger = logging.getLogger(__name__)

LINE_REQUIRED = [
    ("product_name", "Product name"),
    ("group_head", "Group head"),
    ("department", "Department"),
    ("uom", "UOM"),
]


def create_issues(
    issue_to: str, lines: Sequence[Dict[str, Any]], firm: str = "", user=None
) -> Tuple[bool, str, Optional[List[StoreIssue]]]:
    issue_to = (issue_to or "").strip()
    if not issue_to:
        return False, "Issue to is required", None
    if not lines:
        return False, "Add at least one product", None
    for pos, line in enumerate(lines, start=1):
        for key, label in LINE_REQUIRED:
            if not str(line.get(key) or "").strip():
                return False, f"Line {pos}: {label} is required", None
        qty = to_decimal(line.get("quantity"))
        if qty is None or qty <= 0:
            return False, f"Line {pos}: Quantity must be greater than 0", None
    firm = (firm or "").strip()
    if not firm or is_unrestricted(firm):
        return False, "Firm name is required", None

    stamp = clock.now()
    try:
        with transaction.atomic():
            existing = list(StoreIssue.objects.values_list("issue_no", flat=True))
            created = [
                StoreIssue.objects.create(
                    timestamp=stamp,
                    issue_no=numbering.next_issue_number(existing, offset=pos),
                    issue_to=issue_to,
                    product_name=line["product_name"].strip(),
                    group_head=line["group_head"].strip(),
                    department=line["department"].strip(),
                    uom=line["uom"].strip(),
                    quantity=to_decimal(line["quantity"]),
                    firm_name_match=firm,
                    planned1=stamp,
                )
                for pos, line in enumerate(lines)
            ]
    except IntegrityError as exc:
        logger.error("Integrity error creating issues: %s", exc)
        return False, "Issue number already taken, please submit again.", None

    for issue in created:
        record_event(
            stage="store_issue",
            entity_type="issue",
            entity_id=issue.issue_no,
            user=user,
            firm=issue.firm_name_match,
            changes={"product_name": issue.product_name, "quantity": issue.quantity},
        )
    numbers = ", ".join(i.issue_no for i in created)
    logger.info("Created store issues %s", numbers)
    return True, f"Issue created: {numbers}", created


def approve_issue(issue: StoreIssue, status: str, given_qty: Any, user=None) -> Tuple[bool, str, Optional[StoreIssue]]:
    if not ISSUE_APPROVAL.is_pending(issue):
        return False, f"Issue {issue.issue_no} is not awaiting approval", None
    if status not in ("Yes", "No"):
        return False, "Status must be Yes or No", None
    qty = to_decimal(given_qty)
    if status == "Yes" and (qty is None or qty <= 0):
        return False, "Given quantity must be greater than 0", None
    if qty is not None and qty < 0:
        return False, "Given quantity cannot be negative", None
    issue.actual1 = clock.now()
    issue.status = status
    issue.given_qty = qty
    issue.save()
    record_event(
        stage=ISSUE_APPROVAL.key,
        entity_type="issue",
        entity_id=issue.issue_no,
        user=user,
        firm=issue.firm_name_match,
        changes={"status": status, "given_qty": qty},
    )
    return True, f"Issue {issue.issue_no} updated", issue
