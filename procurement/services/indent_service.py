"""Indent creation and first-level approval."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence, Tuple

from django.db import IntegrityError, transaction

from ..models import Indent
from ..models.indents import (
    INDENT_STATUS_CHOICES,
    VENDOR_REGULAR,
    VENDOR_REJECT,
    VENDOR_THREE_PARTY,
)
from . import clock, numbering, storage
from .events import record_event
from .stages import APPROVAL

logger = logging.getLogger(__name__)

APPROVAL_VENDOR_TYPES = (VENDOR_REJECT, VENDOR_THREE_PARTY, VENDOR_REGULAR)
LINE_REQUIRED = [
    ("department", "Department"),
    ("group_head", "Group head"),
    ("product_name", "Product name"),
    ("uom", "UOM"),
    ("firm_name", "Firm name"),
    ("area_of_use", "Area of use"),
]


def to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def _validate(header: Dict[str, Any], lines: Sequence[Dict[str, Any]]) -> Optional[str]:
    if not (header.get("indenter_name") or "").strip():
        return "Indenter name is required"
    valid_status = {value for value, _ in INDENT_STATUS_CHOICES}
    if header.get("indent_status") not in valid_status:
        return "Indent status must be Critical or None Critical"
    if not lines:
        return "Add at least one product"
    for pos, line in enumerate(lines, start=1):
        for key, label in LINE_REQUIRED:
            if not str(line.get(key) or "").strip():
                return f"Line {pos}: {label} is required"
        qty = to_decimal(line.get("quantity"))
        if qty is None or qty <= 0:
            return f"Line {pos}: Quantity must be greater than 0"
        try:
            days = int(line.get("no_day") or 0)
        except (TypeError, ValueError):
            days = 0
        if days <= 0:
            return f"Line {pos}: Number of days must be greater than 0"
    return None


def _upload_attachment(indent_number: str, upload) -> str:
    filename = storage.timestamped_name(indent_number, storage.extension_of(upload))
    try:
        return storage.upload_file(storage.INDENT_ATTACHMENT_BUCKET, upload, filename)
    except storage.StorageError:
        logger.warning("Attachment for %s could not be stored", indent_number)
        return storage.UPLOAD_FAILED


def create_indents(
    header: Dict[str, Any],
    lines: Sequence[Dict[str, Any]],
    attachments: Sequence[Any] | None = None,
    user=None,
) -> Tuple[bool, str, Optional[List[Indent]]]:
    """Create one indent per product line with consecutive ``SI-`` numbers.

    ``attachments`` is aligned with ``lines``; missing entries mean no file.
    A failed upload does not block the indent, its attachment is recorded as
    ``"Upload Failed"`` instead.
    """

    error = _validate(header, lines)
    if error:
        return False, error, None
    attachments = list(attachments or [])
    planned = clock.planned_now()
    try:
        with transaction.atomic():
            existing = list(Indent.objects.values_list("indent_number", flat=True))
            created: List[Indent] = []
            for pos, line in enumerate(lines):
                number = numbering.next_indent_number(existing, offset=pos)
                upload = attachments[pos] if pos < len(attachments) else None
                created.append(
                    Indent.objects.create(
                        indent_number=number,
                        timestamp=clock.now(),
                        indenter_name=header["indenter_name"].strip(),
                        indent_status=header["indent_status"],
                        firm_name=line["firm_name"].strip(),
                        department=line["department"].strip(),
                        area_of_use=line["area_of_use"].strip(),
                        group_head=line["group_head"].strip(),
                        product_name=line["product_name"].strip(),
                        quantity=to_decimal(line["quantity"]),
                        uom=line["uom"].strip(),
                        specifications=(line.get("specifications") or "").strip(),
                        no_day=int(line["no_day"]),
                        attachment=_upload_attachment(number, upload) if upload else "",
                        planned1=planned,
                    )
                )
    except IntegrityError as exc:
        logger.error("Integrity error creating indents: %s", exc)
        return False, "Indent number already taken, please submit again.", None
    except Exception as exc:  # pragma: no cover
        logger.exception("Error creating indents: %s", exc)
        return False, "Database error creating indent.", None

    for indent in created:
        record_event(
            stage="create_indent",
            entity_type="indent",
            entity_id=indent.indent_number,
            user=user,
            firm=indent.firm_name,
            changes={"product_name": indent.product_name, "quantity": indent.quantity},
        )
    numbers = ", ".join(i.indent_number for i in created)
    logger.info("Created indents %s", numbers)
    return True, f"Indent created: {numbers}", created


def _check_approval(vendor_type: str, approved_quantity: Any) -> Tuple[Optional[str], Optional[Decimal]]:
    if vendor_type not in APPROVAL_VENDOR_TYPES:
        return "Select a vendor type", None
    qty = to_decimal(approved_quantity)
    if vendor_type != VENDOR_REJECT and (qty is None or qty <= 0):
        return "Approved quantity must be greater than 0", None
    return None, qty


def approve_indent(
    indent: Indent, vendor_type: str, approved_quantity: Any, user=None
) -> Tuple[bool, str, Optional[Indent]]:
    """Record the approver's vendor decision and open the vendor stage."""

    if not APPROVAL.is_pending(indent):
        return False, f"Indent {indent.indent_number} is not awaiting approval", None
    error, qty = _check_approval(vendor_type, approved_quantity)
    if error:
        return False, error, None
    stamp = clock.planned_now()
    indent.actual1 = stamp
    indent.vendor_type = vendor_type
    indent.approved_quantity = qty
    fields = ["actual1", "vendor_type", "approved_quantity", "updated_at"]
    if vendor_type != VENDOR_REJECT:
        indent.planned2 = stamp
        fields.append("planned2")
    indent.save(update_fields=fields)
    record_event(
        stage=APPROVAL.key,
        entity_type="indent",
        entity_id=indent.indent_number,
        user=user,
        firm=indent.firm_name,
        changes={"vendor_type": vendor_type, "approved_quantity": qty},
    )
    return True, f"Indent {indent.indent_number} updated", indent


def edit_approval(
    indent: Indent, vendor_type: str, approved_quantity: Any, user=None
) -> Tuple[bool, str, Optional[Indent]]:
    """Correct an already approved indent without moving its timestamps."""

    if not APPROVAL.is_history(indent):
        return False, f"Indent {indent.indent_number} has not been approved yet", None
    error, qty = _check_approval(vendor_type, approved_quantity)
    if error:
        return False, error, None
    indent.vendor_type = vendor_type
    indent.approved_quantity = qty
    indent.save(update_fields=["vendor_type", "approved_quantity", "updated_at"])
    record_event(
        stage="edit_approval",
        entity_type="indent",
        entity_id=indent.indent_number,
        user=user,
        firm=indent.firm_name,
        changes={"vendor_type": vendor_type, "approved_quantity": qty},
    )
    return True, f"Indent {indent.indent_number} updated", indent
