"""Goods receipt ("lift") and its reconciliation steps.

A lift is recorded against an indent that is waiting for material. It then
moves through store in (6), quality check (7), debit note (9, only when one
is requested) and missing-bill follow-up (11, only when the bill did not
arrive with the goods). The quality check opens the tally audit.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from django.db import IntegrityError, transaction

from ..models import Indent, Lift, TallyEntry
from ..models.indents import STATUS_COMPLETE
from ..models.lifts import BILL_NOT_RECEIVED, BILL_STATUS_CHOICES
from . import clock, numbering, storage
from .events import record_event
from .indent_service import to_decimal
from .kitting_service import open_full_kitting
from .stages import BILL_PENDING, DEBIT_NOTE, LIFT, QUALITY_CHECK, STORE_IN

logger = logging.getLogger(__name__)

YES_NO = ("Yes", "No")
RECEIVED = "Received"
BILL_OK = "ok"


def _upload(bucket: str, stem: str, upload) -> str:
    filename = storage.timestamped_name(stem, storage.extension_of(upload), sep="-")
    return storage.upload_file(bucket, upload, filename)


def create_lift(
    indent: Indent, data: Dict[str, Any], bill_photo=None, user=None
) -> Tuple[bool, str, Optional[Lift]]:
    """Record material lifted against ``indent``.

    ``qty`` may not exceed what is still pending; the indent completes once
    nothing is left to lift. Every lift also opens its full-kitting row.
    """

    if not LIFT.is_pending(indent):
        return False, f"Indent {indent.indent_number} is not waiting for material", None
    bill_status = data.get("bill_status")
    if bill_status not in {value for value, _ in BILL_STATUS_CHOICES}:
        return False, "Select a bill status", None
    qty = to_decimal(data.get("qty"))
    if qty is None or qty <= 0:
        return False, "Quantity must be greater than 0", None
    pending_qty = indent.pending_lift_qty
    if pending_qty is None:
        pending_qty = indent.effective_quantity
    if qty > pending_qty:
        return False, f"Quantity cannot exceed pending quantity {pending_qty}", None

    try:
        with transaction.atomic():
            existing = Lift.objects.values_list("lift_number", flat=True)
            lift_number = numbering.next_lift_number(existing)
            photo_url = ""
            if bill_photo:
                photo_url = _upload(
                    storage.BILL_PHOTO_BUCKET, f"bill-photo-{indent.indent_number}", bill_photo
                )
            stamp = clock.now()
            lift = Lift.objects.create(
                timestamp=stamp,
                lift_number=lift_number,
                indent=indent,
                po_number=indent.po_number,
                vendor_name=data.get("vendor_name") or indent.approved_vendor_name,
                product_name=indent.product_name,
                bill_status=bill_status,
                bill_no=data.get("bill_no") or "",
                qty=qty,
                lead_time_to_lift_material=int(data.get("lead_time_to_lift_material") or 0),
                type_of_bill=data.get("type_of_bill") or "",
                bill_amount=to_decimal(data.get("bill_amount")) or Decimal("0"),
                discount_amount=to_decimal(data.get("discount_amount")) or Decimal("0"),
                payment_type=data.get("payment_type") or "",
                advance_amount=to_decimal(data.get("advance_amount")) or Decimal("0"),
                photo_of_bill=photo_url,
                bill_remark=data.get("bill_remark") or "",
                transportation_include=data.get("transportation_include") or "",
                transporter_name=data.get("transporter_name") or "",
                transport_amount=to_decimal(data.get("transport_amount")) or Decimal("0"),
                vehicle_no=data.get("vehicle_no") or "",
                driver_name=data.get("driver_name") or "",
                driver_mobile_no=data.get("driver_mobile_no") or "",
                firm_name_match=indent.firm_name,
                planned6=stamp,
                planned11=stamp if bill_status == BILL_NOT_RECEIVED else None,
            )
            indent.actual5 = stamp
            indent.payment_type = data.get("payment_type") or ""
            indent.pending_lift_qty = pending_qty - qty
            if indent.pending_lift_qty <= 0:
                indent.pending_lift_qty = Decimal("0")
                indent.status = STATUS_COMPLETE
            indent.save()
            open_full_kitting(lift)
    except storage.StorageError as exc:
        return False, str(exc), None
    except IntegrityError as exc:
        logger.error("Integrity error creating lift: %s", exc)
        return False, "Lift number already taken, please submit again.", None

    record_event(
        stage=LIFT.key,
        entity_type="lift",
        entity_id=lift.lift_number,
        user=user,
        firm=lift.firm_name_match,
        changes={"indent": indent.indent_number, "qty": qty, "bill_status": bill_status},
    )
    return True, f"Created store record {lift.lift_number} for {indent.indent_number}", lift


def store_in(lift: Lift, data: Dict[str, Any], product_photo=None, user=None) -> Tuple[bool, str, Optional[Lift]]:
    if not STORE_IN.is_pending(lift):
        return False, f"Lift {lift.lift_number} is not waiting for store in", None
    if data.get("receiving_status", RECEIVED) != RECEIVED:
        return False, "Receiving status must be Received", None
    received = to_decimal(data.get("received_quantity"))
    if received is None or received <= 0:
        return False, "Received quantity is required", None
    for key, label in (("damage_order", "Damage order"), ("quantity_as_per_bill", "Quantity as per bill")):
        if data.get(key) not in YES_NO:
            return False, f"{label} must be Yes or No", None
    if product_photo:
        try:
            lift.photo_of_product = _upload(
                storage.PRODUCT_PHOTO_BUCKET, f"product-{lift.lift_number}", product_photo
            )
        except storage.StorageError as exc:
            return False, str(exc), None

    stamp = clock.now()
    lift.actual6 = stamp
    lift.receiving_status = RECEIVED
    lift.received_quantity = received
    lift.damage_order = data["damage_order"]
    lift.quantity_as_per_bill = data["quantity_as_per_bill"]
    lift.remark = data.get("remark") or ""
    lift.planned7 = stamp
    lift.save()
    record_event(
        stage=STORE_IN.key,
        entity_type="lift",
        entity_id=lift.lift_number,
        user=user,
        firm=lift.firm_name_match,
        changes={"received_quantity": received, "damage_order": lift.damage_order},
    )
    return True, f"Store in recorded for {lift.lift_number}", lift


def open_tally_entry(lift: Lift) -> TallyEntry:
    """Create the accounting audit record for a checked lift."""

    indent = lift.indent
    rate = indent.approved_rate or Decimal("0")
    entry, _ = TallyEntry.objects.get_or_create(
        lift=lift,
        defaults={
            "indent_number": indent.indent_number,
            "lift_number": lift.lift_number,
            "po_number": lift.po_number,
            "indent_date": indent.timestamp,
            "purchase_date": indent.actual4,
            "material_in_date": lift.actual6,
            "product_name": lift.product_name,
            "bill_no": lift.bill_no,
            "qty": lift.qty,
            "party_name": lift.vendor_name,
            "bill_amt": lift.bill_amount,
            "bill_image": lift.photo_of_bill,
            "location": indent.department,
            "area": indent.area_of_use,
            "indented_for": indent.indenter_name,
            "rate": rate,
            "indent_qty": indent.effective_quantity,
            "total_rate": (rate * lift.qty).quantize(Decimal("0.01")),
            "firm_name_match": lift.firm_name_match,
            "planned1": clock.now(),
        },
    )
    return entry


def quality_check(lift: Lift, data: Dict[str, Any], bill_copy=None, user=None) -> Tuple[bool, str, Optional[Lift]]:
    if not QUALITY_CHECK.is_pending(lift):
        return False, f"Lift {lift.lift_number} is not waiting for a quality check", None
    status = data.get("check_status")
    if status not in ("Accept", "Reject"):
        return False, "Status must be Accept or Reject", None
    if data.get("send_debit_note") not in YES_NO:
        return False, "Send debit note must be Yes or No", None
    reason = (data.get("reason") or "").strip()
    if not reason:
        return False, "Reason is required", None
    if bill_copy:
        try:
            lift.bill_copy_attached = _upload(
                storage.BILL_COPY_BUCKET, f"bill-copy-{lift.lift_number}", bill_copy
            )
        except storage.StorageError as exc:
            return False, str(exc), None

    stamp = clock.now()
    with transaction.atomic():
        lift.actual7 = stamp
        lift.check_status = status
        lift.send_debit_note = data["send_debit_note"]
        lift.reason = reason
        if lift.send_debit_note == "Yes":
            lift.planned9 = stamp
        lift.save()
        open_tally_entry(lift)
    record_event(
        stage=QUALITY_CHECK.key,
        entity_type="lift",
        entity_id=lift.lift_number,
        user=user,
        firm=lift.firm_name_match,
        changes={"check_status": status, "send_debit_note": lift.send_debit_note},
    )
    return True, f"Quality check saved for {lift.lift_number}", lift


def send_debit_note(lift: Lift, number: str, copy=None, user=None) -> Tuple[bool, str, Optional[Lift]]:
    if not DEBIT_NOTE.is_pending(lift):
        return False, f"Lift {lift.lift_number} is not waiting for a debit note", None
    number = (number or "").strip()
    if not number:
        return False, "Debit note number is required", None
    if copy:
        try:
            lift.debit_note_copy = _upload(
                storage.BILL_COPY_BUCKET, f"debit-note-{lift.lift_number}", copy
            )
        except storage.StorageError as exc:
            return False, str(exc), None
    lift.actual9 = clock.now()
    lift.debit_note_number = number
    lift.save()
    record_event(
        stage=DEBIT_NOTE.key,
        entity_type="lift",
        entity_id=lift.lift_number,
        user=user,
        firm=lift.firm_name_match,
        changes={"debit_note_number": number},
    )
    return True, f"Debit note recorded for {lift.lift_number}", lift


def resolve_missing_bill(lift: Lift, status: str, image=None, user=None) -> Tuple[bool, str, Optional[Lift]]:
    if not BILL_PENDING.is_pending(lift):
        return False, f"Lift {lift.lift_number} has no missing bill", None
    if status != BILL_OK:
        return False, "Status must be ok", None
    if image:
        try:
            lift.bill_image_status = _upload(
                storage.BILL_IMAGE_BUCKET, f"bill-{lift.lift_number}", image
            )
        except storage.StorageError as exc:
            return False, str(exc), None
    lift.actual11 = clock.now()
    lift.bill_status_new = status
    lift.save()
    record_event(
        stage=BILL_PENDING.key,
        entity_type="lift",
        entity_id=lift.lift_number,
        user=user,
        firm=lift.firm_name_match,
        changes={"bill_status_new": status},
    )
    return True, f"Bill received for {lift.lift_number}", lift
