"""Full kitting: the transport record kept for every lift."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from ..models import FullKitting, Lift
from ..models.kitting import FMS_NAME_CHOICES, KITTING_RATE_TYPE_CHOICES
from . import clock, storage
from .events import record_event
from .indent_service import to_decimal
from .stages import FULL_KITTING

logger = logging.getLogger(__name__)

YES_NO = ("Yes", "No")
REQUIRED = [
    ("vehicle_number", "Vehicle number"),
    ("from_location", "From"),
    ("to_location", "To"),
    ("bilty_number", "Bilty number"),
]


def open_full_kitting(lift: Lift) -> FullKitting:
    """Create the pending full-kitting row for a new lift."""

    kitting, _ = FullKitting.objects.get_or_create(
        lift=lift,
        defaults={
            "timestamp": lift.timestamp,
            "indent_number": lift.indent_id,
            "lift_number": lift.lift_number,
            "vendor_name": lift.vendor_name,
            "product_name": lift.product_name,
            "qty": lift.qty,
            "bill_no": lift.bill_no,
            "transporting_include": lift.transportation_include,
            "transporter_name": lift.transporter_name,
            "amount": lift.transport_amount,
            "vehicle_no": lift.vehicle_no,
            "driver_name": lift.driver_name,
            "driver_mobile_no": lift.driver_mobile_no,
            "firm_name_match": lift.firm_name_match,
            "planned1": lift.timestamp,
        },
    )
    return kitting


def update_full_kitting(
    kitting: FullKitting, data: Dict[str, Any], bilty_image=None, user=None
) -> Tuple[bool, str, Optional[FullKitting]]:
    if not FULL_KITTING.is_pending(kitting):
        return False, f"Lift {kitting.lift_number} is not waiting for full kitting", None
    fms_name = data.get("fms_name") or FMS_NAME_CHOICES[0][0]
    if fms_name not in {value for value, _ in FMS_NAME_CHOICES}:
        return False, "Unknown FMS name", None
    if data.get("status") not in YES_NO:
        return False, "Status must be Yes or No", None
    for key, label in REQUIRED:
        if not str(data.get(key) or "").strip():
            return False, f"{label} is required", None
    if data.get("rate_type") not in {value for value, _ in KITTING_RATE_TYPE_CHOICES}:
        return False, "Rate type must be Fixed or Per MT", None
    amount = to_decimal(data.get("amount1"))
    if amount is None:
        return False, "Amount is required", None
    if amount < Decimal("0"):
        return False, "Amount cannot be negative", None

    if bilty_image:
        filename = storage.timestamped_name(
            f"bilty-{kitting.lift_number}", storage.extension_of(bilty_image), sep="-"
        )
        try:
            kitting.bilty_image = storage.upload_file(
                storage.BILTY_IMAGE_BUCKET, bilty_image, filename
            )
        except storage.StorageError as exc:
            return False, str(exc), None

    kitting.actual1 = clock.now()
    kitting.fms_name = fms_name
    kitting.status = data["status"]
    kitting.vehicle_number = data["vehicle_number"].strip()
    kitting.from_location = data["from_location"].strip()
    kitting.to_location = data["to_location"].strip()
    kitting.material_load_details = (data.get("material_load_details") or "").strip()
    kitting.bilty_number = data["bilty_number"].strip()
    kitting.rate_type = data["rate_type"]
    kitting.amount1 = amount
    kitting.save()
    record_event(
        stage=FULL_KITTING.key,
        entity_type="lift",
        entity_id=kitting.lift_number,
        user=user,
        firm=kitting.firm_name_match,
        changes={
            "vehicle_number": kitting.vehicle_number,
            "bilty_number": kitting.bilty_number,
            "amount1": amount,
        },
    )
    return True, f"Updated full kitting for {kitting.lift_number}", kitting
