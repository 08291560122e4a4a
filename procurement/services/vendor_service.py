"""Vendor rate negotiation: regular quotes, three-party quotes and approval."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional, Sequence, Tuple

from django.db import transaction

from ..models import Indent, VendorQuote
from ..models.indents import (
    RATE_TYPE_BASIC,
    RATE_TYPE_WITH_TAX,
    STATUS_PENDING,
    VENDOR_REGULAR,
    VENDOR_THREE_PARTY,
)
from . import clock, storage
from .events import record_event
from .indent_service import to_decimal
from .stages import RATE_APPROVAL, VENDOR_UPDATE

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
THREE_PARTY_SLOTS = (1, 2, 3)


def normalise_quote(quote: Dict[str, Any]) -> Tuple[Optional[str], Dict[str, Any]]:
    """Validate a quote and resolve its tax flag and tax value.

    A rate quoted with tax always records ``with_tax = "Yes"`` and a zero
    tax value; a basic rate keeps the GST percentage only when tax is not
    included.
    """

    vendor = (quote.get("vendor_name") or "").strip()
    if not vendor:
        return "Vendor name is required", {}
    rate_type = quote.get("rate_type") or RATE_TYPE_BASIC
    if rate_type not in (RATE_TYPE_BASIC, RATE_TYPE_WITH_TAX):
        return "Rate type must be Basic Rate or With Tax", {}
    rate = to_decimal(quote.get("rate"))
    if rate is None or rate <= 0:
        return "Rate must be greater than 0", {}
    with_tax = "Yes" if rate_type == RATE_TYPE_WITH_TAX else (quote.get("with_tax") or "No")
    if with_tax not in ("Yes", "No"):
        return "With tax must be Yes or No", {}
    tax_value = Decimal("0")
    if with_tax == "No":
        tax_value = to_decimal(quote.get("tax_value")) or Decimal("0")
        if tax_value < 0:
            return "GST % cannot be negative", {}
    return None, {
        "vendor_name": vendor,
        "rate_type": rate_type,
        "rate": rate,
        "with_tax": with_tax,
        "tax_value": tax_value,
        "payment_term": (quote.get("payment_term") or "").strip(),
        "whatsapp_number": (quote.get("whatsapp_number") or "").strip(),
        "email_id": (quote.get("email_id") or "").strip(),
    }


def effective_rate(rate_type: str, rate: Decimal, with_tax: str, tax_value: Decimal) -> Decimal:
    """Rate including tax: a basic rate without tax is grossed up by GST."""

    if rate_type == RATE_TYPE_BASIC and with_tax == "No":
        rate = rate * (1 + tax_value / Decimal("100"))
    return rate.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _save_quote(indent: Indent, slot: int, data: Dict[str, Any]) -> VendorQuote:
    quote, _ = VendorQuote.objects.update_or_create(indent=indent, slot=slot, defaults=data)
    return quote


def update_regular_vendor(
    indent: Indent, quote: Dict[str, Any], user=None
) -> Tuple[bool, str, Optional[Indent]]:
    """Record the single quote of a regular vendor and move on to the PO.

    Regular vendors skip rate approval: the quote is approved here.
    """

    if not VENDOR_UPDATE.is_pending(indent):
        return False, f"Indent {indent.indent_number} is not awaiting a vendor update", None
    if indent.vendor_type != VENDOR_REGULAR:
        return False, f"Indent {indent.indent_number} is not a regular vendor indent", None
    error, data = normalise_quote(quote)
    if error:
        return False, error, None
    if not data["payment_term"]:
        return False, "Payment term is required", None

    stamp = clock.now()
    with transaction.atomic():
        _save_quote(indent, 1, data)
        indent.actual2 = stamp
        indent.approved_vendor_name = data["vendor_name"]
        indent.approved_rate = effective_rate(
            data["rate_type"], data["rate"], data["with_tax"], data["tax_value"]
        )
        indent.approved_payment_term = data["payment_term"]
        indent.approved_with_tax = data["with_tax"]
        indent.approved_tax_value = data["tax_value"]
        indent.planned4 = stamp
        indent.status = STATUS_PENDING
        indent.save()
    record_event(
        stage=VENDOR_UPDATE.key,
        entity_type="indent",
        entity_id=indent.indent_number,
        user=user,
        firm=indent.firm_name,
        changes={"vendor": data["vendor_name"], "approved_rate": indent.approved_rate},
    )
    return True, f"Vendor updated for {indent.indent_number}", indent


def update_three_party_vendors(
    indent: Indent,
    quotes: Sequence[Dict[str, Any]],
    comparison_sheet,
    product_code: str = "",
    user=None,
) -> Tuple[bool, str, Optional[Indent]]:
    """Store three competing quotes and send the indent to rate approval."""

    if not VENDOR_UPDATE.is_pending(indent):
        return False, f"Indent {indent.indent_number} is not awaiting a vendor update", None
    if indent.vendor_type != VENDOR_THREE_PARTY:
        return False, f"Indent {indent.indent_number} is not a three party indent", None
    if len(quotes) != len(THREE_PARTY_SLOTS):
        return False, "Exactly three vendor quotes are required", None
    cleaned = []
    for slot, quote in zip(THREE_PARTY_SLOTS, quotes):
        error, data = normalise_quote(quote)
        if error:
            return False, f"Vendor {slot}: {error}", None
        cleaned.append((slot, data))
    if not comparison_sheet:
        return False, "Comparison sheet is required", None

    filename = storage.timestamped_name(
        f"{indent.indent_number}_comparison", storage.extension_of(comparison_sheet)
    )
    try:
        sheet_url = storage.upload_file(
            storage.COMPARISON_SHEET_BUCKET, comparison_sheet, filename
        )
    except storage.StorageError as exc:
        return False, str(exc), None

    stamp = clock.now()
    with transaction.atomic():
        for slot, data in cleaned:
            _save_quote(indent, slot, data)
        indent.actual2 = stamp
        indent.planned3 = stamp
        indent.comparison_sheet = sheet_url
        indent.product_code = (product_code or "").strip()
        indent.save()
    record_event(
        stage=VENDOR_UPDATE.key,
        entity_type="indent",
        entity_id=indent.indent_number,
        user=user,
        firm=indent.firm_name,
        changes={"vendors": [d["vendor_name"] for _, d in cleaned]},
    )
    return True, f"Vendors updated for {indent.indent_number}", indent


def approve_rate(indent: Indent, slot: Any, user=None) -> Tuple[bool, str, Optional[Indent]]:
    """Approve one of the three-party quotes."""

    if not RATE_APPROVAL.is_pending(indent):
        return False, f"Indent {indent.indent_number} is not awaiting rate approval", None
    try:
        quote = indent.quotes.get(slot=int(slot))
    except (VendorQuote.DoesNotExist, TypeError, ValueError):
        return False, "Select one of the quoted vendors", None

    stamp = clock.now()
    indent.actual3 = stamp
    indent.approved_vendor_name = quote.vendor_name
    indent.approved_rate = effective_rate(
        quote.rate_type, quote.rate, quote.with_tax, quote.tax_value
    )
    indent.approved_payment_term = quote.payment_term
    indent.approved_with_tax = quote.with_tax
    indent.approved_tax_value = quote.tax_value
    indent.planned4 = stamp
    indent.status = STATUS_PENDING
    indent.save()
    record_event(
        stage=RATE_APPROVAL.key,
        entity_type="indent",
        entity_id=indent.indent_number,
        user=user,
        firm=indent.firm_name,
        changes={"vendor": quote.vendor_name, "slot": quote.slot},
    )
    return True, f"Approved vendor for {indent.indent_number}", indent


def revise_rate(indent: Indent, rate: Any, user=None) -> Tuple[bool, str, Optional[Indent]]:
    if not RATE_APPROVAL.is_history(indent):
        return False, f"Indent {indent.indent_number} has no approved rate to revise", None
    value = to_decimal(rate)
    if value is None or value <= 0:
        return False, "Rate must be greater than 0", None
    indent.approved_rate = value
    indent.save(update_fields=["approved_rate", "updated_at"])
    record_event(
        stage="revise_rate",
        entity_type="indent",
        entity_id=indent.indent_number,
        user=user,
        firm=indent.firm_name,
        changes={"approved_rate": value},
    )
    return True, f"Updated rate of {indent.indent_number}", indent
