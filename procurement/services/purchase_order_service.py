"""Purchase order decision, totals, creation, revision and status."""

from __future__ import annotations

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from django.conf import settings
from django.db import IntegrityError, transaction

from ..models import Indent, Lift, PurchaseOrderLine
from ..po_pdf import generate_po_pdf
from . import clock, numbering, storage
from .events import record_event
from .firm_scope import scope_for_user
from .indent_service import to_decimal
from .master_service import company_for_firm, find_vendor
from .stages import PO_DECISION, PURCHASE_ORDER

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")
MAX_TERMS = 10
DELIVERY_TYPES = ("for", "exfactory")

PO_RECEIVED = "Received"
PO_NOT_RECEIVED = "Not Received"
PO_REVISED = "Revised"


def _q(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _d(value: Any) -> Decimal:
    return to_decimal(value) or Decimal("0")


def discounted_base(qty: Any, rate: Any, discount: Any = 0) -> Decimal:
    return _d(qty) * _d(rate) * (1 - _d(discount) / HUNDRED)


def line_amount(qty: Any, rate: Any, discount: Any = 0, gst: Any = 0) -> Decimal:
    """``qty x rate`` less discount, plus GST, rounded to paise."""

    return _q(discounted_base(qty, rate, discount) * (1 + _d(gst) / HUNDRED))


def po_totals(lines: Iterable[Dict[str, Any]]) -> Dict[str, Decimal]:
    subtotal = Decimal("0")
    gst_total = Decimal("0")
    for line in lines:
        base = discounted_base(line.get("quantity"), line.get("rate"), line.get("discount"))
        subtotal += base
        gst_total += base * _d(line.get("gst")) / HUNDRED
    subtotal, gst_total = _q(subtotal), _q(gst_total)
    return {"subtotal": subtotal, "gst_total": gst_total, "grand_total": subtotal + gst_total}


def decide_po_required(indent: Indent, answer: str, user=None) -> Tuple[bool, str, Optional[Indent]]:
    """Record whether the indent needs a purchase order.

    Without a PO the indent goes straight to lifting.
    """

    if not PO_DECISION.is_pending(indent):
        return False, f"Indent {indent.indent_number} is not awaiting a PO decision", None
    if answer not in ("Yes", "No"):
        return False, "Answer must be Yes or No", None
    indent.po_required = answer
    if indent.planned4 is None:
        indent.planned4 = clock.planned_now()
    if answer == "No":
        indent.actual4 = clock.planned_now()
        indent.planned5 = indent.actual4
        indent.pending_lift_qty = indent.effective_quantity
    indent.save()
    record_event(
        stage=PO_DECISION.key,
        entity_type="indent",
        entity_id=indent.indent_number,
        user=user,
        firm=indent.firm_name,
        changes={"po_required": answer},
    )
    return True, f"PO requirement saved for {indent.indent_number}", indent


def split_tax(indent: Indent) -> Tuple[Decimal, Decimal]:
    """Return the base rate and GST % behind an indent's approved rate.

    Approved rates of quotes made without tax are stored grossed up; the PO
    prints them as base rate plus GST.
    """

    rate = _d(indent.approved_rate)
    gst = _d(indent.approved_tax_value)
    if indent.approved_with_tax == "No" and gst > 0:
        return _q(rate / (1 + gst / HUNDRED)), gst
    return rate, Decimal("0")


def draft_lines(indents: Iterable[Indent]) -> List[Dict[str, Any]]:
    """Prefill PO lines from approved indents."""

    return [
        {
            "indent_number": i.indent_number,
            "product": i.product_name,
            "quantity": i.effective_quantity,
            "unit": i.uom,
            "rate": split_tax(i)[0],
            "gst": split_tax(i)[1],
            "discount": Decimal("0"),
        }
        for i in indents
    ]


def pending_vendors(qs=None) -> List[str]:
    names = PURCHASE_ORDER.pending(qs).values_list("approved_vendor_name", flat=True)
    seen: List[str] = []
    for name in names:
        name = (name or "").strip()
        if name and name.lower() not in [s.lower() for s in seen]:
            seen.append(name)
    return sorted(seen, key=str.lower)


def _existing_po_numbers() -> List[str]:
    numbers = set(PurchaseOrderLine.objects.values_list("po_number", flat=True))
    numbers.update(
        Indent.objects.exclude(po_number="").values_list("po_number", flat=True)
    )
    return list(numbers)


def _validate_header(header: Dict[str, Any], lines: Sequence[Dict[str, Any]]) -> Optional[str]:
    for key, label in (
        ("party_name", "Supplier name"),
        ("quotation_number", "Quotation number"),
        ("delivery_date", "Delivery date"),
        ("payment_terms", "Payment terms"),
    ):
        if not header.get(key):
            return f"{label} is required"
    if not lines:
        return "Select at least one indent"
    if len([t for t in header.get("terms") or [] if t]) > MAX_TERMS:
        return f"At most {MAX_TERMS} terms are allowed"
    delivery_type = header.get("delivery_type") or ""
    if delivery_type and delivery_type not in DELIVERY_TYPES:
        return "Delivery type must be FOR or Ex-factory"
    for pos, line in enumerate(lines, start=1):
        if _d(line.get("quantity")) <= 0:
            return f"Line {pos}: Quantity must be greater than 0"
        if _d(line.get("rate")) <= 0:
            return f"Line {pos}: Rate must be greater than 0"
        if _d(line.get("gst")) < 0 or not (0 <= _d(line.get("discount")) <= HUNDRED):
            return f"Line {pos}: GST and discount must be valid percentages"
    return None


def _check_indents(
    indents: Dict[str, Indent], lines: Sequence[Dict[str, Any]], party: str, revise_from: Optional[str]
) -> Optional[str]:
    base = (revise_from or "").split("/", 1)[0]
    for line in lines:
        number = line.get("indent_number")
        indent = indents.get(number)
        if indent is None:
            return f"Indent {number} not found"
        if revise_from:
            if (indent.po_number or "").split("/", 1)[0] != base:
                return f"Indent {number} is not part of PO {revise_from}"
            continue
        if not PURCHASE_ORDER.is_pending(indent):
            return f"Indent {number} is not waiting for a purchase order"
        if (indent.approved_vendor_name or "").strip().lower() != party.strip().lower():
            return f"Indent {number} is approved for a different vendor"
    return None


def _fmt(value) -> str:
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    return str(value or "")


def build_document(
    po_number: str, header: Dict[str, Any], lines: List[Dict[str, Any]], totals, firm: str, prepared_by: str
) -> Dict[str, Any]:
    vendor = find_vendor(header["party_name"]) or {}
    return {
        "po_number": po_number,
        "po_date": _fmt(header.get("po_date") or clock.now().date()),
        "company": company_for_firm(firm),
        "supplier": {
            "name": header["party_name"],
            "address": header.get("vendor_address") or vendor.get("address", ""),
            "gstin": header.get("gstin") or vendor.get("gstin", ""),
        },
        "quotation_number": header.get("quotation_number"),
        "quotation_date": _fmt(header.get("quotation_date")),
        "enquiry_number": header.get("enquiry_number"),
        "enquiry_date": _fmt(header.get("enquiry_date")),
        "delivery_date": _fmt(header.get("delivery_date")),
        "payment_terms": header.get("payment_terms"),
        "lines": lines,
        "totals": totals,
        "terms": [t for t in header.get("terms") or [] if t],
        "prepared_by": prepared_by,
        "approved_by": settings.PO_APPROVED_BY,
    }


def create_purchase_order(
    header: Dict[str, Any],
    lines: Sequence[Dict[str, Any]],
    user=None,
    revise_from: Optional[str] = None,
) -> Tuple[bool, str, Optional[str]]:
    """Create (or revise) a purchase order for approved indents.

    Returns the allocated PO number on success. The rendered PDF is stored
    in the ``po_image`` bucket and linked from every line and indent. When
    ``user`` is given only indents of the user's firm can be ordered.
    """

    error = _validate_header(header, lines)
    if error:
        return False, error, None
    prepared_by = header.get("prepared_by") or getattr(user, "username", "") or "Unknown"
    try:
        with transaction.atomic():
            numbers = [line.get("indent_number") for line in lines]
            qs = Indent.objects.select_for_update().filter(indent_number__in=numbers)
            if user is not None:
                qs = scope_for_user(qs, user)
            indents = {i.indent_number: i for i in qs}
            error = _check_indents(indents, lines, header["party_name"], revise_from)
            if error:
                return False, error, None

            existing = _existing_po_numbers()
            if revise_from:
                po_number = numbering.next_po_revision(revise_from, existing)
            else:
                po_number = numbering.next_po_number(existing, numbering.po_prefix())

            priced: List[Dict[str, Any]] = []
            for line in lines:
                indent = indents[line["indent_number"]]
                priced.append(
                    {
                        "indent_number": indent.indent_number,
                        "product": line.get("product") or indent.product_name,
                        "quantity": _d(line.get("quantity")),
                        "unit": line.get("unit") or indent.uom,
                        "rate": _d(line.get("rate")),
                        "gst": _d(line.get("gst")),
                        "discount": _d(line.get("discount")),
                        "amount": line_amount(
                            line.get("quantity"), line.get("rate"),
                            line.get("discount"), line.get("gst"),
                        ),
                    }
                )
            totals = po_totals(priced)
            firm = indents[priced[0]["indent_number"]].firm_name
            pdf_bytes = generate_po_pdf(
                build_document(po_number, header, priced, totals, firm, prepared_by)
            )
            filename = storage.timestamped_name(f"PO-{po_number}", "pdf", sep="-")
            pdf_url = storage.upload_file(storage.PO_BUCKET, pdf_bytes, filename, "application/pdf")

            stamp = clock.now()
            for line in priced:
                indent = indents[line["indent_number"]]
                PurchaseOrderLine.objects.create(
                    timestamp=stamp,
                    po_number=po_number,
                    party_name=header["party_name"],
                    internal_code=indent.indent_number,
                    product=line["product"],
                    description=header.get("description") or "",
                    quantity=line["quantity"],
                    unit=line["unit"],
                    rate=line["rate"],
                    gst=line["gst"],
                    discount=line["discount"],
                    amount=line["amount"],
                    total_po_amount=totals["grand_total"],
                    pdf=pdf_url,
                    quotation_number=header.get("quotation_number") or "",
                    quotation_date=header.get("quotation_date"),
                    enquiry_number=header.get("enquiry_number") or "",
                    enquiry_date=header.get("enquiry_date"),
                    terms=[t for t in header.get("terms") or [] if t],
                    delivery_date=header.get("delivery_date"),
                    payment_terms=header.get("payment_terms") or "",
                    delivery_days=int(header.get("delivery_days") or 0),
                    delivery_type=header.get("delivery_type") or "",
                    company_email=header.get("company_email") or "",
                    prepared_by=prepared_by,
                    firm_name_match=indent.firm_name,
                )
                indent.po_number = po_number
                indent.po_copy = pdf_url
                indent.payment_term = header.get("payment_terms") or ""
                indent.delivery_date = header.get("delivery_date")
                if not revise_from:
                    indent.actual4 = stamp
                    indent.planned5 = stamp
                    indent.pending_lift_qty = line["quantity"]
                indent.save()
    except storage.StorageError as exc:
        return False, str(exc), None
    except IntegrityError as exc:
        logger.error("Integrity error creating PO: %s", exc)
        return False, "Database error creating Purchase Order.", None
    except Exception as exc:  # pragma: no cover
        logger.exception("Error creating PO: %s", exc)
        return False, "Database error creating Purchase Order.", None

    record_event(
        stage=PURCHASE_ORDER.key,
        entity_type="purchase_order",
        entity_id=po_number,
        user=user,
        firm=firm,
        changes={
            "indents": [line["indent_number"] for line in priced],
            "grand_total": totals["grand_total"],
            "revised_from": revise_from or "",
        },
    )
    verb = "revised" if revise_from else "created"
    return True, f"Purchase order {po_number} {verb}", po_number


def po_status(po_number: str) -> str:
    if Lift.objects.filter(po_number=po_number).exists():
        return PO_RECEIVED
    if Indent.objects.filter(po_number=po_number).exists():
        return PO_NOT_RECEIVED
    return PO_REVISED


def po_history(qs=None) -> List[Dict[str, Any]]:
    """One row per PO number, newest first."""

    qs = PurchaseOrderLine.objects.all() if qs is None else qs
    received = set(Lift.objects.exclude(po_number="").values_list("po_number", flat=True))
    referenced = set(Indent.objects.exclude(po_number="").values_list("po_number", flat=True))
    rows: Dict[str, Dict[str, Any]] = {}
    for line in qs.order_by("-timestamp", "-line_id"):
        row = rows.get(line.po_number)
        if row is None:
            if line.po_number in received:
                status = PO_RECEIVED
            elif line.po_number in referenced:
                status = PO_NOT_RECEIVED
            else:
                status = PO_REVISED
            rows[line.po_number] = {
                "po_number": line.po_number,
                "timestamp": line.timestamp,
                "party_name": line.party_name,
                "total_po_amount": line.total_po_amount,
                "pdf": line.pdf,
                "firm_name_match": line.firm_name_match,
                "status": status,
                "indents": [line.internal_code],
            }
        else:
            row["indents"].append(line.internal_code)
    return list(rows.values())


def revisable_po_numbers(qs=None) -> List[str]:
    """PO numbers still referenced by indents; superseded ones are excluded."""

    return [row["po_number"] for row in po_history(qs) if row["status"] != PO_REVISED]


def po_lines(po_number: str):
    return PurchaseOrderLine.objects.filter(po_number=po_number).order_by("line_id")
